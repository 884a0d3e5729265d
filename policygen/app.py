"""
Streamlit UI for the policy generator: six-step wizard → live clause preview → rich-text review → download.
Run: streamlit run policygen/app.py
"""
import sys
from pathlib import Path

_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

import streamlit as st
from streamlit_quill import st_quill

from policygen.config import configure_logging
from policygen.exporter import FORMAT_LABELS, SCOPES, Exporter
from policygen.models import BUSINESS_TYPES, CompanyInfo, ExportError
from policygen.templates import default_catalog
from policygen.wizard import TOTAL_STEPS, Wizard

configure_logging()

COMPANY_FIELDS = {
    "company_name": ("Company Name", "Your Company LLC"),
    "website_url": ("Website/App URL", "https://yourcompany.com"),
    "contact_email": ("Contact Email", "contact@yourcompany.com"),
    "address": ("Company Address", "123 Main St, Anytown, USA"),
    "country": ("Country of Operation", "United States"),
}

DISCLAIMER = (
    "The documents produced by this tool are generic templates. They are not legal advice and may not "
    "meet the legal requirements that apply to your business. Have a qualified lawyer review them "
    "before you publish them."
)

EDITOR_TOOLBAR = [
    ["bold", "italic"],
    [{"header": 1}, {"header": 2}],
    [{"list": "ordered"}, {"list": "bullet"}],
]


def _wizard() -> Wizard:
    # FormState lives for the browser session only
    if "policygen_wizard" not in st.session_state:
        st.session_state["policygen_wizard"] = Wizard()
    return st.session_state["policygen_wizard"]


def _nav(wizard: Wizard, show_next: bool = True) -> None:
    back_col, _, next_col = st.columns([1, 4, 1])
    with back_col:
        if not wizard.is_first:
            st.button("Back", on_click=wizard.prev, key=f"back_{wizard.cursor}")
    with next_col:
        if show_next:
            st.button(
                "Next",
                on_click=wizard.next,
                disabled=not wizard.can_advance(),
                type="primary",
                key=f"next_{wizard.cursor}",
            )


def _policy_name(key: str) -> str:
    template = default_catalog.get(key)
    return template.name if template else key


# -----------------------------------------------------------------------------
# Steps
# -----------------------------------------------------------------------------

def step_business(wizard: Wizard) -> None:
    options = list(BUSINESS_TYPES)
    current = wizard.state.business_type
    choice = st.radio(
        "Business type",
        options,
        index=options.index(current) if current in options else None,
        format_func=BUSINESS_TYPES.get,
        label_visibility="collapsed",
    )
    if choice:
        wizard.set_business_type(choice)


def step_company(wizard: Wizard) -> None:
    info = wizard.state.company_info
    for field_name in CompanyInfo.field_names():
        label, placeholder = COMPANY_FIELDS[field_name]
        value = st.text_input(label, value=getattr(info, field_name), placeholder=placeholder, key=f"company_{field_name}")
        wizard.update_company_info(field_name, value)


def step_policies(wizard: Wizard) -> None:
    cols = st.columns(2)
    for i, key in enumerate(default_catalog.keys()):
        with cols[i % 2]:
            checked = st.checkbox(_policy_name(key), value=key in wizard.state.policies, key=f"policy_{key}")
        wizard.toggle_policy(key, checked)


def step_customize(wizard: Wizard) -> None:
    policies = wizard.state.policies
    active = st.radio(
        "Policy",
        policies,
        index=policies.index(wizard.active_policy),
        format_func=_policy_name,
        horizontal=True,
        label_visibility="collapsed",
    )
    wizard.set_active_policy(active)
    left, right = st.columns(2, gap="large")
    with left:
        template = default_catalog.get(active)
        selected = wizard.state.selected_clauses(active)
        for clause in template.clauses:
            checked = st.checkbox(clause.label, value=clause.id in selected, key=f"clause_{active}_{clause.id}")
            wizard.toggle_clause(active, clause.id, checked)
    with right:
        with st.container(border=True):
            st.markdown(wizard.preview(), unsafe_allow_html=True)


def step_disclaimer(wizard: Wizard) -> None:
    st.warning(DISCLAIMER)
    agreed = st.checkbox(
        "I understand that these documents are not legal advice.",
        value=wizard.state.agreed_to_terms,
        key="agreed_to_terms",
    )
    wizard.set_agreed_to_terms(agreed)


def step_review(wizard: Wizard) -> None:
    surface = wizard.surface
    if surface is not None:
        st.caption("Use the toolbar for **bold**, *italic*, headings and lists.")
        content = st_quill(
            value=surface.to_html(),
            html=True,
            toolbar=EDITOR_TOOLBAR,
            placeholder="You can make edits to the generated policy here...",
            key=f"policygen_quill_{wizard.review_session}",
        )
        if content:
            surface.apply_html(content)

    st.subheader("Download Options")
    scope_col, format_col = st.columns(2)
    with scope_col:
        scope = st.selectbox("Scope", list(SCOPES), format_func=SCOPES.get)
    with format_col:
        fmt = st.selectbox("Format", list(FORMAT_LABELS), format_func=FORMAT_LABELS.get)
    if scope == "combined":
        st.caption(
            "This editor has no horizontal rule, so the lines between policies can be missing from "
            "the combined file. The web editor at /editor keeps them."
        )
    else:
        st.caption("Separate files are generated from your answers and do not include edits made in the editor.")

    export_file = None
    try:
        export_file = Exporter().export(surface, wizard.state, fmt=fmt, scope=scope)
    except ExportError as e:
        st.error(f"Export failed: {e}")
    st.download_button(
        "Download",
        data=export_file.data if export_file else b"",
        file_name=export_file.filename if export_file else "policy.txt",
        mime=export_file.mimetype if export_file else "text/plain",
        disabled=export_file is None,
        type="primary",
    )


STEP_RENDERERS = {
    "business": step_business,
    "company": step_company,
    "policies": step_policies,
    "customize": step_customize,
    "disclaimer": step_disclaimer,
    "review": step_review,
}


# -----------------------------------------------------------------------------
# Page
# -----------------------------------------------------------------------------

st.set_page_config(page_title="Policy Generator", layout="wide")
st.title("Policy Generator")

wizard = _wizard()
st.progress(wizard.progress(), text=f"Step {wizard.cursor} of {TOTAL_STEPS}")
st.header(f"Step {wizard.cursor}: {wizard.step.title}")
STEP_RENDERERS[wizard.step.key](wizard)
_nav(wizard, show_next=not wizard.is_last)
