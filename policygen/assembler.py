"""
Assemble policy HTML from FormState + template catalog.
Base prose first, then selected clauses in the template's declared order; policies in selection order.
"""
import html
import logging

from policygen.models import FormState
from policygen.substitution import substitute
from policygen.templates import TemplateCatalog, default_catalog

logger = logging.getLogger(__name__)

SEPARATOR = "<hr>"
PREVIEW_PLACEHOLDER = "<p>Select a policy to see a preview.</p>"


def _escape(value: str) -> str:
    return html.escape(value, quote=False)


class PolicyAssembler:
    """
    Renders one policy or the combined document as an HTML fragment.
    Output depends only on the FormState and the catalog (no timestamps or randomness).
    """

    def __init__(self, catalog: TemplateCatalog | None = None):
        self._catalog = catalog or default_catalog

    @property
    def catalog(self) -> TemplateCatalog:
        return self._catalog

    def _paragraph(self, text: str, state: FormState) -> str:
        body = substitute(_escape(text), state.company_info, escape=_escape)
        return "<p>" + body.replace("\n", "<br>") + "</p>"

    def render_policy(self, policy_key: str, state: FormState) -> str:
        """<h1>name</h1><p>base</p> + one <p> per selected clause. Unknown key -> ""."""
        template = self._catalog.get(policy_key)
        if template is None:
            logger.debug("No template for policy key %r", policy_key)
            return ""
        parts = [f"<h1>{_escape(template.name)}</h1>", self._paragraph(template.base, state)]
        selected = set(state.customizations.get(policy_key) or [])
        for clause in template.clauses:
            if clause.id in selected:
                parts.append(self._paragraph(clause.text, state))
        return "".join(parts)

    def render_preview(self, policy_key: str, state: FormState) -> str:
        """Same as render_policy, but an unknown or empty key shows a placeholder paragraph."""
        return self.render_policy(policy_key, state) or PREVIEW_PLACEHOLDER

    def render_combined(self, state: FormState) -> str:
        """Every selected policy in selection order, each followed by <hr> (including the last)."""
        parts = []
        for policy_key in state.policies:
            fragment = self.render_policy(policy_key, state)
            if fragment:
                parts.append(fragment + SEPARATOR)
        return "".join(parts)


_default_assembler = PolicyAssembler()


def render_policy(policy_key: str, state: FormState) -> str:
    return _default_assembler.render_policy(policy_key, state)


def render_preview(policy_key: str, state: FormState) -> str:
    return _default_assembler.render_preview(policy_key, state)


def render_combined(state: FormState) -> str:
    return _default_assembler.render_combined(state)
