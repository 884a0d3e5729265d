"""Tests for combined and per-policy export."""
import re
import zipfile
from io import BytesIO

import pytest
from docx import Document

from policygen import pdf as pdf_module
from policygen.assembler import render_combined
from policygen.config import Config
from policygen.editor import EditSurface, Selection
from policygen.exporter import MIMETYPES, Exporter, export
from policygen.models import CompanyInfo, ExportError, FormState
from policygen.templates import default_catalog


@pytest.fixture
def surface(two_policy_state):
    return EditSurface.from_html(render_combined(two_policy_state))


@pytest.fixture
def exporter():
    return Exporter()


def test_missing_surface_is_a_silent_no_op(exporter, two_policy_state):
    assert exporter.export(None, two_policy_state, fmt="txt") is None
    assert exporter.export(None, two_policy_state, fmt="pdf", scope="separate") is None
    assert export(None, two_policy_state) is None


@pytest.mark.parametrize("fmt", ["txt", "html", "md"])
def test_combined_text_formats(exporter, surface, two_policy_state, fmt):
    export_file = exporter.export(surface, two_policy_state, fmt=fmt)
    assert export_file.filename == f"policy.{fmt}"
    assert export_file.mimetype == MIMETYPES[fmt]
    expected = {"txt": surface.to_text, "html": surface.to_html, "md": surface.to_markdown}[fmt]()
    assert export_file.data.decode("utf-8") == expected


def test_combined_export_reflects_edits(exporter, surface, two_policy_state):
    surface.insert_text(Selection(1, 0, 1, 4), "THAT")
    text = exporter.export(surface, two_policy_state, fmt="txt").data.decode("utf-8")
    assert "THAT Privacy Policy describes" in text


def test_combined_pdf(exporter, surface, two_policy_state):
    export_file = exporter.export(surface, two_policy_state, fmt="pdf")
    assert export_file.filename == "policy.pdf"
    assert export_file.data.startswith(b"%PDF")


def test_pdf_handles_lists_and_formatting(exporter, two_policy_state):
    surface = EditSurface.from_html("<h2>T</h2><p><strong>b</strong> &amp; <em>i</em></p><ol><li>x</li></ol><ul><li>y</li></ul>")
    assert exporter.render(surface, "pdf").startswith(b"%PDF")


def test_combined_docx(exporter, surface, two_policy_state):
    export_file = exporter.export(surface, two_policy_state, fmt="docx")
    assert export_file.filename == "policy.docx"
    doc = Document(BytesIO(export_file.data))
    texts = [p.text for p in doc.paragraphs]
    assert "Privacy Policy" in texts
    assert "Terms & Conditions" in texts
    assert doc.paragraphs[0].style.name == "Heading 1"


def test_separate_zip_layout(exporter, surface, two_policy_state):
    export_file = exporter.export(surface, two_policy_state, fmt="txt", scope="separate")
    assert export_file.filename == "policies.zip"
    assert export_file.mimetype == "application/zip"
    with zipfile.ZipFile(BytesIO(export_file.data)) as zf:
        assert zf.namelist() == ["privacy.txt", "terms.txt"]
        privacy = zf.read("privacy.txt").decode("utf-8")
    assert privacy.startswith("Privacy Policy\n\n")
    assert "Terms & Conditions" not in privacy


def test_separate_export_regenerates_from_form_state(exporter, surface, two_policy_state):
    surface.apply_html("<p>Edited in the editor</p>")
    export_file = exporter.export(surface, two_policy_state, fmt="html", scope="separate")
    with zipfile.ZipFile(BytesIO(export_file.data)) as zf:
        privacy = zf.read("privacy.html").decode("utf-8")
    assert "Edited in the editor" not in privacy
    assert privacy.startswith("<h1>Privacy Policy</h1>")


def test_separate_pdf_is_rendered_like_combined(exporter, surface, two_policy_state):
    export_file = exporter.export(surface, two_policy_state, fmt="pdf", scope="separate")
    with zipfile.ZipFile(BytesIO(export_file.data)) as zf:
        for name in ("privacy.pdf", "terms.pdf"):
            assert zf.read(name).startswith(b"%PDF")


def test_separate_skips_unknown_policies(exporter, surface):
    state = FormState(policies=["dispute", "cookie"])
    export_file = exporter.export(surface, state, fmt="md", scope="separate")
    with zipfile.ZipFile(BytesIO(export_file.data)) as zf:
        assert zf.namelist() == ["cookie.md"]


def test_invalid_format_and_scope(exporter, surface, two_policy_state):
    with pytest.raises(ValueError):
        exporter.export(surface, two_policy_state, fmt="rtf")
    with pytest.raises(ValueError):
        exporter.export(surface, two_policy_state, fmt="txt", scope="both")


def test_pdf_failure_is_logged_and_raised(exporter, surface, two_policy_state, monkeypatch, caplog):
    def boom(self, flowables, *args, **kwargs):
        raise RuntimeError("layout exploded")

    monkeypatch.setattr(pdf_module.SimpleDocTemplate, "build", boom)
    with pytest.raises(ExportError, match="layout exploded"):
        exporter.export(surface, two_policy_state, fmt="pdf")
    assert "PDF generation failed" in caplog.text


def test_config_controls_file_names(monkeypatch, surface, two_policy_state):
    monkeypatch.setenv("POLICYGEN_EXPORT_BASENAME", "legal")
    monkeypatch.setenv("POLICYGEN_ARCHIVE_NAME", "legal.zip")
    exporter = Exporter(config=Config())
    assert exporter.export(surface, two_policy_state, fmt="html").filename == "legal.html"
    assert exporter.export(surface, two_policy_state, fmt="html", scope="separate").filename == "legal.zip"


def test_letter_page_size_without_single_page_fit(monkeypatch, surface, two_policy_state):
    monkeypatch.setenv("POLICYGEN_PDF_PAGE_SIZE", "letter")
    monkeypatch.setenv("POLICYGEN_PDF_FIT_SINGLE_PAGE", "false")
    config = Config()
    assert config.PDF_PAGE_SIZE == "LETTER"
    assert config.PDF_FIT_SINGLE_PAGE is False
    assert Exporter(config=config).render(surface, "pdf").startswith(b"%PDF")


def test_save_writes_file(exporter, surface, two_policy_state, tmp_path):
    export_file = exporter.export(surface, two_policy_state, fmt="txt")
    path = Exporter.save(export_file, tmp_path / "out")
    assert path.name == "policy.txt"
    assert path.read_bytes() == export_file.data


def _pdf_pages(data):
    """MediaBox (width, height) of every page object in a reportlab PDF."""
    pages = re.findall(rb"/Type\s*/Page\b", data)
    boxes = re.findall(rb"/MediaBox\s*\[\s*0 0 ([\d.]+) ([\d.]+)\s*\]", data)
    assert len(boxes) == len(pages)
    return [(float(w), float(h)) for w, h in boxes]


@pytest.mark.parametrize("page_size, expected", [
    ("A4", (595.2756, 841.8898)),
    ("LETTER", (612.0, 792.0)),
])
def test_full_document_pdf_is_one_portrait_page(monkeypatch, page_size, expected):
    keys = default_catalog.keys()
    state = FormState(
        business_type="ecommerce",
        policies=list(keys),
        customizations={key: list(default_catalog.get(key).clause_ids) for key in keys},
        company_info=CompanyInfo(
            company_name="Acme Inc",
            website_url="https://acme.io",
            contact_email="legal@acme.io",
            address="1 Market St, Springfield",
            country="United States",
        ),
    )
    monkeypatch.setenv("POLICYGEN_PDF_PAGE_SIZE", page_size)
    monkeypatch.setenv("POLICYGEN_PDF_FIT_SINGLE_PAGE", "true")
    surface = EditSurface.from_html(render_combined(state))
    data = Exporter(config=Config()).export(surface, state, fmt="pdf").data
    pages = _pdf_pages(data)
    assert len(pages) == 1
    width, height = pages[0]
    assert width < height
    assert (width, height) == pytest.approx(expected, abs=0.01)
