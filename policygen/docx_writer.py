"""
DOCX rendering of edit-surface blocks with python-docx.
Headings map to Word heading levels, list items to List Bullet / List Number, rules to a bordered paragraph.
"""
import logging
from io import BytesIO

from docx import Document
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt

from policygen.editor import Block
from policygen.models import ExportError

logger = logging.getLogger(__name__)

LIST_STYLES = {"bullet": "List Bullet", "number": "List Number"}


def _add_bottom_border_to_paragraph(paragraph, pt=0.5):
    """Thin bottom border spanning the text column."""
    p_pr = paragraph._p.get_or_add_pPr()
    p_bdr = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), str(int(pt * 8)))
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), "000000")
    p_bdr.append(bottom)
    p_pr.append(p_bdr)


def _add_runs(paragraph, block: Block) -> None:
    for run in block.runs:
        r = paragraph.add_run(run.text)
        r.bold = run.bold
        r.italic = run.italic


def blocks_to_docx_bytes(blocks: list[Block]) -> bytes:
    try:
        doc = Document()
        normal = doc.styles["Normal"]
        normal.font.name = "Times New Roman"
        normal.font.size = Pt(11)
        for block in blocks:
            if block.kind in ("h1", "h2", "h3"):
                paragraph = doc.add_heading("", level=int(block.kind[1]))
            elif block.kind in LIST_STYLES:
                paragraph = doc.add_paragraph(style=LIST_STYLES[block.kind])
            elif block.kind == "hr":
                paragraph = doc.add_paragraph()
                paragraph.add_run("\u00a0")
                _add_bottom_border_to_paragraph(paragraph)
                continue
            else:
                paragraph = doc.add_paragraph()
            _add_runs(paragraph, block)
        buf = BytesIO()
        doc.save(buf)
    except Exception as e:
        logger.exception("DOCX generation failed")
        raise ExportError(f"DOCX generation failed: {e}") from e
    return buf.getvalue()
