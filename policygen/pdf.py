"""
PDF rendering of edit-surface blocks with reportlab.
One portrait page: the whole document is shrunk to fit the page frame.
"""
import html
import logging
from io import BytesIO

from reportlab.lib.pagesizes import A4, LETTER, portrait
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    HRFlowable,
    KeepInFrame,
    ListFlowable,
    ListItem,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
)

from policygen.editor import LIST_KINDS, Block, Run
from policygen.models import ExportError

logger = logging.getLogger(__name__)

PAGE_SIZES = {"A4": A4, "LETTER": LETTER}
MARGIN = 18 * mm
# SimpleDocTemplate frames pad 6pt on each side
FRAME_PADDING = 12


def _styles() -> dict:
    base = getSampleStyleSheet()
    return {
        "h1": ParagraphStyle("PolicyH1", parent=base["Heading1"], fontName="Times-Bold", spaceAfter=8),
        "h2": ParagraphStyle("PolicyH2", parent=base["Heading2"], fontName="Times-Bold", spaceAfter=6),
        "h3": ParagraphStyle("PolicyH3", parent=base["Heading3"], fontName="Times-Bold", spaceAfter=4),
        "paragraph": ParagraphStyle(
            "PolicyBody", parent=base["BodyText"], fontName="Times-Roman", fontSize=11, leading=15, spaceAfter=8
        ),
    }


def _run_markup(run: Run) -> str:
    out = html.escape(run.text, quote=False).replace("\n", "<br/>")
    if run.italic:
        out = f"<i>{out}</i>"
    if run.bold:
        out = f"<b>{out}</b>"
    return out


def _block_markup(block: Block) -> str:
    return "".join(_run_markup(r) for r in block.runs)


def build_story(blocks: list[Block]) -> list:
    """Flowables mirroring the blocks: headings, paragraphs, grouped list items, rules."""
    styles = _styles()
    story = []
    i = 0
    while i < len(blocks):
        block = blocks[i]
        if block.kind in LIST_KINDS:
            items = []
            while i < len(blocks) and blocks[i].kind == block.kind:
                items.append(ListItem(Paragraph(_block_markup(blocks[i]), styles["paragraph"])))
                i += 1
            if block.kind == "number":
                story.append(ListFlowable(items, bulletType="1"))
            else:
                story.append(ListFlowable(items, bulletType="bullet", start="•"))
            continue
        if block.kind == "hr":
            story.append(HRFlowable(width="100%", thickness=0.5, spaceBefore=6, spaceAfter=10))
        else:
            story.append(Paragraph(_block_markup(block), styles.get(block.kind, styles["paragraph"])))
        i += 1
    return story or [Spacer(1, 1)]


def blocks_to_pdf_bytes(
    blocks: list[Block],
    page_size: str = "A4",
    fit_single_page: bool = True,
    title: str = "Policies",
) -> bytes:
    """Render blocks to PDF. Errors are logged and raised as ExportError."""
    size = portrait(PAGE_SIZES.get((page_size or "A4").upper(), A4))
    buf = BytesIO()
    try:
        doc = SimpleDocTemplate(
            buf,
            pagesize=size,
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=MARGIN,
            title=title,
        )
        story = build_story(blocks)
        if fit_single_page:
            story = [KeepInFrame(doc.width - FRAME_PADDING, doc.height - FRAME_PADDING, story, mode="shrink")]
        doc.build(story)
    except Exception as e:
        logger.exception("PDF generation failed")
        raise ExportError(f"PDF generation failed: {e}") from e
    return buf.getvalue()
