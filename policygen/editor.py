"""
Rich-text edit surface: a block-based document seeded once from assembled HTML.

Blocks are (kind, runs) where kind is paragraph / h1 / h2 / h3 / bullet / number / hr and each
run carries text plus bold/italic flags. Line breaks inside a block are "\\n" in run text.
After seeding, the surface is the source of truth for export; later FormState changes do not
re-flow into it.
"""
import copy
import html
import logging
import re
from dataclasses import dataclass, field

from bs4 import BeautifulSoup
from bs4.element import Comment, NavigableString, Tag
from markdownify import markdownify

logger = logging.getLogger(__name__)

BLOCK_KINDS = ("paragraph", "h1", "h2", "h3", "bullet", "number", "hr")
LIST_KINDS = ("bullet", "number")
HEADING_TAGS = {"h1": "h1", "h2": "h2", "h3": "h3", "h4": "h3", "h5": "h3", "h6": "h3"}
PARAGRAPH_TAGS = ("p", "pre", "blockquote")
CONTAINER_TAGS = ("html", "body", "div", "section", "article", "main", "header", "footer")
BOLD_TAGS = ("strong", "b")
ITALIC_TAGS = ("em", "i")

_WS = re.compile(r"[ \t\r\n\f]+")
_TAG = re.compile(r"<[^>]+>")


@dataclass
class Run:
    text: str
    bold: bool = False
    italic: bool = False

    def same_format(self, other: "Run") -> bool:
        return self.bold == other.bold and self.italic == other.italic


@dataclass
class Block:
    kind: str = "paragraph"
    runs: list[Run] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs)

    def normalize(self) -> None:
        """Drop empty runs and merge neighbours with the same formatting."""
        merged: list[Run] = []
        for run in self.runs:
            if not run.text:
                continue
            if merged and merged[-1].same_format(run):
                merged[-1] = Run(merged[-1].text + run.text, run.bold, run.italic)
            else:
                merged.append(Run(run.text, run.bold, run.italic))
        self.runs = merged


@dataclass(frozen=True)
class Selection:
    """
    Character range from (start_block, start_offset) to (end_block, end_offset).
    end_offset None means "to the end of end_block".
    """

    start_block: int
    start_offset: int = 0
    end_block: int | None = None
    end_offset: int | None = None

    @classmethod
    def blocks(cls, first: int, last: int | None = None) -> "Selection":
        """Whole blocks first..last (inclusive)."""
        return cls(first, 0, first if last is None else last, None)

    @classmethod
    def caret(cls, block: int, offset: int) -> "Selection":
        return cls(block, offset, block, offset)

    @property
    def collapsed(self) -> bool:
        end_block = self.start_block if self.end_block is None else self.end_block
        return end_block == self.start_block and self.end_offset == self.start_offset


# -----------------------------------------------------------------------------
# HTML -> blocks
# -----------------------------------------------------------------------------

def _clean_block(block: Block) -> Block:
    """Collapse HTML whitespace: no spaces at block edges or around line breaks."""
    chars = [(ch, r.bold, r.italic) for r in block.runs for ch in r.text]
    cleaned = []
    for i, (ch, bold, italic) in enumerate(chars):
        if ch == " ":
            prev_ch = cleaned[-1][0] if cleaned else "\n"
            next_ch = chars[i + 1][0] if i + 1 < len(chars) else "\n"
            if prev_ch in (" ", "\n") or next_ch == "\n":
                continue
        cleaned.append((ch, bold, italic))
    while cleaned and cleaned[-1][0] == " ":
        cleaned.pop()
    block.runs = [Run(ch, bold, italic) for ch, bold, italic in cleaned]
    block.normalize()
    return block


class _HtmlReader:
    """Walks a parsed HTML tree and produces blocks."""

    def __init__(self):
        self.blocks: list[Block] = []
        self._pending: Block | None = None

    def read(self, markup: str) -> list[Block]:
        soup = BeautifulSoup(markup or "", "html.parser")
        self._walk(soup)
        self._flush()
        return self.blocks

    def _flush(self) -> None:
        if self._pending is not None:
            block = _clean_block(self._pending)
            if block.runs:
                self.blocks.append(block)
            self._pending = None

    def _add(self, block: Block) -> None:
        self._flush()
        self.blocks.append(block if block.kind == "hr" else _clean_block(block))

    def _walk(self, container) -> None:
        for node in container.children:
            if isinstance(node, Comment):
                continue
            if isinstance(node, NavigableString):
                if not str(node).strip():
                    continue
                if self._pending is None:
                    self._pending = Block("paragraph")
                self._pending.runs.extend(_inline_runs_of(node))
                continue
            if not isinstance(node, Tag):
                continue
            name = node.name.lower()
            if name in HEADING_TAGS:
                self._add(Block(HEADING_TAGS[name], _inline_runs(node)))
            elif name in PARAGRAPH_TAGS:
                self._add(Block("paragraph", _inline_runs(node)))
            elif name in ("ul", "ol"):
                kind = "number" if name == "ol" else "bullet"
                for item in node.find_all("li", recursive=False):
                    # Quill 2 marks bullet items inside <ol> with data-list
                    item_kind = {"bullet": "bullet", "ordered": "number"}.get(item.get("data-list"), kind)
                    self._add(Block(item_kind, _inline_runs(item)))
            elif name == "hr":
                self._add(Block("hr"))
            elif name in CONTAINER_TAGS:
                self._flush()
                self._walk(node)
            else:
                if self._pending is None:
                    self._pending = Block("paragraph")
                self._pending.runs.extend(_inline_runs_of(node))


def _inline_runs_of(node, bold: bool = False, italic: bool = False) -> list[Run]:
    if isinstance(node, Comment):
        return []
    if isinstance(node, NavigableString):
        return [Run(_WS.sub(" ", str(node)), bold, italic)]
    name = node.name.lower()
    if name == "br":
        return [Run("\n", bold, italic)]
    return _inline_runs(node, bold or name in BOLD_TAGS, italic or name in ITALIC_TAGS)


def _inline_runs(node, bold: bool = False, italic: bool = False) -> list[Run]:
    runs = []
    for child in node.children:
        runs.extend(_inline_runs_of(child, bold, italic))
    return runs


def parse_html(markup: str) -> list[Block]:
    return _HtmlReader().read(markup)


# -----------------------------------------------------------------------------
# blocks -> HTML
# -----------------------------------------------------------------------------

def _run_html(run: Run) -> str:
    out = html.escape(run.text, quote=False).replace("\n", "<br>\n")
    if run.italic:
        out = f"<em>{out}</em>"
    if run.bold:
        out = f"<strong>{out}</strong>"
    return out


def blocks_to_html(blocks: list[Block]) -> str:
    """Blocks separated by a blank line; consecutive list items share one <ul>/<ol>."""
    parts = []
    i = 0
    while i < len(blocks):
        block = blocks[i]
        if block.kind in LIST_KINDS:
            tag = "ol" if block.kind == "number" else "ul"
            items = []
            while i < len(blocks) and blocks[i].kind == block.kind:
                items.append("<li>" + "".join(_run_html(r) for r in blocks[i].runs) + "</li>")
                i += 1
            parts.append(f"<{tag}>" + "\n".join(items) + f"</{tag}>")
            continue
        if block.kind == "hr":
            parts.append("<hr>")
        else:
            tag = "p" if block.kind == "paragraph" else block.kind
            parts.append(f"<{tag}>" + "".join(_run_html(r) for r in block.runs) + f"</{tag}>")
        i += 1
    return "\n\n".join(parts)


# -----------------------------------------------------------------------------
# Edit surface
# -----------------------------------------------------------------------------

class EditSurface:
    """
    Editable document with format commands (bold, italic, heading 1-3, lists), undo/redo,
    and serializers for export (HTML, plain text, Markdown).
    """

    def __init__(self):
        self._blocks: list[Block] = []
        self._seeded = False
        self._undo: list[list[Block]] = []
        self._redo: list[list[Block]] = []

    @classmethod
    def from_html(cls, markup: str) -> "EditSurface":
        surface = cls()
        surface.seed(markup)
        return surface

    @property
    def is_seeded(self) -> bool:
        return self._seeded

    @property
    def blocks(self) -> list[Block]:
        return list(self._blocks)

    @property
    def is_empty(self) -> bool:
        return not any(b.kind == "hr" or b.text for b in self._blocks)

    def seed(self, markup: str) -> bool:
        """Load the initial HTML. Only the first call has an effect; returns whether it did."""
        if self._seeded:
            logger.debug("Edit surface already seeded; ignoring new initial content")
            return False
        self._blocks = parse_html(markup)
        self._seeded = True
        self._undo.clear()
        self._redo.clear()
        logger.debug("Seeded edit surface with %d blocks", len(self._blocks))
        return True

    def apply_html(self, markup: str) -> None:
        """Replace content with HTML edited in a client-side editor (an edit, so it is undoable)."""
        new_blocks = parse_html(markup)
        if self._seeded and new_blocks == self._blocks:
            return
        self._checkpoint()
        self._blocks = new_blocks
        self._seeded = True

    # ----- history -----

    def _checkpoint(self) -> None:
        self._undo.append(copy.deepcopy(self._blocks))
        self._redo.clear()

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def undo(self) -> bool:
        if not self._undo:
            return False
        self._redo.append(copy.deepcopy(self._blocks))
        self._blocks = self._undo.pop()
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        self._undo.append(copy.deepcopy(self._blocks))
        self._blocks = self._redo.pop()
        return True

    # ----- selection helpers -----

    def _resolve(self, selection: Selection) -> tuple[int, int, int, int]:
        """Return (start_block, start_offset, end_block, end_offset) in document order, clamped to text."""
        if not self._blocks:
            raise IndexError("Edit surface is empty")
        end_block = selection.start_block if selection.end_block is None else selection.end_block
        for idx in (selection.start_block, end_block):
            if not 0 <= idx < len(self._blocks):
                raise IndexError(f"Block index {idx} out of range")
        end_offset = len(self._blocks[end_block].text) if selection.end_offset is None else selection.end_offset
        start = (selection.start_block, selection.start_offset)
        end = (end_block, end_offset)
        if end < start:
            start, end = end, start
        sb, so = start
        eb, eo = end
        so = max(0, min(so, len(self._blocks[sb].text)))
        eo = max(0, min(eo, len(self._blocks[eb].text)))
        return sb, so, eb, eo

    @staticmethod
    def _split(block: Block, offset: int) -> int:
        """Ensure a run boundary at offset; return the index of the run starting there."""
        pos = 0
        for i, run in enumerate(block.runs):
            if offset == pos:
                return i
            if pos < offset < pos + len(run.text):
                cut = offset - pos
                block.runs[i:i + 1] = [
                    Run(run.text[:cut], run.bold, run.italic),
                    Run(run.text[cut:], run.bold, run.italic),
                ]
                return i + 1
            pos += len(run.text)
        return len(block.runs)

    def _ranges(self, selection: Selection):
        sb, so, eb, eo = self._resolve(selection)
        for idx in range(sb, eb + 1):
            start = so if idx == sb else 0
            end = eo if idx == eb else len(self._blocks[idx].text)
            yield idx, start, end

    def _selected_runs(self, selection: Selection) -> list[Run]:
        runs = []
        for idx, start, end in self._ranges(selection):
            block = self._blocks[idx]
            if block.kind == "hr" or start >= end:
                continue
            first = self._split(block, start)
            last = self._split(block, end)
            runs.extend(block.runs[first:last])
        return runs

    # ----- commands -----

    def _toggle(self, attr: str, selection: Selection) -> bool:
        if selection.collapsed:
            return False
        runs = self._selected_runs(selection)
        if not runs:
            for block in self._blocks:
                block.normalize()
            return False
        self._checkpoint()
        value = not all(getattr(r, attr) for r in runs)
        for run in runs:
            setattr(run, attr, value)
        for block in self._blocks:
            block.normalize()
        return True

    def toggle_bold(self, selection: Selection) -> bool:
        """Bold the selection, or un-bold it when every selected character is already bold."""
        return self._toggle("bold", selection)

    def toggle_italic(self, selection: Selection) -> bool:
        return self._toggle("italic", selection)

    def _set_kind(self, kind: str, selection: Selection) -> None:
        if kind not in BLOCK_KINDS or kind == "hr":
            raise ValueError(f"Unsupported block kind: {kind}")
        sb, _so, eb, _eo = self._resolve(selection)
        self._checkpoint()
        for block in self._blocks[sb:eb + 1]:
            if block.kind != "hr":
                block.kind = kind

    def set_heading(self, level: int, selection: Selection) -> None:
        if level not in (1, 2, 3):
            raise ValueError(f"Unsupported heading level: {level}")
        self._set_kind(f"h{level}", selection)

    def set_paragraph(self, selection: Selection) -> None:
        self._set_kind("paragraph", selection)

    def insert_list(self, selection: Selection, ordered: bool = False) -> None:
        """Turn selected blocks into list items; applying the same list type again removes the list."""
        kind = "number" if ordered else "bullet"
        sb, _so, eb, _eo = self._resolve(selection)
        targets = [b for b in self._blocks[sb:eb + 1] if b.kind != "hr"]
        if targets and all(b.kind == kind for b in targets):
            self._set_kind("paragraph", selection)
        else:
            self._set_kind(kind, selection)

    def insert_text(self, selection: Selection, text: str) -> None:
        """Replace the selected range with text (formatted like the character before the caret)."""
        sb, so, eb, eo = self._resolve(selection)
        self._checkpoint()
        first = self._blocks[sb]
        last = self._blocks[eb]
        tail_index = self._split(last, eo)
        tail = last.runs[tail_index:]
        head_index = self._split(first, so)
        head = first.runs[:head_index]
        style = head[-1] if head else (tail[0] if tail else Run(""))
        inserted = [Run(text, style.bold, style.italic)] if text else []
        if first.kind == "hr":
            # a rule holds no text; what is typed on it starts a paragraph after it
            paragraph = Block("paragraph", inserted + tail)
            paragraph.normalize()
            del self._blocks[sb + 1:eb + 1]
            if paragraph.runs:
                self._blocks.insert(sb + 1, paragraph)
            return
        first.runs = head + inserted + tail
        first.normalize()
        del self._blocks[sb + 1:eb + 1]

    def active_formats(self, selection: Selection) -> dict:
        """Toolbar state: whether the selection is bold / italic and the block type at its start."""
        sb, so, eb, eo = self._resolve(selection)
        block = self._blocks[sb]
        if (sb, so) == (eb, eo):
            chars = [(r.bold, r.italic) for r in block.runs for _ in r.text]
            bold, italic = chars[so - 1] if so > 0 and chars else (False, False)
        else:
            flags = []
            for idx, start, end in self._ranges(selection):
                chars = [(r.bold, r.italic) for r in self._blocks[idx].runs for _ in r.text]
                flags.extend(chars[start:end])
            bold = bool(flags) and all(f[0] for f in flags)
            italic = bool(flags) and all(f[1] for f in flags)
        return {"bold": bold, "italic": italic, "block_type": block.kind}

    # ----- serializers -----

    def to_html(self) -> str:
        return blocks_to_html(self._blocks)

    def to_text(self) -> str:
        """Plain text: the HTML serialization with markup removed and entities decoded."""
        return html.unescape(_TAG.sub("", self.to_html()))

    def to_markdown(self) -> str:
        return markdownify(self.to_html(), heading_style="ATX", bullets="-").strip() + "\n"
