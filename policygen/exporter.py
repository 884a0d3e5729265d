"""
Export edited content: one combined file in the chosen format, or one file per policy in a zip.
"""
import logging
import zipfile
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from policygen.assembler import PolicyAssembler
from policygen.config import Config
from policygen.docx_writer import blocks_to_docx_bytes
from policygen.editor import EditSurface
from policygen.models import FormState
from policygen.pdf import blocks_to_pdf_bytes

logger = logging.getLogger(__name__)

MIMETYPES = {
    "txt": "text/plain",
    "html": "text/html",
    "md": "text/markdown",
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
FORMAT_LABELS = {
    "txt": "Plain Text (.txt)",
    "html": "HTML (.html)",
    "md": "Markdown (.md)",
    "pdf": "PDF (.pdf)",
    "docx": "Word (.docx)",
}
SCOPES = {
    "combined": "Combined File",
    "separate": "Separate Files (.zip)",
}


@dataclass(frozen=True)
class ExportFile:
    filename: str
    data: bytes
    mimetype: str


class Exporter:
    """
    Converts an EditSurface to txt / html / md / pdf / docx.
    Separate scope regenerates each policy from FormState, so in-editor edits are not carried into it.
    """

    def __init__(self, assembler: PolicyAssembler | None = None, config: Config | None = None):
        self._assembler = assembler or PolicyAssembler()
        self._config = config or Config()

    @staticmethod
    def _check(fmt: str, scope: str) -> None:
        if fmt not in MIMETYPES:
            raise ValueError(f"Unsupported export format: {fmt!r}")
        if scope not in SCOPES:
            raise ValueError(f"Unsupported export scope: {scope!r}")

    def render(self, surface: EditSurface, fmt: str) -> bytes:
        """Bytes of the surface content in one format."""
        if fmt == "txt":
            return surface.to_text().encode("utf-8")
        if fmt == "html":
            return surface.to_html().encode("utf-8")
        if fmt == "md":
            return surface.to_markdown().encode("utf-8")
        if fmt == "pdf":
            return blocks_to_pdf_bytes(
                surface.blocks,
                page_size=self._config.PDF_PAGE_SIZE,
                fit_single_page=self._config.PDF_FIT_SINGLE_PAGE,
            )
        if fmt == "docx":
            return blocks_to_docx_bytes(surface.blocks)
        raise ValueError(f"Unsupported export format: {fmt!r}")

    def export(
        self,
        surface: EditSurface | None,
        state: FormState,
        fmt: str = "txt",
        scope: str = "combined",
    ) -> ExportFile | None:
        """
        Returns the file to download, or None when there is no edit surface yet
        (callers disable the download control in that state).
        """
        self._check(fmt, scope)
        if surface is None:
            logger.debug("Export requested without an edit surface; nothing to do")
            return None
        if scope == "combined":
            export_file = ExportFile(
                f"{self._config.EXPORT_BASENAME}.{fmt}", self.render(surface, fmt), MIMETYPES[fmt]
            )
        else:
            export_file = ExportFile(self._config.ARCHIVE_NAME, self.build_archive(state, fmt), "application/zip")
        logger.info("Exported %s (%d bytes)", export_file.filename, len(export_file.data))
        return export_file

    def build_archive(self, state: FormState, fmt: str) -> bytes:
        """Zip of <policyKey>.<fmt> for every selected policy with a template."""
        buf = BytesIO()
        with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
            for policy_key in state.policies:
                fragment = self._assembler.render_policy(policy_key, state)
                if not fragment:
                    continue
                zf.writestr(f"{policy_key}.{fmt}", self.render(EditSurface.from_html(fragment), fmt))
        return buf.getvalue()

    @staticmethod
    def save(export_file: ExportFile, directory: str | Path) -> Path:
        """Write the file into directory (created if needed); returns the path."""
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / export_file.filename
        path.write_bytes(export_file.data)
        logger.info("Saved %s", path)
        return path


def export(surface: EditSurface | None, state: FormState, fmt: str = "txt", scope: str = "combined"):
    """Export with a default Exporter."""
    return Exporter().export(surface, state, fmt=fmt, scope=scope)
