"""
Load env from the project root .env. Used by the wizard UI, the editor blueprint and the exporter.
Encapsulates configuration in a Config class (OOP).
"""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Config:
    """
    Holds export, editor and logging settings loaded from .env / the environment.
    Single responsibility: load and expose environment-based settings.
    """

    _root_env = Path(__file__).resolve().parent.parent / ".env"

    def __init__(self):
        self._load_env()
        self._export_basename = os.getenv("POLICYGEN_EXPORT_BASENAME", "policy").strip() or "policy"
        self._archive_name = os.getenv("POLICYGEN_ARCHIVE_NAME", "policies.zip").strip() or "policies.zip"
        self._pdf_page_size = os.getenv("POLICYGEN_PDF_PAGE_SIZE", "A4").strip().upper() or "A4"
        self._pdf_fit_single_page = _env_bool("POLICYGEN_PDF_FIT_SINGLE_PAGE", True)
        self._content_store_ttl_sec = _env_int("POLICYGEN_CONTENT_STORE_TTL_SEC", 600)
        self._max_content_length = _env_int("POLICYGEN_MAX_CONTENT_LENGTH", 16 * 1024 * 1024)
        self._log_level = os.getenv("POLICYGEN_LOG_LEVEL", "INFO").strip().upper() or "INFO"

    def _load_env(self) -> None:
        if self._root_env.exists():
            load_dotenv(self._root_env)

    @property
    def EXPORT_BASENAME(self) -> str:
        return self._export_basename

    @property
    def ARCHIVE_NAME(self) -> str:
        return self._archive_name

    @property
    def PDF_PAGE_SIZE(self) -> str:
        return self._pdf_page_size

    @property
    def PDF_FIT_SINGLE_PAGE(self) -> bool:
        return self._pdf_fit_single_page

    @property
    def CONTENT_STORE_TTL_SEC(self) -> int:
        return self._content_store_ttl_sec

    @property
    def MAX_CONTENT_LENGTH(self) -> int:
        return self._max_content_length

    @property
    def LOG_LEVEL(self) -> str:
        return self._log_level


_logging_configured = False


def configure_logging(level: str | None = None) -> None:
    """Apply basicConfig once for the process (Flask app or Streamlit script)."""
    global _logging_configured
    if _logging_configured:
        return
    logging.basicConfig(
        level=getattr(logging, (level or _default_config.LOG_LEVEL), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _logging_configured = True


# Singleton-like default instance
_default_config = Config()

EXPORT_BASENAME = _default_config.EXPORT_BASENAME
ARCHIVE_NAME = _default_config.ARCHIVE_NAME
PDF_PAGE_SIZE = _default_config.PDF_PAGE_SIZE
PDF_FIT_SINGLE_PAGE = _default_config.PDF_FIT_SINGLE_PAGE
CONTENT_STORE_TTL_SEC = _default_config.CONTENT_STORE_TTL_SEC
MAX_CONTENT_LENGTH = _default_config.MAX_CONTENT_LENGTH
LOG_LEVEL = _default_config.LOG_LEVEL
