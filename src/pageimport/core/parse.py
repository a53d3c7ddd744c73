"""File discovery, validation, reading, and tolerant HTML parsing"""

import logging
from pathlib import Path

from bs4 import BeautifulSoup

from pageimport.core.errors import ExtractionError, ReasonCode
from pageimport.core.models import SourceDocument


logger = logging.getLogger("pageimport")

HTML_EXTENSIONS = {'.html', '.htm'}
MAX_FILE_SIZE = 10 * 1024 * 1024


def _decode(raw: str | bytes) -> str:
    """Interpret bytes as UTF-8 whatever the markup declares; undecodable bytes are replaced."""
    if isinstance(raw, bytes):
        return raw.decode('utf-8', errors='replace')
    return raw


def parse(raw_html: str | bytes) -> BeautifulSoup:
    """Parse an HTML fragment or document into a navigable tree.

    Malformed markup (missing <html>/<body>, unclosed tags) is recovered on a
    best-effort basis. Only empty input is an error.
    """
    text = _decode(raw_html)
    if not text.strip():
        raise ExtractionError(ReasonCode.empty_file, "HTML file is empty")
    return BeautifulSoup(text, 'html.parser')


def discover_files(path: Path) -> list[Path]:
    """Return sorted .html/.htm files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix.lower() in HTML_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix.lower() in HTML_EXTENSIONS)


def validate_file(path: Path, max_size: int = MAX_FILE_SIZE) -> None:
    """Raise ExtractionError if path is missing, not HTML, or larger than max_size bytes."""
    if not path.is_file():
        raise ExtractionError(ReasonCode.file_not_found, f"File not found: {path}")
    if path.suffix.lower() not in HTML_EXTENSIONS:
        raise ExtractionError(ReasonCode.invalid_extension, "File must be HTML (.html or .htm)")
    size = path.stat().st_size
    if size > max_size:
        raise ExtractionError(ReasonCode.file_too_large, f"File size {size} exceeds limit of {max_size} bytes")


def read_source(path: Path) -> SourceDocument:
    """Read a file as UTF-8 into a SourceDocument."""
    if not path.is_file():
        raise ExtractionError(ReasonCode.file_not_found, f"File not found: {path}")
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ExtractionError(ReasonCode.read_error, f"Could not read file: {e}") from e
    logger.debug("Read %d bytes from %s", len(raw), path)
    return SourceDocument(raw_html=_decode(raw), file_name=path.name)
