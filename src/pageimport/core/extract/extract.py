"""Convert a SourceDocument into a StructuredDocument"""

import logging

from bs4 import BeautifulSoup

from pageimport.core.errors import ExtractionError, ReasonCode
from pageimport.core.extract.blocks import convert_children
from pageimport.core.extract.dates import normalize_date
from pageimport.core.extract.fields import (
    extract_body_root, extract_first_image, extract_raw_date_text, extract_title,
)
from pageimport.core.extract.sanitize import sanitize
from pageimport.core.models import ExtractedFields, SanitizePolicy, SourceDocument, StructuredDocument
from pageimport.core.parse import parse


logger = logging.getLogger("pageimport")


def extract_fields(tree: BeautifulSoup) -> ExtractedFields:
    """Pull title, body region, date text, and lead image; raise on a missing title or body."""
    title = extract_title(tree)
    if not title:
        raise ExtractionError(ReasonCode.no_title, "No title found in HTML file")

    body_root = extract_body_root(tree)
    if body_root is None:
        raise ExtractionError(ReasonCode.no_content, "No content found in HTML file")

    return ExtractedFields(
        title=title,
        body_root=body_root,
        raw_date_text=extract_raw_date_text(tree),
        first_image_ref=extract_first_image(body_root),
    )


def extract_document(source: SourceDocument, policy: SanitizePolicy = SanitizePolicy.full) -> StructuredDocument:
    """Parse, extract, sanitize, and convert one source document."""
    tree = parse(source.raw_html)
    fields = extract_fields(tree)

    blocks = convert_children(sanitize(fields.body_root, policy))
    if not blocks:
        raise ExtractionError(ReasonCode.no_content, "No content found in HTML file")

    published_at = normalize_date(fields.raw_date_text) if fields.raw_date_text else None
    logger.debug(
        "Extracted %s: %d block(s), date=%s, lead image=%s",
        source.file_name, len(blocks), published_at, fields.first_image_ref,
    )
    return StructuredDocument(
        title=fields.title,
        blocks=blocks,
        published_at=published_at,
        lead_image_filename=fields.first_image_ref,
        source_file_name=source.file_name,
    )
