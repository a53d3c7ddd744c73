"""Pipeline step functions: per-document import boundary and batch aggregation"""

import logging
from pathlib import Path

from sqlmodel import Session

from pageimport.core.assets import AssetResolver, AssetStore
from pageimport.core.errors import ExtractionError, ReasonCode
from pageimport.core.extract.extract import extract_document
from pageimport.core.models import ImportOptions, ImportResult, ImportSummary, StructuredDocument
from pageimport.core.parse import MAX_FILE_SIZE, read_source, validate_file
from pageimport.core.serialize import apply_block_pattern, render_blocks
from pageimport.crud.logs import log_import
from pageimport.crud.pages import create_page, set_featured_image, update_content


logger = logging.getLogger("pageimport")


def preview_file(path: Path, options: ImportOptions, max_size: int = MAX_FILE_SIZE) -> StructuredDocument:
    """Validate, read, and extract one file without persisting anything. Raises ExtractionError."""
    validate_file(path, max_size)
    return extract_document(read_source(path), options.sanitize_policy)


def _failure(file_name: str, reason: ReasonCode, message: str) -> ImportResult:
    return ImportResult(file_name=file_name, success=False, reason=reason, message=message)


def _persist(
    session: Session,
    store: AssetStore,
    doc: StructuredDocument,
    options: ImportOptions,
    ) -> ImportResult:
    """Create the page, attach the lead image, and rewrite asset references in its body."""
    content = apply_block_pattern(render_blocks(doc.blocks), options.block_pattern)
    page = create_page(session, doc, content, options)

    resolver = AssetResolver(store, parent_id=page.id)
    folders = options.image_folders

    featured = None
    if doc.lead_image_filename and folders:
        featured = resolver.resolve_lead_image(doc.lead_image_filename, folders)
        if featured:
            set_featured_image(session, page, featured.id)

    body = page.content
    if folders:
        body, _ = resolver.rewrite_image_refs(body, folders)
    if options.documents_folder:
        body, _ = resolver.rewrite_document_refs(body, options.documents_folder)
    update_content(session, page, body)

    return ImportResult(
        file_name=doc.source_file_name,
        success=True,
        page_id=page.id,
        title=doc.title,
        featured_image="Set" if featured else "Not found",
    )


def import_file(
    path: Path,
    options: ImportOptions,
    session: Session,
    store: AssetStore,
    max_size: int = MAX_FILE_SIZE,
    ) -> ImportResult:
    """Import one HTML file as a page and commit it.

    Never raises for a problem with this document: every failure is rolled
    back, logged, and returned as an ImportResult with a reason code.
    """
    path = Path(path)
    file_name = path.name

    try:
        doc = preview_file(path, options, max_size)
    except ExtractionError as e:
        result = _failure(file_name, e.reason, e.message)
    except Exception as e:
        result = _failure(file_name, ReasonCode.extraction_exception, f"Exception during extraction: {e}")
    else:
        try:
            result = _persist(session, store, doc, options)
        except Exception as e:
            session.rollback()
            store.discard_pending()
            result = _failure(file_name, ReasonCode.import_exception, f"Exception: {e}")

    if result.success:
        log_import(session, file_name, result.page_id, "success", f"Imported as '{result.title}'")
        logger.info("Imported %s as page #%s", file_name, result.page_id)
    else:
        log_import(session, file_name, None, "error", f"{result.reason.value}: {result.message}")
        logger.warning("Failed to import %s: %s", file_name, result.message)
    session.commit()
    store.keep_pending()
    return result


def import_files(
    paths: list[Path],
    options: ImportOptions,
    session: Session,
    store: AssetStore,
    max_size: int = MAX_FILE_SIZE,
    ) -> ImportSummary:
    """Import each path independently and aggregate the outcomes."""
    summary = ImportSummary()
    for p in paths:
        result = import_file(p, options, session, store, max_size)
        (summary.succeeded if result.success else summary.failed).append(result)
    return summary
