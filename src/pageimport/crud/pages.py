"""Page persistence: create, update body, featured image, lookup"""

from datetime import datetime

from sqlmodel import Session, select

from pageimport.core.models import ImportOptions, StructuredDocument
from pageimport.crud.models import Page


def get_page(session: Session, page_id: int) -> Page | None:
    """Return the Page with the given id, or None if not found."""
    return session.get(Page, page_id)


def list_pages(session: Session) -> list[Page]:
    """Return all pages in creation order."""
    return list(session.exec(select(Page).order_by(Page.id)).all())


def create_page(session: Session, doc: StructuredDocument, content: str, options: ImportOptions) -> Page:
    """Insert a page for doc with the rendered body content.

    A page_parent of 0 means top level. Flushes but does not commit.
    """
    page = Page(
        title=doc.title,
        content=content,
        status=options.page_status,
        parent_id=options.page_parent or None,
        source_file_name=doc.source_file_name,
    )
    if doc.published_at is not None:
        page.published_at = doc.published_at
    session.add(page)
    session.flush()
    return page


def update_content(session: Session, page: Page, content: str) -> Page:
    """Replace the page body if it changed."""
    if page.content != content:
        page.content = content
        page.updated_at = datetime.now()
        session.add(page)
        session.flush()
    return page


def set_featured_image(session: Session, page: Page, asset_id: int) -> Page:
    """Assign the page's featured (lead) image."""
    page.featured_asset_id = asset_id
    session.add(page)
    session.flush()
    return page
