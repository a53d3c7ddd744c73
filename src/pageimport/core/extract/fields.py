"""Field extraction: title, body region, lead image, and raw date text"""

from typing import Iterator, Optional

from bs4 import BeautifulSoup, Tag

from pageimport.core.extract.dates import first_date
from pageimport.core.utils.urls import filename_from_ref


BODY_CLASS = "page-content"


def extract_title(tree: BeautifulSoup) -> str:
    """Trimmed text of the first <h1> anywhere in the tree, or '' if there is none."""
    h1 = tree.find('h1')
    return h1.get_text().strip() if h1 else ''


def _is_body_root(tag: Tag) -> bool:
    # The class attribute must be exactly "page-content", not merely contain it.
    value = tag.get('class')
    if value is None:
        return False
    if isinstance(value, list):
        value = ' '.join(value)
    return value == BODY_CLASS


def extract_body_root(tree: BeautifulSoup) -> Optional[Tag]:
    """First element whose class attribute equals 'page-content', else None."""
    return tree.find(_is_body_root)


def extract_first_image(body_root: Tag) -> Optional[str]:
    """Filename of the first <img> inside body_root (decoded, path and query stripped)."""
    img = body_root.find('img')
    if img is None:
        return None
    src = img.get('src')
    if not src:
        return None
    return filename_from_ref(src) or None


def iter_date_candidates(tree: BeautifulSoup) -> Iterator[str]:
    """Yield the trimmed text of each <small> element in document order."""
    for small in tree.find_all('small'):
        yield small.get_text().strip()


def extract_raw_date_text(tree: BeautifulSoup) -> Optional[str]:
    """Text of the first <small> element that normalizes to a date, else None."""
    found = first_date(iter_date_candidates(tree))
    return found[0] if found else None
