"""Node-to-ContentBlock conversion over a parsed (and sanitized) body tree"""

import html
import logging

from bs4 import NavigableString, PageElement, Tag

from pageimport.core.models import (
    Code, ContentBlock, Group, Heading, Html, Image, List, Paragraph, Quote, Raw, Separator, Table,
)


logger = logging.getLogger("pageimport")

HEADING_TAGS = {'h1', 'h2', 'h3', 'h4', 'h5', 'h6'}
CONTAINER_TAGS = {'div', 'section', 'article'}


def _heading_level(tag: Tag) -> int:
    """Heading level (1-6) from an h1..h6 tag name."""
    return int(tag.name[1])


def _image(tag: Tag, img: Tag) -> Image:
    return Image(src=img.get('src', ''), alt=img.get('alt', ''), html=str(tag))


def _convert_children(node: Tag) -> list[ContentBlock]:
    blocks: list[ContentBlock] = []
    for child in node.children:
        blocks.extend(convert(child))
    return blocks


def convert(node: PageElement) -> list[ContentBlock]:
    """Map one node to an ordered list of blocks; containers recurse in document order."""
    if not isinstance(node, Tag):
        # Comments, doctypes and CDATA are NavigableString subclasses; only plain text counts.
        if type(node) is NavigableString and node.strip():
            return [Raw(text=str(node))]
        return []

    name = node.name.lower()
    markup = str(node)

    if name == 'p':
        return [Paragraph(html=markup)]
    if name in HEADING_TAGS:
        return [Heading(level=_heading_level(node), html=markup)]
    if name == 'img':
        return [_image(node, node)]
    if name in ('ul', 'ol'):
        return [List(ordered=name == 'ol', html=markup)]
    if name == 'blockquote':
        return [Quote(html=markup)]
    if name in ('pre', 'code'):
        return [Code(text=html.escape(node.get_text()))]
    if name == 'table':
        return [Table(html=markup)]
    if name == 'hr':
        return [Separator(html=markup)]
    if name == 'figure':
        img = node.find('img')
        return [_image(node, img)] if img is not None else [Html(html=markup)]
    if name in CONTAINER_TAGS:
        children = _convert_children(node)
        if not children:
            logger.debug("Dropping empty <%s> container", name)
            return []
        return [Group(children=children)]
    return _convert_children(node)


def convert_children(body_root: Tag) -> list[ContentBlock]:
    """Convert the children of the body region (the region element itself is not wrapped)."""
    return _convert_children(body_root)
