"""Attribute stripping for the body subtree"""

from bs4 import Tag

from pageimport.core.models import SanitizePolicy


LAYOUT_ATTRS = ('paraeid', 'paraid')

STRIPPED_ATTRS: dict[SanitizePolicy, tuple[str, ...]] = {
    SanitizePolicy.full:    ('style', 'class') + LAYOUT_ATTRS,
    SanitizePolicy.minimal: LAYOUT_ATTRS,
}


def sanitize(node: Tag, policy: SanitizePolicy = SanitizePolicy.full) -> Tag:
    """Remove the policy's attributes from node and every descendant element, in place."""
    names = STRIPPED_ATTRS[policy]
    for el in [node, *node.find_all(True)]:
        for name in names:
            el.attrs.pop(name, None)
    return node
