"""Render ContentBlocks as block-delimited body markup for the host store"""

import html
import json

from pageimport.core.models import PLACEHOLDER, ContentBlock


# Block types whose stored markup is emitted as-is inside the delimiters.
PLAIN_DELIMITED = {'paragraph', 'quote', 'separator'}


def _delimit(name: str, inner: str, attrs: dict = None) -> str:
    """Wrap inner markup in '<!-- wp:name {attrs} -->' ... '<!-- /wp:name -->' comments."""
    opener = f"<!-- wp:{name} {json.dumps(attrs, separators=(',', ':'))} -->" if attrs else f"<!-- wp:{name} -->"
    return f"{opener}\n{inner}\n<!-- /wp:{name} -->\n\n"


def render_block(block: ContentBlock) -> str:
    """Render one block (groups recursively) to markup."""
    kind = block.type
    if kind in PLAIN_DELIMITED:
        return _delimit(kind, block.html)
    if kind == 'heading':
        return _delimit('heading', block.html, {'level': block.level})
    if kind == 'image':
        inner = block.html if block.html.startswith('<figure') else f'<figure class="wp-block-image">{block.html}</figure>'
        return _delimit('image', inner)
    if kind == 'list':
        return _delimit('list', block.html, {'ordered': True} if block.ordered else None)
    if kind == 'code':
        return _delimit('code', f'<pre class="wp-block-code"><code>{block.text}</code></pre>')
    if kind == 'table':
        return _delimit('table', f'<figure class="wp-block-table">{block.html}</figure>')
    if kind == 'html':
        return f"{block.html}\n\n"
    if kind == 'raw':
        return html.escape(block.text, quote=False)
    if kind == 'group':
        inner = ''.join(render_block(child) for child in block.children)
        return _delimit('group', f'<div class="wp-block-group">{inner}</div>')
    raise ValueError(f"Unknown block type: {kind}")


def render_blocks(blocks: list[ContentBlock]) -> str:
    """Concatenate rendered blocks in order; surrounding whitespace trimmed."""
    return ''.join(render_block(b) for b in blocks).strip()


def apply_block_pattern(content: str, pattern: str | None) -> str:
    """Substitute trimmed content for every {content} placeholder; no pattern returns content as-is."""
    if not pattern:
        return content
    return pattern.replace(PLACEHOLDER, content.strip())
