"""Document-level transforms applied before marks are nested.

Every function returns a new tree and leaves its input untouched.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Optional

from tiptap2html.document import (
    HARD_BREAK,
    HEADING,
    INLINE_TYPES,
    LIST_ITEM,
    PARAGRAPH,
    Node,
)

TagResolver = Callable[[str], str]


def _map_content(node: Node, fn: Callable[[Node], Node]) -> Node:
    if node.content is None:
        return node
    return replace(node, content=[fn(child) for child in node.content])


# ---------------------------------------------------------------------------
# List items
# ---------------------------------------------------------------------------

def clean_list_items(node: Node) -> Node:
    """Unwrap the paragraph of single-paragraph list items.

    ``listItem > paragraph > text`` becomes ``listItem > text`` so the item
    renders as ``<li>text</li>``.  Items holding more than one paragraph are
    left alone.
    """
    node = _map_content(node, clean_list_items)
    if node.type != LIST_ITEM or not node.content:
        return node

    paragraphs = [child for child in node.content if child.type == PARAGRAPH]
    if len(paragraphs) != 1:
        return node

    content: list[Node] = []
    for child in node.content:
        if child.type == PARAGRAPH:
            content.extend(child.content or [])
        else:
            content.append(child)
    return replace(node, content=content)


# ---------------------------------------------------------------------------
# Inline mode
# ---------------------------------------------------------------------------

def flatten_inline(doc: Node, inline_types: frozenset[str] = INLINE_TYPES) -> Node:
    """Hoist all inline content to the root, dropping block wrappers.

    Consecutive blocks are joined with a ``hardBreak`` so line structure
    survives.
    """
    leaves: list[Node] = []
    pending_break = False

    def visit(node: Node) -> None:
        nonlocal pending_break
        if node.type in inline_types:
            if pending_break and leaves:
                leaves.append(Node(type=HARD_BREAK))
            pending_break = False
            leaves.append(node)
            return
        for child in node.content or []:
            visit(child)
        pending_break = True

    for child in doc.content or []:
        visit(child)
    return replace(doc, content=leaves)


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------

def offset_headings(node: Node, offset: int) -> Node:
    """Shift every heading level by *offset*, clamped to 1..6."""
    if not offset:
        return node
    node = _map_content(node, lambda child: offset_headings(child, offset))
    if node.type != HEADING:
        return node
    try:
        level = int(node.attrs.get("level", 1))
    except (TypeError, ValueError):
        level = 1
    attrs = dict(node.attrs)
    attrs["level"] = min(max(level + offset, 1), 6)
    return replace(node, attrs=attrs)


# ---------------------------------------------------------------------------
# Embedded tags
# ---------------------------------------------------------------------------

def resolve_tags(node: Node, resolver: Optional[TagResolver]) -> Node:
    """Run *resolver* over the text of every text leaf."""
    if resolver is None:
        return node
    if node.is_text:
        return replace(node, text=resolver(node.text or ""))
    return _map_content(node, lambda child: resolve_tags(child, resolver))
