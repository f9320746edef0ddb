"""Turn flat, mark-annotated inline content into nested mark nodes.

Tiptap stores formatting as a list of marks on every text leaf::

    [{"type": "text", "text": "a", "marks": [bold, italic]},
     {"type": "text", "text": "b", "marks": [bold]}]

HTML needs the formatting as nesting instead::

    bold
    ├── italic
    │   └── "a"
    └── "b"

:class:`MarkHierarchyBuilder` does this with a stack of open marks.  For
each leaf it keeps the longest prefix of open marks that the leaf shares,
closes the rest and opens whatever the leaf adds, so marks are opened and
closed the minimum number of times.  Any block node closes every open mark.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from dataclasses import replace
from typing import Iterable, Optional

from tiptap2html.document import INLINE_TYPES, Mark, Node
from tiptap2html.exceptions import InvalidDocumentError

logger = logging.getLogger(__name__)


class _Frame:
    """One open nesting level: a mark and the children list it receives."""

    __slots__ = ("mark", "children")

    def __init__(self, mark: Optional[Mark], children: list[Node]) -> None:
        self.mark = mark
        self.children = children


class MarkHierarchyBuilder:
    """Replace ``marks`` on inline leaves with nested wrapper nodes."""

    def __init__(self, inline_types: Iterable[str] = INLINE_TYPES) -> None:
        self.inline_types = frozenset(inline_types)

    # -- public API ---------------------------------------------------------

    def process_node(self, node: Node) -> Node:
        """Return a copy of *node* whose content is nested by marks."""
        _check_type(node)
        if node.content is None:
            return replace(node, marks=[], attrs=deepcopy(node.attrs))
        if not isinstance(node.content, list):
            raise InvalidDocumentError(
                f"{node.type}: content must be a list, got {type(node.content).__name__}"
            )
        return replace(
            node,
            content=self.process_scope(node.content),
            attrs=deepcopy(node.attrs),
        )

    def process_scope(self, siblings: list[Node]) -> list[Node]:
        """Nest one ``content`` list; each call has its own stack."""
        result: list[Node] = []
        stack: list[_Frame] = [_Frame(None, result)]

        for child in siblings:
            _check_type(child)

            if self.is_block(child):
                self._close_to_depth(stack, 0)
                result.append(self.process_node(child))
                continue

            child_marks = child.marks or []
            depth = self._common_depth(stack, child_marks)
            self._close_to_depth(stack, depth)
            self._open_marks(stack, child_marks[depth:])
            self._insert_leaf(stack[-1].children, child)

        self._close_to_depth(stack, 0)
        logger.debug("Nested %d siblings into %d nodes", len(siblings), len(result))
        return result

    def is_block(self, node: Node) -> bool:
        return node.type not in self.inline_types

    # -- stack operations ---------------------------------------------------

    @staticmethod
    def _common_depth(stack: list[_Frame], marks: list[Mark]) -> int:
        # stack[0] is the scope root, so open mark i lives at stack[i + 1].
        depth = 0
        limit = min(len(stack) - 1, len(marks))
        while depth < limit and stack[depth + 1].mark == marks[depth]:
            depth += 1
        return depth

    @staticmethod
    def _close_to_depth(stack: list[_Frame], depth: int) -> None:
        del stack[depth + 1:]

    @staticmethod
    def _open_marks(stack: list[_Frame], marks: list[Mark]) -> None:
        for mark in marks:
            wrapper = Node(type=mark.type, attrs=deepcopy(mark.attrs), content=[])
            stack[-1].children.append(wrapper)
            stack.append(_Frame(mark, wrapper.content))
            logger.debug("Opened %s wrapper at depth %d", mark.type, len(stack) - 1)

    @staticmethod
    def _insert_leaf(children: list[Node], leaf: Node) -> None:
        if leaf.is_text:
            last = children[-1] if children else None
            if last is not None and last.is_text:
                # Only leaves created here end up in children, so this is safe.
                last.text = (last.text or "") + (leaf.text or "")
            else:
                children.append(Node(type=leaf.type, text=leaf.text or ""))
            return
        children.append(
            replace(
                leaf,
                marks=[],
                attrs=deepcopy(leaf.attrs),
                content=deepcopy(leaf.content),
            )
        )


def build_mark_hierarchy(node: Node, inline_types: Iterable[str] = INLINE_TYPES) -> Node:
    """Shortcut for ``MarkHierarchyBuilder(inline_types).process_node(node)``."""
    return MarkHierarchyBuilder(inline_types).process_node(node)


def _check_type(node: Node) -> None:
    if not isinstance(node, Node) or not isinstance(node.type, str) or not node.type:
        raise InvalidDocumentError(f"node is missing a type: {node!r}")
