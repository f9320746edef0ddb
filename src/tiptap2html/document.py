"""Tiptap document model and JSON decoding.

Decodes Tiptap (ProseMirror) JSON into a tree of :class:`Node` objects and
validates the structure the rest of the pipeline relies on.  Anything that
does not look like a node raises :class:`InvalidDocumentError` with the path
of the offending value.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from tiptap2html.exceptions import InvalidDocumentError


# ---------------------------------------------------------------------------
# Node type names
# ---------------------------------------------------------------------------

DOC = "doc"
TEXT = "text"
HARD_BREAK = "hardBreak"
PARAGRAPH = "paragraph"
HEADING = "heading"
LIST_ITEM = "listItem"

# Leaf types that live inside inline content; everything else is a block.
INLINE_TYPES = frozenset({TEXT, HARD_BREAK})


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------

@dataclass
class Mark:
    """Inline formatting annotation, e.g. ``{"type": "bold"}``."""

    type: str
    attrs: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any, path: str = "") -> Mark:
        if not isinstance(data, Mapping):
            raise InvalidDocumentError(f"{path or '/'}: mark must be an object")
        mark_type = data.get("type")
        if not isinstance(mark_type, str) or not mark_type:
            raise InvalidDocumentError(f"{path or '/'}: mark is missing a type")
        return cls(type=mark_type, attrs=_decode_attrs(data, path))

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type}
        if self.attrs:
            out["attrs"] = dict(self.attrs)
        return out


@dataclass
class Node:
    """A document node.

    ``content is None`` means the node has no content field at all, while an
    empty list is an empty container.
    """

    type: str
    text: Optional[str] = None
    marks: list[Mark] = field(default_factory=list)
    content: Optional[list[Node]] = None
    attrs: dict[str, Any] = field(default_factory=dict)

    @property
    def is_text(self) -> bool:
        return self.type == TEXT

    @classmethod
    def from_dict(cls, data: Any, path: str = "") -> Node:
        """Decode and validate a node mapping, recursing into ``content``."""
        where = path or "/"
        if not isinstance(data, Mapping):
            raise InvalidDocumentError(f"{where}: node must be an object")

        node_type = data.get("type")
        if not isinstance(node_type, str) or not node_type:
            raise InvalidDocumentError(f"{where}: node is missing a type")

        text = data.get("text")
        if node_type == TEXT and not isinstance(text, str):
            raise InvalidDocumentError(f"{where}: text node without text")
        if text is not None and not isinstance(text, str):
            raise InvalidDocumentError(f"{where}: text must be a string")

        raw_marks = data.get("marks", [])
        if not isinstance(raw_marks, list):
            raise InvalidDocumentError(f"{where}: marks must be a list")
        marks = [
            Mark.from_dict(m, f"{path}/marks/{i}") for i, m in enumerate(raw_marks)
        ]

        content: Optional[list[Node]] = None
        if "content" in data:
            raw_content = data["content"]
            if not isinstance(raw_content, list):
                raise InvalidDocumentError(f"{where}: content must be a list")
            content = [
                cls.from_dict(child, f"{path}/content/{i}")
                for i, child in enumerate(raw_content)
            ]

        return cls(
            type=node_type,
            text=text,
            marks=marks,
            content=content,
            attrs=_decode_attrs(data, path),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type}
        if self.attrs:
            out["attrs"] = dict(self.attrs)
        if self.text is not None:
            out["text"] = self.text
        if self.marks:
            out["marks"] = [m.to_dict() for m in self.marks]
        if self.content is not None:
            out["content"] = [child.to_dict() for child in self.content]
        return out


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

Source = Union[str, bytes, Mapping[str, Any]]


def load_json(source: Source) -> Mapping[str, Any]:
    """Return the raw root mapping for *source* (JSON text or a mapping)."""
    if isinstance(source, (str, bytes)):
        try:
            data = json.loads(source)
        except ValueError as exc:
            raise InvalidDocumentError(f"invalid JSON: {exc}") from exc
    else:
        data = source
    if not isinstance(data, Mapping):
        raise InvalidDocumentError("document root must be an object")
    return data


def parse_document(source: Source) -> Node:
    """Decode *source* into a validated :class:`Node` tree."""
    data = load_json(source)
    if not isinstance(data.get("content"), list):
        raise InvalidDocumentError("/: document root must have a content list")
    return Node.from_dict(data)


def is_inline_document(data: Mapping[str, Any]) -> bool:
    """True when the editor saved the document in inline mode."""
    return bool(data.get("inline", False))


def _decode_attrs(data: Mapping[str, Any], path: str) -> dict[str, Any]:
    attrs = data.get("attrs")
    if attrs is None:
        return {}
    if not isinstance(attrs, Mapping):
        raise InvalidDocumentError(f"{path or '/'}: attrs must be an object")
    return dict(attrs)
