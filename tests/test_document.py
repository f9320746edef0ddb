"""Tests for Tiptap JSON decoding."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tiptap2html.document import Mark, Node, is_inline_document, load_json, parse_document
from tiptap2html.exceptions import InvalidDocumentError

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TestParseDocument:
    """Test decoding of well-formed documents."""

    def test_parse_fixture(self):
        doc = parse_document((FIXTURES_DIR / "sample.json").read_text(encoding="utf-8"))
        assert doc.type == "doc"
        assert [n.type for n in doc.content] == ["heading", "paragraph", "bulletList", "blockquote"]
        heading = doc.content[0]
        assert heading.attrs == {"level": 1}

    def test_marks_decoded(self):
        doc = parse_document({
            "type": "doc",
            "content": [{
                "type": "paragraph",
                "content": [{
                    "type": "text",
                    "text": "hi",
                    "marks": [{"type": "bold"}, {"type": "link", "attrs": {"href": "x"}}],
                }],
            }],
        })
        leaf = doc.content[0].content[0]
        assert leaf.marks == [Mark("bold"), Mark("link", {"href": "x"})]

    def test_accepts_bytes(self):
        doc = parse_document(b'{"type": "doc", "content": []}')
        assert doc.content == []

    def test_null_attrs_treated_as_empty(self):
        doc = parse_document({"type": "doc", "content": [{"type": "horizontalRule", "attrs": None}]})
        assert doc.content[0].attrs == {}

    def test_content_absent_vs_empty(self):
        doc = parse_document({
            "type": "doc",
            "content": [{"type": "hardBreak"}, {"type": "paragraph", "content": []}],
        })
        assert doc.content[0].content is None
        assert doc.content[1].content == []


class TestValidation:
    """Test rejection of malformed documents."""

    @pytest.mark.parametrize(
        "node",
        [
            {"text": "no type"},
            {"type": ""},
            {"type": 3},
            {"type": "paragraph", "content": "not a list"},
            {"type": "paragraph", "content": {"type": "text"}},
            {"type": "text"},
            {"type": "text", "text": 5},
            {"type": "text", "text": "x", "marks": {"type": "bold"}},
            {"type": "text", "text": "x", "marks": [{"attrs": {}}]},
            {"type": "text", "text": "x", "marks": ["bold"]},
            {"type": "heading", "attrs": [1]},
            "just a string",
        ],
    )
    def test_malformed_node_raises(self, node):
        with pytest.raises(InvalidDocumentError):
            parse_document({"type": "doc", "content": [node]})

    def test_error_names_path(self):
        doc = {
            "type": "doc",
            "content": [
                {"type": "paragraph", "content": [{"type": "text", "text": "ok"}, {"text": "bad"}]},
            ],
        }
        with pytest.raises(InvalidDocumentError, match="/content/0/content/1"):
            parse_document(doc)

    def test_invalid_json_raises(self):
        with pytest.raises(InvalidDocumentError, match="invalid JSON"):
            parse_document("{not json")

    def test_non_object_root_raises(self):
        with pytest.raises(InvalidDocumentError):
            parse_document("[1, 2, 3]")

    def test_root_without_content_raises(self):
        with pytest.raises(InvalidDocumentError):
            parse_document({"type": "doc"})


class TestRoundTrip:
    """Test encoding back to dicts."""

    def test_to_dict_matches_input(self):
        raw = json.loads((FIXTURES_DIR / "sample.json").read_text(encoding="utf-8"))
        assert parse_document(raw).to_dict() == raw

    def test_to_dict_omits_empty_fields(self):
        assert Node(type="hardBreak").to_dict() == {"type": "hardBreak"}
        assert Mark("bold").to_dict() == {"type": "bold"}


class TestInlineFlag:
    """Test the editor inline mode flag."""

    def test_inline_flag(self):
        assert is_inline_document(load_json('{"type": "doc", "inline": true, "content": []}'))
        assert not is_inline_document(load_json('{"type": "doc", "content": []}'))
