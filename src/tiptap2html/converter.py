"""High-level Tiptap-to-HTML conversion orchestrator.

Ties together decoding, document transforms, the mark hierarchy builder,
the renderer and typography into a single public API for converting Tiptap
JSON text, mappings or files to HTML.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional, Union

from tiptap2html.config import ConversionOptions
from tiptap2html.document import Node, is_inline_document, load_json, parse_document
from tiptap2html.marks import MarkHierarchyBuilder
from tiptap2html.renderer import HtmlRenderer, Template
from tiptap2html.transforms import (
    TagResolver,
    clean_list_items,
    flatten_inline,
    offset_headings,
    resolve_tags,
)
from tiptap2html.typography import smarten

logger = logging.getLogger(__name__)

Document = Union[str, bytes, Mapping, None]


class Converter:
    """Convert Tiptap JSON content to HTML.

    Usage::

        converter = Converter(ConversionOptions(offset_headings=1))
        html = converter.convert('{"type": "doc", "content": [...]}')

        # or file to file
        converter.convert_file("input.json", "output.html")
    """

    def __init__(
        self,
        options: Optional[ConversionOptions] = None,
        *,
        templates: Optional[Mapping[str, Template]] = None,
        tag_resolver: Optional[TagResolver] = None,
    ) -> None:
        self.options = options or ConversionOptions()
        self.tag_resolver = tag_resolver
        self.builder = MarkHierarchyBuilder()
        self.renderer = HtmlRenderer(templates, allow_html=self.options.allow_html)

    def build_tree(self, document: Union[str, bytes, Mapping]) -> Node:
        """Decode *document* and return its transformed, mark-nested tree."""
        data = load_json(document)
        doc = parse_document(data)
        doc = clean_list_items(doc)
        if self.options.inline or is_inline_document(data):
            logger.debug("Flattening document for inline mode")
            doc = flatten_inline(doc, self.builder.inline_types)
        doc = offset_headings(doc, self.options.offset_headings)
        doc = resolve_tags(doc, self.tag_resolver)
        return self.builder.process_node(doc)

    def convert(self, document: Document) -> str:
        """Convert *document* (JSON text or decoded mapping) to HTML.

        Empty input converts to an empty string.
        """
        if document is None or document == "" or document == b"":
            return ""
        tree = self.build_tree(document)
        html = self.renderer.render(tree)
        if self.options.smartypants:
            html = smarten(html)
        logger.debug("Rendered %d characters of HTML", len(html))
        return html

    def convert_text(self, json_text: str) -> str:
        """Convert Tiptap JSON text to HTML."""
        return self.convert(json_text)

    def convert_file(
        self,
        input_path: str | Path,
        output_path: str | Path,
        *,
        encoding: str = "utf-8",
    ) -> None:
        """Read a Tiptap JSON file and write the HTML output.

        Args:
            input_path: Path to the input ``.json`` file.
            output_path: Path for the output ``.html`` file.
            encoding: Text encoding of the source file.
        """
        input_path = Path(input_path)
        output_path = Path(output_path)

        json_text = input_path.read_text(encoding=encoding)
        html = self.convert_text(json_text)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")


def convert(document: Document, options: Optional[ConversionOptions] = None, **kwargs) -> str:
    """Convert *document* with a one-off :class:`Converter`."""
    return Converter(options, **kwargs).convert(document)
