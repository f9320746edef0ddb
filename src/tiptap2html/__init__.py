"""tiptap2html: render Tiptap JSON documents as HTML."""

__version__ = "0.1.0"

from tiptap2html.config import ConversionOptions
from tiptap2html.converter import Converter, convert
from tiptap2html.document import Mark, Node, parse_document
from tiptap2html.exceptions import InvalidDocumentError, RenderError, Tiptap2HtmlError
from tiptap2html.marks import MarkHierarchyBuilder, build_mark_hierarchy
from tiptap2html.renderer import HtmlRenderer, RenderContext

__all__ = [
    "ConversionOptions",
    "Converter",
    "HtmlRenderer",
    "InvalidDocumentError",
    "Mark",
    "MarkHierarchyBuilder",
    "Node",
    "RenderContext",
    "RenderError",
    "Tiptap2HtmlError",
    "__version__",
    "build_mark_hierarchy",
    "convert",
    "parse_document",
]
