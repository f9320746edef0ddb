"""Custom exceptions for tiptap2html."""


class Tiptap2HtmlError(Exception):
    """Base exception for tiptap2html operations."""


class InvalidDocumentError(Tiptap2HtmlError):
    """Document is not well-formed Tiptap JSON."""


class RenderError(Tiptap2HtmlError):
    """Error during HTML rendering."""
