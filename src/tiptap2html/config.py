"""Configuration for tiptap2html.

Environment variables provide the defaults for :class:`ConversionOptions`;
callers override them per conversion.
"""

from __future__ import annotations

import os
from copy import deepcopy
from dataclasses import dataclass


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


DEFAULT_OFFSET_HEADINGS = 0
DEFAULT_ALLOW_HTML = False
DEFAULT_SMARTYPANTS = False

TIPTAP2HTML_OFFSET_HEADINGS = int(os.getenv("TIPTAP2HTML_OFFSET_HEADINGS", str(DEFAULT_OFFSET_HEADINGS)))
TIPTAP2HTML_ALLOW_HTML = _env_flag("TIPTAP2HTML_ALLOW_HTML", DEFAULT_ALLOW_HTML)
TIPTAP2HTML_SMARTYPANTS = _env_flag("TIPTAP2HTML_SMARTYPANTS", DEFAULT_SMARTYPANTS)


@dataclass
class ConversionOptions:
    """Per-conversion settings."""

    offset_headings: int = TIPTAP2HTML_OFFSET_HEADINGS
    allow_html: bool = TIPTAP2HTML_ALLOW_HTML
    inline: bool = False
    smartypants: bool = TIPTAP2HTML_SMARTYPANTS

    def derive(self, **overrides) -> ConversionOptions:
        """Return a copy with selected fields overridden."""
        clone = deepcopy(self)
        for k, v in overrides.items():
            if not hasattr(clone, k):
                raise TypeError(f"Unknown conversion option: {k!r}")
            setattr(clone, k, v)
        return clone
