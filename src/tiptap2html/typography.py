"""Typographic post-processing of rendered HTML."""

from __future__ import annotations

import smartypants


def smarten(html: str) -> str:
    """Apply smart quotes, dashes and ellipses to *html*.

    Tags and the contents of ``<pre>``/``<code>`` are left untouched.
    """
    if not html:
        return html
    return smartypants.smartypants(html)
