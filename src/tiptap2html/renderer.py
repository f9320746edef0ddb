"""HTML renderer - converts a mark-nested node tree to HTML.

This module renders the tree produced by :mod:`tiptap2html.marks`.  Every
node type, including the wrapper nodes that stand in for marks, maps to a
*template*: a callable receiving a :class:`RenderContext` and returning
HTML.  Children are rendered before their parent, so a template only wraps
the already rendered ``content``.

The built-in templates reuse :class:`mistune.HTMLRenderer` for markup and
URL sanitising.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Optional

import mistune
from mistune.util import escape

from tiptap2html.document import Node
from tiptap2html.exceptions import RenderError


@dataclass
class RenderContext:
    """Everything a template gets to see for one node."""

    node: Node
    content: str
    previous: Optional[Node] = None
    next: Optional[Node] = None
    parent: Optional[Node] = None

    @property
    def attrs(self) -> dict:
        return self.node.attrs


Template = Callable[[RenderContext], str]


def _attr(name: str, value: object) -> str:
    return f' {name}="{escape(str(value))}"'


class HtmlRenderer(mistune.HTMLRenderer):
    """Render a :class:`~tiptap2html.document.Node` tree to an HTML string."""

    def __init__(
        self,
        templates: Optional[Mapping[str, Template]] = None,
        *,
        allow_html: bool = False,
    ) -> None:
        super().__init__(escape=not allow_html)
        self.allow_html = allow_html
        self.templates: dict[str, Template] = {
            # nodes
            "doc": self._render_doc,
            "paragraph": self._render_paragraph,
            "heading": self._render_heading,
            "bulletList": self._render_bullet_list,
            "orderedList": self._render_ordered_list,
            "listItem": self._render_list_item,
            "blockquote": self._render_blockquote,
            "codeBlock": self._render_code_block,
            "horizontalRule": self._render_horizontal_rule,
            "hardBreak": self._render_hard_break,
            "image": self._render_image,
            "text": self._render_text,
            # marks
            "bold": self._render_bold,
            "italic": self._render_italic,
            "strike": self._render_strike,
            "underline": self._render_underline,
            "code": self._render_code,
            "link": self._render_link,
            "subscript": self._render_subscript,
            "superscript": self._render_superscript,
            "highlight": self._render_highlight,
        }
        if templates:
            self.templates.update(templates)

    # ======================================================================
    # Public API
    # ======================================================================

    def render(self, node: Node) -> str:
        """Return the HTML for *node* and its descendants."""
        return self._render_nodes([node], parent=None)

    # ======================================================================
    # Tree walk
    # ======================================================================

    def _render_nodes(self, nodes: list[Node], parent: Optional[Node]) -> str:
        parts: list[str] = []
        previous: Optional[Node] = None
        for i, node in enumerate(nodes):
            content = self._render_nodes(node.content or [], parent=node)
            ctx = RenderContext(
                node=node,
                content=content,
                previous=previous,
                next=nodes[i + 1] if i + 1 < len(nodes) else None,
                parent=parent,
            )
            parts.append(self._template_for(node.type)(ctx))
            previous = node
        return "".join(parts)

    def _template_for(self, node_type: str) -> Template:
        template = self.templates.get(node_type)
        if template is None:
            raise RenderError(f"No template for node type {node_type!r}")
        return template

    def _safe_attr_url(self, value: object) -> str:
        # attrs are arbitrary JSON; mistune only accepts strings.
        return self.safe_url("" if value is None else str(value))

    # ======================================================================
    # Node templates
    # ======================================================================

    def _render_doc(self, ctx: RenderContext) -> str:
        return ctx.content

    def _render_paragraph(self, ctx: RenderContext) -> str:
        return self.paragraph(ctx.content)

    def _render_heading(self, ctx: RenderContext) -> str:
        try:
            level = int(ctx.attrs.get("level", 1))
        except (TypeError, ValueError):
            level = 1
        return self.heading(ctx.content, min(max(level, 1), 6))

    def _render_bullet_list(self, ctx: RenderContext) -> str:
        return self.list(ctx.content, ordered=False)

    def _render_ordered_list(self, ctx: RenderContext) -> str:
        try:
            start = int(ctx.attrs.get("start", 1))
        except (TypeError, ValueError):
            start = 1
        if start == 1:
            return self.list(ctx.content, ordered=True)
        return self.list(ctx.content, ordered=True, start=start)

    def _render_list_item(self, ctx: RenderContext) -> str:
        return self.list_item(ctx.content)

    def _render_blockquote(self, ctx: RenderContext) -> str:
        return self.block_quote(ctx.content)

    def _render_code_block(self, ctx: RenderContext) -> str:
        language = ctx.attrs.get("language")
        html = "<pre><code"
        if language:
            html += _attr("class", f"language-{language}")
        return html + ">" + ctx.content + "</code></pre>\n"

    def _render_horizontal_rule(self, _ctx: RenderContext) -> str:
        return self.thematic_break()

    def _render_hard_break(self, _ctx: RenderContext) -> str:
        return self.linebreak()

    def _render_image(self, ctx: RenderContext) -> str:
        html = '<img src="' + self._safe_attr_url(ctx.attrs.get("src")) + '"'
        html += _attr("alt", ctx.attrs.get("alt") or "")
        if ctx.attrs.get("title"):
            html += _attr("title", ctx.attrs["title"])
        return html + " />"

    def _render_text(self, ctx: RenderContext) -> str:
        text = ctx.node.text or ""
        if self.allow_html:
            return text
        return escape(text, quote=False)

    # ======================================================================
    # Mark templates
    # ======================================================================

    def _render_bold(self, ctx: RenderContext) -> str:
        return self.strong(ctx.content)

    def _render_italic(self, ctx: RenderContext) -> str:
        return self.emphasis(ctx.content)

    def _render_strike(self, ctx: RenderContext) -> str:
        return "<s>" + ctx.content + "</s>"

    def _render_underline(self, ctx: RenderContext) -> str:
        return "<u>" + ctx.content + "</u>"

    def _render_code(self, ctx: RenderContext) -> str:
        # Content is already escaped by the text template.
        return "<code>" + ctx.content + "</code>"

    def _render_link(self, ctx: RenderContext) -> str:
        html = '<a href="' + self._safe_attr_url(ctx.attrs.get("href")) + '"'
        for name in ("target", "rel", "title"):
            if ctx.attrs.get(name):
                html += _attr(name, ctx.attrs[name])
        return html + ">" + ctx.content + "</a>"

    def _render_subscript(self, ctx: RenderContext) -> str:
        return "<sub>" + ctx.content + "</sub>"

    def _render_superscript(self, ctx: RenderContext) -> str:
        return "<sup>" + ctx.content + "</sup>"

    def _render_highlight(self, ctx: RenderContext) -> str:
        color = ctx.attrs.get("color")
        if color:
            return "<mark" + _attr("style", f"background-color: {color}") + ">" + ctx.content + "</mark>"
        return "<mark>" + ctx.content + "</mark>"
