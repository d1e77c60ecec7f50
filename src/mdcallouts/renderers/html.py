#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/renderers/html.py
"""HTML output for document trees.

``HtmlRenderer`` writes a fragment by default and a full page when
``standalone`` is set. It reads the hints transforms leave in node metadata:

- ``css_classes`` becomes the ``class`` attribute, so a rewritten callout
  renders as ``<blockquote class="callout callout-tip">`` with a
  ``<p class="callout-title">`` first child
- ``id`` on a heading becomes its anchor
- ``trusted`` on raw HTML bypasses ``html_passthrough_mode``; only the callout
  icons carry it

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Optional, Union

from mdcallouts.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    LinkReference,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Text,
    ThematicBreak,
)
from mdcallouts.ast.utils import extract_text
from mdcallouts.ast.visitors import NodeVisitor
from mdcallouts.constants import CSS_CLASSES_KEY, HEADING_ID_KEY, TRUSTED_MARKUP_KEY
from mdcallouts.exceptions import RenderingError
from mdcallouts.options.html import HtmlRendererOptions
from mdcallouts.renderers.base import BaseRenderer, InlineContentMixin
from mdcallouts.utils.html_utils import class_attribute, escape_html, merge_class_names

logger = logging.getLogger(__name__)

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="{language}">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{title}</title>
{stylesheet}</head>
<body>
<main>
{content}
</main>
</body>
</html>"""

# Each callout type sets --accent; everything else in .callout reads it
_DEFAULT_CSS = """
:root { color-scheme: light; }

body {
    max-width: 46rem;
    margin: 0 auto;
    padding: 2rem 1.25rem;
    font: 16px/1.65 system-ui, -apple-system, "Segoe UI", sans-serif;
    color: #1f2328;
}

h1, h2, h3 { line-height: 1.3; margin: 2rem 0 0.75rem; }
h1 { font-size: 1.9rem; }
h2 { font-size: 1.45rem; }

pre, code { font-family: ui-monospace, SFMono-Regular, Menlo, monospace; font-size: 0.92em; }
code { padding: 0.1em 0.35em; border-radius: 4px; background: #eff1f3; }
pre { padding: 0.9rem 1rem; border-radius: 6px; background: #f6f8fa; overflow-x: auto; }
pre code { padding: 0; background: none; }

blockquote { margin: 1rem 0; padding: 0 1rem; border-left: 0.25rem solid #d1d9e0; color: #59636e; }
img { max-width: 100%; }
a { color: #0969da; }
hr { margin: 2rem 0; border: 0; border-top: 1px solid #d1d9e0; }

.callout {
    --accent: #0969da;
    padding: 0.6rem 1rem;
    border-left-color: var(--accent);
    color: inherit;
}
.callout > :last-child { margin-bottom: 0.25rem; }
.callout-title {
    display: flex;
    align-items: center;
    gap: 0.45rem;
    margin: 0.2rem 0 0.4rem;
    font-weight: 600;
    color: var(--accent);
}
.callout-icon { flex: none; }

.callout-note { --accent: #0969da; }
.callout-tip { --accent: #1a7f37; }
.callout-important { --accent: #8250df; }
.callout-warning { --accent: #9a6700; }
.callout-caution { --accent: #d1242f; }
"""


class HtmlRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render a document tree to HTML.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        Output settings; defaults produce a fragment with authored HTML
        passed through

    Examples
    --------
        >>> from mdcallouts.ast import Document, Heading, Text
        >>> doc = Document(children=[Heading(level=2, content=[Text(content="Usage")], metadata={"id": "usage"})])
        >>> HtmlRenderer().render_to_string(doc)
        '<h2 id="usage">Usage</h2>\\n'

    """

    def __init__(self, options: HtmlRendererOptions | None = None):
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: HtmlRendererOptions = options
        self._output: list[str] = []
        # One entry per open list or quote; True while paragraphs render bare
        self._tight_lists: list[bool] = []

    def render_to_string(self, document: Document) -> str:
        """Return the HTML for ``document``.

        Raises
        ------
        RenderingError
            If a node in the tree cannot be rendered

        """
        self._output = []
        self._tight_lists = []

        try:
            document.accept(self)
        except (AttributeError, TypeError, ValueError) as e:
            raise RenderingError(f"Failed to render HTML: {e}", rendering_stage="content", original_error=e) from e

        fragment = "".join(self._output)
        return self._page(document, fragment) if self.options.standalone else fragment

    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render ``doc`` and write the result to a path or stream."""
        self.write_text_output(self.render_to_string(doc), output)

    # ------------------------------------------------------------------
    # Standalone page
    # ------------------------------------------------------------------

    def _resolve_title(self, doc: Document) -> str:
        """Title option, then front matter ``title``, then the first top-level heading."""
        if self.options.title:
            return self.options.title

        if doc.metadata.get("title"):
            return str(doc.metadata["title"])

        headings = (child for child in doc.children if isinstance(child, Heading))
        for heading in headings:
            text = extract_text(heading.content).strip()
            if text:
                return text
        return "Document"

    def _stylesheet(self) -> str:
        if self.options.css_style == "embedded":
            return f"<style>\n{_DEFAULT_CSS}\n</style>\n"
        if self.options.css_style == "external" and self.options.css_file:
            return f'<link rel="stylesheet" href="{escape_html(self.options.css_file)}">\n'
        return ""

    def _page(self, doc: Document, fragment: str) -> str:
        language = doc.metadata.get("language") or self.options.language
        return _PAGE_TEMPLATE.format(
            language=escape_html(str(language)),
            title=escape_html(self._resolve_title(doc)),
            stylesheet=self._stylesheet(),
            content=fragment,
        )

    # ------------------------------------------------------------------
    # Attribute helpers
    # ------------------------------------------------------------------

    def _escape(self, text: str) -> str:
        return escape_html(text, enabled=self.options.escape_html)

    def _optional_attr(self, name: str, value: Optional[str]) -> str:
        return f' {name}="{self._escape(value)}"' if value else ""

    def _class_attr(self, node: Node, node_type: str) -> str:
        """Labels from the node first, then classes configured for ``node_type`` in ``css_class_map``."""
        configured = self.options.css_class_map.get(node_type) if self.options.css_class_map else None
        if isinstance(configured, str):
            configured = [configured]
        return class_attribute(merge_class_names(node.metadata.get(CSS_CLASSES_KEY), configured))

    def _raw_html(self, node: Union[HTMLBlock, HTMLInline]) -> str:
        if node.metadata.get(TRUSTED_MARKUP_KEY):
            return node.content

        mode = self.options.html_passthrough_mode
        if mode == "pass-through":
            return node.content
        if mode == "escape":
            return escape_html(node.content)

        logger.debug("Dropping raw HTML (%d chars)", len(node.content))
        return ""

    def _render_blocks(self, children: list[Node], tight: bool) -> None:
        self._tight_lists.append(tight)
        for child in children:
            child.accept(self)
        self._tight_lists.pop()

    def _wrap_inline(self, tag: str, node: Union[Emphasis, Strong, Strikethrough]) -> None:
        self._output.append(f"<{tag}>{self._render_inline_content(node.content)}</{tag}>")

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        for child in node.children:
            child.accept(self)

    def visit_heading(self, node: Heading) -> None:
        heading_id = node.metadata.get(HEADING_ID_KEY)
        id_attr = f' id="{escape_html(str(heading_id))}"' if heading_id else ""
        css_class = self._class_attr(node, "Heading")
        content = self._render_inline_content(node.content)
        level = min(6, max(1, node.level))
        self._output.append(f"<h{level}{id_attr}{css_class}>{content}</h{level}>\n")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Emit ``<p>``, or the bare inline content inside a tight list item.

        A paragraph with class labels always keeps its element.
        """
        content = self._render_inline_content(node.content)
        css_class = self._class_attr(node, "Paragraph")
        if self._tight_lists and self._tight_lists[-1] and not css_class:
            self._output.append(content)
        else:
            self._output.append(f"<p{css_class}>{content}</p>\n")

    def visit_code_block(self, node: CodeBlock) -> None:
        """Emit ``<pre><code>``; the language becomes ``language-*`` when highlighting is on."""
        language = node.language if self.options.syntax_highlighting else None
        code_class = class_attribute([f"language-{language}"] if language else [])
        pre_class = self._class_attr(node, "CodeBlock")
        self._output.append(f"<pre{pre_class}><code{code_class}>{self._escape(node.content)}</code></pre>\n")

    def visit_block_quote(self, node: BlockQuote) -> None:
        self._output.append(f"<blockquote{self._class_attr(node, 'BlockQuote')}>\n")
        # Paragraphs in a quote keep <p> even when the quote sits in a tight list
        self._render_blocks(node.children, tight=False)
        self._output.append("</blockquote>\n")

    def visit_list(self, node: List) -> None:
        tag = "ol" if node.ordered else "ul"
        start_attr = f' start="{node.start}"' if node.ordered and node.start != 1 else ""
        self._output.append(f"<{tag}{start_attr}{self._class_attr(node, 'List')}>\n")
        self._render_blocks(node.items, tight=node.tight)  # type: ignore[arg-type]
        self._output.append(f"</{tag}>\n")

    def visit_list_item(self, node: ListItem) -> None:
        self._output.append(f"<li{self._class_attr(node, 'ListItem')}>")
        if node.task_status is not None:
            checked = " checked" if node.task_status == "checked" else ""
            self._output.append(f'<input type="checkbox" disabled{checked}> ')
        for child in node.children:
            child.accept(self)
        self._output.append("</li>\n")

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        self._output.append(f"<hr{self._class_attr(node, 'ThematicBreak')}>\n")

    def visit_html_block(self, node: HTMLBlock) -> None:
        html = self._raw_html(node)
        if html:
            self._output.append(html if html.endswith("\n") else f"{html}\n")

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        self._output.append(self._escape(node.content))

    def visit_emphasis(self, node: Emphasis) -> None:
        self._wrap_inline("em", node)

    def visit_strong(self, node: Strong) -> None:
        self._wrap_inline("strong", node)

    def visit_code(self, node: Code) -> None:
        self._output.append(f"<code>{self._escape(node.content)}</code>")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        self._wrap_inline("del", node)

    def visit_link(self, node: Link) -> None:
        content = self._render_inline_content(node.content)
        attrs = f'href="{self._escape(node.url)}"{self._optional_attr("title", node.title)}'
        self._output.append(f"<a {attrs}{self._class_attr(node, 'Link')}>{content}</a>")

    def visit_link_reference(self, node: LinkReference) -> None:
        """Put an unresolved reference back as the bracketed text it was written as."""
        if node.content:
            label = self._render_inline_content(node.content)
        else:
            label = self._escape(node.label or node.identifier)
        self._output.append(f"[{label}]")

    def visit_image(self, node: Image) -> None:
        attrs = f'src="{self._escape(node.url)}" alt="{self._escape(node.alt_text)}"'
        attrs += self._optional_attr("title", node.title)
        self._output.append(f"<img {attrs}{self._class_attr(node, 'Image')}>")

    def visit_line_break(self, node: LineBreak) -> None:
        self._output.append("<br>\n")

    def visit_html_inline(self, node: HTMLInline) -> None:
        html = self._raw_html(node)
        if html:
            self._output.append(html)


__all__ = ["HtmlRenderer"]
