#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/options/html.py
"""Configuration options for HTML rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from mdcallouts.constants import (
    DEFAULT_HTML_CSS_STYLE,
    DEFAULT_HTML_ESCAPE_HTML,
    DEFAULT_HTML_LANGUAGE,
    DEFAULT_HTML_PASSTHROUGH_MODE,
    DEFAULT_HTML_STANDALONE,
    DEFAULT_HTML_SYNTAX_HIGHLIGHTING,
    HTML_PASSTHROUGH_MODES,
    CssStyle,
    HtmlPassthroughMode,
)
from mdcallouts.options.base import BaseRendererOptions

_CSS_STYLES = ("embedded", "external", "none")


@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for rendering a document tree to HTML.

    Parameters
    ----------
    standalone : bool, default False
        Generate a complete HTML document with ``<html>``, ``<head>`` and
        ``<body>``. If False, only the content fragment is produced.
    css_style : {"embedded", "external", "none"}, default "embedded"
        How standalone documents get their styles:
        - "embedded": Include a ``<style>`` block with base and callout styles
        - "external": Link ``css_file``
        - "none": No styling
    css_file : str or None, default None
        Stylesheet URL or path (used when css_style="external").
    title : str or None, default None
        Document title; falls back to ``metadata["title"]`` and then the first
        heading.
    syntax_highlighting : bool, default True
        Add ``language-*`` classes to code blocks.
    escape_html : bool, default True
        Escape HTML special characters in text content.
    html_passthrough_mode : {"pass-through", "escape", "drop"}, default "pass-through"
        How to handle raw HTML authored in the document. Markup generated by
        the library (callout icons) is always passed through.
    language : str, default "en"
        Document language code for the ``<html lang="...">`` attribute.
    css_class_map : dict[str, str | list[str]] or None, default None
        Extra CSS classes per node type name, added after the classes a
        transform attached to the node.
        Example: ``{"BlockQuote": "prose-quote", "CodeBlock": ["code", "highlight"]}``

    Examples
    --------
        >>> options = HtmlRendererOptions(standalone=True, html_passthrough_mode="escape")

    """

    standalone: bool = field(
        default=DEFAULT_HTML_STANDALONE,
        metadata={"help": "Generate complete HTML document (vs content fragment)"},
    )
    css_style: CssStyle = field(
        default=DEFAULT_HTML_CSS_STYLE,
        metadata={"help": "CSS inclusion method: embedded, external, or none", "choices": list(_CSS_STYLES)},
    )
    css_file: Optional[str] = field(
        default=None,
        metadata={"help": "Stylesheet to link (when css_style='external')"},
    )
    title: Optional[str] = field(
        default=None,
        metadata={"help": "Document title for standalone output"},
    )
    syntax_highlighting: bool = field(
        default=DEFAULT_HTML_SYNTAX_HIGHLIGHTING,
        metadata={"help": "Add language classes for syntax highlighting"},
    )
    escape_html: bool = field(
        default=DEFAULT_HTML_ESCAPE_HTML,
        metadata={"help": "Escape HTML special characters in text"},
    )
    html_passthrough_mode: HtmlPassthroughMode = field(
        default=DEFAULT_HTML_PASSTHROUGH_MODE,
        metadata={"help": "How to handle raw HTML content", "choices": HTML_PASSTHROUGH_MODES},
    )
    language: str = field(
        default=DEFAULT_HTML_LANGUAGE,
        metadata={"help": "Document language code for HTML lang attribute"},
    )
    css_class_map: Optional[dict[str, Union[str, list[str]]]] = field(
        default=None,
        metadata={"help": "Map node type names to extra CSS classes"},
    )

    def __post_init__(self) -> None:
        """Validate choice fields.

        Raises
        ------
        ValueError
            If a field value is not one of its allowed choices

        """
        if self.css_style not in _CSS_STYLES:
            raise ValueError(f"css_style must be one of {list(_CSS_STYLES)}, got {self.css_style!r}")
        if self.html_passthrough_mode not in HTML_PASSTHROUGH_MODES:
            raise ValueError(
                f"html_passthrough_mode must be one of {HTML_PASSTHROUGH_MODES}, got {self.html_passthrough_mode!r}"
            )
        if self.css_style == "external" and not self.css_file:
            raise ValueError("css_file is required when css_style='external'")
