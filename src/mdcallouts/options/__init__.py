#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/options/__init__.py
"""Parser and renderer option classes."""

from mdcallouts.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from mdcallouts.options.html import HtmlRendererOptions
from mdcallouts.options.markdown import MarkdownParserOptions

__all__ = [
    "CloneFrozenMixin",
    "BaseParserOptions",
    "BaseRendererOptions",
    "HtmlRendererOptions",
    "MarkdownParserOptions",
]
