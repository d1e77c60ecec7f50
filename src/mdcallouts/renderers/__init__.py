#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/renderers/__init__.py
"""Renderers converting document trees to output formats.

Examples
--------
    >>> from mdcallouts.ast import Document, Heading, Text
    >>> from mdcallouts.renderers import HtmlRenderer
    >>> doc = Document(children=[Heading(level=1, content=[Text(content="Title")])])
    >>> HtmlRenderer().render_to_string(doc)
    '<h1>Title</h1>\\n'

"""

from mdcallouts.renderers.base import BaseRenderer, InlineContentMixin
from mdcallouts.renderers.html import HtmlRenderer

__all__ = [
    "BaseRenderer",
    "InlineContentMixin",
    "HtmlRenderer",
]
