#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/parsers/__init__.py
"""Parsers turning source documents into document trees.

Available parsers:
- MarkdownToAstConverter: Markdown via mistune, with link-reference nodes
  for unresolved ``[label]`` brackets (requires mistune)
"""

from mdcallouts.parsers.base import BaseParser
from mdcallouts.parsers.markdown import MarkdownToAstConverter, markdown_to_ast

__all__ = [
    "BaseParser",
    "MarkdownToAstConverter",
    "markdown_to_ast",
]
