#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/ast/__init__.py
"""Document tree representation.

The parser builds a tree of nodes, transforms rebuild it, and renderers walk
it with a visitor. The module consists of:

- nodes: node classes representing document structure
- visitors: visitor base class for traversal
- transforms: copy-on-write transformer
- serialization: mdast-style JSON interchange
- utils: plain-text extraction

Examples
--------
    >>> from mdcallouts.ast import BlockQuote, Document, LinkReference, Paragraph, Text
    >>> doc = Document(children=[
    ...     BlockQuote(children=[
    ...         Paragraph(content=[LinkReference(identifier="!note", label="!NOTE"), Text(content="\\nHello")])
    ...     ])
    ... ])

"""

from __future__ import annotations

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
    SourceLocation,
    Strikethrough,
    Strong,
    Text,
    ThematicBreak,
    get_node_children,
    normalize_identifier,
    replace_node_children,
)
from mdcallouts.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast
from mdcallouts.ast.transforms import NodeTransformer, transform_nodes
from mdcallouts.ast.utils import extract_text
from mdcallouts.ast.visitors import NodeVisitor

__all__ = [
    # Nodes
    "Node",
    "SourceLocation",
    "Document",
    "Heading",
    "Paragraph",
    "CodeBlock",
    "BlockQuote",
    "List",
    "ListItem",
    "ThematicBreak",
    "HTMLBlock",
    "Text",
    "Emphasis",
    "Strong",
    "Code",
    "Strikethrough",
    "Link",
    "LinkReference",
    "Image",
    "LineBreak",
    "HTMLInline",
    "get_node_children",
    "replace_node_children",
    "normalize_identifier",
    # Visitors and transforms
    "NodeVisitor",
    "NodeTransformer",
    "transform_nodes",
    "extract_text",
    # Serialization
    "ast_to_dict",
    "dict_to_ast",
    "ast_to_json",
    "json_to_ast",
]
