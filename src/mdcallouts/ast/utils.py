#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/ast/utils.py
"""Helpers for reading plain text out of document trees.

Examples
--------
    >>> heading = Heading(level=1, content=[Text(content="Hello "), Code(content="world")])
    >>> extract_text(heading)
    'Hello world'

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from mdcallouts.ast.nodes import Code, Image, Text, get_node_children

if TYPE_CHECKING:
    from mdcallouts.ast.nodes import Node


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = "") -> str:
    """Extract plain text from a node or list of nodes.

    Text, code spans and image alt text contribute; raw HTML does not.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = ""
        String placed between the text of sibling nodes. The default keeps
        inline runs exactly as written, which is what slug generation wants.

    Returns
    -------
    str
        Concatenated text content

    """
    if isinstance(node_or_nodes, list):
        parts = [extract_text(node, joiner=joiner) for node in node_or_nodes]
        return joiner.join(part for part in parts if part)

    node = node_or_nodes
    if isinstance(node, (Text, Code)):
        return node.content
    if isinstance(node, Image):
        return node.alt_text

    return extract_text(get_node_children(node), joiner=joiner)


__all__ = [
    "extract_text",
]
