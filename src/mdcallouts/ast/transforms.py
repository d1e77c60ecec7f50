#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/ast/transforms.py
"""Copy-on-write tree rewriting.

``NodeTransformer`` hands back a fresh tree and leaves its input untouched, so
the same parsed document can go through several pipelines. Every ``visit_*``
slot starts out as ``_rebuild``; a subclass overrides only the node types it
changes. Returning ``None`` from an override drops the node from its parent.

Examples
--------
    >>> class DropImages(NodeTransformer):
    ...     def visit_image(self, node):
    ...         return None
    >>> cleaned = transform_nodes(doc, DropImages())

"""

from __future__ import annotations

import copy

from mdcallouts.ast.nodes import Document, Node, get_node_children, replace_node_children
from mdcallouts.ast.visitors import NodeVisitor


class NodeTransformer(NodeVisitor):
    """Visitor that returns a rebuilt node from every visit.

    Containers come back as copies holding transformed children; leaves come
    back as shallow copies. Either way the copy owns its ``metadata`` dict.
    """

    def transform(self, node: Node) -> Node | None:
        """Run the transformer over ``node``; ``None`` means the node was removed."""
        return node.accept(self)

    def _transform_children(self, children: list[Node]) -> list[Node]:
        result = []
        for child in children:
            rewritten = self.transform(child)
            if rewritten is not None:
                result.append(rewritten)
        return result

    def _rebuild(self, node: Node) -> Node:
        rebuilt = replace_node_children(node, self._transform_children(get_node_children(node)))
        if rebuilt is node:
            rebuilt = copy.copy(node)
            rebuilt.metadata = dict(node.metadata)
        return rebuilt

    visit_document = visit_heading = visit_paragraph = visit_code_block = _rebuild
    visit_block_quote = visit_list = visit_list_item = visit_thematic_break = visit_html_block = _rebuild
    visit_text = visit_emphasis = visit_strong = visit_code = visit_strikethrough = _rebuild
    visit_link = visit_link_reference = visit_image = visit_line_break = visit_html_inline = _rebuild


def transform_nodes(doc: Document, transformer: NodeTransformer) -> Document:
    """Apply a transformer to a document and return the new document.

    Raises
    ------
    TypeError
        If the transformer does not return a Document for the root

    """
    result = transformer.transform(doc)
    if not isinstance(result, Document):
        raise TypeError(f"{type(transformer).__name__} must return a Document, got {type(result).__name__}")
    return result


__all__ = [
    "NodeTransformer",
    "transform_nodes",
]
