#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/ast/visitors.py
"""Double-dispatch base for walking the tree.

``node.accept(visitor)`` calls the ``visit_*`` method named after the node
class. All of them are abstract here, so a renderer that misses a node type
cannot be instantiated. ``NodeTransformer`` fills every slot with a rebuild
and is the usual starting point for transforms.

Examples
--------
    >>> class QuoteCounter(NodeTransformer):
    ...     count = 0
    ...     def visit_block_quote(self, node):
    ...         self.count += 1
    ...         return self._rebuild(node)

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

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
    Paragraph,
    Strikethrough,
    Strong,
    Text,
    ThematicBreak,
)


class NodeVisitor(ABC):
    """One method per node class; what they return is up to the subclass."""

    # Block nodes

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Entry point for a whole tree."""

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """``node.metadata`` may hold an ``id`` anchor."""

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any: ...

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any: ...

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Plain quote, or a callout when ``css_classes`` holds ``callout``."""

    @abstractmethod
    def visit_list(self, node: List) -> Any: ...

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any: ...

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any: ...

    @abstractmethod
    def visit_html_block(self, node: HTMLBlock) -> Any: ...

    # Inline nodes

    @abstractmethod
    def visit_text(self, node: Text) -> Any: ...

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any: ...

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any: ...

    @abstractmethod
    def visit_code(self, node: Code) -> Any: ...

    @abstractmethod
    def visit_strikethrough(self, node: Strikethrough) -> Any: ...

    @abstractmethod
    def visit_link(self, node: Link) -> Any: ...

    @abstractmethod
    def visit_link_reference(self, node: LinkReference) -> Any:
        """Unresolved ``[label]``; callout markers arrive as these."""

    @abstractmethod
    def visit_image(self, node: Image) -> Any: ...

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any: ...

    @abstractmethod
    def visit_html_inline(self, node: HTMLInline) -> Any:
        """Raw inline HTML; ``metadata["trusted"]`` marks generated markup."""
