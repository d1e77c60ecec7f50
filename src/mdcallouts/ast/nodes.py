#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/ast/nodes.py
"""Node classes for parsed markdown.

The tree is deliberately small: it covers what the markdown parser emits and
what the callout rewrite needs to inspect, nothing more. Each class is a
dataclass whose ``accept`` calls the matching ``visit_*`` method, which is how
the HTML renderer and the transforms walk it.

Node Hierarchy
--------------
Block-level nodes:
    - Document, Heading, Paragraph, CodeBlock, BlockQuote
    - List, ListItem, ThematicBreak, HTMLBlock

Inline nodes:
    - Text, Emphasis, Strong, Code, Strikethrough
    - Link, LinkReference, Image, LineBreak, HTMLInline

Child nodes live in one field per class: ``children`` for Document,
BlockQuote and ListItem, ``items`` for List and ``content`` for the nodes
holding inline runs. ``get_node_children`` and ``replace_node_children`` hide
the difference.

``metadata`` and ``source_location`` are keyword-only on every node.
Renderer hints are stored in ``metadata``: ``css_classes`` (class labels set by
the callout rewrite), ``id`` (heading anchors) and ``trusted`` (raw HTML the
library generated itself).

"""

from __future__ import annotations

import re
from abc import ABC
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Literal, Optional


@dataclass
class SourceLocation:
    """Position of a node in its input.

    Parameters
    ----------
    format : str
        Input kind the node was read from, ``"markdown"`` or ``"json"``
    line : int or None, default = None
        1-based line of the node's first character
    column : int or None, default = None
        1-based column, when the producer reports one
    metadata : dict, default = empty dict
        Anything else the producer recorded

    """

    format: str
    line: Optional[int] = None
    column: Optional[int] = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Node(ABC):
    """Common base of every tree node.

    Parameters
    ----------
    metadata : dict, default = empty dict
        Renderer hints and free-form data attached to the node
    source_location : SourceLocation or None, default = None
        Where the node was read from, if known

    """

    metadata: dict[str, Any] = field(default_factory=dict, kw_only=True)
    source_location: Optional[SourceLocation] = field(default=None, kw_only=True)

    # Name of the visitor method that handles this class
    visit_method: ClassVar[str]

    def accept(self, visitor: Any) -> Any:
        """Call ``visitor.<visit_method>(self)`` and return its result."""
        return getattr(visitor, self.visit_method)(self)


# Block-level Nodes


@dataclass
class Document(Node):
    """Top of the tree.

    Front matter keys parsed from the input are stored in ``metadata``.
    """

    children: list[Node] = field(default_factory=list)
    visit_method: ClassVar[str] = "visit_document"


@dataclass
class Heading(Node):
    """ATX or setext heading.

    Parameters
    ----------
    level : int
        1 to 6
    content : list of Node, default = empty list
        Inline runs of the heading text

    Raises
    ------
    ValueError
        If ``level`` is outside 1-6

    """

    level: int
    content: list[Node] = field(default_factory=list)
    visit_method: ClassVar[str] = "visit_heading"

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")


@dataclass
class Paragraph(Node):
    """Run of inline content.

    The first paragraph of a block quote is where a callout marker is looked
    for.
    """

    content: list[Node] = field(default_factory=list)
    visit_method: ClassVar[str] = "visit_paragraph"


@dataclass
class CodeBlock(Node):
    """Fenced or indented code; ``language`` is the first info-string word."""

    content: str
    language: Optional[str] = None
    visit_method: ClassVar[str] = "visit_code_block"


@dataclass
class BlockQuote(Node):
    """``>`` quote holding block nodes.

    A quote whose first paragraph opens with a ``[!TYPE]`` link reference is
    rewritten into a callout: the marker paragraph becomes a title and the
    quote gains the ``callout`` class labels.
    """

    children: list[Node] = field(default_factory=list)
    visit_method: ClassVar[str] = "visit_block_quote"


@dataclass
class List(Node):
    """Bullet or ordered list.

    Parameters
    ----------
    ordered : bool
        Numbered list when True
    items : list of ListItem, default = empty list
        The entries, in order
    start : int, default = 1
        First number of an ordered list
    tight : bool, default = True
        False when any entry is separated by a blank line; item paragraphs
        are then wrapped in ``<p>``

    """

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    tight: bool = True
    visit_method: ClassVar[str] = "visit_list"


@dataclass
class ListItem(Node):
    """One list entry; ``task_status`` is set for ``[ ]``/``[x]`` items."""

    children: list[Node] = field(default_factory=list)
    task_status: Optional[Literal["checked", "unchecked"]] = None
    visit_method: ClassVar[str] = "visit_list_item"


@dataclass
class ThematicBreak(Node):
    """``---`` rule between blocks."""
    visit_method: ClassVar[str] = "visit_thematic_break"


@dataclass
class HTMLBlock(Node):
    """HTML written as its own block in the markdown.

    Stored verbatim; ``html_passthrough_mode`` on the renderer decides what
    reaches the output.
    """

    content: str
    visit_method: ClassVar[str] = "visit_html_block"


# Inline Nodes


@dataclass
class Text(Node):
    """Literal text.

    A soft line break stays inside the string as ``"\\n"``. The callout rewrite
    strips the leading whitespace of the text that follows a marker.
    """

    content: str
    visit_method: ClassVar[str] = "visit_text"


@dataclass
class Emphasis(Node):
    """``*text*``"""

    content: list[Node] = field(default_factory=list)
    visit_method: ClassVar[str] = "visit_emphasis"


@dataclass
class Strong(Node):
    """``**text**``"""

    content: list[Node] = field(default_factory=list)
    visit_method: ClassVar[str] = "visit_strong"


@dataclass
class Code(Node):
    """Backtick code span; ``content`` is the literal code."""

    content: str
    visit_method: ClassVar[str] = "visit_code"


@dataclass
class Strikethrough(Node):
    """``~~text~~``"""

    content: list[Node] = field(default_factory=list)
    visit_method: ClassVar[str] = "visit_strikethrough"


@dataclass
class Link(Node):
    """Inline link or a reference link whose definition was found.

    Parameters
    ----------
    url : str
        Destination as written
    content : list of Node, default = empty list
        Link text
    title : str or None, default = None
        Quoted title after the destination

    """

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    visit_method: ClassVar[str] = "visit_link"


def normalize_identifier(label: str) -> str:
    """Collapse whitespace runs in a reference label and lower-case it.

    Leading and trailing whitespace survives as a single space, so
    ``"!Note "`` gives ``"!note "`` and never matches a callout type.

    >>> normalize_identifier("!WARNING")
    '!warning'

    """
    return re.sub(r"\s+", " ", label).lower()


@dataclass
class LinkReference(Node):
    """``[label]`` with no destination and no matching definition.

    Callout markers arrive as this node: ``[!NOTE]`` parses to
    ``LinkReference(identifier="!note", label="!NOTE")``.

    Parameters
    ----------
    identifier : str
        Label after ``normalize_identifier``
    label : str, default = ""
        Label text between the brackets, untouched
    content : list of Node, default = empty list
        Inline nodes parsed from the label

    """

    identifier: str
    label: str = ""
    content: list[Node] = field(default_factory=list)
    visit_method: ClassVar[str] = "visit_link_reference"


@dataclass
class Image(Node):
    """``![alt](url "title")``"""

    url: str
    alt_text: str = ""
    title: Optional[str] = None
    visit_method: ClassVar[str] = "visit_image"


@dataclass
class LineBreak(Node):
    """Hard break from two trailing spaces or a backslash."""
    visit_method: ClassVar[str] = "visit_line_break"


@dataclass
class HTMLInline(Node):
    """HTML inside a run of inline content.

    The callout icon is one of these, created with ``metadata["trusted"]``
    set so that escaping or dropping user HTML leaves it in place.
    """

    content: str
    visit_method: ClassVar[str] = "visit_html_inline"


# Name of the field holding a node's children, per node class
_CHILD_FIELDS: dict[type, str] = {
    Document: "children",
    BlockQuote: "children",
    ListItem: "children",
    List: "items",
    Heading: "content",
    Paragraph: "content",
    Emphasis: "content",
    Strong: "content",
    Strikethrough: "content",
    Link: "content",
    LinkReference: "content",
}


def get_node_children(node: Node) -> list[Node]:
    """Return a new list of the node's children, empty for leaves.

    >>> len(get_node_children(Paragraph(content=[Text("a"), Text("b")])))
    2

    """
    name = _CHILD_FIELDS.get(type(node))
    return list(getattr(node, name)) if name else []


def replace_node_children(node: Node, new_children: list[Node]) -> Node:
    """Copy ``node`` with ``new_children`` and a metadata dict of its own.

    Leaves have nothing to replace and are returned unchanged.

    Raises
    ------
    ValueError
        If a List would end up holding something other than ListItem nodes

    """
    name = _CHILD_FIELDS.get(type(node))
    if name is None:
        return node

    if isinstance(node, List):
        stray = next((child for child in new_children if not isinstance(child, ListItem)), None)
        if stray is not None:
            raise ValueError(f"List children must be ListItem instances, got {type(stray).__name__}")

    return replace(node, metadata=dict(node.metadata), **{name: new_children})
