#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/transforms/builtin.py
"""Built-in document transforms.

Available Transforms
--------------------
- CalloutTransform: Rewrite ``> [!TYPE]`` block quotes into callouts
- AddHeadingIdsTransform: Generate unique anchor ids for headings

Both are registered by name (``callouts`` and ``heading-ids``) and make up
the default pipeline, in that order.

Callouts
--------
A block quote becomes a callout when its first child is a paragraph whose
first inline node is a link reference with identifier ``!note``, ``!tip``,
``!important``, ``!warning`` or ``!caution`` (any letter case in the source).
Markdown such as::

    > [!TIP]
    > Use shortcuts.

is rewritten to a block quote labelled ``callout callout-tip`` whose first
child is a title paragraph (labelled ``callout-title``) holding the tip icon
and the text "Tip", followed by the remaining body.

Examples
--------
    >>> new_doc = CalloutTransform().transform(doc)
    >>> new_doc = AddHeadingIdsTransform(id_prefix="doc-").transform(new_doc)

"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from mdcallouts.ast.nodes import (
    BlockQuote,
    Document,
    Heading,
    HTMLInline,
    LinkReference,
    Node,
    Paragraph,
    Text,
)
from mdcallouts.ast.transforms import NodeTransformer, transform_nodes
from mdcallouts.ast.utils import extract_text
from mdcallouts.constants import (
    CALLOUT_CLASS,
    CALLOUT_CLASS_PREFIX,
    CALLOUT_ICON_PATHS,
    CALLOUT_ICON_TEMPLATE,
    CALLOUT_MARKER_PATTERN,
    CALLOUT_TITLE_CLASS,
    CSS_CLASSES_KEY,
    DEFAULT_HEADING_ID_MAX_LENGTH,
    HEADING_ID_KEY,
    TRUSTED_MARKUP_KEY,
)
from mdcallouts.utils.text import make_unique_slug, slugify

logger = logging.getLogger(__name__)


def match_callout_marker(node: BlockQuote) -> Optional[str]:
    """Return the callout type a block quote is marked with, if any.

    Parameters
    ----------
    node : BlockQuote
        Block quote to inspect

    Returns
    -------
    str or None
        Lower-cased callout type, or None when the quote is not a callout

    """
    if not node.children:
        return None

    first = node.children[0]
    if not isinstance(first, Paragraph) or not first.content:
        return None

    lead = first.content[0]
    if not isinstance(lead, LinkReference) or not isinstance(lead.identifier, str):
        return None

    match = CALLOUT_MARKER_PATTERN.fullmatch(lead.identifier)
    if match is None:
        return None
    return match.group(1).lower()


def build_callout_title(callout_type: str) -> Paragraph:
    """Build the title paragraph for a callout: icon followed by the type name."""
    icon = HTMLInline(
        content=CALLOUT_ICON_TEMPLATE.format(path=CALLOUT_ICON_PATHS[callout_type]),
        metadata={TRUSTED_MARKUP_KEY: True},
    )
    title = Text(content=callout_type[:1].upper() + callout_type[1:])
    return Paragraph(content=[icon, title], metadata={CSS_CLASSES_KEY: [CALLOUT_TITLE_CLASS]})


class CalloutTransform(NodeTransformer):
    """Rewrite marked block quotes into callouts.

    Block quotes that do not carry a recognized marker are rebuilt unchanged;
    nothing is ever reported for them. Nested block quotes are handled after
    their parent, each on its own merits.

    Examples
    --------
    >>> quote = BlockQuote(children=[
    ...     Paragraph(content=[LinkReference(identifier="!tip", label="!TIP"), Text(content="\\nUse shortcuts.")])
    ... ])
    >>> result = CalloutTransform().transform(Document(children=[quote]))
    >>> result.children[0].metadata["css_classes"]
    ['callout', 'callout-tip']

    """

    def visit_block_quote(self, node: BlockQuote) -> BlockQuote:
        """Rewrite a block quote if it is marked as a callout.

        Parameters
        ----------
        node : BlockQuote
            Block quote to process

        Returns
        -------
        BlockQuote
            New block quote; a callout when the marker matched

        """
        callout_type = match_callout_marker(node)
        if callout_type is None:
            return self._rebuild(node)  # type: ignore[return-value]

        first = node.children[0]
        assert isinstance(first, Paragraph)

        body = list(first.content[1:])
        if body and isinstance(body[0], Text):
            lead = body[0]
            body[0] = replace(lead, content=lead.content.lstrip(), metadata=dict(lead.metadata))

        children: list[Node] = [build_callout_title(callout_type)]
        if body:
            children.append(replace(first, content=body, metadata=dict(first.metadata)))
        children.extend(node.children[1:])

        metadata = dict(node.metadata)
        metadata[CSS_CLASSES_KEY] = [CALLOUT_CLASS, f"{CALLOUT_CLASS_PREFIX}{callout_type}"]

        logger.debug("Rewrote block quote as %s callout", callout_type)
        return BlockQuote(
            children=self._transform_children(children),
            metadata=metadata,
            source_location=node.source_location,
        )


def transform_callouts(document: Document) -> Document:
    """Apply ``CalloutTransform`` to a document and return the new document."""
    return transform_nodes(document, CalloutTransform())


class AddHeadingIdsTransform(NodeTransformer):
    """Generate and add unique ids to heading nodes.

    The id is stored in ``metadata["id"]``, where the HTML renderer picks it
    up. Slugs are unique per transformed document.

    Parameters
    ----------
    id_prefix : str, default = ""
        Prefix to add to all generated ids
    separator : str, default = "-"
        Separator for multi-word slugs and duplicate suffixes
    max_length : int, default = 100
        Maximum slug length, before prefix and suffix

    Examples
    --------
        >>> transform = AddHeadingIdsTransform(id_prefix="doc-")
        >>> new_doc = transform.transform(document)
        >>> # "My Heading" -> metadata['id'] = "doc-my-heading"

    """

    def __init__(self, id_prefix: str = "", separator: str = "-", max_length: int = DEFAULT_HEADING_ID_MAX_LENGTH):
        """Initialize with prefix, separator and slug length limit."""
        self.id_prefix = id_prefix
        self.separator = separator
        self.max_length = max_length
        self._occurrences: dict[str, int] = {}

    def visit_document(self, node: Document) -> Document:
        """Reset the slug counters so ids are unique per document."""
        self._occurrences = {}
        return super().visit_document(node)

    def visit_heading(self, node: Heading) -> Heading:
        """Add a unique id to a heading."""
        base_slug = slugify(extract_text(node.content), max_length=self.max_length, separator=self.separator)
        slug = make_unique_slug(base_slug, self._occurrences, separator=self.separator)

        metadata = node.metadata.copy()
        metadata[HEADING_ID_KEY] = f"{self.id_prefix}{slug}"

        return Heading(
            level=node.level,
            content=self._transform_children(node.content),
            metadata=metadata,
            source_location=node.source_location,
        )


__all__ = [
    "CalloutTransform",
    "AddHeadingIdsTransform",
    "build_callout_title",
    "match_callout_marker",
    "transform_callouts",
]
