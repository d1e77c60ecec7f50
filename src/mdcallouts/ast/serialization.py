#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/ast/serialization.py
"""JSON interchange for document trees.

Trees are written with mdast-style ``type`` tags so that output from other
markdown toolchains can be fed through the transforms, and our output can be
consumed by them:

=================  ===================================================
Node               Dictionary form
=================  ===================================================
Document           ``{"type": "root", "children": [...]}``
Heading            ``{"type": "heading", "depth": 2, "children": [...]}``
Paragraph          ``{"type": "paragraph", "children": [...]}``
CodeBlock          ``{"type": "code", "lang": "py", "value": "..."}``
BlockQuote         ``{"type": "blockquote", "children": [...]}``
List               ``{"type": "list", "ordered": false, "start": 1, "spread": false, ...}``
ListItem           ``{"type": "listItem", "checked": null, "children": [...]}``
ThematicBreak      ``{"type": "thematicBreak"}``
HTMLBlock          ``{"type": "html", "value": "..."}`` (in block position)
Text               ``{"type": "text", "value": "..."}``
Emphasis           ``{"type": "emphasis", "children": [...]}``
Strong             ``{"type": "strong", "children": [...]}``
Code               ``{"type": "inlineCode", "value": "..."}``
Strikethrough      ``{"type": "delete", "children": [...]}``
Link               ``{"type": "link", "url": "...", "title": null, ...}``
LinkReference      ``{"type": "linkReference", "identifier": "...", "label": "...", ...}``
Image              ``{"type": "image", "url": "...", "alt": "...", "title": null}``
LineBreak          ``{"type": "break"}``
HTMLInline         ``{"type": "html", "value": "..."}`` (in inline position)
=================  ===================================================

Renderer hints are kept under ``data``: CSS class labels as
``data.hProperties.className`` and heading ids as ``data.hProperties.id``.
Any other metadata is written to ``data.metadata``. Markup trust is never
read from input: only inline ``html`` equal to a callout icon comes back
trusted, so a loaded tree cannot bypass the renderer's passthrough mode.

Examples
--------
    >>> doc = Document(children=[Paragraph(content=[Text(content="Hi")])])
    >>> ast_to_dict(doc)["children"][0]
    {'type': 'paragraph', 'children': [{'type': 'text', 'value': 'Hi'}]}

"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

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
    normalize_identifier,
)
from mdcallouts.constants import CALLOUT_ICON_MARKUP, CSS_CLASSES_KEY, HEADING_ID_KEY, TRUSTED_MARKUP_KEY

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

_BLOCK_CONTAINER_TYPES = ("root", "blockquote", "listItem")
# A bare "html" dict at the top level is treated as a block.
_BLOCK_TYPES = ("heading", "paragraph", "code", "blockquote", "list", "listItem", "thematicBreak", "html")


# ============================================================================
# Serialization
# ============================================================================


def _serialize_data(node: Node) -> dict[str, Any] | None:
    metadata = dict(node.metadata)
    metadata.pop(TRUSTED_MARKUP_KEY, None)
    properties: dict[str, Any] = {}

    classes = metadata.pop(CSS_CLASSES_KEY, None)
    if classes:
        properties["className"] = list(classes)
    if isinstance(node, Heading) and HEADING_ID_KEY in metadata:
        properties["id"] = metadata.pop(HEADING_ID_KEY)

    data: dict[str, Any] = {}
    if properties:
        data["hProperties"] = properties
    if metadata:
        data["metadata"] = metadata
    return data or None


def _serialize_position(location: SourceLocation) -> dict[str, Any]:
    start: dict[str, Any] = {}
    if location.line is not None:
        start["line"] = location.line
    if location.column is not None:
        start["column"] = location.column
    position: dict[str, Any] = {"start": start, "source": location.format}
    if location.metadata:
        position["metadata"] = location.metadata
    return position


def _children(nodes: list[Any]) -> list[dict[str, Any]]:
    return [ast_to_dict(child) for child in nodes]


_SERIALIZATION_DISPATCH: dict[type, Callable[[Any], dict[str, Any]]] = {
    Document: lambda n: {"type": "root", "children": _children(n.children)},
    Heading: lambda n: {"type": "heading", "depth": n.level, "children": _children(n.content)},
    Paragraph: lambda n: {"type": "paragraph", "children": _children(n.content)},
    CodeBlock: lambda n: {"type": "code", "lang": n.language, "value": n.content},
    BlockQuote: lambda n: {"type": "blockquote", "children": _children(n.children)},
    List: lambda n: {
        "type": "list",
        "ordered": n.ordered,
        "start": n.start,
        "spread": not n.tight,
        "children": _children(n.items),
    },
    ListItem: lambda n: {
        "type": "listItem",
        "checked": None if n.task_status is None else n.task_status == "checked",
        "children": _children(n.children),
    },
    ThematicBreak: lambda n: {"type": "thematicBreak"},
    HTMLBlock: lambda n: {"type": "html", "value": n.content},
    Text: lambda n: {"type": "text", "value": n.content},
    Emphasis: lambda n: {"type": "emphasis", "children": _children(n.content)},
    Strong: lambda n: {"type": "strong", "children": _children(n.content)},
    Code: lambda n: {"type": "inlineCode", "value": n.content},
    Strikethrough: lambda n: {"type": "delete", "children": _children(n.content)},
    Link: lambda n: {"type": "link", "url": n.url, "title": n.title, "children": _children(n.content)},
    LinkReference: lambda n: {
        "type": "linkReference",
        "identifier": n.identifier,
        "label": n.label,
        "referenceType": "shortcut",
        "children": _children(n.content),
    },
    Image: lambda n: {"type": "image", "url": n.url, "alt": n.alt_text, "title": n.title},
    LineBreak: lambda n: {"type": "break"},
    HTMLInline: lambda n: {"type": "html", "value": n.content},
}


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert a node and its subtree to a dictionary.

    Parameters
    ----------
    node : Node
        The node to convert

    Returns
    -------
    dict
        mdast-style dictionary representation of the node

    Raises
    ------
    ValueError
        If the node is not one of the known node classes

    """
    serializer = _SERIALIZATION_DISPATCH.get(type(node))
    if serializer is None:
        raise ValueError(f"Unknown node type for serialization: {type(node).__name__}")

    result = serializer(node)
    data = _serialize_data(node)
    if data:
        result["data"] = data
    if node.source_location is not None:
        result["position"] = _serialize_position(node.source_location)
    return result


# ============================================================================
# Deserialization
# ============================================================================


def _deserialize_metadata(data: dict[str, Any]) -> dict[str, Any]:
    extra = data.get("data") or {}
    metadata = dict(extra.get("metadata") or {})
    metadata.pop(TRUSTED_MARKUP_KEY, None)
    properties = extra.get("hProperties") or {}

    class_name = properties.get("className")
    if isinstance(class_name, str):
        class_name = class_name.split()
    if class_name:
        metadata[CSS_CLASSES_KEY] = list(class_name)
    if "id" in properties:
        metadata[HEADING_ID_KEY] = properties["id"]
    return metadata


def _deserialize_position(data: dict[str, Any]) -> SourceLocation | None:
    position = data.get("position")
    if not position:
        return None
    start = position.get("start") or {}
    return SourceLocation(
        format=position.get("source", "json"),
        line=start.get("line"),
        column=start.get("column"),
        metadata=dict(position.get("metadata") or {}),
    )


def _deserialize_children(data: dict[str, Any], strict_mode: bool) -> list[Node]:
    inline = data.get("type") not in _BLOCK_CONTAINER_TYPES
    result = []
    for child in data.get("children") or []:
        node = _deserialize(child, strict_mode, inline=inline)
        if node is not None:
            result.append(node)
    return result


def _deserialize_list_item(data: dict[str, Any], strict: bool) -> ListItem:
    checked = data.get("checked")
    task_status = None if checked is None else ("checked" if checked else "unchecked")
    return ListItem(children=_deserialize_children(data, strict), task_status=task_status)


def _deserialize_list(data: dict[str, Any], strict: bool) -> List:
    items = [item for item in _deserialize_children(data, strict) if isinstance(item, ListItem)]
    return List(
        ordered=bool(data.get("ordered", False)),
        items=items,
        start=data.get("start") or 1,
        tight=not data.get("spread", False),
    )


def _deserialize_link_reference(data: dict[str, Any], strict: bool) -> LinkReference:
    label = data.get("label")
    identifier = data.get("identifier")
    if label is None:
        label = identifier or ""
    if identifier is None:
        identifier = normalize_identifier(label)
    return LinkReference(identifier=identifier, label=label, content=_deserialize_children(data, strict))


_DESERIALIZATION_DISPATCH: dict[str, Callable[[dict[str, Any], bool], Node]] = {
    "root": lambda d, s: Document(children=_deserialize_children(d, s)),
    "heading": lambda d, s: Heading(level=d.get("depth", 1), content=_deserialize_children(d, s)),
    "paragraph": lambda d, s: Paragraph(content=_deserialize_children(d, s)),
    "code": lambda d, s: CodeBlock(content=d.get("value", ""), language=d.get("lang")),
    "blockquote": lambda d, s: BlockQuote(children=_deserialize_children(d, s)),
    "list": _deserialize_list,
    "listItem": _deserialize_list_item,
    "thematicBreak": lambda d, s: ThematicBreak(),
    "text": lambda d, s: Text(content=d.get("value", "")),
    "emphasis": lambda d, s: Emphasis(content=_deserialize_children(d, s)),
    "strong": lambda d, s: Strong(content=_deserialize_children(d, s)),
    "inlineCode": lambda d, s: Code(content=d.get("value", "")),
    "delete": lambda d, s: Strikethrough(content=_deserialize_children(d, s)),
    "link": lambda d, s: Link(url=d.get("url", ""), title=d.get("title"), content=_deserialize_children(d, s)),
    "linkReference": _deserialize_link_reference,
    "image": lambda d, s: Image(url=d.get("url", ""), alt_text=d.get("alt") or "", title=d.get("title")),
    "break": lambda d, s: LineBreak(),
}


def _deserialize(data: dict[str, Any], strict_mode: bool, inline: bool) -> Node | None:
    node_type = data.get("type")
    if node_type == "html":
        node: Node = HTMLInline(content=data.get("value", "")) if inline else HTMLBlock(content=data.get("value", ""))
    else:
        deserializer = _DESERIALIZATION_DISPATCH.get(node_type)  # type: ignore[arg-type]
        if deserializer is None:
            if strict_mode:
                raise ValueError(f"Unknown node type: {node_type}")
            logger.warning("Unknown node type '%s', skipping", node_type)
            return None
        node = deserializer(data, strict_mode)

    node.metadata = _deserialize_metadata(data)
    if isinstance(node, HTMLInline) and node.content in CALLOUT_ICON_MARKUP:
        node.metadata[TRUSTED_MARKUP_KEY] = True
    node.source_location = _deserialize_position(data)
    return node


def dict_to_ast(data: dict[str, Any], strict_mode: bool = True) -> Node | None:
    """Convert a dictionary representation back to a node.

    Parameters
    ----------
    data : dict
        mdast-style dictionary
    strict_mode : bool, default True
        If True, raise ValueError on unknown node types.
        If False, drop unknown nodes with a warning.

    Returns
    -------
    Node or None
        Reconstructed node; None only when ``data`` itself has an unknown
        type and ``strict_mode`` is False

    Raises
    ------
    ValueError
        If the dictionary contains an unknown node type and strict_mode is True

    """
    return _deserialize(data, strict_mode, inline=data.get("type") not in ("root", *_BLOCK_TYPES))


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize a node to a JSON string with a schema version.

    Parameters
    ----------
    node : Node
        The node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON text; the root object carries ``"schema_version": 1``

    """
    versioned = {"schema_version": SCHEMA_VERSION, **ast_to_dict(node)}
    return json.dumps(versioned, indent=indent, ensure_ascii=False)


def json_to_ast(json_str: str, strict_mode: bool = True) -> Node:
    """Deserialize a JSON string to a node.

    Input without ``schema_version`` is accepted as version 1, so plain mdast
    JSON from other tools loads directly.

    Parameters
    ----------
    json_str : str
        JSON text
    strict_mode : bool, default True
        If True, raise ValueError on unknown node types; otherwise drop them

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    ValueError
        If the JSON is malformed, is not an object, has an unsupported schema
        version, or contains unknown node types in strict mode

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object at the top level, got {type(data).__name__}")

    schema_version = data.pop("schema_version", SCHEMA_VERSION)
    if schema_version != SCHEMA_VERSION:
        raise ValueError(
            f"Unsupported schema version: {schema_version}. Only schema version {SCHEMA_VERSION} is supported."
        )

    node = dict_to_ast(data, strict_mode=strict_mode)
    if node is None:
        raise ValueError(f"Unknown node type at the top level: {data.get('type')}")
    return node


__all__ = [
    "ast_to_dict",
    "dict_to_ast",
    "ast_to_json",
    "json_to_ast",
]
