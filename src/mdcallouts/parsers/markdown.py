#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/parsers/markdown.py
"""Markdown reader built on mistune's token output.

mistune runs with ``renderer=None`` so it hands back plain token dicts, and
``MarkdownToAstConverter`` maps each one onto an ``mdcallouts.ast`` node.
Two details matter to the callout rewrite downstream:

- ``[!NOTE]`` with no destination arrives as a ``link_reference`` token and
  becomes ``LinkReference(identifier="!note", label="!NOTE")``
- a soft break is stored as ``"\\n"`` and merged into neighbouring text, so
  the marker line and the body of a quote sit in one paragraph as
  ``[LinkReference, Text("\\nBody")]``

Front matter is read before mistune sees the text: ``---`` fences hold YAML,
``+++`` fences hold TOML and a leading ``{...}`` object is JSON.

"""

from __future__ import annotations

import json
import logging
import re
import sys
from functools import partial
from pathlib import Path
from typing import IO, Any, Callable, Literal, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import mistune
import yaml

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
    Strikethrough,
    Strong,
    Text,
    ThematicBreak,
    normalize_identifier,
)
from mdcallouts.exceptions import ParsingError
from mdcallouts.options.markdown import MarkdownParserOptions
from mdcallouts.parsers._shortcut_references import shortcut_reference
from mdcallouts.parsers.base import BaseParser

logger = logging.getLogger(__name__)

Token = dict[str, Any]

# Leading part of a fence info word that is safe in a class attribute
_LANGUAGE_PATTERN = re.compile(r"[\w+#.-]+")


def _attrs(token: Token) -> dict[str, Any]:
    attrs = token.get("attrs")
    return attrs if isinstance(attrs, dict) else {}


def _children(token: Token) -> list[Token]:
    children = token.get("children")
    if not isinstance(children, list):
        return []
    return [child for child in children if isinstance(child, dict)]


def _load_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ParsingError(f"Invalid YAML front matter: {e}", parsing_stage="frontmatter", original_error=e) from e


def _load_toml(text: str) -> Any:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ParsingError(f"Invalid TOML front matter: {e}", parsing_stage="frontmatter", original_error=e) from e


_FENCED_FRONT_MATTER: tuple[tuple[str, Callable[[str], Any]], ...] = (
    ("---", _load_yaml),
    ("+++", _load_toml),
)


def _split_fenced_block(content: str, fence: str) -> tuple[str, str] | None:
    """Return ``(inside, after)`` when ``content`` opens with a closed ``fence`` block."""
    first_line, _, _ = content.partition("\n")
    if first_line.rstrip("\r") != fence:
        return None

    lines = content.splitlines(keepends=True)
    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == fence:
            return "".join(lines[1:index]), "".join(lines[index + 1 :])
    return None


def _split_json_object(content: str) -> tuple[Any, str] | None:
    if not content.startswith("{"):
        return None
    try:
        data, end = json.JSONDecoder().raw_decode(content)
    except json.JSONDecodeError:
        logger.debug("Leading '{' is not JSON front matter; treating it as content")
        return None
    if not isinstance(data, dict):
        return None
    return data, content[end:].lstrip()


def _front_matter_metadata(data: Any) -> dict[str, Any]:
    """Document metadata from a parsed front matter value.

    Non-mappings give no metadata. ``lang`` also fills ``language`` unless
    that key is present.
    """
    if not isinstance(data, dict):
        return {}
    metadata = {str(key): value for key, value in data.items()}
    if "lang" in metadata:
        metadata.setdefault("language", str(metadata["lang"]))
    return metadata


class MarkdownToAstConverter(BaseParser):
    r"""Parse Markdown into a ``Document``.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Plugins, front matter handling and input encoding

    Examples
    --------
        >>> doc = MarkdownToAstConverter().parse("> [!TIP]\n> Use shortcuts.")
        >>> doc.children[0].children[0].content[0].identifier
        '!tip'

    Keeping brackets as text:

        >>> options = MarkdownParserOptions(parse_shortcut_references=False)
        >>> MarkdownToAstConverter(options).parse("[!TIP]").children[0].content[0].content
        '[!TIP]'

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options

        self._block_builders: dict[str, Callable[[Token], Node]] = {
            "heading": self._heading,
            "paragraph": self._paragraph,
            # tight list items hold block_text instead of paragraphs
            "block_text": self._paragraph,
            "block_code": self._code_block,
            "block_quote": lambda token: BlockQuote(children=self._blocks(_children(token))),
            "list": self._list,
            "thematic_break": lambda token: ThematicBreak(),
            "block_html": lambda token: HTMLBlock(content=token.get("raw", "")),
        }
        self._inline_builders: dict[str, Callable[[Token], Node]] = {
            "text": lambda token: Text(content=token.get("raw", "")),
            "softbreak": lambda token: Text(content="\n"),
            "linebreak": lambda token: LineBreak(),
            "strong": partial(self._wrapper, Strong),
            "emphasis": partial(self._wrapper, Emphasis),
            "strikethrough": partial(self._wrapper, Strikethrough),
            "codespan": lambda token: Code(content=token.get("raw", "")),
            "link": self._link,
            "link_reference": self._link_reference,
            "image": self._image,
            "inline_html": lambda token: HTMLInline(content=token.get("raw", "")),
        }

    def _markdown(self) -> mistune.Markdown:
        plugins: list[Any] = ["task_lists"]
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_shortcut_references:
            plugins.append(shortcut_reference)
        return mistune.create_markdown(renderer=None, plugins=plugins)

    def parse(self, input_data: Union[str, Path, IO[bytes], bytes]) -> Document:
        """Read, split off front matter and convert.

        Parameters
        ----------
        input_data : str, Path, IO[bytes] or bytes
            Markdown text, a path to a Markdown file (as ``Path`` or as a
            string naming an existing file), a binary stream or raw bytes

        Returns
        -------
        Document
            Converted tree with front matter in ``metadata``

        Raises
        ------
        ParsingError
            Undecodable input, malformed front matter or a mistune failure
        FileNotFoundError
            A ``Path`` input that does not exist

        """
        text = self._load_text_content(input_data, self.options.encoding)
        text, metadata = self._split_front_matter(text)

        try:
            tokens, _state = self._markdown().parse(text)
        except (RecursionError, ValueError, IndexError) as e:
            raise ParsingError(f"Failed to parse Markdown: {e}", parsing_stage="markdown", original_error=e) from e

        children = self._blocks(tokens) if isinstance(tokens, list) else []
        logger.debug("Parsed Markdown into %d top-level node(s)", len(children))
        return Document(children=children, metadata=metadata)

    def _split_front_matter(self, text: str) -> tuple[str, dict[str, Any]]:
        if not self.options.parse_frontmatter:
            return text, {}

        data: Any = None
        found = False
        for fence, load in _FENCED_FRONT_MATTER:
            block = _split_fenced_block(text, fence)
            if block is not None:
                raw, text = block
                data, found = load(raw), True
                break
        else:
            json_block = _split_json_object(text)
            if json_block is not None:
                data, text = json_block
                found = True

        if not found:
            return text, {}
        metadata = _front_matter_metadata(data)
        logger.debug("Extracted front matter keys: %s", ", ".join(sorted(metadata)))
        return text, metadata

    # Blocks

    def _blocks(self, tokens: list[Token]) -> list[Node]:
        nodes: list[Node] = []
        for token in tokens:
            kind = token.get("type", "")
            builder = self._block_builders.get(kind)
            if builder is not None:
                nodes.append(builder(token))
            elif kind != "blank_line":
                logger.debug("Skipping unsupported block token: %s", kind)
        return nodes

    def _heading(self, token: Token) -> Heading:
        level = _attrs(token).get("level", 1)
        if not isinstance(level, int) or not 1 <= level <= 6:
            level = 1
        return Heading(level=level, content=self._inlines(_children(token)))

    def _paragraph(self, token: Token) -> Paragraph:
        return Paragraph(content=self._inlines(_children(token)))

    def _code_block(self, token: Token) -> CodeBlock:
        """Fenced or indented code.

        The full info string is kept as ``metadata["info_string"]``; the
        language is the safe leading part of its first word.
        """
        info = (_attrs(token).get("info") or "").strip()
        if not info:
            return CodeBlock(content=token.get("raw", ""))

        match = _LANGUAGE_PATTERN.match(info.split(maxsplit=1)[0])
        return CodeBlock(
            content=token.get("raw", ""),
            language=match.group(0) if match else None,
            metadata={"info_string": info},
        )

    def _list(self, token: Token) -> List:
        attrs = _attrs(token)
        return List(
            ordered=bool(attrs.get("ordered", False)),
            items=[self._list_item(child) for child in _children(token)],
            start=attrs.get("start", 1),
            tight=bool(token.get("tight", attrs.get("tight", True))),
        )

    def _list_item(self, token: Token) -> ListItem:
        task_status: Literal["checked", "unchecked"] | None = None
        attrs = _attrs(token)
        if token.get("type") == "task_list_item" and "checked" in attrs:
            task_status = "checked" if attrs["checked"] else "unchecked"
        return ListItem(children=self._blocks(_children(token)), task_status=task_status)

    # Inlines

    def _inlines(self, tokens: list[Token]) -> list[Node]:
        """Convert inline tokens, joining consecutive text into one node."""
        nodes: list[Node] = []
        for token in tokens:
            kind = token.get("type", "")
            builder = self._inline_builders.get(kind)
            if builder is None:
                logger.debug("Skipping unsupported inline token: %s", kind)
                continue

            node = builder(token)
            if isinstance(node, Text) and nodes and isinstance(nodes[-1], Text):
                nodes[-1] = Text(content=nodes[-1].content + node.content)
            else:
                nodes.append(node)
        return nodes

    def _wrapper(self, node_type: type[Strong] | type[Emphasis] | type[Strikethrough], token: Token) -> Node:
        return node_type(content=self._inlines(_children(token)))

    def _link(self, token: Token) -> Link:
        attrs = _attrs(token)
        return Link(url=attrs.get("url", ""), content=self._inlines(_children(token)), title=attrs.get("title"))

    def _link_reference(self, token: Token) -> LinkReference:
        label = _attrs(token).get("label", "")
        return LinkReference(
            identifier=normalize_identifier(label),
            label=label,
            content=self._inlines(_children(token)),
        )

    def _image(self, token: Token) -> Image:
        # alt text is the plain text of the description
        attrs = _attrs(token)
        alt_text = "".join(child.get("raw", "") for child in _children(token) if child.get("type") == "text")
        return Image(url=attrs.get("url", ""), alt_text=alt_text, title=attrs.get("title"))


def markdown_to_ast(markdown_content: str, options: MarkdownParserOptions | None = None) -> Document:
    r"""Parse a Markdown string with a one-off converter.

    Examples
    --------
    >>> len(markdown_to_ast("# Hello\n\nWorld").children)
    2

    """
    return MarkdownToAstConverter(options).parse(markdown_content)


__all__ = ["MarkdownToAstConverter", "markdown_to_ast"]
