#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/options/markdown.py
"""Configuration options for Markdown parsing."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field

from mdcallouts.constants import (
    DEFAULT_INPUT_ENCODING,
    DEFAULT_PARSE_FRONTMATTER,
    DEFAULT_PARSE_SHORTCUT_REFERENCES,
    DEFAULT_PARSE_STRIKETHROUGH,
)
from mdcallouts.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-tree parsing.

    Parameters
    ----------
    parse_frontmatter : bool, default True
        Strip YAML (``---``), TOML (``+++``) or JSON front matter from the
        top of the document and store it in ``Document.metadata``.
    parse_strikethrough : bool, default True
        Whether to parse strikethrough syntax (``~~text~~``).
    parse_shortcut_references : bool, default True
        Produce LinkReference nodes for bracketed text with no destination
        and no matching definition. Callout markers (``[!NOTE]``) are only
        recognized when this is enabled.
    encoding : str, default "utf-8"
        Encoding used to decode bytes and file input.

    """

    parse_frontmatter: bool = field(
        default=DEFAULT_PARSE_FRONTMATTER,
        metadata={"help": "Extract YAML/TOML/JSON front matter into document metadata"},
    )
    parse_strikethrough: bool = field(
        default=DEFAULT_PARSE_STRIKETHROUGH,
        metadata={"help": "Parse strikethrough syntax (~~text~~)"},
    )
    parse_shortcut_references: bool = field(
        default=DEFAULT_PARSE_SHORTCUT_REFERENCES,
        metadata={"help": "Turn unresolved [label] text into link reference nodes"},
    )
    encoding: str = field(
        default=DEFAULT_INPUT_ENCODING,
        metadata={"help": "Encoding for bytes and file input"},
    )

    def __post_init__(self) -> None:
        """Validate the encoding name.

        Raises
        ------
        ValueError
            If the encoding is not known to Python

        """
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {self.encoding}") from e
