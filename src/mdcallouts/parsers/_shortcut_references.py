#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/parsers/_shortcut_references.py
"""mistune plugin producing link-reference tokens for unresolved brackets.

CommonMark treats ``[label]`` as a shortcut reference link only when a
matching ``[label]: url`` definition exists; otherwise the brackets are plain
text and the distinction is lost. This plugin keeps it: bracketed text with
no destination and no definition becomes a ``link_reference`` token::

    {"type": "link_reference", "children": [...], "attrs": {"label": "!NOTE"}}

Defined references, ``[text](url)``, ``[text][ref]`` and footnote markers
(``[^1]``) are left to mistune's own rules.

"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional

from mistune.util import unikey

if TYPE_CHECKING:
    from mistune.core import InlineState
    from mistune.inline_parser import InlineParser
    from mistune.markdown import Markdown

__all__ = ["shortcut_reference"]

# Only the opening bracket is consumed; the label is checked by lookahead.
SHORTCUT_REFERENCE_PATTERN = r"\[(?!\^)(?=[^\[\]\n]+\](?![(\[]))"


def parse_shortcut_reference(inline: "InlineParser", m: re.Match[str], state: "InlineState") -> Optional[int]:
    pos = m.end()
    close = state.src.index("]", pos)
    label = state.src[pos:close]

    ref_links = state.env.get("ref_links") or {}
    if state.in_link or unikey(label) in ref_links:
        return inline.parse_link(m, state)

    new_state = state.copy()
    new_state.src = label
    new_state.in_link = True
    state.append_token(
        {
            "type": "link_reference",
            "children": inline.render(new_state),
            "attrs": {"label": label},
        }
    )
    return close + 1


def shortcut_reference(md: "Markdown") -> None:
    """Register the shortcut reference rule ahead of mistune's link rule.

    .. code-block:: python

        import mistune

        md = mistune.create_markdown(renderer=None, plugins=[shortcut_reference])
        tokens, state = md.parse("[!NOTE]\\nText")

    """
    md.inline.register("shortcut_reference", SHORTCUT_REFERENCE_PATTERN, parse_shortcut_reference, before="link")
