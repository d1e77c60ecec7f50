"""HTML-related utility helpers."""

from __future__ import annotations

from html import escape as _html_escape
from typing import Iterable


def escape_html(text: str, *, enabled: bool = True) -> str:
    """Escape HTML special characters when enabled."""
    if not enabled:
        return text
    return _html_escape(text)


def merge_class_names(*groups: Iterable[str] | None) -> list[str]:
    """Concatenate class name groups, dropping blanks and repeats.

    Order is kept: the first occurrence of a class wins.

    >>> merge_class_names(["callout", "callout-note"], None, ["callout"])
    ['callout', 'callout-note']

    """
    merged: list[str] = []
    for group in groups:
        for name in group or ():
            for part in str(name).split():
                if part not in merged:
                    merged.append(part)
    return merged


def class_attribute(classes: Iterable[str] | None) -> str:
    """Render a ``class`` attribute (with its leading space), or ``""``."""
    names = merge_class_names(classes)
    if not names:
        return ""
    return f' class="{_html_escape(" ".join(names))}"'
