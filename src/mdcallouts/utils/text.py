#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/utils/text.py
"""Slug generation for heading anchors.

Slugs follow github-slugger, the library behind ``rehype-slug``: lower-cased,
punctuation removed, each space turned into a hyphen. Surrounding whitespace
is kept as hyphens and an empty heading yields an empty slug. Repeated slugs
in one document get ``-1``, ``-2``, ... suffixes.

Examples
--------
    >>> slugify("Getting Started")
    'getting-started'
    >>> occurrences = {}
    >>> make_unique_slug("intro", occurrences), make_unique_slug("intro", occurrences)
    ('intro', 'intro-1')

"""

from __future__ import annotations

import re
import unicodedata
from typing import Dict

from mdcallouts.constants import DEFAULT_HEADING_ID_MAX_LENGTH

_PUNCTUATION = re.compile(r"[^\w\- ]", re.UNICODE)


def slugify(text: str, *, max_length: int = DEFAULT_HEADING_ID_MAX_LENGTH, separator: str = "-") -> str:
    """Create a URL-safe slug from heading text.

    Parameters
    ----------
    text : str
        Text to slugify
    max_length : int, default = 100
        Maximum slug length; longer slugs are truncated
    separator : str, default = "-"
        Replacement for each space

    Returns
    -------
    str
        The slug, possibly empty

    Examples
    --------
    >>> slugify("API Reference (v2.0)")
    'api-reference-v20'
    >>> slugify("Café")
    'café'

    """
    slug = unicodedata.normalize("NFC", text).lower()
    slug = _PUNCTUATION.sub("", slug)
    slug = slug.replace(" ", separator)

    if len(slug) > max_length:
        slug = slug[:max_length].rstrip(separator)

    return slug


def make_unique_slug(slug: str, occurrences: Dict[str, int], separator: str = "-") -> str:
    """Return ``slug`` or the next free numbered variant of it.

    ``occurrences`` maps every slug handed out so far to the last suffix used
    for it, and is updated in place. A heading literally titled "Intro 1"
    cannot collide with a generated ``intro-1``: the counter keeps climbing
    until the candidate is free.

    Parameters
    ----------
    slug : str
        Base slug
    occurrences : dict of str to int
        Slug counters for the current document (mutated)
    separator : str, default = "-"
        Separator placed before the numeric suffix

    Returns
    -------
    str
        Unique slug

    """
    candidate = slug
    while candidate in occurrences:
        occurrences[slug] += 1
        candidate = f"{slug}{separator}{occurrences[slug]}"
    occurrences[candidate] = 0
    return candidate


__all__ = [
    "slugify",
    "make_unique_slug",
]
