#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/utils/__init__.py
"""Utility modules for the mdcallouts package."""

from mdcallouts.utils.html_utils import class_attribute, escape_html, merge_class_names
from mdcallouts.utils.text import make_unique_slug, slugify

__all__ = [
    "class_attribute",
    "escape_html",
    "merge_class_names",
    "slugify",
    "make_unique_slug",
]
