#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/transforms/_builtin_metadata.py
"""Metadata definitions for built-in transforms.

The registry registers these on first access. Callouts run before heading ids,
matching the order a documentation build applies them ahead of rendering.

"""

from __future__ import annotations

from mdcallouts.constants import DEFAULT_HEADING_ID_MAX_LENGTH
from mdcallouts.transforms.builtin import AddHeadingIdsTransform, CalloutTransform
from mdcallouts.transforms.metadata import ParameterSpec, TransformMetadata

CALLOUTS_METADATA = TransformMetadata(
    name="callouts",
    description="Rewrite '> [!TYPE]' block quotes into callouts with an icon and title",
    transformer_class=CalloutTransform,
    parameters={},
    priority=10,
    tags=["callouts", "blockquote"],
    version="1.0.0",
    author="mdcallouts",
)

ADD_HEADING_IDS_METADATA = TransformMetadata(
    name="heading-ids",
    description="Generate unique anchor ids for headings",
    transformer_class=AddHeadingIdsTransform,
    parameters={
        "id_prefix": ParameterSpec(type=str, default="", help="Prefix added to every generated id"),
        "separator": ParameterSpec(
            type=str,
            default="-",
            help="Separator for words and duplicate suffixes",
            validator=lambda value: len(value) == 1,
        ),
        "max_length": ParameterSpec(
            type=int,
            default=DEFAULT_HEADING_ID_MAX_LENGTH,
            help="Maximum slug length",
            validator=lambda value: value > 0,
        ),
    },
    priority=100,
    tags=["headings", "anchors"],
    version="1.0.0",
    author="mdcallouts",
)

BUILTIN_TRANSFORMS = (CALLOUTS_METADATA, ADD_HEADING_IDS_METADATA)
