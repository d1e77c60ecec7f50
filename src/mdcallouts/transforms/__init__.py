#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/transforms/__init__.py
"""Transform system for document tree manipulation.

This package provides the named transforms applied between parsing and
rendering. It includes:

- Built-in transforms (callouts, heading ids)
- Metadata classes for transform description
- Transform registry with entry point discovery
- Pipeline helpers to apply transforms and render

Examples
--------
Use the default pipeline:

    >>> from mdcallouts import to_ast
    >>> from mdcallouts.transforms import render
    >>> html = render(to_ast("guide.md"))

Use a transform instance with parameters:

    >>> from mdcallouts.transforms import AddHeadingIdsTransform, CalloutTransform
    >>> html = render(doc, transforms=[CalloutTransform(), AddHeadingIdsTransform(id_prefix="doc-")])

Register a custom transform:

    >>> from mdcallouts.transforms import transform_registry, TransformMetadata
    >>> from mdcallouts.ast.transforms import NodeTransformer
    >>>
    >>> class MyTransform(NodeTransformer):
    ...     pass
    >>>
    >>> transform_registry.register(TransformMetadata(
    ...     name="my-transform",
    ...     description="My custom transform",
    ...     transformer_class=MyTransform,
    ... ))

"""

from mdcallouts.transforms.builtin import (
    AddHeadingIdsTransform,
    CalloutTransform,
    build_callout_title,
    match_callout_marker,
    transform_callouts,
)
from mdcallouts.transforms.metadata import ParameterSpec, TransformMetadata
from mdcallouts.transforms.pipeline import Pipeline, apply, render
from mdcallouts.transforms.registry import TransformRegistry, transform_registry

__all__ = [
    # Built-in transforms
    "CalloutTransform",
    "AddHeadingIdsTransform",
    "build_callout_title",
    "match_callout_marker",
    "transform_callouts",
    # Metadata
    "ParameterSpec",
    "TransformMetadata",
    # Registry
    "TransformRegistry",
    "transform_registry",
    # Pipeline
    "Pipeline",
    "apply",
    "render",
]
