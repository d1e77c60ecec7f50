#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/transforms/pipeline.py
"""Pipeline orchestration for tree transformation and rendering.

The pipeline resolves transform names through the registry, applies the
transforms in priority order and renders the result. The default pipeline is
``["callouts", "heading-ids"]``: callouts are rewritten before anything is
rendered.

Examples
--------
Default rendering:

    >>> from mdcallouts import to_ast
    >>> from mdcallouts.transforms import render
    >>> html = render(to_ast("guide.md"))

Tree-only processing:

    >>> doc = apply(to_ast("guide.md"), transforms=["callouts"])

With parameters for a named transform:

    >>> pipeline = Pipeline(
    ...     transforms=["callouts", "heading-ids"],
    ...     transform_options={"heading-ids": {"id_prefix": "doc-"}},
    ... )
    >>> html = pipeline.execute(doc)

"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional, Sequence, Union

from mdcallouts.ast.nodes import Document
from mdcallouts.ast.transforms import NodeTransformer
from mdcallouts.constants import DEFAULT_TRANSFORMS
from mdcallouts.exceptions import TransformError
from mdcallouts.options.html import HtmlRendererOptions
from mdcallouts.renderers.base import BaseRenderer
from mdcallouts.renderers.html import HtmlRenderer
from mdcallouts.transforms.registry import transform_registry

logger = logging.getLogger(__name__)

TransformSpec = Union[str, NodeTransformer]


class Pipeline:
    """Pipeline for transforming and rendering documents.

    Parameters
    ----------
    transforms : sequence of str or NodeTransformer, optional
        Transforms to apply. Names are resolved via the transform registry.
        None selects the default pipeline; an empty list applies nothing.
    renderer : BaseRenderer, renderer class, False, or None
        - instance: Pre-configured renderer to use
        - class: Renderer class, instantiated with ``options``
        - False: No renderer (tree-only processing)
        - None: HtmlRenderer (default)
    options : HtmlRendererOptions, optional
        Options for the renderer (ignored if renderer is an instance)
    transform_options : dict, optional
        Constructor parameters per transform name

    Examples
    --------
        >>> pipeline = Pipeline(options=HtmlRendererOptions(standalone=True))
        >>> html = pipeline.execute(document)
        >>> pipeline.get_diagnostics()["transforms"][0]["name"]
        'CalloutTransform'

    """

    def __init__(
        self,
        transforms: Optional[Sequence[TransformSpec]] = None,
        renderer: Optional[Union[BaseRenderer, type, bool]] = None,
        options: Optional[HtmlRendererOptions] = None,
        transform_options: Optional[dict[str, dict[str, Any]]] = None,
    ):
        """Initialize pipeline with transforms, renderer, and options."""
        self.transforms: list[TransformSpec] = list(DEFAULT_TRANSFORMS if transforms is None else transforms)
        self.transform_options = transform_options or {}
        self.registry = transform_registry
        self.options = options
        self._timings: list[dict[str, Any]] = []

        if renderer is False:
            self.renderer: Optional[BaseRenderer] = None
        else:
            self.renderer = self._setup_renderer(renderer, options)

    @staticmethod
    def _setup_renderer(renderer: Any, options: Optional[HtmlRendererOptions]) -> BaseRenderer:
        """Set up the renderer instance."""
        if renderer is None:
            return HtmlRenderer(options)
        if isinstance(renderer, type):
            return renderer(options)
        return renderer

    def _resolve_transforms(self) -> list[NodeTransformer]:
        """Resolve transform names and instances into an ordered list.

        Raises
        ------
        TransformError
            If a name is not registered or its parameters are invalid
        TypeError
            If an entry is neither a name nor a NodeTransformer

        """
        try:
            return self.registry.resolve_transforms(self.transforms, self.transform_options)
        except KeyError as e:
            raise TransformError(str(e.args[0]) if e.args else str(e), original_error=e) from e
        except ValueError as e:
            raise TransformError(f"Invalid transform parameters: {e}", original_error=e) from e

    def apply_transforms(self, document: Document) -> Document:
        """Apply all transforms in order and return the new document.

        Raises
        ------
        TransformError
            If a transform fails or does not return a Document

        """
        result = document
        transforms = self._resolve_transforms()
        self._timings = []

        logger.debug("Applying %d transform(s)", len(transforms))

        for transformer in transforms:
            name = transformer.__class__.__name__
            started = time.perf_counter()
            try:
                transformed = transformer.transform(result)
            except Exception as e:
                logger.error("Transform %s failed: %s", name, e)
                raise TransformError(f"Transform {name} failed: {e}", transform_name=name, original_error=e) from e

            if not isinstance(transformed, Document):
                raise TransformError(
                    f"Transform {name} must return Document, got {type(transformed).__name__}",
                    transform_name=name,
                )

            elapsed = time.perf_counter() - started
            self._timings.append({"name": name, "seconds": elapsed})
            logger.debug("Transform %s finished in %.4fs", name, elapsed)
            result = transformed

        return result

    def get_diagnostics(self) -> dict[str, Any]:
        """Get diagnostic information about the pipeline.

        Returns
        -------
        dict[str, Any]
            Dictionary containing:
            - transforms: transform class names and modules in execution order
            - timings: per-transform wall time of the last run
            - renderer: renderer class name and module, or None
            - options: renderer options class name, or None

        """
        diagnostics: dict[str, Any] = {}

        try:
            diagnostics["transforms"] = [
                {"name": t.__class__.__name__, "module": t.__class__.__module__} for t in self._resolve_transforms()
            ]
        except (TransformError, TypeError) as e:
            diagnostics["transforms"] = f"Error resolving transforms: {e}"

        diagnostics["timings"] = list(self._timings)

        if self.renderer is not None:
            diagnostics["renderer"] = {
                "class": self.renderer.__class__.__name__,
                "module": self.renderer.__class__.__module__,
            }
        else:
            diagnostics["renderer"] = None

        render_options = getattr(self.renderer, "options", None) or self.options
        diagnostics["options"] = render_options.__class__.__name__ if render_options is not None else None

        return diagnostics

    def execute(self, document: Document) -> str:
        """Apply the transforms, then render.

        Returns
        -------
        str
            Rendered output

        Raises
        ------
        RuntimeError
            If the pipeline was created with ``renderer=False``
        TransformError
            If a transform fails
        RenderingError
            If rendering fails

        """
        if self.renderer is None:
            raise RuntimeError(
                "No renderer configured. This Pipeline was created with renderer=False; use apply() instead."
            )

        logger.info("Starting pipeline execution")
        document = self.apply_transforms(document)

        logger.debug("Rendering document using %s", self.renderer.__class__.__name__)
        output = self.renderer.render_to_string(document)

        logger.info("Pipeline execution complete")
        return output


def apply(
    document: Document,
    transforms: Optional[Sequence[TransformSpec]] = None,
    transform_options: Optional[dict[str, dict[str, Any]]] = None,
) -> Document:
    """Apply transforms to a document without rendering.

    Parameters
    ----------
    document : Document
        Document to process
    transforms : sequence of str or NodeTransformer, optional
        Transforms to apply; None selects the default pipeline
    transform_options : dict, optional
        Constructor parameters per transform name

    Returns
    -------
    Document
        New document with the transforms applied

    Raises
    ------
    TransformError
        If a transform is unknown or fails

    Examples
    --------
        >>> processed = apply(doc, transforms=["callouts"])
        >>> processed is doc
        False

    """
    pipeline = Pipeline(transforms=transforms, renderer=False, transform_options=transform_options)
    return pipeline.apply_transforms(document)


def render(
    document: Document,
    transforms: Optional[Sequence[TransformSpec]] = None,
    options: Optional[HtmlRendererOptions] = None,
    renderer: Optional[Union[BaseRenderer, type]] = None,
    transform_options: Optional[dict[str, dict[str, Any]]] = None,
) -> str:
    """Apply transforms and render the document to HTML.

    Parameters
    ----------
    document : Document
        Document to render
    transforms : sequence of str or NodeTransformer, optional
        Transforms to apply; None selects the default pipeline
    options : HtmlRendererOptions, optional
        HTML rendering options
    renderer : BaseRenderer or renderer class, optional
        Renderer to use instead of HtmlRenderer
    transform_options : dict, optional
        Constructor parameters per transform name

    Returns
    -------
    str
        Rendered output

    Examples
    --------
        >>> html = render(doc)
        >>> html = render(doc, transforms=[], options=HtmlRendererOptions(standalone=True))

    """
    pipeline = Pipeline(
        transforms=transforms,
        renderer=renderer,
        options=options,
        transform_options=transform_options,
    )
    return pipeline.execute(document)


__all__ = [
    "Pipeline",
    "apply",
    "render",
]
