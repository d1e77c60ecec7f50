#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/renderers/base.py
"""Renderer interface and the inline buffering helper.

A renderer reads a finished ``Document`` and writes some output format. It
never changes the tree: callout classes and heading ids are already in node
metadata by the time a renderer runs.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from mdcallouts.ast.nodes import Document, Node
from mdcallouts.exceptions import InvalidOptionsError
from mdcallouts.options.base import BaseRendererOptions
from mdcallouts.utils.io_utils import write_content


class BaseRenderer(ABC):
    """Common base for output formats.

    Subclasses implement ``render`` and, when the format is text,
    ``render_to_string``:

        >>> class PlainTextRenderer(BaseRenderer):
        ...     def render_to_string(self, doc):
        ...         return extract_text(doc, joiner="\\n")
        ...
        ...     def render(self, doc, output):
        ...         self.write_text_output(self.render_to_string(doc), output)

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Settings for the concrete renderer

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        self.options = options

    @abstractmethod
    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write ``doc`` to a path or an open stream.

        Raises
        ------
        RenderingError
            The tree could not be turned into output
        OutputWriteError
            The destination could not be written

        """

    def render_to_string(self, doc: Document) -> str:
        """Return the rendered document; binary formats leave this unimplemented."""
        raise NotImplementedError(f"{self.__class__.__name__} does not support rendering to a string.")

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        # same check as BaseParser, reported under the renderer's name
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Send ``text`` to ``output``; binary streams get it UTF-8 encoded.

        Raises
        ------
        OSError
            From the file system
        TypeError
            For a destination that is neither a path nor writable

        """
        write_content(text, output)


class InlineContentMixin:
    """Render a run of inline nodes into a string instead of the main buffer.

    Visitors using this append their markup to ``self._output``; the mixin
    swaps in an empty list while the run is rendered and restores the
    original afterwards, so nested inline containers compose.
    """

    _output: list[str]

    def _render_inline_content(self, content: list[Node]) -> str:
        outer, self._output = self._output, []
        try:
            for node in content:
                node.accept(self)
            return "".join(self._output)
        finally:
            self._output = outer


__all__ = ["BaseRenderer", "InlineContentMixin"]
