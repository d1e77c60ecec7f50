"""mdcallouts - GitHub-style callouts for Markdown documents.

mdcallouts parses Markdown into a document tree, rewrites block quotes that
open with a ``[!TYPE]`` marker into tagged callouts (an icon, a title and the
remaining body), and renders the result to HTML. The recognized types are
``note``, ``tip``, ``important``, ``warning`` and ``caution``; the marker is
matched case-insensitively.

Every other block quote, and every other node, passes through unchanged.

Examples
--------
Convert a Markdown string:

    >>> from mdcallouts import to_html
    >>> html = to_html("> [!TIP]\\n> Use the cache.")
    >>> 'class="callout callout-tip"' in html
    True

Work with the tree directly:

    >>> from mdcallouts import to_ast
    >>> from mdcallouts.transforms import render
    >>>
    >>> doc = to_ast("guide.md")
    >>> html = render(doc, transforms=["callouts"])

Write a standalone page:

    >>> from mdcallouts import convert
    >>> convert("guide.md", "guide.html", standalone=True, title="Guide")

See Also
--------
mdcallouts.transforms : Transform system and the callout rewrite
mdcallouts.ast : Document tree definitions and utilities

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "mdcallouts requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from mdcallouts.api import convert, to_ast, to_html  # noqa: E402
from mdcallouts.exceptions import (  # noqa: E402
    MdCalloutsError,
    ParsingError,
    RenderingError,
    TransformError,
    ValidationError,
)
from mdcallouts.options.html import HtmlRendererOptions  # noqa: E402
from mdcallouts.options.markdown import MarkdownParserOptions  # noqa: E402

__all__ = [
    "__version__",
    "to_ast",
    "to_html",
    "convert",
    "MarkdownParserOptions",
    "HtmlRendererOptions",
    "MdCalloutsError",
    "ParsingError",
    "RenderingError",
    "TransformError",
    "ValidationError",
]
