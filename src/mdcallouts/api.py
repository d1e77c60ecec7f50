"""The main exported API functions for callout-aware Markdown conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/mdcallouts/api.py
import logging
from dataclasses import fields
from pathlib import Path
from typing import IO, Any, Optional, Sequence, Union

import mdcallouts.transforms as transforms_module
from mdcallouts.ast.nodes import Document
from mdcallouts.ast.serialization import ast_to_json
from mdcallouts.ast.transforms import NodeTransformer
from mdcallouts.constants import OutputFormat
from mdcallouts.exceptions import MdCalloutsError, OutputWriteError, ParsingError, ValidationError
from mdcallouts.options.html import HtmlRendererOptions
from mdcallouts.options.markdown import MarkdownParserOptions
from mdcallouts.parsers.markdown import MarkdownToAstConverter
from mdcallouts.utils.io_utils import write_content

logger = logging.getLogger(__name__)

SourceType = Union[str, Path, IO[bytes], bytes]
TransformList = Optional[Sequence[Union[str, NodeTransformer]]]


def _split_kwargs_for_parser_and_renderer(kwargs: dict) -> tuple[dict, dict]:
    """Split kwargs between parser and renderer options based on their field names.

    Raises
    ------
    ValidationError
        If a keyword names neither a parser nor a renderer option

    """
    parser_fields = {f.name for f in fields(MarkdownParserOptions)}
    renderer_fields = {f.name for f in fields(HtmlRendererOptions)}

    parser_kwargs = {}
    renderer_kwargs = {}
    for key, value in kwargs.items():
        if key in parser_fields:
            parser_kwargs[key] = value
        elif key in renderer_fields:
            renderer_kwargs[key] = value
        else:
            raise ValidationError(f"Unknown option: {key}", parameter_name=key, parameter_value=value)

    return parser_kwargs, renderer_kwargs


def _merge_options(options: Any, options_class: type, overrides: dict) -> Any:
    """Apply keyword overrides on top of an options object (or the defaults)."""
    if not overrides:
        return options
    try:
        if options is not None:
            return options.create_updated(**overrides)
        return options_class(**overrides)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {options_class.__name__}: {e}", original_error=e) from e


def to_ast(
    source: SourceType,
    *,
    parser_options: Optional[MarkdownParserOptions] = None,
    **kwargs: Any,
) -> Document:
    """Parse Markdown into a document tree, without applying transforms.

    Parameters
    ----------
    source : str, Path, IO[bytes], or bytes
        Markdown text, a path to a Markdown file, a binary stream or raw bytes
    parser_options : MarkdownParserOptions, optional
        Pre-configured parser options
    kwargs : Any
        Individual parser options that override settings in parser_options

    Returns
    -------
    Document
        Document tree; ``[!TYPE]`` markers are still plain link references

    Raises
    ------
    ParsingError
        If parsing fails
    FileNotFoundError
        If a Path source does not exist

    Examples
    --------
    Inspect the tree before transforming it:
        >>> doc = to_ast("> [!NOTE]\\n> Read this.")
        >>> from mdcallouts.transforms import transform_callouts
        >>> callout_doc = transform_callouts(doc)

    Serialize to JSON:
        >>> from mdcallouts.ast import ast_to_json
        >>> json_str = ast_to_json(to_ast("guide.md"), indent=2)

    """
    final_options = _merge_options(parser_options, MarkdownParserOptions, kwargs)
    parser = MarkdownToAstConverter(final_options)

    try:
        return parser.parse(source)
    except MdCalloutsError:
        raise
    except Exception as e:
        raise ParsingError(f"Markdown parsing failed: {e!r}", parsing_stage="ast_conversion", original_error=e) from e


def to_html(
    source: SourceType,
    *,
    transforms: TransformList = None,
    parser_options: Optional[MarkdownParserOptions] = None,
    renderer_options: Optional[HtmlRendererOptions] = None,
    transform_options: Optional[dict[str, dict[str, Any]]] = None,
    **kwargs: Any,
) -> str:
    """Convert Markdown to HTML, rewriting callouts on the way.

    Parameters
    ----------
    source : str, Path, IO[bytes], or bytes
        Markdown source
    transforms : sequence of str or NodeTransformer, optional
        Transforms to apply. None selects the default pipeline
        (``["callouts", "heading-ids"]``); pass ``[]`` to apply none.
    parser_options : MarkdownParserOptions, optional
        Options for parsing
    renderer_options : HtmlRendererOptions, optional
        Options for HTML rendering
    transform_options : dict, optional
        Constructor parameters per transform name
    kwargs : Any
        Individual options, split between parser and renderer by name

    Returns
    -------
    str
        Rendered HTML

    Examples
    --------
        >>> html = to_html("> [!WARNING]\\n> Back up first.")
        >>> '<blockquote class="callout callout-warning">' in html
        True
        >>> page = to_html("guide.md", standalone=True, title="Guide")

    """
    parser_kwargs, renderer_kwargs = _split_kwargs_for_parser_and_renderer(kwargs)
    document = to_ast(source, parser_options=_merge_options(parser_options, MarkdownParserOptions, parser_kwargs))
    final_renderer_options = _merge_options(renderer_options, HtmlRendererOptions, renderer_kwargs)

    return transforms_module.render(
        document,
        transforms=transforms,
        options=final_renderer_options,
        transform_options=transform_options,
    )


def convert(
    source: SourceType,
    output: Union[str, Path, IO[bytes], IO[str], None] = None,
    *,
    output_format: OutputFormat = "html",
    transforms: TransformList = None,
    parser_options: Optional[MarkdownParserOptions] = None,
    renderer_options: Optional[HtmlRendererOptions] = None,
    transform_options: Optional[dict[str, dict[str, Any]]] = None,
    json_indent: Optional[int] = 2,
    **kwargs: Any,
) -> Optional[str]:
    """Convert Markdown to HTML or to the JSON tree, optionally writing it out.

    Parameters
    ----------
    source : str, Path, IO[bytes], or bytes
        Markdown source
    output : str, Path, IO[bytes], IO[str], or None, optional
        Output destination. If None, the rendered content is returned.
    output_format : {"html", "json"}, default "html"
        ``html`` renders the transformed tree; ``json`` serializes it
    transforms : sequence of str or NodeTransformer, optional
        Transforms to apply; None selects the default pipeline
    parser_options : MarkdownParserOptions, optional
        Options for parsing
    renderer_options : HtmlRendererOptions, optional
        Options for HTML rendering (ignored for JSON)
    transform_options : dict, optional
        Constructor parameters per transform name
    json_indent : int or None, default 2
        Indentation for JSON output
    kwargs : Any
        Individual options, split between parser and renderer by name

    Returns
    -------
    str or None
        The rendered content when ``output`` is None, otherwise None

    Raises
    ------
    ValidationError
        If ``output_format`` is not supported
    OutputWriteError
        If the output file cannot be written

    Examples
    --------
        >>> convert("guide.md", "guide.html", standalone=True)
        >>> tree_json = convert("guide.md", output_format="json")

    """
    if output_format not in ("html", "json"):
        raise ValidationError(
            f"Unsupported output format: {output_format}", parameter_name="output_format", parameter_value=output_format
        )

    parser_kwargs, renderer_kwargs = _split_kwargs_for_parser_and_renderer(kwargs)
    document = to_ast(source, parser_options=_merge_options(parser_options, MarkdownParserOptions, parser_kwargs))

    if output_format == "json":
        transformed = transforms_module.apply(document, transforms=transforms, transform_options=transform_options)
        rendered = ast_to_json(transformed, indent=json_indent)
    else:
        rendered = transforms_module.render(
            document,
            transforms=transforms,
            options=_merge_options(renderer_options, HtmlRendererOptions, renderer_kwargs),
            transform_options=transform_options,
        )

    try:
        result = write_content(rendered, output)
    except OSError as e:
        raise OutputWriteError(str(output), original_error=e) from e

    if result is not None:
        return result.getvalue()
    logger.debug("Wrote %s output to %s", output_format, output)
    return None


__all__ = [
    "to_ast",
    "to_html",
    "convert",
]
