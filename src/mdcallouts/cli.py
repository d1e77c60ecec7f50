#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/cli.py
"""Command-line interface for mdcallouts.

Converts Markdown files to HTML (or to the JSON document tree) with callouts
rewritten::

    mdcallouts guide.md --out guide.html --standalone
    mdcallouts docs/ --output-dir site/ --transform heading-ids:id_prefix=doc-
    mdcallouts notes.md --format json --no-callouts

Settings are read from a configuration file first (see
``mdcallouts.cli_config``); command-line flags override them.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

from mdcallouts import __version__
from mdcallouts.api import convert
from mdcallouts.cli_config import load_config_with_priority, merge_configs
from mdcallouts.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_TRANSFORMS,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    MARKDOWN_EXTENSIONS,
)
from mdcallouts.exceptions import FileError, FileNotFoundError, MdCalloutsError, OutputWriteError, ValidationError
from mdcallouts.logging_utils import configure_logging, resolve_log_level
from mdcallouts.options.html import HtmlRendererOptions
from mdcallouts.options.markdown import MarkdownParserOptions
from mdcallouts.transforms import transform_registry

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
OUTPUT_SUFFIXES = {"html": ".html", "json": ".json"}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``mdcallouts`` command."""
    parser = argparse.ArgumentParser(
        prog="mdcallouts",
        description="Convert Markdown to HTML, rendering '> [!NOTE]' style block quotes as callouts.",
    )
    parser.add_argument("input", nargs="*", help="Markdown files or directories of Markdown files")

    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument("--out", "-o", help="Output file (single input only; default: stdout)")
    output_group.add_argument("--output-dir", help="Directory for output files, one per input")

    parser.add_argument(
        "--format",
        choices=["html", "json"],
        default=None,
        help="Output format: rendered HTML or the transformed JSON tree (default: html)",
    )
    parser.add_argument(
        "--standalone",
        action="store_true",
        default=None,
        help="Wrap HTML output in a complete document with head and styles",
    )
    parser.add_argument(
        "--transform",
        "-t",
        action="append",
        dest="transforms",
        metavar="NAME[:PARAM=VALUE,...]",
        help=(
            "Transform to apply; repeat for several. Replaces the default list "
            f"({', '.join(DEFAULT_TRANSFORMS)})."
        ),
    )
    parser.add_argument("--no-callouts", action="store_true", help="Leave '[!TYPE]' block quotes untouched")
    parser.add_argument("--list-transforms", action="store_true", help="List available transforms and exit")
    parser.add_argument("--config", help=f"Configuration file (default: ${CONFIG_ENV_VAR} or auto-discovery)")
    parser.add_argument("--no-config", action="store_true", help="Ignore configuration files")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument("--log-file", help="Also write log records to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, (FileError, OutputWriteError)):
        return EXIT_FILE_ERROR

    return EXIT_ERROR


def parse_transform_argument(value: str) -> tuple[str, dict[str, Any]]:
    """Split a ``--transform`` value into a name and typed parameters.

    ``heading-ids:id_prefix=doc-,max_length=40`` gives
    ``("heading-ids", {"id_prefix": "doc-", "max_length": 40})``. Values are
    converted with the parameter's declared type and checked against its
    validator.

    Raises
    ------
    argparse.ArgumentTypeError
        If the transform is unknown, a parameter is not declared, or a value
        cannot be converted

    """
    name, _, raw_params = value.partition(":")
    name = name.strip()

    try:
        metadata = transform_registry.get_metadata(name)
    except KeyError as e:
        raise argparse.ArgumentTypeError(str(e.args[0])) from e

    params: dict[str, Any] = {}
    for item in filter(None, (part.strip() for part in raw_params.split(","))):
        key, sep, raw = item.partition("=")
        key = key.strip().replace("-", "_")
        if not sep:
            raise argparse.ArgumentTypeError(f"Expected PARAM=VALUE in --transform {value!r}, got {item!r}")
        if key not in metadata.parameters:
            valid = ", ".join(sorted(metadata.parameters)) or "(none)"
            raise argparse.ArgumentTypeError(f"Transform '{name}' has no parameter '{key}'. Valid parameters: {valid}")
        try:
            params[key] = metadata.parameters[key].coerce(raw)
            metadata.parameters[key].validate(params[key])
        except ValueError as e:
            raise argparse.ArgumentTypeError(f"Invalid value for {name}:{key}: {e}") from e

    return name, params


def collect_inputs(inputs: list[str]) -> list[Path]:
    """Expand input arguments into the list of Markdown files to convert.

    Directories contribute their Markdown files (by extension, not
    recursive), sorted by name.

    Raises
    ------
    FileError
        If an input does not exist
    ValidationError
        If no Markdown files are found

    """
    files: list[Path] = []
    for raw in inputs:
        path = Path(raw)
        if path.is_dir():
            found = sorted(p for p in path.iterdir() if p.is_file() and p.suffix.lower() in MARKDOWN_EXTENSIONS)
            logger.debug("Found %d Markdown file(s) in %s", len(found), path)
            files.extend(found)
        elif path.is_file():
            files.append(path)
        else:
            raise FileNotFoundError(str(path))

    if not files:
        raise ValidationError("No Markdown files found in the given inputs", parameter_name="input")
    return files


def _resolve_settings(parsed_args: argparse.Namespace, config: dict[str, Any]) -> dict[str, Any]:
    """Combine config file values with command-line flags into conversion settings.

    Raises
    ------
    ValidationError
        If parser or renderer options in the config are invalid
    argparse.ArgumentTypeError
        If a ``--transform`` value is invalid

    """
    output_format = parsed_args.format or config.get("format", "html")
    if output_format not in OUTPUT_SUFFIXES:
        raise ValidationError(
            f"Unsupported output format: {output_format}", parameter_name="format", parameter_value=output_format
        )

    transform_options: dict[str, dict[str, Any]] = dict(config.get("transform-options", {}))
    if parsed_args.transforms:
        transforms = []
        for value in parsed_args.transforms:
            name, params = parse_transform_argument(value)
            transforms.append(name)
            if params:
                transform_options = merge_configs(transform_options, {name: params})
    else:
        transforms = list(config.get("transforms", DEFAULT_TRANSFORMS))

    if parsed_args.no_callouts:
        transforms = [name for name in transforms if name != "callouts"]

    parser_options = MarkdownParserOptions.from_dict(config.get("parser", {}))

    html_config = dict(config.get("html", {}))
    if "standalone" in config:
        html_config.setdefault("standalone", config["standalone"])
    if parsed_args.standalone:
        html_config["standalone"] = True
    renderer_options = HtmlRendererOptions.from_dict(html_config)

    return {
        "output_format": output_format,
        "transforms": transforms,
        "transform_options": transform_options,
        "parser_options": parser_options,
        "renderer_options": renderer_options,
    }


def _output_path_for(source: Path, parsed_args: argparse.Namespace, output_format: str) -> Optional[Path]:
    if parsed_args.out:
        return Path(parsed_args.out)
    if parsed_args.output_dir:
        return Path(parsed_args.output_dir) / (source.stem + OUTPUT_SUFFIXES[output_format])
    return None


def plan_outputs(
    files: list[Path], parsed_args: argparse.Namespace, output_format: str
) -> list[tuple[Path, Optional[Path]]]:
    """Pair each input with the file it is written to (None for stdout).

    Raises
    ------
    ValidationError
        If two inputs map to the same file in ``--output-dir``, e.g.
        ``a/x.md`` and ``b/x.md`` both becoming ``x.html``

    """
    plan: list[tuple[Path, Optional[Path]]] = []
    claimed: dict[Path, Path] = {}
    for source in files:
        destination = _output_path_for(source, parsed_args, output_format)
        if destination is not None and parsed_args.output_dir:
            owner = claimed.setdefault(destination, source)
            if owner.resolve() != source.resolve():
                raise ValidationError(
                    f"{owner} and {source} would both be written to {destination}",
                    parameter_name="output_dir",
                    parameter_value=str(destination),
                )
        plan.append((source, destination))
    return plan


def process_files(
    plan: list[tuple[Path, Optional[Path]]], parsed_args: argparse.Namespace, settings: dict[str, Any]
) -> int:
    """Convert each planned file, reporting failures without stopping the batch.

    Returns
    -------
    int
        EXIT_SUCCESS, or the exit code of the first failure

    """
    if parsed_args.output_dir:
        Path(parsed_args.output_dir).mkdir(parents=True, exist_ok=True)

    exit_code = EXIT_SUCCESS
    for source, destination in plan:
        logger.info("Converting %s", source)
        try:
            result = convert(source, destination, **settings)
        except (MdCalloutsError, OSError) as e:
            code = get_exit_code_for_exception(e)
            print(f"Error: {source}: {e}", file=sys.stderr)
            logger.debug("Conversion of %s failed", source, exc_info=True)
            if exit_code == EXIT_SUCCESS:
                exit_code = code
            continue

        if result is not None:
            sys.stdout.write(result)
            if not result.endswith("\n"):
                sys.stdout.write("\n")
        else:
            logger.info("Wrote %s", destination)

    return exit_code


def list_transforms() -> int:
    """Print the registered transforms with their parameters."""
    for name in transform_registry.list_transforms():
        metadata = transform_registry.get_metadata(name)
        print(f"{name} (priority {metadata.priority}): {metadata.description}")
        for param_name, spec in sorted(metadata.parameters.items()):
            default = f" [default: {spec.default!r}]" if spec.default is not None else ""
            print(f"    {param_name} ({spec.type.__name__}){default} {spec.help}".rstrip())
    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Run the ``mdcallouts`` command.

    Parameters
    ----------
    args : list[str], optional
        Command-line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(
        resolve_log_level(parsed_args.log_level, trace=parsed_args.trace),
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
    )

    if parsed_args.list_transforms:
        return list_transforms()

    if not parsed_args.input:
        print("Error: Input file is required", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        config: dict[str, Any] = {}
        if not parsed_args.no_config:
            config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
        settings = _resolve_settings(parsed_args, config)
        files = collect_inputs(parsed_args.input)
    except (argparse.ArgumentTypeError, MdCalloutsError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    if parsed_args.out and len(files) > 1:
        print("Error: --out accepts a single input; use --output-dir for several", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        plan = plan_outputs(files, parsed_args, settings["output_format"])
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    return process_files(plan, parsed_args, settings)


if __name__ == "__main__":
    sys.exit(main())
