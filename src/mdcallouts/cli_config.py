#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcallouts/cli_config.py
"""Where the command line finds its defaults.

A configuration file holds the same settings as the command line::

    # .mdcallouts.toml
    format = "html"
    transforms = ["callouts", "heading-ids"]

    [parser]
    parse-strikethrough = false

    [html]
    standalone = true
    css-style = "external"
    css-file = "callouts.css"

    [transform-options.heading-ids]
    id_prefix = "doc-"

The same keys may live under ``[tool.mdcallouts]`` in ``pyproject.toml``,
and the dedicated file may be YAML or JSON instead of TOML. Every failure is
an ``argparse.ArgumentTypeError`` so the CLI reports it like a bad flag.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Callable, Dict, NamedTuple, Optional

import yaml

from mdcallouts.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION

logger = logging.getLogger(__name__)

# Top-level keys a configuration file may contain
CONFIG_KEYS = frozenset({"format", "standalone", "transforms", "transform-options", "parser", "html"})

_TABLE_KEYS = ("parser", "html", "transform-options")


class _Format(NamedTuple):
    label: str
    binary: bool
    load: Callable[[Any], Any]
    error: type[Exception]
    # top-level shape, as the format names it
    expects: str


_FORMATS: dict[str, _Format] = {
    ".toml": _Format("TOML", True, tomllib.load, tomllib.TOMLDecodeError, "a table"),
    ".yaml": _Format("YAML", False, yaml.safe_load, yaml.YAMLError, "a mapping"),
    ".yml": _Format("YAML", False, yaml.safe_load, yaml.YAMLError, "a mapping"),
    ".json": _Format("JSON", False, json.load, json.JSONDecodeError, "an object"),
}


def _read(path: Path, fmt: _Format) -> Any:
    try:
        if fmt.binary:
            with open(path, "rb") as f:
                return fmt.load(f)
        with open(path, "r", encoding="utf-8") as f:
            return fmt.load(f)
    except fmt.error as e:
        raise argparse.ArgumentTypeError(f"Invalid {fmt.label} in config file {path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading {fmt.label} config {path}: {e}") from e


def _read_mapping(path: Path, fmt: _Format) -> Dict[str, Any]:
    data = _read(path, fmt)
    # empty YAML documents load as None
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise argparse.ArgumentTypeError(
            f"{fmt.label} config file must contain {fmt.expects}, got {type(data).__name__}"
        )
    return data


def _tool_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return ``[tool.mdcallouts]`` from a pyproject file, or ``{}`` without one.

    Raises
    ------
    argparse.ArgumentTypeError
        Unreadable TOML, or a section that is not a table

    """
    section = _read(pyproject_path, _FORMATS[".toml"]).get("tool", {}).get(PYPROJECT_TOOL_SECTION)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(section).__name__}"
        )
    return section


def _first_config_in(directory: Path) -> Optional[Path]:
    for name in CONFIG_FILENAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Walk from ``start_dir`` (default: the working directory) to the root.

    In each directory the dedicated files (``.mdcallouts.toml``, ``.yaml``,
    ``.yml``, ``.json``) win over a ``pyproject.toml``, and a pyproject only
    counts when it has a non-empty ``[tool.mdcallouts]`` table. Unreadable
    pyproject files are skipped.
    """
    start = (start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        found = _first_config_in(directory)
        if found is not None:
            return found

        pyproject = directory / "pyproject.toml"
        if not pyproject.is_file():
            continue
        try:
            if _tool_section(pyproject):
                return pyproject
        except argparse.ArgumentTypeError as e:
            logger.debug("Skipping unreadable %s: %s", pyproject, e)

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Search upwards from ``start_dir``, then fall back to the home directory."""
    return find_config_in_parents(start_dir) or _first_config_in(Path.home())


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Read one configuration file.

    ``pyproject.toml`` contributes its ``[tool.mdcallouts]`` table; any other
    file is read by extension (``.toml``, ``.yaml``/``.yml`` or ``.json``)
    and must hold a mapping at the top level.

    Raises
    ------
    argparse.ArgumentTypeError
        Missing path, directory, unknown extension or unparseable content

    Examples
    --------
    >>> load_config_file(".mdcallouts.toml").get("format")
    'html'

    """
    path = Path(config_path)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {path}")
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {path}")

    suffix = path.suffix.lower()
    if path.name.lower() == "pyproject.toml":
        config = _tool_section(path)
    elif suffix in _FORMATS:
        config = _read_mapping(path, _FORMATS[suffix])
    else:
        raise argparse.ArgumentTypeError(f"Unsupported config file format: {suffix}. Use .toml, .yaml or .json")

    logger.debug("Loaded configuration from %s", path)
    return config


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay ``override`` on ``base`` without modifying either.

    Tables present on both sides are merged key by key; everything else in
    ``override`` replaces what ``base`` had.

    >>> merge_configs({"html": {"standalone": True}}, {"html": {"title": "Guide"}})
    {'html': {'standalone': True, 'title': 'Guide'}}

    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = merge_configs(current, value)
        merged[key] = value
    return merged


def normalize_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Dash the top-level keys and check their shapes.

    ``transform_options`` and ``transform-options`` are the same key. Tables
    must be mappings and ``transforms`` a list of names.

    Raises
    ------
    argparse.ArgumentTypeError
        On an unknown key or a value of the wrong shape

    """
    normalized: Dict[str, Any] = {}
    for key, value in config.items():
        name = str(key).replace("_", "-")
        if name not in CONFIG_KEYS:
            raise argparse.ArgumentTypeError(
                f"Unknown configuration key '{key}'. Valid keys: {', '.join(sorted(CONFIG_KEYS))}"
            )
        normalized[name] = value

    for table in _TABLE_KEYS:
        value = normalized.get(table, {})
        if not isinstance(value, dict):
            raise argparse.ArgumentTypeError(f"Configuration key '{table}' must be a table, got {type(value).__name__}")

    transforms = normalized.get("transforms")
    names_ok = isinstance(transforms, list) and all(isinstance(name, str) for name in transforms)
    if transforms is not None and not names_ok:
        raise argparse.ArgumentTypeError("Configuration key 'transforms' must be a list of transform names")

    return normalized


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load the one configuration file that applies to this run.

    ``--config`` wins, then ``MDCALLOUTS_CONFIG``, then whatever
    ``discover_config_file`` finds. Files are never merged with each other.

    Returns
    -------
    dict
        Normalized settings, empty when there is no file

    """
    path: Optional[Path | str] = explicit_path or env_var_path
    if not path:
        path = discover_config_file()
        if path is None:
            return {}
        logger.info("Using configuration file %s", path)
    return normalize_config(load_config_file(path))


__all__ = [
    "discover_config_file",
    "find_config_in_parents",
    "load_config_file",
    "load_config_with_priority",
    "merge_configs",
    "normalize_config",
]
