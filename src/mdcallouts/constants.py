#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdcallouts library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Callouts - Recognized vocabulary, icon table and renderer-hint labels
3. Markdown Parsing - Parser defaults
4. HTML Rendering - Renderer defaults
5. Transforms - Pipeline defaults
6. CLI - Exit codes, config discovery and file extensions
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Literal, Mapping

# =============================================================================
# Type Definitions
# =============================================================================

CalloutType = Literal["note", "tip", "important", "warning", "caution"]
HtmlPassthroughMode = Literal["pass-through", "escape", "drop"]
CssStyle = Literal["embedded", "external", "none"]
OutputFormat = Literal["html", "json"]

# =============================================================================
# Callouts
# =============================================================================

CALLOUT_TYPES: tuple[CalloutType, ...] = ("note", "tip", "important", "warning", "caution")

# Anchored on the whole identifier: "[!note extra]" and "[!note ]" are not callouts.
CALLOUT_MARKER_PATTERN = re.compile(r"^!(note|tip|important|warning|caution)$", re.IGNORECASE)

# Lucide icon paths (24x24 viewBox), one per callout type.
CALLOUT_ICON_PATHS: Mapping[str, str] = MappingProxyType(
    {
        "note": "M12 16v-4m0-4h.01M22 12c0 5.523-4.477 10-10 10S2 17.523 2 12 6.477 2 12 2s10 4.477 10 10z",
        "tip": "M15 14c.2-1 .7-1.7 1.5-2.5 1-.9 1.5-2.2 1.5-3.5A6 6 0 0 0 6 8c0 1 .2 2.2 1.5 3.5.7.7 1.3 1.5 "
        "1.5 2.5M9 18h6M10 22h4",
        "important": "M12 9v4m0 4h.01M10.29 3.86 1.82 18a2 2 0 0 0 1.71 3h16.94a2 2 0 0 0 1.71-3L13.71 3.86a2 2 0 0 "
        "0-3.42 0z",
        "warning": "M12 9v4m0 4h.01M10.29 3.86 1.82 18a2 2 0 0 0 1.71 3h16.94a2 2 0 0 0 1.71-3L13.71 3.86a2 2 0 0 "
        "0-3.42 0z",
        "caution": "M12 8v4m0 4h.01M7.86 2h8.28L22 7.86v8.28L16.14 22H7.86L2 16.14V7.86z",
    }
)

CALLOUT_ICON_TEMPLATE = (
    '<svg class="callout-icon" xmlns="http://www.w3.org/2000/svg" width="20" height="20" viewBox="0 0 24 24" '
    'fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">'
    '<path d="{path}"/></svg>'
)

# Every icon the callout rewrite can emit; the only html trusted when loading a tree
CALLOUT_ICON_MARKUP: frozenset[str] = frozenset(
    CALLOUT_ICON_TEMPLATE.format(path=path) for path in CALLOUT_ICON_PATHS.values()
)

CALLOUT_CLASS = "callout"
CALLOUT_CLASS_PREFIX = "callout-"
CALLOUT_TITLE_CLASS = "callout-title"

# Node metadata keys read by renderers
CSS_CLASSES_KEY = "css_classes"
TRUSTED_MARKUP_KEY = "trusted"
HEADING_ID_KEY = "id"

# =============================================================================
# Markdown Parsing
# =============================================================================

DEFAULT_PARSE_FRONTMATTER = True
DEFAULT_PARSE_STRIKETHROUGH = True
DEFAULT_PARSE_SHORTCUT_REFERENCES = True
DEFAULT_INPUT_ENCODING = "utf-8"

MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".mkdn", ".svx")

# =============================================================================
# HTML Rendering
# =============================================================================

DEFAULT_HTML_STANDALONE = False
DEFAULT_HTML_CSS_STYLE: CssStyle = "embedded"
DEFAULT_HTML_ESCAPE_HTML = True
DEFAULT_HTML_LANGUAGE = "en"
DEFAULT_HTML_SYNTAX_HIGHLIGHTING = True
DEFAULT_HTML_PASSTHROUGH_MODE: HtmlPassthroughMode = "pass-through"
HTML_PASSTHROUGH_MODES = ["pass-through", "escape", "drop"]

# =============================================================================
# Transforms
# =============================================================================

DEFAULT_TRANSFORMS = ("callouts", "heading-ids")
TRANSFORM_ENTRY_POINT_GROUP = "mdcallouts.transforms"
DEFAULT_HEADING_ID_MAX_LENGTH = 100

# =============================================================================
# CLI
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_FILE_ERROR = 3

CONFIG_ENV_VAR = "MDCALLOUTS_CONFIG"
CONFIG_FILENAMES = (".mdcallouts.toml", ".mdcallouts.yaml", ".mdcallouts.yml", ".mdcallouts.json")
PYPROJECT_TOOL_SECTION = "mdcallouts"
