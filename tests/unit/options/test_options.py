#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for parser and renderer option classes."""

from dataclasses import FrozenInstanceError

import pytest

from mdcallouts.exceptions import ValidationError
from mdcallouts.options import HtmlRendererOptions, MarkdownParserOptions


@pytest.mark.unit
class TestMarkdownParserOptions:
    """Test parser options."""

    def test_defaults(self):
        """Everything is on and input is UTF-8."""
        options = MarkdownParserOptions()
        assert options.parse_frontmatter
        assert options.parse_strikethrough
        assert options.parse_shortcut_references
        assert options.encoding == "utf-8"

    def test_frozen(self):
        """Options cannot be changed in place."""
        options = MarkdownParserOptions()
        with pytest.raises(FrozenInstanceError):
            options.encoding = "latin-1"  # type: ignore[misc]

    def test_create_updated(self):
        """Updated copies leave the original alone."""
        options = MarkdownParserOptions()
        updated = options.create_updated(parse_strikethrough=False)

        assert updated.parse_strikethrough is False
        assert options.parse_strikethrough is True

    def test_unknown_encoding(self):
        """Encodings are checked on construction."""
        with pytest.raises(ValueError, match="Unknown encoding"):
            MarkdownParserOptions(encoding="no-such-codec")

    def test_from_dict_accepts_dashes(self):
        """Config-style keys are accepted."""
        options = MarkdownParserOptions.from_dict({"parse-frontmatter": False, "encoding": "latin-1"})
        assert options == MarkdownParserOptions(parse_frontmatter=False, encoding="latin-1")

    def test_from_dict_unknown_key(self):
        """Unknown keys list the valid ones."""
        with pytest.raises(ValidationError, match="Valid options: encoding"):
            MarkdownParserOptions.from_dict({"smart-quotes": True})

    def test_from_dict_invalid_value(self):
        """Rejected values become ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            MarkdownParserOptions.from_dict({"encoding": "no-such-codec"})
        assert isinstance(exc_info.value.original_error, ValueError)


@pytest.mark.unit
class TestHtmlRendererOptions:
    """Test renderer options."""

    def test_defaults(self):
        """Fragments with embedded styles and passed-through HTML."""
        options = HtmlRendererOptions()
        assert options.standalone is False
        assert options.css_style == "embedded"
        assert options.html_passthrough_mode == "pass-through"
        assert options.escape_html is True
        assert options.language == "en"
        assert options.css_class_map is None

    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"css_style": "fancy"}, "css_style"),
            ({"html_passthrough_mode": "sanitize"}, "html_passthrough_mode"),
            ({"css_style": "external"}, "css_file is required"),
        ],
    )
    def test_invalid(self, kwargs, message):
        """Choice fields are validated."""
        with pytest.raises(ValueError, match=message):
            HtmlRendererOptions(**kwargs)

    def test_external_with_file(self):
        """External styles need a stylesheet."""
        options = HtmlRendererOptions(css_style="external", css_file="site.css")
        assert options.css_file == "site.css"

    def test_from_dict(self):
        """Dashed keys map to fields."""
        options = HtmlRendererOptions.from_dict(
            {"standalone": True, "html-passthrough-mode": "escape", "css_class_map": {"BlockQuote": "q"}}
        )
        assert options.standalone
        assert options.html_passthrough_mode == "escape"
        assert options.css_class_map == {"BlockQuote": "q"}

    def test_from_dict_invalid(self):
        """Invalid combinations surface as ValidationError."""
        with pytest.raises(ValidationError, match="css_file is required"):
            HtmlRendererOptions.from_dict({"css-style": "external"})
