#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for HTML helpers."""

import pytest

from mdcallouts.utils.html_utils import class_attribute, escape_html, merge_class_names


@pytest.mark.unit
class TestHtmlUtils:
    """Test escaping and class attribute helpers."""

    def test_escape(self):
        """Markup characters and quotes are escaped."""
        assert escape_html("<a href='x'>&\"</a>") == "&lt;a href=&#x27;x&#x27;&gt;&amp;&quot;&lt;/a&gt;"

    def test_escape_disabled(self):
        """Escaping can be turned off."""
        assert escape_html("<b>", enabled=False) == "<b>"

    def test_merge_keeps_first_occurrence(self):
        """Duplicates and blanks are dropped; order is kept."""
        assert merge_class_names(["callout", "callout-tip"], None, ["", "callout", "extra more"]) == [
            "callout",
            "callout-tip",
            "extra",
            "more",
        ]

    def test_class_attribute(self):
        """The attribute has a leading space and escaped value."""
        assert class_attribute(["a", "b"]) == ' class="a b"'
        assert class_attribute(['x"y']) == ' class="x&quot;y"'

    @pytest.mark.parametrize("classes", [None, [], [""]])
    def test_empty_class_attribute(self, classes):
        """No classes give no attribute."""
        assert class_attribute(classes) == ""
