#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the heading id transform."""

import pytest

from mdcallouts.ast import BlockQuote, Code, Document, Heading, Paragraph, Text
from mdcallouts.transforms import AddHeadingIdsTransform


def _heading(text: str, level: int = 2) -> Heading:
    return Heading(level=level, content=[Text(content=text)])


@pytest.mark.unit
class TestAddHeadingIdsTransform:
    """Test AddHeadingIdsTransform."""

    def test_basic_ids(self):
        """Headings get slugified ids."""
        doc = Document(children=[_heading("Getting Started", 1), _heading("API Reference (v2.0)")])
        result = AddHeadingIdsTransform().transform(doc)

        assert result.children[0].metadata["id"] == "getting-started"
        assert result.children[1].metadata["id"] == "api-reference-v20"

    def test_duplicate_headings_get_suffixes(self):
        """Repeated titles are numbered from 1."""
        doc = Document(children=[_heading("Usage"), _heading("Usage"), _heading("Usage")])
        result = AddHeadingIdsTransform().transform(doc)

        assert [h.metadata["id"] for h in result.children] == ["usage", "usage-1", "usage-2"]

    def test_prefix_and_separator(self):
        """Prefix and separator are applied."""
        doc = Document(children=[_heading("Read Me"), _heading("Read Me")])
        result = AddHeadingIdsTransform(id_prefix="doc-", separator="_").transform(doc)

        assert [h.metadata["id"] for h in result.children] == ["doc-read_me", "doc-read_me_1"]

    def test_max_length(self):
        """Long slugs are truncated."""
        doc = Document(children=[_heading("a very long heading title")])
        result = AddHeadingIdsTransform(max_length=6).transform(doc)

        assert result.children[0].metadata["id"] == "a-very"

    def test_inline_code_contributes_text(self):
        """Code spans are part of the slug."""
        doc = Document(children=[Heading(level=2, content=[Text(content="Using "), Code(content="render")])])
        result = AddHeadingIdsTransform().transform(doc)

        assert result.children[0].metadata["id"] == "using-render"

    def test_empty_heading_gets_empty_slug(self):
        """A heading without usable text slugs to nothing, then to -1."""
        doc = Document(children=[_heading("!!!"), _heading("???")])
        result = AddHeadingIdsTransform().transform(doc)

        assert [h.metadata["id"] for h in result.children] == ["", "-1"]

    def test_headings_inside_quotes(self):
        """Nested headings are reached too."""
        doc = Document(children=[BlockQuote(children=[_heading("Inside")])])
        result = AddHeadingIdsTransform().transform(doc)

        assert result.children[0].children[0].metadata["id"] == "inside"

    def test_ids_reset_between_documents(self):
        """A reused instance does not carry slugs across documents."""
        transform = AddHeadingIdsTransform()
        first = transform.transform(Document(children=[_heading("Intro")]))
        second = transform.transform(Document(children=[_heading("Intro")]))

        assert first.children[0].metadata["id"] == "intro"
        assert second.children[0].metadata["id"] == "intro"

    def test_original_is_not_modified(self):
        """The input heading keeps its metadata."""
        heading = _heading("Intro")
        AddHeadingIdsTransform().transform(Document(children=[heading, Paragraph(content=[])]))

        assert heading.metadata == {}
