#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the copy-on-write transformer."""

import pytest

from mdcallouts.ast import (
    BlockQuote,
    Document,
    Heading,
    Image,
    LinkReference,
    List,
    ListItem,
    Paragraph,
    Text,
    ThematicBreak,
)
from mdcallouts.ast.transforms import NodeTransformer, transform_nodes

from node_helpers import collect_nodes


class UpperCaseText(NodeTransformer):
    """Upper-case every text node."""

    def visit_text(self, node):
        return Text(content=node.content.upper(), metadata=dict(node.metadata))


class DropImages(NodeTransformer):
    """Remove all images."""

    def visit_image(self, node):
        return None


@pytest.fixture
def sample_doc():
    return Document(
        children=[
            Heading(level=1, content=[Text(content="Title")]),
            BlockQuote(
                children=[
                    Paragraph(
                        content=[
                            LinkReference(identifier="!note", label="!NOTE"),
                            Text(content=" body "),
                            Image(url="a.png", alt_text="a"),
                        ]
                    )
                ]
            ),
            List(
                ordered=True,
                start=3,
                tight=False,
                items=[ListItem(children=[Paragraph(content=[Text(content="x")])])],
            ),
        ],
        metadata={"title": "Doc"},
    )


@pytest.mark.unit
class TestNodeTransformer:
    """Test the rebuilding transformer."""

    def test_identity_transform_rebuilds(self, sample_doc):
        """The base transformer returns an equal but new tree."""
        result = NodeTransformer().transform(sample_doc)

        assert result == sample_doc
        assert result is not sample_doc
        assert result.children[1] is not sample_doc.children[1]
        assert result.metadata is not sample_doc.metadata

    def test_leaf_copies_have_own_metadata(self):
        """Copied leaves do not share metadata with the input."""
        text = Text(content="x", metadata={"k": 1})
        copy = NodeTransformer().transform(text)

        copy.metadata["k"] = 2
        assert text.metadata == {"k": 1}

    def test_empty_container_is_copied(self):
        """A container without children still comes back as a new node."""
        para = Paragraph(metadata={"k": 1})
        result = NodeTransformer().transform(para)

        assert result == para
        assert result is not para
        assert result.metadata is not para.metadata

    def test_override_rewrites_nodes(self, sample_doc):
        """An overridden visit method replaces nodes everywhere."""
        result = UpperCaseText().transform(sample_doc)

        assert result.children[0].content[0].content == "TITLE"
        assert result.children[2].items[0].children[0].content[0].content == "X"
        assert sample_doc.children[0].content[0].content == "Title"

    def test_returning_none_removes(self, sample_doc):
        """A visit method returning None removes the node."""
        result = DropImages().transform(sample_doc)

        assert collect_nodes(result, Image) == []
        assert len(collect_nodes(sample_doc, Image)) == 1

    def test_list_attributes_are_kept(self, sample_doc):
        """Lists keep ordering, start and tightness."""
        result = NodeTransformer().transform(sample_doc)
        rebuilt = result.children[2]

        assert (rebuilt.ordered, rebuilt.start, rebuilt.tight) == (True, 3, False)

    def test_list_rejects_non_items(self, sample_doc):
        """Replacing a list item with another node type is an error."""

        class ItemsToRules(NodeTransformer):
            def visit_list_item(self, node):
                return ThematicBreak()

        with pytest.raises(ValueError, match="ListItem"):
            ItemsToRules().transform(sample_doc)

    def test_transform_nodes_requires_document(self, sample_doc):
        """Replacing the root with something else is an error."""

        class Flatten(NodeTransformer):
            def visit_document(self, node):
                return Paragraph()

        with pytest.raises(TypeError, match="must return a Document"):
            transform_nodes(sample_doc, Flatten())

    def test_subclass_can_extend_default(self, sample_doc):
        """An override may delegate to the default rebuild."""

        class CountQuotes(NodeTransformer):
            count = 0

            def visit_block_quote(self, node):
                self.count += 1
                return self._rebuild(node)

        counter = CountQuotes()
        result = counter.transform(sample_doc)

        assert counter.count == 1
        assert result == sample_doc
