#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for document tree nodes and their helpers."""

import pytest

from mdcallouts.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    HTMLInline,
    Image,
    Link,
    LinkReference,
    List,
    ListItem,
    Node,
    Paragraph,
    Strong,
    Text,
    ThematicBreak,
    extract_text,
    get_node_children,
    normalize_identifier,
    replace_node_children,
)
from mdcallouts.ast import nodes as nodes_module
from mdcallouts.ast.visitors import NodeVisitor


@pytest.mark.unit
class TestNodeDefaults:
    """Test node construction."""

    def test_defaults(self):
        """Containers start empty and metadata dicts are not shared."""
        first = Paragraph()
        second = Paragraph()

        assert first.content == []
        assert first.metadata == {}
        assert first.metadata is not second.metadata

    def test_list_defaults(self):
        """Lists start at 1 and are tight."""
        node = List(ordered=True)
        assert node.start == 1
        assert node.tight is True
        assert node.items == []

    def test_structural_equality(self):
        """Nodes compare by value."""
        assert BlockQuote(children=[Paragraph(content=[Text(content="a")])]) == BlockQuote(
            children=[Paragraph(content=[Text(content="a")])]
        )
        assert Text(content="a") != Text(content="a", metadata={"x": 1})

    def test_visit_method_is_not_a_field(self):
        """The dispatch name is a class attribute, not a constructor argument."""
        assert "visit_method" not in Text(content="a").__dict__
        assert Text.visit_method == "visit_text"
        assert HTMLInline.visit_method == "visit_html_inline"


@pytest.mark.unit
class TestAccept:
    """Test visitor dispatch."""

    @pytest.mark.parametrize(
        "node, method",
        [
            (Document(), "visit_document"),
            (Heading(level=2), "visit_heading"),
            (CodeBlock(content="x"), "visit_code_block"),
            (BlockQuote(), "visit_block_quote"),
            (ListItem(), "visit_list_item"),
            (ThematicBreak(), "visit_thematic_break"),
            (LinkReference(identifier="!note"), "visit_link_reference"),
            (Image(url="a.png"), "visit_image"),
        ],
    )
    def test_accept_calls_matching_method(self, node, method):
        """accept() calls the visitor method named for the node class."""

        class Recorder:
            def __getattr__(self, name):
                return lambda visited: (name, visited)

        assert node.accept(Recorder()) == (method, node)

    def test_every_node_class_has_a_visitor_method(self):
        """Each node class names an abstract method of NodeVisitor."""
        node_classes = [
            cls
            for cls in vars(nodes_module).values()
            if isinstance(cls, type) and issubclass(cls, Node) and cls is not Node
        ]

        assert len(node_classes) == 19
        for cls in node_classes:
            assert cls.visit_method in NodeVisitor.__abstractmethods__


@pytest.mark.unit
class TestNormalizeIdentifier:
    """Test reference label normalization."""

    @pytest.mark.parametrize(
        "label,expected",
        [("!WARNING", "!warning"), ("!Note", "!note"), ("Some   Label", "some label"), ("!note ", "!note ")],
    )
    def test_normalize(self, label, expected):
        """Labels are lower-cased with whitespace runs collapsed."""
        assert normalize_identifier(label) == expected


@pytest.mark.unit
class TestChildren:
    """Test get_node_children and replace_node_children."""

    def test_block_container(self):
        """Block containers expose ``children``."""
        quote = BlockQuote(children=[ThematicBreak()])
        assert get_node_children(quote) == [ThematicBreak()]

    def test_inline_container(self):
        """Inline containers expose ``content``."""
        ref = LinkReference(identifier="!note", label="!NOTE", content=[Text(content="!NOTE")])
        assert get_node_children(ref) == [Text(content="!NOTE")]

    def test_list_items(self):
        """Lists expose their items."""
        item = ListItem(children=[Paragraph()])
        assert get_node_children(List(ordered=False, items=[item])) == [item]

    def test_leaf(self):
        """Leaves have no children."""
        assert get_node_children(Text(content="x")) == []
        assert get_node_children(CodeBlock(content="x")) == []

    def test_returned_list_is_a_copy(self):
        """Changing the returned list does not change the node."""
        doc = Document(children=[Paragraph()])
        get_node_children(doc).clear()
        assert len(doc.children) == 1

    def test_replace_copies_metadata(self):
        """The copy gets its own metadata dict."""
        quote = BlockQuote(children=[], metadata={"css_classes": ["callout"]})
        copy = replace_node_children(quote, [Paragraph()])

        copy.metadata["css_classes"] = []
        assert quote.metadata == {"css_classes": ["callout"]}
        assert copy.children == [Paragraph()]
        assert quote.children == []

    def test_replace_list_children_type_checked(self):
        """A list only accepts list items."""
        with pytest.raises(ValueError, match="ListItem"):
            replace_node_children(List(ordered=False), [Paragraph()])

    def test_replace_leaf_returns_node(self):
        """Leaves are returned unchanged."""
        text = Text(content="x")
        assert replace_node_children(text, [Text(content="y")]) is text


@pytest.mark.unit
class TestExtractText:
    """Test extract_text."""

    def test_inline_runs(self):
        """Text, code and image alt text are concatenated."""
        heading = Heading(
            level=1,
            content=[
                Text(content="Hello "),
                Strong(content=[Code(content="world")]),
                Image(url="x.png", alt_text="!"),
            ],
        )
        assert extract_text(heading) == "Hello world!"

    def test_raw_html_is_ignored(self):
        """Callout icons do not leak into text."""
        para = Paragraph(content=[HTMLInline(content="<svg/>"), Text(content="Note")])
        assert extract_text(para) == "Note"

    def test_joiner(self):
        """Siblings can be joined with a separator."""
        nodes = [Paragraph(content=[Text(content="a")]), Paragraph(content=[Text(content="b")])]
        assert extract_text(nodes, joiner="\n") == "a\nb"

    def test_links(self):
        """Link text is included, the URL is not."""
        link = Link(url="https://example.com", content=[Emphasis(content=[Text(content="site")])])
        assert extract_text(link) == "site"
