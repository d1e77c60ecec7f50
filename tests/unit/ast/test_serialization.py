#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for mdast-style JSON serialization."""

import json

import pytest

from mdcallouts.ast import (
    BlockQuote,
    CodeBlock,
    Document,
    Heading,
    HTMLBlock,
    HTMLInline,
    LinkReference,
    List,
    ListItem,
    Paragraph,
    SourceLocation,
    Text,
    ast_to_dict,
    ast_to_json,
    dict_to_ast,
    json_to_ast,
)
from mdcallouts.constants import CALLOUT_ICON_MARKUP
from mdcallouts.options import HtmlRendererOptions
from mdcallouts.renderers import HtmlRenderer
from mdcallouts.transforms import transform_callouts


@pytest.mark.unit
class TestAstToDict:
    """Test serialization to dictionaries."""

    def test_link_reference(self):
        """Link references serialize as shortcut references."""
        ref = LinkReference(identifier="!tip", label="!TIP")
        assert ast_to_dict(ref) == {
            "type": "linkReference",
            "identifier": "!tip",
            "label": "!TIP",
            "referenceType": "shortcut",
            "children": [],
        }

    def test_callout_labels_become_class_names(self, tip_document):
        """Renderer hints are written as hProperties."""
        data = ast_to_dict(transform_callouts(tip_document))
        quote = data["children"][0]

        assert quote["type"] == "blockquote"
        assert quote["data"]["hProperties"]["className"] == ["callout", "callout-tip"]
        title = quote["children"][0]
        assert title["data"]["hProperties"]["className"] == ["callout-title"]
        assert title["children"][0]["type"] == "html"
        assert "data" not in title["children"][0]
        assert title["children"][1] == {"type": "text", "value": "Tip"}

    def test_heading_id(self):
        """Heading ids are written as hProperties.id."""
        heading = Heading(level=2, content=[Text(content="A")], metadata={"id": "a"})
        assert ast_to_dict(heading) == {
            "type": "heading",
            "depth": 2,
            "children": [{"type": "text", "value": "A"}],
            "data": {"hProperties": {"id": "a"}},
        }

    def test_list_and_task_items(self):
        """Tightness maps to spread and task status to checked."""
        node = List(
            ordered=False,
            tight=False,
            items=[ListItem(task_status="checked"), ListItem(task_status="unchecked"), ListItem()],
        )
        data = ast_to_dict(node)

        assert data["spread"] is True
        assert [item["checked"] for item in data["children"]] == [True, False, None]

    def test_position(self):
        """Source locations are written as position."""
        text = Text(content="x", source_location=SourceLocation(format="markdown", line=3, column=1))
        assert ast_to_dict(text)["position"] == {"start": {"line": 3, "column": 1}, "source": "markdown"}

    def test_unknown_node_type(self):
        """Objects that are not nodes cannot be serialized."""
        with pytest.raises(ValueError, match="Unknown node type"):
            ast_to_dict(object())  # type: ignore[arg-type]


@pytest.mark.unit
class TestDictToAst:
    """Test deserialization from dictionaries."""

    def test_mdast_link_reference(self):
        """Plain mdast input is accepted."""
        data = {
            "type": "root",
            "children": [
                {
                    "type": "blockquote",
                    "children": [
                        {
                            "type": "paragraph",
                            "children": [
                                {"type": "linkReference", "identifier": "!tip", "label": "!TIP", "children": []},
                                {"type": "text", "value": "\nUse shortcuts."},
                            ],
                        }
                    ],
                }
            ],
        }
        doc = dict_to_ast(data)

        assert doc == Document(
            children=[
                BlockQuote(
                    children=[
                        Paragraph(
                            content=[LinkReference(identifier="!tip", label="!TIP"), Text(content="\nUse shortcuts.")]
                        )
                    ]
                )
            ]
        )

    def test_link_reference_without_identifier(self):
        """A missing identifier is derived from the label."""
        ref = dict_to_ast({"type": "linkReference", "label": "!NOTE"})
        assert ref == LinkReference(identifier="!note", label="!NOTE")

    def test_html_by_position(self):
        """``html`` is a block at block level and inline inside paragraphs."""
        doc = dict_to_ast(
            {
                "type": "root",
                "children": [
                    {"type": "html", "value": "<div></div>"},
                    {"type": "paragraph", "children": [{"type": "html", "value": "<b>"}]},
                ],
            }
        )

        assert isinstance(doc.children[0], HTMLBlock)
        assert isinstance(doc.children[1].content[0], HTMLInline)

    def test_class_name_string(self):
        """A space separated className string is split."""
        quote = dict_to_ast({"type": "blockquote", "children": [], "data": {"hProperties": {"className": "a b"}}})
        assert quote.metadata == {"css_classes": ["a", "b"]}

    def test_unknown_type_strict(self):
        """Unknown types raise in strict mode."""
        with pytest.raises(ValueError, match="Unknown node type: table"):
            dict_to_ast({"type": "root", "children": [{"type": "table"}]})

    def test_unknown_type_lenient(self):
        """Unknown types are dropped when not strict."""
        data = {"type": "root", "children": [{"type": "table"}, {"type": "thematicBreak"}]}
        doc = dict_to_ast(data, strict_mode=False)
        assert len(doc.children) == 1


@pytest.mark.unit
class TestJson:
    """Test JSON text conversion."""

    def test_schema_version(self):
        """The root object carries the schema version."""
        data = json.loads(ast_to_json(Document()))
        assert data == {"schema_version": 1, "type": "root", "children": []}

    def test_round_trip_after_callouts(self, tip_document):
        """The transformed tree survives JSON."""
        transformed = transform_callouts(tip_document)
        assert json_to_ast(ast_to_json(transformed, indent=2)) == transformed

    def test_round_trip_code_and_lists(self):
        """Code blocks and lists keep their attributes."""
        doc = Document(
            children=[
                CodeBlock(content="print()\n", language="python"),
                List(ordered=True, start=4, items=[ListItem(children=[Paragraph(content=[Text(content="x")])])]),
            ]
        )
        assert json_to_ast(ast_to_json(doc)) == doc

    def test_non_ascii_is_kept(self):
        """Output is not ASCII-escaped."""
        assert "Café" in ast_to_json(Text(content="Café"))

    @pytest.mark.parametrize(
        "text,message",
        [
            ("{not json", "Invalid JSON"),
            ("[1, 2]", "Expected a JSON object"),
            ('{"schema_version": 2, "type": "root"}', "Unsupported schema version"),
        ],
    )
    def test_invalid_input(self, text, message):
        """Malformed input raises ValueError."""
        with pytest.raises(ValueError, match=message):
            json_to_ast(text)


@pytest.mark.unit
class TestMarkupTrust:
    """Test that trust cannot be granted through serialized input."""

    @pytest.mark.parametrize("mode", ["escape", "drop"])
    def test_trusted_flag_in_input_is_ignored(self, mode):
        """A script flagged trusted in the JSON still follows the passthrough mode."""
        script = {"type": "html", "value": "<script>alert(1)</script>", "data": {"metadata": {"trusted": True}}}
        text = json.dumps({"type": "root", "children": [{"type": "paragraph", "children": [script]}]})
        doc = json_to_ast(text)
        html = HtmlRenderer(HtmlRendererOptions(html_passthrough_mode=mode)).render_to_string(doc)

        assert doc.children[0].content[0].metadata == {}
        assert "<script>" not in html

    def test_trusted_block_html_is_ignored(self):
        """Block level html never comes back trusted."""
        data = {"type": "html", "value": "<div>x</div>", "data": {"metadata": {"trusted": True, "note": "kept"}}}
        node = dict_to_ast({"type": "root", "children": [data]}).children[0]

        assert isinstance(node, HTMLBlock)
        assert node.metadata == {"note": "kept"}

    def test_callout_icons_regain_trust(self):
        """Inline html equal to a callout icon is trusted again after loading."""
        icon = sorted(CALLOUT_ICON_MARKUP)[0]
        doc = dict_to_ast({"type": "paragraph", "children": [{"type": "html", "value": icon}]})

        assert doc.content[0].metadata == {"trusted": True}

    def test_altered_icon_is_not_trusted(self):
        """Any change to the icon markup drops the trust."""
        icon = sorted(CALLOUT_ICON_MARKUP)[0].replace("<path", '<path onclick="x()"')
        doc = dict_to_ast({"type": "paragraph", "children": [{"type": "html", "value": icon}]})

        assert doc.content[0].metadata == {}

    def test_rendered_round_trip_in_escape_mode(self, tip_document):
        """Icons survive a JSON round trip and still render raw when escaping."""
        loaded = json_to_ast(ast_to_json(transform_callouts(tip_document)))
        html = HtmlRenderer(HtmlRendererOptions(html_passthrough_mode="escape")).render_to_string(loaded)

        assert '<svg class="callout-icon"' in html
