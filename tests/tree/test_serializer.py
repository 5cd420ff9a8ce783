"""Tests for DocumentSerializer.

Verifies:
- attributes render in the start tag, array members as repeated siblings
- _text renders as direct text content, inline with any sibling elements
- empty containers self-close; empty array groups vanish
- fixed, deterministic formatting (indent, newline, declaration)
- escaping of text and attribute values
- serialize -> parse returns the same tree for parsed feeds
"""

import pytest

from feed_structure.config import ParserConfig, SerializerConfig
from feed_structure.tree.nodes import DocumentNode
from feed_structure.tree.parser import DocumentParser
from feed_structure.tree.serializer import DocumentSerializer, format_scalar

BARE = SerializerConfig(xml_declaration=False)


class TestRendering:
    """Node kind conventions."""

    def test_shop_feed_layout(self, parser: DocumentParser, shop_feed: str) -> None:
        text = DocumentSerializer(BARE).serialize(parser.parse(shop_feed))
        assert text == (
            "<shop>\n"
            '  <offer id="1">\n'
            "    <name>Widget</name>\n"
            "    <price>9.99</price>\n"
            "  </offer>\n"
            '  <offer id="2">\n'
            "    <name>Gizmo</name>\n"
            "    <price>4.50</price>\n"
            "  </offer>\n"
            "</shop>\n"
        )

    def test_text_child_renders_inline(self) -> None:
        node = DocumentNode.element(
            "param",
            children=[DocumentNode.attribute("name", "Colour"), DocumentNode.text("Red")],
        )
        assert DocumentSerializer(BARE).serialize(node) == '<param name="Colour">Red</param>\n'

    def test_mixed_content_stays_on_one_line(self) -> None:
        node = DocumentNode.element(
            "a",
            children=[DocumentNode.text("note"), DocumentNode.element("b", "1")],
        )
        assert DocumentSerializer(BARE).serialize(node) == "<a>note<b>1</b></a>\n"

    def test_nested_children_of_mixed_content_are_inline(self) -> None:
        node = DocumentNode.element(
            "shop",
            children=[
                DocumentNode.element(
                    "offer",
                    children=[
                        DocumentNode.attribute("id", "1"),
                        DocumentNode.text("note"),
                        DocumentNode.element("dims", children=[DocumentNode.element("w", "2")]),
                        DocumentNode.element("empty"),
                    ],
                )
            ],
        )
        assert DocumentSerializer(BARE).serialize(node) == (
            "<shop>\n"
            '  <offer id="1">note<dims><w>2</w></dims><empty/></offer>\n'
            "</shop>\n"
        )

    def test_empty_container_self_closes(self) -> None:
        node = DocumentNode.element("offers")
        assert DocumentSerializer(BARE).serialize(node) == "<offers/>\n"

    def test_empty_array_group_has_no_markup(self) -> None:
        node = DocumentNode.element("shop", children=[DocumentNode.array_group("offer", [])])
        assert DocumentSerializer(BARE).serialize(node) == "<shop/>\n"

    def test_attribute_only_element_self_closes(self) -> None:
        node = DocumentNode.element("currency", children=[DocumentNode.attribute("id", "UAH")])
        assert DocumentSerializer(BARE).serialize(node) == '<currency id="UAH"/>\n'

    def test_boolean_and_number_values(self) -> None:
        node = DocumentNode.element(
            "a",
            children=[DocumentNode.element("b", True), DocumentNode.element("n", 4.5)],
        )
        assert DocumentSerializer(BARE).serialize(node) == "<a>\n  <b>true</b>\n  <n>4.5</n>\n</a>\n"

    def test_root_must_be_element(self) -> None:
        with pytest.raises(ValueError, match="must be an element"):
            DocumentSerializer().serialize(DocumentNode.array_group("a", []))


class TestEscaping:
    def test_text_escaping(self) -> None:
        node = DocumentNode.element("d", "Fast & <light>")
        assert DocumentSerializer(BARE).serialize(node) == "<d>Fast &amp; &lt;light&gt;</d>\n"

    def test_attribute_escaping(self) -> None:
        node = DocumentNode.element("a", children=[DocumentNode.attribute("t", 'say "hi" & go')])
        assert DocumentSerializer(BARE).serialize(node) == '<a t="say &quot;hi&quot; &amp; go"/>\n'

    def test_escaped_values_parse_back(self, parser: DocumentParser) -> None:
        node = DocumentNode.element(
            "a",
            children=[
                DocumentNode.attribute("t", 'x"<>&'),
                DocumentNode.element("d", "1 < 2 & 3 > 2"),
            ],
        )
        assert parser.parse(DocumentSerializer().serialize(node)) == node


class TestFormatting:
    def test_declaration_by_default(self) -> None:
        text = DocumentSerializer().serialize(DocumentNode.element("a", "1"))
        assert text == '<?xml version="1.0" encoding="UTF-8"?>\n<a>1</a>\n'

    def test_custom_indent_and_newline(self) -> None:
        config = SerializerConfig(indent="\t", newline="\r\n", xml_declaration=False)
        node = DocumentNode.element("a", children=[DocumentNode.element("b", "1")])
        assert DocumentSerializer(config).serialize(node) == "<a>\r\n\t<b>1</b>\r\n</a>\r\n"

    def test_serializing_twice_is_byte_identical(
        self, parser: DocumentParser, serializer: DocumentSerializer, yml_feed: str
    ) -> None:
        tree = parser.parse(yml_feed)
        assert serializer.serialize(tree) == serializer.serialize(tree)

    def test_reparse_is_structurally_equal(
        self, parser: DocumentParser, serializer: DocumentSerializer, yml_feed: str
    ) -> None:
        tree = parser.parse(yml_feed)
        assert parser.parse(serializer.serialize(tree)) == tree

    def test_canonical_text_is_a_fixed_point(
        self, parser: DocumentParser, serializer: DocumentSerializer, google_feed: str
    ) -> None:
        first = serializer.serialize(parser.parse(google_feed))
        assert serializer.serialize(parser.parse(first)) == first

    @pytest.mark.parametrize(
        "text",
        [
            '<r a="1">hello<b>x</b></r>',
            '<shop>\n  <offer id="1">  spaced  <name>A</name></offer>\n</shop>',
        ],
    )
    def test_fixed_point_without_text_stripping(self, text: str) -> None:
        parser = DocumentParser(ParserConfig(strip_text=False))
        tree = parser.parse(text)
        first = DocumentSerializer().serialize(tree)
        second = DocumentSerializer().serialize(parser.parse(first))
        assert second == first
        assert parser.parse(first) == tree


class TestFormatScalar:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(True, "true"), (False, "false"), (3, "3"), (4.5, "4.5"), ("x", "x")],
    )
    def test_format_scalar(self, value: object, expected: str) -> None:
        assert format_scalar(value) == expected  # type: ignore[arg-type]
