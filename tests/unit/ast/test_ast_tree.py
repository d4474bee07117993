"""Unit tests for AST nodes, child helpers, visitors and text extraction."""

import pytest

from md2delta.ast import (
    CustomNode,
    Document,
    Heading,
    Image,
    Link,
    List,
    ListItem,
    Paragraph,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    extract_text,
    get_node_children,
    replace_node_children,
)
from md2delta.renderers.markdown import MarkdownRenderer


@pytest.mark.unit
class TestNodes:
    """Tests for node construction and validation."""

    def test_heading_level_validation(self):
        """Heading levels outside 1-6 are rejected."""
        with pytest.raises(ValueError):
            Heading(level=7)
        with pytest.raises(ValueError):
            Heading(level=0)

    def test_defaults(self):
        """Optional fields have neutral defaults."""
        item = ListItem()
        assert item.checked is None
        assert item.children == []
        assert List(ordered=True).start == 1
        assert Image(url="x.png").alt_text == ""

    def test_custom_node_fields(self):
        """Custom nodes carry a kind, a value and free-form data."""
        node = CustomNode(kind="wikiLink", value="Home", data={"alias": "Home page"})
        assert (node.kind, node.value, node.data["alias"]) == ("wikiLink", "Home", "Home page")

    def test_accept_dispatches_by_kind(self):
        """Nodes call the visitor method named after their kind."""
        renderer = MarkdownRenderer()
        renderer._output = []

        CustomNode(kind="x", value="literal").accept(renderer)

        assert renderer._output == ["literal"]

    def test_shared_fields_are_keyword_only(self):
        """metadata follows the node's own fields and is keyword-only."""
        node = Text("hi", metadata={"k": 1})

        assert node.content == "hi"
        assert node.metadata == {"k": 1}
        with pytest.raises(TypeError):
            Text("hi", {"k": 1})  # type: ignore[misc]


@pytest.mark.unit
class TestChildHelpers:
    """Tests for get_node_children and replace_node_children."""

    def test_children_by_attribute(self):
        """Children come from children, content, items or rows as appropriate."""
        text = Text(content="a")
        item = ListItem(children=[Paragraph(content=[text])])

        assert get_node_children(Paragraph(content=[text])) == [text]
        assert get_node_children(List(ordered=False, items=[item])) == [item]
        assert get_node_children(text) == []

    def test_table_children_include_header(self):
        """A table's children are its header followed by its rows."""
        header = TableRow(cells=[TableCell()], is_header=True)
        row = TableRow(cells=[TableCell()])
        assert get_node_children(Table(header=header, rows=[row])) == [header, row]

    def test_children_are_copied(self):
        """Mutating the returned list does not touch the node."""
        paragraph = Paragraph(content=[Text(content="a")])
        get_node_children(paragraph).clear()
        assert len(paragraph.content) == 1

    def test_replace_children(self):
        """Replacement returns a new node and keeps the original."""
        original = Strong(content=[Text(content="a")])
        replaced = replace_node_children(original, [Text(content="b")])

        assert replaced.content == [Text(content="b")]
        assert original.content == [Text(content="a")]

    def test_replace_table_children_requires_rows(self):
        """Tables accept only rows as children."""
        with pytest.raises(ValueError):
            replace_node_children(Table(), [Text(content="x")])


@pytest.mark.unit
class TestExtractText:
    """Tests for extract_text."""

    def test_nested_text(self):
        """Text is gathered through formatting and links."""
        doc = Document(
            children=[
                Paragraph(
                    content=[Text(content="a "), Strong(content=[Link(url="/", content=[Text(content="b")])])]
                )
            ]
        )
        assert extract_text(doc, joiner="") == "a b"

    def test_default_joiner(self):
        """Parts are joined with a space by default."""
        assert extract_text([Text(content="a"), Text(content="b")]) == "a b"
