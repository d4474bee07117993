"""Unit tests for the mistune-backed markdown parser."""

import io

import pytest

from md2delta.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    Image,
    LineBreak,
    Link,
    List,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    Text,
    ThematicBreak,
)
from md2delta.exceptions import InvalidOptionsError, ParsingError, ValidationError
from md2delta.options import MarkdownParserOptions, MarkdownRendererOptions
from md2delta.parsers.markdown import MarkdownToAstConverter, markdown_to_ast


@pytest.mark.unit
class TestBlockParsing:
    """Tests for block-level token mapping."""

    def test_heading(self):
        """ATX headings keep their level and inline content."""
        doc = markdown_to_ast("## Title")
        heading = doc.children[0]

        assert isinstance(heading, Heading)
        assert heading.level == 2
        assert heading.content == [Text(content="Title")]

    def test_soft_break_folds_into_text(self):
        """A soft line break becomes a newline inside one text node."""
        doc = markdown_to_ast("first\nsecond")
        assert doc.children[0].content == [Text(content="first\nsecond")]

    def test_hard_break(self):
        """A backslash hard break becomes a LineBreak between texts."""
        paragraph = markdown_to_ast("a\\\nb").children[0]

        assert isinstance(paragraph, Paragraph)
        assert [type(node) for node in paragraph.content] == [Text, LineBreak, Text]

    def test_fenced_code_drops_final_newline(self):
        """Code content has no trailing line ending; the language is kept."""
        block = markdown_to_ast("```python\nprint(1)\n```").children[0]

        assert isinstance(block, CodeBlock)
        assert block.content == "print(1)"
        assert block.language == "python"

    def test_block_quote(self):
        """Block quotes wrap their block children."""
        quote = markdown_to_ast("> quoted").children[0]

        assert isinstance(quote, BlockQuote)
        assert isinstance(quote.children[0], Paragraph)

    def test_lists(self):
        """Ordered lists keep their start number."""
        ordered = markdown_to_ast("3. c\n4. d").children[0]

        assert isinstance(ordered, List)
        assert ordered.ordered
        assert ordered.start == 3
        assert len(ordered.items) == 2

    def test_nested_list(self):
        """A nested list is a child of its parent item."""
        outer = markdown_to_ast("- a\n  - b").children[0]
        item = outer.items[0]

        assert isinstance(item.children[0], Paragraph)
        assert isinstance(item.children[1], List)
        assert not item.children[1].ordered

    def test_task_list_items(self):
        """Task markers set the checked state and are removed from the text."""
        items = markdown_to_ast("- [x] done\n- [ ] todo\n- plain").children[0].items

        assert [item.checked for item in items] == [True, False, None]
        assert items[0].children[0].content == [Text(content="done")]

    def test_thematic_break(self):
        """A horizontal rule maps to ThematicBreak."""
        assert isinstance(markdown_to_ast("a\n\n***").children[1], ThematicBreak)

    def test_table(self):
        """GFM tables produce a header row and body rows."""
        table = markdown_to_ast("| a | b |\n|:--|--:|\n| 1 | 2 |").children[0]

        assert isinstance(table, Table)
        assert table.header.is_header
        assert len(table.rows) == 1
        assert table.alignments == ["left", "right"]

    def test_tables_can_be_disabled(self):
        """Without the table extension the source is a paragraph."""
        parser = MarkdownToAstConverter(MarkdownParserOptions(parse_tables=False))
        doc = parser.parse("| a | b |\n|---|---|\n| 1 | 2 |")

        assert isinstance(doc.children[0], Paragraph)

    def test_footnotes(self):
        """Footnote references and definitions are both kept."""
        doc = markdown_to_ast("See[^1]\n\n[^1]: The note")

        assert doc.children[0].content[-1] == FootnoteReference(identifier="1")
        definition = doc.children[-1]
        assert isinstance(definition, FootnoteDefinition)
        assert definition.identifier == "1"


@pytest.mark.unit
class TestInlineParsing:
    """Tests for inline token mapping."""

    def test_formatting(self):
        """Strong, emphasis and strikethrough nest as parsed."""
        content = markdown_to_ast("**b** *i* ~~s~~").children[0].content

        assert isinstance(content[0], Strong)
        assert isinstance(content[2], Emphasis)
        assert isinstance(content[4], Strikethrough)

    def test_inline_code(self):
        """Code spans keep their literal content."""
        content = markdown_to_ast("run `x()` now").children[0].content
        assert content[1] == Code(content="x()")

    def test_link(self):
        """Inline links keep url, title and text."""
        link = markdown_to_ast('[text](https://example.com "Title")').children[0].content[0]

        assert isinstance(link, Link)
        assert link.url == "https://example.com"
        assert link.title == "Title"
        assert link.content == [Text(content="text")]

    def test_bare_url_autolink(self):
        """Bare URLs become links when autolinks are enabled."""
        content = markdown_to_ast("visit https://example.com").children[0].content
        assert any(isinstance(node, Link) for node in content)

    def test_image_alt_text(self):
        """Image alt text is flattened from the label."""
        image = markdown_to_ast("![a *cat*](cat.png)").children[0].content[0]

        assert isinstance(image, Image)
        assert image.url == "cat.png"
        assert image.alt_text == "a cat"


@pytest.mark.unit
class TestParserInputAndOptions:
    """Tests for input handling, options and frontmatter."""

    def test_rejects_wrong_options_type(self):
        """Renderer options cannot configure the parser."""
        with pytest.raises(InvalidOptionsError):
            MarkdownToAstConverter(MarkdownRendererOptions())

    def test_bytes_and_streams(self):
        """Bytes and text streams are accepted as input."""
        parser = MarkdownToAstConverter()

        assert parser.parse(b"# Hi").children[0].level == 1
        assert parser.parse(io.StringIO("# Hi")).children[0].level == 1

    def test_unsupported_input_type(self):
        """Other input types raise ValidationError."""
        with pytest.raises(ValidationError):
            MarkdownToAstConverter().parse(42)

    def test_frontmatter_off_by_default(self):
        """Without parse_frontmatter the block is parsed as markdown."""
        doc = markdown_to_ast("---\ntitle: x\n---\nBody")
        assert doc.metadata == {}

    def test_yaml_frontmatter(self):
        """YAML frontmatter is stripped into document metadata."""
        options = MarkdownParserOptions(parse_frontmatter=True)
        doc = markdown_to_ast("---\ntitle: Hello\ntags: [a, b]\n---\nBody", options)

        assert doc.metadata == {"title": "Hello", "tags": ["a", "b"]}
        assert doc.children == [Paragraph(content=[Text(content="Body")])]

    def test_toml_frontmatter(self):
        """TOML frontmatter uses +++ delimiters."""
        options = MarkdownParserOptions(parse_frontmatter=True)
        doc = markdown_to_ast('+++\ntitle = "Hello"\n+++\nBody', options)

        assert doc.metadata == {"title": "Hello"}

    def test_invalid_frontmatter(self):
        """Malformed frontmatter raises ParsingError."""
        options = MarkdownParserOptions(parse_frontmatter=True)

        with pytest.raises(ParsingError) as exc_info:
            markdown_to_ast("---\n- just\n- a list\n---\nBody", options)

        assert exc_info.value.parsing_stage == "frontmatter"
