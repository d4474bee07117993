"""End-to-end tests: markdown text in, Delta operations out."""

import pytest

from md2delta import DeltaOptions, MarkdownParserOptions, ValidationError, markdown_to_ast, markdown_to_delta
from md2delta.ast import CustomNode, Document, Link, Paragraph, Table, Text, ThematicBreak
from md2delta.delta import merge_consecutive_ordered_lists
from md2delta.delta.ops import make_op
from md2delta.renderers.markdown import MarkdownRenderer


def _terminators(ops):
    return [op.get("attributes") for op in ops if op["insert"] == "\n"]


@pytest.mark.integration
class TestScenarios:
    """Documented input/output scenarios."""

    def test_heading_with_bold(self):
        """A heading with bold text."""
        assert markdown_to_delta("# Hello, **world**!") == [
            {"insert": "Hello, "},
            {"insert": "world", "attributes": {"bold": True}},
            {"insert": "!"},
            {"insert": "\n", "attributes": {"header": 1}},
        ]

    def test_task_list(self):
        """Unchecked and checked task items."""
        assert markdown_to_delta("- [ ] task1\n- [x] task2") == [
            {"insert": "task1"},
            {"insert": "\n", "attributes": {"list": "unchecked"}},
            {"insert": "task2"},
            {"insert": "\n", "attributes": {"list": "checked"}},
        ]

    def test_task_items_in_ordered_list(self):
        """Task state wins over the ordered flag."""
        ops = markdown_to_delta("1. [x] done\n2. [ ] open")
        assert _terminators(ops) == [{"list": "checked"}, {"list": "unchecked"}]

    def test_table_falls_back_to_markdown(self):
        """A table becomes one unformatted op holding its markdown source."""
        source = "| name | age |\n|---|---|\n| test | 17 |"
        doc = markdown_to_ast(source)
        assert isinstance(doc.children[0], Table)

        ops = markdown_to_delta(source)

        assert ops == [{"insert": MarkdownRenderer().render_to_string(doc) + "\n"}]
        assert ops == [{"insert": source + "\n"}]

    def test_paragraph_after_table_starts_new_line(self):
        """Text after a table is not glued to the table's last row."""
        assert markdown_to_delta("name|age\n-|-\ntest|17\n\nafter") == [
            {"insert": "| name | age |\n|---|---|\n| test | 17 |\n"},
            {"insert": "after"},
            {"insert": "\n"},
        ]

    def test_thematic_break_between_paragraphs(self):
        """A literal thematic break sits on its own line between paragraphs."""
        ops = markdown_to_delta("a\n\n---\n\nb")

        assert ops == [{"insert": "a"}, {"insert": "\n"}, {"insert": "---\n"}, {"insert": "b"}, {"insert": "\n"}]
        assert "".join(op["insert"] for op in ops) == "a\n---\nb\n"

    def test_hard_break_between_text(self):
        """A hard break between texts fuses into one op."""
        assert markdown_to_delta("first\\\nsecond") == [{"insert": "first\nsecond"}, {"insert": "\n"}]

    def test_soft_break_stays_in_text(self):
        """A soft break is part of the text itself."""
        assert markdown_to_delta("first\nsecond") == [{"insert": "first\nsecond"}, {"insert": "\n"}]

    def test_two_hard_breaks(self):
        """Only the first of two hard breaks folds the following text in."""
        assert markdown_to_delta("a\\\nb\\\nc") == [
            {"insert": "a\nb"},
            {"insert": "\n"},
            {"insert": "c"},
            {"insert": "\n"},
        ]

    def test_hard_break_after_bold(self):
        """A hard break after formatted text is a separate newline."""
        assert markdown_to_delta("**a**\\\nb") == [
            {"insert": "a", "attributes": {"bold": True}},
            {"insert": "\n"},
            {"insert": "b"},
            {"insert": "\n"},
        ]

    def test_full_document(self, sample_markdown):
        """Every built-in handler in one document."""
        assert markdown_to_delta(sample_markdown) == [
            {"insert": "Sample Document"},
            {"insert": "\n", "attributes": {"header": 1}},
            {"insert": "This is a "},
            {"insert": "sample", "attributes": {"bold": True}},
            {"insert": " with "},
            {"insert": "italic text", "attributes": {"italic": True}},
            {"insert": ", "},
            {"insert": "struck", "attributes": {"strike": True}},
            {"insert": " and "},
            {"insert": "inline code", "attributes": {"code": True}},
            {"insert": "."},
            {"insert": "\n"},
            {"insert": "Quoted line"},
            {"insert": "\n", "attributes": {"blockquote": True}},
            {"insert": "Item 1"},
            {"insert": "\n", "attributes": {"list": "bullet"}},
            {"insert": "Item 2"},
            {"insert": "\n", "attributes": {"list": "bullet"}},
            {"insert": "Nested first"},
            {"insert": "\n", "attributes": {"list": "ordered", "indent": 1}},
            {"insert": "a link", "attributes": {"link": "https://example.com"}},
            {"insert": " and "},
            {"insert": {"image": "image.png"}, "attributes": {"alt": "alt text"}},
            {"insert": "\n"},
            {"insert": 'print("hi")'},
            {"insert": "\n", "attributes": {"code-block": True}},
        ]


@pytest.mark.integration
class TestOrderedListMerging:
    """Interleaved ordered and bullet lists."""

    SOURCE = "1. a\n2. b\n\n- x\n\n1. c\n\n- y"

    def test_ops_keep_document_order(self):
        """Ordered items stay ordered and bullets stay interleaved in place."""
        ops = markdown_to_delta(self.SOURCE)

        texts = [op["insert"] for op in ops if op["insert"] != "\n"]
        kinds = [attributes["list"] for attributes in _terminators(ops)]

        assert texts == ["a", "b", "x", "c", "y"]
        assert kinds == ["ordered", "ordered", "bullet", "ordered", "bullet"]

    def test_segments_share_a_group(self):
        """The ordered segments form one numbering group."""
        merged = merge_consecutive_ordered_lists(markdown_to_ast(self.SOURCE))
        ordered = [child for child in merged.children if child.ordered]

        assert [segment.start for segment in ordered] == [1, 3]
        assert {segment.metadata["list_group"] for segment in ordered} == {0}


@pytest.mark.integration
class TestExtensibility:
    """Custom handlers through the public API."""

    def test_thematic_break_override(self):
        """A custom handler replaces the fallback for one kind."""

        def divider(ctx):
            if isinstance(ctx.node, ThematicBreak):
                ctx.ops.append(make_op({"divider": True}))
                return True
            return False

        assert markdown_to_delta("a\n\n---\n\nb", divider) == [
            {"insert": "a"},
            {"insert": "\n"},
            {"insert": {"divider": True}},
            {"insert": "b"},
            {"insert": "\n"},
        ]

    def test_thematic_break_default(self):
        """Without a custom handler a thematic break is literal text."""
        assert markdown_to_delta("a\n\n---")[-1] == {"insert": "---\n"}

    def test_custom_node_delegates_to_link(self):
        """A caller-defined node is rendered through the link handler."""

        def wiki_link(ctx):
            node = ctx.node
            if isinstance(node, CustomNode) and node.kind == "wikiLink":
                alias = node.data.get("alias", node.value)
                ctx.process(Link(url=f"/wiki/{node.value}", content=[Text(content=alias)]), ctx.ancestors)
                return True
            return False

        doc = Document(
            children=[
                Paragraph(
                    content=[
                        Text(content="See "),
                        CustomNode(kind="wikiLink", value="Home", data={"alias": "the home page"}),
                    ]
                )
            ]
        )

        assert markdown_to_delta(doc, wiki_link) == [
            {"insert": "See "},
            {"insert": "the home page", "attributes": {"link": "/wiki/Home"}},
            {"insert": "\n"},
        ]

    def test_unhandled_custom_node_uses_literal_value(self):
        """Without a handler, a custom node's string value is inserted."""
        doc = Document(children=[CustomNode(kind="wikiLink", value="[[Home]]")])
        assert markdown_to_delta(doc) == [{"insert": "[[Home]]\n"}]


@pytest.mark.integration
class TestApiOptions:
    """Options and input validation through markdown_to_delta."""

    def test_rejects_unsupported_source(self):
        """Only text and documents are accepted."""
        with pytest.raises(ValidationError):
            markdown_to_delta(b"# bytes")  # type: ignore[arg-type]

    def test_line_break_merging_disabled(self):
        """merge_line_breaks=False keeps breaks as separate newlines."""
        ops = markdown_to_delta("a\\\nb", options=DeltaOptions(merge_line_breaks=False))
        assert ops == [{"insert": "a"}, {"insert": "\n"}, {"insert": "b"}, {"insert": "\n"}]

    def test_frontmatter_is_not_converted(self):
        """Parsed frontmatter goes to metadata, not into the ops."""
        source = "---\ntitle: Post\n---\nBody"
        ops = markdown_to_delta(source, parser_options=MarkdownParserOptions(parse_frontmatter=True))
        assert ops == [{"insert": "Body"}, {"insert": "\n"}]

    def test_footnotes_fall_back(self):
        """Footnote references and definitions are inserted as markdown."""
        ops = markdown_to_delta("See[^1]\n\n[^1]: Note")
        assert ops == [{"insert": "See"}, {"insert": "[^1]"}, {"insert": "\n"}, {"insert": "[^1]: Note\n"}]
