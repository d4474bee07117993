#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/renderers/markdown.py
"""Markdown rendering from AST.

This module provides the MarkdownRenderer class which converts AST nodes back
to GitHub Flavored Markdown text. The Delta converter uses it to produce the
literal source of nodes it has no dedicated handler for (tables, thematic
breaks, raw HTML, footnotes, caller-defined kinds).

The renderer uses the visitor pattern and keeps list nesting context (marker
stack and indentation) during traversal.

"""

from __future__ import annotations

import logging
import re

from md2delta.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    CustomNode,
    Document,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from md2delta.ast.visitors import NodeVisitor
from md2delta.options.markdown import MarkdownRendererOptions
from md2delta.renderers.base import BaseRenderer, OutputCaptureMixin
from md2delta.utils.security import sanitize_language_identifier

logger = logging.getLogger(__name__)

_BLOCK_NODE_TYPES = (
    BlockQuote,
    CodeBlock,
    Document,
    FootnoteDefinition,
    Heading,
    HTMLBlock,
    List,
    ListItem,
    Paragraph,
    Table,
    ThematicBreak,
)

# Backslash, backtick, asterisk, braces and brackets anywhere; '#' only as the
# first character; '_' everywhere, filtered by _escape_match
_ESCAPABLE = re.compile(r"[\\`*{}\[\]_]|^#")

_ALIGNMENT_MARKERS = {"left": ":---", "center": ":---:", "right": "---:"}

BLOCK_SEPARATOR = "\n\n"
FOOTNOTE_INDENT = "    "


class MarkdownRenderer(NodeVisitor, OutputCaptureMixin, BaseRenderer):
    """Render AST nodes to markdown text.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Markdown formatting options

    Examples
    --------
        >>> doc = Document(children=[Heading(level=1, content=[Text(content="Title")])])
        >>> MarkdownRenderer().render_to_string(doc)
        '# Title'

    """

    def __init__(self, options: MarkdownRendererOptions | None = None):
        BaseRenderer._validate_options_type(options, MarkdownRendererOptions, "markdown")
        options = options or MarkdownRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownRendererOptions = options
        self._output: list[str] = []
        # Marker of each enclosing list, and the width each open item indents by
        self._markers: list[str] = []
        self._item_widths: list[int] = []

    def render_to_string(self, document: Document) -> str:
        """Render *document* to markdown.

        Line endings are normalized to ``\\n`` and trailing whitespace is
        removed, so a single block renders without a final newline.

        """
        self._output = []
        self._markers = []
        self._item_widths = []
        document.accept(self)
        text = "".join(self._output)
        self._output = []
        return text.replace("\r\n", "\n").replace("\r", "\n").rstrip()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _escape_match(self, match: re.Match[str]) -> str:
        char = match.group()
        if char == "_":
            text, pos = match.string, match.start()
            inside_word = 0 < pos < len(text) - 1 and text[pos - 1].isalnum() and text[pos + 1].isalnum()
            if inside_word:
                return char
        return "\\" + char

    def _escape(self, text: str) -> str:
        """Backslash-escape markdown syntax characters in plain text.

        ``_`` between two alphanumerics is left alone so ``snake_case`` stays
        readable.
        """
        if not self.options.escape_special:
            return text
        return _ESCAPABLE.sub(self._escape_match, text)

    def _indent(self) -> str:
        return " " * sum(self._item_widths)

    def _bullet(self) -> str:
        symbols = self.options.bullet_symbols
        return f"{symbols[len(self._markers) % len(symbols)]} "

    def _blocks(self, nodes: list[Node]) -> str:
        return BLOCK_SEPARATOR.join(self._capture([child]) for child in nodes)

    def _cell_texts(self, row: TableRow) -> list[str]:
        texts = [self._capture(cell.content) for cell in row.cells]
        if self.options.table_pipe_escape:
            texts = [text.replace("|", "\\|") for text in texts]
        return texts

    def _row_line(self, row: TableRow) -> str:
        return "| " + " | ".join(self._cell_texts(row)) + " |"

    @staticmethod
    def _separator_line(alignments: list, columns: int) -> str:
        markers = [_ALIGNMENT_MARKERS.get(alignment or "", "---") for alignment in alignments[:columns]]
        markers += ["---"] * (columns - len(markers))
        return "|" + "|".join(markers) + "|"

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        self._output.append(self._blocks(node.children))

    def visit_heading(self, node: Heading) -> None:
        """ATX style: ``#`` repeated ``level`` times."""
        self._output.append("#" * node.level + " " + self._capture(node.content))

    def visit_paragraph(self, node: Paragraph) -> None:
        """Every line of a paragraph inside a list item starts at the item's content column."""
        indent = self._indent()
        text = self._capture(node.content)
        if indent:
            text = indent + text.replace("\n", "\n" + indent)
        self._output.append(text)

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a fenced code block.

        The fence is one character longer than the longest run of the fence
        character inside the code, and never shorter than ``code_fence_min``.

        Parameters
        ----------
        node : CodeBlock
            Code block to render

        """
        char = self.options.code_fence_char
        runs = re.findall(re.escape(char) + "+", node.content)
        fence = char * max([self.options.code_fence_min] + [len(run) + 1 for run in runs])
        language = sanitize_language_identifier(node.language) if node.language else ""

        body = node.content
        if body and not body.endswith("\n"):
            body += "\n"
        self._output.append(f"{fence}{language}\n{body}{fence}")

    def visit_block_quote(self, node: BlockQuote) -> None:
        quoted = self._blocks(node.children).split("\n")
        self._output.append("\n".join("> " + line if line else ">" for line in quoted))

    def visit_list(self, node: List) -> None:
        """Render list items one per line, or blank-line separated when loose.

        Ordered markers count up from ``node.start``. Bullet markers cycle
        through ``bullet_symbols`` by nesting depth.

        """
        rendered = []
        for offset, item in enumerate(node.items):
            self._markers.append(f"{node.start + offset}. " if node.ordered else self._bullet())
            try:
                rendered.append(self._capture([item]))
            finally:
                self._markers.pop()
        self._output.append(("\n" if node.tight else BLOCK_SEPARATOR).join(rendered))

    def visit_list_item(self, node: ListItem) -> None:
        """Render an item: marker, first block on the marker line, then the rest.

        Parameters
        ----------
        node : ListItem
            List item to render. A non-None ``checked`` adds a task box.

        """
        marker = self._markers[-1] if self._markers else "* "
        if node.checked is not None:
            marker += "[x] " if node.checked else "[ ] "

        parts = [self._indent() + marker]
        self._item_widths.append(len(marker))
        try:
            if node.children:
                # The first block renders unindented, then its continuation
                # lines are shifted to the content column
                outer_widths, self._item_widths = self._item_widths, []
                try:
                    first = self._capture(node.children[:1])
                finally:
                    self._item_widths = outer_widths
                parts.append(first.replace("\n", "\n" + self._indent()))
            parts.extend("\n" + self._capture([child]) for child in node.children[1:])
        finally:
            self._item_widths.pop()
        self._output.append("".join(parts))

    def visit_table(self, node: Table) -> None:
        """Render a GFM pipe table, with a separator row after the header.

        Examples
        --------
        A one-row table renders as::

            | name | age |
            |---|---|
            | test | 17 |

        """
        rows = ([node.header] if node.header else []) + list(node.rows)
        if not rows:
            return

        lines = [self._row_line(row) for row in rows]
        if node.header:
            lines.insert(1, self._separator_line(list(node.alignments), len(rows[0].cells)))
        self._output.append("\n".join(lines))

    def visit_table_row(self, node: TableRow) -> None:
        self._output.append(self._row_line(node))

    def visit_table_cell(self, node: TableCell) -> None:
        self._output.append(self._capture(node.content))

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        self._output.append("---")

    def visit_html_block(self, node: HTMLBlock) -> None:
        self._output.append(node.content)

    def visit_footnote_definition(self, node: FootnoteDefinition) -> None:
        """Continuation blocks of a footnote are indented by four spaces."""
        blocks = [self._capture([child]) for child in node.content]
        text = f"[^{node.identifier}]: " + (blocks[0] if blocks else "")
        for block in blocks[1:]:
            text += BLOCK_SEPARATOR + FOOTNOTE_INDENT + block.replace("\n", "\n" + FOOTNOTE_INDENT)
        self._output.append(text)

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        self._output.append(self._escape(node.content))

    def _wrap(self, delimiter: str, content: list[Node]) -> None:
        self._output.append(delimiter + self._capture(content) + delimiter)

    def visit_emphasis(self, node: Emphasis) -> None:
        self._wrap(self.options.emphasis_symbol, node.content)

    def visit_strong(self, node: Strong) -> None:
        self._wrap("**", node.content)

    def visit_strikethrough(self, node: Strikethrough) -> None:
        self._wrap("~~", node.content)

    def visit_code(self, node: Code) -> None:
        """A span containing a backtick is fenced with two, padded if it touches the fence."""
        code = node.content
        ticks = "``" if "`" in code else "`"
        pad = " " if code.startswith("`") or code.endswith("`") else ""
        self._output.append(f"{ticks}{pad}{code}{pad}{ticks}")

    @staticmethod
    def _destination(url: str, title: str | None) -> str:
        return f'({url} "{title}")' if title else f"({url})"

    def visit_link(self, node: Link) -> None:
        self._output.append(f"[{self._capture(node.content)}]" + self._destination(node.url, node.title))

    def visit_image(self, node: Image) -> None:
        alt = node.alt_text.replace("[", "\\[").replace("]", "\\]")
        self._output.append(f"![{alt}]" + self._destination(node.url, node.title))

    def visit_line_break(self, node: LineBreak) -> None:
        """Soft breaks are a plain newline, hard breaks a backslash-newline."""
        self._output.append("\n" if node.soft else "\\\n")

    def visit_html_inline(self, node: HTMLInline) -> None:
        self._output.append(node.content)

    def visit_footnote_reference(self, node: FootnoteReference) -> None:
        self._output.append(f"[^{node.identifier}]")

    def visit_custom_node(self, node: CustomNode) -> None:
        """Render a CustomNode.

        A string ``value`` is taken to be the node's literal source and is
        written unchanged. Otherwise the children are rendered, as blocks when
        any child is block-level and inline otherwise.

        Parameters
        ----------
        node : CustomNode
            Custom node to render

        """
        if isinstance(node.value, str):
            self._output.append(node.value)
            return

        if not node.children:
            logger.debug("Custom node '%s' has no literal value or children to render", node.kind)
            return

        if any(isinstance(child, _BLOCK_NODE_TYPES) for child in node.children):
            self._output.append(self._blocks(node.children))
        else:
            self._output.append(self._capture(node.children))
