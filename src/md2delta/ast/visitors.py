#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/ast/visitors.py
"""Visitor base class for walking md2delta AST nodes.

Every node implements ``accept(visitor)``, which calls the ``visit_*`` method
named after the node class. The markdown renderer behind the literal fallback
is the one concrete visitor; the Delta compiler dispatches through its handler
chain instead, since handlers need the enclosing ancestors of each node.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

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
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)


class NodeVisitor(ABC):
    """Abstract visitor with one method per node class.

    Each ``visit_*`` method receives the node and may return anything; the
    renderer returns nothing and writes into its own buffer. Visitors are
    responsible for recursing into children themselves.

    Examples
    --------
    Collecting plain text:

        >>> class TextCollector(NodeVisitor):
        ...     def __init__(self):
        ...         self.parts = []
        ...
        ...     def visit_text(self, node):
        ...         self.parts.append(node.content)
        ...
        ...     # other visit_* methods recurse into children

    """

    # Block nodes

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit the root document."""

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a heading (levels 1-6)."""

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a paragraph."""

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a fenced or indented code block."""

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a block quote."""

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit an ordered or bullet list."""

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a list item, including task items."""

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a table."""

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a table row."""

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a table cell."""

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        """Visit a thematic break."""

    @abstractmethod
    def visit_html_block(self, node: HTMLBlock) -> Any:
        """Visit a raw HTML block."""

    @abstractmethod
    def visit_footnote_definition(self, node: FootnoteDefinition) -> Any:
        """Visit a footnote definition."""

    # Inline nodes

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a plain text run."""

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit emphasized (italic) content."""

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit strong (bold) content."""

    @abstractmethod
    def visit_strikethrough(self, node: Strikethrough) -> Any:
        """Visit struck-through content."""

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit an inline code span."""

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a hyperlink."""

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an image."""

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a hard or soft line break."""

    @abstractmethod
    def visit_html_inline(self, node: HTMLInline) -> Any:
        """Visit inline raw HTML."""

    @abstractmethod
    def visit_footnote_reference(self, node: FootnoteReference) -> Any:
        """Visit a footnote reference."""

    # Extension nodes

    @abstractmethod
    def visit_custom_node(self, node: CustomNode) -> Any:
        """Visit a caller-defined node."""


__all__ = ["NodeVisitor"]
