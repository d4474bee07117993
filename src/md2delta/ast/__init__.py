#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/ast/__init__.py
"""Abstract Syntax Tree (AST) module for document representation.

The AST is the input of the Delta compiler. Trees are usually produced by
``md2delta.parsers.markdown.MarkdownToAstConverter`` but may equally be built by hand
or by any tool that emits these node classes.

- nodes: AST node classes representing document structure
- visitors: Visitor pattern base class
- utils: Text extraction helpers

Examples
--------
    >>> from md2delta.ast import Document, Heading, Text
    >>> from md2delta.delta import DeltaConverter
    >>>
    >>> doc = Document(children=[Heading(level=1, content=[Text(content="Title")])])
    >>> DeltaConverter().convert(doc)
    [{'insert': 'Title'}, {'insert': '\\n', 'attributes': {'header': 1}}]

"""

from __future__ import annotations

from md2delta.ast.nodes import (
    Alignment,
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
    get_node_children,
    replace_node_children,
)
from md2delta.ast.utils import extract_text
from md2delta.ast.visitors import NodeVisitor

__all__ = [
    # Nodes
    "Node",
    "Alignment",
    "Document",
    "Heading",
    "Paragraph",
    "CodeBlock",
    "BlockQuote",
    "List",
    "ListItem",
    "Table",
    "TableRow",
    "TableCell",
    "ThematicBreak",
    "HTMLBlock",
    "FootnoteDefinition",
    "Text",
    "Emphasis",
    "Strong",
    "Strikethrough",
    "Code",
    "Link",
    "Image",
    "LineBreak",
    "HTMLInline",
    "FootnoteReference",
    "CustomNode",
    # Node helpers
    "get_node_children",
    "replace_node_children",
    # Visitors
    "NodeVisitor",
    # Utilities
    "extract_text",
]
