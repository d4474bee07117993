#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/ast/nodes.py
"""Document tree for the Delta compiler.

Every markdown construct the parser recognizes has a node class here, and
callers can add their own constructs through ``CustomNode``. The tree covers
CommonMark plus the GFM extensions (tables, strikethrough, task lists,
footnotes, autolinks).

Node kinds
----------
Blocks:
    Document, Heading, Paragraph, CodeBlock, BlockQuote, List, ListItem,
    Table, TableRow, TableCell, ThematicBreak, HTMLBlock, FootnoteDefinition

Inline:
    Text, Emphasis, Strong, Strikethrough, Code, Link, Image, LineBreak,
    HTMLInline, FootnoteReference

Extension:
    CustomNode

Nodes own their children and never point back at a parent. Whoever walks the
tree keeps the ancestor chain. A container names the attribute its children
live in through ``children_field``, which is what :func:`get_node_children`
and :func:`replace_node_children` read.

"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Literal, Optional

Alignment = Literal["left", "center", "right"]


@dataclass
class Node(ABC):
    """Base class for every node in the tree.

    Concrete nodes are dataclasses that inherit the keyword-only
    ``metadata`` field, which the per-class parameter lists below leave out.
    Each subclass names its visitor method in ``visit_method``.

    Attributes
    ----------
    metadata : dict
        Free-form annotations. Tree transforms use it too, e.g. the ordered
        list merge records ``list_group`` here.

    """

    visit_method: ClassVar[str] = ""
    children_field: ClassVar[Optional[str]] = None

    metadata: dict[str, Any] = field(default_factory=dict, kw_only=True)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to the ``visit_*`` method named by ``visit_method``."""
        return getattr(visitor, self.visit_method)(self)


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root of the tree; the compiler starts here.

    Frontmatter fields end up in ``metadata`` when the parser runs with
    ``parse_frontmatter=True``.

    Parameters
    ----------
    children : list of Node, default = empty list
        Top-level blocks in source order

    """

    visit_method: ClassVar[str] = "visit_document"
    children_field: ClassVar[Optional[str]] = "children"

    children: list[Node] = field(default_factory=list)


@dataclass
class Heading(Node):
    """ATX or setext heading.

    Parameters
    ----------
    level : int
        1 for ``#`` up to 6 for ``######``
    content : list of Node, default = empty list
        Inline heading text

    Raises
    ------
    ValueError
        If level is outside 1-6

    """

    visit_method: ClassVar[str] = "visit_heading"
    children_field: ClassVar[Optional[str]] = "content"

    level: int
    content: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")


@dataclass
class Paragraph(Node):
    """A run of inline content ended by a blank line."""

    visit_method: ClassVar[str] = "visit_paragraph"
    children_field: ClassVar[Optional[str]] = "content"

    content: list[Node] = field(default_factory=list)


@dataclass
class CodeBlock(Node):
    """Fenced or indented code.

    Parameters
    ----------
    content : str
        The literal code, without its final line ending
    language : str or None, default = None
        First word of the fence info string, when it is a safe identifier
    """

    visit_method: ClassVar[str] = "visit_code_block"

    content: str
    language: Optional[str] = None


@dataclass
class BlockQuote(Node):
    """``>`` quote holding block-level children."""

    visit_method: ClassVar[str] = "visit_block_quote"
    children_field: ClassVar[Optional[str]] = "children"

    children: list[Node] = field(default_factory=list)


@dataclass
class List(Node):
    """Ordered or bullet list.

    Parameters
    ----------
    ordered : bool
        True for numbered items
    items : list of ListItem, default = empty list
        The list's items
    start : int, default = 1
        Number of the first item of an ordered list
    tight : bool, default = True
        False when items are separated by blank lines
    """

    visit_method: ClassVar[str] = "visit_list"
    children_field: ClassVar[Optional[str]] = "items"

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    tight: bool = True


@dataclass
class ListItem(Node):
    """One list entry.

    Parameters
    ----------
    children : list of Node, default = empty list
        The item's blocks, nested lists included
    checked : bool or None, default = None
        Task box state. None for an ordinary item, otherwise whether the box
        is ticked.
    """

    visit_method: ClassVar[str] = "visit_list_item"
    children_field: ClassVar[Optional[str]] = "children"

    children: list[Node] = field(default_factory=list)
    checked: Optional[bool] = None


@dataclass
class Table(Node):
    """GFM pipe table.

    Parameters
    ----------
    rows : list of TableRow, default = empty list
        Body rows
    header : TableRow or None, default = None
        The header row, if the table has one
    alignments : list, default = empty list
        Per-column alignment, None where the separator row sets none
    """

    visit_method: ClassVar[str] = "visit_table"

    rows: list[TableRow] = field(default_factory=list)
    header: Optional[TableRow] = None
    alignments: list[Alignment | None] = field(default_factory=list)


@dataclass
class TableRow(Node):
    """One row of cells; ``is_header`` marks the header row."""

    visit_method: ClassVar[str] = "visit_table_row"
    children_field: ClassVar[Optional[str]] = "cells"

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False


@dataclass
class TableCell(Node):
    """Inline content of one cell, with its column's alignment."""

    visit_method: ClassVar[str] = "visit_table_cell"
    children_field: ClassVar[Optional[str]] = "content"

    content: list[Node] = field(default_factory=list)
    alignment: Alignment | None = None


@dataclass
class ThematicBreak(Node):
    """Horizontal rule (``---``, ``***`` or ``___``)."""

    visit_method: ClassVar[str] = "visit_thematic_break"


@dataclass
class HTMLBlock(Node):
    """Block of raw HTML, kept verbatim."""

    visit_method: ClassVar[str] = "visit_html_block"

    content: str


@dataclass
class FootnoteDefinition(Node):
    """Body of a ``[^label]:`` footnote.

    Parameters
    ----------
    identifier : str
        The label, as written in the source
    content : list of Node, default = empty list
        Blocks making up the footnote
    """

    visit_method: ClassVar[str] = "visit_footnote_definition"
    children_field: ClassVar[Optional[str]] = "content"

    identifier: str
    content: list[Node] = field(default_factory=list)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Unformatted text. Soft line breaks appear in ``content`` as ``\\n``."""

    visit_method: ClassVar[str] = "visit_text"

    content: str


@dataclass
class Emphasis(Node):
    visit_method: ClassVar[str] = "visit_emphasis"
    children_field: ClassVar[Optional[str]] = "content"

    content: list[Node] = field(default_factory=list)


@dataclass
class Strong(Node):
    visit_method: ClassVar[str] = "visit_strong"
    children_field: ClassVar[Optional[str]] = "content"

    content: list[Node] = field(default_factory=list)


@dataclass
class Strikethrough(Node):
    """``~~struck~~`` text (GFM extension)."""

    visit_method: ClassVar[str] = "visit_strikethrough"
    children_field: ClassVar[Optional[str]] = "content"

    content: list[Node] = field(default_factory=list)


@dataclass
class Code(Node):
    """Inline code span; ``content`` is literal."""

    visit_method: ClassVar[str] = "visit_code"

    content: str


@dataclass
class Link(Node):
    """Inline link, autolink or bare URL.

    Parameters
    ----------
    url : str
        Destination
    content : list of Node, default = empty list
        Link text
    title : str or None, default = None
        Title from ``[text](url "title")``
    """

    visit_method: ClassVar[str] = "visit_link"
    children_field: ClassVar[Optional[str]] = "content"

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None


@dataclass
class Image(Node):
    """Image reference. ``alt_text`` is plain text, flattened from any markup."""

    visit_method: ClassVar[str] = "visit_image"

    url: str
    alt_text: str = ""
    title: Optional[str] = None


@dataclass
class LineBreak(Node):
    """Line break.

    Parameters
    ----------
    soft : bool, default = False
        True for a soft break (plain newline in the source), False for a hard
        break (two trailing spaces or a backslash). The markdown parser folds
        soft breaks into the surrounding text, so parsed trees only contain
        hard breaks.
    """

    visit_method: ClassVar[str] = "visit_line_break"

    soft: bool = False


@dataclass
class HTMLInline(Node):
    visit_method: ClassVar[str] = "visit_html_inline"

    content: str


@dataclass
class FootnoteReference(Node):
    """``[^label]`` marker pointing at a FootnoteDefinition."""

    visit_method: ClassVar[str] = "visit_footnote_reference"

    identifier: str


# ============================================================================
# Extension Nodes
# ============================================================================


@dataclass
class CustomNode(Node):
    """Caller-defined node kind.

    The extension variant of the node hierarchy. Callers that pre-process a
    tree, or that parse syntax the built-in parser does not know (wiki links,
    mentions, embeds), represent those constructs as ``CustomNode`` and
    intercept them with a custom Delta handler.

    Parameters
    ----------
    kind : str
        Name of the node kind (e.g., "wikiLink")
    value : Any, default = None
        Opaque payload. When it is a string, it is also the node's literal
        markdown source, used if no handler claims the node.
    children : list of Node, default = empty list
        Child nodes, if the kind is a container
    data : dict, default = empty dict
        Arbitrary kind-specific fields

    Examples
    --------
        >>> node = CustomNode(kind="wikiLink", value="Home", data={"alias": "Home page"})

    """

    visit_method: ClassVar[str] = "visit_custom_node"
    children_field: ClassVar[Optional[str]] = "children"

    kind: str
    value: Any = None
    children: list[Node] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)


def get_node_children(node: Node) -> list[Node]:
    """Return the ordered children of *node* as a new list.

    A table's children are its header row, if any, followed by the body
    rows. Leaves have none.

    Examples
    --------
    >>> heading = Heading(level=1, content=[Text("Hello"), Strong(content=[Text("world")])])
    >>> len(get_node_children(heading))
    2

    """
    if isinstance(node, Table):
        return ([node.header] if node.header else []) + list(node.rows)
    if node.children_field is None:
        return []
    return list(getattr(node, node.children_field))


def replace_node_children(node: Node, new_children: list[Node]) -> Node:
    """Return a shallow copy of *node* holding *new_children*.

    For a table, the first row flagged ``is_header`` becomes the header and
    every other row is a body row. Leaves are returned unchanged.

    Raises
    ------
    ValueError
        If a Table receives children that are not TableRow instances

    """
    if isinstance(node, Table):
        header: Optional[TableRow] = None
        rows: list[TableRow] = []
        for child in new_children:
            if not isinstance(child, TableRow):
                raise ValueError(f"Table children must be TableRow instances, got {type(child).__name__}.")
            if child.is_header and header is None:
                header = child
            else:
                rows.append(child)
        return replace(node, header=header, rows=rows)

    if node.children_field is None:
        return node
    return replace(node, **{node.children_field: new_children})
