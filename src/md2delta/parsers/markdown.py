#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/parsers/markdown.py
"""Markdown to AST converter.

This module parses CommonMark with the GFM extensions (tables, strikethrough,
task lists, footnotes, autolinks) into the md2delta AST using mistune's token
stream.

Token normalization
-------------------
mistune splits running text into several ``text`` tokens and reports soft
line breaks as separate ``softbreak`` tokens. The AST produced here follows
the usual markdown tree conventions instead: a soft break is a literal newline
inside the surrounding text, and adjacent text runs are always merged into a
single Text node. Only hard breaks become LineBreak nodes.

"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import IO, Any, Union

from md2delta.ast import (
    BlockQuote,
    Code,
    CodeBlock,
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
    extract_text,
)
from md2delta.constants import (
    DEPS_FRONTMATTER_YAML,
    DEPS_MARKDOWN,
    TOML_FRONTMATTER_DELIMITER,
    YAML_FRONTMATTER_DELIMITER,
)
from md2delta.exceptions import ParsingError
from md2delta.options.markdown import MarkdownParserOptions
from md2delta.parsers.base import BaseParser
from md2delta.utils.decorators import requires_dependencies
from md2delta.utils.security import sanitize_language_identifier

logger = logging.getLogger(__name__)


class MarkdownToAstConverter(BaseParser):
    r"""Convert Markdown to AST representation.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = MarkdownToAstConverter()
        >>> doc = parser.parse("# Hello\\n\\nThis is **bold**.")

    Without GFM tables:

        >>> parser = MarkdownToAstConverter(MarkdownParserOptions(parse_tables=False))
        >>> doc = parser.parse(markdown_text)

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def parse(self, input_data: Union[str, Path, IO[str], IO[bytes], bytes]) -> Document:
        """Parse Markdown input into an AST Document.

        Parameters
        ----------
        input_data : str, Path, IO, or bytes
            Markdown source. A str is always treated as markdown text.

        Returns
        -------
        Document
            AST document node. Frontmatter fields, when parsed, are stored in
            ``Document.metadata``.

        Raises
        ------
        ParsingError
            If frontmatter is present but malformed

        """
        markdown_content = self._load_text_content(input_data)
        markdown_content, frontmatter = self._extract_frontmatter(markdown_content)

        import mistune

        markdown = mistune.create_markdown(plugins=self._get_plugins(), renderer=None)
        tokens, _state = markdown.parse(markdown_content)

        if isinstance(tokens, list):
            children = self._process_tokens(tokens)
        else:
            children = []

        logger.debug("Parsed markdown into %d top-level nodes", len(children))
        return Document(children=children, metadata=frontmatter)

    def _get_plugins(self) -> list[str]:
        """Map parser options to mistune plugin names."""
        plugins = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.append("table")
        if self.options.parse_footnotes:
            plugins.append("footnotes")
        if self.options.parse_task_lists:
            plugins.append("task_lists")
        if self.options.parse_autolinks:
            plugins.append("url")
        return plugins

    # ------------------------------------------------------------------
    # Frontmatter
    # ------------------------------------------------------------------

    def _extract_frontmatter(self, content: str) -> tuple[str, dict[str, Any]]:
        """Strip a leading frontmatter block and parse it.

        Supports YAML (---) and TOML (+++) frontmatter. A block whose closing
        delimiter is missing is left in place and parsed as markdown.

        Parameters
        ----------
        content : str
            Markdown content that may start with frontmatter

        Returns
        -------
        tuple[str, dict]
            Content with frontmatter removed and the parsed fields

        """
        if not self.options.parse_frontmatter:
            return content, {}

        block = _split_frontmatter(content, YAML_FRONTMATTER_DELIMITER)
        if block is not None:
            raw, remaining = block
            return remaining, self._load_yaml_frontmatter(raw)

        block = _split_frontmatter(content, TOML_FRONTMATTER_DELIMITER)
        if block is not None:
            raw, remaining = block
            return remaining, _load_toml_frontmatter(raw)

        return content, {}

    @requires_dependencies("frontmatter", DEPS_FRONTMATTER_YAML)
    def _load_yaml_frontmatter(self, raw: str) -> dict[str, Any]:
        import yaml

        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ParsingError(f"Invalid YAML frontmatter: {e}", parsing_stage="frontmatter", original_error=e) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ParsingError(
                f"YAML frontmatter must be a mapping, got {type(data).__name__}", parsing_stage="frontmatter"
            )
        return data

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    # mistune token type -> builder method. ``block_text`` is the paragraph
    # form mistune uses inside tight list items.
    _BLOCK_BUILDERS = {
        "heading": "_build_heading",
        "paragraph": "_build_paragraph",
        "block_text": "_build_paragraph",
        "block_code": "_build_code_block",
        "block_quote": "_build_block_quote",
        "list": "_build_list",
        "table": "_build_table",
        "thematic_break": "_build_thematic_break",
        "block_html": "_build_html_block",
        "footnotes": "_build_footnotes",
    }

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Convert a sequence of block tokens, dropping blank lines and unknown types.

        A builder may return a list of nodes (the footnotes section does),
        which is spliced into the result.
        """
        nodes: list[Node] = []
        for token in tokens:
            token_type = token.get("type", "")
            builder_name = self._BLOCK_BUILDERS.get(token_type)
            if builder_name is None:
                if token_type != "blank_line":
                    logger.debug("Skipping unsupported markdown token: %s", token_type)
                continue

            built = getattr(self, builder_name)(token)
            if isinstance(built, list):
                nodes.extend(built)
            else:
                nodes.append(built)
        return nodes

    def _build_heading(self, token: dict[str, Any]) -> Heading:
        level = _attrs(token).get("level", 1)
        if not isinstance(level, int) or not 1 <= level <= 6:
            level = 1
        return Heading(level=level, content=self._inlines(token))

    def _build_paragraph(self, token: dict[str, Any]) -> Paragraph:
        return Paragraph(content=self._inlines(token))

    def _build_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Build a code block from a fenced or indented code token.

        mistune keeps the final line ending on the code body; it is dropped.
        The first word of the info string is the language, and the full info
        string and any words after the first are kept in ``metadata``.

        Parameters
        ----------
        token : dict
            ``block_code`` token with ``raw`` and optional ``attrs.info``

        Returns
        -------
        CodeBlock

        """
        code = token.get("raw", "")
        if code.endswith("\n"):
            code = code[:-1]

        info = (_attrs(token).get("info") or "").strip()
        metadata: dict[str, Any] = {}
        language = None
        if info:
            metadata["info_string"] = info
            language_word, *rest = info.split(maxsplit=1)
            language = sanitize_language_identifier(language_word) or None
            if rest:
                metadata["info_attrs"] = rest[0]

        return CodeBlock(content=code, language=language, metadata=metadata)

    def _build_block_quote(self, token: dict[str, Any]) -> BlockQuote:
        return BlockQuote(children=self._process_tokens(_children(token)))

    def _build_list(self, token: dict[str, Any]) -> List:
        attrs = _attrs(token)
        items = [self._build_list_item(child) for child in _children(token) if isinstance(child, dict)]
        return List(
            ordered=bool(attrs.get("ordered", False)),
            items=items,
            start=attrs.get("start", 1),
            tight=token.get("tight", True),
        )

    def _build_list_item(self, token: dict[str, Any]) -> ListItem:
        """Only ``task_list_item`` tokens get a ``checked`` state; plain items keep None."""
        checked = None
        if token.get("type") == "task_list_item":
            checked = bool(_attrs(token).get("checked", False))
        return ListItem(children=self._process_tokens(_children(token)), checked=checked)

    def _build_table(self, token: dict[str, Any]) -> Table:
        """Build a table from its ``table_head`` and ``table_body`` sections.

        Column alignments are read from the header cells.
        """
        table = Table()
        for section in _children(token):
            kind = section.get("type")
            if kind == "table_head":
                # table_head holds the header cells directly, with no row token
                table.header = TableRow(cells=self._build_cells(section), is_header=True)
                table.alignments = [cell.alignment for cell in table.header.cells]
            elif kind == "table_body":
                table.rows.extend(TableRow(cells=self._build_cells(row)) for row in _children(section))
        return table

    def _build_cells(self, token: dict[str, Any]) -> list[TableCell]:
        return [
            TableCell(content=self._inlines(cell), alignment=_attrs(cell).get("align"))
            for cell in _children(token)
            if cell.get("type") == "table_cell"
        ]

    def _build_thematic_break(self, token: dict[str, Any]) -> ThematicBreak:
        return ThematicBreak()

    def _build_html_block(self, token: dict[str, Any]) -> HTMLBlock:
        return HTMLBlock(content=token.get("raw", "").rstrip("\n"))

    def _build_footnotes(self, token: dict[str, Any]) -> list[Node]:
        """Expand the trailing footnotes section into definitions, in reference order."""
        return [
            FootnoteDefinition(
                identifier=str(_attrs(item).get("key", "")),
                content=self._process_tokens(_children(item)),
            )
            for item in _children(token)
        ]

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    _INLINE_BUILDERS = {
        "text": "_inline_text",
        "softbreak": "_inline_softbreak",
        "linebreak": "_inline_linebreak",
        "strong": "_inline_strong",
        "emphasis": "_inline_emphasis",
        "strikethrough": "_inline_strikethrough",
        "codespan": "_inline_codespan",
        "link": "_inline_link",
        "image": "_inline_image",
        "inline_html": "_inline_html",
        "footnote_ref": "_inline_footnote_ref",
    }

    def _inlines(self, token: dict[str, Any]) -> list[Node]:
        return self._process_inline_tokens(_children(token))

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Convert inline tokens, merging adjacent text runs.

        Parameters
        ----------
        tokens : list of dict
            Inline token dictionaries

        Returns
        -------
        list of Node
            Inline AST nodes with no two Text nodes adjacent

        """
        nodes: list[Node] = []
        for token in tokens:
            token_type = token.get("type", "")
            builder_name = self._INLINE_BUILDERS.get(token_type)
            if builder_name is None:
                logger.debug("Skipping unsupported inline token: %s", token_type)
                continue

            node = getattr(self, builder_name)(token)
            if isinstance(node, Text) and nodes and isinstance(nodes[-1], Text):
                nodes[-1] = Text(content=nodes[-1].content + node.content)
            else:
                nodes.append(node)
        return nodes

    def _inline_text(self, token: dict[str, Any]) -> Text:
        return Text(content=token.get("raw", ""))

    def _inline_softbreak(self, token: dict[str, Any]) -> Text:
        # Soft breaks stay in the text as a literal newline
        return Text(content="\n")

    def _inline_linebreak(self, token: dict[str, Any]) -> LineBreak:
        return LineBreak(soft=False)

    def _inline_strong(self, token: dict[str, Any]) -> Strong:
        return Strong(content=self._inlines(token))

    def _inline_emphasis(self, token: dict[str, Any]) -> Emphasis:
        return Emphasis(content=self._inlines(token))

    def _inline_strikethrough(self, token: dict[str, Any]) -> Strikethrough:
        return Strikethrough(content=self._inlines(token))

    def _inline_codespan(self, token: dict[str, Any]) -> Code:
        return Code(content=token.get("raw", ""))

    def _inline_link(self, token: dict[str, Any]) -> Link:
        """Inline links, autolinks and bare URLs all arrive as ``link`` tokens."""
        attrs = _attrs(token)
        return Link(url=attrs.get("url", ""), content=self._inlines(token), title=attrs.get("title"))

    def _inline_image(self, token: dict[str, Any]) -> Image:
        """The alt text is the plain text of the image's inline children."""
        attrs = _attrs(token)
        alt_text = extract_text(self._inlines(token), joiner="")
        return Image(url=attrs.get("url", ""), alt_text=alt_text, title=attrs.get("title"))

    def _inline_html(self, token: dict[str, Any]) -> HTMLInline:
        return HTMLInline(content=token.get("raw", ""))

    def _inline_footnote_ref(self, token: dict[str, Any]) -> FootnoteReference:
        return FootnoteReference(identifier=str(token.get("raw", "")))


def _attrs(token: dict[str, Any]) -> dict[str, Any]:
    attrs = token.get("attrs")
    return attrs if isinstance(attrs, dict) else {}


def _children(token: dict[str, Any]) -> list[dict[str, Any]]:
    children = token.get("children")
    return children if isinstance(children, list) else []


def _split_frontmatter(content: str, delimiter: str) -> tuple[str, str] | None:
    """Split ``content`` into (frontmatter, remaining) if it opens with ``delimiter``."""
    if not (content.startswith(delimiter + "\n") or content.startswith(delimiter + "\r\n")):
        return None

    lines = content.splitlines(keepends=True)
    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == delimiter:
            return "".join(lines[1:index]), "".join(lines[index + 1 :])

    return None


def _load_toml_frontmatter(raw: str) -> dict[str, Any]:
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ParsingError(f"Invalid TOML frontmatter: {e}", parsing_stage="frontmatter", original_error=e) from e


def markdown_to_ast(markdown_content: str, options: MarkdownParserOptions | None = None) -> Document:
    r"""Parse markdown text into a Document.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Document

    Examples
    --------
    >>> doc = markdown_to_ast("# Hello\\n\\nWorld")
    >>> len(doc.children)
    2

    """
    return MarkdownToAstConverter(options).parse(markdown_content)
