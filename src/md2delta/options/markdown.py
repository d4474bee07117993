#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options for the markdown parser and the markdown renderer.

Parser options select the GFM extensions recognized when building the AST.
Renderer options control the literal markdown produced for nodes that the
Delta compiler has no handler for.
"""
# src/md2delta/options/markdown.py


from __future__ import annotations

from dataclasses import dataclass, field

from md2delta.constants import (
    DEFAULT_BULLET_SYMBOLS,
    DEFAULT_CODE_FENCE_CHAR,
    DEFAULT_CODE_FENCE_MIN,
    DEFAULT_EMPHASIS_SYMBOL,
    DEFAULT_ESCAPE_SPECIAL,
    DEFAULT_PARSE_AUTOLINKS,
    DEFAULT_PARSE_FOOTNOTES,
    DEFAULT_PARSE_FRONTMATTER,
    DEFAULT_PARSE_STRIKETHROUGH,
    DEFAULT_PARSE_TABLES,
    DEFAULT_PARSE_TASK_LISTS,
    DEFAULT_TABLE_PIPE_ESCAPE,
    MAX_CODE_FENCE_LENGTH,
    MIN_CODE_FENCE_LENGTH,
    CodeFenceChar,
    EmphasisSymbol,
)
from md2delta.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Which markdown extensions the parser recognizes.

    CommonMark is always on. Each flag below switches one GitHub Flavored
    Markdown extension, mapped to the mistune plugin of the same purpose.

    Parameters
    ----------
    parse_tables : bool, default True
        Pipe tables
    parse_strikethrough : bool, default True
        ``~~struck~~`` text
    parse_task_lists : bool, default True
        ``- [ ]`` and ``- [x]`` items
    parse_footnotes : bool, default True
        ``[^label]`` references and their definitions
    parse_autolinks : bool, default True
        Bare URLs as links
    parse_frontmatter : bool, default False
        Strip a leading YAML (``---``) or TOML (``+++``) block and keep its
        fields in ``Document.metadata``

    """

    parse_tables: bool = field(
        default=DEFAULT_PARSE_TABLES,
        metadata={"help": "Parse table syntax (GFM pipe tables)", "cli_name": "no-tables"},
    )
    parse_strikethrough: bool = field(
        default=DEFAULT_PARSE_STRIKETHROUGH,
        metadata={"help": "Parse strikethrough syntax (~~text~~)", "cli_name": "no-strikethrough"},
    )
    parse_task_lists: bool = field(
        default=DEFAULT_PARSE_TASK_LISTS,
        metadata={"help": "Parse task list checkboxes (- [ ] and - [x])", "cli_name": "no-task-lists"},
    )
    parse_footnotes: bool = field(
        default=DEFAULT_PARSE_FOOTNOTES,
        metadata={"help": "Parse footnote references and definitions", "cli_name": "no-footnotes"},
    )
    parse_autolinks: bool = field(
        default=DEFAULT_PARSE_AUTOLINKS,
        metadata={"help": "Turn bare URLs into links", "cli_name": "no-autolinks"},
    )
    parse_frontmatter: bool = field(
        default=DEFAULT_PARSE_FRONTMATTER,
        metadata={"help": "Parse YAML/TOML frontmatter at document start", "cli_name": "frontmatter"},
    )


@dataclass(frozen=True)
class MarkdownRendererOptions(BaseRendererOptions):
    r"""How the literal fallback writes nodes back as markdown.

    Parameters
    ----------
    escape_special : bool, default True
        Backslash-escape characters in text that markdown would read as
        syntax (\*, \_, #, brackets, braces, backticks, backslashes).
    emphasis_symbol : {"\*", "\_"}, default "\*"
        Delimiter for emphasis
    bullet_symbols : str, default "\*-+"
        Bullet characters, one per nesting depth, reused cyclically
    code_fence_char : {"`", "~"}, default "`"
        Fence character for code blocks
    code_fence_min : int, default 3
        Shortest fence written; longer fences are used when the code needs them
    table_pipe_escape : bool, default True
        Escape ``|`` inside table cells

    Raises
    ------
    ValueError
        If code_fence_min is out of range or bullet_symbols is empty.

    """

    escape_special: bool = DEFAULT_ESCAPE_SPECIAL
    emphasis_symbol: EmphasisSymbol = DEFAULT_EMPHASIS_SYMBOL  # type: ignore[assignment]
    bullet_symbols: str = DEFAULT_BULLET_SYMBOLS
    code_fence_char: CodeFenceChar = DEFAULT_CODE_FENCE_CHAR  # type: ignore[assignment]
    code_fence_min: int = DEFAULT_CODE_FENCE_MIN
    table_pipe_escape: bool = DEFAULT_TABLE_PIPE_ESCAPE

    def __post_init__(self) -> None:
        super().__post_init__()

        if not MIN_CODE_FENCE_LENGTH <= self.code_fence_min <= MAX_CODE_FENCE_LENGTH:
            raise ValueError(
                f"code_fence_min must be between {MIN_CODE_FENCE_LENGTH} and {MAX_CODE_FENCE_LENGTH}, "
                f"got {self.code_fence_min}"
            )
        if not self.bullet_symbols:
            raise ValueError("bullet_symbols must contain at least one character")
