"""md2delta - compile markdown into Quill Delta insert operations.

md2delta turns a markdown document tree into the ordered list of insert
operations used by Delta-based rich text editors. Each operation inserts a
string or an embed, with an optional mapping of formatting attributes::

    {"insert": "world", "attributes": {"bold": True}}
    {"insert": "\\n", "attributes": {"header": 1}}

Conversion is done by an ordered chain of node handlers. Every handler sees
the node together with its full ancestor chain, which is how nested inline
formatting and list indentation are derived. A caller-supplied handler runs
before the built-in ones and can override or extend any node kind. Nodes no
handler claims are rendered back to markdown and inserted verbatim.

Key Features
------------
- Headings, paragraphs, block quotes, code blocks, bullet, ordered and task
  lists with nesting, links, images, inline code and hard line breaks
- Additive inline formatting (bold, italic, strike) from the ancestor chain
- Ordered lists interrupted by bullet lists keep one numbering group
- Markdown parsing with GFM extensions via mistune, optional frontmatter
- Literal markdown fallback for tables, HTML, footnotes and custom nodes
- Command-line interface emitting JSON

Requirements
------------
- Python 3.10+
- mistune 3 for parsing markdown text

Examples
--------
Basic conversion:

    >>> from md2delta import markdown_to_delta
    >>> markdown_to_delta("Some *emphasis*")
    [{'insert': 'Some '}, {'insert': 'emphasis', 'attributes': {'italic': True}}, {'insert': '\\n'}]

Converting a hand-built tree:

    >>> from md2delta.ast import Document, Paragraph, Text
    >>> markdown_to_delta(Document(children=[Paragraph(content=[Text(content="hi")])]))
    [{'insert': 'hi'}, {'insert': '\\n'}]

See Also
--------
md2delta.delta : the handler chain and converter
md2delta.ast : AST node definitions and utilities

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "md2delta requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from md2delta.api import markdown_to_ast, markdown_to_delta  # noqa: E402
from md2delta.delta import DeltaConverter, Directive, HandlerContext, Op  # noqa: E402
from md2delta.exceptions import (  # noqa: E402
    DependencyError,
    InvalidOptionsError,
    Md2DeltaError,
    ParsingError,
    ValidationError,
)
from md2delta.options import DeltaOptions, MarkdownParserOptions, MarkdownRendererOptions  # noqa: E402

__all__ = [
    "__version__",
    "markdown_to_delta",
    "markdown_to_ast",
    "DeltaConverter",
    "Directive",
    "HandlerContext",
    "Op",
    "DeltaOptions",
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
    "Md2DeltaError",
    "ValidationError",
    "InvalidOptionsError",
    "ParsingError",
    "DependencyError",
]
