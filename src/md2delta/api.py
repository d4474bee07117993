"""The major exported API functions for markdown-to-Delta conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/md2delta/api.py
import logging
from typing import Optional, Union

from md2delta.ast.nodes import Document
from md2delta.delta.engine import DeltaConverter
from md2delta.delta.handlers import Handler
from md2delta.delta.ops import Op
from md2delta.exceptions import ValidationError
from md2delta.options.delta import DeltaOptions
from md2delta.options.markdown import MarkdownParserOptions
from md2delta.parsers.markdown import MarkdownToAstConverter, markdown_to_ast
from md2delta.utils.decorators import debug_timer

logger = logging.getLogger(__name__)


def markdown_to_delta(
    source: Union[str, Document],
    handle: Optional[Handler] = None,
    *,
    options: Optional[DeltaOptions] = None,
    parser_options: Optional[MarkdownParserOptions] = None,
) -> list[Op]:
    """Convert markdown into a list of Delta insert operations.

    Parameters
    ----------
    source : str or Document
        Markdown text, or a document tree that has already been parsed or
        built by hand
    handle : callable, optional
        Custom handler consulted before the built-in handlers for every node.
        It receives a ``HandlerContext`` and returns a truthy value when it
        has handled the node.
    options : DeltaOptions, optional
        Conversion options
    parser_options : MarkdownParserOptions, optional
        Markdown parser options. Ignored when ``source`` is a Document.

    Returns
    -------
    list of Op
        The operations, in document order

    Raises
    ------
    ValidationError
        If source is neither a string nor a Document
    InvalidOptionsError
        If an options argument has the wrong type
    ParsingError
        If the markdown cannot be parsed
    DependencyError
        If mistune is missing or too old

    Examples
    --------
    Basic conversion:

        >>> markdown_to_delta("# Hello, **world**!")
        [{'insert': 'Hello, '}, {'insert': 'world', 'attributes': {'bold': True}}, {'insert': '!'},
         {'insert': '\\n', 'attributes': {'header': 1}}]

    Overriding a node kind with a custom handler:

        >>> def divider(ctx):
        ...     if isinstance(ctx.node, ThematicBreak):
        ...         ctx.ops.append({"insert": {"divider": True}})
        ...         return True
        ...     return False
        >>> markdown_to_delta("a\\n\\n---", divider)
        [{'insert': 'a'}, {'insert': '\\n'}, {'insert': {'divider': True}}]

    """
    # Validate before parsing so bad options fail fast
    converter = DeltaConverter(handler=handle, options=options)

    if isinstance(source, Document):
        document = source
    elif isinstance(source, str):
        with debug_timer(logger, "Parsing (markdown)"):
            document = MarkdownToAstConverter(parser_options).parse(source)
    else:
        raise ValidationError(
            f"Unsupported source type: {type(source).__name__}. Expected markdown text or a Document.",
            parameter_name="source",
            parameter_value=source,
        )

    with debug_timer(logger, "Converting (delta)"):
        return converter.convert(document)


__all__ = ["markdown_to_ast", "markdown_to_delta"]
