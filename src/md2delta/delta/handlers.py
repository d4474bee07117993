#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/delta/handlers.py
"""Node handlers for the Delta converter.

A handler is any callable that takes a :class:`HandlerContext` and either
declines the node (returns a falsy value) or handles it completely and
returns ``True`` or a :class:`Directive`. Handling a node means appending its
operations to ``ctx.ops`` and recursing into whatever children it needs
through ``ctx.process_children`` or ``ctx.process``.

The built-in chain, tried in order after any custom handler::

    document, paragraph, text, inline formatting, heading, list, list item,
    block quote, link, image, code block, inline code, line break, fallback

The fallback is universal, so every node produces some output: nodes without
a dedicated handler are rendered back to markdown and inserted as plain text.

Examples
--------
A custom handler that turns thematic breaks into a divider embed:

    >>> def divider(ctx: HandlerContext) -> bool:
    ...     if not isinstance(ctx.node, ThematicBreak):
    ...         return False
    ...     ctx.ops.append(make_op({"divider": True}))
    ...     return True

A custom handler that delegates a caller-defined node to the link handler by
processing a synthetic node:

    >>> def wiki_link(ctx: HandlerContext) -> bool:
    ...     node = ctx.node
    ...     if not (isinstance(node, CustomNode) and node.kind == "wikiLink"):
    ...         return False
    ...     link = Link(url=f"/wiki/{node.value}", content=[Text(content=node.data.get("alias", node.value))])
    ...     ctx.process(link, ctx.ancestors)
    ...     return True

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence, Union

from md2delta.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    TableCell,
    Text,
    get_node_children,
)
from md2delta.constants import (
    ATTR_ALT,
    ATTR_BLOCKQUOTE,
    ATTR_CODE,
    ATTR_CODE_BLOCK,
    ATTR_HEADER,
    ATTR_LINK,
    BLOCK_TERMINATOR,
    EMBED_IMAGE,
)
from md2delta.delta.attributes import compose_inline_attributes, list_item_attributes
from md2delta.delta.ops import Op, is_bare_newline, is_text_op, make_op
from md2delta.options.delta import DeltaOptions
from md2delta.renderers.markdown import MarkdownRenderer

logger = logging.getLogger(__name__)

# Parents whose children are inline content
_INLINE_PARENTS = (Paragraph, Heading, Emphasis, Strong, Strikethrough, Link, TableCell)


class Directive(Enum):
    """Completion signals a handler may return instead of ``True``.

    DONE
        The node was handled. Equivalent to returning ``True``.
    SKIP_NEXT_SIBLING
        The node was handled and it also consumed its next sibling, which
        ``HandlerContext.process_children`` must not process again.

    """

    DONE = "done"
    SKIP_NEXT_SIBLING = "skip_next_sibling"


HandlerResult = Union[bool, Directive, None]
ProcessCallable = Callable[[Node, Sequence[Node]], Optional[Directive]]


@dataclass
class HandlerContext:
    """Context passed to every handler.

    Parameters
    ----------
    node : Node
        The node being converted
    ancestors : tuple of Node
        Proper ancestors of ``node``, root first. Never mutated; children are
        processed with ``ancestors + (node,)``.
    ops : list of Op
        The shared output accumulator for the current conversion
    process : callable
        Re-entrant ``process(node, ancestors)`` callback into the converter.
        Accepts nodes that are not part of the tree, which lets a handler
        delegate to another handler through a synthetic node.
    options : DeltaOptions
        Options of the running converter
    consumed : dict of int to Node
        Nodes already taken by a sibling's handler through
        ``Directive.SKIP_NEXT_SIBLING``, keyed by ``id``. Shared by every
        context of one conversion. Consumed nodes are invisible to
        ``previous_sibling`` and ``next_sibling``.

    """

    node: Node
    ancestors: tuple[Node, ...]
    ops: list[Op]
    process: ProcessCallable
    options: DeltaOptions
    consumed: dict[int, Node] = field(default_factory=dict)

    @property
    def parent(self) -> Optional[Node]:
        """The nearest ancestor, or None at the root."""
        return self.ancestors[-1] if self.ancestors else None

    def _is_consumed(self, node: Node) -> bool:
        return self.consumed.get(id(node)) is node

    def _siblings(self) -> tuple[list[Node], Optional[int]]:
        parent = self.parent
        if parent is None:
            return [], None
        siblings = [sibling for sibling in get_node_children(parent) if not self._is_consumed(sibling)]
        # Identity, not equality: dataclass nodes with equal fields compare equal
        for index, sibling in enumerate(siblings):
            if sibling is self.node:
                return siblings, index
        return siblings, None

    @property
    def previous_sibling(self) -> Optional[Node]:
        """The sibling before this node in its parent, or None."""
        siblings, index = self._siblings()
        if index is None or index == 0:
            return None
        return siblings[index - 1]

    @property
    def next_sibling(self) -> Optional[Node]:
        """The sibling after this node in its parent, or None."""
        siblings, index = self._siblings()
        if index is None or index + 1 >= len(siblings):
            return None
        return siblings[index + 1]

    def process_children(self, children: Optional[Sequence[Node]] = None) -> None:
        """Process children of the current node in order.

        Parameters
        ----------
        children : sequence of Node or None, default = None
            Children to process. Defaults to all children of ``node``.

        Notes
        -----
        Honors ``Directive.SKIP_NEXT_SIBLING``: when a child's handler
        returns it, the following child in ``children`` is skipped and
        recorded in ``consumed``.

        """
        if children is None:
            children = get_node_children(self.node)

        descendant_ancestors = self.ancestors + (self.node,)
        index = 0
        while index < len(children):
            child = children[index]
            index += 1
            if self._is_consumed(child):
                continue
            if self.process(child, descendant_ancestors) is Directive.SKIP_NEXT_SIBLING and index < len(children):
                skipped = children[index]
                self.consumed[id(skipped)] = skipped
                index += 1


Handler = Callable[[HandlerContext], HandlerResult]


@dataclass(frozen=True)
class NodeHandler:
    """A built-in handler: a node type predicate paired with an action.

    Parameters
    ----------
    name : str
        Handler name, used in debug logging
    node_types : tuple of type
        Node classes the handler accepts. An empty tuple matches every node.
    action : callable
        Called with the context when the node matches

    """

    name: str
    node_types: tuple[type[Node], ...]
    action: Handler

    def matches(self, node: Node) -> bool:
        """Return True when ``node`` is one of ``node_types``."""
        return not self.node_types or isinstance(node, self.node_types)

    def __call__(self, ctx: HandlerContext) -> HandlerResult:
        """Run the action if the node matches, otherwise decline."""
        if not self.matches(ctx.node):
            return None
        return self.action(ctx)


def _pop_trailing_bare_newline(ops: list[Op]) -> None:
    if ops and is_bare_newline(ops[-1]):
        ops.pop()


# ============================================================================
# Block handlers
# ============================================================================


def handle_document(ctx: HandlerContext) -> HandlerResult:
    ctx.process_children()
    return True


def handle_paragraph(ctx: HandlerContext) -> HandlerResult:
    """Emit the paragraph's inline content followed by a bare newline."""
    ctx.process_children()
    ctx.ops.append(make_op(BLOCK_TERMINATOR))
    return True


def handle_heading(ctx: HandlerContext) -> HandlerResult:
    """Emit the heading's content and a newline carrying ``header``."""
    node = ctx.node
    assert isinstance(node, Heading)
    ctx.process_children()
    ctx.ops.append(make_op(BLOCK_TERMINATOR, {ATTR_HEADER: node.level}))
    return True


def handle_block_quote(ctx: HandlerContext) -> HandlerResult:
    """Emit quoted content ending in one newline carrying ``blockquote``.

    The bare newline left by the quote's last paragraph is replaced by the
    attributed terminator. Only that last terminator is replaced, so a
    multi-paragraph quote keeps bare newlines between its paragraphs.

    """
    ctx.process_children()
    _pop_trailing_bare_newline(ctx.ops)
    ctx.ops.append(make_op(BLOCK_TERMINATOR, {ATTR_BLOCKQUOTE: True}))
    return True


def handle_code_block(ctx: HandlerContext) -> HandlerResult:
    """Emit the literal code followed by a newline carrying ``code-block``."""
    node = ctx.node
    assert isinstance(node, CodeBlock)
    ctx.ops.append(make_op(node.content))
    ctx.ops.append(make_op(BLOCK_TERMINATOR, {ATTR_CODE_BLOCK: True}))
    return True


def handle_list(ctx: HandlerContext) -> HandlerResult:
    ctx.process_children()
    return True


def handle_list_item(ctx: HandlerContext) -> HandlerResult:
    """Emit a list item line, then its nested lists.

    The item's own content (every child except nested lists) is emitted
    first and its trailing bare newline is replaced by the item terminator,
    whose ``list``/``indent`` attributes come from the ancestor chain.
    Nested lists follow the terminator so that each item is one line.

    Parameters
    ----------
    ctx : HandlerContext
        Context whose node is a ListItem

    Returns
    -------
    bool
        Always True

    """
    node = ctx.node
    assert isinstance(node, ListItem)

    ctx.process_children([child for child in node.children if not isinstance(child, List)])
    _pop_trailing_bare_newline(ctx.ops)
    ctx.ops.append(make_op(BLOCK_TERMINATOR, list_item_attributes(node, ctx.ancestors)))
    ctx.process_children([child for child in node.children if isinstance(child, List)])
    return True


# ============================================================================
# Inline handlers
# ============================================================================


def handle_text(ctx: HandlerContext) -> HandlerResult:
    """Emit text with the formatting attributes of its whole ancestor chain."""
    node = ctx.node
    assert isinstance(node, Text)
    ctx.ops.append(make_op(node.content, compose_inline_attributes(ctx.ancestors)))
    return True


def handle_inline_formatting(ctx: HandlerContext) -> HandlerResult:
    # Strong, Emphasis and Strikethrough emit nothing themselves; their text
    # descendants pick the formatting up from the ancestor chain.
    ctx.process_children()
    return True


def handle_link(ctx: HandlerContext) -> HandlerResult:
    """Emit one op per literal text child, each carrying ``link``.

    Only direct Text children contribute. Formatted or nested content inside
    the link is dropped.

    """
    node = ctx.node
    assert isinstance(node, Link)
    for child in node.content:
        if isinstance(child, Text):
            ctx.ops.append(make_op(child.content, {ATTR_LINK: node.url}))
    return True


def handle_image(ctx: HandlerContext) -> HandlerResult:
    node = ctx.node
    assert isinstance(node, Image)
    ctx.ops.append(make_op({EMBED_IMAGE: node.url}, {ATTR_ALT: node.alt_text}))
    return True


def handle_inline_code(ctx: HandlerContext) -> HandlerResult:
    node = ctx.node
    assert isinstance(node, Code)
    ctx.ops.append(make_op(node.content, {ATTR_CODE: True}))
    return True


def handle_line_break(ctx: HandlerContext) -> HandlerResult:
    """Emit a line break, folding it into the surrounding text when possible.

    When both neighbors of the break are Text nodes, the newline and the
    next sibling's text are appended to the last operation (keeping its
    attributes) and the next sibling is skipped. Otherwise, or when the last
    operation is an embed, or when ``merge_line_breaks`` is off, a bare
    newline is emitted.

    Parameters
    ----------
    ctx : HandlerContext
        Context whose node is a LineBreak

    Returns
    -------
    bool or Directive
        ``Directive.SKIP_NEXT_SIBLING`` after merging, True otherwise

    """
    previous_sibling = ctx.previous_sibling
    next_sibling = ctx.next_sibling

    can_merge = (
        ctx.options.merge_line_breaks
        and isinstance(previous_sibling, Text)
        and isinstance(next_sibling, Text)
        and bool(ctx.ops)
        and is_text_op(ctx.ops[-1])
    )
    if not can_merge:
        ctx.ops.append(make_op(BLOCK_TERMINATOR))
        return True

    assert isinstance(next_sibling, Text)
    last = ctx.ops[-1]
    ctx.ops[-1] = make_op(f"{last['insert']}{BLOCK_TERMINATOR}{next_sibling.content}", last.get("attributes"))
    logger.debug("Merged line break with following text")
    return Directive.SKIP_NEXT_SIBLING


# ============================================================================
# Fallback
# ============================================================================


def handle_fallback(ctx: HandlerContext) -> HandlerResult:
    """Insert the node's literal markdown source as unformatted text.

    Claims every node. Tables, thematic breaks, raw HTML, footnotes and
    caller-defined kinds reach this handler unless a custom handler takes
    them first. A node that renders to nothing produces no operation.

    Outside inline content the text ends with a newline, so the next block
    starts on its own line. A node inside a paragraph, heading or span is
    inserted as is.

    """
    node = ctx.node
    renderer = MarkdownRenderer(ctx.options.serializer_options)
    text = renderer.render_to_string(Document(children=[node]))
    if text and not isinstance(ctx.parent, _INLINE_PARENTS) and not text.endswith(BLOCK_TERMINATOR):
        text += BLOCK_TERMINATOR

    logger.debug("Serialized unsupported node %s to markdown (%d chars)", type(node).__name__, len(text))
    if text:
        ctx.ops.append(make_op(text))
    return True


BUILTIN_HANDLERS: tuple[NodeHandler, ...] = (
    NodeHandler("document", (Document,), handle_document),
    NodeHandler("paragraph", (Paragraph,), handle_paragraph),
    NodeHandler("text", (Text,), handle_text),
    NodeHandler("inline_formatting", (Strong, Emphasis, Strikethrough), handle_inline_formatting),
    NodeHandler("heading", (Heading,), handle_heading),
    NodeHandler("list", (List,), handle_list),
    NodeHandler("list_item", (ListItem,), handle_list_item),
    NodeHandler("block_quote", (BlockQuote,), handle_block_quote),
    NodeHandler("link", (Link,), handle_link),
    NodeHandler("image", (Image,), handle_image),
    NodeHandler("code_block", (CodeBlock,), handle_code_block),
    NodeHandler("inline_code", (Code,), handle_inline_code),
    NodeHandler("line_break", (LineBreak,), handle_line_break),
    NodeHandler("fallback", (), handle_fallback),
)


__all__ = [
    "BUILTIN_HANDLERS",
    "Directive",
    "Handler",
    "HandlerContext",
    "HandlerResult",
    "NodeHandler",
    "ProcessCallable",
]
