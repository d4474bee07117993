#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/delta/attributes.py
"""Attribute composition from the ancestor chain.

Inline formatting is not carried down the tree by the formatting nodes
themselves. Instead, every text run looks at its full ancestor chain and
collects one attribute per formatting ancestor, so nested formatting is
additive: text inside ``Strong`` inside ``Emphasis`` is both bold and italic.

List attributes work the same way: the list kind comes from the nearest
enclosing ``List`` and the indent from the number of enclosing lists.

"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from md2delta.ast.nodes import Emphasis, List, ListItem, Node, Strikethrough, Strong
from md2delta.constants import (
    ATTR_BOLD,
    ATTR_INDENT,
    ATTR_ITALIC,
    ATTR_LIST,
    ATTR_STRIKE,
    LIST_BULLET,
    LIST_CHECKED,
    LIST_ORDERED,
    LIST_UNCHECKED,
)

# (node type, attribute name) pairs, in output key order
INLINE_FORMAT_ATTRIBUTES: tuple[tuple[type[Node], str], ...] = (
    (Strong, ATTR_BOLD),
    (Emphasis, ATTR_ITALIC),
    (Strikethrough, ATTR_STRIKE),
)


def compose_inline_attributes(ancestors: Sequence[Node]) -> dict[str, bool]:
    """Collect the inline formatting attributes implied by an ancestor chain.

    Parameters
    ----------
    ancestors : sequence of Node
        Proper ancestors of a text node, root first

    Returns
    -------
    dict
        ``{"bold": True}`` etc. for each formatting kind present anywhere in
        the chain; empty when there is none

    Examples
    --------
        >>> compose_inline_attributes([Document(), Paragraph(), Strong(), Emphasis()])
        {'bold': True, 'italic': True}

    """
    return {
        attribute: True
        for node_type, attribute in INLINE_FORMAT_ATTRIBUTES
        if any(isinstance(ancestor, node_type) for ancestor in ancestors)
    }


def list_ancestors(ancestors: Sequence[Node]) -> list[List]:
    """Return the enclosing List nodes, outermost first."""
    return [ancestor for ancestor in ancestors if isinstance(ancestor, List)]


def nearest_list(ancestors: Sequence[Node]) -> Optional[List]:
    """Return the innermost enclosing List, or None."""
    lists = list_ancestors(ancestors)
    return lists[-1] if lists else None


def list_item_attributes(item: ListItem, ancestors: Sequence[Node]) -> dict[str, Any]:
    """Compute the attributes of a list item's terminating newline.

    Parameters
    ----------
    item : ListItem
        The list item being terminated
    ancestors : sequence of Node
        Proper ancestors of ``item``, root first

    Returns
    -------
    dict
        ``list`` is ``checked``/``unchecked`` for task items and otherwise
        ``ordered``/``bullet`` from the nearest enclosing list. ``indent`` is
        the nesting depth minus one and is present only below the top level.

    """
    lists = list_ancestors(ancestors)

    if item.checked is not None:
        kind = LIST_CHECKED if item.checked else LIST_UNCHECKED
    elif lists and lists[-1].ordered:
        kind = LIST_ORDERED
    else:
        kind = LIST_BULLET

    attributes: dict[str, Any] = {ATTR_LIST: kind}
    if len(lists) > 1:
        attributes[ATTR_INDENT] = len(lists) - 1
    return attributes


__all__ = [
    "INLINE_FORMAT_ATTRIBUTES",
    "compose_inline_attributes",
    "list_ancestors",
    "list_item_attributes",
    "nearest_list",
]
