#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/ast/utils.py
"""Helpers that read information out of a node tree."""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from md2delta.ast.nodes import Code, Text, get_node_children

if TYPE_CHECKING:
    from md2delta.ast.nodes import Node


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = " ") -> str:
    """Return the text under a node, or under each node of a list.

    Text and inline Code contribute their content; every other node
    contributes the text of its children. At each level the non-empty parts
    are joined with *joiner*.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        Where to start
    joiner : str, default = " "
        Separator between parts. Pass "" when the text nodes carry their own
        spacing, as image alt text does.

    Examples
    --------
        >>> para = Paragraph(content=[Text(content="a "), Strong(content=[Text(content="b")])])
        >>> extract_text(para, joiner="")
        'a b'

    """
    if isinstance(node_or_nodes, (Text, Code)):
        return node_or_nodes.content

    nodes = node_or_nodes if isinstance(node_or_nodes, list) else get_node_children(node_or_nodes)
    parts = (extract_text(node, joiner=joiner) for node in nodes)
    return joiner.join(part for part in parts if part)


__all__ = ["extract_text"]
