#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/delta/ops.py
"""Delta insert operations.

An operation is a plain dict so that a list of them is JSON-serializable as-is::

    {"insert": "Hello"}
    {"insert": "\\n", "attributes": {"header": 1}}
    {"insert": {"image": "cat.png"}, "attributes": {"alt": "a cat"}}

``insert`` is either a string or an embed mapping. ``attributes`` is omitted
entirely when no formatting applies; it is never an empty dict.

"""

from __future__ import annotations

import sys
from typing import Any, Mapping, Optional, Union

if sys.version_info >= (3, 11):
    from typing import NotRequired, TypedDict
else:
    from typing_extensions import NotRequired, TypedDict

from md2delta.constants import BLOCK_TERMINATOR

InsertValue = Union[str, dict[str, Any]]


class Op(TypedDict):
    """A single Delta insert operation."""

    insert: InsertValue
    attributes: NotRequired[dict[str, Any]]


def make_op(insert: InsertValue, attributes: Optional[Mapping[str, Any]] = None) -> Op:
    """Build an operation, omitting ``attributes`` when empty.

    Parameters
    ----------
    insert : str or dict
        Text or embed object to insert
    attributes : mapping or None, default = None
        Formatting attributes. Copied into the op when non-empty.

    Returns
    -------
    Op
        The operation

    Examples
    --------
        >>> make_op("Hello")
        {'insert': 'Hello'}
        >>> make_op("\\n", {"header": 2})
        {'insert': '\\n', 'attributes': {'header': 2}}

    """
    op: Op = {"insert": insert}
    if attributes:
        op["attributes"] = dict(attributes)
    return op


def is_bare_newline(op: Op) -> bool:
    """Return True for an unattributed ``"\\n"`` operation."""
    return op.get("insert") == BLOCK_TERMINATOR and not op.get("attributes")


def is_text_op(op: Op) -> bool:
    """Return True when the operation inserts a string rather than an embed."""
    return isinstance(op.get("insert"), str)


__all__ = ["InsertValue", "Op", "is_bare_newline", "is_text_op", "make_op"]
