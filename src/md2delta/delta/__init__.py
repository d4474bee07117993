#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/delta/__init__.py
"""Delta operation output for md2delta.

This package turns a markdown document tree into Quill Delta insert
operations through an ordered chain of node handlers.
"""

from md2delta.delta.engine import DeltaConverter
from md2delta.delta.handlers import (
    BUILTIN_HANDLERS,
    Directive,
    Handler,
    HandlerContext,
    HandlerResult,
    NodeHandler,
)
from md2delta.delta.ops import InsertValue, Op, is_bare_newline, is_text_op, make_op
from md2delta.delta.preprocess import merge_consecutive_ordered_lists

__all__ = [
    "BUILTIN_HANDLERS",
    "DeltaConverter",
    "Directive",
    "Handler",
    "HandlerContext",
    "HandlerResult",
    "InsertValue",
    "NodeHandler",
    "Op",
    "is_bare_newline",
    "is_text_op",
    "make_op",
    "merge_consecutive_ordered_lists",
]
