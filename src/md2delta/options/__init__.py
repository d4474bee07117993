#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for md2delta.

Each pipeline stage has its own frozen Options dataclass: the markdown parser,
the fallback markdown renderer, and the Delta converter.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from md2delta.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from md2delta.options.delta import DeltaOptions
from md2delta.options.markdown import MarkdownParserOptions, MarkdownRendererOptions


def create_updated_options(options: Any, **kwargs: Any) -> Any:
    """Create a new options instance with updated values.

    Parameters
    ----------
    options : Any
        The original options instance (must be a dataclass)
    **kwargs : Any
        Field names and their new values

    Returns
    -------
    Any
        New options instance with updated values

    """
    return replace(options, **kwargs)


__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "DeltaOptions",
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
    "create_updated_options",
]
