#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class for renderers that turn the
md2delta AST back into text, plus the output capture mixin shared by
text-based renderers.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from md2delta.ast import Document, Node
from md2delta.exceptions import InvalidOptionsError
from md2delta.options.base import BaseRendererOptions


class BaseRenderer(ABC):
    """Abstract base class for AST renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def render_to_string(self, doc: Document) -> str:
        """Render the AST to a string.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Returns
        -------
        str
            Rendered document

        """
        raise NotImplementedError


class OutputCaptureMixin:
    """Output capture for renderers that build text in an ``_output`` list.

    Visitor methods append strings to ``_output``. :meth:`_capture` renders
    a run of nodes into its own buffer and returns the text, which lets a
    visitor post-process nested output, e.g. indent or quote it.

    """

    _output: list[str]

    def _capture(self, nodes: Sequence[Node]) -> str:
        """Render *nodes* in order and return their text.

        The enclosing ``_output`` is restored afterwards, even if a visitor
        raises.
        """
        enclosing = self._output
        self._output = []
        try:
            for node in nodes:
                node.accept(self)
            return "".join(self._output)
        finally:
            self._output = enclosing
