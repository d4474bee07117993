#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/parsers/base.py
"""Abstract parser interface: source in, Document out."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from md2delta.ast import Document
from md2delta.exceptions import InvalidOptionsError, ValidationError
from md2delta.options.base import BaseParserOptions


class BaseParser(ABC):
    """Turns source text into a :class:`~md2delta.ast.Document`.

    ``parse`` takes text, a ``Path``, raw bytes, or a text or binary stream.
    A ``str`` is always the source itself, never a file name.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Options of the concrete parser
    """

    def __init__(self, options: BaseParserOptions | None = None):
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Raise InvalidOptionsError unless *options* is None or an *expected_type*."""
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: Union[str, Path, IO[str], IO[bytes], bytes]) -> Document:
        """Parse *input_data* into a Document.

        Raises
        ------
        ParsingError
            If the source cannot be parsed
        DependencyError
            If a library the parser needs is missing
        ValidationError
            If *input_data* is of an unsupported type

        """
        raise NotImplementedError

    @staticmethod
    def _load_text_content(input_data: Union[str, Path, IO[str], IO[bytes], bytes]) -> str:
        """Read *input_data* into a string.

        Bytes and binary streams are decoded as UTF-8 with an optional BOM.

        Raises
        ------
        ValidationError
            For an unsupported type or bytes that are not UTF-8

        """
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, Path):
            return input_data.read_text(encoding="utf-8")
        if isinstance(input_data, bytes):
            try:
                return input_data.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise ValidationError(
                    "Input bytes are not valid UTF-8",
                    parameter_name="input_data",
                    original_error=e,
                ) from e
        if hasattr(input_data, "read"):
            data = input_data.read()
            if isinstance(data, bytes):
                return BaseParser._load_text_content(data)
            return str(data)

        raise ValidationError(
            f"Unsupported input type: {type(input_data).__name__}",
            parameter_name="input_data",
            parameter_value=input_data,
        )
