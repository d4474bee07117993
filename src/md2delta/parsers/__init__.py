#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers that build md2delta AST documents from source text."""

from md2delta.parsers.base import BaseParser
from md2delta.parsers.markdown import MarkdownToAstConverter, markdown_to_ast

__all__ = ["BaseParser", "MarkdownToAstConverter", "markdown_to_ast"]
