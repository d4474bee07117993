#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers that turn md2delta AST documents back into text."""

from md2delta.renderers.base import BaseRenderer, OutputCaptureMixin
from md2delta.renderers.markdown import MarkdownRenderer

__all__ = ["BaseRenderer", "OutputCaptureMixin", "MarkdownRenderer"]
