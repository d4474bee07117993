#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/options/delta.py
"""Configuration options for AST-to-Delta conversion."""

from __future__ import annotations

from dataclasses import dataclass, field

from md2delta.constants import DEFAULT_MERGE_LINE_BREAKS, DEFAULT_MERGE_ORDERED_LISTS
from md2delta.exceptions import InvalidOptionsError
from md2delta.options.base import BaseRendererOptions
from md2delta.options.markdown import MarkdownRendererOptions


@dataclass(frozen=True)
class DeltaOptions(BaseRendererOptions):
    """Options controlling how a document is compiled into Delta operations.

    Parameters
    ----------
    merge_ordered_lists : bool, default True
        Link top-level ordered lists that are separated only by other lists
        into one numbering group before conversion. The built-in handlers
        ignore the grouping; it is visible to custom handlers only.
    merge_line_breaks : bool, default True
        Fold a hard line break that sits between two text nodes into the
        preceding text operation instead of emitting a separate newline.
    serializer_options : MarkdownRendererOptions, default MarkdownRendererOptions()
        Options for the markdown renderer that produces literal output for
        nodes no handler claims.

    """

    merge_ordered_lists: bool = field(
        default=DEFAULT_MERGE_ORDERED_LISTS,
        metadata={
            "help": "Merge top-level ordered lists separated only by lists",
            "cli_name": "no-merge-ordered-lists",
        },
    )
    merge_line_breaks: bool = field(
        default=DEFAULT_MERGE_LINE_BREAKS,
        metadata={"help": "Fold line breaks between text into the preceding op", "cli_name": "no-merge-line-breaks"},
    )
    serializer_options: MarkdownRendererOptions = field(
        default_factory=MarkdownRendererOptions,
        metadata={"help": "Markdown renderer options used for the literal fallback"},
    )

    def __post_init__(self) -> None:
        """Validate the nested serializer options.

        Raises
        ------
        InvalidOptionsError
            If serializer_options is not a MarkdownRendererOptions instance.

        """
        super().__post_init__()

        if not isinstance(self.serializer_options, MarkdownRendererOptions):
            raise InvalidOptionsError(
                component_name="delta",
                expected_type=MarkdownRendererOptions,
                received_type=type(self.serializer_options),
            )
