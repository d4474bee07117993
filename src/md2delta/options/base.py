"""Frozen dataclass bases shared by every options class."""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Copy-with-changes for frozen options objects."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy with the given fields replaced.

        The copy runs ``__post_init__`` again, so the new values are
        validated like constructor arguments.

        Examples
        --------
            >>> DeltaOptions().create_updated(merge_line_breaks=False).merge_line_breaks
            False

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Root of the parser options hierarchy."""

    def __post_init__(self) -> None:
        pass


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Root of the renderer options hierarchy.

    ``DeltaOptions`` derives from it too: the Delta compiler is a renderer
    whose output is a list of operations rather than text.
    """

    def __post_init__(self) -> None:
        pass
