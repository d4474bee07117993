"""Terminal output for the md2delta command."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/md2delta/cli/output.py
import argparse
import sys
from typing import Optional, TextIO

from md2delta.exceptions import DependencyError


def check_rich_available() -> bool:
    """Return True when the optional ``rich`` package can be imported."""
    try:
        import rich  # noqa: F401
    except ImportError:
        return False
    return True


def should_use_rich_output(
    args: argparse.Namespace, raise_on_missing: bool = False, stream: Optional[TextIO] = None
) -> bool:
    """Decide whether JSON output is pretty-printed with rich.

    Rich output needs ``--rich``, the ``rich`` package, and either a terminal
    on *stream* (stdout by default) or ``--force-rich``. Output written with
    ``--out`` never goes through this path.

    Raises
    ------
    DependencyError
        If ``--rich`` was given, rich is missing and *raise_on_missing* is set.

    """
    if not getattr(args, "rich", False):
        return False

    if not check_rich_available():
        if raise_on_missing:
            raise DependencyError(
                component_name="rich-output",
                missing_packages=[("rich", "")],
                message="--rich needs the optional 'rich' package. Install with: pip install md2delta[rich]",
            )
        return False

    if getattr(args, "force_rich", False):
        return True

    isatty = getattr(stream or sys.stdout, "isatty", None)
    return bool(callable(isatty) and isatty())


def print_json_output(output: str, use_rich: bool, stream: Optional[TextIO] = None) -> None:
    """Write serialized ops to *stream*, highlighted when *use_rich* is set.

    *output* is the already-serialized JSON text, so plain and rich output
    show the same document.
    """
    target = stream or sys.stdout
    if not use_rich:
        print(output, file=target)
        return

    from rich.console import Console
    from rich.json import JSON

    Console(file=target).print(JSON(output))
