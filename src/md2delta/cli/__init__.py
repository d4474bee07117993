"""Command-line interface for the md2delta conversion library.

This module provides a small CLI that reads markdown from a file or stdin and
writes the Delta operations as JSON.

Configuration
-------------
Settings are resolved from, highest priority first: command-line flags, the
file given with ``--config``, the file named by the ``MD2DELTA_CONFIG``
environment variable, and an auto-discovered ``.md2delta.toml`` /
``.md2delta.yaml`` / ``.md2delta.yml`` / ``.md2delta.json`` or a
``pyproject.toml`` with a ``[tool.md2delta]`` section.

Examples
--------
Convert a file::

    $ md2delta notes.md

Read stdin and write compact JSON to a file::

    $ cat notes.md | md2delta - --compact --out notes.delta.json

Keep ordered lists separate and strip frontmatter::

    $ md2delta post.md --no-merge-ordered-lists --frontmatter

Highlight the JSON in a terminal (requires the ``rich`` extra)::

    $ md2delta notes.md --rich

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import json
import logging
import os
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional

from md2delta.api import markdown_to_delta
from md2delta.cli.config import load_config_with_priority
from md2delta.cli.output import print_json_output, should_use_rich_output
from md2delta.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_JSON_INDENT,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from md2delta.exceptions import Md2DeltaError
from md2delta.logging_utils import configure_logging, resolve_log_level
from md2delta.options.delta import DeltaOptions
from md2delta.options.markdown import MarkdownParserOptions

logger = logging.getLogger(__name__)

__all__ = ["build_options", "create_parser", "main"]


def _add_options_class_flags(group: Any, options_class: type) -> None:
    """Add one on/off flag per boolean options field that declares a ``cli_name``.

    A ``no-`` prefixed name switches the option off; any other name switches
    it on. Flags default to None so that unset flags fall through to config.
    """
    for field in fields(options_class):
        cli_name = field.metadata.get("cli_name")
        if not cli_name:
            continue
        group.add_argument(
            f"--{cli_name}",
            dest=field.name,
            action="store_const",
            const=not cli_name.startswith("no-"),
            default=None,
            help=field.metadata.get("help"),
        )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the md2delta command."""
    from md2delta import __version__

    parser = argparse.ArgumentParser(
        prog="md2delta",
        description="Convert markdown into Quill Delta insert operations (JSON).",
    )
    parser.add_argument("input", nargs="?", default="-", help="Markdown file to convert, or '-' for stdin (default)")
    parser.add_argument("-o", "--out", help="Write JSON to this file instead of stdout")
    parser.add_argument("--indent", type=int, default=None, help=f"JSON indent (default {DEFAULT_JSON_INDENT})")
    parser.add_argument("--compact", action="store_true", help="Write JSON on a single line")
    parser.add_argument("--config", help="Path to a configuration file (TOML, YAML or JSON)")
    parser.add_argument("--rich", action="store_true", help="Syntax-highlight JSON written to a terminal (needs rich)")
    parser.add_argument(
        "--force-rich", action="store_true", help="Use rich highlighting even when stdout is not a terminal"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    conversion_group = parser.add_argument_group("conversion options")
    _add_options_class_flags(conversion_group, DeltaOptions)

    parsing_group = parser.add_argument_group("markdown parsing options")
    _add_options_class_flags(parsing_group, MarkdownParserOptions)

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default WARNING)",
    )
    logging_group.add_argument("--log-file", help="Also write log output to this file")
    logging_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")

    return parser


def build_options(
    parsed_args: argparse.Namespace, config: Dict[str, Any]
) -> tuple[DeltaOptions, MarkdownParserOptions]:
    """Resolve converter and parser options from flags over config values.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments; unset option flags are None
    config : dict
        Validated configuration values

    Returns
    -------
    tuple
        (DeltaOptions, MarkdownParserOptions)

    """
    resolved: list[Any] = []
    for options_class in (DeltaOptions, MarkdownParserOptions):
        kwargs: Dict[str, Any] = {}
        for field in fields(options_class):
            flag_value = getattr(parsed_args, field.name, None)
            if flag_value is not None:
                kwargs[field.name] = flag_value
            elif field.name in config:
                kwargs[field.name] = config[field.name]
        resolved.append(options_class(**kwargs))

    delta_options, parser_options = resolved
    return delta_options, parser_options


def _resolve_indent(parsed_args: argparse.Namespace, config: Dict[str, Any]) -> Optional[int]:
    if parsed_args.compact:
        return None
    if parsed_args.indent is not None:
        return parsed_args.indent
    return config.get("indent", DEFAULT_JSON_INDENT)


def _read_input(input_arg: str) -> str:
    if input_arg == "-":
        return sys.stdin.read()
    return Path(input_arg).read_text(encoding="utf-8")


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    # --trace takes precedence over --log-level
    log_level = logging.DEBUG if parsed_args.trace else resolve_log_level(parsed_args.log_level)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def main(args: list[str] | None = None) -> int:
    """Execute the md2delta command.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Exit code: 0 success, 1 conversion error, 2 argument or config
        error, 3 file error

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    if parsed_args.indent is not None and parsed_args.indent < 0:
        print("Error: --indent must not be negative", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
        delta_options, parser_options = build_options(parsed_args, config)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        markdown_text = _read_input(parsed_args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Could not read input {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        ops = markdown_to_delta(markdown_text, options=delta_options, parser_options=parser_options)
    except Md2DeltaError as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    output = json.dumps(ops, indent=_resolve_indent(parsed_args, config), ensure_ascii=False)

    if parsed_args.out:
        try:
            Path(parsed_args.out).write_text(output + "\n", encoding="utf-8")
        except OSError as e:
            print(f"Error: Could not write output {parsed_args.out}: {e}", file=sys.stderr)
            return EXIT_FILE_ERROR
        logger.info("Wrote %d operations to %s", len(ops), parsed_args.out)
    else:
        try:
            use_rich = should_use_rich_output(parsed_args, raise_on_missing=True)
        except Md2DeltaError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_ERROR
        print_json_output(output, use_rich)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
