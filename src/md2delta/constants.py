#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the md2delta library.

This module centralizes the hardcoded values used across md2delta: the
Literal types shared by the options classes, markdown rendering defaults used
by the fallback serializer, the attribute keys emitted into Delta operations,
and the dependency specifications checked at parse time.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Dependency Specifications - packages checked by @requires_dependencies
3. Markdown Formatting - defaults for the fallback markdown renderer
4. Delta Attributes - attribute keys and values written into operations
5. CLI and Configuration - exit codes, config file names, config env var
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

EmphasisSymbol = Literal["*", "_"]
CodeFenceChar = Literal["`", "~"]
ListAttributeValue = Literal["ordered", "bullet", "checked", "unchecked"]

# =============================================================================
# Dependency Specifications for @requires_dependencies decorator
# =============================================================================
# Each spec is a list of tuples: (pip_package, import_name, version_constraint)

DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]
DEPS_FRONTMATTER_YAML = [("pyyaml", "yaml", "")]

# =============================================================================
# General Markdown Formatting Constants
# =============================================================================

DEFAULT_EMPHASIS_SYMBOL: EmphasisSymbol = "*"
DEFAULT_BULLET_SYMBOLS = "*-+"

DEFAULT_CODE_FENCE_CHAR: CodeFenceChar = "`"
DEFAULT_CODE_FENCE_MIN = 3
MIN_CODE_FENCE_LENGTH = 3
MAX_CODE_FENCE_LENGTH = 10

# Code fence language identifier security (markdown injection prevention)
SAFE_LANGUAGE_IDENTIFIER_PATTERN = r"^[a-zA-Z0-9_+\-#.]+$"
MAX_LANGUAGE_IDENTIFIER_LENGTH = 50

DEFAULT_TABLE_PIPE_ESCAPE = True
DEFAULT_ESCAPE_SPECIAL = True

# =============================================================================
# Markdown Parsing Constants
# =============================================================================

DEFAULT_PARSE_TABLES = True
DEFAULT_PARSE_STRIKETHROUGH = True
DEFAULT_PARSE_TASK_LISTS = True
DEFAULT_PARSE_FOOTNOTES = True
DEFAULT_PARSE_AUTOLINKS = True
DEFAULT_PARSE_FRONTMATTER = False

YAML_FRONTMATTER_DELIMITER = "---"
TOML_FRONTMATTER_DELIMITER = "+++"

# =============================================================================
# Delta Attribute Constants
# =============================================================================

BLOCK_TERMINATOR = "\n"

ATTR_BOLD = "bold"
ATTR_ITALIC = "italic"
ATTR_STRIKE = "strike"
ATTR_HEADER = "header"
ATTR_LIST = "list"
ATTR_INDENT = "indent"
ATTR_BLOCKQUOTE = "blockquote"
ATTR_CODE = "code"
ATTR_CODE_BLOCK = "code-block"
ATTR_LINK = "link"
ATTR_ALT = "alt"

EMBED_IMAGE = "image"

LIST_ORDERED: ListAttributeValue = "ordered"
LIST_BULLET: ListAttributeValue = "bullet"
LIST_CHECKED: ListAttributeValue = "checked"
LIST_UNCHECKED: ListAttributeValue = "unchecked"

# Metadata key linking the ordered-list segments of one merge group
LIST_GROUP_METADATA_KEY = "list_group"

DEFAULT_MERGE_ORDERED_LISTS = True
DEFAULT_MERGE_LINE_BREAKS = True

# =============================================================================
# CLI and Configuration Constants
# =============================================================================

CONFIG_ENV_VAR = "MD2DELTA_CONFIG"
CONFIG_FILENAMES = [".md2delta.toml", ".md2delta.yaml", ".md2delta.yml", ".md2delta.json"]
PYPROJECT_TOOL_SECTION = "md2delta"

DEFAULT_JSON_INDENT = 2

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_FILE_ERROR = 3
