#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the md2delta CLI.

This module handles automatic discovery of configuration files, loading
configs from TOML, YAML or JSON, and validating the loaded keys.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from md2delta.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION

logger = logging.getLogger(__name__)

# Recognized config keys and the type each value must have
CONFIG_KEYS: Dict[str, type] = {
    "merge_ordered_lists": bool,
    "merge_line_breaks": bool,
    "parse_tables": bool,
    "parse_strikethrough": bool,
    "parse_task_lists": bool,
    "parse_footnotes": bool,
    "parse_autolinks": bool,
    "parse_frontmatter": bool,
    "indent": int,
}

_FORMATS_BY_EXTENSION = {".toml": "TOML", ".yaml": "YAML", ".yml": "YAML", ".json": "JSON"}


def _read_file(path: Path, file_format: str) -> Any:
    """Parse *path* as TOML, YAML or JSON, reporting failures as argument errors."""
    try:
        if file_format == "TOML":
            with open(path, "rb") as f:
                return tomllib.load(f)
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) if file_format == "YAML" else json.load(f)
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Invalid {file_format} in config file {path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {path}: {e}") from e


def _as_mapping(value: Any, what: str) -> Dict[str, Any]:
    # An empty YAML document loads as None
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise argparse.ArgumentTypeError(f"{what} must be a mapping, got {type(value).__name__}")
    return value


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.md2delta]`` table of a pyproject.toml, or an empty dict.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be parsed or the section is not a table

    """
    data = _read_file(pyproject_path, "TOML")
    section = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
    return _as_mapping(section, f"[tool.{PYPROJECT_TOOL_SECTION}] in {pyproject_path}")


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up from ``start_dir`` to the filesystem root. In each directory the
    dedicated config files are checked in ``CONFIG_FILENAMES`` order, then
    ``pyproject.toml``, which only counts when it has a ``[tool.md2delta]``
    section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in standard locations.

    Searches parent directories from ``start_dir`` (default: cwd) up to the
    filesystem root, then falls back to the dedicated config files in the
    user's home directory.

    Parameters
    ----------
    start_dir : Path, optional
        Where the parent search starts

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    config_in_parents = find_config_in_parents(start_dir)
    if config_in_parents:
        return config_in_parents

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    The format is chosen from the file name: ``pyproject.toml`` contributes
    its ``[tool.md2delta]`` section, other files are read by extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has invalid format

    Examples
    --------
    >>> config = load_config_file(".md2delta.toml")
    >>> config.get("merge_line_breaks")
    False

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")

    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)

    ext = config_path.suffix.lower()
    file_format = _FORMATS_BY_EXTENSION.get(ext)
    if file_format is None:
        raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")
    return _as_mapping(_read_file(config_path, file_format), f"{file_format} config file {config_path}")


def validate_config(config: Dict[str, Any], source: Path | str = "<config>") -> Dict[str, Any]:
    """Keep the recognized keys of a loaded configuration.

    Parameters
    ----------
    config : dict
        Raw configuration mapping
    source : Path or str, default "<config>"
        Where the configuration came from, for messages

    Returns
    -------
    dict
        The recognized keys and their values. Unknown keys are logged as
        warnings and dropped.

    Raises
    ------
    argparse.ArgumentTypeError
        If a recognized key has a value of the wrong type, or ``indent`` is
        negative

    """
    validated: Dict[str, Any] = {}

    for key, value in config.items():
        expected_type = CONFIG_KEYS.get(key)
        if expected_type is None:
            logger.warning("Ignoring unknown config key '%s' in %s", key, source)
            continue

        # bool is a subclass of int; reject it where an int is expected
        if not isinstance(value, expected_type) or (expected_type is int and isinstance(value, bool)):
            raise argparse.ArgumentTypeError(
                f"Config key '{key}' in {source} must be {expected_type.__name__}, got {type(value).__name__}"
            )
        if key == "indent" and value < 0:
            raise argparse.ArgumentTypeError(f"Config key 'indent' in {source} must not be negative, got {value}")

        validated[key] = value

    return validated


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load and validate configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (MD2DELTA_CONFIG)
    3. Auto-discovered config file

    Parameters
    ----------
    explicit_path : str, optional
        Explicit config file path from --config flag
    env_var_path : str, optional
        Config file path from the MD2DELTA_CONFIG environment variable

    Returns
    -------
    dict
        Validated configuration dictionary (empty dict if no config found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified but cannot be loaded or is invalid

    """
    config_path: Path | str | None = explicit_path or env_var_path or discover_config_file()
    if not config_path:
        return {}

    logger.debug("Loading configuration from %s", config_path)
    return validate_config(load_config_file(config_path), config_path)


__all__ = [
    "CONFIG_KEYS",
    "discover_config_file",
    "find_config_in_parents",
    "load_config_file",
    "load_config_with_priority",
    "validate_config",
]
