#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/md2delta/utils/packages.py
"""Installed-distribution lookups backing ``requires_dependencies``."""

from __future__ import annotations

from importlib import metadata
from typing import Optional, Tuple

from packaging import version
from packaging.specifiers import InvalidSpecifier, SpecifierSet


def get_package_version(package_name: str) -> Optional[str]:
    """Return the installed version of distribution *package_name*, or None."""
    try:
        return metadata.version(package_name)
    except metadata.PackageNotFoundError:
        return None


def check_version_requirement(package_name: str, version_spec: str) -> Tuple[bool, Optional[str]]:
    """Test the installed version of *package_name* against *version_spec*.

    Parameters
    ----------
    package_name : str
        Distribution name as used by pip (``"pyyaml"``, not ``"yaml"``)
    version_spec : str
        PEP 440 specifier such as ``">=3.0.0"``. An unparsable specifier is
        treated as satisfied.

    Returns
    -------
    tuple of (bool, str or None)
        Whether the requirement holds, and the installed version if any.

    """
    installed = get_package_version(package_name)
    if installed is None:
        return False, None

    try:
        specifier = SpecifierSet(version_spec)
    except InvalidSpecifier:
        return True, installed

    return version.parse(installed) in specifier, installed
