#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/utils/__init__.py
"""Utility modules for the md2delta package.

This package contains dependency checking and timing helpers shared by the
parser, the API layer and the CLI.
"""

from md2delta.utils.decorators import debug_timer, requires_dependencies
from md2delta.utils.packages import check_version_requirement, get_package_version

__all__ = [
    "check_version_requirement",
    "debug_timer",
    "get_package_version",
    "requires_dependencies",
]
