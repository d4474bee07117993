#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2delta/utils/decorators.py
"""Utility decorators for md2delta parsers and entry points.

This module provides the dependency check applied to the markdown parser and
a DEBUG-level timing context manager used by the conversion pipeline.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Optional, Tuple

from md2delta.exceptions import DependencyError
from md2delta.utils.packages import check_version_requirement


def _find_dependency_problems(
    packages: List[Tuple[str, str, str]],
) -> Tuple[List[Tuple[str, str]], List[Tuple[str, str, str]], Optional[ImportError]]:
    missing: List[Tuple[str, str]] = []
    mismatched: List[Tuple[str, str, str]] = []
    first_error: Optional[ImportError] = None

    for install_name, import_name, version_spec in packages:
        try:
            importlib.import_module(import_name)
        except ImportError as exc:
            missing.append((install_name, version_spec))
            first_error = first_error or exc
            continue

        if version_spec:
            satisfied, installed = check_version_requirement(install_name, version_spec)
            if not satisfied:
                mismatched.append((install_name, version_spec, installed or "unknown"))

    return missing, mismatched, first_error


def requires_dependencies(component_name: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Verify that *packages* import and satisfy their versions before each call.

    Parameters
    ----------
    component_name : str
        Name used in the error message (e.g., "markdown").
    packages : list of tuple
        ``(install_name, import_name, version_spec)`` triples, for example
        ``("mistune", "mistune", ">=3.0.0")``. An empty ``version_spec``
        accepts any installed version.

    Raises
    ------
    DependencyError
        Listing every missing package and version mismatch at once.

    Examples
    --------
        >>> @requires_dependencies("markdown", [("mistune", "mistune", ">=3.0.0")])
        ... def parse(self, input_data):
        ...     import mistune

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing, mismatched, first_error = _find_dependency_problems(packages)
            if missing or mismatched:
                raise DependencyError(
                    component_name=component_name,
                    missing_packages=missing,
                    version_mismatches=mismatched,
                    original_import_error=first_error,
                ) from first_error
            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log how long the wrapped block took, at DEBUG level.

    Nothing is measured when *logger* has DEBUG disabled.

    Examples
    --------
        >>> with debug_timer(logger, "Converting (delta)"):
        ...     ops = converter.convert(document)

    """
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return

    started = time.perf_counter()
    yield
    logger.debug("%s completed in %.3fs", operation, time.perf_counter() - started)
