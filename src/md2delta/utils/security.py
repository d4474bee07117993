#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Input hardening helpers.

Fence info strings travel from markdown input into the AST and, through the
literal fallback, back out into Delta text. ``sanitize_language_identifier``
keeps a crafted info string from breaking out of its fence on the way.
"""

import logging
import re

from md2delta.constants import (
    MAX_LANGUAGE_IDENTIFIER_LENGTH,
    SAFE_LANGUAGE_IDENTIFIER_PATTERN,
)

logger = logging.getLogger(__name__)

_SAFE_LANGUAGE = re.compile(SAFE_LANGUAGE_IDENTIFIER_PATTERN)


def sanitize_language_identifier(language: str) -> str:
    r"""Return *language* stripped, or ``""`` if it is unsafe to write after a fence.

    Accepted identifiers contain only letters, digits and ``_-+.#``, and are at
    most ``MAX_LANGUAGE_IDENTIFIER_LENGTH`` characters long.

    Examples
    --------
    >>> sanitize_language_identifier(" c++ ")
    'c++'
    >>> sanitize_language_identifier("python\\n# injected")
    ''

    """
    if not language:
        return ""

    candidate = language.strip()
    if len(candidate) > MAX_LANGUAGE_IDENTIFIER_LENGTH:
        logger.warning("Dropping code fence language longer than %d characters", MAX_LANGUAGE_IDENTIFIER_LENGTH)
        return ""
    if not _SAFE_LANGUAGE.match(candidate):
        logger.warning("Dropping code fence language with unsafe characters: %r", candidate[:50])
        return ""
    return candidate
