"""SQL helpers."""

from __future__ import annotations

import re

# Wildcard matching any single character in a LIKE clause.
LIKE_ANY_CHAR_WILDCARD = "_"
# Wildcard matching any string in a LIKE clause.
LIKE_ANY_STRING_WILDCARD = "%"
LIKE_DEFAULT_ESCAPE_CHAR = "\\"

_LIKE_SPECIAL_CHARACTERS = re.compile(r"([_%\\])")


def escape_like_pattern(pattern: str | None) -> str:
    """Escape ``_``, ``%`` and the ``\\`` escape character for a LIKE clause.

    Returns:
        str: The escaped pattern, or an empty string for ``None``.
    """
    if pattern is None:
        return ""
    return _LIKE_SPECIAL_CHARACTERS.sub(r"\\\1", pattern)
