"""Regular-expression helpers."""

import re

_SPECIAL_CHARACTERS = re.compile(r"([\^$()\[\]|.*+?])")


def quote(value: str) -> str:
    """Escape the regular-expression metacharacters ``^ $ ( ) [ ] | . * + ?``.

    Useful to build `File.list_file_paths` patterns from literal names.
    """
    return _SPECIAL_CHARACTERS.sub(r"\\\1", value)
