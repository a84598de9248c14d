"""String helpers: comparison, blank checks and readable dumps of values."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

EMPTY_STR = ""
NULL_STR = "null"
QUOTE = "'"
DOUBLE_QUOTE = '"'
ARRAY_VALUES_SEPARATOR = ","
OPEN_SQUARE_BRACKET = "["
CLOSE_SQUARE_BRACKET = "]"

# Characters stripped by `is_blank` (whitespace, NUL and vertical tab).
_BLANK_CHARACTERS = " \t\n\r\0\x0b"  # pragma: no mutate


def equals(str1: str, str2: str, ignore_case: bool = False) -> bool:
    """Tell whether two strings are the same, optionally ignoring case."""
    if ignore_case:
        return str1.casefold() == str2.casefold()
    return str1 == str2


def is_blank(value: Any) -> bool:
    """Tell whether a value is ``None`` or a string holding only whitespace."""
    return value is None or (isinstance(value, str) and not value.strip(_BLANK_CHARACTERS))


def _is_collection(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def _items(pieces: Mapping[Any, Any] | Iterable[Any]) -> Iterable[tuple[Any, Any]]:
    if isinstance(pieces, Mapping):
        return pieces.items()
    return enumerate(pieces)


def _enclosers(quote: str | None) -> tuple[str, str]:
    if quote is None:
        return OPEN_SQUARE_BRACKET, CLOSE_SQUARE_BRACKET
    return quote, quote


def default_string(var: Any, default: Any = NULL_STR, quote: str | None = None) -> Any:
    """Return a displayable form of `var`, or `default` when it is ``None``.

    - strings are enclosed in `quote` (single quotes by default),
    - lists, tuples and mappings are imploded with their keys shown and
      enclosed in `quote` (square brackets by default),
    - any other value is returned unchanged.

    Example:
        >>> default_string(None)
        'null'
        >>> default_string("abc")
        "'abc'"
        >>> default_string({"a": 1})
        "['a'=1]"
    """
    if var is None:
        return default
    if isinstance(var, str):
        quote = QUOTE if quote is None else quote
        return f"{quote}{var}{quote}"
    if _is_collection(var):
        start, end = _enclosers(quote)
        return start + implode_recursively(var, ARRAY_VALUES_SEPARATOR, quote, True) + end
    return var


def implode_recursively(
    pieces: Mapping[Any, Any] | Iterable[Any],
    glue: str = EMPTY_STR,
    quote: str | None = None,
    show_keys: bool = False,
) -> str:
    """Join values (recursively for nested collections) with `glue`.

    Values are rendered with `default_string`. Nested collections are
    imploded too and enclosed in `quote` (square brackets by default). With
    `show_keys`, each value is prefixed by its key and ``=``.
    """
    result = EMPTY_STR
    for key, value in _items(pieces):
        if result:
            result += glue
        if show_keys:
            result += f"{default_string(key)}="
        if _is_collection(value):
            start, end = _enclosers(quote)
            result += start + implode_recursively(value, glue, quote) + end
        else:
            result += str(default_string(value))
    return result
