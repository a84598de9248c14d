"""Cache interface.

This module defines the uniform contract shared by every cache level:
``clear`` / ``remove`` / ``load`` / ``save``. A first-level cache may be
chained to any other implementation of the same contract (its second-level
cache), which is consulted on misses and receives every write.

Exports
-------
- NOT_FOUND: Sentinel returned by `Cache.load` on a miss. It is distinct from
  every storable value, including ``False``, ``None`` and empty containers.
- ClearMode: Modes accepted by `Cache.clear`. Implementations document which
  modes they interpret; unsupported modes are accepted and passed through.
- Cache: Abstract base class of the contract.

Notes
-----
Cache operations report success with a boolean and never raise on their own
account; a chained cache's failure surfaces as a ``False`` result.
"""

from __future__ import annotations

import abc
from collections.abc import Iterable
from enum import Enum
from typing import Any, Final, final


@final
class _NotFoundType:
    """Type of the `NOT_FOUND` sentinel (single instance, falsy)."""

    _instance: _NotFoundType | None = None

    def __new__(cls) -> _NotFoundType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __reduce__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND: Final = _NotFoundType()


class ClearMode(Enum):
    """Enumeration of cache clearing modes.

    Modes:
    - ALL: remove every entry.
    - OLD: remove expired entries only.
    - MATCHING_TAG: remove entries carrying all the given tags.
    - NOT_MATCHING_TAG: remove entries carrying none of the given tags.
    - MATCHING_ANY_TAG: remove entries carrying at least one of the given tags.
    """

    ALL = "all"
    OLD = "old"
    MATCHING_TAG = "matching-tag"
    NOT_MATCHING_TAG = "not-matching-tag"
    MATCHING_ANY_TAG = "matching-any-tag"


class Cache(abc.ABC):
    """Contract for a key/value cache level."""

    @abc.abstractmethod
    def clear(
        self, mode: ClearMode | None = None, tags: Iterable[str] | None = None
    ) -> bool:
        """Clear entries.

        Args:
            mode: Clear mode; ``None`` means the implementation default
                (usually `ClearMode.ALL`).
            tags: Tags used by the tag-based modes.

        Returns:
            bool: True if the cache was cleared.
        """

    @abc.abstractmethod
    def remove(self, entry_id: str) -> bool:
        """Remove the entry with the given id.

        Returns:
            bool: True if the entry is gone (including when it never existed).
        """

    @abc.abstractmethod
    def load(self, entry_id: str) -> Any:
        """Load the entry with the given id.

        Returns:
            The cached value, or `NOT_FOUND` on a miss.
        """

    @abc.abstractmethod
    def save(
        self, entry_id: str, data: Any, tags: Iterable[str] | None = None
    ) -> bool:
        """Save or overwrite an entry.

        Args:
            entry_id: Caller-supplied opaque id.
            data: Value to store.
            tags: Optional tags attached to the entry.

        Returns:
            bool: True if the entry was saved.
        """
