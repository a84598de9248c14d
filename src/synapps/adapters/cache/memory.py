"""In-memory first-level cache.

Entries live in a plain dict for the lifetime of the process. An optional
second-level cache (any `Cache`) is consulted on misses and receives every
write, so the overall result of an operation is the nested cache's result
when one is chained.

Key behaviors
-------------
- **Disabled pass-through**: when disabled, ``save``/``remove``/``clear``
  report success without touching anything and ``load`` always misses.
- **Promotion**: a value loaded from the nested cache is copied into the
  in-memory mapping, so the next ``load`` of the same id does not reach the
  nested cache. Nested misses are never cached.
- **Tags and modes** are not interpreted at this level; they are handed
  unchanged to the nested cache.
- **Thread-safety**: the mapping and the enabled flag are guarded by an
  `RLock`. Delegation to the nested cache happens under the same lock, so a
  promotion can never race with a concurrent ``remove``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Any

from synapps.interfaces.cache import NOT_FOUND, Cache, ClearMode

__all__ = ["MemoryCache"]

logger = logging.getLogger(__name__)


class MemoryCache(Cache):
    """Cache storing entries in memory, optionally chained to a second level."""

    def __init__(self, enabled: bool = True, nested_cache: Cache | None = None) -> None:
        self._enabled = enabled
        self._nested_cache = nested_cache
        self._entries: dict[str, Any] = {}
        self._lock = threading.RLock()

    # --- Configuration ---

    @property
    def enabled(self) -> bool:
        """Whether this cache (and its nested cache) is used at all."""
        with self._lock:
            return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        with self._lock:
            self._enabled = value

    def is_enabled(self) -> bool:
        """Return True if this cache is enabled."""
        return self.enabled

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable the cache."""
        self.enabled = enabled

    @property
    def nested_cache(self) -> Cache | None:
        """The optional second-level cache."""
        return self._nested_cache

    def has_entry(self, entry_id: str) -> bool:
        """Return True if the in-memory level holds an entry for this id."""
        with self._lock:
            return entry_id in self._entries

    # --- Cache contract ---

    def clear(
        self, mode: ClearMode | None = None, tags: Iterable[str] | None = None
    ) -> bool:
        with self._lock:
            if not self._enabled:
                return True
            self._entries = {}
            if self._nested_cache is None:
                return True
            cleared = self._nested_cache.clear(mode, tags)
            logger.debug("Nested cache clear(mode=%s) -> %s", mode, cleared)
            return cleared

    def remove(self, entry_id: str) -> bool:
        with self._lock:
            if not self._enabled:
                return True
            self._entries.pop(entry_id, None)
            if self._nested_cache is None:
                return True
            return self._nested_cache.remove(entry_id)

    def load(self, entry_id: str) -> Any:
        with self._lock:
            if not self._enabled:
                return NOT_FOUND
            if entry_id in self._entries:
                return self._entries[entry_id]
            if self._nested_cache is None:
                return NOT_FOUND
            entry = self._nested_cache.load(entry_id)
            if entry is not NOT_FOUND:
                logger.debug("Promoting entry %r from the nested cache", entry_id)
                self._entries[entry_id] = entry
            return entry

    def save(
        self, entry_id: str, data: Any, tags: Iterable[str] | None = None
    ) -> bool:
        with self._lock:
            if not self._enabled:
                return True
            self._entries[entry_id] = data
            if self._nested_cache is None:
                return True
            return self._nested_cache.save(entry_id, data, tags)
