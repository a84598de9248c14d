"""Cache adapters: in-memory first level and local-file second level."""

from .local import LocalFileCache
from .memory import MemoryCache

__all__ = ["LocalFileCache", "MemoryCache"]
