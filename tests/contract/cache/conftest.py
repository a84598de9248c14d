"""Pytest fixtures for cache contract tests.

Provided fixtures
-----------------
- **cache**: Parametrized backend factory returning a **fresh** `Cache` per
  test:
  - ``"memory"``: `MemoryCache` without a second level.
  - ``"local"``: `LocalFileCache` rooted in a temporary directory.
  - ``"chained"``: `MemoryCache` chained to a `LocalFileCache`.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from synapps.adapters.cache import LocalFileCache, MemoryCache
from synapps.interfaces.cache import Cache


@pytest.fixture(params=["memory", "local", "chained"])
def cache(request: pytest.FixtureRequest, tmp_path: Path) -> Cache:
    """Return a fresh cache instance for the requested backend."""
    match request.param:
        case "memory":
            return MemoryCache()
        case "local":
            return LocalFileCache(tmp_path / "cache")
        case "chained":
            return MemoryCache(nested_cache=LocalFileCache(tmp_path / "cache"))
        case _:
            raise ValueError(f"unknown cache type: {request.param}")
