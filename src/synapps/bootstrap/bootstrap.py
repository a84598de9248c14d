"""Build the host descriptor, file handles, runtime and two-level cache."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from synapps import config
from synapps.adapters.cache import LocalFileCache, MemoryCache
from synapps.adapters.filesystem import File
from synapps.domain.host import HostDescriptor
from synapps.system.runtime import Runtime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring."""

    host: HostDescriptor
    cache: MemoryCache
    runtime: Runtime


def build_host(platform_name: str | None = None) -> HostDescriptor:
    """Build a host descriptor for `platform_name`, or detect the current one."""
    if platform_name is None:
        return HostDescriptor.detect()
    return HostDescriptor(platform_name)


def build_file(path: str | os.PathLike[str], host: HostDescriptor | None = None) -> File:
    """Build a file handle bound to `host` (the detected host by default)."""
    return File(path, host or build_host())


def build_cache(
    enabled: bool | None = None, directory: str | os.PathLike[str] | None = None
) -> MemoryCache:
    """Build the memory cache chained to a local-file second level.

    Args:
        enabled: Overrides `SYNAPPS_CACHE_ENABLED` when given.
        directory: Overrides `SYNAPPS_CACHE_DIR` when given.
    """
    enabled = config.get_cache_enabled() if enabled is None else enabled
    root = Path(directory) if directory is not None else config.get_cache_dir()
    logger.debug("Building cache (enabled=%s, root=%s)", enabled, root)
    return MemoryCache(enabled=enabled, nested_cache=LocalFileCache(root))


def bootstrap(host: HostDescriptor | None = None) -> AppContainer:
    """Assemble the application objects from configuration."""
    host = host or build_host()
    return AppContainer(host=host, cache=build_cache(), runtime=Runtime(host))
