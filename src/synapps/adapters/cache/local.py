"""Local filesystem-based persistent cache.

A second-level `Cache` that survives process restarts. Each entry is one
pickled record (``data`` plus ``tags``) stored under a sharded path derived
from the SHA-256 of its id:

    root/ab/ab12cd...ef

Records are written to a temporary file in ``root`` and moved into place with
`os.replace`, so a reader never observes a partially written record.

Failures are reported through the boolean results of the `Cache` contract
(and logged); nothing is raised to the caller.
"""

from __future__ import annotations

import hashlib
import logging
import os
import pickle
import tempfile
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from synapps.interfaces.cache import NOT_FOUND, Cache, ClearMode

__all__ = ["LocalFileCache"]

logger = logging.getLogger(__name__)

TEMP_PREFIX = ".tmp-"  # pragma: no mutate


@dataclass(frozen=True)
class _Record:
    data: Any
    tags: frozenset[str] = field(default_factory=frozenset)


class LocalFileCache(Cache):
    """Cache implementation that persists entries on the local filesystem."""

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        """Directory holding the cache records."""
        return self._root

    # --- Cache contract ---

    def clear(
        self, mode: ClearMode | None = None, tags: Iterable[str] | None = None
    ) -> bool:
        mode = mode or ClearMode.ALL
        if mode is ClearMode.OLD:
            # Entries never expire.
            return True
        wanted = frozenset(tags or ())
        ok = True
        for path in list(self._iter_record_paths()):
            if mode is not ClearMode.ALL:
                record = self._read(path)
                if record is None or not _matches(mode, record.tags, wanted):
                    continue
            ok = self._unlink(path) and ok
        return ok

    def remove(self, entry_id: str) -> bool:
        return self._unlink(self._determine_record_path(entry_id))

    def load(self, entry_id: str) -> Any:
        record = self._read(self._determine_record_path(entry_id))
        if record is None:
            return NOT_FOUND
        return record.data

    def save(
        self, entry_id: str, data: Any, tags: Iterable[str] | None = None
    ) -> bool:
        dest = self._determine_record_path(entry_id)
        record = _Record(data=data, tags=frozenset(tags or ()))
        tmp_path: Path | None = None
        try:
            payload = pickle.dumps(record, protocol=pickle.HIGHEST_PROTOCOL)
            dest.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(dir=self._root, prefix=TEMP_PREFIX, delete=False) as tmp:  # pragma: no mutate # fmt: skip # pylint:disable=line-too-long
                tmp_path = Path(tmp.name)
                tmp.write(payload)
            os.replace(tmp_path, dest)
        except (OSError, pickle.PicklingError, TypeError, AttributeError) as err:
            logger.warning("Cannot save cache entry %r: %s", entry_id, err)
            if tmp_path is not None:
                self._unlink(tmp_path)
            return False
        return True

    # --- Internal Helpers ---

    def _determine_record_path(self, entry_id: str) -> Path:
        digest = hashlib.sha256(entry_id.encode("utf-8")).hexdigest()
        return self._root / digest[0:2] / digest

    def _iter_record_paths(self) -> Iterator[Path]:
        for shard in self._root.iterdir():
            if shard.is_dir():
                yield from (p for p in shard.iterdir() if p.is_file())

    @staticmethod
    def _read(path: Path) -> _Record | None:
        try:
            with path.open("rb") as file:
                record = pickle.load(file)
        except FileNotFoundError:
            return None
        except (
            OSError, pickle.UnpicklingError, EOFError, AttributeError, ImportError, ValueError
        ) as err:
            logger.warning("Ignoring unreadable cache record %s: %s", path, err)
            return None
        return record if isinstance(record, _Record) else None

    @staticmethod
    def _unlink(path: Path) -> bool:
        try:
            path.unlink(missing_ok=True)
        except OSError as err:
            logger.warning("Cannot remove cache record %s: %s", path, err)
            return False
        return True


def _matches(mode: ClearMode, tags: frozenset[str], wanted: frozenset[str]) -> bool:
    match mode:
        case ClearMode.MATCHING_TAG:
            return wanted <= tags
        case ClearMode.NOT_MATCHING_TAG:
            return not wanted & tags
        case ClearMode.MATCHING_ANY_TAG:
            return bool(wanted & tags)
        case _:
            return True
