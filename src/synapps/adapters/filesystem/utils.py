"""Shortcuts over `File` for one-off operations on plain paths."""

from __future__ import annotations

import os

from .file import File, FileLike


def copy_file(source_path: str | os.PathLike[str], destination: FileLike) -> None:
    """Copy a file or a directory recursively (see `File.copy`)."""
    File(source_path).copy(destination)


def delete_file(path: str | os.PathLike[str], recursive: bool = False) -> bool:
    """Delete a file, directory or symbolic link (see `File.delete`).

    Link targets are never deleted.

    Returns:
        bool: True if deleted, False if nothing existed.
    """
    return File(path).delete(recursive)


def rename_file(source_path: str | os.PathLike[str], destination: FileLike) -> None:
    """Rename (move) a file or a directory (see `File.rename`)."""
    File(source_path).rename(destination)
