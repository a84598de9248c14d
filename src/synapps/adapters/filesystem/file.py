"""Portable file handle.

`File` wraps a single path and exposes high-level operations (create, delete,
copy, rename, symbolic links, listing, metadata) whose contract is the same on
every platform:

- The *logical path* always uses the portable ``/`` separator and never ends
  with a separator (the bare root ``/`` aside).
- The *OS path* is derived from the logical path once, at construction, by
  `encode_os_file_name`: CP1252 bytes on the Windows family, Unicode NFD on
  Macintosh, unchanged elsewhere. Only platform primitives ever see it.
- The handle itself is immutable; operations act on the file system.

Every mutating operation re-checks existence/type right before acting. Races
between that check and the platform call are not guarded against.

Case sensitivity
----------------
The API relies on the file system's own case sensitivity: two entries whose
names differ only by case may coexist where the file system allows it.
`copy` and `rename` compare paths case-insensitively, so copying a file onto
itself under another case is rejected while renaming to change the case only
is allowed.

Metadata freshness
------------------
``os.stat`` and friends always read live metadata (CPython keeps no stat
cache), so queries issued right after a mutation are never stale.
"""

from __future__ import annotations

import logging
import os
import posixpath
import re
import shutil
import stat
import sys
import unicodedata
from collections.abc import Callable
from datetime import datetime, timezone
from enum import IntFlag
from typing import BinaryIO, TypeAlias

from synapps.config import DEFAULT_MODE, PORTABLE_SEPARATOR, WINDOWS_FS_ENCODING
from synapps.domain.errors import AlreadyExistsError, IOFailureError, NotFoundError
from synapps.domain.host import HostDescriptor

__all__ = [
    "File",
    "WriteFlag",
    "decode_os_file_name",
    "encode_os_file_name",
    "normalize_path",
]

logger = logging.getLogger(__name__)

OsPath: TypeAlias = str | bytes
FileLike: TypeAlias = "File | str | os.PathLike[str]"

WINDOWS_SEPARATOR = "\\"  # pragma: no mutate
_SEPARATORS = "/\\"  # pragma: no mutate
_CHUNK = 1024 * 1024  # 1 MiB


class WriteFlag(IntFlag):
    """Flags accepted by `File.set_content`."""

    NONE = 0
    APPEND = 1


# ============================================================================
#                           Path helpers (pure)
# ============================================================================


def normalize_path(
    path: str,
    normalize_separators: bool = True,
    use_portable: bool = True,
    host: HostDescriptor | None = None,
) -> str:
    """Normalize a path.

    Trailing separators are removed, except for a bare root. If
    `normalize_separators` is set, every occurrence of the host separator is
    rewritten into the portable one (or the reverse when `use_portable` is
    False), so the result holds a single kind of separator.

    Args:
        path: Path to normalize.
        normalize_separators: Rewrite separators (default True).
        use_portable: Target the portable ``/`` separator (default True) or
            the host one. Only relevant with `normalize_separators`.
        host: Host descriptor; defaults to the running host.

    Returns:
        str: The normalized path.
    """
    host = host or HostDescriptor.detect()
    # A bare root keeps a single separator.
    path = path.rstrip(_SEPARATORS) or path[:1]
    if normalize_separators:
        host_separator = WINDOWS_SEPARATOR if host.is_windows else PORTABLE_SEPARATOR
        if use_portable:
            path = path.replace(host_separator, PORTABLE_SEPARATOR)
        else:
            path = path.replace(PORTABLE_SEPARATOR, host_separator)
    return path


def encode_os_file_name(name: str, host: HostDescriptor | None = None) -> OsPath:
    """Encode a file name so that it is ready for platform primitives.

    - Windows family: CP1252-encoded bytes. The name must not already be
      encoded.
    - Macintosh: Unicode normalization form D.
    - Other platforms: unchanged.

    Raises:
        IOFailureError: If the name cannot be represented in CP1252.
    """
    host = host or HostDescriptor.detect()
    if host.is_windows:
        try:
            return name.encode(WINDOWS_FS_ENCODING)
        except UnicodeEncodeError as err:
            raise IOFailureError(
                f"Cannot encode file name '{name}' to {WINDOWS_FS_ENCODING}", path=name
            ) from err
    if host.is_macintosh:
        return unicodedata.normalize("NFD", name)
    return name


def decode_os_file_name(name: OsPath, host: HostDescriptor | None = None) -> str:
    """Decode a file name given by the platform (reverse of `encode_os_file_name`)."""
    host = host or HostDescriptor.detect()
    if isinstance(name, bytes):
        encoding = WINDOWS_FS_ENCODING if host.is_windows else sys.getfilesystemencoding()
        return name.decode(encoding, errors="surrogateescape")
    if host.is_macintosh:
        return unicodedata.normalize("NFC", name)
    return name


def _attempt(primitive: Callable[[OsPath], object], os_path: OsPath) -> OSError | None:
    """Run a removal primitive, returning the error instead of raising it."""
    try:
        primitive(os_path)
    except OSError as err:
        return err
    return None


# ============================================================================
#                               File handle
# ============================================================================


class File:
    """Portable handle on a single file-system path."""

    def __init__(self, path: str | os.PathLike[str], host: HostDescriptor | None = None) -> None:
        self._host = host or HostDescriptor.detect()
        self._path = normalize_path(os.fspath(path), host=self._host)
        self._os_path = encode_os_file_name(self._path, self._host)

    def _coerce(self, other: FileLike) -> File:
        if isinstance(other, File):
            return other
        return File(other, self._host)

    def _child(self, os_name: OsPath) -> File:
        name = decode_os_file_name(os_name, self._host)
        return File(posixpath.join(self._path, name), self._host)

    # --- Accessors ---

    @property
    def host(self) -> HostDescriptor:
        """Host descriptor driving encoding and deletion strategies."""
        return self._host

    def get_path(self) -> str:
        """Return the normalized logical path (no trailing separator)."""
        return self._path

    def get_os_path(self) -> OsPath:
        """Return the platform-encoded path."""
        return self._os_path

    def get_name(self) -> str:
        """Return the base name of this file."""
        return self._path.rsplit(PORTABLE_SEPARATOR, 1)[-1]

    def get_parent_path(self) -> str:
        """Return the parent path (``.`` for a bare name)."""
        return posixpath.dirname(self._path) or "."

    def get_extension(self) -> str:
        """Return the extension of the base name, without the dot."""
        return posixpath.splitext(self.get_name())[1][1:]

    path = property(get_path)
    os_path = property(get_os_path)
    name = property(get_name)

    # --- Queries ---

    def exists(self) -> bool:
        """Tell whether any entry occupies this path.

        A symbolic link whose target is missing exists. Use `get_real_path`
        to check the target.
        """
        return os.path.lexists(self._os_path)

    def is_directory(self) -> bool:
        """Tell whether this path is a directory (following links)."""
        return os.path.isdir(self._os_path)

    def is_file(self) -> bool:
        """Tell whether this path is a regular file (following links)."""
        return os.path.isfile(self._os_path)

    def is_symbolic_link(self) -> bool:
        """Tell whether this path is a symbolic link."""
        return os.path.islink(self._os_path)

    def is_writable(self) -> bool:
        """Tell whether this file/directory is writable."""
        return os.access(self._os_path, os.W_OK)

    def get_size(self) -> int:
        """Return the size in bytes of this regular file.

        Raises:
            IOFailureError: If this is not a readable regular file.
        """
        if not self.is_file():
            raise IOFailureError(f"Cannot read size of file '{self._path}'", path=self._path)
        try:
            return os.stat(self._os_path).st_size
        except OSError as err:
            raise IOFailureError(
                f"Cannot read size of file '{self._path}'", path=self._path
            ) from err

    def get_last_modified_date(self) -> datetime:
        """Return the last modification date (UTC, seconds precision).

        Raises:
            IOFailureError: If the date cannot be read.
        """
        try:
            mtime = os.stat(self._os_path).st_mtime
        except OSError as err:
            raise IOFailureError(
                f"Cannot read last modified date of file '{self._path}'", path=self._path
            ) from err
        return datetime.fromtimestamp(int(mtime), tz=timezone.utc)

    def get_real_path(self) -> str:
        """Resolve links, ``.`` and ``..`` into an absolute, normalized path.

        Raises:
            NotFoundError: If this path (or a link's target) does not exist.
        """
        try:
            real_path = os.path.realpath(self._os_path, strict=True)
        except OSError as err:
            raise NotFoundError(self._path) from err
        return normalize_path(decode_os_file_name(real_path, self._host), host=self._host)

    def list_file_paths(self, pattern: str | re.Pattern[str] | None = None) -> list[str]:
        """List the paths of the entries in this directory.

        Args:
            pattern: Regular expression that must match a whole base name
                (see `synapps.utils.regex.quote` to escape literal text).
                ``None`` lists every entry.

        Returns:
            list[str]: Child paths, sorted, without ``.`` and ``..``.

        Raises:
            IOFailureError: If this is not a directory or cannot be listed.
        """
        if not self.is_directory():
            raise IOFailureError(f"'{self._path}' is not a valid directory", path=self._path)
        try:
            os_names = os.listdir(self._os_path)
        except OSError as err:
            raise IOFailureError(f"Cannot list directory '{self._path}'", path=self._path) from err

        regex = re.compile(pattern) if pattern is not None else None
        paths = []
        for os_name in os_names:
            name = decode_os_file_name(os_name, self._host)
            if regex is None or regex.fullmatch(name):
                paths.append(posixpath.join(self._path, name))
        return sorted(paths)

    # --- Content ---

    def get_content(self) -> bytes:
        """Read the whole content of this file.

        Raises:
            IOFailureError: If the file cannot be opened or read.
        """
        try:
            with open(self._os_path, "rb") as file:
                return file.read()
        except OSError as err:
            raise IOFailureError(
                f"Cannot read content from file '{self._path}'", path=self._path
            ) from err

    def set_content(self, content: bytes | str, flags: WriteFlag = WriteFlag.NONE) -> int:
        """Write the content of this file (overwrite unless `WriteFlag.APPEND`).

        Text content is UTF-8 encoded.

        Returns:
            int: Number of bytes written.

        Raises:
            IOFailureError: If the file cannot be opened or written.
        """
        data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        mode = "ab" if flags & WriteFlag.APPEND else "wb"
        try:
            with open(self._os_path, mode) as file:
                return file.write(data)
        except OSError as err:
            raise IOFailureError(
                f"Cannot write content to file '{self._path}'", path=self._path
            ) from err

    def read(self, stream: BinaryIO | None = None) -> int:
        """Copy this file to a binary stream (standard output by default).

        Returns:
            int: Number of bytes read from this file.

        Raises:
            IOFailureError: If this file cannot be read.
        """
        stream = stream or sys.stdout.buffer
        count = 0
        try:
            with open(self._os_path, "rb") as file:
                for chunk in iter(lambda: file.read(_CHUNK), b""):
                    stream.write(chunk)
                    count += len(chunk)
        except OSError as err:
            raise IOFailureError(f"Cannot read file '{self._path}'", path=self._path) from err
        return count

    # --- Creation ---

    def create(self) -> None:
        """Create an empty regular file.

        Raises:
            AlreadyExistsError: If an entry already occupies this path.
            IOFailureError: If the file cannot be created.
        """
        if self.exists():
            raise AlreadyExistsError(self._path)
        try:
            with open(self._os_path, "xb"):
                pass
        except FileExistsError as err:
            raise AlreadyExistsError(self._path) from err
        except OSError as err:
            raise IOFailureError(f"Cannot create file '{self._path}'", path=self._path) from err
        logger.debug("Created file %s", self._path)

    def create_directory(self, mode: int = DEFAULT_MODE, recursive: bool = False) -> bool:
        """Create the directory denoted by this path.

        Args:
            mode: Permission bits (ignored on the Windows family).
            recursive: Also create missing intermediate directories.

        Returns:
            bool: True if created, False if the directory already exists.

        Raises:
            AlreadyExistsError: If a non-directory entry occupies this path.
            IOFailureError: If the directory cannot be created.
        """
        if self.is_directory():
            return False
        if self.exists():
            raise AlreadyExistsError(self._path)
        try:
            if recursive:
                os.makedirs(self._os_path, mode)
            else:
                os.mkdir(self._os_path, mode)
        except OSError as err:
            raise IOFailureError(
                f"Cannot create directory '{self._path}'", path=self._path
            ) from err
        logger.debug("Created directory %s", self._path)
        return True

    def create_symbolic_link(self, target: FileLike) -> None:
        """Create a symbolic link at this path pointing to `target`.

        Raises:
            NotFoundError: If the target does not exist.
            AlreadyExistsError: If an entry already occupies this path.
            IOFailureError: If the link cannot be created.
        """
        target_file = self._coerce(target)
        if not target_file.exists():
            raise NotFoundError(target_file.get_path())
        if self.exists():
            raise AlreadyExistsError(self._path)
        try:
            os.symlink(
                target_file.get_os_path(),
                self._os_path,
                target_is_directory=target_file.is_directory(),
            )
        except OSError as err:
            raise IOFailureError(
                f"Cannot create symbolic link '{self._path}' to '{target_file.get_path()}'",
                path=self._path,
            ) from err
        logger.debug("Created symbolic link %s -> %s", self._path, target_file.get_path())

    # --- Mutation ---

    def copy(self, destination: FileLike) -> None:
        """Copy this file or directory (recursively) to `destination`.

        Links to files are copied as links; links to directories are expanded
        into regular directories whose content is copied. Entries already
        present at the destination may be overwritten when their types match;
        it is up to the caller to check the destination is clear.

        Raises:
            NotFoundError: If the destination's parent directory does not exist.
            AlreadyExistsError: If source and destination are equal, ignoring case.
            IOFailureError: If a directory cannot be created or a file copied.
        """
        dest = self._coerce(destination)
        self._copy(dest, os.path.abspath(dest.get_os_path()))

    def _copy(self, dest: File, excluded: OsPath) -> None:
        # `excluded` is the top-level destination, never copied into itself.
        parent = File(dest.get_parent_path(), self._host)
        if not parent.exists():
            raise NotFoundError(parent.get_path())
        if self._path.casefold() == dest.get_path().casefold():
            raise AlreadyExistsError(dest.get_path())

        if self.is_directory():
            try:
                os_names = os.listdir(self._os_path)
            except OSError as err:
                raise IOFailureError(
                    f"Cannot list directory '{self._path}'", path=self._path
                ) from err
            dest.create_directory()
            for os_name in os_names:
                child = self._child(os_name)
                if os.path.abspath(child.get_os_path()) == excluded:
                    continue
                child._copy(
                    File(posixpath.join(dest.get_path(), child.get_name()), self._host), excluded
                )
        elif self.is_symbolic_link():
            self._copy_link(dest)
        else:
            try:
                shutil.copyfile(self._os_path, dest.get_os_path())
            except OSError as err:
                raise IOFailureError(
                    f"Cannot copy file from '{self._path}' to '{dest.get_path()}'",
                    path=self._path,
                ) from err
        logger.debug("Copied %s to %s", self._path, dest.get_path())

    def _copy_link(self, dest: File) -> None:
        try:
            link_target = os.readlink(self._os_path)
            if dest.is_symbolic_link():
                os.unlink(dest.get_os_path())
            os.symlink(link_target, dest.get_os_path())
        except OSError as err:
            raise IOFailureError(
                f"Cannot copy file from '{self._path}' to '{dest.get_path()}'",
                path=self._path,
            ) from err

    def delete(self, recursive: bool = False) -> bool:
        """Delete this entry.

        Symbolic links are never followed: the link is removed, never its
        target.

        Args:
            recursive: For a directory that is not a link, delete its content
                first (depth-first). Without it, a non-empty directory cannot
                be deleted.

        Returns:
            bool: True if deleted, False if nothing exists at this path.

        Raises:
            IOFailureError: If the entry cannot be deleted.
        """
        if not self.exists():
            return False

        if self.is_symbolic_link():
            err = self._delete_link()
        elif self.is_directory():
            if recursive:
                try:
                    os_names = os.listdir(self._os_path)
                except OSError as list_err:
                    raise IOFailureError(
                        f"Cannot list directory '{self._path}'", path=self._path
                    ) from list_err
                for os_name in os_names:
                    self._child(os_name).delete(recursive)
            err = _attempt(os.rmdir, self._os_path)
        else:
            err = _attempt(os.unlink, self._os_path)

        if err is not None:
            raise IOFailureError(f"Cannot delete file '{self._path}'", path=self._path) from err
        logger.debug("Deleted %s", self._path)
        return True

    def _delete_link(self) -> OSError | None:
        """Remove this link without touching its target.

        On the Windows family a link created to a directory (even a missing
        one) is removed with ``rmdir`` and any other link with ``unlink``;
        the link metadata decides which comes first and the other one is
        tried if it fails. Elsewhere ``unlink`` always applies.
        """
        if not self._host.is_windows:
            return _attempt(os.unlink, self._os_path)
        if self._link_targets_directory():
            primary, alternate = os.rmdir, os.unlink
        else:
            primary, alternate = os.unlink, os.rmdir
        if (err := _attempt(primary, self._os_path)) is None:
            return None
        logger.debug("Removing link %s with %s failed (%s)", self._path, primary.__name__, err)
        return _attempt(alternate, self._os_path)

    def _link_targets_directory(self) -> bool:
        try:
            link_stat = os.lstat(self._os_path)
        except OSError:
            return False
        attributes = getattr(link_stat, "st_file_attributes", 0)
        return bool(attributes & getattr(stat, "FILE_ATTRIBUTE_DIRECTORY", 0x10))

    def rename(self, destination: FileLike) -> None:
        """Rename (move) this entry to `destination`.

        Changing only the case of the name is allowed even though the
        destination "exists" on a case-insensitive file system.

        Raises:
            AlreadyExistsError: If the destination already exists.
            IOFailureError: If the entry cannot be renamed.
        """
        dest = self._coerce(destination)
        if self._path.casefold() != dest.get_path().casefold() and dest.exists():
            raise AlreadyExistsError(dest.get_path())
        try:
            os.rename(self._os_path, dest.get_os_path())
        except OSError as err:
            raise IOFailureError(
                f"Cannot rename file '{self._path}' into '{dest.get_path()}'",
                path=self._path,
            ) from err
        logger.debug("Renamed %s to %s", self._path, dest.get_path())

    def set_permissions(self, mode: int) -> None:
        """Set the permission bits of this entry.

        Does nothing on the Windows family, which has no permission-bit model.

        Raises:
            IOFailureError: If the permissions cannot be set.
        """
        if self._host.is_windows:
            logger.debug("Ignoring set_permissions(%o) on %s", mode, self._path)
            return
        try:
            os.chmod(self._os_path, mode)
        except OSError as err:
            raise IOFailureError(
                f"Cannot set permissions {mode:o} for file '{self._path}'", path=self._path
            ) from err

    def touch(self) -> None:
        """Set access and modification times to now.

        Unlike the shell command, a missing file is not created.

        Raises:
            NotFoundError: If nothing exists at this path.
            IOFailureError: If the times cannot be set.
        """
        if not self.exists():
            raise NotFoundError(self._path)
        try:
            os.utime(self._os_path)
        except OSError as err:
            raise IOFailureError(
                "Cannot set date and time of access and modification for file "
                f"'{self._path}'",
                path=self._path,
            ) from err

    # --- Dunder ---

    def __str__(self) -> str:
        os_path = self._os_path
        if isinstance(os_path, bytes):
            os_path = os_path.decode(WINDOWS_FS_ENCODING)
        return f"File {{path={self._path}, osPath={os_path}}}"

    def __repr__(self) -> str:
        return f"File({self._path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, File):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)
