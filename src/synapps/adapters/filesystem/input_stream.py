"""Line-oriented binary input stream over a `File`."""

from __future__ import annotations

from types import TracebackType
from typing import BinaryIO

from synapps.domain.errors import InvalidStateError, IOFailureError, NotFoundError

from .file import File


class FileInputStream:
    """Binary input stream over an existing file.

    The stream is opened at construction and must be closed by the caller
    (or used as a context manager).
    """

    def __init__(self, file: File) -> None:
        if not file.exists():
            raise NotFoundError(file.get_path())
        self._file = file
        try:
            self._handle: BinaryIO = open(file.get_os_path(), "rb")  # pylint: disable=consider-using-with
        except OSError as err:
            raise IOFailureError(f"Cannot open file: {file.get_path()}", path=file.get_path()) from err
        self._closed = False

    @property
    def file(self) -> File:
        """The file this stream reads from."""
        return self._file

    @property
    def closed(self) -> bool:
        """True once `close()` has been called."""
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise InvalidStateError(f"Stream closed: {self._file.get_path()}", path=self._file.get_path())

    def read_line(self, max_length: int | None = None) -> bytes:
        """Read one line, including its terminator.

        Args:
            max_length: Maximum number of bytes to read; ``None`` for no limit.

        Returns:
            bytes: The line read, or ``b""`` at end of file.

        Raises:
            InvalidStateError: If the stream is closed.
            IOFailureError: If the line cannot be read.
        """
        self._ensure_open()
        try:
            return self._handle.readline(-1 if max_length is None else max_length)
        except OSError as err:
            raise IOFailureError(
                f"Cannot read line in file: {self._file.get_path()}", path=self._file.get_path()
            ) from err

    def close(self) -> None:
        """Close this stream.

        Raises:
            InvalidStateError: If the stream is already closed.
            IOFailureError: If the stream cannot be closed.
        """
        self._ensure_open()
        self._closed = True
        try:
            self._handle.close()
        except OSError as err:
            raise IOFailureError(
                f"Cannot close file: {self._file.get_path()}", path=self._file.get_path()
            ) from err

    def __enter__(self) -> FileInputStream:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if not self._closed:
            self.close()
