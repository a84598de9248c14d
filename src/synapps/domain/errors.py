"""Error definitions shared by every SYNAPPS layer.

Every error carries a tagged ``kind`` (see `ErrorKind`) plus the structured
payload relevant to it (offending path, property or class name), so callers
may branch either on the exception class or on ``err.kind``.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Enumeration of error kinds raised by SYNAPPS."""

    NOT_FOUND = "not-found"
    ALREADY_EXISTS = "already-exists"
    IO_FAILURE = "io-failure"
    INVALID_STATE = "invalid-state"
    UNIQUE_CONSTRAINT = "unique-constraint"
    DATA_NOT_FOUND = "data-not-found"
    CLASS_NOT_FOUND = "class-not-found"
    COMMAND_LINE = "command-line"


class SynappsError(Exception):
    """Base class for all SYNAPPS errors."""

    kind: ErrorKind = ErrorKind.IO_FAILURE

    def __init__(
        self,
        message: str | None = None,
        *,
        path: str | None = None,
        property_name: str | None = None,
    ) -> None:
        super().__init__(message or self.kind.value)
        self.path = path
        self.property_name = property_name

    @property
    def message(self) -> str:
        """Human-readable message."""
        return str(self)


# ============================================================================
#                               I/O errors
# ============================================================================


class IOFailureError(SynappsError):
    """Raised when a platform-level file-system operation fails."""

    kind = ErrorKind.IO_FAILURE


class NotFoundError(IOFailureError):
    """Raised when a path (or a required parent/target) does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: str) -> None:
        super().__init__(f"File '{path}' not found", path=path)


class AlreadyExistsError(IOFailureError):
    """Raised when an entry already occupies a path (case-insensitive match included)."""

    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, path: str) -> None:
        super().__init__(f"The file '{path}' already exists", path=path)


class InvalidStateError(SynappsError):
    """Raised when a closed/released resource is used again."""

    kind = ErrorKind.INVALID_STATE


# ============================================================================
#                           Data and runtime errors
# ============================================================================


class UniqueConstraintError(SynappsError):
    """Raised when a value already used breaks a unique constraint."""

    kind = ErrorKind.UNIQUE_CONSTRAINT

    def __init__(self, property_name: str | None = None, message: str | None = None) -> None:
        if message is None and property_name is not None:
            message = f"Unique constraint violated on property '{property_name}'"
        super().__init__(message, property_name=property_name)


class DataNotFoundError(SynappsError):
    """Raised when data requested from a repository does not exist."""

    kind = ErrorKind.DATA_NOT_FOUND


class ClassNotFoundError(SynappsError):
    """Raised when a class cannot be resolved by name."""

    kind = ErrorKind.CLASS_NOT_FOUND

    def __init__(self, class_name: str) -> None:
        super().__init__(f"Class '{class_name}' not found")
        self.class_name = class_name


class CommandLineError(SynappsError):
    """Raised when a command line is malformed or contains invalid parameters."""

    kind = ErrorKind.COMMAND_LINE
