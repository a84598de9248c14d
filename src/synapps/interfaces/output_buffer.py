"""Output buffer interface.

An output buffer captures text written after it was opened until it is
closed. Buffers nest: the most recently opened one receives the writes, and
flushing a buffer hands its content to the buffer below it (or to the final
destination when it is the bottom one).

Every operation on a closed buffer raises `InvalidStateError`.
"""

import abc
from typing import Any


class OutputBuffer(abc.ABC):
    """Contract for a stack-scoped output buffer."""

    @abc.abstractmethod
    def clean(self) -> None:
        """Discard the captured content, keeping the buffer open."""

    @abc.abstractmethod
    def close(self) -> None:
        """Discard the captured content and close the buffer."""

    @abc.abstractmethod
    def flush(self) -> None:
        """Send the captured content one level down and empty the buffer."""

    @abc.abstractmethod
    def get(self) -> str:
        """Return the captured content."""

    @abc.abstractmethod
    def get_length(self) -> int:
        """Return the number of captured characters."""

    @abc.abstractmethod
    def get_level(self) -> int:
        """Return the nesting level (1 for the bottom buffer)."""

    @abc.abstractmethod
    def get_status(self) -> dict[str, Any]:
        """Return a description of the buffer keyed by property name."""

    @abc.abstractmethod
    def is_closed(self) -> bool:
        """Return True once the buffer is closed."""
