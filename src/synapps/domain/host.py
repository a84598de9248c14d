"""Host operating-system descriptor."""

from __future__ import annotations

import functools
import sys
from dataclasses import dataclass, field

WINDOWS_PREFIX = "win"  # pragma: no mutate
MACINTOSH_NAME = "darwin"  # pragma: no mutate


@dataclass(frozen=True)
class HostDescriptor:
    """Immutable classification of the host OS.

    Exactly one of `is_windows` / `is_macintosh` is true, or neither
    (Linux and every other platform).

    Attributes:
        platform_name: Raw platform identifier (e.g. ``sys.platform``).
        is_windows: True for the Windows family (``win32``, ``Windows``, ...).
        is_macintosh: True for macOS (``darwin``).
    """

    platform_name: str
    is_windows: bool = field(init=False)
    is_macintosh: bool = field(init=False)

    def __post_init__(self) -> None:
        name = self.platform_name.lower()
        object.__setattr__(self, "is_windows", name.startswith(WINDOWS_PREFIX))
        object.__setattr__(self, "is_macintosh", name == MACINTOSH_NAME)

    def is_windows_family(self) -> bool:
        """Return True if the host belongs to the Windows family."""
        return self.is_windows

    def is_macintosh_family(self) -> bool:
        """Return True if the host is a Macintosh."""
        return self.is_macintosh

    @property
    def family(self) -> str:
        """Short family label used in logs and CLI output."""
        if self.is_windows:
            return "windows"
        if self.is_macintosh:
            return "macintosh"
        return "other"

    @classmethod
    def detect(cls) -> HostDescriptor:
        """Return the descriptor of the running process (computed once)."""
        return _detect_current_host()


@functools.cache
def _detect_current_host() -> HostDescriptor:
    return HostDescriptor(sys.platform)
