"""Shell command execution."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field

from synapps.domain.errors import IOFailureError
from synapps.domain.host import HostDescriptor

__all__ = ["ExecResult", "Runtime"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecResult:
    """Outcome of `Runtime.exec`.

    Attributes:
        status: Exit status of the shell.
        output: Lines written to standard output (always empty for a
            background command).
    """

    status: int
    output: list[str] = field(default_factory=list)


class Runtime:
    """Run shell commands on the given host."""

    def __init__(self, host: HostDescriptor | None = None) -> None:
        self._host = host or HostDescriptor.detect()

    @property
    def host(self) -> HostDescriptor:
        return self._host

    def background_command(self, command: str) -> str:
        """Wrap `command` so that the shell returns without waiting for it."""
        if self._host.is_windows_family():
            return f"start /B {command} > NUL"
        return f"{command} > /dev/null 2>&1 &"

    def exec(self, command: str, background: bool = False) -> ExecResult:
        """Execute a command through the system shell.

        Args:
            command: Command line, interpreted by the shell.
            background: Detach the command and discard its output.

        Returns:
            ExecResult: Exit status and captured output lines.

        Raises:
            IOFailureError: If the shell cannot be started.
        """
        if background:
            command = self.background_command(command)
        logger.debug("Executing %r", command)
        try:
            completed = subprocess.run(  # pylint: disable=subprocess-run-check
                command, shell=True, capture_output=True, text=True
            )
        except OSError as err:
            raise IOFailureError(f"Cannot execute command '{command}'") from err
        output = [] if background else completed.stdout.splitlines()
        return ExecResult(completed.returncode, output)
