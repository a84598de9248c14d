"""Explicit output-buffer stack.

`OutputBufferStack` is a text sink owning a stack of `StackedOutputBuffer`
objects. Text written to the stack lands in the top buffer, or in the target
stream when no buffer is open. Nothing is global: code that should be captured
writes to the stack, either directly or through `OutputBufferStack.capture`,
which redirects ``sys.stdout`` for the duration of a ``with`` block.

Typical usage
-------------
    stack = OutputBufferStack()
    with stack.capture():
        buffer = stack.push()
        print("hello")
        assert buffer.get() == "hello\\n"
        buffer.close()
"""

from __future__ import annotations

import contextlib
import io
import sys
from collections.abc import Callable, Iterator
from typing import Any, TextIO

from synapps.domain.errors import InvalidStateError
from synapps.interfaces.output_buffer import OutputBuffer

__all__ = ["OutputBufferStack", "StackedOutputBuffer"]

OutputCallback = Callable[[str], str]

DEFAULT_HANDLER_NAME = "default output handler"  # pragma: no mutate


class OutputBufferStack:
    """Text sink routing writes to the innermost open buffer."""

    def __init__(self, target: TextIO | None = None) -> None:
        self._target = target if target is not None else sys.stdout
        self._buffers: list[StackedOutputBuffer] = []

    @property
    def level(self) -> int:
        """Number of open buffers."""
        return len(self._buffers)

    def push(self, output_callback: OutputCallback | None = None) -> StackedOutputBuffer:
        """Open a new buffer on top of the stack.

        Args:
            output_callback: Optional function transforming the content when
                the buffer is flushed.

        Raises:
            TypeError: If `output_callback` is not callable.
        """
        if output_callback is not None and not callable(output_callback):
            raise TypeError("Cannot start output buffering: callback is not callable")
        buffer = StackedOutputBuffer(self, len(self._buffers) + 1, output_callback)
        self._buffers.append(buffer)
        return buffer

    @contextlib.contextmanager
    def capture(self) -> Iterator[OutputBufferStack]:
        """Redirect ``sys.stdout`` to this stack inside a ``with`` block."""
        with contextlib.redirect_stdout(self):  # type: ignore[type-var]
            yield self

    # --- Text sink ---

    def write(self, text: str) -> int:
        """Write text to the top buffer, or to the target if none is open."""
        if self._buffers:
            return self._buffers[-1].append(text)
        return self._target.write(text)

    def flush(self) -> None:
        """Flush the target stream (open buffers are flushed explicitly)."""
        if not self._buffers:
            self._target.flush()

    # --- Internal ---

    def _is_top(self, buffer: StackedOutputBuffer) -> bool:
        return bool(self._buffers) and self._buffers[-1] is buffer

    def _pop(self, buffer: StackedOutputBuffer) -> None:
        if not self._is_top(buffer):
            raise InvalidStateError(
                f"Output buffer at level {buffer.get_level()} is not the innermost one."
            )
        self._buffers.pop()

    def _write_below(self, buffer: StackedOutputBuffer, text: str) -> None:
        index = self._buffers.index(buffer)
        if index == 0:
            self._target.write(text)
        else:
            self._buffers[index - 1].append(text)


class StackedOutputBuffer(OutputBuffer):
    """One level of an `OutputBufferStack`. Obtain it with `OutputBufferStack.push`."""

    def __init__(
        self,
        stack: OutputBufferStack,
        level: int,
        output_callback: OutputCallback | None = None,
    ) -> None:
        self._stack = stack
        self._level = level
        self._callback = output_callback
        self._content = io.StringIO()
        self._closed = False

    def _ensure_open(self) -> None:
        if self._closed:
            raise InvalidStateError("Output buffer closed.")

    def append(self, text: str) -> int:
        """Append text to this buffer (used by the owning stack)."""
        self._ensure_open()
        return self._content.write(text)

    # ---- OutputBuffer ----

    def clean(self) -> None:
        self._ensure_open()
        self._content = io.StringIO()

    def close(self) -> None:
        self._ensure_open()
        self._stack._pop(self)  # pylint: disable=protected-access
        self._content = io.StringIO()
        self._closed = True

    def flush(self) -> None:
        self._ensure_open()
        text = self._content.getvalue()
        if self._callback is not None:
            text = self._callback(text)
        self._stack._write_below(self, text)  # pylint: disable=protected-access
        self._content = io.StringIO()

    def get(self) -> str:
        self._ensure_open()
        return self._content.getvalue()

    def get_length(self) -> int:
        return len(self.get())

    def get_level(self) -> int:
        self._ensure_open()
        return self._level

    def get_status(self) -> dict[str, Any]:
        self._ensure_open()
        name = getattr(self._callback, "__qualname__", None) or DEFAULT_HANDLER_NAME
        return {
            "name": name,
            "level": self._level,
            "buffer_used": self.get_length(),
        }

    def is_closed(self) -> bool:
        return self._closed
