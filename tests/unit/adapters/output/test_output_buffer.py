"""Unit tests for the explicit output-buffer stack."""

from __future__ import annotations

import io

import pytest

from synapps.adapters.output_buffer import OutputBufferStack
from synapps.domain.errors import InvalidStateError

## Adjust pylint to deal with fixtures
# pylint: disable=redefined-outer-name


@pytest.fixture
def target() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def stack(target: io.StringIO) -> OutputBufferStack:
    return OutputBufferStack(target)


def test_writes_reach_target_without_buffer(stack, target):
    stack.write("direct")
    assert target.getvalue() == "direct"
    assert stack.level == 0


def test_buffer_captures_writes(stack, target):
    buffer = stack.push()
    stack.write("abc")
    assert buffer.get() == "abc"
    assert buffer.get_length() == 3
    assert buffer.get_level() == 1
    assert target.getvalue() == ""


def test_flush_sends_content_below(stack, target):
    buffer = stack.push()
    stack.write("abc")
    buffer.flush()
    assert target.getvalue() == "abc"
    assert buffer.get() == ""
    assert not buffer.is_closed()


def test_flush_applies_callback(stack, target):
    buffer = stack.push(str.upper)
    stack.write("abc")
    buffer.flush()
    assert target.getvalue() == "ABC"


def test_clean_discards_content(stack, target):
    buffer = stack.push()
    stack.write("abc")
    buffer.clean()
    assert buffer.get() == ""
    buffer.close()
    assert target.getvalue() == ""


def test_close_discards_content_and_pops(stack, target):
    buffer = stack.push()
    stack.write("lost")
    buffer.close()
    assert buffer.is_closed()
    assert stack.level == 0
    stack.write("after")
    assert target.getvalue() == "after"


def test_nested_buffers(stack, target):
    outer = stack.push()
    stack.write("o")
    inner = stack.push()
    stack.write("i")
    assert stack.level == 2
    assert inner.get_level() == 2

    inner.flush()
    assert outer.get() == "oi"

    inner.close()
    outer.flush()
    outer.close()
    assert target.getvalue() == "oi"


def test_only_innermost_buffer_can_be_closed(stack):
    outer = stack.push()
    stack.push()
    with pytest.raises(InvalidStateError):
        outer.close()
    assert stack.level == 2


@pytest.mark.parametrize("operation", ["clean", "close", "flush", "get", "get_length", "get_level", "get_status"])
def test_closed_buffer_rejects_operations(stack, operation):
    buffer = stack.push()
    buffer.close()
    with pytest.raises(InvalidStateError):
        getattr(buffer, operation)()


def test_push_rejects_non_callable(stack):
    with pytest.raises(TypeError):
        stack.push("not callable")  # type: ignore[arg-type]


def test_status(stack):
    plain = stack.push()
    stack.write("xy")
    assert plain.get_status() == {
        "name": "default output handler",
        "level": 1,
        "buffer_used": 2,
    }
    upper = stack.push(str.upper)
    assert upper.get_status()["name"] == "str.upper"
    assert upper.get_status()["level"] == 2


def test_capture_redirects_print(stack, target):
    with stack.capture():
        buffer = stack.push()
        print("hello")
        captured = buffer.get()
        buffer.close()
        print("plain")
    assert captured == "hello\n"
    assert target.getvalue() == "plain\n"
