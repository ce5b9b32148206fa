"""Tests for the pushback-capable line source."""

from __future__ import annotations

import pytest

from blockconf.errors import StreamUnavailableError
from blockconf.lines import Line, LineSource


def test_next_strips_newlines_and_trailing_spaces(source_of) -> None:
    source = source_of("alpha  \n  beta\r\ngamma")

    assert source.next() == Line("alpha", 1)
    assert source.next() == Line("  beta", 2)
    assert source.next() == Line("gamma", 3)
    assert source.next() is None
    assert source.next() is None


def test_pushback_returns_the_same_line_next(source_of) -> None:
    source = source_of("one\ntwo\n")

    first = source.next()
    source.pushback(first)

    assert source.lineno == 0
    assert source.next() is first
    assert source.lineno == 1
    assert source.next() == Line("two", 2)


def test_only_one_line_may_be_pending(source_of) -> None:
    source = source_of("one\ntwo\n")
    first = source.next()
    second = source.next()
    source.pushback(second)

    with pytest.raises(RuntimeError):
        source.pushback(first)


def test_source_is_iterable_over_remaining_lines() -> None:
    source = LineSource(["a\n", "b\n", "c\n"])
    source.next()

    assert [line.text for line in source] == ["b", "c"]


def test_read_failures_become_stream_unavailable() -> None:
    def broken():
        yield "fine\n"
        raise OSError("disk on fire")

    source = LineSource(broken(), file="app.conf")
    assert source.next() == Line("fine", 1)

    with pytest.raises(StreamUnavailableError) as excinfo:
        source.next()

    assert isinstance(excinfo.value, OSError)
    assert "app.conf" in str(excinfo.value)
    assert "disk on fire" in str(excinfo.value)
