"""Shared fixtures for blockconf tests."""

from __future__ import annotations

from io import StringIO

import pytest

from blockconf.lines import LineSource


@pytest.fixture
def source_of():
    """Build a LineSource from literal text."""

    def _make(text: str, file: str | None = None) -> LineSource:
        return LineSource(StringIO(text), file)

    return _make
