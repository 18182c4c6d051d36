"""Shared pytest fixtures for the skein test suite."""

from __future__ import annotations

import pytest

from skein import Source, SourceCache

LET_SOURCE = "let a = 1;"


@pytest.fixture
def let_cache():
    """A cache holding a single one-line source under ``main.src``."""
    return SourceCache([("main.src", Source(LET_SOURCE))])


@pytest.fixture
def plain():
    """Config overrides producing escape-free output."""
    return {"color": False, "ansi_mode": "off"}
