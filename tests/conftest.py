"""Shared pytest fixtures."""

from __future__ import annotations

import io
from collections.abc import Iterator

import pytest

from topo_strict.observability import configure_logging, reset_logging


@pytest.fixture(autouse=True)
def quiet_structlog() -> Iterator[io.StringIO]:
    """Keep library debug events out of captured output."""
    sink = io.StringIO()
    configure_logging("WARNING", stream=sink)
    yield sink
    reset_logging()
