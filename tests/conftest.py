"""Shared fixtures for the PipeGrep test suite."""

from collections.abc import Iterator

import pytest

from pipegrep.config import EngineSettings, configure


@pytest.fixture(autouse=True)
def default_settings() -> Iterator[None]:
    """Run every test against default engine settings."""
    configure(EngineSettings())
    yield
    configure(EngineSettings())
