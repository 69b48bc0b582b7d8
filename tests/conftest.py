"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A controllable clock for expiry tests
- Identity store and code registry instances
- A recording notifier
"""

from datetime import UTC, datetime, timedelta
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from src.adapters.repository import InMemoryCodeRegistry, JsonFileIdentityStore


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at a fixed instant."""
    return FakeClock()


@pytest.fixture
def chat_ids_path(tmp_path: Path) -> Path:
    """Location of the chat ID file inside a per-test data directory."""
    return tmp_path / "data" / "chat_ids.json"


@pytest.fixture
def identity_store(chat_ids_path: Path) -> JsonFileIdentityStore:
    """Loaded identity store backed by a temporary file."""
    store = JsonFileIdentityStore(chat_ids_path)
    store.load()
    return store


@pytest.fixture
def code_registry(clock: FakeClock) -> InMemoryCodeRegistry:
    """Empty code registry driven by the fake clock."""
    return InMemoryCodeRegistry(ttl_seconds=600, clock=clock)


@pytest.fixture
def notifier() -> AsyncMock:
    """Notifier double recording every send_message call."""
    return AsyncMock()
