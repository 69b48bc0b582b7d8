"""
Shared fixtures for integration tests.

Runs the real application (lifespan included) with the console notifier
and a temporary chat ID file.
"""

import json
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.config.settings import get_settings


@pytest.fixture
def settings_env(chat_ids_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Point settings at the temporary data file and disable the bot."""
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "")
    monkeypatch.setenv("TELEGRAM_BOT_USERNAME", "test_verify_bot")
    monkeypatch.setenv("CHAT_IDS_PATH", str(chat_ids_path))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def seed_chat_ids(chat_ids_path: Path) -> dict[str, int]:
    """Chat IDs present on disk before startup."""
    chat_ids = {"ali_v": 1001, "bobur": 2002}
    chat_ids_path.parent.mkdir(parents=True, exist_ok=True)
    chat_ids_path.write_text(json.dumps(chat_ids, indent=2))
    return chat_ids


@pytest.fixture
def client(settings_env: None, seed_chat_ids: dict[str, int]) -> Generator[TestClient, None, None]:
    """Test client with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client
