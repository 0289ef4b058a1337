"""
Pytest configuration for Deferred Records.

Provides fixtures for:
- The default seeded record store and repository
- Settings isolation (cached settings and environment overrides)
"""

from __future__ import annotations

from typing import Generator

import pytest

from deferred_records.config import get_settings
from deferred_records.infrastructure.seed import DEFAULT_PEOPLE
from deferred_records.infrastructure.store import RecordStore
from deferred_records.repository import InMemoryPersonRepository


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Clear cached settings and seed-related environment around each test.
    """
    for name in ("SEED_FILE", "LOG_LEVEL", "LOG_JSON", "APP_ENV"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> RecordStore:
    """
    Record store seeded with the built-in sample people.
    """
    return RecordStore(DEFAULT_PEOPLE)


@pytest.fixture
def repository(store: RecordStore) -> InMemoryPersonRepository:
    return InMemoryPersonRepository(store)
