"""Shared pytest fixtures."""

from __future__ import annotations

import logging
import os

# The API tests run against the in-memory store with cheap hashing.
os.environ["EQUILIBRIUM_STORAGE_BACKEND"] = "memory"
os.environ["EQUILIBRIUM_PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ["EQUILIBRIUM_API_SECRET_KEY"] = ""

import pytest
import structlog

from equilibrium.auth.service import AccountService
from equilibrium.config import get_settings
from equilibrium.engine.state import SignalEngine
from equilibrium.models import SignalState
from equilibrium.storage.kv import InMemoryKeyValueStore, StorageError

get_settings.cache_clear()


@pytest.fixture(autouse=True, scope="session")
def _quiet_logging():
    """Only warnings and errors reach the captured output."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING))
    yield
    structlog.reset_defaults()


class FlakyStore(InMemoryKeyValueStore):
    """In-memory store whose operations can be made to fail per key."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_get: set[str] = set()
        self.fail_set: set[str] = set()
        self.fail_delete: set[str] = set()

    async def get(self, key: str) -> str | None:
        if key in self.fail_get:
            raise StorageError(f"get {key} failed")
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        if key in self.fail_set:
            raise StorageError(f"set {key} failed")
        await super().set(key, value)

    async def delete(self, key: str) -> None:
        if key in self.fail_delete:
            raise StorageError(f"delete {key} failed")
        await super().delete(key)


@pytest.fixture
def engine() -> SignalEngine:
    return SignalEngine()


@pytest.fixture
def sedentary_signals() -> SignalState:
    return SignalState(screen_time=5.0, steps=50, mood_x=30.0, mood_y=70.0)


@pytest.fixture
def store() -> FlakyStore:
    return FlakyStore()


@pytest.fixture
def accounts(store: FlakyStore) -> AccountService:
    return AccountService(store, password_min_length=6, hash_iterations=1000)
