"""Key-value stores — the opaque string-keyed collaborator behind accounts and sessions.

Every backend exposes the same three async operations (``get`` / ``set`` /
``delete``).  Backend failures surface as :class:`StorageError`; callers decide
which message to show the user.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import structlog
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from equilibrium.config import Settings
from equilibrium.storage.database import KeyValueRow, get_session_factory

logger = structlog.get_logger(__name__)


class StorageError(Exception):
    """Raised when the underlying store cannot complete an operation."""


class KeyValueStore(ABC):
    """Abstract async string → string store."""

    name: str = "base"

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the value stored under *key*, or ``None`` when absent."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Create or overwrite *key*."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove *key*; deleting a missing key is not an error."""


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, used for ephemeral runs and tests."""

    name = "memory"

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


class SQLKeyValueStore(KeyValueStore):
    """Store backed by the ``key_value`` table via async SQLAlchemy."""

    name = "sqlite"

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        self._factory = session_factory

    def _session(self) -> AsyncSession:
        factory = self._factory or get_session_factory()
        return factory()

    async def get(self, key: str) -> str | None:
        try:
            async with self._session() as session:
                result = await session.execute(
                    select(KeyValueRow.value).where(KeyValueRow.key == key)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.error("storage.read_failed", key=key, error=str(exc))
            raise StorageError(f"Failed to read {key!r}") from exc

    async def set(self, key: str, value: str) -> None:
        try:
            async with self._session() as session:
                row = await session.get(KeyValueRow, key)
                if row is None:
                    session.add(KeyValueRow(key=key, value=value))
                else:
                    row.value = value
                await session.commit()
        except SQLAlchemyError as exc:
            logger.error("storage.write_failed", key=key, error=str(exc))
            raise StorageError(f"Failed to write {key!r}") from exc

    async def delete(self, key: str) -> None:
        try:
            async with self._session() as session:
                await session.execute(delete(KeyValueRow).where(KeyValueRow.key == key))
                await session.commit()
        except SQLAlchemyError as exc:
            logger.error("storage.delete_failed", key=key, error=str(exc))
            raise StorageError(f"Failed to delete {key!r}") from exc


def create_store(settings: Settings) -> KeyValueStore:
    """Build the store selected by ``settings.storage_backend``."""
    if settings.storage_backend == "memory":
        store: KeyValueStore = InMemoryKeyValueStore()
    else:
        store = SQLKeyValueStore()
    logger.info("storage.backend_selected", backend=store.name)
    return store
