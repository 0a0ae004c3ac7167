"""Storage sub-package — opaque key-value persistence for accounts and sessions."""

from equilibrium.storage.kv import (
    InMemoryKeyValueStore,
    KeyValueStore,
    SQLKeyValueStore,
    StorageError,
    create_store,
)

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "SQLKeyValueStore",
    "StorageError",
    "create_store",
]
