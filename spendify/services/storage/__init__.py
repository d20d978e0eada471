"""
Storage Services Package

Provides the key-value storage interface, local implementations, and the
repositories that persist expense and budget snapshots through it.
"""

from spendify.services.storage.interface import (
    KeyValueStoreInterface,
    NotFoundError,
    SerializationError,
    StorageError,
)
from spendify.services.storage.local_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)
from spendify.services.storage.repositories import (
    BudgetRepository,
    ExpenseRepository,
)

__all__ = [
    # Interfaces
    "KeyValueStoreInterface",
    # Exceptions
    "NotFoundError",
    "SerializationError",
    "StorageError",
    # Local implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    # Repositories
    "BudgetRepository",
    "ExpenseRepository",
]
