"""Services package."""

from spendify.services.notifications import (
    AlertChannelInterface,
    BudgetNotifier,
    InMemoryAlertChannel,
)
from spendify.services.storage import (
    BudgetRepository,
    ExpenseRepository,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStoreInterface,
    SerializationError,
    StorageError,
)

__all__ = [
    # Notification services
    "AlertChannelInterface",
    "BudgetNotifier",
    "InMemoryAlertChannel",
    # Storage services
    "BudgetRepository",
    "ExpenseRepository",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStoreInterface",
    "SerializationError",
    "StorageError",
]
