"""
Abstract Storage Interface

DESIGN DECISION: Persistence is a plain key-value store of text blobs.
Each key holds the whole serialized snapshot of one collection
(expenses, budgets). This allows us to:
1. Swap the local file store for something else later
2. Use in-memory storage for testing
3. Keep encoding concerns in the repositories, not the backend

The interface is intentionally tiny - no partial updates, no queries.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStoreInterface(ABC):
    """
    Abstract interface for key-value blob storage.

    Any storage implementation (JSON files, in-memory, ...)
    must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the blob stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored text, or None if nothing is stored under the key

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Replace the blob stored under a key.

        Args:
            key: Storage key
            value: Full serialized snapshot

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if something was removed
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys in sorted order."""
        pass

    def read(self, key: str) -> str:
        """
        Read a blob that must exist.

        Raises:
            NotFoundError: If nothing is stored under the key
            StorageError: If the backend cannot be read
        """
        value = self.get(key)
        if value is None:
            raise NotFoundError(f"Nothing stored under '{key}'")
        return value


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Requested key does not exist."""
    pass


class SerializationError(StorageError):
    """Stored data could not be encoded or decoded."""
    pass
