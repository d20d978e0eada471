"""
Snapshot Repositories

Each repository owns one key in the key-value store and moves the whole
collection in and out of it as JSON.

ERROR POLICY (best effort, never raised to the UI):
- Absent blob        -> empty default
- Unreadable blob    -> empty default, warning logged
- Malformed blob     -> empty default, warning logged
- Failed encode/write -> save() returns False, previous snapshot stays in place
"""

from decimal import Decimal
from typing import Annotated, Callable, Generic, Optional, TypeVar

from pydantic import Field, TypeAdapter, ValidationError

from spendify.audit import AuditLogger
from spendify.models.expense import Budgets, Expense
from spendify.services.storage.interface import (
    KeyValueStoreInterface,
    NotFoundError,
    SerializationError,
    StorageError,
)


T = TypeVar("T")

_EXPENSES_ADAPTER: TypeAdapter[list[Expense]] = TypeAdapter(list[Expense])
_BUDGETS_ADAPTER: TypeAdapter[dict[str, Decimal]] = TypeAdapter(
    dict[str, Annotated[Decimal, Field(ge=0)]]
)


class _SnapshotRepository(Generic[T]):
    """Whole-value load/save of one collection under one key."""

    def __init__(
        self,
        store: KeyValueStoreInterface,
        key: str,
        adapter: TypeAdapter,
        default: Callable[[], T],
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._key = key
        self._adapter = adapter
        self._default = default
        self._audit_logger = audit_logger

    @property
    def key(self) -> str:
        return self._key

    def decode(self, blob: str) -> T:
        try:
            return self._adapter.validate_json(blob)
        except ValidationError as e:
            raise SerializationError(
                f"Malformed data under '{self._key}': {e.error_count()} errors"
            ) from e

    def encode(self, value: T) -> str:
        try:
            return self._adapter.dump_json(value).decode("utf-8")
        except ValueError as e:
            raise SerializationError(f"Cannot encode data for '{self._key}': {e}") from e

    def load(self) -> T:
        """Load the stored snapshot, or the empty default."""
        try:
            value = self.decode(self._store.read(self._key))
        except NotFoundError:
            return self._default()
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_data_load_failed(self._key, str(e))
            return self._default()

        if self._audit_logger:
            self._audit_logger.log_data_loaded(self._key, len(value))
        return value

    def save(self, value: T) -> bool:
        """Replace the stored snapshot. Returns False if nothing was written."""
        try:
            self._store.set(self._key, self.encode(value))
            return True
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_data_save_failed(self._key, str(e))
            return False


class ExpenseRepository(_SnapshotRepository[list[Expense]]):
    """The full expense collection, in insertion order."""

    def __init__(
        self,
        store: KeyValueStoreInterface,
        key: str = "expenses",
        audit_logger: Optional[AuditLogger] = None,
    ):
        super().__init__(store, key, _EXPENSES_ADAPTER, list, audit_logger)


class BudgetRepository(_SnapshotRepository[Budgets]):
    """The full category -> budget ceiling mapping."""

    def __init__(
        self,
        store: KeyValueStoreInterface,
        key: str = "budgets",
        audit_logger: Optional[AuditLogger] = None,
    ):
        super().__init__(store, key, _BUDGETS_ADAPTER, dict, audit_logger)
