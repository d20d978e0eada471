"""
Main Orchestrator for Spendify

This module ties together all the components and defines the one flow
every user action goes through:

    form input -> action -> reduce -> persist -> audit -> budget check -> subscribers

DESIGN DECISION: The orchestrator enforces the boundaries:
- State only changes through dispatch()
- Every change to expenses or budgets rewrites that whole snapshot
- Storage and notification failures are logged, never raised to the UI
"""

import datetime
from typing import Callable, Optional
from uuid import UUID

from pydantic import ValidationError

from spendify.audit import AuditLogger
from spendify.config import get_settings
from spendify.export import export_csv
from spendify.models.audit import AuditEvent
from spendify.models.expense import BudgetAlert, BudgetStatus, Expense, MonthlySummary, find_expense
from spendify.queries import budget_statuses, monthly_summary, visible_expenses
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
    StorageError,
)
from spendify.state import (
    Action,
    AddExpense,
    DeleteExpense,
    LoadState,
    SetBudget,
    SetFilter,
    SetSearch,
    TrackerState,
    UpdateExpense,
    reduce,
)
from spendify.validation import build_expense, parse_amount, parse_budget


Subscriber = Callable[[TrackerState], None]


class ExpenseTracker:
    """
    The application store.

    Holds the current TrackerState and is the only place it changes.
    The view layer reads `state`, calls the operations below, and may
    subscribe to be told about every new state.
    """

    def __init__(
        self,
        expense_repository: ExpenseRepository,
        budget_repository: BudgetRepository,
        notifier: Optional[BudgetNotifier] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], datetime.date] = datetime.date.today,
    ):
        self._expense_repository = expense_repository
        self._budget_repository = budget_repository
        self._notifier = notifier
        self._audit_logger = audit_logger
        self._clock = clock
        self._state = TrackerState()
        self._subscribers: list[Subscriber] = []

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def expenses(self) -> list[Expense]:
        return self._state.expenses

    # -------------------------------------------------------------------------
    # Store mechanics
    # -------------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback for every new state. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def load(self) -> TrackerState:
        """
        Read both snapshots from storage.

        Also asks for notification permission (first call only), since
        this runs once when the app starts.
        """
        if self._notifier:
            self._notifier.request_permission_once()
        return self.dispatch(LoadState(
            expenses=self._expense_repository.load(),
            budgets=self._budget_repository.load(),
        ))

    def dispatch(self, action: Action) -> TrackerState:
        """Apply an action and run every side effect of the change."""
        previous = self._state
        state = reduce(previous, action)
        if state is previous:
            return state
        self._state = state

        expenses_changed = state.expenses is not previous.expenses
        budgets_changed = state.budgets is not previous.budgets

        if not isinstance(action, LoadState):
            if expenses_changed:
                self._expense_repository.save(state.expenses)
            if budgets_changed:
                self._budget_repository.save(state.budgets)
            self._audit(action)

        if expenses_changed or budgets_changed:
            self.check_budgets()

        for callback in list(self._subscribers):
            callback(state)
        return state

    def _audit(self, action: Action) -> None:
        if not self._audit_logger:
            return
        if isinstance(action, AddExpense):
            expense = action.expense
            self._audit_logger.log_expense_added(
                expense.id, expense.name, str(expense.amount), expense.category
            )
        elif isinstance(action, UpdateExpense):
            self._audit_logger.log_expense_updated(
                action.expense_id, action.name, str(action.amount), action.category
            )
        elif isinstance(action, DeleteExpense):
            self._audit_logger.log_expense_deleted(action.expense_id)
        elif isinstance(action, SetBudget):
            self._audit_logger.log_budget_set(action.category, str(action.limit))

    # -------------------------------------------------------------------------
    # Expense operations
    # -------------------------------------------------------------------------

    def get_expense(self, expense_id: UUID) -> Optional[Expense]:
        return find_expense(self._state.expenses, expense_id)

    def add_expense(
        self,
        name: str,
        amount_text: str,
        category: str,
        expense_date: Optional[datetime.date] = None,
    ) -> Optional[Expense]:
        """
        Add an expense from raw form values.

        Returns the new expense, or None if the input was not usable.
        """
        expense = build_expense(name, amount_text, category, expense_date or self._clock())
        if expense is None:
            if self._audit_logger:
                self._audit_logger.log_expense_rejected("invalid name or amount")
            return None
        self.dispatch(AddExpense(expense=expense))
        return self.get_expense(expense.id)

    def update_expense(
        self,
        expense_id: UUID,
        name: str,
        amount_text: str,
        category: str,
        expense_date: datetime.date,
    ) -> Optional[Expense]:
        """
        Replace every field of an existing expense except its id.

        Returns the edited expense, or None if the id is unknown or
        the input was not usable.
        """
        if self.get_expense(expense_id) is None:
            return None

        name = (name or "").strip()
        amount = parse_amount(amount_text)
        if not name or amount is None:
            if self._audit_logger:
                self._audit_logger.log_expense_rejected("invalid name or amount")
            return None

        try:
            action = UpdateExpense(
                expense_id=expense_id,
                name=name,
                amount=amount,
                category=category,
                date=expense_date,
            )
        except ValidationError as e:
            if self._audit_logger:
                self._audit_logger.log_expense_rejected(f"{e.error_count()} invalid fields")
            return None

        self.dispatch(action)
        return self.get_expense(expense_id)

    def delete_expense(self, expense_id: UUID) -> bool:
        """Remove exactly one expense. False if the id is unknown."""
        if self.get_expense(expense_id) is None:
            return False
        self.dispatch(DeleteExpense(expense_id=expense_id))
        return True

    # -------------------------------------------------------------------------
    # Budgets
    # -------------------------------------------------------------------------

    def set_budget(self, category: str, amount_text: str) -> bool:
        """Create or overwrite one category's monthly ceiling."""
        limit = parse_budget(amount_text)
        if limit is None or not category:
            return False
        self.dispatch(SetBudget(category=category, limit=limit))
        return True

    def budget_statuses(self, today: Optional[datetime.date] = None) -> list[BudgetStatus]:
        return budget_statuses(self._state.budgets, self.monthly_summary(today))

    def check_budgets(self) -> list[BudgetAlert]:
        """Run the overspend check for the current month."""
        if not self._notifier:
            return []
        return self._notifier.check(self._state.budgets, self.monthly_summary())

    # -------------------------------------------------------------------------
    # View state and derived data
    # -------------------------------------------------------------------------

    def set_filter(self, category: str) -> TrackerState:
        return self.dispatch(SetFilter(category=category))

    def set_search(self, text: str) -> TrackerState:
        return self.dispatch(SetSearch(text=text))

    def visible_expenses(self) -> list[Expense]:
        """Expenses after the current category filter and search text."""
        return visible_expenses(
            self._state.expenses,
            self._state.filter_category,
            self._state.search_text,
        )

    def monthly_summary(self, today: Optional[datetime.date] = None) -> MonthlySummary:
        return monthly_summary(self._state.expenses, today or self._clock())

    def export_csv(self, record: bool = True) -> str:
        """
        CSV of every expense (not just the visible ones).

        With record=False the export is not audited; the caller is expected
        to call record_export() once the file is actually handed over.
        """
        text = export_csv(self._state.expenses)
        if record:
            self.record_export()
        return text

    def record_export(self) -> None:
        if self._audit_logger:
            self._audit_logger.log_export_generated(len(self._state.expenses))

    def recent_activity(self, limit: int = 20) -> list[AuditEvent]:
        """Latest audit events, newest first."""
        if not self._audit_logger:
            return []
        return self._audit_logger.recent_events(limit=limit)


def create_app_components(
    use_storage: bool = True,
    channel: Optional[AlertChannelInterface] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> ExpenseTracker:
    """
    Factory function to create a loaded ExpenseTracker.

    Args:
        use_storage: Whether to persist to the configured data directory.
                    Set to False for an in-memory tracker.
        channel: Where overspend alerts go. Defaults to an in-memory
                 channel whose permission follows settings.

    Returns:
        The tracker, already loaded from storage
    """
    settings = get_settings()
    storage_settings = settings.storage
    app_settings = settings.app
    audit_logger = audit_logger or AuditLogger()

    store: KeyValueStoreInterface
    if use_storage:
        try:
            store = JsonFileKeyValueStore(
                storage_settings.data_dir,
                write_attempts=storage_settings.write_attempts,
            )
        except StorageError as e:
            # Storage not usable - continue in memory
            audit_logger.log_error("storage_unavailable", str(e))
            store = InMemoryKeyValueStore()
    else:
        store = InMemoryKeyValueStore()

    notifier = BudgetNotifier(
        channel or InMemoryAlertChannel(grant=app_settings.notifications_enabled),
        audit_logger=audit_logger,
        currency_symbol=app_settings.currency_symbol,
    )

    tracker = ExpenseTracker(
        expense_repository=ExpenseRepository(
            store, storage_settings.expenses_key, audit_logger
        ),
        budget_repository=BudgetRepository(
            store, storage_settings.budgets_key, audit_logger
        ),
        notifier=notifier,
        audit_logger=audit_logger,
    )
    tracker.load()
    return tracker
