"""Shared fixtures."""

import pytest
from datetime import date
from decimal import Decimal

from spendify.audit import AuditLogger
from spendify.models.expense import Expense
from spendify.orchestrator import ExpenseTracker
from spendify.services.notifications import BudgetNotifier, InMemoryAlertChannel
from spendify.services.storage import (
    BudgetRepository,
    ExpenseRepository,
    InMemoryKeyValueStore,
)


TODAY = date(2024, 6, 15)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def sample_expenses() -> list[Expense]:
    return [
        Expense(name="Groceries", amount=Decimal("40.00"), category="Food", date=date(2024, 6, 1)),
        Expense(name="Train ticket", amount=Decimal("25.50"), category="Travel", date=date(2024, 6, 3)),
        Expense(name="Dinner out", amount=Decimal("30.25"), category="Food", date=date(2024, 6, 10)),
        Expense(name="Electricity", amount=Decimal("80"), category="Bills", date=date(2024, 5, 28)),
        Expense(name="Shoes", amount=Decimal("60"), category="Shopping", date=date(2023, 6, 20)),
    ]


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger()


@pytest.fixture
def channel() -> InMemoryAlertChannel:
    return InMemoryAlertChannel()


@pytest.fixture
def tracker(store, audit_logger, channel) -> ExpenseTracker:
    tracker = ExpenseTracker(
        expense_repository=ExpenseRepository(store, audit_logger=audit_logger),
        budget_repository=BudgetRepository(store, audit_logger=audit_logger),
        notifier=BudgetNotifier(channel, audit_logger=audit_logger),
        audit_logger=audit_logger,
        clock=lambda: TODAY,
    )
    tracker.load()
    return tracker
