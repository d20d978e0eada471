"""
Data Models Package

This package contains all Pydantic models used in Spendify.
All data flowing through the system must conform to these schemas.
"""

from spendify.models.expense import (
    ALL_CATEGORIES,
    DEFAULT_CATEGORIES,
    BudgetAlert,
    Budgets,
    BudgetStatus,
    Expense,
    ExpenseCategory,
    MonthlySummary,
    find_expense,
)
from spendify.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "ALL_CATEGORIES",
    "DEFAULT_CATEGORIES",
    "BudgetAlert",
    "Budgets",
    "BudgetStatus",
    "Expense",
    "ExpenseCategory",
    "MonthlySummary",
    "find_expense",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
