"""
Filtering, Search and Monthly Aggregation

DESIGN DECISION: Every query is a single pass over the in-memory list.
Nothing here touches storage and nothing mutates its input, so the
same functions back the UI, the budget checks and the tests.
"""

import datetime
from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Optional

from spendify.models.expense import (
    ALL_CATEGORIES,
    Budgets,
    BudgetStatus,
    Expense,
    MonthlySummary,
)


def filter_expenses(expenses: Iterable[Expense], category: str) -> list[Expense]:
    """
    Restrict to one category.

    "All" (or an empty value) returns every expense.
    """
    if not category or category == ALL_CATEGORIES:
        return list(expenses)
    return [expense for expense in expenses if expense.category == category]


def search_expenses(expenses: Iterable[Expense], text: str) -> list[Expense]:
    """Case-insensitive substring match on name or category."""
    needle = (text or "").strip().casefold()
    if not needle:
        return list(expenses)
    return [
        expense
        for expense in expenses
        if needle in expense.name.casefold() or needle in expense.category.casefold()
    ]


def visible_expenses(
    expenses: Iterable[Expense],
    category: str = ALL_CATEGORIES,
    text: str = "",
) -> list[Expense]:
    """Filter by category, then search; insertion order is kept."""
    return search_expenses(filter_expenses(expenses, category), text)


def monthly_summary(
    expenses: Iterable[Expense],
    today: Optional[datetime.date] = None,
) -> MonthlySummary:
    """
    Sum amounts per category for the calendar month containing `today`.

    Expenses from any other month (earlier or later) are excluded.
    """
    today = today or datetime.date.today()
    current = (today.year, today.month)

    totals: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for expense in expenses:
        if expense.month_key == current:
            totals[expense.category] += expense.amount

    return MonthlySummary(year=today.year, month=today.month, totals=dict(totals))


def budget_statuses(budgets: Budgets, summary: MonthlySummary) -> list[BudgetStatus]:
    """One status per configured budget, ordered by category name."""
    return [
        BudgetStatus(category=category, limit=limit, spent=summary.spent(category))
        for category, limit in sorted(budgets.items())
    ]


def overspent_categories(budgets: Budgets, summary: MonthlySummary) -> list[BudgetStatus]:
    """Statuses whose month-to-date spending is above the ceiling."""
    return [status for status in budget_statuses(budgets, summary) if status.exceeded]
