"""Query package."""

from spendify.queries.aggregations import (
    budget_statuses,
    filter_expenses,
    monthly_summary,
    overspent_categories,
    search_expenses,
    visible_expenses,
)

__all__ = [
    "budget_statuses",
    "filter_expenses",
    "monthly_summary",
    "overspent_categories",
    "search_expenses",
    "visible_expenses",
]
