"""
Tracker State and Actions

DESIGN DECISION: The UI never mutates data directly.
It dispatches an action; reduce() returns the next state:

    state = reduce(state, AddExpense(expense=...))

reduce() is pure. When an action changes nothing (unknown id, same
filter) it returns the very same state object, and collections that an
action does not touch are carried over by identity. The orchestrator
relies on both to decide what to persist.
"""

import datetime
from decimal import Decimal
from typing import Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from spendify.models.expense import ALL_CATEGORIES, Expense


class TrackerState(BaseModel):
    """Everything the expense screen shows."""
    model_config = ConfigDict(frozen=True)

    expenses: list[Expense] = Field(default_factory=list)
    budgets: dict[str, Decimal] = Field(default_factory=dict)
    filter_category: str = ALL_CATEGORIES
    search_text: str = ""


# =============================================================================
# ACTIONS
# =============================================================================

class LoadState(BaseModel):
    """Replace both collections with freshly loaded snapshots."""
    expenses: list[Expense] = Field(default_factory=list)
    budgets: dict[str, Decimal] = Field(default_factory=dict)


class AddExpense(BaseModel):
    expense: Expense


class UpdateExpense(BaseModel):
    """Replace every field of one expense except its identifier."""
    model_config = ConfigDict(str_strip_whitespace=True)

    expense_id: UUID
    name: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0)
    category: str = Field(..., min_length=1)
    date: datetime.date


class DeleteExpense(BaseModel):
    expense_id: UUID


class SetBudget(BaseModel):
    """Create or overwrite the ceiling for one category."""
    category: str = Field(..., min_length=1)
    limit: Decimal = Field(..., ge=0)


class SetFilter(BaseModel):
    category: str = ALL_CATEGORIES


class SetSearch(BaseModel):
    text: str = ""


Action = Union[
    LoadState,
    AddExpense,
    UpdateExpense,
    DeleteExpense,
    SetBudget,
    SetFilter,
    SetSearch,
]


# =============================================================================
# REDUCER
# =============================================================================

def reduce(state: TrackerState, action: Action) -> TrackerState:
    """Return the state after applying one action."""
    if isinstance(action, LoadState):
        return state.model_copy(update={
            "expenses": list(action.expenses),
            "budgets": dict(action.budgets),
        })

    if isinstance(action, AddExpense):
        if any(expense.id == action.expense.id for expense in state.expenses):
            return state
        return state.model_copy(update={"expenses": [*state.expenses, action.expense]})

    if isinstance(action, UpdateExpense):
        updated = False
        expenses = []
        for expense in state.expenses:
            if expense.id == action.expense_id:
                expense = expense.with_fields(
                    name=action.name,
                    amount=action.amount,
                    category=action.category,
                    date=action.date,
                )
                updated = True
            expenses.append(expense)
        if not updated:
            return state
        return state.model_copy(update={"expenses": expenses})

    if isinstance(action, DeleteExpense):
        expenses = [e for e in state.expenses if e.id != action.expense_id]
        if len(expenses) == len(state.expenses):
            return state
        return state.model_copy(update={"expenses": expenses})

    if isinstance(action, SetBudget):
        budgets = {**state.budgets, action.category: action.limit}
        return state.model_copy(update={"budgets": budgets})

    if isinstance(action, SetFilter):
        category = action.category or ALL_CATEGORIES
        if category == state.filter_category:
            return state
        return state.model_copy(update={"filter_category": category})

    if isinstance(action, SetSearch):
        if action.text == state.search_text:
            return state
        return state.model_copy(update={"search_text": action.text})

    raise TypeError(f"Unknown action: {type(action).__name__}")
