"""
Core Data Models for Spendify

These models define the schemas for everything the tracker keeps:
1. Expense records (the one real entity)
2. Budget ceilings per category
3. Derived views: monthly summary, budget status, overspend alert

DESIGN DECISION: Category is a plain string on the record.
The fixed category set lives in ExpenseCategory and is enforced by the
UI picker only, so stored data with an unknown category still loads.
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """Categories offered by the expense form and the filter picker."""
    FOOD = "Food"
    TRAVEL = "Travel"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    OTHERS = "Others"


DEFAULT_CATEGORIES: list[str] = [category.value for category in ExpenseCategory]

# Filter value meaning "no category restriction"
ALL_CATEGORIES = "All"


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    A single user-entered spending entry.

    The identifier is generated once at creation and survives every edit.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique expense ID"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="What the money was spent on"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount spent"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Category name, normally one of ExpenseCategory"
    )
    date: datetime.date = Field(
        ...,
        description="Day the expense happened"
    )

    @property
    def month_key(self) -> tuple[int, int]:
        """(year, month) bucket this expense falls into."""
        return self.date.year, self.date.month

    def with_fields(
        self,
        name: str,
        amount: Decimal,
        category: str,
        date: datetime.date,
    ) -> "Expense":
        """Return a copy with every field replaced except the identifier."""
        return Expense(
            id=self.id,
            name=name,
            amount=amount,
            category=category,
            date=date,
        )


# Category name -> monthly spending ceiling
Budgets = dict[str, Decimal]


# =============================================================================
# DERIVED VIEW MODELS
# =============================================================================

class MonthlySummary(BaseModel):
    """
    Per-category totals for one calendar month.

    Categories with no expenses in the month are absent from totals.
    """

    year: int = Field(..., ge=1)
    month: int = Field(..., ge=1, le=12)
    totals: dict[str, Decimal] = Field(default_factory=dict)

    @property
    def total(self) -> Decimal:
        """Sum across all categories."""
        return sum(self.totals.values(), Decimal("0"))

    def spent(self, category: str) -> Decimal:
        return self.totals.get(category, Decimal("0"))

    def sorted_items(self) -> list[tuple[str, Decimal]]:
        """(category, amount) pairs ordered by category name."""
        return sorted(self.totals.items(), key=lambda item: item[0])

    @property
    def label(self) -> str:
        return datetime.date(self.year, self.month, 1).strftime("%B %Y")


class BudgetStatus(BaseModel):
    """How one category is doing against its ceiling this month."""

    category: str
    limit: Decimal = Field(..., ge=0)
    spent: Decimal = Field(default=Decimal("0"), ge=0)

    @property
    def remaining(self) -> Decimal:
        return self.limit - self.spent

    @property
    def exceeded(self) -> bool:
        """Spending strictly above the ceiling."""
        return self.spent > self.limit

    @property
    def used_ratio(self) -> float:
        """Fraction of the budget used; a zero budget with spending counts as fully used."""
        if self.limit == 0:
            return 1.0 if self.spent > 0 else 0.0
        return float(self.spent / self.limit)


class BudgetAlert(BaseModel):
    """
    Payload of an overspend notification.

    Built from a BudgetStatus once the category goes over its ceiling.
    """

    category: str
    limit: Decimal
    spent: Decimal
    year: int
    month: int
    title: str
    body: str

    @classmethod
    def from_status(
        cls,
        status: BudgetStatus,
        year: int,
        month: int,
        currency_symbol: str = "$",
    ) -> "BudgetAlert":
        over = status.spent - status.limit
        return cls(
            category=status.category,
            limit=status.limit,
            spent=status.spent,
            year=year,
            month=month,
            title=f"Budget exceeded: {status.category}",
            body=(
                f"You have spent {currency_symbol}{status.spent:,.2f} on "
                f"{status.category} this month, {currency_symbol}{over:,.2f} "
                f"over your {currency_symbol}{status.limit:,.2f} budget."
            ),
        )

    @property
    def dedupe_key(self) -> tuple[str, int, int]:
        return self.category, self.year, self.month


def find_expense(expenses: list[Expense], expense_id: UUID) -> Optional[Expense]:
    """Return the expense with the given identifier, if present."""
    for expense in expenses:
        if expense.id == expense_id:
            return expense
    return None
