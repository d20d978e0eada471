"""Tests for filtering, search and monthly aggregation."""

from datetime import date
from decimal import Decimal

from spendify.models.expense import Expense, MonthlySummary
from spendify.queries import (
    budget_statuses,
    filter_expenses,
    monthly_summary,
    overspent_categories,
    search_expenses,
    visible_expenses,
)


class TestFilterAndSearch:
    """Tests for the list predicates."""

    def test_filter_all_returns_everything(self, sample_expenses):
        """Test that 'All' returns the full set in order."""
        assert filter_expenses(sample_expenses, "All") == sample_expenses

    def test_filter_by_category(self, sample_expenses):
        """Test that a category returns exactly its subset."""
        food = filter_expenses(sample_expenses, "Food")
        assert [e.name for e in food] == ["Groceries", "Dinner out"]
        assert all(e.category == "Food" for e in food)

    def test_filter_unused_category(self, sample_expenses):
        """Test a category with no expenses."""
        assert filter_expenses(sample_expenses, "Others") == []

    def test_search_is_case_insensitive(self, sample_expenses):
        """Test name search ignores case."""
        assert [e.name for e in search_expenses(sample_expenses, "TRAIN")] == ["Train ticket"]

    def test_search_matches_category(self, sample_expenses):
        """Test that search text also matches the category name."""
        assert [e.name for e in search_expenses(sample_expenses, "bills")] == ["Electricity"]

    def test_empty_search_returns_everything(self, sample_expenses):
        """Test blank search text."""
        assert search_expenses(sample_expenses, "  ") == sample_expenses

    def test_visible_combines_filter_and_search(self, sample_expenses):
        """Test filter and search together."""
        result = visible_expenses(sample_expenses, "Food", "din")
        assert [e.name for e in result] == ["Dinner out"]

    def test_filter_does_not_mutate_input(self, sample_expenses):
        """Test that the input list is left alone."""
        before = list(sample_expenses)
        filter_expenses(sample_expenses, "Food")
        assert sample_expenses == before


class TestMonthlySummary:
    """Tests for current-month aggregation."""

    def test_current_month_only(self, sample_expenses, today):
        """Test per-category sums exclude other months."""
        summary = monthly_summary(sample_expenses, today)
        assert summary.year == 2024
        assert summary.month == 6
        assert summary.totals == {
            "Food": Decimal("70.25"),
            "Travel": Decimal("25.50"),
        }

    def test_excludes_same_month_previous_year(self, sample_expenses, today):
        """Test that June 2023 does not count toward June 2024."""
        summary = monthly_summary(sample_expenses, today)
        assert "Shopping" not in summary.totals

    def test_excludes_future_month(self, today):
        """Test that next month's expenses are excluded."""
        expenses = [
            Expense(name="Hotel", amount=Decimal("100"), category="Travel", date=date(2024, 7, 1)),
        ]
        assert monthly_summary(expenses, today).totals == {}

    def test_month_boundaries(self):
        """Test first and last day of the month are included."""
        expenses = [
            Expense(name="First", amount=Decimal("1"), category="Food", date=date(2024, 2, 1)),
            Expense(name="Last", amount=Decimal("2"), category="Food", date=date(2024, 2, 29)),
            Expense(name="Before", amount=Decimal("4"), category="Food", date=date(2024, 1, 31)),
            Expense(name="After", amount=Decimal("8"), category="Food", date=date(2024, 3, 1)),
        ]
        summary = monthly_summary(expenses, date(2024, 2, 10))
        assert summary.totals == {"Food": Decimal("3")}

    def test_empty_collection(self, today):
        """Test summary of nothing."""
        summary = monthly_summary([], today)
        assert summary.totals == {}
        assert summary.total == Decimal("0")


class TestBudgetQueries:
    """Tests for budget status queries."""

    def test_statuses_sorted_with_zero_default(self):
        """Test one status per budget, ordered, zero spent by default."""
        summary = MonthlySummary(year=2024, month=6, totals={"Food": Decimal("70")})
        statuses = budget_statuses({"Travel": Decimal("50"), "Food": Decimal("100")}, summary)
        assert [s.category for s in statuses] == ["Food", "Travel"]
        assert statuses[0].spent == Decimal("70")
        assert statuses[1].spent == Decimal("0")

    def test_budget_for_unknown_category(self):
        """Test that budgets are not tied to the default categories."""
        summary = MonthlySummary(year=2024, month=6, totals={"Health": Decimal("5")})
        statuses = budget_statuses({"Health": Decimal("1")}, summary)
        assert statuses[0].exceeded

    def test_overspent_categories(self):
        """Test only categories strictly over budget are reported."""
        summary = MonthlySummary(
            year=2024,
            month=6,
            totals={"Food": Decimal("100"), "Travel": Decimal("60")},
        )
        budgets = {"Food": Decimal("100"), "Travel": Decimal("50")}
        assert [s.category for s in overspent_categories(budgets, summary)] == ["Travel"]
