"""Form input parsing package."""

from spendify.validation.forms import build_expense, parse_amount, parse_budget

__all__ = ["build_expense", "parse_amount", "parse_budget"]
