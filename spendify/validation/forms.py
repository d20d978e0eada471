"""
Form Input Parsing

The add/edit/budget forms hand us raw text. The rules are deliberately
small: a non-empty name and an amount that parses as a non-negative
finite decimal. Anything else means the action does not happen.

Nothing here raises for bad input; callers get None.
"""

import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

import structlog
from pydantic import ValidationError

from spendify.models.expense import Expense


logger = structlog.get_logger(__name__)


def parse_amount(text: Union[str, Decimal, float, int, None]) -> Optional[Decimal]:
    """
    Parse form input into a money amount.

    Returns None for empty, unparseable, non-finite or negative input.
    """
    if text is None:
        return None
    if isinstance(text, bool):
        return None
    if isinstance(text, float):
        text = repr(text)
    raw = str(text).strip()
    if not raw:
        return None
    try:
        amount = Decimal(raw)
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    if amount == 0:
        # "-0" parses as negative zero
        amount = abs(amount)
    return amount


# Budget ceilings follow the same rules as expense amounts
parse_budget = parse_amount


def build_expense(
    name: str,
    amount_text: Union[str, Decimal, float, int, None],
    category: str,
    expense_date: datetime.date,
) -> Optional[Expense]:
    """
    Build a new Expense from raw form values.

    Returns None when the name is blank or the amount does not parse.
    """
    name = (name or "").strip()
    if not name:
        logger.debug("expense_form_rejected", reason="empty_name")
        return None

    amount = parse_amount(amount_text)
    if amount is None:
        logger.debug("expense_form_rejected", reason="invalid_amount")
        return None

    try:
        return Expense(
            name=name,
            amount=amount,
            category=category,
            date=expense_date,
        )
    except ValidationError as e:
        logger.debug("expense_form_rejected", reason="schema", errors=e.error_count())
        return None
