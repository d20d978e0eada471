"""
CSV Export

Produces the text offered to the user for download: a fixed header and
one line per expense in collection order.
"""

import csv
import datetime
import io
from decimal import Decimal
from typing import Iterable, Optional

from spendify.models.expense import Expense


CSV_HEADER = ["Name", "Amount", "Category", "Date"]


def _plain_decimal(amount: Decimal) -> str:
    """Plain decimal text, never exponent form or negative zero."""
    if amount == 0:
        amount = abs(amount)
    return format(amount, "f")


def export_csv(expenses: Iterable[Expense]) -> str:
    """
    Render expenses as CSV text.

    Columns: Name, Amount, Category, Date (ISO). Fields containing a comma
    or quote are quoted; lines end with a bare newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for expense in expenses:
        writer.writerow([
            expense.name,
            _plain_decimal(expense.amount),
            expense.category,
            expense.date.isoformat(),
        ])
    return buffer.getvalue()


def export_filename(today: Optional[datetime.date] = None) -> str:
    today = today or datetime.date.today()
    return f"expenses-{today.isoformat()}.csv"
