"""Tests for CSV export."""

import csv
import io
import pytest
from datetime import date
from decimal import Decimal

from spendify.export import CSV_HEADER, export_csv, export_filename
from spendify.models.expense import Expense


class TestCsvExport:
    """Tests for export_csv."""

    def test_header_only_when_empty(self):
        """Test export of an empty collection."""
        assert export_csv([]) == "Name,Amount,Category,Date\n"

    def test_one_line_per_record_in_order(self, sample_expenses):
        """Test header followed by one line per record, in collection order."""
        lines = export_csv(sample_expenses).splitlines()
        assert lines[0] == "Name,Amount,Category,Date"
        assert len(lines) == len(sample_expenses) + 1
        assert lines[1] == "Groceries,40.00,Food,2024-06-01"
        assert lines[2] == "Train ticket,25.50,Travel,2024-06-03"
        assert lines[-1] == "Shoes,60,Shopping,2023-06-20"

    def test_comma_in_name_is_quoted(self):
        """Test that a comma in a field does not add a column."""
        expense = Expense(
            name="Fish, chips",
            amount=Decimal("9.5"),
            category="Food",
            date=date(2024, 6, 1),
        )
        text = export_csv([expense])
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[0] == CSV_HEADER
        assert rows[1] == ["Fish, chips", "9.5", "Food", "2024-06-01"]

    @pytest.mark.parametrize("amount, expected", [
        (Decimal("1e3"), "1000"),
        (Decimal("2.5E-1"), "0.25"),
        (Decimal("-0"), "0"),
        (Decimal("12.50"), "12.50"),
    ])
    def test_amounts_written_as_plain_decimals(self, amount, expected):
        """Test exponent form and signed zero never reach the file."""
        expense = Expense(name="A", amount=amount, category="Food", date=date(2024, 6, 1))
        assert export_csv([expense]).splitlines()[1] == f"A,{expected},Food,2024-06-01"

    def test_export_filename(self):
        """Test the suggested download name."""
        assert export_filename(date(2024, 6, 15)) == "expenses-2024-06-15.csv"
