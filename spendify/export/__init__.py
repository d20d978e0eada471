"""Export package."""

from spendify.export.csv_export import CSV_HEADER, export_csv, export_filename

__all__ = ["CSV_HEADER", "export_csv", "export_filename"]
