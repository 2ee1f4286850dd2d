"""Body metrics domain utilities."""

from .csv_export import CSV_HEADER, CsvRow, parse_csv, render_csv
from .reconciliation import calculate_bmi, decode_innerscan, dedupe_by_day, reconcile

__all__ = [
    "CSV_HEADER",
    "CsvRow",
    "calculate_bmi",
    "decode_innerscan",
    "dedupe_by_day",
    "parse_csv",
    "reconcile",
    "render_csv",
]
