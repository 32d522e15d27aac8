"""Data sources for production sheets."""

from .sheets import fetch_sheet_rows, fetch_section_rows
from .workbook import load_workbook_rows

__all__ = [
    "fetch_sheet_rows",
    "fetch_section_rows",
    "load_workbook_rows",
]
