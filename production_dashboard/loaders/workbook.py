"""
Loader for production sheets exported to Excel.

The workbook mirrors the Google Sheet layout: one sheet per department,
header in row 1 (DATE | MACHINE | SHIFT | TARGET | ACTUAL | EXTRA/LESS |
PERCENT | ITEMS), data from row 2 down.
"""

import logging

import openpyxl

from ..config import ROW_WIDTH

logger = logging.getLogger(__name__)


def load_workbook_rows(path: str, sheet_name: str | None = None) -> list[list]:
    """Read one sheet of an exported production workbook as raw rows.

    Assumptions
    -----------
    - Row 1 is the header; it is returned so the row normaliser can skip it
      the same way it skips the Sheets API header.
    - Only the first eight columns are read.
    - Fully empty rows are dropped; trailing empty cells are trimmed, as the
      Sheets API does.

    Returns
    -------
    List of rows (lists of cell values). Empty list if the sheet is missing.
    """
    try:
        wb = openpyxl.load_workbook(path, data_only=True, read_only=True)
    except Exception:
        logger.exception("Failed to open production workbook: %s", path)
        raise

    try:
        if sheet_name is None:
            sheet_name = wb.sheetnames[0]
        elif sheet_name not in wb.sheetnames:
            logger.warning("Sheet '%s' not found in %s", sheet_name, path)
            return []

        ws = wb[sheet_name]
        rows = []
        for values in ws.iter_rows(max_col=ROW_WIDTH, values_only=True):
            cells = list(values)
            while cells and (cells[-1] is None or cells[-1] == ""):
                cells.pop()
            if cells:
                rows.append(cells)
    finally:
        wb.close()

    logger.info("Loaded %d rows from %s [%s]", len(rows), path, sheet_name)
    return rows
