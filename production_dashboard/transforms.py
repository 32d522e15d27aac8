"""
Data transforms: turn raw sheet rows into typed Records and lay Records out
as DataFrames or display orderings.
"""

import logging
from collections.abc import Sequence
from typing import Any, Iterable

import pandas as pd

from .config import OTHER_SHIFT, ROW_WIDTH, SHIFT_LABELS
from .kpis import calc_variance
from .loaders.utils import (
    canonical_day,
    clean_text,
    coerce_quantity,
    machine_sort_key,
    safe_float,
)
from .models import Record

logger = logging.getLogger(__name__)

RECORD_COLUMNS = [
    "date",
    "machine",
    "shift",
    "shift_key",
    "target",
    "actual",
    "variance",
    "percent",
    "items",
]


def normalise_row(row: Sequence[Any]) -> Record | None:
    """Convert one positional sheet row into a Record.

    Column order: date, machine, shift, target, actual, extra/less,
    percent, items. Short rows are padded (the Sheets API omits trailing
    empty cells); extra cells are ignored.

    Returns None when the date cell cannot be canonicalised.

    Raises
    ------
    TypeError
        If ``row`` is not a sequence of cells.
    """
    if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
        raise TypeError(f"Expected a sequence of cells, got {type(row).__name__}")

    cells = list(row[:ROW_WIDTH])
    if len(cells) < ROW_WIDTH:
        cells.extend([None] * (ROW_WIDTH - len(cells)))
    raw_date, machine, shift, target, actual, extra_less, percent, items = cells

    day = canonical_day(raw_date)
    if day is None:
        logger.debug("Dropping row with unparseable date: %r", raw_date)
        return None

    target = coerce_quantity(target)
    actual = coerce_quantity(actual)
    derived_var, derived_pct = calc_variance(actual, target)

    variance = safe_float(extra_less)
    if variance is None:
        variance = derived_var
    # a zero target has no defined percentage, whatever the sheet says
    pct = safe_float(percent) if target else None
    if pct is None:
        pct = derived_pct

    return Record(
        date=day,
        machine=clean_text(machine),
        shift=clean_text(shift),
        target=target,
        actual=actual,
        variance=variance,
        percent=pct,
        items=clean_text(items),
    )


def build_records(rows: Iterable[Sequence[Any]], has_header: bool = True) -> list[Record]:
    """Normalise a whole dataset.

    The first row is the sheet header and is skipped when ``has_header``.
    Rows with bad dates are dropped and counted.
    """
    rows = list(rows or [])
    if has_header and rows:
        rows = rows[1:]

    if not rows:
        logger.warning("No data rows to normalise")
        return []

    records = []
    dropped = 0
    for row in rows:
        record = normalise_row(row)
        if record is None:
            dropped += 1
            continue
        records.append(record)

    if dropped:
        logger.info("Dropped %d rows with unparseable dates", dropped)
    logger.info("Normalised %d records from %d rows", len(records), len(rows))
    return records


def records_to_frame(records: Iterable[Record]) -> pd.DataFrame:
    """One DataFrame row per record, columns as in RECORD_COLUMNS."""
    rows = [record.as_dict() for record in records]
    if not rows:
        return pd.DataFrame(columns=RECORD_COLUMNS)
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)


def interleave_by_machine(records: Iterable[Record]) -> list[Record]:
    """Order a day's records machine by machine, shift A then B then others.

    Machines ascend by embedded number and then label; within each shift
    bucket the input order is kept.
    """
    buckets: dict[str, dict[str, list[Record]]] = {}
    for record in records:
        bucket = buckets.setdefault(
            record.machine, {shift: [] for shift in (*SHIFT_LABELS, OTHER_SHIFT)}
        )
        bucket[record.shift_key].append(record)

    out = []
    for machine in sorted(buckets, key=machine_sort_key):
        for shift in (*SHIFT_LABELS, OTHER_SHIFT):
            out.extend(buckets[machine][shift])
    return out
