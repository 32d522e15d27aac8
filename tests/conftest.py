from datetime import date

import pytest

from production_dashboard.config import SHEET_HEADER
from production_dashboard.models import Record
from production_dashboard.store import DateGroupedStore


def make_record(day, machine, shift, target, actual, items=""):
    """Helper: Record with variance/percent derived like the row normaliser."""
    if isinstance(day, str):
        day = date.fromisoformat(day)
    variance = actual - target
    percent = variance / target * 100 if target else None
    return Record(
        date=day,
        machine=machine,
        shift=shift,
        target=float(target),
        actual=float(actual),
        variance=float(variance),
        percent=percent,
        items=items,
    )


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def sheet_rows():
    """Raw rows as the Sheets API returns them: header first, strings, mixed date formats."""
    return [
        list(SHEET_HEADER),
        ["2025-07-01", "MC-2", "B", "100", "90", "-10", "-10%", "Cap"],
        ["2025-07-01", "MC-1", "A", "100", "110", "10", "10%", "Barrel"],
        ["01-07-2025", "MC-1", "B", "100", "90"],
        ["07/03/2025", "MC-10", "a ", "200", "250", "50", "25%"],
        ["2025-07-03", "MC-2", "C", "50", "60"],
        ["not a date", "MC-3", "A", "100", "100"],
    ]


@pytest.fixture
def sample_store():
    """Two dates with data (07-01 and 07-03), three machines, one 'other' shift row."""
    return DateGroupedStore.from_records([
        make_record("2025-07-01", "MC-1", "A", 100, 110),
        make_record("2025-07-01", "MC-1", "B", 100, 90),
        make_record("2025-07-01", "MC-2", "A", 200, 180),
        make_record("2025-07-03", "MC-10", "A", 100, 125),
        make_record("2025-07-03", "MC-2", "B", 0, 40),
        make_record("2025-07-03", "MC-2", "C", 50, 60),
    ])
