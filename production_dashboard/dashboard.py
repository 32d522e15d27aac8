"""
Dashboard-ready output functions.

These are the primary entry points for the Streamlit front end.
Each function takes the current DateGroupedStore (or a slice of its
records) and returns plain dicts, result objects or DataFrames suitable for
rendering tables and charts.
"""

import logging
from datetime import date
from typing import Any, Iterable, Sequence

import pandas as pd
from pandas.io.formats.style import Styler

from .breakdown import Breakdown, build_breakdown
from .config import SHIFT_LABELS
from .kpis import (
    aggregate_records,
    calc_variance,
    format_pct,
    format_quantity,
    performance_css,
)
from .loaders.utils import day_key
from .matrix import RangeMatrix, build_range_matrix
from .models import Record
from .ranking import Leaderboard, best_machine, rank_machines
from .store import DateGroupedStore
from .transforms import interleave_by_machine

logger = logging.getLogger(__name__)

TABLE_COLUMNS = [
    "Date",
    "Machine No.",
    "Shift",
    "Target",
    "Actual",
    "Loss / Profit",
    "Loss / Profit (%)",
    "Items",
]


def load_store(rows: Sequence[Sequence[Any]]) -> DateGroupedStore:
    """Raw sheet rows (header first) -> DateGroupedStore.

    An empty row list, whether from a failed fetch or an empty sheet,
    gives an empty store.
    """
    return DateGroupedStore.from_rows(rows)


def get_available_dates(store: DateGroupedStore) -> list[str]:
    """Return ascending ISO date strings for UI date pickers."""
    return [day_key(day) for day in store.dates()]


def get_default_date(store: DateGroupedStore) -> date | None:
    """Latest date, the table view's initial selection."""
    return store.latest_date()


def get_table_view(
    store: DateGroupedStore,
    selected_date: Any,
    interleave: bool = True,
) -> list[Record]:
    """Records for one date.

    With ``interleave`` the rows are ordered machine-ascending with shift A
    before B before any other shift; otherwise load order is kept.
    """
    records = list(store.records_for(selected_date))
    if not records:
        logger.info("No records for date %s", selected_date)
        return []
    return interleave_by_machine(records) if interleave else records


def get_table_frame(records: Iterable[Record]) -> pd.DataFrame:
    """Display table for a list of records.

    Loss / Profit is actual - target; the percentage column shows the
    no-data marker when the target is 0.
    """
    rows = []
    for r in records:
        diff, pct = calc_variance(r.actual, r.target)
        rows.append([
            day_key(r.date),
            r.machine,
            r.shift,
            format_quantity(r.target),
            format_quantity(r.actual),
            format_quantity(diff),
            format_pct(pct),
            r.items,
        ])
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def get_table_styles(records: Iterable[Record]) -> pd.DataFrame:
    """Cell CSS matching get_table_frame().

    Loss / Profit is coloured by the sign of the difference and the
    percentage column by the percentage; zero-target percentages stay plain.
    """
    diff_col = TABLE_COLUMNS.index("Loss / Profit")
    pct_col = TABLE_COLUMNS.index("Loss / Profit (%)")
    rows = []
    for r in records:
        diff, pct = calc_variance(r.actual, r.target)
        row = [""] * len(TABLE_COLUMNS)
        row[diff_col] = performance_css(diff)
        row[pct_col] = performance_css(pct)
        rows.append(row)
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def get_matrix_styles(matrix: RangeMatrix) -> pd.DataFrame:
    """Cell CSS matching matrix.to_frame(display=True); null cells stay plain."""
    return matrix.to_frame().map(performance_css)


def get_ranking_styles(board: Leaderboard) -> pd.DataFrame:
    """Cell CSS matching board.to_frame(); only "Performance %" is coloured."""
    frame = board.to_frame()
    styles = pd.DataFrame("", index=frame.index, columns=frame.columns)
    styles["Performance %"] = [performance_css(entry.percent) for entry in board.entries]
    return styles


def style_frame(frame: pd.DataFrame, styles: pd.DataFrame) -> Styler:
    """Attach per-cell CSS (same shape as ``frame``) for rendering."""
    return frame.style.apply(lambda _: styles, axis=None)


def get_matrix_view(store: DateGroupedStore, start: Any, end: Any) -> RangeMatrix:
    """Machine-wise A/B percentage matrix for a date range."""
    return build_range_matrix(store, start, end)


def get_ranking_view(store: DateGroupedStore, window_days: int) -> Leaderboard:
    """Best-to-worst machines over the trailing ``window_days``."""
    return rank_machines(store, window_days)


def get_breakdown_view(records: Iterable[Record], label_mode: str = "value") -> Breakdown:
    """Pie-chart fractions and labels for a set of records."""
    return build_breakdown(records, label_mode=label_mode)


def get_shift_breakdowns(
    store: DateGroupedStore,
    selected_date: Any,
    label_mode: str = "value",
) -> dict[str, Breakdown]:
    """One breakdown per recognised shift for the selected date.

    Records outside shifts A and B are left out of the per-shift charts.
    """
    records = store.records_for(selected_date)
    return {
        shift: build_breakdown(
            [r for r in records if r.shift_key == shift], label_mode=label_mode
        )
        for shift in SHIFT_LABELS
    }


def get_section_overview(store: DateGroupedStore, window_days: int = 10) -> dict:
    """Return a dict suitable for top-level section cards.

    Returns
    -------
    Dict with structure:
    {
        "records": 120,
        "first_date": "2025-07-01",
        "latest_date": "2025-07-10",
        "machines": 6,
        "latest": {"target": ..., "actual": ..., "var_pct": ...},
        "best_machine": {"machine": "MC-3", "var_pct": 8.1} or None,
    }
    """
    if store.is_empty:
        logger.warning("Empty store — returning empty overview")
        return {
            "records": 0,
            "first_date": None,
            "latest_date": None,
            "machines": 0,
            "latest": None,
            "best_machine": None,
        }

    dates = store.dates()
    latest_agg = aggregate_records(store.records_for(dates[-1]))
    top = best_machine(rank_machines(store, window_days))

    return {
        "records": len(store),
        "first_date": day_key(dates[0]),
        "latest_date": day_key(dates[-1]),
        "machines": len({r.machine for r in store.all_records()}),
        "latest": {
            "target": latest_agg.target,
            "actual": latest_agg.actual,
            "var_pct": latest_agg.percent,
        },
        "best_machine": (
            {"machine": top.machine, "var_pct": top.percent} if top is not None else None
        ),
    }
