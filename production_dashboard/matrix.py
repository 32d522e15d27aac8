"""
Range matrix: machine x shift performance percentages for every date in a
caller-chosen range.

Rows are the dates inside the range that have data; columns are every
machine seen in the range, each split into shift A and shift B. Cells with
no contributing records (or a zero summed target) hold None.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterator, Mapping

import pandas as pd

from .config import SHIFT_LABELS
from .kpis import calc_variance, format_pct
from .loaders.utils import canonical_day, canonical_shift, day_key, machine_sort_key
from .store import DateGroupedStore

logger = logging.getLogger(__name__)

CellKey = tuple[date, str, str]


@dataclass(frozen=True)
class RangeMatrix:
    """Dense date x (machine, shift) pivot of performance percentages."""

    start: date | None = None
    end: date | None = None
    dates: tuple[date, ...] = ()
    machines: tuple[str, ...] = ()
    cells: Mapping[CellKey, float | None] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.dates or not self.machines

    @property
    def columns(self) -> list[tuple[str, str]]:
        return [(machine, shift) for machine in self.machines for shift in SHIFT_LABELS]

    def cell(self, day: Any, machine: str, shift: str) -> float | None:
        """Percentage for one (date, machine, shift); None when there is no data."""
        key = (canonical_day(day), machine, canonical_shift(shift))
        return self.cells.get(key)

    def rows(self) -> Iterator[tuple[date, list[float | None]]]:
        """Yield (date, cells) with cells ordered as ``columns``."""
        for day in self.dates:
            yield day, [self.cells[(day, machine, shift)] for machine, shift in self.columns]

    def to_frame(self, display: bool = False) -> pd.DataFrame:
        """Pivot as a DataFrame indexed by ISO date with (machine, shift) columns.

        With ``display`` the cells are formatted strings and None cells show
        the no-data marker; otherwise None becomes NaN.
        """
        columns = pd.MultiIndex.from_tuples(self.columns, names=["machine", "shift"])
        index = pd.Index([day_key(day) for day in self.dates], name="date")
        data = [cells for _, cells in self.rows()]
        if display:
            data = [[format_pct(pct) for pct in cells] for cells in data]
            return pd.DataFrame(data, index=index, columns=columns, dtype=object)
        data = [[float("nan") if pct is None else pct for pct in cells] for cells in data]
        return pd.DataFrame(data, index=index, columns=columns, dtype=float)


def resolve_range(start: Any, end: Any) -> tuple[date, date] | None:
    """Order-independent bounds; None if either bound is missing or invalid."""
    lo = canonical_day(start)
    hi = canonical_day(end)
    if lo is None or hi is None:
        return None
    return min(lo, hi), max(lo, hi)


def build_range_matrix(store: DateGroupedStore, start: Any, end: Any) -> RangeMatrix:
    """Build the A/B percentage matrix for dates between ``start`` and ``end``.

    Parameters
    ----------
    store : Loaded DateGroupedStore.
    start, end : Bounds as dates or recognised date strings, in either order.

    Returns
    -------
    RangeMatrix. Empty when a bound is missing/unparseable or the range
    holds no records.
    """
    bounds = resolve_range(start, end)
    if bounds is None:
        logger.debug("Range matrix requested without both bounds (%r, %r)", start, end)
        return RangeMatrix()
    lo, hi = bounds

    dates = store.dates_between(lo, hi)
    if not dates:
        logger.info("No data between %s and %s", day_key(lo), day_key(hi))
        return RangeMatrix(start=lo, end=hi)

    records = store.records_between(lo, hi)
    machines = tuple(sorted({r.machine for r in records}, key=machine_sort_key))

    df = pd.DataFrame(
        [
            {
                "date": r.date,
                "machine": r.machine,
                "shift_key": r.shift_key,
                "target": r.target,
                "actual": r.actual,
            }
            for r in records
        ]
    )
    df = df[df["shift_key"].isin(SHIFT_LABELS)]

    sums: dict[CellKey, float | None] = {}
    if not df.empty:
        grouped = df.groupby(["date", "machine", "shift_key"], sort=False)[["target", "actual"]].sum()
        for (day, machine, shift), row in grouped.iterrows():
            _, pct = calc_variance(float(row["actual"]), float(row["target"]))
            sums[(day, machine, shift)] = pct

    cells = {
        (day, machine, shift): sums.get((day, machine, shift))
        for day in dates
        for machine in machines
        for shift in SHIFT_LABELS
    }

    logger.info(
        "Built range matrix %s -> %s: %d dates x %d machines",
        day_key(lo), day_key(hi), len(dates), len(machines),
    )
    return RangeMatrix(
        start=lo,
        end=hi,
        dates=tuple(dates),
        machines=machines,
        cells=cells,
    )
