"""
Best-machine leaderboard over a trailing window anchored at the latest
date in the data.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta

import pandas as pd

from .config import NO_DATA_LABEL, WINDOW_SIZES
from .kpis import calc_variance, format_pct, format_quantity
from .loaders.utils import day_key, machine_number
from .store import DateGroupedStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankedMachine:
    rank: int
    machine: str
    target: float
    actual: float
    percent: float | None

    @property
    def has_data(self) -> bool:
        return self.percent is not None


@dataclass(frozen=True)
class Leaderboard:
    """Machines ordered best to worst within [window_start, window_end]."""

    window_days: int
    window_start: date | None = None
    window_end: date | None = None
    entries: tuple[RankedMachine, ...] = ()

    @property
    def has_data(self) -> bool:
        return self.window_end is not None

    @property
    def label(self) -> str:
        if not self.has_data:
            return NO_DATA_LABEL
        return f"{day_key(self.window_start)} → {day_key(self.window_end)}"

    def to_frame(self) -> pd.DataFrame:
        """Display table: Rank, Machine, Performance %, Total Target, Total Actual."""
        columns = ["Rank", "Machine", "Performance %", "Total Target", "Total Actual"]
        rows = [
            [
                entry.rank,
                entry.machine,
                format_pct(entry.percent),
                format_quantity(entry.target),
                format_quantity(entry.actual),
            ]
            for entry in self.entries
        ]
        return pd.DataFrame(rows, columns=columns)


def window_bounds(latest: date, window_days: int) -> tuple[date, date]:
    """Inclusive [lo, hi] covering the last ``window_days`` calendar days."""
    return latest - timedelta(days=window_days - 1), latest


def _rank_key(entry: tuple[str, float, float, float | None]) -> tuple:
    machine, _, _, pct = entry
    # nulls last; higher percent first; then machine number and label
    return (
        pct is None,
        -pct if pct is not None else 0.0,
        machine_number(machine),
        machine,
    )


def rank_machines(store: DateGroupedStore, window_days: int) -> Leaderboard:
    """Rank machines by summed performance over the trailing window.

    Parameters
    ----------
    store : Loaded DateGroupedStore.
    window_days : One of config.WINDOW_SIZES.

    Returns
    -------
    Leaderboard. ``has_data`` is False when the store is empty.

    Raises
    ------
    ValueError
        If ``window_days`` is not a recognised window size.
    """
    if window_days not in WINDOW_SIZES:
        raise ValueError(f"window_days must be one of {WINDOW_SIZES}, got {window_days!r}")

    latest = store.latest_date()
    if latest is None:
        logger.warning("Empty store — no leaderboard for %d-day window", window_days)
        return Leaderboard(window_days=window_days)

    lo, hi = window_bounds(latest, window_days)
    records = store.records_between(lo, hi)

    df = pd.DataFrame(
        [{"machine": r.machine, "target": r.target, "actual": r.actual} for r in records],
        columns=["machine", "target", "actual"],
    )
    totals = df.groupby("machine", sort=False)[["target", "actual"]].sum()

    scored = []
    for machine, row in totals.iterrows():
        target = float(row["target"])
        actual = float(row["actual"])
        _, pct = calc_variance(actual, target)
        scored.append((machine, target, actual, pct))
    scored.sort(key=_rank_key)

    entries = tuple(
        RankedMachine(rank=i, machine=machine, target=target, actual=actual, percent=pct)
        for i, (machine, target, actual, pct) in enumerate(scored, start=1)
    )

    logger.info(
        "Ranked %d machines over %s → %s",
        len(entries), day_key(lo), day_key(hi),
    )
    return Leaderboard(window_days=window_days, window_start=lo, window_end=hi, entries=entries)


def best_machine(leaderboard: Leaderboard) -> RankedMachine | None:
    """Top entry with a defined percentage, if any."""
    for entry in leaderboard.entries:
        if entry.has_data:
            return entry
    return None
