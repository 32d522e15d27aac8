"""
Proportional breakdown of absolute variances for pie charts.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from .kpis import calc_variance, format_pct, format_quantity
from .loaders.utils import machine_sort_key
from .models import Record

logger = logging.getLogger(__name__)

LABEL_MODES = ("value", "percent")


@dataclass(frozen=True)
class BreakdownSlice:
    machine: str
    value: float
    fraction: float
    percent: float | None
    label: str

    @property
    def positive(self) -> bool:
        """True when the machine met or beat its target."""
        return self.percent is not None and self.percent >= 0


@dataclass(frozen=True)
class Breakdown:
    """Slices in drawing order (largest fraction first)."""

    slices: tuple[BreakdownSlice, ...] = ()
    total: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.slices

    def legend(self) -> list[BreakdownSlice]:
        """Slices re-sorted by machine number for the legend."""
        return sorted(self.slices, key=lambda s: machine_sort_key(s.machine))


def _slice_label(machine: str, value: float, pct: float | None, label_mode: str) -> str:
    if label_mode == "percent":
        return f"{machine} ({format_pct(pct, signed=True)})"
    return f"{machine} ({format_quantity(value)})"


def build_breakdown(records: Iterable[Record], label_mode: str = "value") -> Breakdown:
    """Split the absolute variance of each record into pie fractions.

    Records whose actual equals their target contribute nothing and are
    dropped. Fractions sum to 1 whenever anything survives.

    Parameters
    ----------
    records : Typically one shift on one date.
    label_mode : "value" labels slices with |actual - target|,
                 "percent" with the signed percent versus target.
    """
    if label_mode not in LABEL_MODES:
        raise ValueError(f"label_mode must be one of {LABEL_MODES}, got {label_mode!r}")

    items = []
    for record in records:
        value = abs(record.actual - record.target)
        if value == 0:
            continue
        _, pct = calc_variance(record.actual, record.target)
        items.append((record.machine, value, pct))

    total = sum(value for _, value, _ in items)
    divisor = total or 1

    slices = [
        BreakdownSlice(
            machine=machine,
            value=value,
            fraction=value / divisor,
            percent=pct,
            label=_slice_label(machine, value, pct, label_mode),
        )
        for machine, value, pct in items
    ]
    slices.sort(key=lambda s: s.fraction, reverse=True)

    if not slices:
        logger.debug("Breakdown has no non-zero variances")
    return Breakdown(slices=tuple(slices), total=total)
