"""Domain records shared by every aggregation step."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .loaders.utils import canonical_shift


@dataclass(frozen=True)
class Record:
    """One normalised production observation for a date, machine and shift.

    ``variance`` and ``percent`` carry the sheet's EXTRA/LESS and PERCENT
    columns when they parse, otherwise values derived from target/actual.
    ``percent`` is always None when the target is 0. Aggregations always
    recompute percent from summed quantities.
    """

    date: date
    machine: str
    shift: str
    target: float
    actual: float
    variance: float
    percent: float | None
    items: str = ""

    @property
    def shift_key(self) -> str:
        return canonical_shift(self.shift)

    def as_dict(self) -> dict:
        return {
            "date": self.date,
            "machine": self.machine,
            "shift": self.shift,
            "shift_key": self.shift_key,
            "target": self.target,
            "actual": self.actual,
            "variance": self.variance,
            "percent": self.percent,
            "items": self.items,
        }


@dataclass(frozen=True)
class Aggregate:
    """Summed target/actual for a group of records.

    ``percent`` is None exactly when the summed target is 0.
    """

    target: float
    actual: float
    percent: float | None

    @property
    def variance(self) -> float:
        return self.actual - self.target

    @property
    def has_data(self) -> bool:
        return self.percent is not None
