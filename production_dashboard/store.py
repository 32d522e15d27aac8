"""
Date-grouped store: the immutable day -> records mapping that every view
queries.
"""

import logging
from datetime import date
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Sequence

import pandas as pd

from .loaders.utils import canonical_day
from .models import Record
from .transforms import build_records, records_to_frame

logger = logging.getLogger(__name__)


class DateGroupedStore:
    """Records grouped by canonical day.

    Days iterate in chronological order; records keep their load order
    within a day. A store is built once per dataset load and never mutated.
    """

    def __init__(self, records: Iterable[Record] = ()):
        grouped: dict[date, list[Record]] = {}
        for record in records:
            grouped.setdefault(record.date, []).append(record)

        self._days = tuple(sorted(grouped))
        self._by_day = MappingProxyType(
            {day: tuple(grouped[day]) for day in self._days}
        )
        self._count = sum(len(v) for v in self._by_day.values())

    @classmethod
    def from_records(cls, records: Iterable[Record]) -> "DateGroupedStore":
        store = cls(records)
        logger.info("Built store with %d records over %d dates", len(store), len(store.dates()))
        return store

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Any]], has_header: bool = True) -> "DateGroupedStore":
        """Normalise raw sheet rows (header first) and group them by day."""
        return cls.from_records(build_records(rows, has_header=has_header))

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[date]:
        return iter(self._days)

    def __contains__(self, day: object) -> bool:
        return canonical_day(day) in self._by_day

    def __repr__(self) -> str:
        return f"DateGroupedStore(dates={len(self._days)}, records={self._count})"

    @property
    def is_empty(self) -> bool:
        return not self._days

    def dates(self) -> tuple[date, ...]:
        """All canonical days, ascending."""
        return self._days

    def latest_date(self) -> date | None:
        return self._days[-1] if self._days else None

    def records_for(self, day: Any) -> tuple[Record, ...]:
        """Records for one day; accepts a date or any recognised date string."""
        key = canonical_day(day)
        if key is None:
            return ()
        return self._by_day.get(key, ())

    def records_between(self, lo: date, hi: date) -> list[Record]:
        """All records dated within [lo, hi], chronologically."""
        out = []
        for day in self._days:
            if lo <= day <= hi:
                out.extend(self._by_day[day])
        return out

    def dates_between(self, lo: date, hi: date) -> list[date]:
        return [day for day in self._days if lo <= day <= hi]

    def all_records(self) -> list[Record]:
        return self.records_between(self._days[0], self._days[-1]) if self._days else []

    def to_frame(self) -> pd.DataFrame:
        """Every record as one DataFrame row (see transforms.RECORD_COLUMNS)."""
        return records_to_frame(self.all_records())
