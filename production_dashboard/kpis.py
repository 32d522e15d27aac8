"""
KPI computation functions — pure functions with no side effects.

Provides variance calculation, record aggregation, performance
classification and display formatting for percentages.
"""

import logging
import math
from typing import Iterable

from .config import NO_DATA, PERFORMANCE_COLORS
from .models import Aggregate, Record

logger = logging.getLogger(__name__)


def calc_variance(actual: float, target: float) -> tuple[float, float | None]:
    """Return (absolute_variance, pct_variance).

    pct_variance is None if target == 0.
    """
    absolute = actual - target
    if target == 0:
        return absolute, None
    pct = (absolute / target) * 100
    return absolute, pct


def aggregate_records(records: Iterable[Record]) -> Aggregate:
    """Sum target and actual over any subset of records.

    The percentage is recomputed from the sums; a summed target of 0 gives
    ``percent=None`` (undefined performance), never 0%.
    """
    target = 0.0
    actual = 0.0
    for record in records:
        target += record.target
        actual += record.actual
    _, pct = calc_variance(actual, target)
    return Aggregate(target=target, actual=actual, percent=pct)


def classify_performance(pct: float | None) -> str:
    """Return 'pos', 'neg', or 'none' for colouring a percentage cell.

    Logic
    -----
    - None / NaN (no target) -> 'none'
    - pct >= 0               -> 'pos'  (met or beat target)
    - pct < 0                -> 'neg'
    """
    if pct is None or math.isnan(pct):
        return "none"
    return "pos" if pct >= 0 else "neg"


def performance_css(value: float | None) -> str:
    """Inline CSS colouring a cell by the sign of ``value``; "" for no data."""
    color = PERFORMANCE_COLORS.get(classify_performance(value))
    if color is None:
        return ""
    return f"color: {color}; font-weight: 600"


def format_pct(pct: float | None, signed: bool = False) -> str:
    """Two-decimal percentage, or the no-data marker for None."""
    if pct is None:
        return NO_DATA
    if signed:
        return f"{pct:+.2f}%"
    return f"{pct:.2f}%"


def format_quantity(value: float) -> str:
    """Thousands-separated quantity; whole numbers drop the decimals."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"
