"""
Shared utilities for data ingestion: date normalisation, machine ordering,
shift bucketing, numeric coercion.
"""

import logging
import math
import re
from datetime import date, datetime
from typing import Any

import pandas as pd

from ..config import OTHER_SHIFT, SHIFT_LABELS

logger = logging.getLogger(__name__)

_ISO_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_US_SLASH_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_DAY_FIRST_RE = re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$")
_DIGITS_RE = re.compile(r"\d+")


def canonical_day(val: Any) -> date | None:
    """Convert a sheet date cell to a calendar day.

    String formats, in priority order:
        YYYY-MM-DD   leading 4-digit group
        MM/DD/YYYY   slash separator
        DD-MM-YYYY   dash separator, short leading group

    Native date/datetime/Timestamp values (workbook cells) are truncated to
    the day. Returns None for anything unparseable, including structurally
    valid strings that name an impossible day such as 2025-02-30.
    """
    if val is None or val is pd.NaT:
        return None
    # pd.Timestamp is a datetime subclass
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    if not isinstance(val, str):
        return None

    s = val.strip()
    m = _ISO_RE.match(s)
    if m:
        year, month, day = m.groups()
    else:
        m = _US_SLASH_RE.match(s)
        if m:
            month, day, year = m.groups()
        else:
            m = _DAY_FIRST_RE.match(s)
            if not m:
                return None
            day, month, year = m.groups()

    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        logger.debug("Structurally valid but impossible date: %s", s)
        return None


def day_key(day: date) -> str:
    """Sortable ISO key (YYYY-MM-DD) for a canonical day."""
    return day.isoformat()


def machine_number(label: Any) -> int | float:
    """First integer embedded in a machine label, or +inf when there is none.

    "MC-01" -> 1, "M/C2" -> 2, "Machine 12" -> 12, "Press" -> inf.
    """
    if label is None:
        return math.inf
    m = _DIGITS_RE.search(str(label))
    return int(m.group()) if m else math.inf


def machine_sort_key(label: Any) -> tuple[int | float, str]:
    """Natural order for machines: embedded number, then the label itself."""
    return machine_number(label), "" if label is None else str(label)


def canonical_shift(val: Any) -> str:
    """Bucket a shift label into "A", "B" or OTHER (trimmed, case-insensitive)."""
    s = "" if val is None else str(val).strip().upper()
    return s if s in SHIFT_LABELS else OTHER_SHIFT


def safe_float(val: Any) -> float | None:
    """Coerce a value to float, returning None for non-numeric values."""
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, str):
        # Skip formula strings and text labels
        val = val.strip().replace(",", "")
        if val.startswith("=") or not val:
            return None
        # Handle percentage strings like "5.5%"
        if val.endswith("%"):
            val = val[:-1].strip()
    try:
        result = float(val)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(result):
        return None
    return result


def coerce_quantity(val: Any) -> float:
    """Quantity cell to a finite number >= 0; anything else becomes 0."""
    result = safe_float(val)
    if result is None or result < 0:
        return 0.0
    return result


def clean_text(val: Any) -> str:
    """Missing cells become "", everything else its trimmed string form."""
    if val is None:
        return ""
    return str(val).strip()
