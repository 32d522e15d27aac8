"""
Simulated sheet data for the production dashboard.

Generates raw rows shaped like a Sheets API response (header first, string
cells) so the full load path can run without credentials. All values are
synthetic.
"""

import numpy as np
import pandas as pd

from .config import SHEET_HEADER

# ---------------------------------------------------------------------------
# Typical machine parameters (per-shift targets)
# ---------------------------------------------------------------------------
_MACHINE_PARAMS = {
    "M/C1": {"target": 12_000, "std": 600, "bias": 1.03},
    "M/C2": {"target": 12_000, "std": 900, "bias": 0.97},
    "M/C3": {"target": 10_000, "std": 400, "bias": 1.05},
    "M/C4": {"target": 10_000, "std": 700, "bias": 0.99},
    "M/C5": {"target": 8_000, "std": 500, "bias": 1.00},
    "M/C6": {"target": 8_000, "std": 800, "bias": 0.92},
}

_ITEMS = ["Cap", "Barrel", "Clip", "Grip", "Refill tube", ""]


def _format_date(day: pd.Timestamp, style: int) -> str:
    # Rotate through the three formats seen in department sheets
    if style == 0:
        return day.strftime("%Y-%m-%d")
    if style == 1:
        return day.strftime("%d-%m-%Y")
    return day.strftime("%m/%d/%Y")


def generate_sheet_rows(
    start: str = "2025-07-01",
    days: int = 14,
    machines: list[str] | None = None,
    seed: int = 42,
    with_noise: bool = True,
) -> list[list[str]]:
    """Generate simulated production rows for one department sheet.

    Each machine gets an A and a B shift row per day. With ``with_noise``
    the output also carries the defects real sheets have: one idle machine
    day with zero target, one unparseable quantity, one impossible date and
    rows whose trailing empty cells are omitted.
    """
    rng = np.random.default_rng(seed)
    machines = machines or list(_MACHINE_PARAMS)
    dates = pd.date_range(start, periods=days, freq="D")
    rows: list[list[str]] = [list(SHEET_HEADER)]

    for i, day in enumerate(dates):
        date_str = _format_date(day, i % 3)
        for machine in machines:
            params = _MACHINE_PARAMS.get(machine, {"target": 10_000, "std": 600, "bias": 1.0})
            for shift in ("A", "B"):
                target = params["target"]
                actual = max(round(target * params["bias"] + rng.normal(0, params["std"])), 0)
                variance = actual - target
                pct = variance / target * 100
                item = _ITEMS[int(rng.integers(len(_ITEMS)))]

                row = [
                    date_str,
                    machine,
                    shift,
                    str(target),
                    str(actual),
                    str(variance),
                    f"{pct:.2f}%",
                    item,
                ]
                if not item:
                    row = row[:-1]
                rows.append(row)

    if with_noise and len(rows) > 4:
        # idle machine: nothing planned, nothing produced
        idle = rows[-1]
        rows[-1] = idle[:3] + ["0", "0", "0", "", "Idle"]
        rows[2][4] = "n/a"
        rows.append(["32-13-2025", machines[0], "A", "100", "100"])

    return rows
