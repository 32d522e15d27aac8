"""
Production Dashboard — End-to-end analytics pipeline.

Loads a department sheet (or simulated rows when no sheet is configured),
builds every dashboard view and prints smoke-test summaries.

Usage:
    python main.py [section]
"""

import logging
import sys

from production_dashboard.config import SECTIONS, WINDOW_SIZES, section_has_sheet
from production_dashboard.dashboard import (
    get_available_dates,
    get_matrix_view,
    get_ranking_view,
    get_section_overview,
    get_shift_breakdowns,
    get_table_frame,
    get_table_view,
    load_store,
)
from production_dashboard.loaders import fetch_section_rows
from production_dashboard.simulator import generate_sheet_rows

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main(section: str = "imd") -> None:
    """Run the full analytics pipeline and print smoke-test outputs."""

    print("=" * 70)
    print(f"  PRODUCTION DASHBOARD — {SECTIONS[section]['label']}")
    print("  Analytics Pipeline Smoke Test")
    print("=" * 70)
    print()

    # ------------------------------------------------------------------
    # 1. Load source data
    # ------------------------------------------------------------------
    print("[ 1 ] LOADING SOURCE DATA")
    print("-" * 40)

    rows = fetch_section_rows(section) if section_has_sheet(section) else []
    if not rows:
        logger.warning("No sheet rows for %s, using simulated data", section)
        rows = generate_sheet_rows()
    store = load_store(rows)
    dates = get_available_dates(store)
    print(f"\n{len(rows) - 1} raw rows -> {len(store)} records over {len(dates)} dates")

    if store.is_empty:
        print("\nNo data available.")
        return

    # ------------------------------------------------------------------
    # 2. Dashboard outputs
    # ------------------------------------------------------------------
    print("\n")
    print("[ 2 ] DASHBOARD OUTPUTS")
    print("-" * 40)

    latest = dates[-1]
    print(f"\nProduction table — {latest}:")
    print(get_table_frame(get_table_view(store, latest)).to_string(index=False))

    for shift, breakdown in get_shift_breakdowns(store, latest).items():
        print(f"\nShift {shift} breakdown:")
        if breakdown.is_empty:
            print("  No data")
        for s in breakdown.slices:
            print(f"  {s.label:24s} {s.fraction:6.1%}")

    start = dates[max(len(dates) - 3, 0)]
    print(f"\nA/B matrix {start} -> {latest}:")
    print(get_matrix_view(store, start, latest).to_frame(display=True).to_string())

    for days in WINDOW_SIZES[:2]:
        board = get_ranking_view(store, days)
        print(f"\nBest machines, last {days} days ({board.label}):")
        print(board.to_frame().to_string(index=False))

    print("\nSection overview:")
    for key, value in get_section_overview(store).items():
        print(f"  {key:12s} | {value}")

    print("\n" + "=" * 70)
    print("  Pipeline complete.")
    print("=" * 70)


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "imd")
