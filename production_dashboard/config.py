"""
Configuration: dashboard sections, sheet locations, recognised labels,
constants.

SECTIONS maps each production department to its card label and emoji.
Sheet ids are read from the environment so that keys never live in the
source tree.
"""

import os

# ---------------------------------------------------------------------------
# Data source — Google Sheets API
# ---------------------------------------------------------------------------
SHEETS_API_URL = "https://sheets.googleapis.com/v4/spreadsheets/{sheet_id}/values/{cell_range}"
SHEETS_API_KEY = os.getenv("GOOGLE_SHEETS_API_KEY", "")
SHEETS_TIMEOUT_SECONDS = float(os.getenv("SHEETS_TIMEOUT_SECONDS", "15"))

# Spreadsheet shared by all departments unless a section overrides it
DEFAULT_SHEET_ID = os.getenv("PRODUCTION_SHEET_ID", "")

# Expected header row: DATE | MACHINE | SHIFT | TARGET | ACTUAL | EXTRA/LESS | PERCENT | ITEMS
SHEET_HEADER = [
    "DATE",
    "MACHINE",
    "SHIFT",
    "TARGET",
    "ACTUAL",
    "EXTRA/LESS",
    "PERCENT",
    "ITEMS",
]
ROW_WIDTH = len(SHEET_HEADER)

# ---------------------------------------------------------------------------
# Dashboard identity
# ---------------------------------------------------------------------------
DASHBOARD_TITLE = "REPORT OF PRODUCTION"
COMPANY_NAME = "Supra Pens"

# ---------------------------------------------------------------------------
# Section registry
# ---------------------------------------------------------------------------
# key -> label, hint, emoji shown on the home page cards
SECTIONS: dict[str, dict] = {
    "imd": {"label": "IMD", "hint": "View report →", "emoji": "🏭"},
    "refill": {"label": "REFILL", "hint": "View report →", "emoji": "🖊️"},
    "foil": {"label": "FOIL", "hint": "View report →", "emoji": "✨"},
    "extrution": {"label": "EXTRUTION", "hint": "View report →", "emoji": "⚙️"},
}


def section_sheet(section_key: str) -> dict[str, str]:
    """Return {"sheet_id", "range"} for a section.

    PRODUCTION_SHEET_ID_<KEY> and PRODUCTION_SHEET_RANGE_<KEY> override the
    shared sheet id and the default "<LABEL>!A1:H" range.
    """
    section = SECTIONS[section_key]
    env_key = section_key.upper()
    return {
        "sheet_id": os.getenv(f"PRODUCTION_SHEET_ID_{env_key}", DEFAULT_SHEET_ID),
        "range": os.getenv(
            f"PRODUCTION_SHEET_RANGE_{env_key}", f"{section['label']}!A1:H"
        ),
    }


def section_has_sheet(section_key: str) -> bool:
    """True when a sheet id is configured for the section, shared or its own."""
    return bool(section_sheet(section_key)["sheet_id"])


# ---------------------------------------------------------------------------
# Recognised values
# ---------------------------------------------------------------------------
# Trailing windows offered by the leaderboard, in days
WINDOW_SIZES = (10, 15, 30, 60)
DEFAULT_WINDOW_DAYS = 10

SHIFT_LABELS = ("A", "B")
OTHER_SHIFT = "OTHER"

# ---------------------------------------------------------------------------
# Display constants
# ---------------------------------------------------------------------------
NO_DATA = "—"
NO_DATA_LABEL = "No data"
THEMES = ("dark", "light")
DEFAULT_THEME = "dark"

# Cell colours keyed by classify_performance(); "none" stays unstyled
POS_COLOR = "#22c55e"
NEG_COLOR = "#ef4444"
PERFORMANCE_COLORS = {"pos": POS_COLOR, "neg": NEG_COLOR}

PIE_PALETTE = [
    "#60a5fa",
    "#34d399",
    "#fbbf24",
    "#f87171",
    "#a78bfa",
    "#22d3ee",
    "#fb7185",
    "#93c5fd",
    "#f59e0b",
    "#38bdf8",
]
