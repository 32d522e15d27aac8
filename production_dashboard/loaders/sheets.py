"""
Google Sheets data source.

Fetches the raw value grid of a sheet range through the Sheets v4 REST API.
Any failure (network, HTTP status, bad payload, missing key) is logged and
reported as an empty row list, so callers treat it like an empty sheet.
"""

import logging
from urllib.parse import quote

import requests

from ..config import (
    SECTIONS,
    SHEETS_API_KEY,
    SHEETS_API_URL,
    SHEETS_TIMEOUT_SECONDS,
    section_sheet,
)

logger = logging.getLogger(__name__)


def fetch_sheet_rows(
    sheet_id: str,
    cell_range: str,
    api_key: str | None = None,
    timeout: float = SHEETS_TIMEOUT_SECONDS,
) -> list[list]:
    """Return the ``values`` grid for ``cell_range`` (header row included)."""
    api_key = api_key or SHEETS_API_KEY
    if not sheet_id or not api_key:
        logger.warning("Sheet id or API key not configured — returning no rows")
        return []

    url = SHEETS_API_URL.format(sheet_id=sheet_id, cell_range=quote(cell_range, safe=""))
    try:
        response = requests.get(url, params={"key": api_key}, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError):
        logger.exception("Sheets fetch failed for range %s", cell_range)
        return []

    values = payload.get("values") if isinstance(payload, dict) else None
    if not values:
        logger.warning("Sheets range %s returned no values", cell_range)
        return []

    logger.info("Fetched %d rows from range %s", len(values), cell_range)
    return values


def fetch_section_rows(section_key: str, api_key: str | None = None) -> list[list]:
    """Fetch the configured sheet range for a dashboard section.

    Raises
    ------
    KeyError
        If ``section_key`` is not a configured section.
    """
    if section_key not in SECTIONS:
        raise KeyError(f"No sheet config found for {section_key!r}")
    cfg = section_sheet(section_key)
    return fetch_sheet_rows(cfg["sheet_id"], cfg["range"], api_key=api_key)
