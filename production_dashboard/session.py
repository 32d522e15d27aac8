"""
Dashboard session state.

Holds what the front end needs between interactions (theme, open section,
loaded stores) so that none of it lives in module globals. The engine
functions never read from a session; the renderer passes them the store.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from .config import DEFAULT_THEME, SECTIONS, THEMES
from .store import DateGroupedStore

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Sequence[Sequence[Any]]]


@dataclass
class DashboardSession:
    theme: str = DEFAULT_THEME
    active_section: str | None = None
    error: str | None = None
    stores: dict[str, DateGroupedStore] = field(default_factory=dict)

    @property
    def page(self) -> str:
        return "home" if self.active_section is None else "section"

    @property
    def active_store(self) -> DateGroupedStore:
        if self.active_section is None:
            return DateGroupedStore()
        return self.stores.get(self.active_section, DateGroupedStore())

    @property
    def active_label(self) -> str:
        if self.active_section is None:
            return ""
        return SECTIONS[self.active_section]["label"]

    def toggle_theme(self) -> str:
        self.theme = "light" if self.theme == "dark" else "dark"
        return self.theme

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"theme must be one of {THEMES}, got {theme!r}")
        self.theme = theme

    def open_section(self, section_key: str, fetch: Fetcher) -> bool:
        """Fetch a section's rows and swap in a freshly built store.

        Unknown sections are recorded in ``error`` rather than raised.
        Returns True when the section was opened.
        """
        if section_key not in SECTIONS:
            self.error = f'No sheet config found for "{section_key}".'
            logger.warning("Unknown section requested: %s", section_key)
            return False

        self.error = None
        rows = fetch(section_key)
        # replaced whole, never merged into the previous store
        self.stores[section_key] = DateGroupedStore.from_rows(rows)
        self.active_section = section_key
        logger.info("Opened section %s with %d records", section_key, len(self.stores[section_key]))
        return True

    def go_home(self) -> None:
        self.active_section = None
        self.error = None
