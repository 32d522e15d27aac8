"""
Unit tests for the trailing-window machine leaderboard.

Run: python -m pytest tests/test_ranking.py -v
"""

from datetime import date

import pytest

from production_dashboard.config import NO_DATA, NO_DATA_LABEL
from production_dashboard.ranking import best_machine, rank_machines, window_bounds
from production_dashboard.store import DateGroupedStore


@pytest.fixture
def window_store(record_factory):
    """Latest date 2025-07-10; MC-1 at +8%, MC-2 with zero target in-window."""
    return DateGroupedStore.from_records([
        record_factory("2025-06-20", "MC-2", "A", 100, 500),  # outside a 10-day window
        record_factory("2025-07-01", "MC-1", "A", 100, 104),
        record_factory("2025-07-05", "MC-2", "A", 0, 30),
        record_factory("2025-07-10", "MC-1", "B", 100, 112),
        record_factory("2025-07-10", "MC-2", "B", 0, 0),
    ])


class TestWindowBounds:

    def test_inclusive_window(self):
        assert window_bounds(date(2025, 7, 10), 10) == (date(2025, 7, 1), date(2025, 7, 10))

    def test_crosses_month(self):
        assert window_bounds(date(2025, 3, 1), 15) == (date(2025, 2, 15), date(2025, 3, 1))


class TestRankMachines:

    def test_null_percent_ranked_last(self, window_store):
        board = rank_machines(window_store, 10)
        assert board.has_data
        assert board.window_start == date(2025, 7, 1)
        assert board.window_end == date(2025, 7, 10)
        assert [(e.rank, e.machine) for e in board.entries] == [(1, "MC-1"), (2, "MC-2")]
        assert abs(board.entries[0].percent - 8.0) < 1e-9
        assert board.entries[1].percent is None
        assert not board.entries[1].has_data

    def test_wider_window_pulls_in_older_rows(self, window_store):
        board = rank_machines(window_store, 30)
        mc2 = next(e for e in board.entries if e.machine == "MC-2")
        assert mc2.target == 100
        assert mc2.actual == 530
        assert board.entries[0].machine == "MC-2"

    def test_sums_across_shifts_and_dates(self, window_store):
        board = rank_machines(window_store, 10)
        mc1 = board.entries[0]
        assert mc1.target == 200
        assert mc1.actual == 216

    def test_descending_with_machine_number_tiebreak(self, record_factory):
        store = DateGroupedStore.from_records([
            record_factory("2025-07-10", "MC-10", "A", 100, 110),
            record_factory("2025-07-10", "MC-2", "A", 100, 110),
            record_factory("2025-07-10", "MC-3", "A", 100, 90),
            record_factory("2025-07-10", "Press", "A", 0, 10),
            record_factory("2025-07-10", "MC-1", "A", 0, 10),
            record_factory("2025-07-10", "MC-4", "A", 100, 100),
        ])
        board = rank_machines(store, 10)
        assert [e.machine for e in board.entries] == ["MC-2", "MC-10", "MC-4", "MC-3", "MC-1", "Press"]
        assert [e.rank for e in board.entries] == [1, 2, 3, 4, 5, 6]

    def test_deterministic(self, window_store):
        assert rank_machines(window_store, 15) == rank_machines(window_store, 15)

    def test_empty_store_reports_no_data(self):
        board = rank_machines(DateGroupedStore(), 10)
        assert not board.has_data
        assert board.entries == ()
        assert board.label == NO_DATA_LABEL
        assert best_machine(board) is None

    @pytest.mark.parametrize("days", [0, 7, 31, "10"])
    def test_unknown_window_rejected(self, window_store, days):
        with pytest.raises(ValueError):
            rank_machines(window_store, days)

    def test_label_and_frame(self, window_store):
        board = rank_machines(window_store, 10)
        assert board.label == "2025-07-01 → 2025-07-10"
        df = board.to_frame()
        assert list(df["Rank"]) == [1, 2]
        assert list(df["Performance %"]) == ["8.00%", NO_DATA]
        assert list(df["Total Target"]) == ["200", "0"]

    def test_best_machine_skips_null(self, record_factory):
        store = DateGroupedStore.from_records([
            record_factory("2025-07-10", "MC-1", "A", 0, 5),
        ])
        assert best_machine(rank_machines(store, 10)) is None
