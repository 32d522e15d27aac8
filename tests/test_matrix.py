"""
Unit tests for the A/B range matrix.

Run: python -m pytest tests/test_matrix.py -v
"""

import math
from datetime import date

import pytest

from production_dashboard.config import NO_DATA
from production_dashboard.matrix import build_range_matrix, resolve_range
from production_dashboard.store import DateGroupedStore


class TestResolveRange:

    def test_order_independent(self):
        assert resolve_range("2025-07-03", "2025-07-01") == (date(2025, 7, 1), date(2025, 7, 3))

    @pytest.mark.parametrize("start,end", [("", "2025-07-01"), ("2025-07-01", None), ("x", "y")])
    def test_missing_bound(self, start, end):
        assert resolve_range(start, end) is None


class TestBuildRangeMatrix:

    def test_density(self, sample_store):
        """Only dates with data become rows, but every machine gets A and B columns."""
        m = build_range_matrix(sample_store, "2025-07-01", "2025-07-03")
        assert m.dates == (date(2025, 7, 1), date(2025, 7, 3))
        assert m.machines == ("MC-1", "MC-2", "MC-10")
        assert len(m.columns) == 6
        assert len(m.cells) == 2 * 3 * 2

        rows = list(m.rows())
        assert len(rows) == 2
        assert all(len(cells) == 6 for _, cells in rows)

    def test_cell_values(self, sample_store):
        m = build_range_matrix(sample_store, "2025-07-01", "2025-07-03")
        assert abs(m.cell("2025-07-01", "MC-1", "A") - 10.0) < 1e-9
        assert abs(m.cell("2025-07-01", "MC-1", "B") - (-10.0)) < 1e-9
        assert abs(m.cell("2025-07-01", "MC-2", "A") - (-10.0)) < 1e-9
        assert abs(m.cell("2025-07-03", "MC-10", "A") - 25.0) < 1e-9

    def test_null_cells(self, sample_store):
        m = build_range_matrix(sample_store, "2025-07-01", "2025-07-03")
        # no contributing records
        assert m.cell("2025-07-01", "MC-10", "A") is None
        assert m.cell("2025-07-03", "MC-1", "B") is None
        # zero summed target
        assert m.cell("2025-07-03", "MC-2", "B") is None
        # 'other' shift rows never reach a column
        assert m.cell("2025-07-03", "MC-2", "A") is None

    def test_swapped_bounds_and_formats(self, sample_store):
        a = build_range_matrix(sample_store, "2025-07-03", "2025-07-01")
        b = build_range_matrix(sample_store, "07/01/2025", "03-07-2025")
        assert a == b

    def test_machines_limited_to_range(self, sample_store):
        m = build_range_matrix(sample_store, "2025-07-01", "2025-07-01")
        assert m.machines == ("MC-1", "MC-2")

    def test_machine_with_only_other_shift_still_gets_columns(self, record_factory):
        store = DateGroupedStore.from_records([
            record_factory("2025-07-01", "MC-1", "A", 10, 10),
            record_factory("2025-07-01", "MC-5", "night", 10, 12),
        ])
        m = build_range_matrix(store, "2025-07-01", "2025-07-01")
        assert m.machines == ("MC-1", "MC-5")
        assert m.cell("2025-07-01", "MC-5", "A") is None
        assert m.cell("2025-07-01", "MC-5", "B") is None

    def test_sums_across_records_in_cell(self, record_factory):
        store = DateGroupedStore.from_records([
            record_factory("2025-07-01", "MC-1", "A", 100, 150),
            record_factory("2025-07-01", "MC-1", " a", 100, 50),
            record_factory("2025-07-01", "MC-1", "A", 0, 30),
        ])
        m = build_range_matrix(store, "2025-07-01", "2025-07-01")
        assert abs(m.cell("2025-07-01", "MC-1", "A") - 15.0) < 1e-9

    @pytest.mark.parametrize("start,end", [("", "2025-07-03"), ("2025-07-01", ""), (None, None)])
    def test_missing_bound_gives_empty(self, sample_store, start, end):
        m = build_range_matrix(sample_store, start, end)
        assert m.is_empty
        assert m.dates == ()
        assert m.machines == ()

    def test_range_without_data(self, sample_store):
        m = build_range_matrix(sample_store, "2025-08-01", "2025-08-31")
        assert m.is_empty
        assert m.start == date(2025, 8, 1)

    def test_empty_store(self):
        assert build_range_matrix(DateGroupedStore(), "2025-07-01", "2025-07-03").is_empty

    def test_to_frame(self, sample_store):
        m = build_range_matrix(sample_store, "2025-07-01", "2025-07-03")
        df = m.to_frame()
        assert list(df.index) == ["2025-07-01", "2025-07-03"]
        assert df.columns.names == ["machine", "shift"]
        assert list(df.columns[:2]) == [("MC-1", "A"), ("MC-1", "B")]
        assert abs(df.loc["2025-07-01", ("MC-1", "A")] - 10.0) < 1e-9
        assert math.isnan(df.loc["2025-07-03", ("MC-1", "A")])

        shown = m.to_frame(display=True)
        assert shown.loc["2025-07-01", ("MC-1", "A")] == "10.00%"
        assert shown.loc["2025-07-03", ("MC-1", "A")] == NO_DATA
