"""
Unit tests for variance math and record aggregation.

Run: python -m pytest tests/test_kpis.py -v
"""

import pytest

from production_dashboard.config import NO_DATA
from production_dashboard.kpis import (
    aggregate_records,
    calc_variance,
    classify_performance,
    format_pct,
    format_quantity,
    performance_css,
)
from production_dashboard.transforms import normalise_row


class TestCalcVariance:

    def test_positive(self):
        absolute, pct = calc_variance(1050, 1000)
        assert absolute == 50
        assert abs(pct - 5.0) < 1e-9

    def test_zero_target_is_undefined(self):
        absolute, pct = calc_variance(40, 0)
        assert absolute == 40
        assert pct is None


# =====================================================================
# aggregate_records — summed target/actual with null percent policy
# =====================================================================

class TestAggregateRecords:

    def test_shift_scenario(self, record_factory):
        a = record_factory("2025-07-01", "MC-1", "A", 100, 110)
        b = record_factory("2025-07-01", "MC-1", "B", 100, 90)

        both = aggregate_records([a, b])
        assert both.target == 200
        assert both.actual == 200
        assert both.percent == 0
        assert both.has_data

        assert abs(aggregate_records([a]).percent - 10.0) < 1e-9
        assert abs(aggregate_records([b]).percent - (-10.0)) < 1e-9

    def test_percent_is_points_not_fraction(self):
        """Derived fresh from target/actual, ignoring the sheet's own PERCENT cell."""
        rec = normalise_row(["2025-07-01", "MC-1", "A", "1000", "1050", "", "0.05"])
        agg = aggregate_records([rec])
        assert agg.variance == 50
        assert abs(agg.percent - 5.0) < 1e-9

    @pytest.mark.parametrize("actual", [0, 40, 1_000_000])
    def test_zero_target_sum_is_null(self, record_factory, actual):
        rec = record_factory("2025-07-01", "MC-1", "A", 0, actual)
        agg = aggregate_records([rec, rec])
        assert agg.target == 0
        assert agg.percent is None
        assert not agg.has_data

    def test_empty_input(self):
        agg = aggregate_records([])
        assert agg.target == 0
        assert agg.actual == 0
        assert agg.percent is None

    def test_accepts_generator(self, record_factory):
        records = (record_factory("2025-07-01", f"MC-{i}", "A", 10, 12) for i in range(3))
        agg = aggregate_records(records)
        assert agg.target == 30
        assert agg.actual == 36
        assert abs(agg.percent - 20.0) < 1e-9


class TestFormatting:

    def test_classify(self):
        assert classify_performance(None) == "none"
        assert classify_performance(0.0) == "pos"
        assert classify_performance(-0.01) == "neg"
        assert classify_performance(float("nan")) == "none"

    def test_performance_css(self):
        assert "#22c55e" in performance_css(0.0)
        assert "#ef4444" in performance_css(-3)
        assert performance_css(None) == ""
        assert performance_css(float("nan")) == ""

    def test_format_pct(self):
        assert format_pct(None) == NO_DATA
        assert format_pct(5) == "5.00%"
        assert format_pct(-2.5) == "-2.50%"
        assert format_pct(5, signed=True) == "+5.00%"
        assert format_pct(0.0) != format_pct(None)

    def test_format_quantity(self):
        assert format_quantity(1050.0) == "1,050"
        assert format_quantity(-10.0) == "-10"
        assert format_quantity(12.5) == "12.50"
