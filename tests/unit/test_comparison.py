"""Unit tests for period-over-period comparison"""

import random
import pytest
from datetime import date
from forecast_analytics.domain.comparison import (
    SimulatedPreviousPeriod,
    previous_period_date,
    build_comparison_points,
    summarize_comparison,
    compare_periods,
)
from forecast_analytics.domain.models import ComparisonPoint
from forecast_analytics.domain.exceptions import EmptySeriesError, DivisionByZeroError


CURRENT_DATA = [
    {"date": "2026-03-31", "revenue": 1000, "expenses": 400},
    {"date": "2026-04-15", "revenue": 2000, "expenses": 900},
    {"date": "2026-05-01", "revenue": 1500, "expenses": 600},
]


def _point(current: float, previous: float) -> ComparisonPoint:
    return ComparisonPoint(
        date=date(2026, 1, 1),
        current_value=current,
        previous_value=previous,
        display_date="Jan 01",
        previous_display_date="Dec 01",
        previous_date=date(2025, 12, 1),
    )


def test_previous_period_dates():
    assert previous_period_date(date(2026, 5, 15), "month") == date(2026, 4, 15)
    assert previous_period_date(date(2026, 5, 15), "quarter") == date(2026, 2, 15)
    assert previous_period_date(date(2026, 5, 15), "year") == date(2025, 5, 15)


def test_previous_period_clamps_to_month_end():
    assert previous_period_date(date(2026, 3, 31), "month") == date(2026, 2, 28)
    assert previous_period_date(date(2024, 5, 31), "quarter") == date(2024, 2, 29)
    assert previous_period_date(date(2024, 2, 29), "year") == date(2023, 2, 28)
    assert previous_period_date(date(2026, 1, 10), "month") == date(2025, 12, 10)


def test_unknown_granularity():
    with pytest.raises(ValueError):
        previous_period_date(date(2026, 1, 1), "week")
    with pytest.raises(ValueError):
        build_comparison_points(CURRENT_DATA, "revenue", granularity="week")


def test_simulated_previous_values_within_factor_range():
    source = SimulatedPreviousPeriod(rng=random.Random(7))

    for _ in range(200):
        previous = source(date(2026, 1, 1), "revenue", 1000)
        assert 700 <= previous <= 1300
        assert previous == int(previous)


def test_seeded_points_are_reproducible():
    first = build_comparison_points(CURRENT_DATA, "revenue", previous_source=SimulatedPreviousPeriod(random.Random(42)))
    second = build_comparison_points(CURRENT_DATA, "revenue", previous_source=SimulatedPreviousPeriod(random.Random(42)))

    assert first == second


def test_seeded_values_match_factor_draws():
    """Exact values: round(current * factor) with factor = 0.7 + u * (1.3 - 0.7) per draw u"""
    draws = random.Random(3)
    expected = [round(r["revenue"] * (0.7 + draws.random() * (1.3 - 0.7))) for r in CURRENT_DATA]

    points = build_comparison_points(CURRENT_DATA, "revenue", previous_source=SimulatedPreviousPeriod(random.Random(3)))

    assert [p.previous_value for p in points] == expected


def test_switching_granularity_only_changes_previous_dates():
    month = compare_periods(CURRENT_DATA, "revenue", "month", previous_source=SimulatedPreviousPeriod(random.Random(1)))
    year = compare_periods(CURRENT_DATA, "revenue", "year", previous_source=SimulatedPreviousPeriod(random.Random(1)))

    assert [p.previous_value for p in month.points] == [p.previous_value for p in year.points]
    assert month.points[0].previous_display_date == "Feb 28"
    assert year.points[0].previous_display_date == "Mar 31"
    assert month.points[0].display_date == "Mar 31"


def test_deterministic_lookup_source():
    """A history lookup can replace the simulation without changing the interface"""
    history = {date(2026, 3, 31): 800, date(2026, 4, 15): 2500, date(2026, 5, 1): 1200}

    def lookup(current_date, key, current_value):
        return history[current_date]

    result = compare_periods(CURRENT_DATA, "revenue", previous_source=lookup)

    assert [p.previous_value for p in result.points] == [800, 2500, 1200]
    assert result.summary.current_total == 4500
    assert result.summary.previous_total == 4500
    assert result.summary.percent_change == 0
    assert result.summary.is_positive is True


def test_secondary_values():
    points = build_comparison_points(
        CURRENT_DATA,
        "revenue",
        secondary_value_key="expenses",
        previous_source=lambda d, key, value: value / 2,
    )

    assert points[1].secondary_current_value == 900
    assert points[1].secondary_previous_value == 450
    assert points[1].previous_value == 1000


def test_datetime_string_dates():
    data = [{"date": "2026-03-31T00:00:00Z", "revenue": 1000}]

    points = build_comparison_points(data, "revenue", granularity="month", previous_source=lambda d, k, v: v)

    assert points[0].date == date(2026, 3, 31)
    assert points[0].previous_date == date(2026, 2, 28)
    assert points[0].display_date == "Mar 31"


def test_records_can_be_objects(daily_series):
    points = build_comparison_points(daily_series(3), "balance", previous_source=lambda d, k, v: v)
    assert [p.previous_value for p in points] == [1000, 1000, 1000]


def test_summary_percent_change():
    summary = summarize_comparison([_point(1200, 1000), _point(300, 500)])

    assert summary.current_total == 1500
    assert summary.previous_total == 1500
    assert summary.percent_change == 0

    summary = summarize_comparison([_point(1100, 1000), _point(1100, 1000)])
    assert summary.percent_change == pytest.approx((2200 - 2000) / 2000 * 100)
    assert summary.is_positive is True

    summary = summarize_comparison([_point(500, 1000)])
    assert summary.percent_change == -50
    assert summary.is_positive is False


def test_summary_zero_previous_total():
    with pytest.raises(DivisionByZeroError):
        summarize_comparison([_point(100, 0), _point(50, 0)])


def test_compare_periods_zero_values():
    """All-zero current values synthesize a zero previous total"""
    data = [{"date": "2026-01-01", "revenue": 0}]
    with pytest.raises(DivisionByZeroError):
        compare_periods(data, "revenue", previous_source=SimulatedPreviousPeriod(random.Random(0)))


def test_summary_empty():
    with pytest.raises(EmptySeriesError):
        summarize_comparison([])
