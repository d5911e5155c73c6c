"""Unit tests for KPI derivation"""

import pytest
from datetime import date, timedelta
from forecast_analytics.domain.models import DailyForecastPoint, ForecastKpiPayload
from forecast_analytics.domain.kpis import (
    DAYS_INVENTORY_OUTSTANDING,
    calculate_current_and_projected_balance,
    calculate_monthly_burn_rate,
    calculate_cash_conversion_cycle,
    calculate_runway_days,
    classify_cash_conversion_cycle,
    classify_runway,
    derive_kpis,
)
from forecast_analytics.domain.exceptions import EmptySeriesError, InsufficientDataError, DivisionByZeroError


def _ramp(days: int) -> list[DailyForecastPoint]:
    return [
        DailyForecastPoint(date=date(2026, 1, 1) + timedelta(days=i), balance=1000 + i * 10, inflows=0, outflows=0, confidence=90)
        for i in range(days)
    ]


def test_projection_uses_index_29():
    """Projected balance is the 30th point, not the last"""
    current, projected = calculate_current_and_projected_balance(_ramp(90))

    assert current == 1000
    assert projected == 1290  # 1000 + 29 * 10


def test_projection_exactly_30_points():
    current, projected = calculate_current_and_projected_balance(_ramp(30))
    assert projected == 1290


def test_projection_insufficient_data():
    with pytest.raises(InsufficientDataError):
        calculate_current_and_projected_balance(_ramp(29))


def test_projection_empty_series():
    with pytest.raises(EmptySeriesError):
        calculate_current_and_projected_balance([])


def test_burn_rate_average_of_three_months(monthly_series):
    """Example: three months of 300 outflows -> burn rate 300"""
    assert calculate_monthly_burn_rate(monthly_series([300, 300, 300])) == 300


def test_burn_rate_ignores_months_after_window(monthly_series):
    assert calculate_monthly_burn_rate(monthly_series([100, 200, 300, 10_000])) == 200


def test_burn_rate_is_positive_magnitude(monthly_series):
    assert calculate_monthly_burn_rate(monthly_series([-300, -300, -300])) == 300


def test_burn_rate_insufficient_months(monthly_series):
    with pytest.raises(InsufficientDataError):
        calculate_monthly_burn_rate(monthly_series([300, 300]))


def test_cash_conversion_cycle_uses_fixed_dio():
    assert DAYS_INVENTORY_OUTSTANDING == 30
    assert calculate_cash_conversion_cycle(dso=40, dpo=25) == 45
    assert calculate_cash_conversion_cycle(dso=40, dpo=25, days_inventory_outstanding=0) == 15


def test_runway_days():
    # 9000 monthly burn -> 300/day -> 30000 / 300 = 100 days
    assert calculate_runway_days(30_000, 9_000) == 100


def test_runway_zero_burn_rate():
    with pytest.raises(DivisionByZeroError):
        calculate_runway_days(30_000, 0)


def test_classification_bands():
    """Band edges are strict comparisons"""
    assert classify_cash_conversion_cycle(44) == "Good"
    assert classify_cash_conversion_cycle(45) == "Needs Improvement"

    assert classify_runway(181) == "Healthy"
    assert classify_runway(180) == "Moderate"
    assert classify_runway(91) == "Moderate"
    assert classify_runway(90) == "At Risk"
    assert classify_runway(-5) == "At Risk"


def test_derive_kpis_integration(daily_series, monthly_series):
    """Complete KPI set with the delta and runway invariants"""
    daily = daily_series(60, balance=9000)
    daily[29] = DailyForecastPoint(date=daily[29].date, balance=7500, inflows=100, outflows=50, confidence=90)

    kpis = derive_kpis(daily, monthly_series([900, 900, 900]), ForecastKpiPayload(dso=42.6, dpo=20.4))

    assert kpis.current_balance == 9000
    assert kpis.projected_balance_30d == 7500
    assert kpis.delta == kpis.projected_balance_30d - kpis.current_balance == -1500
    assert kpis.monthly_burn_rate == 900
    assert kpis.dso == 43
    assert kpis.dpo == 20
    assert kpis.cash_conversion_cycle_days == 43 + 30 - 20
    assert kpis.runway_days == pytest.approx(kpis.current_balance / (kpis.monthly_burn_rate / 30))
    assert kpis.runway_days == pytest.approx(300)


def test_derive_kpis_propagates_zero_burn(daily_series, monthly_series):
    with pytest.raises(DivisionByZeroError):
        derive_kpis(daily_series(30), monthly_series([0, 0, 0]), ForecastKpiPayload(dso=40, dpo=30))
