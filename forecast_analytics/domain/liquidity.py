"""Liquidity risk classification - minimum safe balance and at-risk dates"""

from typing import List, Sequence
from forecast_analytics.domain.models import DailyForecastPoint, RiskAnnotatedPoint, RiskAnnotatedSeries
from forecast_analytics.domain.exceptions import EmptySeriesError

MIN_SAFE_BALANCE_MULTIPLIER = 0.8
RISK_MARGIN_MULTIPLIER = 1.15


def calculate_min_safe_balance(
    series: Sequence[DailyForecastPoint],
    multiplier: float = MIN_SAFE_BALANCE_MULTIPLIER,
) -> float:
    """Minimum safe balance: lowest balance in the series scaled by `multiplier`"""
    if not series:
        raise EmptySeriesError("Cannot compute a safe balance for an empty series")

    return min(p.balance for p in series) * multiplier


def flag_risk_dates(
    series: Sequence[DailyForecastPoint],
    risk_threshold: float,
) -> List[RiskAnnotatedPoint]:
    """Flag each point against a fixed threshold (balance strictly below it)"""
    return [RiskAnnotatedPoint(point=p, is_risk_date=p.balance < risk_threshold) for p in series]


def classify_liquidity_risk(
    series: Sequence[DailyForecastPoint],
    min_safe_multiplier: float = MIN_SAFE_BALANCE_MULTIPLIER,
    risk_margin: float = RISK_MARGIN_MULTIPLIER,
) -> RiskAnnotatedSeries:
    """
    Flag dates whose balance falls within `risk_margin` of the minimum safe balance.

    The threshold belongs to the whole series, so it is recomputed from
    scratch for every snapshot passed in. A point is at risk when
    balance < min_safe_balance * risk_margin (strict).
    """
    min_safe_balance = calculate_min_safe_balance(series, min_safe_multiplier)
    risk_threshold = min_safe_balance * risk_margin

    return RiskAnnotatedSeries(
        points=flag_risk_dates(series, risk_threshold),
        min_safe_balance=min_safe_balance,
        risk_threshold=risk_threshold,
    )
