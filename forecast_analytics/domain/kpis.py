"""KPI derivation - scalar dashboard metrics computed from a forecast"""

from typing import List, Sequence
from forecast_analytics.domain.models import DailyForecastPoint, MonthlyForecastPoint, ForecastKpiPayload, KpiSet
from forecast_analytics.domain.exceptions import EmptySeriesError, InsufficientDataError, DivisionByZeroError

# Assumed days-inventory-outstanding used in the cash conversion cycle
DAYS_INVENTORY_OUTSTANDING = 30

PROJECTION_HORIZON_DAYS = 30
BURN_RATE_WINDOW_MONTHS = 3
DAYS_PER_MONTH = 30


def calculate_current_and_projected_balance(
    daily: Sequence[DailyForecastPoint],
    horizon_days: int = PROJECTION_HORIZON_DAYS,
) -> tuple[float, float]:
    """
    Return (current balance, balance `horizon_days` ahead).

    Current balance is the first point; the projection is the point at
    index horizon_days - 1 (day 30 of the forecast by default).
    """
    if not daily:
        raise EmptySeriesError("Daily forecast series is empty")
    if len(daily) < horizon_days:
        raise InsufficientDataError(
            f"Need at least {horizon_days} daily points for a {horizon_days}-day projection, got {len(daily)}"
        )

    return daily[0].balance, daily[horizon_days - 1].balance


def calculate_monthly_burn_rate(
    monthly: Sequence[MonthlyForecastPoint],
    window_months: int = BURN_RATE_WINDOW_MONTHS,
) -> float:
    """Average outflows over the first `window_months` months, as a positive magnitude"""
    if len(monthly) < window_months:
        raise InsufficientDataError(
            f"Need at least {window_months} monthly points for burn rate, got {len(monthly)}"
        )

    window = monthly[:window_months]
    return abs(sum(m.outflows for m in window) / window_months)


def calculate_cash_conversion_cycle(
    dso: int,
    dpo: int,
    days_inventory_outstanding: int = DAYS_INVENTORY_OUTSTANDING,
) -> int:
    """CCC = DSO + DIO - DPO"""
    return dso + days_inventory_outstanding - dpo


def calculate_runway_days(current_balance: float, monthly_burn_rate: float) -> float:
    """
    Days until the current balance is exhausted at the current daily burn.

    Raises:
        DivisionByZeroError: burn rate is zero, runway is unbounded
    """
    if monthly_burn_rate == 0:
        raise DivisionByZeroError("Runway is undefined for a zero burn rate")

    return current_balance / (monthly_burn_rate / DAYS_PER_MONTH)


def classify_cash_conversion_cycle(days: float) -> str:
    """Display tier for the cash conversion cycle"""
    return "Good" if days < 45 else "Needs Improvement"


def classify_runway(days: float) -> str:
    """
    Display tier for runway.

    - > 180 days: Healthy
    - > 90 days:  Moderate
    - otherwise:  At Risk
    """
    if days > 180:
        return "Healthy"
    elif days > 90:
        return "Moderate"
    else:
        return "At Risk"


def derive_kpis(
    daily: List[DailyForecastPoint],
    monthly: List[MonthlyForecastPoint],
    raw_kpis: ForecastKpiPayload,
    days_inventory_outstanding: int = DAYS_INVENTORY_OUTSTANDING,
    horizon_days: int = PROJECTION_HORIZON_DAYS,
    burn_rate_window_months: int = BURN_RATE_WINDOW_MONTHS,
) -> KpiSet:
    """
    Main entry point: compute the full KPI set for a forecast.

    Every failure (short series, zero burn rate) propagates to the caller;
    nothing is coerced to zero or infinity.
    """
    current_balance, projected_balance = calculate_current_and_projected_balance(daily, horizon_days)
    burn_rate = calculate_monthly_burn_rate(monthly, burn_rate_window_months)

    dso = round(raw_kpis.dso)
    dpo = round(raw_kpis.dpo)

    return KpiSet(
        current_balance=current_balance,
        projected_balance_30d=projected_balance,
        delta=projected_balance - current_balance,
        monthly_burn_rate=burn_rate,
        dso=dso,
        dpo=dpo,
        cash_conversion_cycle_days=calculate_cash_conversion_cycle(dso, dpo, days_inventory_outstanding),
        runway_days=calculate_runway_days(current_balance, burn_rate),
    )
