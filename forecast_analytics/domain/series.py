"""Series shaping for tables and charts: monthly rollup, combined history/forecast, table rows"""

from itertools import groupby
from typing import List, Sequence, Union
from forecast_analytics.domain.models import DailyForecastPoint, MonthlyForecastPoint, ForecastTableRow, ChartPoint
from forecast_analytics.domain.exceptions import EmptySeriesError
from forecast_analytics.utils.date_utils import format_display_day, format_month_label

HISTORY_WINDOW_DAYS = 30
FORECAST_WINDOW_DAYS = 60


def rollup_monthly(daily: Sequence[DailyForecastPoint]) -> List[MonthlyForecastPoint]:
    """
    Aggregate a daily series into calendar months.

    - inflows/outflows: summed
    - balance: last day of the month in the series
    - confidence: mean over the days, rounded
    """
    if not daily:
        raise EmptySeriesError("Cannot roll up an empty daily series")

    months = []
    for _, days in groupby(daily, key=lambda p: (p.date.year, p.date.month)):
        days = list(days)
        start = days[0].date.replace(day=1)
        months.append(
            MonthlyForecastPoint(
                month=format_month_label(start),
                inflows=sum(d.inflows for d in days),
                outflows=sum(d.outflows for d in days),
                balance=days[-1].balance,
                confidence=round(sum(d.confidence for d in days) / len(days)),
                start_date=start,
            )
        )

    return months


def combine_history_and_forecast(
    historical: Sequence[DailyForecastPoint],
    forecast: Sequence[DailyForecastPoint],
    history_days: int = HISTORY_WINDOW_DAYS,
    forecast_days: int = FORECAST_WINDOW_DAYS,
) -> List[ChartPoint]:
    """Trailing `history_days` of history followed by the first `forecast_days` of forecast"""
    tail = list(historical[-history_days:]) if history_days > 0 else []

    def tag(point: DailyForecastPoint, data_type: str) -> ChartPoint:
        return ChartPoint(
            date=point.date,
            balance=point.balance,
            inflows=point.inflows,
            outflows=point.outflows,
            confidence=point.confidence,
            data_type=data_type,
        )

    return [tag(p, "historical") for p in tail] + [tag(p, "forecast") for p in forecast[:forecast_days]]


def classify_confidence(confidence: int) -> str:
    """Tier: > 80 high, > 60 medium, otherwise low"""
    if confidence > 80:
        return "high"
    elif confidence > 60:
        return "medium"
    return "low"


def build_forecast_table(
    points: Sequence[Union[DailyForecastPoint, MonthlyForecastPoint]],
) -> List[ForecastTableRow]:
    """Table rows with opening balance reconstructed as balance - inflows + outflows"""
    rows = []
    for p in points:
        label = p.month if isinstance(p, MonthlyForecastPoint) else format_display_day(p.date)
        rows.append(
            ForecastTableRow(
                label=label,
                opening_balance=p.balance - p.inflows + p.outflows,
                inflows=p.inflows,
                outflows=p.outflows,
                balance=p.balance,
                confidence=p.confidence,
                confidence_band=classify_confidence(p.confidence),
            )
        )
    return rows
