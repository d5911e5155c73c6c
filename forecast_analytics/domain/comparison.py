"""Period-over-period comparison with a pluggable previous-period source"""

import random
from collections.abc import Mapping
from datetime import date
from typing import Any, Callable, List, Optional, Sequence
from forecast_analytics.domain.models import ComparisonPoint, ComparisonSummary, ComparisonResult
from forecast_analytics.domain.exceptions import EmptySeriesError, DivisionByZeroError
from forecast_analytics.utils.date_utils import subtract_months, subtract_years, format_display_day, to_date
from forecast_analytics.utils.random_utils import resolve_rng

GRANULARITIES = ("month", "quarter", "year")

PREVIOUS_FACTOR_MIN = 0.7
PREVIOUS_FACTOR_MAX = 1.3

# (current date, value key, current value) -> previous-period value
PreviousValueSource = Callable[[date, str, float], float]


class SimulatedPreviousPeriod:
    """
    Stand-in for a real historical feed.

    Previous values are NOT looked up: each one is round(current * factor)
    with factor drawn uniformly from [factor_min, factor_max]. Output is
    non-deterministic unless a seeded rng is injected. Any callable with the
    PreviousValueSource signature (e.g. a lookup into stored history) can
    replace it without changing downstream consumers.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        factor_min: float = PREVIOUS_FACTOR_MIN,
        factor_max: float = PREVIOUS_FACTOR_MAX,
    ):
        if factor_min > factor_max:
            raise ValueError(f"factor_min ({factor_min}) must not exceed factor_max ({factor_max})")
        self.rng = resolve_rng(rng)
        self.factor_min = factor_min
        self.factor_max = factor_max

    def __call__(self, current_date: date, key: str, current_value: float) -> float:
        factor = self.factor_min + self.rng.random() * (self.factor_max - self.factor_min)
        return round(current_value * factor)


def previous_period_date(current: date, granularity: str) -> date:
    """Date one comparison period earlier (month: -1 month, quarter: -3 months, year: -1 year)"""
    if granularity == "year":
        return subtract_years(current, 1)
    elif granularity == "quarter":
        return subtract_months(current, 3)
    elif granularity == "month":
        return subtract_months(current, 1)
    raise ValueError(f"Unknown comparison granularity: {granularity!r} (expected one of {GRANULARITIES})")


def _field(record: Any, key: str) -> Any:
    if isinstance(record, Mapping):
        return record[key]
    return getattr(record, key)


def build_comparison_points(
    current_data: Sequence[Any],
    value_key: str,
    granularity: str = "year",
    date_key: str = "date",
    secondary_value_key: Optional[str] = None,
    previous_source: PreviousValueSource | None = None,
) -> List[ComparisonPoint]:
    """
    Pair each current record with a previous-period value.

    Records may be mappings or objects exposing `date_key` and `value_key`
    (dates as `date` or ISO strings). Previous dates are display-only.
    """
    if granularity not in GRANULARITIES:
        raise ValueError(f"Unknown comparison granularity: {granularity!r} (expected one of {GRANULARITIES})")

    source = previous_source or SimulatedPreviousPeriod()
    points = []

    for record in current_data:
        current_date = to_date(_field(record, date_key))
        previous_date = previous_period_date(current_date, granularity)
        current_value = _field(record, value_key)
        previous_value = source(current_date, value_key, current_value)

        secondary_current = None
        secondary_previous = None
        if secondary_value_key:
            secondary_current = _field(record, secondary_value_key)
            secondary_previous = source(current_date, secondary_value_key, secondary_current)

        points.append(
            ComparisonPoint(
                date=current_date,
                current_value=current_value,
                previous_value=previous_value,
                display_date=format_display_day(current_date),
                previous_display_date=format_display_day(previous_date),
                previous_date=previous_date,
                secondary_current_value=secondary_current,
                secondary_previous_value=secondary_previous,
            )
        )

    return points


def summarize_comparison(points: Sequence[ComparisonPoint]) -> ComparisonSummary:
    """
    Aggregate current vs previous totals over the primary values.

    Raises:
        EmptySeriesError: no points to aggregate
        DivisionByZeroError: previous total is zero, percent change undefined
    """
    if not points:
        raise EmptySeriesError("No comparison points to summarize")

    current_total = sum(p.current_value for p in points)
    previous_total = sum(p.previous_value for p in points)

    if previous_total == 0:
        raise DivisionByZeroError("Percent change is undefined when the previous-period total is zero")

    percent_change = (current_total - previous_total) / previous_total * 100

    return ComparisonSummary(
        current_total=current_total,
        previous_total=previous_total,
        percent_change=percent_change,
        is_positive=percent_change >= 0,
    )


def compare_periods(
    current_data: Sequence[Any],
    value_key: str,
    granularity: str = "year",
    date_key: str = "date",
    secondary_value_key: Optional[str] = None,
    previous_source: PreviousValueSource | None = None,
) -> ComparisonResult:
    """Main entry point: comparison points plus their summary for one granularity"""
    points = build_comparison_points(
        current_data,
        value_key,
        granularity=granularity,
        date_key=date_key,
        secondary_value_key=secondary_value_key,
        previous_source=previous_source,
    )

    return ComparisonResult(
        granularity=granularity,
        points=points,
        summary=summarize_comparison(points),
    )
