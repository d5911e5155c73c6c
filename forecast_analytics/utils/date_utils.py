"""Date manipulation utilities"""

import calendar
from datetime import date, datetime
from typing import List

DISPLAY_DAY_FORMAT = "%b %d"
DISPLAY_MONTH_FORMAT = "%b %Y"


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def subtract_months(from_date: date, months: int) -> date:
    """Move back `months` calendar months, clamping the day to the target month's length"""
    index = from_date.year * 12 + (from_date.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(from_date.day, days_in_month(year, month)))


def subtract_years(from_date: date, years: int) -> date:
    """Move back `years` years (Feb 29 -> Feb 28)"""
    return subtract_months(from_date, years * 12)


def month_days(month_start: date) -> List[date]:
    """Every calendar day of the month containing `month_start`"""
    count = days_in_month(month_start.year, month_start.month)
    return [date(month_start.year, month_start.month, day) for day in range(1, count + 1)]


def format_display_day(value: date) -> str:
    """e.g. "Mar 05" """
    return value.strftime(DISPLAY_DAY_FORMAT)


def format_month_label(value: date) -> str:
    """e.g. "Mar 2026" """
    return value.strftime(DISPLAY_MONTH_FORMAT)


def to_date(value) -> date:
    """Accept a date, a datetime, or an ISO-8601 date or datetime string"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except ValueError:
        # "Z" suffix is only understood by fromisoformat from Python 3.11
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
