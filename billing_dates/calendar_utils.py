"""
Calendar Primitives
===================

Pure date helpers shared by the anchor resolvers and interval strategies.

Dates passed in are already localized to the customer's timezone. Only the
day-bound helpers touch timezones: they attach the customer's zone to a
local date and return the matching UTC instant.
"""

import calendar
from datetime import date, datetime, time, timedelta, tzinfo
from enum import Enum
from typing import Union

from dateutil import tz
from dateutil.relativedelta import relativedelta


# =============================================================================
# CONSTANTS
# =============================================================================

# Smallest representable step between two boundaries
TICK = timedelta(microseconds=1)
ONE_DAY = timedelta(days=1)

DAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


class CalendarUnit(Enum):
    """Calendar units a period can be truncated to."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    HALF_YEAR = "half_year"
    YEAR = "year"


UNIT_MONTHS = {
    CalendarUnit.MONTH: 1,
    CalendarUnit.QUARTER: 3,
    CalendarUnit.HALF_YEAR: 6,
    CalendarUnit.YEAR: 12,
}


# =============================================================================
# DAY-OF-MONTH HELPERS
# =============================================================================

def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month, leap years included."""
    return calendar.monthrange(year, month)[1]


def is_last_day_of_month(value: date) -> bool:
    return value.day == days_in_month(value.year, value.month)


def day_name(value: date) -> str:
    """Lowercase English weekday name, e.g. 'tuesday'."""
    return DAY_NAMES[value.weekday()]


def build_date(year: int, month: int, day: int) -> date:
    """Build a date, clamping the day to the last day of a shorter month.

    Example:
        build_date(2024, 2, 31) -> date(2024, 2, 29)
    """
    return date(year, month, min(day, days_in_month(year, month)))


def add_months(value: date, months: int) -> date:
    """Shift by whole months; relativedelta clamps the day on overflow."""
    return value + relativedelta(months=months)


def end_of_month(value: date) -> date:
    return build_date(value.year, value.month, 31)


# =============================================================================
# UNIT TRUNCATION
# =============================================================================

def beginning_of(unit: Union[CalendarUnit, str], value: date, week_start: int = 0) -> date:
    """First day of the calendar unit containing value.

    Args:
        unit: Calendar unit (or its string value, e.g. 'half_year')
        value: Local date
        week_start: Weekday number a calendar week starts on (0 = Monday)

    Raises:
        ValueError: If unit is not a known calendar unit
    """
    unit = CalendarUnit(unit)
    if unit is CalendarUnit.DAY:
        return value
    if unit is CalendarUnit.WEEK:
        return value - timedelta(days=(value.weekday() - week_start) % 7)

    months = UNIT_MONTHS[unit]
    first_month = (value.month - 1) // months * months + 1
    return date(value.year, first_month, 1)


def end_of(unit: Union[CalendarUnit, str], value: date, week_start: int = 0) -> date:
    """Last day of the calendar unit containing value."""
    unit = CalendarUnit(unit)
    if unit is CalendarUnit.DAY:
        return value
    if unit is CalendarUnit.WEEK:
        return beginning_of(unit, value, week_start) + timedelta(days=6)

    return beginning_of(unit, value) + relativedelta(months=UNIT_MONTHS[unit], days=-1)


# =============================================================================
# DAY BOUNDS
# =============================================================================

def beginning_of_day(value: date, zone: tzinfo) -> datetime:
    """UTC instant of local midnight; a midnight skipped by DST moves forward."""
    local = tz.resolve_imaginary(datetime.combine(value, time.min, tzinfo=zone))
    return local.astimezone(tz.UTC)


def end_of_day(value: date, zone: tzinfo) -> datetime:
    """UTC instant of the last microsecond of the local day."""
    local = tz.resolve_imaginary(datetime.combine(value, time.max, tzinfo=zone))
    return local.astimezone(tz.UTC)
