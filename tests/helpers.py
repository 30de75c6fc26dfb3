"""Datetime shorthands shared by the test modules."""

from datetime import datetime, timezone


def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)


def utc_end(year: int, month: int, day: int, hour: int = 23, minute: int = 59) -> datetime:
    """Last microsecond of the given UTC minute, 23:59 by default."""
    return datetime(year, month, day, hour, minute, 59, 999999, tzinfo=timezone.utc)
