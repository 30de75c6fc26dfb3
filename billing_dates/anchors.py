"""
Anchor Resolvers
================

Locate anniversary occurrences around a reference date.

MonthAnchor handles month-based cycles (monthly, quarterly, semiannual,
yearly) and clamps the anchor day to shorter months; an anchor on the last
day of its month follows month ends. WeekdayAnchor handles
weekly cycles, where only the day of week matters.

Both expose the same two lookups:
- previous_anniversary_day(reference): most recent occurrence on or before reference
- next_anniversary_day(reference): first occurrence strictly after reference
"""

from datetime import date, timedelta
from typing import List

from billing_dates.calendar_utils import DAY_NAMES, days_in_month, is_last_day_of_month
from billing_dates.exceptions import InvalidAnchorError


# Cycle widths (in months) that tile a year evenly
VALID_CYCLE_MONTHS = (1, 2, 3, 4, 6, 12)


class MonthAnchor:
    """Anniversary occurrences for cycles measured in whole months.

    Attributes:
        day: Anchor day of month (1-31), clamped per target month.
        month: Anchor month (1-12), the first billing month of the rotation.
        cycle_months: Cycle width in months.
        month_end: Anchor fell on the last day of its month, so every
            occurrence falls on the last day of its target month.
        billing_months: Sorted months of the year holding an occurrence.
    """

    def __init__(self, day: int, month: int = 1, cycle_months: int = 1, month_end: bool = False):
        if cycle_months not in VALID_CYCLE_MONTHS:
            raise InvalidAnchorError(
                f"Cycle of {cycle_months} months does not divide a year",
                anchor=cycle_months,
            )
        if not 1 <= month <= 12:
            raise InvalidAnchorError(f"Anchor month out of range: {month}", anchor=month)
        # 2000 is a leap year, so Feb 29 is accepted
        if not 1 <= day <= days_in_month(2000, month):
            raise InvalidAnchorError(
                f"Anchor day {day} is not valid for month {month}",
                anchor=day,
            )

        self.day = day
        self.month = month
        self.cycle_months = cycle_months
        self.month_end = month_end
        self.billing_months: List[int] = sorted(
            {(month - 1 + k * cycle_months) % 12 + 1 for k in range(12 // cycle_months)}
        )

    @classmethod
    def from_date(cls, anchor: date, cycle_months: int = 1) -> "MonthAnchor":
        """Build from an anchor date; Feb 28 2023 is a month end, Feb 28 2024 is not."""
        return cls(anchor.day, anchor.month, cycle_months, month_end=is_last_day_of_month(anchor))

    def __repr__(self) -> str:
        return (
            f"MonthAnchor(day={self.day}, month={self.month}, "
            f"cycle_months={self.cycle_months}, month_end={self.month_end})"
        )

    def day_in(self, year: int, month: int) -> int:
        """Anchor day as it falls in the given month."""
        if self.month_end:
            return days_in_month(year, month)
        return min(self.day, days_in_month(year, month))

    def occurrence(self, year: int, month: int) -> date:
        return date(year, month, self.day_in(year, month))

    def previous_anniversary_day(self, reference: date, inclusive: bool = False) -> date:
        """Most recent anniversary on or before reference.

        With inclusive=True a reference falling exactly on the anchor day
        resolves to the preceding occurrence instead, so a termination on
        the anchor day closes the period that just ended.

        Args:
            reference: Local date to look back from
            inclusive: Treat the anchor day itself as belonging to the previous cycle

        Returns:
            Date of the occurrence
        """
        months = self.billing_months
        year = reference.year

        if reference.month < months[0]:
            return self.occurrence(year - 1, months[-1])

        month = max(m for m in months if m <= reference.month)
        if month == reference.month:
            anchor_day = self.day_in(year, month)
            before_anchor = reference.day < anchor_day or (inclusive and reference.day == anchor_day)
            if before_anchor:
                index = months.index(month)
                if index == 0:
                    return self.occurrence(year - 1, months[-1])
                return self.occurrence(year, months[index - 1])

        return self.occurrence(year, month)

    def next_anniversary_day(self, reference: date) -> date:
        """First anniversary strictly after reference."""
        for year in (reference.year, reference.year + 1):
            for month in self.billing_months:
                candidate = self.occurrence(year, month)
                if candidate > reference:
                    return candidate

        # Unreachable: every year holds at least one billing month
        raise InvalidAnchorError(f"No anniversary found after {reference}", anchor=self)


class WeekdayAnchor:
    """Anniversary occurrences for weekly cycles (0 = Monday ... 6 = Sunday)."""

    def __init__(self, weekday: int):
        if not isinstance(weekday, int) or not 0 <= weekday <= 6:
            raise InvalidAnchorError(f"Weekday out of range: {weekday!r}", anchor=weekday)
        self.weekday = weekday

    @classmethod
    def from_date(cls, anchor: date) -> "WeekdayAnchor":
        return cls(anchor.weekday())

    @classmethod
    def from_name(cls, name: str) -> "WeekdayAnchor":
        """Build from an English weekday name such as 'Tuesday'."""
        normalized = str(name).strip().lower()
        if normalized not in DAY_NAMES:
            raise InvalidAnchorError(f"Unknown weekday name: {name!r}", anchor=name)
        return cls(DAY_NAMES.index(normalized))

    @property
    def name(self) -> str:
        return DAY_NAMES[self.weekday]

    def __repr__(self) -> str:
        return f"WeekdayAnchor({self.name})"

    def previous_anniversary_day(self, reference: date, inclusive: bool = False) -> date:
        days_back = (reference.weekday() - self.weekday) % 7
        if inclusive and days_back == 0:
            days_back = 7
        return reference - timedelta(days=days_back)

    def next_anniversary_day(self, reference: date) -> date:
        days_ahead = (self.weekday - reference.weekday()) % 7 or 7
        return reference + timedelta(days=days_ahead)
