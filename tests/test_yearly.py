"""
Tests for yearly plans, including monthly charge sub-periods.
"""

from datetime import date

import pytest

from billing_dates import PlanInterval
from tests.helpers import utc, utc_end

EARLY_START = utc(2019, 1, 1)


class TestYearlyCalendar:
    """Yearly plans aligned on calendar years."""

    def test_arrears_bills_previous_year(self, engine, make_subscription, make_plan):
        """Test a January 1st billing closing the previous year."""
        plan = make_plan(PlanInterval.YEARLY, "calendar")
        result = engine.compute(make_subscription(started_at=EARLY_START), plan, utc(2022, 1, 1))

        assert result.from_datetime == utc(2021, 1, 1)
        assert result.to_datetime == utc_end(2021, 12, 31)
        assert result.duration_days == 365

    def test_customer_timezone(self, engine, make_subscription, make_plan):
        """Test that New Year in UTC is still December 31st in New York."""
        plan = make_plan(PlanInterval.YEARLY, "calendar")
        subscription = make_subscription(started_at=EARLY_START, timezone="America/New_York")
        result = engine.compute(subscription, plan, utc(2022, 1, 1))

        assert result.from_datetime == utc(2020, 1, 1, 5)
        assert result.to_datetime == utc_end(2021, 1, 1, 4)
        assert result.duration_days == 366

    def test_advance(self, engine, make_subscription, make_plan):
        """Test the new year billed in advance."""
        plan = make_plan(PlanInterval.YEARLY, "calendar", advance=True)
        result = engine.compute(make_subscription(started_at=EARLY_START), plan, utc(2022, 1, 1))

        assert result.from_datetime == utc(2022, 1, 1)
        assert result.to_datetime == utc_end(2022, 12, 31)
        assert result.charges_from_datetime == utc(2021, 1, 1)
        assert result.charges_to_datetime == utc_end(2021, 12, 31)

    def test_charges_billed_monthly(self, engine, make_subscription, make_plan):
        """Test that monthly charges cover December only."""
        plan = make_plan(PlanInterval.YEARLY, "calendar", bill_charges_monthly=True)
        result = engine.compute(make_subscription(), plan, utc(2023, 1, 1))

        assert result.from_datetime == utc(2022, 1, 1)
        assert result.charges_from_datetime == utc(2022, 12, 1)
        assert result.charges_to_datetime == utc_end(2022, 12, 31)
        assert result.charges_duration_days == 31
        assert result.fixed_charges_from_datetime == utc(2022, 1, 1)

    def test_advance_with_monthly_charges(self, engine, make_subscription, make_plan):
        """Test a mid-year advance billing settling the previous month."""
        plan = make_plan(PlanInterval.YEARLY, "calendar", advance=True, bill_charges_monthly=True)
        result = engine.compute(make_subscription(), plan, utc(2022, 3, 7))

        assert result.from_datetime == utc(2022, 1, 1)
        assert result.to_datetime == utc_end(2022, 12, 31)
        assert result.charges_from_datetime == utc(2022, 2, 1)
        assert result.charges_to_datetime == utc_end(2022, 2, 28)
        assert result.charges_duration_days == 28

    @pytest.mark.parametrize(
        "billing_at,expected",
        [
            (utc(2021, 1, 1), 366),
            (utc(2022, 1, 1), 365),
        ],
    )
    def test_duration(self, engine, make_subscription, make_plan, billing_at, expected):
        """Test leap and common years."""
        plan = make_plan(PlanInterval.YEARLY, "calendar")
        result = engine.compute(make_subscription(started_at=EARLY_START), plan, billing_at)
        assert result.duration_days == expected

    def test_next_end_of_period(self, engine, make_subscription, make_plan):
        plan = make_plan(PlanInterval.YEARLY, "calendar")
        result = engine.compute(make_subscription(), plan, utc(2022, 3, 7))
        assert result.next_end_of_period == utc_end(2022, 12, 31)


class TestYearlyAnniversary:
    """Yearly plans aligned on the anchor's day and month."""

    def test_arrears_bills_previous_year(self, engine, make_subscription, make_plan):
        """Test a February 2nd to February 1st year."""
        plan = make_plan(PlanInterval.YEARLY, "anniversary")
        result = engine.compute(make_subscription(), plan, utc(2022, 2, 2))

        assert result.from_datetime == utc(2021, 2, 2)
        assert result.to_datetime == utc_end(2022, 2, 1)
        assert result.duration_days == 365

    def test_charges_billed_monthly(self, engine, make_subscription, make_plan):
        """Test monthly charges on the monthly anniversary."""
        plan = make_plan(PlanInterval.YEARLY, "anniversary", bill_charges_monthly=True)
        result = engine.compute(make_subscription(), plan, utc(2022, 2, 2))

        assert result.charges_from_datetime == utc(2022, 1, 2)
        assert result.charges_to_datetime == utc_end(2022, 2, 1)
        assert result.fixed_charges_from_datetime == utc(2021, 2, 2)
        assert result.fixed_charges_to_datetime == utc_end(2022, 2, 1)

    def test_december_anchor_crossing_year(self, engine, make_subscription, make_plan):
        """Test a December 1st anchor billed in January."""
        plan = make_plan(PlanInterval.YEARLY, "anniversary")
        subscription = make_subscription(started_at=utc(2022, 12, 1))
        result = engine.compute(subscription, plan, utc(2024, 1, 2))

        assert result.from_datetime == utc(2022, 12, 1)
        assert result.to_datetime == utc_end(2023, 11, 30)

    def test_current_usage_before_anchor_month(self, engine, make_subscription, make_plan):
        """Test that the year in progress started the previous March."""
        plan = make_plan(PlanInterval.YEARLY, "anniversary")
        subscription = make_subscription(started_at=utc(2023, 3, 29))
        result = engine.compute(subscription, plan, utc(2024, 3, 15), current_usage=True)

        assert result.charges_from_datetime == utc(2023, 3, 29)
        assert result.charges_to_datetime == utc_end(2024, 3, 28)

    def test_leap_day_anchor(self, engine, make_subscription, make_plan):
        """Test that a February 29th anchor clamps to the 28th in common years."""
        plan = make_plan(PlanInterval.YEARLY, "anniversary")
        subscription = make_subscription(started_at=utc(2020, 2, 29), anchor_date=date(2020, 2, 29))
        result = engine.compute(subscription, plan, utc(2022, 3, 1))

        assert result.from_datetime == utc(2021, 2, 28)
        assert result.to_datetime == utc_end(2022, 2, 27)

    def test_next_end_of_period(self, engine, make_subscription, make_plan):
        """Test the end of the anniversary year holding the billing date."""
        plan = make_plan(PlanInterval.YEARLY, "anniversary")
        result = engine.compute(make_subscription(), plan, utc(2022, 3, 7))
        assert result.next_end_of_period == utc_end(2023, 2, 1)

        subscription = make_subscription(timezone="America/New_York")
        result = engine.compute(subscription, plan, utc(2022, 3, 7))
        assert result.next_end_of_period == utc_end(2023, 2, 1, 4)
