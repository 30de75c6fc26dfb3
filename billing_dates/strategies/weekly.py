"""Weekly plans: calendar weeks or weeks starting on the anchor's weekday."""

from datetime import date, timedelta

from billing_dates.anchors import WeekdayAnchor
from billing_dates.calendar_utils import CalendarUnit, beginning_of, end_of
from billing_dates.context import BillingContext, memoized
from billing_dates.models import PlanInterval
from billing_dates.strategies.base import AlignedStrategy

ONE_WEEK = timedelta(days=7)


class WeeklyStrategy(AlignedStrategy):
    interval = PlanInterval.WEEKLY
    # A termination in arrears closes the week holding the day before billing
    inclusive_closing = False

    @memoized
    def resolver(self, ctx: BillingContext) -> WeekdayAnchor:
        return WeekdayAnchor.from_date(ctx.anchor_date)

    def calendar_start(self, ctx: BillingContext, reference: date) -> date:
        return beginning_of(CalendarUnit.WEEK, reference, ctx.week_start)

    def calendar_end(self, ctx: BillingContext, start: date) -> date:
        return end_of(CalendarUnit.WEEK, start, ctx.week_start)

    def shift_back(self, ctx: BillingContext, value: date) -> date:
        return value - ONE_WEEK
