"""Daily plans: every period is a single local day."""

from datetime import date

from billing_dates.calendar_utils import ONE_DAY
from billing_dates.context import BillingContext
from billing_dates.models import PlanInterval
from billing_dates.strategies.base import IntervalStrategy


class DailyStrategy(IntervalStrategy):
    """Calendar and anniversary alignment coincide for one-day periods."""

    interval = PlanInterval.DAILY

    def period_start(self, ctx: BillingContext, reference: date) -> date:
        return reference

    def period_end(self, ctx: BillingContext, start: date) -> date:
        return start

    def closed_period_start(self, ctx: BillingContext) -> date:
        return ctx.closing_date

    def shift_back(self, ctx: BillingContext, value: date) -> date:
        return value - ONE_DAY
