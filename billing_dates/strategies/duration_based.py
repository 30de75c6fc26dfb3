"""Duration-based plans: fixed-length blocks measured in minutes.

Blocks are placed on instants, not local days. A block billed in advance
starts at the billing instant; one billed in arrears is the block that
ends just before it. A terminated block starts no later than the
termination.
"""

import math
from datetime import datetime, timedelta

from dateutil import tz

from billing_dates.calendar_utils import TICK
from billing_dates.context import BillingContext
from billing_dates.models import PlanInterval
from billing_dates.strategies.base import IntervalStrategy

MINUTES_PER_DAY = 24 * 60


class DurationBasedStrategy(IntervalStrategy):
    interval = PlanInterval.DURATION_BASED
    step = TICK

    def block(self, ctx: BillingContext) -> timedelta:
        return timedelta(minutes=ctx.plan.block_time_in_minutes)

    def reference(self, ctx: BillingContext) -> datetime:
        return ctx.billing_at

    def period_start(self, ctx: BillingContext, reference: datetime) -> datetime:
        return reference

    def period_end(self, ctx: BillingContext, start: datetime) -> datetime:
        return start + self.block(ctx) - TICK

    def closing_reference(self, ctx: BillingContext) -> datetime:
        return ctx.closing_at

    def closed_period_start(self, ctx: BillingContext) -> datetime:
        return ctx.closing_at

    def shift_back(self, ctx: BillingContext, value: datetime) -> datetime:
        return value - self.block(ctx)

    def span_days(self, ctx: BillingContext, start: datetime) -> int:
        return max(1, math.ceil(ctx.plan.block_time_in_minutes / MINUTES_PER_DAY))

    def duration_minutes(self, ctx: BillingContext) -> int:
        return ctx.plan.block_time_in_minutes

    def start_instant(self, ctx: BillingContext, value: datetime) -> datetime:
        return value.astimezone(tz.UTC)

    def end_instant(self, ctx: BillingContext, value: datetime) -> datetime:
        return value.astimezone(tz.UTC)
