"""Base interface for plan interval strategies.

An interval strategy answers every boundary question for one plan interval.
Pay timing (in advance vs in arrears) is composed here, once, on top of four
placement hooks. AlignedStrategy additionally composes billing alignment
(calendar truncation vs anchor resolver) so concrete strategies only supply
their calendar unit, their resolver and their cycle width.

Strategy instances hold no per-call state and are shared by every
computation; intermediate results are memoized on the BillingContext.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from typing import Any, Optional

from billing_dates.calendar_utils import ONE_DAY, beginning_of_day, end_of_day
from billing_dates.context import BillingContext, memoized
from billing_dates.models import PlanInterval


class IntervalStrategy(ABC):
    """Abstract base class for plan interval strategies.

    Subclasses implement the placement hooks. The public accessors
    (from_date, charges_to_date, duration, ...) are derived from them and
    are the same for every interval.

    Attributes:
        interval: The plan interval this strategy serves.
        step: Distance between the end of a period and the start of the next.
    """

    interval: PlanInterval
    step: timedelta = ONE_DAY

    # -------------------------------------------------------------------------
    # Placement hooks
    # -------------------------------------------------------------------------

    @abstractmethod
    def period_start(self, ctx: BillingContext, reference: Any) -> Any:
        """Start of the period containing reference."""
        pass

    @abstractmethod
    def period_end(self, ctx: BillingContext, start: Any) -> Any:
        """Last day (or instant) of the period starting at start."""
        pass

    @abstractmethod
    def closed_period_start(self, ctx: BillingContext) -> Any:
        """Start of the period a termination in arrears closes out."""
        pass

    @abstractmethod
    def shift_back(self, ctx: BillingContext, value: Any) -> Any:
        """Value moved back by exactly one cycle."""
        pass

    def reference(self, ctx: BillingContext) -> Any:
        return ctx.billing_date

    def closing_reference(self, ctx: BillingContext) -> Any:
        """Reference a terminated subscription's current period is placed around."""
        return ctx.closing_date

    def current_reference(self, ctx: BillingContext) -> Any:
        # A terminated subscription never projects into a period after termination
        if ctx.terminated:
            return self.closing_reference(ctx)
        return self.reference(ctx)

    def span_days(self, ctx: BillingContext, start: Any) -> int:
        """Inclusive day count of the period starting at start."""
        return (self.period_end(ctx, start) - start).days + 1

    def duration_minutes(self, ctx: BillingContext) -> Optional[int]:
        return None

    def start_instant(self, ctx: BillingContext, value: Any) -> datetime:
        return beginning_of_day(value, ctx.zone)

    def end_instant(self, ctx: BillingContext, value: Any) -> datetime:
        return end_of_day(value, ctx.zone)

    # -------------------------------------------------------------------------
    # Charge delegation
    # -------------------------------------------------------------------------

    def charges_strategy(self, ctx: BillingContext) -> "IntervalStrategy":
        """Strategy placing usage charges; yearly plans may bill them monthly."""
        return self

    def fixed_charges_strategy(self, ctx: BillingContext) -> "IntervalStrategy":
        return self

    # -------------------------------------------------------------------------
    # Subscription period
    # -------------------------------------------------------------------------

    @memoized
    def base_date(self, ctx: BillingContext) -> Any:
        return self.shift_back(ctx, self.reference(ctx))

    @memoized
    def from_date(self, ctx: BillingContext) -> Any:
        if ctx.pay_in_advance or ctx.current_usage:
            return self.period_start(ctx, self.current_reference(ctx))
        if ctx.terminated_in_arrears:
            return self.closed_period_start(ctx)
        return self.period_start(ctx, self.base_date(ctx))

    @memoized
    def to_date(self, ctx: BillingContext) -> Any:
        return self.period_end(ctx, self.from_date(ctx))

    def duration(self, ctx: BillingContext) -> int:
        return self.span_days(ctx, self.from_date(ctx))

    # -------------------------------------------------------------------------
    # Usage period (shared by charges and fixed charges)
    # -------------------------------------------------------------------------

    def bills_previous_period(self, ctx: BillingContext) -> bool:
        """Advance billing of a live subscription settles the period that ended."""
        return ctx.pay_in_advance and not ctx.terminated and not ctx.current_usage

    @memoized
    def usage_from_date(self, ctx: BillingContext) -> Any:
        if self.bills_previous_period(ctx):
            return self.period_start(ctx, self.base_date(ctx))
        return self.from_date(ctx)

    @memoized
    def usage_to_date(self, ctx: BillingContext) -> Any:
        if self.bills_previous_period(ctx):
            return self.from_date(ctx) - self.step
        return self.to_date(ctx)

    def usage_duration(self, ctx: BillingContext) -> int:
        return self.span_days(ctx, self.usage_from_date(ctx))

    def charges_from_date(self, ctx: BillingContext) -> Any:
        return self.charges_strategy(ctx).usage_from_date(ctx)

    def charges_to_date(self, ctx: BillingContext) -> Any:
        return self.charges_strategy(ctx).usage_to_date(ctx)

    def charges_duration(self, ctx: BillingContext) -> int:
        return self.charges_strategy(ctx).usage_duration(ctx)

    def fixed_charges_from_date(self, ctx: BillingContext) -> Any:
        return self.fixed_charges_strategy(ctx).usage_from_date(ctx)

    def fixed_charges_to_date(self, ctx: BillingContext) -> Any:
        return self.fixed_charges_strategy(ctx).usage_to_date(ctx)

    def fixed_charges_duration(self, ctx: BillingContext) -> int:
        return self.fixed_charges_strategy(ctx).usage_duration(ctx)

    # -------------------------------------------------------------------------
    # Neighbouring periods
    # -------------------------------------------------------------------------

    def next_end_of_period(self, ctx: BillingContext, reference: Any = None) -> Any:
        """End of the period containing reference (defaults to the billing date)."""
        if reference is None:
            reference = self.reference(ctx)
        return self.period_end(ctx, self.period_start(ctx, reference))

    def previous_beginning_of_period(self, ctx: BillingContext, current_period: bool = False) -> Any:
        """Start of the period before the billing date's, or of its own period."""
        if current_period:
            return self.period_start(ctx, self.reference(ctx))
        return self.period_start(ctx, self.base_date(ctx))


class AlignedStrategy(IntervalStrategy):
    """Strategy whose periods follow either calendar units or an anchor.

    Subclasses provide calendar_start, calendar_end and resolver. The choice
    between them is made here from the plan's billing alignment and never
    depends on pay timing.

    Attributes:
        inclusive_closing: Whether a termination falling on the anchor day
            resolves to the preceding anniversary.
    """

    inclusive_closing: bool = True

    @abstractmethod
    def calendar_start(self, ctx: BillingContext, reference: date) -> date:
        pass

    @abstractmethod
    def calendar_end(self, ctx: BillingContext, start: date) -> date:
        pass

    @abstractmethod
    def resolver(self, ctx: BillingContext) -> Any:
        """Anchor resolver built from the subscription's anchor date."""
        pass

    def period_start(self, ctx: BillingContext, reference: date) -> date:
        if ctx.calendar:
            return self.calendar_start(ctx, reference)
        return self.resolver(ctx).previous_anniversary_day(reference)

    def period_end(self, ctx: BillingContext, start: date) -> date:
        if ctx.calendar:
            return self.calendar_end(ctx, start)
        return self.resolver(ctx).next_anniversary_day(start) - ONE_DAY

    def closed_period_start(self, ctx: BillingContext) -> date:
        if ctx.calendar:
            return self.calendar_start(ctx, ctx.closing_date)
        return self.resolver(ctx).previous_anniversary_day(
            min(ctx.billing_date - ONE_DAY, ctx.closing_date),
            inclusive=self.inclusive_closing,
        )
