"""
Dates Engine
============

Single entry point of the billing-period date engine.

DatesEngine.compute selects the interval strategy for a plan, evaluates it
inside a fresh BillingContext and assembles the immutable PeriodBoundaries.
Adjustments shared by every interval live here:
- start clamp: no period starts before the subscription's started_at
- termination clamp: no period ends after terminated_at
- timezone continuity: usage periods resume right after the previously
  billed one when the customer's timezone changed
- boundary checks: an inverted period aborts the computation
"""

import logging
from datetime import date, datetime
from typing import Optional, Union

from billing_dates.calendar_utils import TICK
from billing_dates.config import Settings, get_settings
from billing_dates.context import BillingContext
from billing_dates.exceptions import InconsistentBoundaryError, UnsupportedIntervalError
from billing_dates.logging import log_action
from billing_dates.models import PeriodBoundaries, PlanSnapshot, SubscriptionSnapshot
from billing_dates.strategies import IntervalStrategy, get_strategy

logger = logging.getLogger(__name__)

BillingInput = Union[date, datetime]


class DatesEngine:
    """Computes billing-period boundaries for subscription and plan snapshots.

    The engine holds only configuration and may be shared across threads;
    every call builds its own BillingContext.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def context(
        self,
        subscription: SubscriptionSnapshot,
        plan: PlanSnapshot,
        billing_date: BillingInput,
        current_usage: bool = False,
    ) -> BillingContext:
        return BillingContext.build(
            subscription,
            plan,
            billing_date,
            current_usage=current_usage,
            default_timezone=self.settings.DEFAULT_TIMEZONE,
            week_start=self.settings.week_start_weekday,
        )

    def strategy_for(self, plan: PlanSnapshot) -> IntervalStrategy:
        try:
            return get_strategy(plan.interval)
        except UnsupportedIntervalError:
            log_action(
                "dates.compute.unsupported_interval",
                f"No strategy registered for interval {plan.interval!r}",
                "error",
                log=logger,
                interval=str(plan.interval),
            )
            raise

    def compute(
        self,
        subscription: SubscriptionSnapshot,
        plan: PlanSnapshot,
        billing_date: BillingInput,
        current_usage: bool = False,
    ) -> PeriodBoundaries:
        """Compute the billing periods evaluated at billing_date.

        Args:
            subscription: Subscription snapshot
            plan: Plan snapshot
            billing_date: Instant being billed (naive means UTC), or a local date
            current_usage: Compute the in-progress usage period instead of the
                period being invoiced

        Returns:
            PeriodBoundaries with UTC instants and nominal day counts

        Raises:
            UnsupportedIntervalError: If no strategy serves the plan interval
            InvalidAnchorError: If the anchor cannot be resolved
            InconsistentBoundaryError: If a computed period is inverted
        """
        strategy = self.strategy_for(plan)
        ctx = self.context(subscription, plan, billing_date, current_usage)

        # Fixed order: later accessors reuse dates memoized by earlier ones
        from_datetime = strategy.start_instant(ctx, strategy.from_date(ctx))
        to_datetime = strategy.end_instant(ctx, strategy.to_date(ctx))
        charges_from_datetime = strategy.start_instant(ctx, strategy.charges_from_date(ctx))
        charges_to_datetime = strategy.end_instant(ctx, strategy.charges_to_date(ctx))
        fixed_charges_from_datetime = strategy.start_instant(ctx, strategy.fixed_charges_from_date(ctx))
        fixed_charges_to_datetime = strategy.end_instant(ctx, strategy.fixed_charges_to_date(ctx))
        next_end_of_period = strategy.end_instant(ctx, strategy.next_end_of_period(ctx))

        self._check_order(ctx, "subscription", from_datetime, to_datetime)
        self._check_order(ctx, "charges", charges_from_datetime, charges_to_datetime)
        self._check_order(ctx, "fixed_charges", fixed_charges_from_datetime, fixed_charges_to_datetime)

        if ctx.timezone_changed:
            charges_from_datetime = self._resume_after(
                subscription.previous_charges_to_datetime, charges_from_datetime
            )
            fixed_charges_from_datetime = self._resume_after(
                subscription.previous_fixed_charges_to_datetime, fixed_charges_from_datetime
            )

        from_datetime = self._not_before_start(ctx, from_datetime)
        to_datetime = self._not_after_termination(ctx, to_datetime)
        charges_from_datetime = self._not_before_start(ctx, charges_from_datetime)
        charges_to_datetime = self._not_after_termination(ctx, charges_to_datetime)
        fixed_charges_from_datetime = self._not_before_start(ctx, fixed_charges_from_datetime)
        fixed_charges_to_datetime = self._not_after_termination(ctx, fixed_charges_to_datetime)

        # Usage periods may end before a late start; the subscription period may not
        self._check_order(ctx, "subscription", from_datetime, to_datetime)

        durations = {
            "duration_days": strategy.duration(ctx),
            "charges_duration_days": strategy.charges_duration(ctx),
            "fixed_charges_duration_days": strategy.fixed_charges_duration(ctx),
        }
        for name, days in durations.items():
            if days < 1:
                self._fail(ctx, InconsistentBoundaryError(name, message=f"Non-positive {name}: {days}"))

        boundaries = PeriodBoundaries(
            from_datetime=from_datetime,
            to_datetime=to_datetime,
            charges_from_datetime=charges_from_datetime,
            charges_to_datetime=charges_to_datetime,
            fixed_charges_from_datetime=fixed_charges_from_datetime,
            fixed_charges_to_datetime=fixed_charges_to_datetime,
            next_end_of_period=next_end_of_period,
            duration_minutes=strategy.duration_minutes(ctx),
            **durations,
        )

        if self.settings.LOG_BOUNDARIES:
            logger.debug(
                f"Computed {strategy.interval.value} boundaries for {ctx.billing_date} "
                f"({ctx.timezone_name}): {boundaries.model_dump()}"
            )
        return boundaries

    def previous_beginning_of_period(
        self,
        subscription: SubscriptionSnapshot,
        plan: PlanSnapshot,
        billing_date: BillingInput,
        current_period: bool = False,
    ) -> datetime:
        """Start instant of the period before billing_date's own period.

        With current_period=True, the start of the period containing
        billing_date instead.
        """
        strategy = self.strategy_for(plan)
        ctx = self.context(subscription, plan, billing_date)
        return strategy.start_instant(ctx, strategy.previous_beginning_of_period(ctx, current_period))

    # -------------------------------------------------------------------------
    # Shared adjustments
    # -------------------------------------------------------------------------

    @staticmethod
    def _not_before_start(ctx: BillingContext, value: datetime) -> datetime:
        return max(value, ctx.subscription.started_at)

    @staticmethod
    def _not_after_termination(ctx: BillingContext, value: datetime) -> datetime:
        if ctx.terminated:
            return min(value, ctx.subscription.terminated_at)
        return value

    @staticmethod
    def _resume_after(previous_to: Optional[datetime], value: datetime) -> datetime:
        if previous_to is None:
            return value
        return previous_to + TICK

    def _check_order(self, ctx: BillingContext, field: str, from_value: datetime, to_value: datetime) -> None:
        if to_value < from_value:
            self._fail(ctx, InconsistentBoundaryError(field, from_value, to_value))

    def _fail(self, ctx: BillingContext, error: InconsistentBoundaryError) -> None:
        log_action(
            "dates.compute.inverted_boundary",
            str(error),
            "error",
            log=logger,
            field=error.field,
            interval=ctx.plan.interval.value,
            billing_date=ctx.billing_date.isoformat(),
        )
        raise error


def compute(
    subscription: SubscriptionSnapshot,
    plan: PlanSnapshot,
    billing_date: BillingInput,
    current_usage: bool = False,
) -> PeriodBoundaries:
    """Compute boundaries with the default settings."""
    return DatesEngine().compute(subscription, plan, billing_date, current_usage=current_usage)


def previous_beginning_of_period(
    subscription: SubscriptionSnapshot,
    plan: PlanSnapshot,
    billing_date: BillingInput,
    current_period: bool = False,
) -> datetime:
    return DatesEngine().previous_beginning_of_period(
        subscription, plan, billing_date, current_period=current_period
    )
