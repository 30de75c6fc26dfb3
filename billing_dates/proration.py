"""
Proration helpers consuming engine durations.

The usage-proration side divides elapsed days by the nominal period length.
period_duration keeps that denominator at the full period even for an
upgraded subscription terminated mid-period, while persisted_pro_rata only
counts the days actually elapsed.
"""

import math
from datetime import datetime, timedelta
from typing import Optional

from billing_dates.calendar_utils import ONE_DAY
from billing_dates.engine import DatesEngine
from billing_dates.models import PeriodBoundaries, PlanSnapshot, SubscriptionSnapshot


def single_day_price(amount_cents: int, duration_days: int) -> float:
    """Plan amount spread evenly over the days of one period.

    Raises:
        ValueError: If duration_days is not positive
    """
    if duration_days < 1:
        raise ValueError(f"duration_days must be positive, got {duration_days}")
    return amount_cents / duration_days


def plan_single_day_price(boundaries: PeriodBoundaries, plan: PlanSnapshot) -> float:
    return single_day_price(plan.amount_cents, boundaries.duration_days)


def proration_coefficient(elapsed_days: float, period_duration: int) -> float:
    """Share of the period covered by elapsed_days."""
    if period_duration < 1:
        raise ValueError(f"period_duration must be positive, got {period_duration}")
    return elapsed_days / period_duration


def persisted_pro_rata(from_datetime: datetime, to_datetime: datetime, period_duration: int) -> float:
    """Elapsed share of a period, counting partial days as whole ones.

    Example:
        persisted_pro_rata(Mar 1 00:00, Mar 10 23:59:59.999999, 31) -> 10 / 31
    """
    elapsed_days = math.ceil((to_datetime - from_datetime) / ONE_DAY)
    return proration_coefficient(elapsed_days, period_duration)


def period_duration(
    subscription: SubscriptionSnapshot,
    plan: PlanSnapshot,
    to_datetime: datetime,
    engine: Optional[DatesEngine] = None,
) -> int:
    """Nominal charges duration of the period ending at to_datetime.

    An upgraded subscription terminated mid-period is evaluated as current
    usage, so the denominator stays the full period length.
    """
    engine = engine or DatesEngine()
    current_usage = subscription.terminated and subscription.upgraded
    boundaries = engine.compute(
        subscription,
        plan,
        to_datetime + timedelta(days=1),
        current_usage=current_usage,
    )
    return boundaries.charges_duration_days
