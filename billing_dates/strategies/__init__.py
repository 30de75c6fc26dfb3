"""
Interval Strategy Registry
==========================

Maps each plan interval to the strategy placing its billing periods.

Supported intervals:
- daily: single local days
- weekly: calendar weeks or anchor-weekday weeks
- monthly, quarterly, semiannual, yearly: month cycles of width 1, 3, 6, 12
- duration_based: fixed blocks of minutes
"""

from typing import Any, Dict

from billing_dates.exceptions import UnsupportedIntervalError
from billing_dates.models import PlanInterval
from billing_dates.strategies.base import AlignedStrategy, IntervalStrategy
from billing_dates.strategies.daily import DailyStrategy
from billing_dates.strategies.duration_based import DurationBasedStrategy
from billing_dates.strategies.monthly import MonthCycleStrategy, MonthlyStrategy
from billing_dates.strategies.quarterly import QuarterlyStrategy
from billing_dates.strategies.semiannual import SemiannualStrategy
from billing_dates.strategies.weekly import WeeklyStrategy
from billing_dates.strategies.yearly import YearlyStrategy


# Registry maps plan interval -> shared strategy instance
STRATEGIES: Dict[PlanInterval, IntervalStrategy] = {
    PlanInterval.DAILY: DailyStrategy(),
    PlanInterval.WEEKLY: WeeklyStrategy(),
    PlanInterval.MONTHLY: MonthlyStrategy(),
    PlanInterval.QUARTERLY: QuarterlyStrategy(),
    PlanInterval.SEMIANNUAL: SemiannualStrategy(),
    PlanInterval.YEARLY: YearlyStrategy(),
    PlanInterval.DURATION_BASED: DurationBasedStrategy(),
}


def get_strategy(interval: Any) -> IntervalStrategy:
    """Get the strategy for a plan interval.

    Args:
        interval: A PlanInterval or its string value (e.g. 'monthly')

    Returns:
        The registered strategy

    Raises:
        UnsupportedIntervalError: If the interval is unknown or unregistered
    """
    try:
        key = PlanInterval(interval)
    except ValueError:
        raise UnsupportedIntervalError(interval)

    strategy = STRATEGIES.get(key)
    if strategy is None:
        raise UnsupportedIntervalError(interval)
    return strategy


__all__ = [
    "STRATEGIES",
    "get_strategy",
    "IntervalStrategy",
    "AlignedStrategy",
    "MonthCycleStrategy",
    "DailyStrategy",
    "WeeklyStrategy",
    "MonthlyStrategy",
    "QuarterlyStrategy",
    "SemiannualStrategy",
    "YearlyStrategy",
    "DurationBasedStrategy",
]
