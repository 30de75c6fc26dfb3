"""
Per-call computation context.

Strategies are shared, stateless objects. Everything that belongs to a single
compute call (snapshots, localized dates, lifecycle predicates, memoized
intermediate dates) lives on a BillingContext created for that call and
discarded afterwards.
"""

import functools
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Any, Callable, Dict, TypeVar, Union

from dateutil import tz

from billing_dates.calendar_utils import beginning_of_day
from billing_dates.models import PlanSnapshot, SubscriptionSnapshot

F = TypeVar("F", bound=Callable[..., Any])


@dataclass
class BillingContext:
    """Inputs and scratch state of one billing-period computation.

    Attributes:
        subscription: Subscription snapshot.
        plan: Plan snapshot.
        billing_at: Evaluated instant (timezone-aware).
        billing_date: billing_at as a date in the customer's timezone.
        zone: Customer timezone.
        timezone_name: Name the zone was resolved from.
        current_usage: Computing the in-progress usage period.
        week_start: Weekday a calendar week starts on (0 = Monday).
        memo: Intermediate results, keyed by strategy and accessor.
    """
    subscription: SubscriptionSnapshot
    plan: PlanSnapshot
    billing_at: datetime
    billing_date: date
    zone: tzinfo
    timezone_name: str
    current_usage: bool = False
    week_start: int = 0
    memo: Dict[tuple, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def build(
        cls,
        subscription: SubscriptionSnapshot,
        plan: PlanSnapshot,
        billing_date: Union[date, datetime],
        current_usage: bool = False,
        default_timezone: str = "UTC",
        week_start: int = 0,
    ) -> "BillingContext":
        """Localize the billing input into the customer's timezone.

        A datetime is an instant (naive means UTC). A plain date is taken
        as already local and evaluated at its local midnight.

        Raises:
            ValueError: If the default timezone cannot be resolved
        """
        timezone_name = subscription.timezone or default_timezone
        zone = tz.gettz(timezone_name)
        if zone is None:
            raise ValueError(f"Unknown timezone: {timezone_name!r}")

        if isinstance(billing_date, datetime):
            billing_at = billing_date if billing_date.tzinfo else billing_date.replace(tzinfo=tz.UTC)
            local_date = billing_at.astimezone(zone).date()
        else:
            local_date = billing_date
            billing_at = beginning_of_day(local_date, zone)

        return cls(
            subscription=subscription,
            plan=plan,
            billing_at=billing_at,
            billing_date=local_date,
            zone=zone,
            timezone_name=timezone_name,
            current_usage=current_usage,
            week_start=week_start,
        )

    # -------------------------------------------------------------------------
    # Lifecycle predicates, queried identically by every strategy
    # -------------------------------------------------------------------------

    @property
    def anchor_date(self) -> date:
        if self.subscription.anchor_date is not None:
            return self.subscription.anchor_date
        return self.subscription.started_at.astimezone(self.zone).date()

    @property
    def calendar(self) -> bool:
        return self.plan.calendar

    @property
    def pay_in_advance(self) -> bool:
        return self.plan.pay_in_advance

    @property
    def terminated(self) -> bool:
        return self.subscription.terminated

    @property
    def terminated_in_arrears(self) -> bool:
        return self.terminated and not self.pay_in_advance and not self.subscription.downgraded

    @property
    def terminated_in_advance(self) -> bool:
        return self.terminated and self.pay_in_advance

    @property
    def closing_date(self) -> date:
        """Local day a termination closes billing on, never after the billing date."""
        if not self.terminated:
            return self.billing_date
        return min(self.billing_date, self.subscription.terminated_at.astimezone(self.zone).date())

    @property
    def closing_at(self) -> datetime:
        """Instant a termination closes billing at, never after billing_at."""
        if not self.terminated:
            return self.billing_at
        return min(self.billing_at, self.subscription.terminated_at)

    @property
    def timezone_changed(self) -> bool:
        previous = self.subscription.previous_timezone
        return previous is not None and previous != self.timezone_name

    def memoize(self, key: tuple, factory: Callable[[], Any]) -> Any:
        if key not in self.memo:
            self.memo[key] = factory()
        return self.memo[key]


def memoized(method: F) -> F:
    """Cache a strategy accessor's result on the context it was called with."""
    @functools.wraps(method)
    def wrapper(self, ctx: BillingContext, *args: Any) -> Any:
        key = (type(self).__name__, method.__name__) + args
        return ctx.memoize(key, lambda: method(self, ctx, *args))

    return wrapper  # type: ignore
