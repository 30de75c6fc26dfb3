"""
Billing dates data models.

Snapshots are read-only copies of caller-owned subscription and plan state.
PeriodBoundaries is the immutable result of one computation.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from dateutil import tz
from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class PlanInterval(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMIANNUAL = "semiannual"
    YEARLY = "yearly"
    DURATION_BASED = "duration_based"


class BillingAlignment(str, Enum):
    CALENDAR = "calendar"
    ANNIVERSARY = "anniversary"


class PayTiming(str, Enum):
    IN_ADVANCE = "in_advance"
    IN_ARREARS = "in_arrears"


def _as_aware(value: Optional[datetime]) -> Optional[datetime]:
    # Naive instants are stored values in UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=tz.UTC)
    return value


def _known_timezone(value: Optional[str]) -> Optional[str]:
    if value is not None and (not value or tz.gettz(value) is None):
        raise ValueError(f"Unknown timezone: {value!r}")
    return value


class SubscriptionSnapshot(BaseModel):
    """Subscription lifecycle state needed to place billing periods.

    anchor_date defaults to started_at expressed in the customer's timezone.
    timezone defaults to the configured DEFAULT_TIMEZONE.
    """

    model_config = ConfigDict(frozen=True)

    started_at: datetime
    anchor_date: Optional[date] = None
    terminated_at: Optional[datetime] = None
    upgraded: bool = False
    downgraded: bool = False
    timezone: Optional[str] = None

    # Continuity across a customer timezone change
    previous_timezone: Optional[str] = None
    previous_charges_to_datetime: Optional[datetime] = None
    previous_fixed_charges_to_datetime: Optional[datetime] = None

    @field_validator(
        "started_at",
        "terminated_at",
        "previous_charges_to_datetime",
        "previous_fixed_charges_to_datetime",
    )
    @classmethod
    def _aware_instants(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_aware(value)

    @field_validator("timezone", "previous_timezone")
    @classmethod
    def _resolvable_timezone(cls, value: Optional[str]) -> Optional[str]:
        return _known_timezone(value)

    @property
    def terminated(self) -> bool:
        return self.terminated_at is not None


class PlanSnapshot(BaseModel):
    """Plan configuration driving period placement."""

    model_config = ConfigDict(frozen=True)

    interval: PlanInterval
    billing_alignment: BillingAlignment = BillingAlignment.CALENDAR
    pay_timing: PayTiming = PayTiming.IN_ARREARS
    bill_charges_monthly: bool = False
    bill_fixed_charges_monthly: bool = False
    block_time_in_minutes: Optional[int] = None
    amount_cents: int = 0

    @model_validator(mode="after")
    def _duration_based_needs_block(self) -> "PlanSnapshot":
        if self.interval == PlanInterval.DURATION_BASED:
            if self.block_time_in_minutes is None or self.block_time_in_minutes <= 0:
                raise ValueError("duration_based plans need a positive block_time_in_minutes")
        return self

    @property
    def pay_in_advance(self) -> bool:
        return self.pay_timing == PayTiming.IN_ADVANCE

    @property
    def calendar(self) -> bool:
        return self.billing_alignment == BillingAlignment.CALENDAR


class PeriodBoundaries(BaseModel):
    """Boundaries of one billing evaluation, all as UTC instants.

    Periods are inclusive on both ends: a period ending on a local day ends
    at 23:59:59.999999 local time. Day counts are nominal period lengths,
    unaffected by start or termination clamping.
    """

    model_config = ConfigDict(frozen=True)

    from_datetime: datetime
    to_datetime: datetime
    charges_from_datetime: datetime
    charges_to_datetime: datetime
    fixed_charges_from_datetime: datetime
    fixed_charges_to_datetime: datetime
    duration_days: int
    charges_duration_days: int
    fixed_charges_duration_days: int
    next_end_of_period: datetime
    duration_minutes: Optional[int] = None

    @property
    def charges_period_valid(self) -> bool:
        """False when the usage period lies entirely before the subscription start."""
        return self.charges_from_datetime < self.charges_to_datetime

    @property
    def fixed_charges_period_valid(self) -> bool:
        return self.fixed_charges_from_datetime < self.fixed_charges_to_datetime
