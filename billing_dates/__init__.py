"""
Billing Dates
=============

Billing-period date engine: places subscription, usage-charge and
fixed-charge periods for daily, weekly, monthly, quarterly, semiannual,
yearly and duration-based plans, under calendar or anniversary alignment,
billed in advance or in arrears.

Usage:
    from billing_dates import compute, PlanSnapshot, SubscriptionSnapshot

    boundaries = compute(subscription, plan, billing_date)
"""

from billing_dates.anchors import MonthAnchor, WeekdayAnchor
from billing_dates.config import Settings, get_settings
from billing_dates.engine import DatesEngine, compute, previous_beginning_of_period
from billing_dates.exceptions import (
    EngineError,
    InconsistentBoundaryError,
    InvalidAnchorError,
    UnsupportedIntervalError,
)
from billing_dates.models import (
    BillingAlignment,
    PayTiming,
    PeriodBoundaries,
    PlanInterval,
    PlanSnapshot,
    SubscriptionSnapshot,
)

__version__ = "0.1.0"

__all__ = [
    # Engine
    "DatesEngine",
    "compute",
    "previous_beginning_of_period",
    # Models
    "PlanInterval",
    "BillingAlignment",
    "PayTiming",
    "SubscriptionSnapshot",
    "PlanSnapshot",
    "PeriodBoundaries",
    # Anchors
    "MonthAnchor",
    "WeekdayAnchor",
    # Errors
    "EngineError",
    "InvalidAnchorError",
    "UnsupportedIntervalError",
    "InconsistentBoundaryError",
    # Config
    "Settings",
    "get_settings",
]
