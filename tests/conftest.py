"""
Pytest fixtures for the billing dates test suite.

Provides an engine with isolated settings and factories for subscription
and plan snapshots.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable

import pytest

from billing_dates import (
    BillingAlignment,
    DatesEngine,
    PayTiming,
    PlanInterval,
    PlanSnapshot,
    Settings,
    SubscriptionSnapshot,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_STARTED_AT = datetime(2021, 2, 2, tzinfo=timezone.utc)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings that ignore the environment and any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def engine(settings: Settings) -> DatesEngine:
    return DatesEngine(settings=settings)


@pytest.fixture
def make_subscription() -> Callable[..., SubscriptionSnapshot]:
    """Factory for subscription snapshots started on 2021-02-02 in UTC."""
    def _make(**overrides: Any) -> SubscriptionSnapshot:
        values = {"started_at": DEFAULT_STARTED_AT, "timezone": "UTC"}
        values.update(overrides)
        return SubscriptionSnapshot(**values)

    return _make


@pytest.fixture
def make_plan() -> Callable[..., PlanSnapshot]:
    """Factory for plan snapshots; alignment and timing accept short names."""
    def _make(
        interval: PlanInterval = PlanInterval.MONTHLY,
        alignment: str = "calendar",
        advance: bool = False,
        **overrides: Any
    ) -> PlanSnapshot:
        return PlanSnapshot(
            interval=interval,
            billing_alignment=BillingAlignment(alignment),
            pay_timing=PayTiming.IN_ADVANCE if advance else PayTiming.IN_ARREARS,
            **overrides
        )

    return _make
