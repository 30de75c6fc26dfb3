"""
Billing Dates Errors
====================

Typed failures raised by the billing-period date engine.

All errors derive from EngineError so invoicing callers can catch the whole
family at once. None of them are transient: the computation is pure and
retrying with the same inputs fails the same way.
"""

from datetime import date, datetime
from typing import Any, Optional, Union


class EngineError(Exception):
    """Base class for billing-period computation failures."""
    pass


class InvalidAnchorError(EngineError):
    """Raised when an anchor day, month, weekday or cycle width cannot be resolved."""

    def __init__(self, message: str, anchor: Any = None):
        super().__init__(message)
        self.anchor = anchor


class UnsupportedIntervalError(EngineError):
    """Raised when no strategy is registered for a plan interval."""

    def __init__(self, interval: Any):
        super().__init__(f"Unsupported plan interval: {interval!r}")
        self.interval = interval


class InconsistentBoundaryError(EngineError):
    """Raised when a computed period ends before it starts.

    This is a logic defect, never a user error. Invoicing for the
    subscription must stop rather than bill a negative duration.
    """

    def __init__(
        self,
        field: str,
        from_value: Optional[Union[date, datetime]] = None,
        to_value: Optional[Union[date, datetime]] = None,
        message: Optional[str] = None,
    ):
        super().__init__(
            message or f"Inverted {field} boundaries: {from_value} > {to_value}"
        )
        self.field = field
        self.from_value = from_value
        self.to_value = to_value
