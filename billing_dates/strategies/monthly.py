"""Monthly plans, and the month-cycle machinery shared by longer intervals."""

from datetime import date

from billing_dates.anchors import MonthAnchor
from billing_dates.calendar_utils import (
    CalendarUnit,
    add_months,
    beginning_of,
    end_of,
    end_of_month,
    is_last_day_of_month,
)
from billing_dates.context import BillingContext, memoized
from billing_dates.models import PlanInterval
from billing_dates.strategies.base import AlignedStrategy


class MonthCycleStrategy(AlignedStrategy):
    """Periods spanning a whole number of months.

    Attributes:
        cycle_months: Months per period.
        calendar_unit: Calendar unit used under calendar alignment.
    """

    cycle_months: int = 1
    calendar_unit: CalendarUnit = CalendarUnit.MONTH

    @memoized
    def resolver(self, ctx: BillingContext) -> MonthAnchor:
        return MonthAnchor.from_date(ctx.anchor_date, self.cycle_months)

    def calendar_start(self, ctx: BillingContext, reference: date) -> date:
        return beginning_of(self.calendar_unit, reference)

    def calendar_end(self, ctx: BillingContext, start: date) -> date:
        return end_of(self.calendar_unit, start)

    def shift_back(self, ctx: BillingContext, value: date) -> date:
        shifted = add_months(value, -self.cycle_months)
        # Month-end billing dates look back to a month end, e.g. Apr 30 -> Mar 31
        if is_last_day_of_month(value):
            return end_of_month(shifted)
        return shifted


class MonthlyStrategy(MonthCycleStrategy):
    interval = PlanInterval.MONTHLY
    cycle_months = 1
    calendar_unit = CalendarUnit.MONTH


class MonthlyChargesMixin:
    """Bills charges (and optionally fixed charges) on monthly sub-periods.

    Used by intervals longer than a month when the plan asks for monthly
    usage billing.
    """

    monthly = MonthlyStrategy()

    def charges_strategy(self, ctx: BillingContext):
        if ctx.plan.bill_charges_monthly:
            return self.monthly
        return self

    def fixed_charges_strategy(self, ctx: BillingContext):
        if ctx.plan.bill_fixed_charges_monthly:
            return self.monthly
        return self
