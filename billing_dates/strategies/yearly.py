from billing_dates.calendar_utils import CalendarUnit
from billing_dates.models import PlanInterval
from billing_dates.strategies.monthly import MonthCycleStrategy, MonthlyChargesMixin


class YearlyStrategy(MonthlyChargesMixin, MonthCycleStrategy):
    """Twelve-month periods, with optional monthly charge sub-periods."""

    interval = PlanInterval.YEARLY
    cycle_months = 12
    calendar_unit = CalendarUnit.YEAR
