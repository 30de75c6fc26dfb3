from billing_dates.calendar_utils import CalendarUnit
from billing_dates.models import PlanInterval
from billing_dates.strategies.monthly import MonthCycleStrategy, MonthlyChargesMixin


class SemiannualStrategy(MonthlyChargesMixin, MonthCycleStrategy):
    """Six-month periods, with optional monthly charge sub-periods."""

    interval = PlanInterval.SEMIANNUAL
    cycle_months = 6
    calendar_unit = CalendarUnit.HALF_YEAR
