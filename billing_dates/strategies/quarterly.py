from billing_dates.calendar_utils import CalendarUnit
from billing_dates.models import PlanInterval
from billing_dates.strategies.monthly import MonthCycleStrategy


class QuarterlyStrategy(MonthCycleStrategy):
    """Three-month periods; fixed charges follow the charges bounds."""

    interval = PlanInterval.QUARTERLY
    cycle_months = 3
    calendar_unit = CalendarUnit.QUARTER
