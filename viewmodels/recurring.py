"""Labels, next-run projection and cost estimates for recurring schedules."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Optional, Union

from .calculations import calc_next_date
from .frequency import Frequency
from .recurring_schedule import RecurringSchedule


class Unknown(Enum):
    """Marker for a projection this layer cannot compute."""

    UNKNOWN = "unknown"

    def __bool__(self) -> bool:
        return False


UNKNOWN = Unknown.UNKNOWN

FREQUENCY_LABELS = {
    Frequency.DAILY: "Daily",
    Frequency.WEEKLY: "Weekly",
    Frequency.MONTHLY: "Monthly",
    Frequency.QUARTERLY: "Quarterly",
    Frequency.YEARLY: "Yearly",
}

# (days, months, years) added per unit of frequency_value
_STEP = {
    Frequency.DAILY: (1, 0, 0),
    Frequency.WEEKLY: (7, 0, 0),
    Frequency.MONTHLY: (0, 1, 0),
    Frequency.QUARTERLY: (0, 3, 0),
    Frequency.YEARLY: (0, 0, 1),
}

# Only weekly and monthly schedules feed the monthly cost tile
MONTHLY_MULTIPLIERS = {
    Frequency.WEEKLY: 4,
    Frequency.MONTHLY: 1,
}


def describe_frequency(schedule: RecurringSchedule) -> str:
    """Human-readable cadence, e.g. 'Monthly', 'Every 2 weeks', 'Every 5,000 km'."""
    value = schedule.frequency_value
    if schedule.frequency is Frequency.MILEAGE_BASED:
        return f"Every {value:,} km"
    if value == 1:
        return FREQUENCY_LABELS[schedule.frequency]
    return f"Every {value} {schedule.frequency.unit}s"


def next_occurrence(
    schedule: RecurringSchedule, from_date: Optional[date] = None
) -> Union[date, Unknown]:
    """
    Project the next run date of a schedule.

    The base is last_executed, falling back to from_date for schedules that
    have never run. Mileage-based schedules need odometer data this layer
    does not have, so they are always UNKNOWN, as is a schedule with no base.
    """
    if schedule.frequency is Frequency.MILEAGE_BASED:
        return UNKNOWN
    base = schedule.last_executed or from_date
    if base is None:
        return UNKNOWN
    days, months, years = _STEP[schedule.frequency]
    n = schedule.frequency_value
    return calc_next_date(base, days=days * n, months=months * n, years=years * n)


def monthly_cost_estimate(schedules: Iterable[RecurringSchedule]) -> float:
    """Approximate monthly spend of active weekly and monthly schedules."""
    total = 0.0
    for schedule in schedules:
        if not schedule.is_active:
            continue
        multiplier = MONTHLY_MULTIPLIERS.get(schedule.frequency)
        if multiplier is None:
            continue
        total += schedule.estimated_cost * multiplier / schedule.frequency_value
    return total


@dataclass
class ScheduleSummary:
    """Counts for the recurring-maintenance dashboard tiles."""

    active: List[RecurringSchedule]
    paused: List[RecurringSchedule]
    upcoming_this_month: List[RecurringSchedule]
    monthly_cost: float

    @property
    def counts(self) -> Dict[str, int]:
        return {
            "total": len(self.active) + len(self.paused),
            "active": len(self.active),
            "paused": len(self.paused),
            "upcoming_this_month": len(self.upcoming_this_month),
        }


def summarize_schedules(
    schedules: Iterable[RecurringSchedule], today: Optional[date] = None
) -> ScheduleSummary:
    today = today or date.today()
    schedules = list(schedules)
    active = [s for s in schedules if s.is_active]
    paused = [s for s in schedules if not s.is_active]
    upcoming = [
        s
        for s in active
        if s.next_scheduled is not None
        and (s.next_scheduled.year, s.next_scheduled.month) == (today.year, today.month)
    ]
    return ScheduleSummary(
        active=active,
        paused=paused,
        upcoming_this_month=upcoming,
        monthly_cost=monthly_cost_estimate(schedules),
    )
