"""Month calendar grid for the maintenance scheduler view."""

from calendar import monthrange
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from .maintenance_item import MaintenanceItem

GRID_WEEKS = 6
GRID_DAYS = GRID_WEEKS * 7


@dataclass
class DaySchedule:
    """One cell of the month grid."""

    date: date
    items: List[MaintenanceItem] = field(default_factory=list)
    is_today: bool = False
    is_current_month: bool = False


def _day_of(value) -> date:
    # datetimes are truncated to their calendar day
    if isinstance(value, datetime):
        return value.date()
    return value


def first_weekday_sunday(year: int, month: int) -> int:
    """Weekday of the 1st of the month with Sunday = 0."""
    return (date(year, month, 1).weekday() + 1) % 7


def build_month_grid(
    year: int,
    month: int,
    items: Iterable[MaintenanceItem],
    today: Optional[date] = None,
) -> List[DaySchedule]:
    """
    Build the 6x7 grid shown for a month.

    Leading cells come from the end of the previous month (as many as the
    weekday of the 1st, Sunday first), trailing cells from the start of the
    next month. Always 42 cells in ascending date order. Each cell holds the
    items due on that day in their input order.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be 1..12, got {month}")
    today = _day_of(today) if today is not None else date.today()

    by_day: Dict[date, List[MaintenanceItem]] = defaultdict(list)
    for item in items:
        if item.due_date is not None:
            by_day[_day_of(item.due_date)].append(item)

    out_of_range = ValueError(f"{year}-{month:02d} is outside the supported date range")
    if not date.min.year <= year <= date.max.year:
        raise out_of_range
    first_ordinal = date(year, month, 1).toordinal() - first_weekday_sunday(year, month)
    # padding cells must also be representable dates
    if first_ordinal < date.min.toordinal() or first_ordinal + GRID_DAYS - 1 > date.max.toordinal():
        raise out_of_range
    start = date.fromordinal(first_ordinal)
    days = []
    for offset in range(GRID_DAYS):
        day = start + timedelta(days=offset)
        in_month = day.year == year and day.month == month
        days.append(
            DaySchedule(
                date=day,
                items=list(by_day.get(day, [])),
                is_today=in_month and day == today,
                is_current_month=in_month,
            )
        )
    return days


def month_rows(grid: List[DaySchedule]) -> List[List[DaySchedule]]:
    """Split a grid into weeks of 7 days."""
    return [grid[i:i + 7] for i in range(0, len(grid), 7)]


def items_due_in_month(items: Iterable[MaintenanceItem], year: int, month: int) -> int:
    """Count items whose due date falls in the given month."""
    count = 0
    for item in items:
        if item.due_date is None:
            continue
        due = _day_of(item.due_date)
        if due.year == year and due.month == month:
            count += 1
    return count


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move (year, month) by delta months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]
