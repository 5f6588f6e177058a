"""Helper functions for mileage, date and cost calculations."""

from datetime import date
from dateutil.relativedelta import relativedelta
from typing import Optional


def calc_mileage_progress(current: Optional[float], due: Optional[float]) -> float:
    """
    Percent of due mileage reached, clamped to [0, 100].

    A due mileage of zero (or missing) means no mileage target is set, so
    progress is 0 rather than a division by zero.
    """
    if not due or due <= 0 or not current or current <= 0:
        return 0.0
    return min(current / due * 100, 100.0)


def calc_next_date(
    last_date: Optional[date], days: int = 0, months: int = 0, years: int = 0
) -> Optional[date]:
    """
    Add a calendar interval to a date.

    Month and year steps clamp to the last valid day of the target month
    (Jan 31 + 1 month -> Feb 28/29).
    """
    if last_date is None:
        return None
    return last_date + relativedelta(years=years, months=months, days=days)


def calc_variance_percent(variance: float, estimated: float) -> float:
    """variance / estimated * 100, or 0 when nothing was estimated."""
    if not estimated or estimated <= 0:
        return 0.0
    return variance / estimated * 100


def calc_percent(part: float, whole: float) -> float:
    """part / whole * 100, or 0 when whole is empty."""
    if not whole:
        return 0.0
    return part / whole * 100
