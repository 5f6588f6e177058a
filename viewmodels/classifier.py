"""Status classification and badge lookup for maintenance items."""

from dataclasses import dataclass

from .maintenance_item import MaintenanceItem
from .status import Status


@dataclass(frozen=True)
class Badge:
    """Display attributes for a status badge."""

    label: str
    color: str
    icon: str


STATUS_BADGES = {
    Status.OVERDUE: Badge("Overdue", "red", "alert-triangle"),
    Status.DUE_SOON: Badge("Due Soon", "orange", "clock"),
    Status.SCHEDULED: Badge("Scheduled", "blue", "calendar"),
    Status.IN_PROGRESS: Badge("In Progress", "yellow", "wrench"),
    Status.COMPLETED: Badge("Completed", "green", "check-circle"),
    Status.CANCELLED: Badge("Cancelled", "gray", "x-circle"),
}


def classify(item: MaintenanceItem) -> Status:
    """
    Status of a maintenance item.

    The maintenance service is the only owner of this value; dates and
    mileage are never used to second-guess it here.
    """
    return item.status


def status_badge(status: Status) -> Badge:
    return STATUS_BADGES[status]


def sort_by_urgency(items):
    """Most urgent first, then earliest due date."""
    return sorted(items, key=lambda i: (i.status.urgency, i.due_date, i.id))
