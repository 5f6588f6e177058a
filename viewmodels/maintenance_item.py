"""MaintenanceItem class for work orders fetched from the maintenance service."""

from datetime import date
from typing import Optional

from .status import Priority, Status
from .calculations import calc_mileage_progress


class MaintenanceItem:
    """A single maintenance work item for one vehicle."""

    def __init__(
            self,
            id: str,
            vehicle_id: str,
            type: str,
            status: Status,
            due_date: date,
            current_mileage: int = 0,
            due_mileage: int = 0,
            estimated_cost: float = 0.0,
            actual_cost: Optional[float] = None,
            assigned_to: Optional[str] = None,
            priority: Priority = Priority.MEDIUM,
            description: Optional[str] = None,
            notes: Optional[str] = None,
            assigned_technician: Optional[str] = None,
            scheduled_date: Optional[date] = None,
            completed_date: Optional[date] = None,
    ):
        self.id = id
        self.vehicle_id = vehicle_id
        self.type = type
        self.status = status
        self.due_date = due_date
        self.current_mileage = current_mileage or 0
        self.due_mileage = due_mileage or 0
        self.estimated_cost = estimated_cost or 0.0
        self.actual_cost = actual_cost
        self.assigned_to = assigned_to
        self.priority = priority
        self.description = description
        self.notes = notes
        self.assigned_technician = assigned_technician
        self.scheduled_date = scheduled_date
        self.completed_date = completed_date

    @property
    def is_completed(self) -> bool:
        return self.status == Status.COMPLETED

    @property
    def mileage_progress(self) -> float:
        """Percent of the way from 0 to due_mileage, for the progress bar."""
        return calc_mileage_progress(self.current_mileage, self.due_mileage)

    @property
    def miles_remaining(self) -> Optional[int]:
        if not self.due_mileage:
            return None
        return self.due_mileage - self.current_mileage

    def __repr__(self) -> str:
        return (
            f"MaintenanceItem(id={self.id!r}, vehicle_id={self.vehicle_id!r}, "
            f"type={self.type!r}, status={self.status.value}, "
            f"due_date={self.due_date.isoformat()})"
        )
