"""RecurringSchedule class for repeating maintenance definitions."""

from datetime import date
from typing import Optional

from .frequency import Frequency


class RecurringSchedule:
    """A maintenance task that repeats on a calendar or mileage interval."""

    def __init__(
            self,
            id: str,
            name: str,
            vehicle_id: str,
            maintenance_type: str,
            frequency: Frequency,
            frequency_value: int = 1,
            description: Optional[str] = None,
            estimated_cost: float = 0.0,
            estimated_duration: Optional[float] = None,
            assigned_to: Optional[str] = None,
            is_active: bool = True,
            last_executed: Optional[date] = None,
            next_scheduled: Optional[date] = None,
            total_executions: int = 0,
            created_date: Optional[date] = None,
    ):
        if frequency_value is not None and frequency_value < 1:
            raise ValueError(f"frequency_value must be positive, got {frequency_value}")
        self.id = id
        self.name = name
        self.vehicle_id = vehicle_id
        self.maintenance_type = maintenance_type
        self.frequency = frequency
        self.frequency_value = frequency_value or 1
        self.description = description
        self.estimated_cost = estimated_cost or 0.0
        self.estimated_duration = estimated_duration
        self.assigned_to = assigned_to
        self.is_active = bool(is_active)
        self.last_executed = last_executed
        self.next_scheduled = next_scheduled
        self.total_executions = total_executions or 0
        self.created_date = created_date

    @property
    def is_mileage_based(self) -> bool:
        return self.frequency is Frequency.MILEAGE_BASED
