"""Status and Priority enums for maintenance items."""

from enum import Enum


class Status(Enum):
    """Maintenance lifecycle status as reported by the maintenance service.

    Values are the backend strings. Sorting uses ``urgency`` (lower = more urgent).
    """

    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    IN_PROGRESS = "in_progress"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def urgency(self) -> int:
        return _URGENCY[self]

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @classmethod
    def parse(cls, text: str) -> "Status":
        """Parse a backend status string (case-insensitive, '-' or '_')."""
        if isinstance(text, Status):
            return text
        normalized = str(text).strip().lower().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown maintenance status: {text!r}") from None


_URGENCY = {
    Status.OVERDUE: 1,
    Status.DUE_SOON: 2,
    Status.IN_PROGRESS: 3,
    Status.SCHEDULED: 4,
    Status.COMPLETED: 5,
    Status.CANCELLED: 6,
}


class Priority(Enum):
    """Work priority. ``urgent`` is accepted from older service versions."""

    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def color(self) -> str:
        return _PRIORITY_COLORS[self]

    @classmethod
    def parse(cls, text: str) -> "Priority":
        if isinstance(text, Priority):
            return text
        normalized = str(text).strip().lower()
        # "normal" was used by the dashboard forms for medium
        if normalized == "normal":
            return cls.MEDIUM
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown priority: {text!r}") from None


_PRIORITY_COLORS = {
    Priority.URGENT: "red",
    Priority.HIGH: "orange",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
}
