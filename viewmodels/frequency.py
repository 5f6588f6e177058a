"""Frequency enum for recurring maintenance schedules."""

from enum import Enum


class Frequency(Enum):
    """How often a recurring schedule repeats."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    MILEAGE_BASED = "mileage-based"

    @property
    def is_calendar_based(self) -> bool:
        return self is not Frequency.MILEAGE_BASED

    @property
    def unit(self) -> str:
        """Singular unit name used in 'Every N units' labels."""
        return _UNITS[self]

    @classmethod
    def parse(cls, text: str) -> "Frequency":
        if isinstance(text, Frequency):
            return text
        normalized = str(text).strip().lower().replace("_", "-")
        if normalized == "mileage":
            return cls.MILEAGE_BASED
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown frequency: {text!r}") from None


_UNITS = {
    Frequency.DAILY: "day",
    Frequency.WEEKLY: "week",
    Frequency.MONTHLY: "month",
    Frequency.QUARTERLY: "quarter",
    Frequency.YEARLY: "year",
    Frequency.MILEAGE_BASED: "km",
}
