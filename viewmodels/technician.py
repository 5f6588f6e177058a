"""Technician class and roster summary."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

TECHNICIAN_STATUSES = ("available", "busy", "off-duty")


class Technician:
    """A member of the maintenance roster."""

    def __init__(
            self,
            id: str,
            name: str,
            email: Optional[str] = None,
            phone: Optional[str] = None,
            specialization: Optional[List[str]] = None,
            status: str = "available",
            rating: float = 0.0,
            completed_jobs: int = 0,
            active_jobs: int = 0,
            certifications: Optional[List[str]] = None,
            hourly_rate: float = 0.0,
            join_date: Optional[date] = None,
    ):
        if status not in TECHNICIAN_STATUSES:
            raise ValueError(f"Unknown technician status: {status!r}")
        self.id = id
        self.name = name
        self.email = email
        self.phone = phone
        self.specialization = specialization or []
        self.status = status
        self.rating = rating or 0.0
        self.completed_jobs = completed_jobs or 0
        self.active_jobs = active_jobs or 0
        self.certifications = certifications or []
        self.hourly_rate = hourly_rate or 0.0
        self.join_date = join_date


@dataclass
class RosterSummary:
    available: int
    busy: int
    off_duty: int
    average_rating: float
    active_jobs: int


def summarize_roster(technicians: Iterable[Technician]) -> RosterSummary:
    techs = list(technicians)
    average = sum(t.rating for t in techs) / len(techs) if techs else 0.0
    return RosterSummary(
        available=sum(1 for t in techs if t.status == "available"),
        busy=sum(1 for t in techs if t.status == "busy"),
        off_duty=sum(1 for t in techs if t.status == "off-duty"),
        average_rating=average,
        active_jobs=sum(t.active_jobs for t in techs),
    )
