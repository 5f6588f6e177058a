"""Cost variance analytics over maintenance items."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from .calculations import calc_percent, calc_variance_percent
from .maintenance_item import MaintenanceItem
from .status import Priority, Status


@dataclass
class VehicleCost:
    estimated: float = 0.0
    actual: float = 0.0

    @property
    def variance(self) -> float:
        return self.actual - self.estimated


@dataclass
class TypeCost:
    estimated: float = 0.0
    actual: float = 0.0
    count: int = 0

    @property
    def average_estimated(self) -> float:
        """Average estimated cost per item (display only)."""
        return self.estimated / self.count if self.count else 0.0


@dataclass
class CostAnalytics:
    """Totals and breakdowns shown on the maintenance analytics page."""

    total_estimated: float = 0.0
    total_actual: float = 0.0
    by_vehicle: Dict[str, VehicleCost] = field(default_factory=dict)
    by_type: Dict[str, TypeCost] = field(default_factory=dict)
    completed_count: int = 0
    pending_count: int = 0

    @property
    def variance(self) -> float:
        """Positive means over budget."""
        return self.total_actual - self.total_estimated

    @property
    def variance_percent(self) -> float:
        return calc_variance_percent(self.variance, self.total_estimated)

    @property
    def is_over_budget(self) -> bool:
        return self.variance > 0

    @property
    def completion_rate(self) -> float:
        return calc_percent(
            self.completed_count, self.completed_count + self.pending_count
        )

    def to_dict(self) -> dict:
        """Same shape as the service's /maintenance/analytics/costs payload."""
        return {
            "total_estimated": self.total_estimated,
            "total_actual": self.total_actual,
            "variance": self.variance,
            "variance_percent": self.variance_percent,
            "by_vehicle": {
                vid: {"estimated": c.estimated, "actual": c.actual, "variance": c.variance}
                for vid, c in self.by_vehicle.items()
            },
            "by_type": {
                t: {"estimated": c.estimated, "actual": c.actual, "count": c.count}
                for t, c in self.by_type.items()
            },
            "completed_count": self.completed_count,
            "pending_count": self.pending_count,
        }


def aggregate_costs(items: Iterable[MaintenanceItem]) -> CostAnalytics:
    """
    Sum estimated and actual costs overall, per vehicle and per type.

    Missing costs count as 0. Items are "completed" only with status
    COMPLETED; everything else (cancelled included) is pending.
    """
    analytics = CostAnalytics()
    for item in items:
        estimated = item.estimated_cost or 0.0
        actual = item.actual_cost or 0.0

        analytics.total_estimated += estimated
        analytics.total_actual += actual

        vehicle = analytics.by_vehicle.setdefault(item.vehicle_id, VehicleCost())
        vehicle.estimated += estimated
        vehicle.actual += actual

        by_type = analytics.by_type.setdefault(item.type, TypeCost())
        by_type.estimated += estimated
        by_type.actual += actual
        by_type.count += 1

        if item.status == Status.COMPLETED:
            analytics.completed_count += 1
        else:
            analytics.pending_count += 1
    return analytics


def sorted_by_type(analytics: CostAnalytics) -> List[Tuple[str, TypeCost]]:
    """Type breakdown, highest estimated cost first (ties by name)."""
    return sorted(analytics.by_type.items(), key=lambda kv: (-kv[1].estimated, kv[0]))


def sorted_by_vehicle(analytics: CostAnalytics) -> List[Tuple[str, VehicleCost]]:
    return sorted(analytics.by_vehicle.items(), key=lambda kv: kv[0])


@dataclass
class MaintenanceSummary:
    """Client-side equivalent of the service's /maintenance/summary payload."""

    total_items: int
    by_status: Dict[str, int]
    by_priority: Dict[str, int]
    total_estimated_cost: float
    total_actual_cost: float

    @property
    def overdue_count(self) -> int:
        return self.by_status.get(Status.OVERDUE.value, 0)

    @property
    def due_soon_count(self) -> int:
        return self.by_status.get(Status.DUE_SOON.value, 0)

    @property
    def upcoming_count(self) -> int:
        return self.overdue_count + self.due_soon_count


def summarize_items(items: Iterable[MaintenanceItem]) -> MaintenanceSummary:
    by_status = {s.value: 0 for s in Status}
    by_priority = {p.value: 0 for p in Priority}
    total = 0
    estimated = 0.0
    actual = 0.0
    for item in items:
        total += 1
        by_status[item.status.value] += 1
        by_priority[item.priority.value] += 1
        estimated += item.estimated_cost or 0.0
        actual += item.actual_cost or 0.0
    return MaintenanceSummary(
        total_items=total,
        by_status=by_status,
        by_priority=by_priority,
        total_estimated_cost=estimated,
        total_actual_cost=actual,
    )
