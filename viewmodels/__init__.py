"""
Fleet maintenance view-models.

This package turns maintenance service payloads into display-ready data:
- Status, Priority, Frequency: closed enums for backend strings
- MaintenanceItem, RecurringSchedule, Part, Technician: records
- classify / status_badge / mileage progress: per-item display state
- build_month_grid: 6x7 calendar grid for the scheduler
- aggregate_costs: cost variance by vehicle and type
- describe_frequency / next_occurrence: recurring schedule projection
- Session: explicit login session with a bounded lifetime
"""

from .status import Status, Priority
from .frequency import Frequency
from .maintenance_item import MaintenanceItem
from .recurring_schedule import RecurringSchedule
from .part import Part, InventorySummary, summarize_inventory
from .technician import Technician, RosterSummary, summarize_roster
from .calculations import (
    calc_mileage_progress,
    calc_next_date,
    calc_variance_percent,
    calc_percent,
)
from .classifier import Badge, STATUS_BADGES, classify, status_badge, sort_by_urgency
from .calendar_grid import (
    DaySchedule,
    build_month_grid,
    month_rows,
    items_due_in_month,
    shift_month,
)
from .cost_analytics import (
    CostAnalytics,
    VehicleCost,
    TypeCost,
    MaintenanceSummary,
    aggregate_costs,
    sorted_by_type,
    sorted_by_vehicle,
    summarize_items,
)
from .recurring import (
    UNKNOWN,
    Unknown,
    ScheduleSummary,
    describe_frequency,
    next_occurrence,
    monthly_cost_estimate,
    summarize_schedules,
)
from .session import Session, SessionStore, issue_session
from .loader import (
    Snapshot,
    parse_date,
    parse_maintenance_item,
    parse_recurring_schedule,
    parse_part,
    parse_technician,
    parse_many,
    snapshot_from_dict,
    load_snapshot,
    save_snapshot,
)

__all__ = [
    "Status",
    "Priority",
    "Frequency",
    "MaintenanceItem",
    "RecurringSchedule",
    "Part",
    "InventorySummary",
    "summarize_inventory",
    "Technician",
    "RosterSummary",
    "summarize_roster",
    "calc_mileage_progress",
    "calc_next_date",
    "calc_variance_percent",
    "calc_percent",
    "Badge",
    "STATUS_BADGES",
    "classify",
    "status_badge",
    "sort_by_urgency",
    "DaySchedule",
    "build_month_grid",
    "month_rows",
    "items_due_in_month",
    "shift_month",
    "CostAnalytics",
    "VehicleCost",
    "TypeCost",
    "MaintenanceSummary",
    "aggregate_costs",
    "sorted_by_type",
    "sorted_by_vehicle",
    "summarize_items",
    "UNKNOWN",
    "Unknown",
    "ScheduleSummary",
    "describe_frequency",
    "next_occurrence",
    "monthly_cost_estimate",
    "summarize_schedules",
    "Session",
    "SessionStore",
    "issue_session",
    "Snapshot",
    "parse_date",
    "parse_maintenance_item",
    "parse_recurring_schedule",
    "parse_part",
    "parse_technician",
    "parse_many",
    "snapshot_from_dict",
    "load_snapshot",
    "save_snapshot",
]
