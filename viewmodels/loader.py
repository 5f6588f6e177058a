"""Parsing service payloads into model objects, and snapshot file I/O."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar, Union

import yaml
from dateutil import parser as date_parser

from .frequency import Frequency
from .maintenance_item import MaintenanceItem
from .part import Part
from .recurring_schedule import RecurringSchedule
from .status import Priority, Status
from .technician import Technician

logger = logging.getLogger(__name__)

T = TypeVar("T")

SNAPSHOT_KEYS = ("maintenance", "recurring_schedules", "parts", "technicians")


def parse_date(value: Any) -> Optional[date]:
    """Parse an ISO 8601 date or datetime (string or object) to a calendar date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date_parser.isoparse(str(value)).date()
    except (ValueError, OverflowError):
        raise ValueError(f"Invalid date: {value!r}") from None


def _float(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    if value is None or value == "":
        return default
    return float(value)


def _int(value: Any, default: int = 0) -> int:
    if value is None or value == "":
        return default
    return int(value)


def _bool(value: Any, default: bool) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "1", "yes"):
        return True
    if text in ("false", "0", "no"):
        return False
    raise ValueError(f"Invalid boolean: {value!r}")


def _require_mapping(dct: Any) -> None:
    if not isinstance(dct, dict):
        raise ValueError(f"expected an object, got {type(dct).__name__}")


def parse_maintenance_item(dct: Dict[str, Any]) -> MaintenanceItem:
    """Build a MaintenanceItem from a maintenance service record."""
    _require_mapping(dct)
    due_date = parse_date(dct.get("due_date") or dct.get("dueDate"))
    if due_date is None:
        raise ValueError("Maintenance item missing field 'due_date'")
    try:
        return MaintenanceItem(
            id=str(dct["id"]),
            vehicle_id=str(dct.get("vehicle_id") or dct["vehicle"]),
            type=dct["type"],
            status=Status.parse(dct["status"]),
            due_date=due_date,
            current_mileage=_int(dct.get("current_mileage")),
            due_mileage=_int(dct.get("due_mileage")),
            estimated_cost=_float(dct.get("estimated_cost")),
            actual_cost=_float(dct.get("actual_cost"), default=None),
            assigned_to=dct.get("assigned_to"),
            priority=Priority.parse(dct.get("priority") or "medium"),
            description=dct.get("description"),
            notes=dct.get("notes"),
            assigned_technician=dct.get("assigned_technician"),
            scheduled_date=parse_date(dct.get("scheduled_date")),
            completed_date=parse_date(dct.get("completed_date")),
        )
    except KeyError as e:
        raise ValueError(f"Maintenance item missing field {e}") from None
    except TypeError as e:
        raise ValueError(f"Malformed maintenance item: {e}") from None


def parse_recurring_schedule(dct: Dict[str, Any]) -> RecurringSchedule:
    """Build a RecurringSchedule from a service record."""
    _require_mapping(dct)
    try:
        return RecurringSchedule(
            id=str(dct["id"]),
            name=dct["name"],
            vehicle_id=str(dct["vehicle_id"]),
            maintenance_type=dct["maintenance_type"],
            frequency=Frequency.parse(dct["frequency"]),
            frequency_value=_int(dct.get("frequency_value"), default=1),
            description=dct.get("description"),
            estimated_cost=_float(dct.get("estimated_cost")),
            estimated_duration=_float(dct.get("estimated_duration"), default=None),
            assigned_to=dct.get("assigned_to"),
            is_active=_bool(dct.get("is_active"), default=True),
            last_executed=parse_date(dct.get("last_executed")),
            next_scheduled=parse_date(dct.get("next_scheduled")),
            total_executions=_int(dct.get("total_executions")),
            created_date=parse_date(dct.get("created_date")),
        )
    except KeyError as e:
        raise ValueError(f"Recurring schedule missing field {e}") from None
    except TypeError as e:
        raise ValueError(f"Malformed recurring schedule: {e}") from None


def parse_part(dct: Dict[str, Any]) -> Part:
    _require_mapping(dct)
    try:
        return Part(
            id=str(dct["id"]),
            name=dct["name"],
            part_number=dct.get("part_number", ""),
            category=dct.get("category", ""),
            quantity=_int(dct.get("quantity")),
            min_quantity=_int(dct.get("min_quantity")),
            unit_cost=_float(dct.get("unit_cost")),
            supplier=dct.get("supplier"),
            location=dct.get("location"),
            last_restocked=parse_date(dct.get("last_restocked")),
            used_in=dct.get("used_in"),
        )
    except KeyError as e:
        raise ValueError(f"Part missing field {e}") from None
    except TypeError as e:
        raise ValueError(f"Malformed part: {e}") from None


def parse_technician(dct: Dict[str, Any]) -> Technician:
    _require_mapping(dct)
    try:
        return Technician(
            id=str(dct["id"]),
            name=dct["name"],
            email=dct.get("email"),
            phone=dct.get("phone"),
            specialization=dct.get("specialization"),
            status=dct.get("status") or "available",
            rating=_float(dct.get("rating")),
            completed_jobs=_int(dct.get("completed_jobs")),
            active_jobs=_int(dct.get("active_jobs")),
            certifications=dct.get("certifications"),
            hourly_rate=_float(dct.get("hourly_rate")),
            join_date=parse_date(dct.get("join_date")),
        )
    except KeyError as e:
        raise ValueError(f"Technician missing field {e}") from None
    except TypeError as e:
        raise ValueError(f"Malformed technician: {e}") from None


def parse_many(records: Optional[Iterable[Dict[str, Any]]], parse: Callable[[Dict[str, Any]], T]) -> List[T]:
    """
    Parse a list of records, skipping the ones that fail.

    Failures are logged and dropped.
    """
    if records is not None and not isinstance(records, (list, tuple)):
        logger.warning("Expected a list of records, got %s", type(records).__name__)
        return []
    results = []
    for index, record in enumerate(records or []):
        if not isinstance(record, dict):
            logger.warning("Skipping record %d: expected an object, got %s", index, type(record).__name__)
            continue
        try:
            results.append(parse(record))
        except ValueError as e:
            logger.warning("Skipping record %d (id=%s): %s", index, record.get("id"), e)
    return results


@dataclass
class Snapshot:
    """Everything a dashboard page renders, captured at one point in time."""

    items: List[MaintenanceItem] = field(default_factory=list)
    schedules: List[RecurringSchedule] = field(default_factory=list)
    parts: List[Part] = field(default_factory=list)
    technicians: List[Technician] = field(default_factory=list)


def snapshot_from_dict(data: Optional[Dict[str, Any]]) -> Snapshot:
    data = data or {}
    maintenance = data.get("maintenance")
    # A paginated list response may be stored as-is
    if isinstance(maintenance, dict):
        maintenance = maintenance.get("items")
    return Snapshot(
        items=parse_many(maintenance, parse_maintenance_item),
        schedules=parse_many(data.get("recurring_schedules"), parse_recurring_schedule),
        parts=parse_many(data.get("parts"), parse_part),
        technicians=parse_many(data.get("technicians"), parse_technician),
    )


def load_snapshot(filename: Union[str, Path]) -> Snapshot:
    """Load a snapshot from a YAML (or JSON) file."""
    with open(filename, "rb") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader)
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"{filename}: snapshot must be a mapping")
    return snapshot_from_dict(data)


def save_snapshot(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    """
    Write raw service payloads to a snapshot file.

    Only the known top-level keys are kept, in a fixed order.
    """
    out = {key: data[key] for key in SNAPSHOT_KEYS if data.get(key) is not None}
    with open(filename, "w") as fp:
        yaml.dump(
            out,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )
