"""Client for the maintenance microservice."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Union

from viewmodels.loader import (
    parse_many,
    parse_maintenance_item,
    parse_part,
    parse_recurring_schedule,
    parse_technician,
)
from viewmodels.maintenance_item import MaintenanceItem
from viewmodels.part import Part
from viewmodels.recurring_schedule import RecurringSchedule
from viewmodels.status import Status
from viewmodels.technician import Technician

from .base import ApiResult, ServiceClient

logger = logging.getLogger(__name__)

StrOrList = Union[str, Sequence[str], None]


@dataclass
class MaintenancePage:
    items: List[MaintenanceItem] = field(default_factory=list)
    total: int = 0
    page: int = 1
    per_page: int = 10
    pages: int = 1


def _as_list(value: StrOrList) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    return [v.value if isinstance(v, Status) else v for v in value]


def _parse_page(data: Any) -> MaintenancePage:
    if not isinstance(data, dict):
        raise ValueError("expected a paginated object")
    return MaintenancePage(
        items=parse_many(data.get("items"), parse_maintenance_item),
        total=int(data.get("total") or 0),
        page=int(data.get("page") or 1),
        per_page=int(data.get("per_page") or 0),
        pages=int(data.get("pages") or 1),
    )


def _items(data: Any) -> List[MaintenanceItem]:
    # search returns a page, overdue/upcoming return bare lists
    if isinstance(data, dict):
        data = data.get("items")
    return parse_many(data, parse_maintenance_item)


class MaintenanceClient(ServiceClient):
    """Maintenance items, technicians, parts and recurring schedules."""

    endpoint = "/maintenance"

    # -- maintenance items ---------------------------------------------------

    def list_items(
        self,
        page: int = 1,
        per_page: int = 10,
        vehicle: Optional[str] = None,
        status: StrOrList = None,
        priority: StrOrList = None,
        assigned_to: Optional[str] = None,
    ) -> ApiResult[MaintenancePage]:
        params = {
            "page": page,
            "per_page": per_page,
            "vehicle": vehicle,
            "status": _as_list(status),
            "priority": _as_list(priority),
            "assignedTo": assigned_to,
        }
        return self.get(f"{self.endpoint}/", params=params).map(_parse_page)

    def all_items(self, per_page: int = 100, max_pages: int = 50) -> ApiResult[List[MaintenanceItem]]:
        """Fetch every page of maintenance items."""
        items: List[MaintenanceItem] = []
        page = 1
        while True:
            result = self.list_items(page=page, per_page=per_page)
            if not result.success:
                return ApiResult.failure(result.error, result.status_code)
            items.extend(result.data.items)
            if page >= result.data.pages or page >= max_pages:
                if page >= max_pages and page < result.data.pages:
                    logger.warning("Stopped after %d pages of %d", page, result.data.pages)
                return ApiResult.ok(items)
            page += 1

    def get_item(self, item_id: str) -> ApiResult[MaintenanceItem]:
        return self.get(f"{self.endpoint}/{item_id}").map(parse_maintenance_item)

    def create_item(self, data: Dict[str, Any]) -> ApiResult[MaintenanceItem]:
        return self.post(f"{self.endpoint}/", data).map(parse_maintenance_item)

    def update_item(self, item_id: str, data: Dict[str, Any]) -> ApiResult[MaintenanceItem]:
        return self.patch(f"{self.endpoint}/{item_id}", data).map(parse_maintenance_item)

    def delete_item(self, item_id: str) -> ApiResult[None]:
        return self.delete(f"{self.endpoint}/{item_id}")

    def summary(self) -> ApiResult[Dict[str, Any]]:
        return self.get(f"{self.endpoint}/summary")

    def vehicle_history(self, vehicle_id: str) -> ApiResult[List[MaintenanceItem]]:
        return self.get(f"{self.endpoint}/vehicle/{vehicle_id}/history").map(_items)

    def items_for_vehicle(self, vehicle_id: str) -> ApiResult[List[MaintenanceItem]]:
        return self.list_items(page=1, per_page=100, vehicle=vehicle_id).map(lambda p: p.items)

    def update_statuses_bulk(self) -> ApiResult[Dict[str, Any]]:
        """Ask the service to recompute statuses (it owns them)."""
        return self.post(f"{self.endpoint}/status/update-bulk")

    def overdue(self) -> ApiResult[List[MaintenanceItem]]:
        return self.get(f"{self.endpoint}/overdue").map(_items)

    def upcoming(self) -> ApiResult[List[MaintenanceItem]]:
        return self.get(f"{self.endpoint}/upcoming").map(_items)

    def search(self, query: str) -> ApiResult[List[MaintenanceItem]]:
        return self.get(f"{self.endpoint}/search", params={"q": query}).map(_items)

    def complete(
        self,
        item_id: str,
        actual_cost: Optional[float] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ApiResult[MaintenanceItem]:
        return self.update_item(item_id, {
            "status": Status.COMPLETED,
            "completed_date": now or datetime.now(),
            "actual_cost": actual_cost,
            "notes": notes,
        })

    def cancel(self, item_id: str, reason: Optional[str] = None) -> ApiResult[MaintenanceItem]:
        return self.update_item(item_id, {"status": Status.CANCELLED, "notes": reason})

    def start(self, item_id: str, now: Optional[datetime] = None) -> ApiResult[MaintenanceItem]:
        return self.update_item(item_id, {
            "status": Status.IN_PROGRESS,
            "scheduled_date": now or datetime.now(),
        })

    # -- analytics -----------------------------------------------------------

    def cost_analytics(self) -> ApiResult[Dict[str, Any]]:
        return self.get(f"{self.endpoint}/analytics/costs")

    def trends(self, period: str = "month", limit: int = 6) -> ApiResult[Any]:
        return self.get(f"{self.endpoint}/analytics/trends", params={"period": period, "limit": limit})

    # -- technicians ---------------------------------------------------------

    def technicians(self) -> ApiResult[List[Technician]]:
        return self.get(f"{self.endpoint}/technicians").map(
            lambda data: parse_many(data, parse_technician)
        )

    def create_technician(self, data: Dict[str, Any]) -> ApiResult[Technician]:
        return self.post(f"{self.endpoint}/technicians", data).map(parse_technician)

    def update_technician(self, tech_id: str, data: Dict[str, Any]) -> ApiResult[Technician]:
        return self.put(f"{self.endpoint}/technicians/{tech_id}", data).map(parse_technician)

    def delete_technician(self, tech_id: str) -> ApiResult[None]:
        return self.delete(f"{self.endpoint}/technicians/{tech_id}")

    # -- parts ---------------------------------------------------------------

    def parts(self, query: Optional[str] = None) -> ApiResult[List[Part]]:
        return self.get(f"{self.endpoint}/parts", params={"q": query}).map(
            lambda data: parse_many(data, parse_part)
        )

    def create_part(self, data: Dict[str, Any]) -> ApiResult[Part]:
        return self.post(f"{self.endpoint}/parts", data).map(parse_part)

    def update_part(self, part_id: str, data: Dict[str, Any]) -> ApiResult[Part]:
        return self.put(f"{self.endpoint}/parts/{part_id}", data).map(parse_part)

    def restock_part(self, part: Part) -> ApiResult[Part]:
        """Top a part up to twice its minimum quantity."""
        return self.update_part(part.id, {"quantity": part.restock_quantity})

    def delete_part(self, part_id: str) -> ApiResult[None]:
        return self.delete(f"{self.endpoint}/parts/{part_id}")

    # -- recurring schedules -------------------------------------------------

    def recurring_schedules(self) -> ApiResult[List[RecurringSchedule]]:
        return self.get(f"{self.endpoint}/recurring-schedules").map(
            lambda data: parse_many(data, parse_recurring_schedule)
        )

    def create_recurring_schedule(self, data: Dict[str, Any]) -> ApiResult[RecurringSchedule]:
        return self.post(f"{self.endpoint}/recurring-schedules", data).map(parse_recurring_schedule)

    def update_recurring_schedule(self, schedule_id: str, data: Dict[str, Any]) -> ApiResult[RecurringSchedule]:
        return self.put(f"{self.endpoint}/recurring-schedules/{schedule_id}", data).map(
            parse_recurring_schedule
        )

    def delete_recurring_schedule(self, schedule_id: str) -> ApiResult[None]:
        return self.delete(f"{self.endpoint}/recurring-schedules/{schedule_id}")
