"""Shared fixtures: an in-memory stand-in for the maintenance service."""

import json
import re

import httpx
import pytest

ITEMS = [
    {
        "id": "MNT-001",
        "vehicle_id": "VH-01",
        "type": "Oil Change",
        "status": "completed",
        "priority": "medium",
        "due_date": "2024-02-05T00:00:00",
        "estimated_cost": 100.0,
        "actual_cost": 120.0,
    },
    {
        "id": "MNT-002",
        "vehicle_id": "VH-01",
        "type": "Brake Inspection",
        "status": "scheduled",
        "priority": "high",
        "due_date": "2024-02-20T00:00:00",
        "current_mileage": 45000,
        "due_mileage": 50000,
        "estimated_cost": 50.0,
    },
    {
        "id": "MNT-003",
        "vehicle_id": "VH-02",
        "type": "Tire Rotation",
        "status": "overdue",
        "priority": "high",
        "due_date": "2024-01-28T00:00:00",
        "estimated_cost": 80.0,
    },
]

SCHEDULES = [
    {
        "id": "RS-001",
        "name": "Monthly oil check",
        "vehicle_id": "VH-01",
        "maintenance_type": "Oil Change",
        "frequency": "monthly",
        "frequency_value": 1,
        "estimated_cost": 40.0,
        "is_active": True,
        "last_executed": "2024-01-31",
    },
    {
        "id": "RS-002",
        "name": "Timing belt",
        "vehicle_id": "VH-02",
        "maintenance_type": "Belt",
        "frequency": "mileage-based",
        "frequency_value": 5000,
        "estimated_cost": 400.0,
        "is_active": False,
    },
]

PARTS = [
    {"id": "PRT-001", "name": "Oil Filter", "part_number": "OF-1", "category": "Filters",
     "quantity": 3, "min_quantity": 5, "unit_cost": 12.5},
    {"id": "PRT-002", "name": "Brake Pad Set", "part_number": "BP-2", "category": "Brakes",
     "quantity": 10, "min_quantity": 4, "unit_cost": 45.0},
]

TECHNICIANS = [
    {"id": "TECH-001", "name": "Mike Johnson", "status": "available", "rating": 4.8, "active_jobs": 1},
    {"id": "TECH-002", "name": "Sara Lee", "status": "busy", "rating": 4.2, "active_jobs": 3},
]


class FakeService:
    """
    Routes requests for the maintenance, vehicle and driver services.

    Every request is recorded; ``fail`` maps a path regex to a status code
    to make matching requests fail.
    """

    def __init__(self, per_page_limit=2):
        self.requests = []
        self.fail = {}
        self.per_page_limit = per_page_limit

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        for pattern, code in self.fail.items():
            if re.search(pattern, path):
                return httpx.Response(code, json={"message": f"{path} unavailable"})

        if path.endswith("/maintenance/") and request.method == "GET":
            page = int(request.url.params.get("page", 1))
            size = min(int(request.url.params.get("per_page", 10)), self.per_page_limit)
            pages = max(1, -(-len(ITEMS) // size))
            chunk = ITEMS[(page - 1) * size:page * size]
            return httpx.Response(200, json={
                "items": chunk, "total": len(ITEMS), "page": page, "per_page": size, "pages": pages,
            })
        if path.endswith("/maintenance/recurring-schedules"):
            return httpx.Response(200, json=SCHEDULES)
        if path.endswith("/maintenance/parts") and request.method == "GET":
            return httpx.Response(200, json=PARTS)
        if path.endswith("/maintenance/technicians"):
            return httpx.Response(200, json=TECHNICIANS)
        if path.endswith("/maintenance/overdue"):
            return httpx.Response(200, json=[i for i in ITEMS if i["status"] == "overdue"])
        if "/maintenance/parts/" in path and request.method == "PUT":
            part = dict(PARTS[0], **json.loads(request.content))
            return httpx.Response(200, json=part)
        match = re.search(r"/maintenance/(MNT-\d+)$", path)
        if match and request.method == "PATCH":
            item = next((i for i in ITEMS if i["id"] == match.group(1)), None)
            if item is None:
                return httpx.Response(404, json={"error": "Maintenance item not found"})
            return httpx.Response(200, json=dict(item, **json.loads(request.content)))
        if path.endswith("/vehicles"):
            return httpx.Response(200, json={"items": [{"id": "VH-01"}, {"id": "VH-02"}]})
        if path.endswith("/drivers"):
            return httpx.Response(200, json={"data": [{"id": "DR-01"}]})
        return httpx.Response(404, json={"message": "Not found"})


@pytest.fixture
def fake_service():
    return FakeService()


@pytest.fixture
def transport(fake_service):
    return httpx.MockTransport(fake_service)
