"""Clients for the vehicle and driver microservices (read-only use)."""

from typing import Any, Dict, List, Optional

from .base import ApiResult, ServiceClient


def _records(data: Any) -> List[Dict[str, Any]]:
    # both services wrap lists as {"items": [...]} or {"data": [...]} depending on version
    if isinstance(data, dict):
        data = data.get("items", data.get("data"))
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError("expected a list of records")
    return [r for r in data if isinstance(r, dict)]


class VehicleClient(ServiceClient):
    endpoint = "/vehicles"

    def list_vehicles(self, status: Optional[str] = None) -> ApiResult[List[Dict[str, Any]]]:
        return self.get(self.endpoint, params={"status": status}).map(_records)

    def get_vehicle(self, vehicle_id: str) -> ApiResult[Dict[str, Any]]:
        return self.get(f"{self.endpoint}/{vehicle_id}")


class DriverClient(ServiceClient):
    endpoint = "/drivers"

    def list_drivers(self, status: Optional[str] = None) -> ApiResult[List[Dict[str, Any]]]:
        return self.get(self.endpoint, params={"status": status}).map(_records)

    def get_driver(self, driver_id: str) -> ApiResult[Dict[str, Any]]:
        return self.get(f"{self.endpoint}/{driver_id}")
