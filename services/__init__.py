"""HTTP clients for the fleet microservices."""

from typing import Optional

from config import Config
from viewmodels.session import Session

from .base import ApiResult, ServiceClient
from .fleet import DriverClient, VehicleClient
from .maintenance import MaintenanceClient, MaintenancePage
from .snapshot import export_raw, fetch_snapshot

__all__ = [
    "ApiResult",
    "ServiceClient",
    "MaintenanceClient",
    "MaintenancePage",
    "fetch_snapshot",
    "export_raw",
    "VehicleClient",
    "DriverClient",
    "maintenance_client",
    "vehicle_client",
    "driver_client",
]


def maintenance_client(config: Config, session: Optional[Session] = None) -> MaintenanceClient:
    return MaintenanceClient(config.maintenance_api_url, timeout=config.api_timeout, session=session)


def vehicle_client(config: Config, session: Optional[Session] = None) -> VehicleClient:
    return VehicleClient(config.vehicle_api_url, timeout=config.api_timeout, session=session)


def driver_client(config: Config, session: Optional[Session] = None) -> DriverClient:
    return DriverClient(config.driver_api_url, timeout=config.api_timeout, session=session)
