#!/usr/bin/env python3
"""Tests for the fleet service HTTP clients."""
import json
from datetime import date, datetime, timedelta

import httpx
import pytest

from config import load_config
from services import (
    ApiResult,
    DriverClient,
    MaintenanceClient,
    ServiceClient,
    VehicleClient,
    export_raw,
    fetch_snapshot,
    maintenance_client,
)
from services.base import to_json
from viewmodels import Part, Status, issue_session

BASE_URL = "http://maint.test/api"


def make_client(transport, **kwargs):
    return MaintenanceClient(BASE_URL, transport=transport, **kwargs)


# =============================================================================
# ApiResult and ServiceClient tests
# =============================================================================


class TestApiResult:
    """Tests for ApiResult."""

    def test_map_success(self):
        result = ApiResult.ok([1, 2], 200).map(len)
        assert result.success
        assert result.data == 2
        assert result.status_code == 200

    def test_map_failure_passes_through(self):
        result = ApiResult.failure("boom", 500).map(len)
        assert not result.success
        assert result.error == "boom"

    def test_map_value_error_becomes_failure(self):
        def bad(data):
            raise ValueError("no items")

        result = ApiResult.ok({}).map(bad)
        assert not result.success
        assert result.error == "Malformed response: no items"

    def test_to_json(self):
        assert to_json({
            "status": Status.COMPLETED,
            "when": datetime(2024, 2, 1, 8, 30),
            "day": date(2024, 2, 1),
            "notes": None,
        }) == {"status": "completed", "when": "2024-02-01T08:30:00", "day": "2024-02-01"}


class TestServiceClient:
    """Tests for ServiceClient request handling."""

    def test_timeout_is_configured(self):
        client = ServiceClient(BASE_URL, timeout=12.5)
        assert client._client.timeout == httpx.Timeout(12.5)
        client.close()

    def test_factory_uses_config_timeout(self):
        config = load_config({"API_TIMEOUT": "7", "MAINTENANCE_API_URL": BASE_URL})
        with maintenance_client(config) as client:
            assert client.timeout == 7.0
            assert client.base_url == BASE_URL

    def test_timeout_is_a_failure(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with ServiceClient(BASE_URL, timeout=30, transport=httpx.MockTransport(handler)) as client:
            result = client.get("/anything")
        assert not result.success
        assert result.error == "Request timed out after 30s"

    def test_connection_error_is_a_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with ServiceClient(BASE_URL, transport=httpx.MockTransport(handler)) as client:
            result = client.get("/anything")
        assert not result.success
        assert "connection refused" in result.error

    def test_error_message_from_body(self):
        handler = lambda request: httpx.Response(422, json={"error": "Invalid status"})
        with ServiceClient(BASE_URL, transport=httpx.MockTransport(handler)) as client:
            result = client.get("/x")
        assert result.error == "Invalid status"
        assert result.status_code == 422

    def test_error_without_body(self):
        handler = lambda request: httpx.Response(503, text="gateway")
        with ServiceClient(BASE_URL, transport=httpx.MockTransport(handler)) as client:
            result = client.get("/x")
        assert result.error == "HTTP Error: 503"

    def test_no_content(self):
        handler = lambda request: httpx.Response(204)
        with ServiceClient(BASE_URL, transport=httpx.MockTransport(handler)) as client:
            result = client.delete("/x")
        assert result.success
        assert result.data is None

    def test_invalid_json(self):
        handler = lambda request: httpx.Response(200, text="<html>")
        with ServiceClient(BASE_URL, transport=httpx.MockTransport(handler)) as client:
            result = client.get("/x")
        assert result.error == "Invalid JSON response"

    def test_no_retry(self, fake_service, transport):
        fake_service.fail["/x"] = 500
        with ServiceClient(BASE_URL, transport=transport) as client:
            client.get("/x")
        assert len(fake_service.requests) == 1

    def test_bearer_token_from_session(self, fake_service, transport):
        session = issue_session("a@b.c", "pw", "admin")
        with ServiceClient(BASE_URL, session=session, transport=transport) as client:
            client.get("/x")
        assert fake_service.requests[0].headers["Authorization"] == f"Bearer {session.token}"

    def test_no_token_for_expired_session(self, fake_service, transport):
        session = issue_session(
            "a@b.c", "pw", "admin", now=datetime.now() - timedelta(days=1)
        )
        with ServiceClient(BASE_URL, session=session, transport=transport) as client:
            client.get("/x")
        assert "Authorization" not in fake_service.requests[0].headers

    def test_empty_params_dropped(self, fake_service, transport):
        with ServiceClient(BASE_URL, transport=transport) as client:
            client.get("/x", params={"q": None, "status": [], "page": 2})
        assert dict(fake_service.requests[0].url.params) == {"page": "2"}


# =============================================================================
# MaintenanceClient tests
# =============================================================================


class TestMaintenanceClient:
    """Tests for MaintenanceClient endpoints."""

    def test_list_items(self, fake_service, transport):
        with make_client(transport) as client:
            result = client.list_items(page=1, per_page=2, status=[Status.OVERDUE, "due_soon"])
        assert result.success
        assert [i.id for i in result.data.items] == ["MNT-001", "MNT-002"]
        assert result.data.pages == 2
        params = fake_service.requests[0].url.params
        assert params.get_list("status") == ["overdue", "due_soon"]

    def test_all_items_walks_pages(self, fake_service, transport):
        with make_client(transport) as client:
            result = client.all_items(per_page=2)
        assert [i.id for i in result.data] == ["MNT-001", "MNT-002", "MNT-003"]
        assert len(fake_service.requests) == 2

    def test_all_items_stops_at_max_pages(self, transport):
        with make_client(transport) as client:
            result = client.all_items(per_page=2, max_pages=1)
        assert len(result.data) == 2

    def test_all_items_failure(self, fake_service, transport):
        fake_service.fail["/maintenance/$"] = 500
        with make_client(transport) as client:
            result = client.all_items()
        assert not result.success
        assert result.error == "/api/maintenance/ unavailable"

    def test_overdue(self, transport):
        with make_client(transport) as client:
            result = client.overdue()
        assert [i.status for i in result.data] == [Status.OVERDUE]

    def test_complete_sends_patch(self, fake_service, transport):
        now = datetime(2024, 2, 6, 10, 0)
        with make_client(transport) as client:
            result = client.complete("MNT-002", actual_cost=55.0, now=now)
        assert result.success
        assert result.data.status is Status.COMPLETED
        request = fake_service.requests[0]
        assert request.method == "PATCH"
        assert json.loads(request.content) == {
            "status": "completed",
            "completed_date": "2024-02-06T10:00:00",
            "actual_cost": 55.0,
        }

    def test_start_and_cancel(self, fake_service, transport):
        with make_client(transport) as client:
            assert client.start("MNT-002").data.status is Status.IN_PROGRESS
            assert client.cancel("MNT-002", "sold").data.notes == "sold"

    def test_unknown_item(self, transport):
        with make_client(transport) as client:
            result = client.cancel("MNT-999")
        assert result.status_code == 404
        assert result.error == "Maintenance item not found"

    def test_parts_query(self, fake_service, transport):
        with make_client(transport) as client:
            result = client.parts("filter")
        assert [p.id for p in result.data] == ["PRT-001", "PRT-002"]
        assert fake_service.requests[0].url.params["q"] == "filter"

    def test_restock_part(self, fake_service, transport):
        part = Part(id="PRT-001", name="Oil Filter", part_number="OF-1",
                    category="Filters", quantity=3, min_quantity=5)
        with make_client(transport) as client:
            result = client.restock_part(part)
        assert result.data.quantity == 10
        assert json.loads(fake_service.requests[0].content) == {"quantity": 10}

    def test_recurring_and_technicians(self, transport):
        with make_client(transport) as client:
            assert len(client.recurring_schedules().data) == 2
            assert [t.name for t in client.technicians().data] == ["Mike Johnson", "Sara Lee"]

    def test_malformed_payload(self):
        handler = lambda request: httpx.Response(200, json=["not", "a", "page"])
        with make_client(httpx.MockTransport(handler)) as client:
            result = client.list_items()
        assert not result.success
        assert result.error.startswith("Malformed response")


class TestFleetClients:
    """Tests for VehicleClient and DriverClient."""

    def test_vehicles(self, transport):
        with VehicleClient("http://vehicles.test/api", transport=transport) as client:
            result = client.list_vehicles()
        assert [v["id"] for v in result.data] == ["VH-01", "VH-02"]

    def test_drivers(self, transport):
        with DriverClient("http://drivers.test/api", transport=transport) as client:
            result = client.list_drivers()
        assert [d["id"] for d in result.data] == ["DR-01"]


# =============================================================================
# snapshot fetching tests
# =============================================================================


class TestFetchSnapshot:
    """Tests for fetch_snapshot and export_raw."""

    def test_all_sections(self, transport):
        with make_client(transport) as client:
            snapshot, errors = fetch_snapshot(client)
        assert errors == []
        assert len(snapshot.items) == 3
        assert len(snapshot.schedules) == 2
        assert len(snapshot.parts) == 2
        assert len(snapshot.technicians) == 2

    def test_failed_section_is_reported(self, fake_service, transport):
        fake_service.fail["/parts$"] = 500
        with make_client(transport) as client:
            snapshot, errors = fetch_snapshot(client, ("items", "parts"))
        assert len(snapshot.items) == 3
        assert snapshot.parts == []
        assert errors == ["Failed to fetch parts: /api/maintenance/parts unavailable"]

    def test_export_raw(self, transport):
        with make_client(transport) as client:
            data, errors = export_raw(client, per_page=2)
        assert errors == []
        assert [i["id"] for i in data["maintenance"]] == ["MNT-001", "MNT-002", "MNT-003"]
        assert list(data) == ["maintenance", "recurring_schedules", "parts", "technicians"]
