#!/usr/bin/env python3
"""Tests for cost analytics aggregation."""
import pytest
from datetime import date

from viewmodels import (
    MaintenanceItem,
    Priority,
    Status,
    aggregate_costs,
    sorted_by_type,
    sorted_by_vehicle,
    summarize_items,
)


def make_item(id, vehicle, type, status, estimated, actual=None, priority=Priority.MEDIUM):
    return MaintenanceItem(
        id=id,
        vehicle_id=vehicle,
        type=type,
        status=status,
        due_date=date(2024, 2, 1),
        estimated_cost=estimated,
        actual_cost=actual,
        priority=priority,
    )


class TestAggregateCosts:
    """Tests for aggregate_costs."""

    @pytest.fixture
    def items(self):
        return [
            make_item("1", "VH-01", "Oil Change", Status.COMPLETED, 100, 120),
            make_item("2", "VH-01", "Brake Inspection", Status.SCHEDULED, 50),
        ]

    def test_totals(self, items):
        analytics = aggregate_costs(items)
        assert analytics.total_estimated == 150
        assert analytics.total_actual == 120

    def test_variance(self, items):
        """Actual minus estimated; negative is under budget."""
        analytics = aggregate_costs(items)
        assert analytics.variance == -30
        assert analytics.variance_percent == pytest.approx(-20.0)
        assert not analytics.is_over_budget

    def test_over_budget(self):
        analytics = aggregate_costs(
            [make_item("1", "VH-01", "Oil Change", Status.COMPLETED, 100, 130)]
        )
        assert analytics.variance == 30
        assert analytics.is_over_budget

    def test_by_vehicle(self, items):
        analytics = aggregate_costs(items)
        vehicle = analytics.by_vehicle["VH-01"]
        assert vehicle.estimated == 150
        assert vehicle.actual == 120
        assert vehicle.variance == -30

    def test_by_type(self, items):
        analytics = aggregate_costs(items)
        assert analytics.by_type["Oil Change"].count == 1
        assert analytics.by_type["Brake Inspection"].estimated == 50
        assert analytics.by_type["Brake Inspection"].actual == 0

    def test_completed_and_pending(self, items):
        analytics = aggregate_costs(items)
        assert analytics.completed_count == 1
        assert analytics.pending_count == 1
        assert analytics.completion_rate == 50.0

    def test_cancelled_counts_as_pending(self):
        analytics = aggregate_costs(
            [make_item("1", "VH-01", "Oil Change", Status.CANCELLED, 10)]
        )
        assert analytics.pending_count == 1
        assert analytics.completed_count == 0

    def test_empty(self):
        """No items: zeros everywhere, no division errors."""
        analytics = aggregate_costs([])
        assert analytics.total_estimated == 0
        assert analytics.variance_percent == 0.0
        assert analytics.completion_rate == 0.0
        assert analytics.by_vehicle == {}

    def test_breakdowns_sum_to_totals(self):
        """by_vehicle and by_type each partition the overall totals."""
        items = [
            make_item("1", "VH-01", "Oil Change", Status.COMPLETED, 100, 120),
            make_item("2", "VH-02", "Oil Change", Status.SCHEDULED, 95),
            make_item("3", "VH-02", "Tire Rotation", Status.OVERDUE, 80),
            make_item("4", "VH-03", "Brake Inspection", Status.COMPLETED, 50, 45.5),
            make_item("5", "VH-01", "Tire Rotation", Status.CANCELLED, None),
        ]
        analytics = aggregate_costs(items)
        assert len(analytics.by_vehicle) == 3
        assert len(analytics.by_type) == 3
        for breakdown in (analytics.by_vehicle, analytics.by_type):
            assert sum(c.estimated for c in breakdown.values()) == pytest.approx(analytics.total_estimated)
            assert sum(c.actual for c in breakdown.values()) == pytest.approx(analytics.total_actual)
        assert sum(c.count for c in analytics.by_type.values()) == len(items)
        assert analytics.total_estimated == pytest.approx(325)
        assert analytics.total_actual == pytest.approx(165.5)

    def test_to_dict(self, items):
        data = aggregate_costs(items).to_dict()
        assert data["variance"] == -30
        assert data["by_vehicle"]["VH-01"]["variance"] == -30
        assert data["by_type"]["Oil Change"] == {"estimated": 100, "actual": 120, "count": 1}
        assert data["completed_count"] == 1


class TestSortedBreakdowns:
    """Tests for sorted_by_type and sorted_by_vehicle."""

    def test_by_type_highest_estimate_first(self):
        analytics = aggregate_costs([
            make_item("1", "VH-01", "Wash", Status.SCHEDULED, 20),
            make_item("2", "VH-01", "Engine", Status.SCHEDULED, 900),
            make_item("3", "VH-02", "Tires", Status.SCHEDULED, 400),
        ])
        assert [name for name, _ in sorted_by_type(analytics)] == ["Engine", "Tires", "Wash"]

    def test_by_type_ties_by_name(self):
        analytics = aggregate_costs([
            make_item("1", "VH-01", "B", Status.SCHEDULED, 10),
            make_item("2", "VH-01", "A", Status.SCHEDULED, 10),
        ])
        assert [name for name, _ in sorted_by_type(analytics)] == ["A", "B"]

    def test_by_vehicle(self):
        analytics = aggregate_costs([
            make_item("1", "VH-02", "A", Status.SCHEDULED, 10),
            make_item("2", "VH-01", "A", Status.SCHEDULED, 10),
        ])
        assert [vid for vid, _ in sorted_by_vehicle(analytics)] == ["VH-01", "VH-02"]


class TestSummarizeItems:
    """Tests for summarize_items."""

    def test_counts(self):
        summary = summarize_items([
            make_item("1", "VH-01", "A", Status.OVERDUE, 10, priority=Priority.HIGH),
            make_item("2", "VH-01", "A", Status.DUE_SOON, 20),
            make_item("3", "VH-01", "A", Status.COMPLETED, 30, 25),
        ])
        assert summary.total_items == 3
        assert summary.by_status["overdue"] == 1
        assert summary.by_status["cancelled"] == 0
        assert summary.by_priority["high"] == 1
        assert summary.by_priority["medium"] == 2
        assert summary.total_estimated_cost == 60
        assert summary.total_actual_cost == 25
        assert summary.overdue_count == 1
        assert summary.upcoming_count == 2

    def test_empty_has_all_keys(self):
        summary = summarize_items([])
        assert set(summary.by_status) == {s.value for s in Status}
        assert set(summary.by_priority) == {p.value for p in Priority}
