#!/usr/bin/env python3
"""Tests for status classification and badges."""
from datetime import date

from viewmodels import (
    STATUS_BADGES,
    MaintenanceItem,
    Status,
    classify,
    sort_by_urgency,
    status_badge,
)


def make_item(id="MNT-1", status=Status.SCHEDULED, due=date(2024, 2, 1), **kwargs):
    return MaintenanceItem(
        id=id, vehicle_id="VH-01", type="Oil Change", status=status, due_date=due, **kwargs
    )


class TestClassify:
    """Tests for classify."""

    def test_returns_backend_status(self):
        item = make_item(status=Status.DUE_SOON)
        assert classify(item) is Status.DUE_SOON

    def test_does_not_recompute_from_dates(self):
        """A past due date on a scheduled item stays scheduled."""
        item = make_item(status=Status.SCHEDULED, due=date(2000, 1, 1))
        assert classify(item) is Status.SCHEDULED

    def test_does_not_recompute_from_mileage(self):
        item = make_item(
            status=Status.SCHEDULED, current_mileage=20000, due_mileage=10000
        )
        assert classify(item) is Status.SCHEDULED
        assert item.mileage_progress == 100.0


class TestStatusBadge:
    """Tests for status_badge lookup."""

    def test_every_status_has_badge(self):
        for status in Status:
            assert status in STATUS_BADGES

    def test_overdue_badge(self):
        badge = status_badge(Status.OVERDUE)
        assert badge.label == "Overdue"
        assert badge.color == "red"
        assert badge.icon == "alert-triangle"

    def test_completed_badge(self):
        badge = status_badge(Status.COMPLETED)
        assert badge.color == "green"
        assert badge.icon == "check-circle"

    def test_labels_match_enum_labels(self):
        for status in Status:
            assert status_badge(status).label == status.label


class TestSortByUrgency:
    """Tests for sort_by_urgency."""

    def test_overdue_first(self):
        items = [
            make_item("A", Status.COMPLETED),
            make_item("B", Status.SCHEDULED),
            make_item("C", Status.OVERDUE),
            make_item("D", Status.DUE_SOON),
        ]
        assert [i.id for i in sort_by_urgency(items)] == ["C", "D", "B", "A"]

    def test_same_status_by_due_date(self):
        items = [
            make_item("late", Status.OVERDUE, date(2024, 3, 1)),
            make_item("early", Status.OVERDUE, date(2024, 1, 1)),
        ]
        assert [i.id for i in sort_by_urgency(items)] == ["early", "late"]

    def test_empty(self):
        assert sort_by_urgency([]) == []


class TestMaintenanceItem:
    """Tests for MaintenanceItem properties."""

    def test_miles_remaining(self):
        item = make_item(current_mileage=8000, due_mileage=10000)
        assert item.miles_remaining == 2000

    def test_miles_remaining_without_target(self):
        assert make_item().miles_remaining is None

    def test_mileage_progress_zero_target(self):
        item = make_item(current_mileage=8000, due_mileage=0)
        assert item.mileage_progress == 0.0

    def test_is_completed(self):
        assert make_item(status=Status.COMPLETED).is_completed
        assert not make_item(status=Status.CANCELLED).is_completed

    def test_repr(self):
        assert "MNT-1" in repr(make_item())
