"""Fetching everything a view needs from the maintenance service in one go."""

import logging
from typing import Any, Dict, Iterable, List, Tuple

from viewmodels.loader import Snapshot

from .maintenance import MaintenanceClient

logger = logging.getLogger(__name__)

SECTIONS = ("items", "schedules", "parts", "technicians")


def fetch_snapshot(
    client: MaintenanceClient, sections: Iterable[str] = SECTIONS
) -> Tuple[Snapshot, List[str]]:
    """
    Fetch the requested sections into a Snapshot.

    Each section is fetched independently; a failed section stays empty and
    its error message is returned alongside the snapshot.
    """
    fetchers = {
        "items": client.all_items,
        "schedules": client.recurring_schedules,
        "parts": client.parts,
        "technicians": client.technicians,
    }
    snapshot = Snapshot()
    errors = []
    for section in sections:
        result = fetchers[section]()
        if result.success:
            setattr(snapshot, section, result.data)
        else:
            errors.append(f"Failed to fetch {section}: {result.error}")
    return snapshot, errors


def export_raw(client: MaintenanceClient, per_page: int = 100) -> Tuple[Dict[str, Any], List[str]]:
    """Collect raw service payloads in the snapshot file layout."""
    data: Dict[str, Any] = {}
    errors = []

    items: List[Any] = []
    page = 1
    while True:
        result = client.get(f"{client.endpoint}/", params={"page": page, "per_page": per_page})
        if not result.success or not isinstance(result.data, dict):
            errors.append(f"Failed to fetch maintenance: {result.error or 'unexpected payload'}")
            break
        items.extend(result.data.get("items") or [])
        if page >= int(result.data.get("pages") or 1):
            data["maintenance"] = items
            break
        page += 1

    for key, path in (
        ("recurring_schedules", "recurring-schedules"),
        ("parts", "parts"),
        ("technicians", "technicians"),
    ):
        result = client.get(f"{client.endpoint}/{path}")
        if result.success:
            data[key] = result.data
        else:
            errors.append(f"Failed to fetch {key}: {result.error}")
    return data, errors
