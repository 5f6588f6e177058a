#!/usr/bin/env python3
"""
Command-line views of fleet maintenance data.

Commands:
  status       - Maintenance items grouped by status
  calendar     - Month calendar of due items
  costs        - Estimated vs actual cost analytics
  recurring    - Recurring schedules with cadence and next run
  parts        - Parts inventory and low-stock warnings
  technicians  - Technician roster
  export       - Save live service data to a snapshot file

Data comes from the maintenance service (MAINTENANCE_API_URL) unless
--snapshot points at a YAML snapshot file.
"""

import argparse
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from config import load_config, setup_logging
from services import export_raw, fetch_snapshot, maintenance_client
from viewmodels import (
    UNKNOWN,
    MaintenanceItem,
    Snapshot,
    Status,
    aggregate_costs,
    build_month_grid,
    describe_frequency,
    items_due_in_month,
    load_snapshot,
    month_rows,
    next_occurrence,
    save_snapshot,
    sort_by_urgency,
    sorted_by_type,
    sorted_by_vehicle,
    status_badge,
    summarize_inventory,
    summarize_roster,
    summarize_schedules,
)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format a distance for display."""
    return f"{km:,.0f}" if km is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_signed_cost(cost: float) -> str:
    """Format a variance with an explicit sign."""
    sign = "+" if cost > 0 else "-" if cost < 0 else ""
    return f"{sign}${abs(cost):,.2f}"


def format_percent(value: float) -> str:
    return f"{value:.1f}%"


def format_date(value) -> str:
    if value is None or value is UNKNOWN:
        return "-"
    return value.isoformat()


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def progress_bar(percent: float, width: int = 10) -> str:
    """Text progress bar, e.g. '[####------] 40%'."""
    filled = int(round(percent / 100 * width))
    return f"[{'#' * filled}{'-' * (width - filled)}] {percent:.0f}%"


def parse_month(text: Optional[str], today: date):
    """Parse YYYY-MM (default: the current month)."""
    if not text:
        return today.year, today.month
    try:
        year, month = (int(p) for p in text.split("-"))
    except ValueError:
        raise ValueError(f"Invalid month '{text}', expected YYYY-MM") from None
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month '{text}', expected YYYY-MM")
    return year, month


# =============================================================================
# Data loading
# =============================================================================


class DataError(Exception):
    """Raised when the data for a command cannot be loaded."""


def get_snapshot(args, sections) -> Snapshot:
    if args.snapshot:
        if not args.snapshot.exists():
            raise DataError(f"File not found: {args.snapshot}")
        try:
            return load_snapshot(args.snapshot)
        except ValueError as e:
            raise DataError(str(e)) from None

    with maintenance_client(args.config) as client:
        snapshot, errors = fetch_snapshot(client, sections)
    if errors:
        raise DataError("; ".join(errors))
    return snapshot


# =============================================================================
# Status command
# =============================================================================


def make_items_table(items: List[MaintenanceItem]) -> List[List[str]]:
    """Convert maintenance items to table rows."""
    rows = []
    for item in items:
        mileage = "-"
        if item.due_mileage:
            mileage = f"{format_km(item.current_mileage)} / {format_km(item.due_mileage)}"
        rows.append(
            [
                item.id,
                item.vehicle_id,
                truncate(item.type, 24),
                item.due_date.isoformat(),
                mileage,
                progress_bar(item.mileage_progress) if item.due_mileage else "-",
                item.priority.value,
                item.assigned_to or "-",
                format_cost(item.estimated_cost),
            ]
        )
    return rows


ITEM_HEADERS = ["ID", "Vehicle", "Type", "Due", "Mileage (km)", "Progress", "Priority", "Assigned", "Est. cost"]


def cmd_status(args):
    """Show maintenance items grouped by status."""
    snapshot = get_snapshot(args, ["items"])
    items = snapshot.items

    if args.vehicle:
        items = [i for i in items if i.vehicle_id == args.vehicle]
    if args.status:
        wanted = Status.parse(args.status)
        items = [i for i in items if i.status == wanted]

    print(f"Maintenance items: {len(items)}")
    print()

    if not items:
        print("No maintenance items found.")
        return 0

    for status in sorted(Status, key=lambda s: s.urgency):
        group = sort_by_urgency([i for i in items if i.status == status])
        if not group:
            continue
        print(f"{status_badge(status).label.upper()} ({len(group)}):")
        print(tabulate(make_items_table(group), headers=ITEM_HEADERS, tablefmt="simple"))
        print()

    return 0


# =============================================================================
# Calendar command
# =============================================================================

WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def make_calendar_table(grid) -> List[List[str]]:
    """
    Render a month grid as table rows.

    Days outside the month are shown in parentheses, today is marked with
    '*' and the number of due items follows in brackets.
    """
    rows = []
    for week in month_rows(grid):
        row = []
        for day in week:
            label = str(day.date.day)
            if not day.is_current_month:
                label = f"({label})"
            if day.is_today:
                label += "*"
            if day.items:
                label += f" [{len(day.items)}]"
            row.append(label)
        rows.append(row)
    return rows


def cmd_calendar(args):
    """Show a month calendar of due maintenance."""
    today = date.today()
    year, month = parse_month(args.month, today)
    snapshot = get_snapshot(args, ["items"])

    grid = build_month_grid(year, month, snapshot.items, today=today)
    month_name = date(year, month, 1).strftime("%B %Y")

    print(f"{month_name}: {items_due_in_month(snapshot.items, year, month)} item(s) due")
    print()
    print(tabulate(make_calendar_table(grid), headers=WEEKDAY_HEADERS, tablefmt="simple"))
    print()

    due = [day for day in grid if day.is_current_month and day.items]
    for day in due:
        print(day.date.isoformat())
        for item in day.items:
            print(f"  {item.id}  {item.vehicle_id}  {item.type}  ({status_badge(item.status).label})")

    return 0


# =============================================================================
# Costs command
# =============================================================================


def cmd_costs(args):
    """Show estimated vs actual maintenance costs."""
    snapshot = get_snapshot(args, ["items"])
    analytics = aggregate_costs(snapshot.items)

    direction = "over" if analytics.is_over_budget else "under"
    print(f"Total estimated: {format_cost(analytics.total_estimated)}")
    print(f"Total actual:    {format_cost(analytics.total_actual)}")
    print(
        f"Variance:        {format_signed_cost(analytics.variance)} "
        f"({format_percent(abs(analytics.variance_percent))} {direction} budget)"
    )
    total = analytics.completed_count + analytics.pending_count
    print(
        f"Completion:      {format_percent(analytics.completion_rate)} "
        f"({analytics.completed_count} / {total})"
    )
    print()

    if not analytics.by_vehicle:
        print("No cost data available.")
        return 0

    vehicle_rows = [
        [vid, format_cost(c.estimated), format_cost(c.actual), format_signed_cost(c.variance)]
        for vid, c in sorted_by_vehicle(analytics)
    ]
    print("BY VEHICLE:")
    print(tabulate(vehicle_rows, headers=["Vehicle", "Estimated", "Actual", "Variance"], tablefmt="simple"))
    print()

    type_rows = [
        [name, c.count, format_cost(c.estimated), format_cost(c.actual), format_cost(c.average_estimated)]
        for name, c in sorted_by_type(analytics)
    ]
    print("BY TYPE:")
    print(
        tabulate(
            type_rows,
            headers=["Type", "Count", "Estimated", "Actual", "Avg. estimated"],
            tablefmt="simple",
        )
    )

    return 0


# =============================================================================
# Recurring command
# =============================================================================


def make_schedule_table(schedules, today: date) -> List[List[str]]:
    rows = []
    for schedule in schedules:
        projected = next_occurrence(schedule, from_date=today)
        rows.append(
            [
                schedule.id,
                truncate(schedule.name, 28),
                schedule.vehicle_id,
                describe_frequency(schedule),
                format_date(schedule.last_executed) if schedule.last_executed else "Never",
                format_date(schedule.next_scheduled) if schedule.next_scheduled else "N/A",
                "unknown" if projected is UNKNOWN else projected.isoformat(),
                format_cost(schedule.estimated_cost),
                "active" if schedule.is_active else "paused",
            ]
        )
    return rows


def cmd_recurring(args):
    """Show recurring maintenance schedules."""
    today = date.today()
    snapshot = get_snapshot(args, ["schedules"])
    summary = summarize_schedules(snapshot.schedules, today=today)
    counts = summary.counts

    print(f"Schedules: {counts['total']} ({counts['active']} active, {counts['paused']} paused)")
    print(f"Upcoming this month: {counts['upcoming_this_month']}")
    print(f"Est. monthly cost: {format_cost(summary.monthly_cost)}")
    print()

    if not snapshot.schedules:
        print("No recurring schedules found.")
        return 0

    headers = ["ID", "Name", "Vehicle", "Cadence", "Last run", "Next (service)", "Next (projected)", "Cost", "State"]
    schedules = sorted(snapshot.schedules, key=lambda s: (not s.is_active, s.name))
    print(tabulate(make_schedule_table(schedules, today), headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Parts and technicians commands
# =============================================================================


def cmd_parts(args):
    """Show the parts inventory."""
    snapshot = get_snapshot(args, ["parts"])
    summary = summarize_inventory(snapshot.parts)

    print(f"Parts: {summary.part_count} ({summary.total_units} units)")
    print(f"Inventory value: {format_cost(summary.total_value)}")
    print()

    if summary.low_stock:
        print(f"LOW STOCK ({len(summary.low_stock)}):")
        for part in summary.low_stock:
            print(
                f"  {part.name} ({part.part_number}): {part.quantity} / {part.min_quantity} min, "
                f"restock to {part.restock_quantity}"
            )
        print()

    if not snapshot.parts:
        print("No parts found.")
        return 0

    rows = [
        [p.part_number, truncate(p.name), p.category, p.quantity, p.min_quantity,
         format_cost(p.unit_cost), p.location or "-"]
        for p in sorted(snapshot.parts, key=lambda p: (p.category, p.name))
    ]
    headers = ["Part #", "Name", "Category", "Qty", "Min", "Unit cost", "Location"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


def cmd_technicians(args):
    """Show the technician roster."""
    snapshot = get_snapshot(args, ["technicians"])
    roster = summarize_roster(snapshot.technicians)

    print(
        f"Technicians: {len(snapshot.technicians)} "
        f"({roster.available} available, {roster.busy} busy, {roster.off_duty} off duty)"
    )
    print(f"Average rating: {roster.average_rating:.1f}")
    print(f"Active jobs: {roster.active_jobs}")
    print()

    if not snapshot.technicians:
        print("No technicians found.")
        return 0

    rows = [
        [t.name, t.status, f"{t.rating:.1f}", t.active_jobs, t.completed_jobs,
         truncate(", ".join(t.specialization)) if t.specialization else "-", format_cost(t.hourly_rate)]
        for t in sorted(snapshot.technicians, key=lambda t: t.name)
    ]
    headers = ["Name", "Status", "Rating", "Active", "Completed", "Specialization", "Rate/h"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Export command
# =============================================================================


def cmd_export(args):
    """Save live service data to a snapshot file."""
    with maintenance_client(args.config) as client:
        data, errors = export_raw(client)
    for error in errors:
        print(f"Error: {error}")
    if errors:
        return 1

    if args.dry_run:
        print(f"Would write {len(data.get('maintenance', []))} maintenance items to {args.output}")
        print("(dry run - no changes made)")
        return 0

    save_snapshot(args.output, data)
    print(f"Snapshot saved to {args.output}")
    return 0


# =============================================================================
# Main
# =============================================================================

COMMANDS = {
    "status": cmd_status,
    "calendar": cmd_calendar,
    "costs": cmd_costs,
    "recurring": cmd_recurring,
    "parts": cmd_parts,
    "technicians": cmd_technicians,
    "export": cmd_export,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet maintenance dashboard (command line)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s status
  %(prog)s status --status overdue
  %(prog)s --snapshot fleet.yaml calendar --month 2024-02
  %(prog)s costs
  %(prog)s recurring
  %(prog)s export fleet.yaml
""",
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        help="Read data from a YAML snapshot file instead of the maintenance service",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    status_parser = subparsers.add_parser("status", help="Maintenance items grouped by status")
    status_parser.add_argument("--status", type=str, help="Only show one status (e.g. 'overdue')")
    status_parser.add_argument("--vehicle", type=str, help="Only show one vehicle ID")

    calendar_parser = subparsers.add_parser("calendar", help="Month calendar of due items")
    calendar_parser.add_argument("--month", type=str, help="Month in YYYY-MM format (default: current)")

    subparsers.add_parser("costs", help="Estimated vs actual cost analytics")
    subparsers.add_parser("recurring", help="Recurring schedules")
    subparsers.add_parser("parts", help="Parts inventory")
    subparsers.add_parser("technicians", help="Technician roster")

    export_parser = subparsers.add_parser("export", help="Save live data to a snapshot file")
    export_parser.add_argument("output", type=Path, help="Snapshot file to write")
    export_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Fetch data but do not write the file",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    args.config = load_config()
    setup_logging(args.config)

    try:
        return COMMANDS[args.command](args)
    except DataError as e:
        print(f"Error: {e}")
        return 1
    except ValueError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
