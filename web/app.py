"""Flask web dashboard for fleet maintenance."""

import logging
from datetime import date, timedelta
from functools import wraps

from flask import Flask, flash, g, redirect, render_template, request, session, url_for

from config import load_config, setup_logging
from services import driver_client, fetch_snapshot, maintenance_client, vehicle_client
from viewmodels import (
    UNKNOWN,
    SessionStore,
    Status,
    aggregate_costs,
    build_month_grid,
    describe_frequency,
    issue_session,
    items_due_in_month,
    month_rows,
    next_occurrence,
    shift_month,
    sort_by_urgency,
    sorted_by_type,
    sorted_by_vehicle,
    status_badge,
    summarize_inventory,
    summarize_items,
    summarize_roster,
    summarize_schedules,
)

logger = logging.getLogger(__name__)

config = load_config()
setup_logging(config)

app = Flask(__name__)
app.secret_key = config.secret_key
app.config["FLEET_CONFIG"] = config
app.config["MAINTENANCE_CLIENT_FACTORY"] = lambda s: maintenance_client(config, s)
app.config["VEHICLE_CLIENT_FACTORY"] = lambda s: vehicle_client(config, s)
app.config["DRIVER_CLIENT_FACTORY"] = lambda s: driver_client(config, s)

sessions = SessionStore()


def format_km(km):
    """Format a distance with comma separator."""
    if km is None:
        return "—"
    return f"{km:,.0f}"


def format_cost(cost):
    if cost is None:
        return "—"
    return f"${cost:,.2f}"


def format_date(value):
    """Format a date for display."""
    if value is None or value is UNKNOWN:
        return "—"
    return value.isoformat()


def status_color(status: Status) -> str:
    """Tailwind classes for a status badge."""
    color = status_badge(status).color
    return f"bg-{color}-500 text-white"


def status_label(status: Status) -> str:
    return status_badge(status).label


def priority_color(priority) -> str:
    return f"text-{priority.color}-600"


# Register template filters
app.jinja_env.filters["format_km"] = format_km
app.jinja_env.filters["format_cost"] = format_cost
app.jinja_env.filters["format_date"] = format_date
app.jinja_env.filters["status_color"] = status_color
app.jinja_env.filters["status_label"] = status_label
app.jinja_env.filters["priority_color"] = priority_color
app.jinja_env.filters["describe_frequency"] = describe_frequency


def login_required(view):
    """Resolve the login session for the request or redirect to /login."""

    @wraps(view)
    def wrapped(*args, **kwargs):
        fleet_session = sessions.get(session.get("token"))
        if fleet_session is None:
            session.pop("token", None)
            return redirect(url_for("login", next=request.path))
        g.fleet_session = fleet_session
        return view(*args, **kwargs)

    return wrapped


def admin_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not g.fleet_session.is_admin:
            flash("Only administrators can do that", "error")
            return redirect(url_for("index"))
        return view(*args, **kwargs)

    return wrapped


def open_client(kind: str = "MAINTENANCE"):
    factory = app.config[f"{kind}_CLIENT_FACTORY"]
    return factory(g.fleet_session)


def load_sections(*sections):
    """Fetch snapshot sections, flashing (not raising) any failures."""
    with open_client() as client:
        snapshot, errors = fetch_snapshot(client, sections)
    for error in errors:
        flash(error, "error")
    return snapshot


@app.context_processor
def inject_user():
    return {"current_user": getattr(g, "fleet_session", None)}


# =============================================================================
# Authentication
# =============================================================================


@app.route("/login", methods=["GET", "POST"])
def login():
    """Mock login: any email and password, role chosen on the form."""
    if request.method == "GET":
        return render_template("login.html", next=request.args.get("next", ""))

    try:
        fleet_session = issue_session(
            request.form.get("email", "").strip(),
            request.form.get("password", ""),
            request.form.get("role", "employee"),
            ttl=timedelta(minutes=config.session_ttl_minutes),
        )
    except ValueError as e:
        flash(str(e), "error")
        return render_template("login.html", next=request.form.get("next", "")), 400

    session["token"] = sessions.add(fleet_session)
    logger.info("Session issued for %s (%s)", fleet_session.email, fleet_session.role)
    target = request.form.get("next") or ""
    # only local paths
    if not target.startswith("/") or target.startswith("//"):
        target = url_for("index")
    return redirect(target)


@app.route("/logout", methods=["POST", "GET"])
def logout():
    sessions.revoke(session.pop("token", None))
    flash("Signed out", "success")
    return redirect(url_for("login"))


# =============================================================================
# Dashboard pages
# =============================================================================


@app.route("/")
@login_required
def index():
    """Overview: status counts, overdue and upcoming work."""
    snapshot = load_sections("items")
    summary = summarize_items(snapshot.items)
    overdue = sort_by_urgency(i for i in snapshot.items if i.status == Status.OVERDUE)
    upcoming = sort_by_urgency(
        i for i in snapshot.items if i.status in (Status.DUE_SOON, Status.SCHEDULED)
    )

    fleet_counts = {}
    for kind, method in (("VEHICLE", "list_vehicles"), ("DRIVER", "list_drivers")):
        with open_client(kind) as client:
            result = getattr(client, method)()
        if result.success:
            fleet_counts[kind.lower() + "s"] = len(result.data)
        else:
            flash(f"Failed to fetch {kind.lower()}s: {result.error}", "error")

    return render_template(
        "index.html",
        summary=summary,
        overdue=overdue[:10],
        upcoming=upcoming[:10],
        fleet_counts=fleet_counts,
        Status=Status,
    )


@app.route("/maintenance")
@login_required
def maintenance_list():
    """Maintenance items with status filter and mileage progress."""
    status_filter = request.args.get("status", "").lower() or None
    snapshot = load_sections("items")
    items = snapshot.items
    status_counts = {s.value: sum(1 for i in items if i.status == s) for s in Status}

    if status_filter:
        try:
            wanted = Status.parse(status_filter)
        except ValueError:
            flash(f"Unknown status '{status_filter}'", "error")
            wanted = None
        if wanted is not None:
            items = [i for i in items if i.status == wanted]

    return render_template(
        "maintenance.html",
        items=sort_by_urgency(items),
        status_counts=status_counts,
        status_filter=status_filter,
        Status=Status,
    )


@app.route("/maintenance/<item_id>/<action>", methods=["POST"])
@login_required
@admin_required
def maintenance_action(item_id: str, action: str):
    """Start, complete or cancel a maintenance item."""
    with open_client() as client:
        if action == "start":
            result = client.start(item_id)
        elif action == "complete":
            cost = request.form.get("actual_cost")
            try:
                actual_cost = float(cost) if cost else None
            except ValueError:
                flash("Invalid cost value", "error")
                return redirect(url_for("maintenance_list"))
            result = client.complete(item_id, actual_cost, request.form.get("notes") or None)
        elif action == "cancel":
            result = client.cancel(item_id, request.form.get("reason") or None)
        else:
            flash(f"Unknown action '{action}'", "error")
            return redirect(url_for("maintenance_list"))

    if result.success:
        flash(f"Maintenance {item_id}: {action} done", "success")
    else:
        flash(f"Maintenance {item_id}: {result.error}", "error")
    return redirect(url_for("maintenance_list"))


@app.route("/calendar")
@login_required
def calendar_view():
    """Month calendar of due maintenance."""
    today = date.today()
    try:
        year = int(request.args.get("year", today.year))
        month = int(request.args.get("month", today.month))
        if not 1 <= month <= 12:
            raise ValueError
    except ValueError:
        flash("Invalid month", "error")
        year, month = today.year, today.month

    snapshot = load_sections("items")
    try:
        grid = build_month_grid(year, month, snapshot.items, today=today)
    except ValueError as e:
        flash(f"Invalid month: {e}", "error")
        year, month = today.year, today.month
        grid = build_month_grid(year, month, snapshot.items, today=today)

    return render_template(
        "calendar.html",
        weeks=month_rows(grid),
        year=year,
        month=month,
        month_name=date(year, month, 1).strftime("%B %Y"),
        prev_month=shift_month(year, month, -1),
        next_month=shift_month(year, month, 1),
        due_this_month=items_due_in_month(snapshot.items, year, month),
        overdue_count=sum(1 for i in snapshot.items if i.status == Status.OVERDUE),
        upcoming_count=sum(
            1 for i in snapshot.items if i.status in (Status.DUE_SOON, Status.SCHEDULED)
        ),
    )


@app.route("/analytics")
@login_required
def analytics_view():
    """Estimated vs actual cost analytics."""
    snapshot = load_sections("items")
    analytics = aggregate_costs(snapshot.items)
    return render_template(
        "analytics.html",
        analytics=analytics,
        by_vehicle=sorted_by_vehicle(analytics),
        by_type=sorted_by_type(analytics),
        has_data=bool(snapshot.items),
    )


@app.route("/recurring")
@login_required
def recurring_view():
    """Recurring schedules with cadence labels and projected next run."""
    today = date.today()
    snapshot = load_sections("schedules")
    summary = summarize_schedules(snapshot.schedules, today=today)
    rows = [
        {"schedule": s, "projected": next_occurrence(s, from_date=today)}
        for s in sorted(snapshot.schedules, key=lambda s: (not s.is_active, s.name))
    ]
    return render_template("recurring.html", rows=rows, summary=summary, UNKNOWN=UNKNOWN)


@app.route("/parts")
@login_required
def parts_view():
    """Parts inventory with low-stock warnings."""
    query = request.args.get("q", "").strip()
    with open_client() as client:
        result = client.parts(query or None)
    parts = result.data if result.success else []
    if not result.success:
        flash(f"Failed to fetch parts: {result.error}", "error")
    return render_template(
        "parts.html",
        parts=sorted(parts, key=lambda p: (p.category, p.name)),
        summary=summarize_inventory(parts),
        query=query,
    )


@app.route("/parts/<part_id>/restock", methods=["POST"])
@login_required
@admin_required
def restock_part(part_id: str):
    with open_client() as client:
        result = client.parts()
        if not result.success:
            flash(f"Failed to fetch parts: {result.error}", "error")
            return redirect(url_for("parts_view"))
        part = next((p for p in result.data if p.id == part_id), None)
        if part is None:
            flash(f"Part '{part_id}' not found", "error")
            return redirect(url_for("parts_view"))
        result = client.restock_part(part)

    if result.success:
        flash(f"Restocked {part.name} to {part.restock_quantity}", "success")
    else:
        flash(f"Restock failed: {result.error}", "error")
    return redirect(url_for("parts_view"))


@app.route("/technicians")
@login_required
def technicians_view():
    snapshot = load_sections("technicians")
    return render_template(
        "technicians.html",
        technicians=sorted(snapshot.technicians, key=lambda t: t.name),
        roster=summarize_roster(snapshot.technicians),
    )


if __name__ == "__main__":
    # Using 5050 to stay clear of the maintenance service on 5001
    app.run(debug=True, host="0.0.0.0", port=5050)
