from __future__ import annotations

from decimal import Decimal
from html import escape
from typing import Iterable, Optional

from .models import AppSettings, DashboardStats, Employee, Trip

STATUS_CLASSES = {
    "Approved": "badge approved",
    "Pending": "badge pending",
    "Rejected": "badge rejected",
}


def format_money(amount: Decimal, currency: str) -> str:
    return f"{escape(currency)} {amount:,.2f}"


def render_status_badge(status: str) -> str:
    css = STATUS_CLASSES.get(status, "badge")
    return f'<span class="{css}">{escape(status)}</span>'


def render_stat_cards(stats: DashboardStats, settings: AppSettings) -> str:
    if stats.approval_rate is None:
        approval = "n/a"
    else:
        approval = f"{stats.approval_rate * 100:.0f}%"
    cards = [
        ("Total Spending", format_money(stats.total_spend, settings.currency)),
        ("Total Trips", str(stats.total_trips)),
        ("Pending Approvals", str(stats.pending_count)),
        ("Approval Rate", approval),
    ]
    items = "".join(f'<div class="stat-card"><p>{label}</p><h3>{value}</h3></div>' for label, value in cards)
    return f'<section class="stat-cards">{items}</section>'


def render_trip_table(trips: Iterable[Trip], employees: Iterable[Employee]) -> str:
    names = {employee.id: employee.name for employee in employees}
    rows = []
    for trip in trips:
        name = names.get(trip.employee_id, "Unassigned")
        rows.append(
            "<tr>"
            f"<td>{escape(name)}</td>"
            f"<td>{escape(trip.date)} {escape(trip.time)}</td>"
            f"<td>{escape(trip.pickup)} &rarr; {escape(trip.dropoff)}</td>"
            f"<td>{escape(trip.purpose)}</td>"
            f"<td>{format_money(trip.amount, trip.currency)}</td>"
            f"<td>{render_status_badge(trip.status)}</td>"
            "</tr>"
        )
    if not rows:
        rows.append('<tr><td colspan="6">No trips found.</td></tr>')
    return (
        '<table class="trip-table">'
        "<thead><tr><th>Employee</th><th>Date</th><th>Route</th><th>Purpose</th><th>Amount</th><th>Status</th></tr></thead>"
        f"<tbody>{''.join(rows)}</tbody>"
        "</table>"
    )


def render_insights(insights: Optional[str], generating: bool = False) -> str:
    if generating:
        body = "<p>Analyzing trip data&hellip;</p>"
    else:
        body = f"<p>{escape(insights or 'No insights generated yet.')}</p>"
    return f'<section class="ai-insights"><h2>AI Insights</h2>{body}</section>'
