from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence

from taxi_manager.models import (
    UNASSIGNED_DEPARTMENT,
    DashboardStats,
    DayCount,
    DepartmentSpend,
    Employee,
    Trip,
)

RATE_QUANTUM = Decimal("0.0001")


def compute_dashboard_stats(trips: Sequence[Trip], employees: Iterable[Employee]) -> DashboardStats:
    """
    Derive the dashboard summary from the current trip and employee collections.

    Amounts are summed as-is; the per-trip currency is not converted. Trips whose
    employee cannot be resolved are counted under the "Other" department.
    """
    departments = {employee.id: employee.department for employee in employees}

    total_spend = Decimal("0")
    pending_count = 0
    approved = 0
    rejected = 0
    spend_by_department: dict[str, Decimal] = {}
    count_by_day: dict[str, int] = {}

    for trip in trips:
        total_spend += trip.amount
        if trip.status == "Pending":
            pending_count += 1
        elif trip.status == "Approved":
            approved += 1
        elif trip.status == "Rejected":
            rejected += 1

        department = departments.get(trip.employee_id) or UNASSIGNED_DEPARTMENT
        spend_by_department[department] = spend_by_department.get(department, Decimal("0")) + trip.amount
        count_by_day[trip.date] = count_by_day.get(trip.date, 0) + 1

    return DashboardStats(
        total_spend=total_spend,
        total_trips=len(trips),
        pending_count=pending_count,
        spend_by_department=[DepartmentSpend(name=name, value=value) for name, value in spend_by_department.items()],
        trips_by_day=[DayCount(date=day, count=count_by_day[day]) for day in sorted(count_by_day, key=_calendar_key)],
        approval_rate=_approval_rate(approved, rejected),
    )


def _calendar_key(raw: str) -> tuple[int, date, str]:
    # Unparseable dates go last, ordered by their raw text.
    try:
        return 0, date.fromisoformat(raw), raw
    except ValueError:
        return 1, date.max, raw


def _approval_rate(approved: int, rejected: int) -> Optional[Decimal]:
    decided = approved + rejected
    if not decided:
        return None
    return (Decimal(approved) / Decimal(decided)).quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)


def filter_trips(
    trips: Iterable[Trip],
    employees: Iterable[Employee],
    status: str = "All",
    search: str = "",
) -> list[Trip]:
    """Trip-history filter: exact status (or "All") plus a name/purpose search."""
    names = {employee.id: employee.name.lower() for employee in employees}
    needle = search.lower()
    matches: list[Trip] = []
    for trip in trips:
        if status != "All" and trip.status != status:
            continue
        name = names.get(trip.employee_id)
        if needle and not ((name is not None and needle in name) or needle in trip.purpose.lower()):
            continue
        matches.append(trip)
    return matches


def filter_employees(employees: Iterable[Employee], search: str = "") -> list[Employee]:
    needle = search.lower()
    return [
        employee
        for employee in employees
        if needle in employee.name.lower()
        or needle in employee.department.lower()
        or needle in employee.email.lower()
    ]
