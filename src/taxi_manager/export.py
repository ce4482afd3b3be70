from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font

from taxi_manager.models import AppSettings, Employee, Trip
from taxi_manager.stats import compute_dashboard_stats

SUMMARY_SHEET = "Summary"
TRIPS_SHEET = "Trips"


def export_dashboard_report(
    trips: Sequence[Trip],
    employees: Sequence[Employee],
    settings: AppSettings,
    output_path: Path | str,
) -> Path:
    """Write the dashboard figures and the trip list to an .xlsx workbook."""
    stats = compute_dashboard_stats(trips, employees)
    workbook = Workbook()
    ws = workbook.active
    ws.title = SUMMARY_SHEET

    ws.append([f"{settings.company_name} taxi expense report"])
    ws["A1"].font = Font(bold=True, size=14)
    rows = [
        ("Total spending", float(stats.total_spend)),
        ("Currency", settings.currency),
        ("Monthly budget", float(settings.monthly_budget)),
        ("Total trips", stats.total_trips),
        ("Pending approvals", stats.pending_count),
        ("Approval rate", float(stats.approval_rate) if stats.approval_rate is not None else None),
    ]
    for label, value in rows:
        ws.append([label, value])

    ws.append([])
    ws.append(["Spend by department"])
    for entry in stats.spend_by_department:
        ws.append([entry.name, float(entry.value)])

    ws.append([])
    ws.append(["Trips by day"])
    for entry in stats.trips_by_day:
        ws.append([entry.date, entry.count])

    names = {employee.id: employee.name for employee in employees}
    trip_sheet = workbook.create_sheet(TRIPS_SHEET)
    trip_sheet.append(
        ["ID", "Employee", "Date", "Time", "Pickup", "Dropoff", "Amount", "Currency", "Status", "Purpose", "Category"]
    )
    for cell in trip_sheet[1]:
        cell.font = Font(bold=True)
    for trip in trips:
        trip_sheet.append(
            [
                trip.id,
                names.get(trip.employee_id, "Unassigned"),
                trip.date,
                trip.time,
                trip.pickup,
                trip.dropoff,
                float(trip.amount),
                trip.currency,
                trip.status,
                trip.purpose,
                trip.category,
            ]
        )

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output_path)
    return output_path


def read_cells(path: Path | str, cells: list[str], sheet_name: str = SUMMARY_SHEET) -> dict[str, Any]:
    """Utility for validation/testing: read exact cell values from an exported workbook."""
    workbook = load_workbook(path, data_only=False)
    sheet = workbook[sheet_name]
    return {cell: sheet[cell].value for cell in cells}
