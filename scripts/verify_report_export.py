from __future__ import annotations

from pathlib import Path

from taxi_manager.export import SUMMARY_SHEET, export_dashboard_report, read_cells
from taxi_manager.models import AppSettings
from taxi_manager.storage import INITIAL_EMPLOYEES, INITIAL_TRIPS

MANDATORY_CELLS = ["A1", "B2", "B3", "B5", "B6"]


def main() -> int:
    output_path = Path("artifacts/sample_dashboard_report.xlsx")
    export_dashboard_report(INITIAL_TRIPS, INITIAL_EMPLOYEES, AppSettings(), output_path)

    values = read_cells(output_path, MANDATORY_CELLS, SUMMARY_SHEET)
    missing = [cell for cell, value in values.items() if value in (None, "")]

    if missing:
        print("Verification failed. Missing mandatory values in:", ", ".join(missing))
        return 1

    print(f"Verification passed. Report generated at {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
