"""Plan export package."""

from hubplanner.export.csv_exporter import (
    CSV_HEADER,
    PlanExportError,
    export_plan_csv,
    write_plan_csv,
)

__all__ = ["CSV_HEADER", "PlanExportError", "export_plan_csv", "write_plan_csv"]
