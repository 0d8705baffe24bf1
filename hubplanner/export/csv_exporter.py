"""
Plan CSV Exporter

One-way export of a full multi-month plan: one row per PlanDay.

Format:
    Date,Week,Income,Expenses,Pot Contributions,Balance,Status,Recommendations
    "2026-10-01",Week 1,180.00,"Petrol:20.00","",500.00,good,"Leftovers go to Next-Month Pot"

Expenses and Pot Contributions are ';'-joined name:amount pairs. Text
columns are double-quoted (embedded quotes doubled). No currency symbols.
"""

from pathlib import Path
from typing import Union

import structlog

from hubplanner.models.plan import YearPlan


logger = structlog.get_logger(__name__)

CSV_HEADER = "Date,Week,Income,Expenses,Pot Contributions,Balance,Status,Recommendations"


class PlanExportError(Exception):
    """Writing an export failed."""
    pass


def export_plan_csv(plan: YearPlan) -> str:
    """Serialize every day of every month, in order."""
    lines = [CSV_HEADER]
    for month in plan.months:
        for day in month.days:
            lines.append(day.to_csv_row())
    return "\n".join(lines) + "\n"


def write_plan_csv(plan: YearPlan, path: Union[str, Path]) -> int:
    """
    Write the export to `path`, creating parent directories.

    Returns:
        Number of data rows written

    Raises:
        PlanExportError: If the file cannot be written
    """
    target = Path(path)
    content = export_plan_csv(plan)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as e:
        raise PlanExportError(f"Could not write plan export to {target}: {e}") from e

    row_count = len(plan.days)
    logger.info("plan_csv_written", path=str(target), rows=row_count)
    return row_count
