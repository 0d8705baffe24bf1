"""
Projection engine package.

Pure, synchronous, deterministic. No I/O and no state shared between runs.
"""

from hubplanner.engine.aggregator import classify_week, generate_weekly_plans
from hubplanner.engine.allocator import (
    LeftoverSweep,
    WeekAccumulator,
    allocate_weekly_leftover,
)
from hubplanner.engine.dates import (
    calendar_week_start,
    first_weekday_on_or_after,
    week_of_month,
)
from hubplanner.engine.schedule import due_expenses, matches_schedule
from hubplanner.engine.simulator import (
    PotLedger,
    classify_day,
    daily_income_for,
    generate_year_plan,
    sort_by_essential_order,
)

__all__ = [
    # Schedule
    "due_expenses",
    "matches_schedule",
    # Week numbering
    "calendar_week_start",
    "first_weekday_on_or_after",
    "week_of_month",
    # Simulator
    "PotLedger",
    "classify_day",
    "daily_income_for",
    "generate_year_plan",
    "sort_by_essential_order",
    # Allocator
    "LeftoverSweep",
    "WeekAccumulator",
    "allocate_weekly_leftover",
    # Aggregator
    "classify_week",
    "generate_weekly_plans",
]
