"""
Data Models Package

This package contains all Pydantic models used by the Financial Hub Planner.
All data flowing into and out of the engine conforms to these schemas.
"""

from hubplanner.models.plan import (
    ContributionKind,
    DayStatus,
    Expense,
    ExpenseEntry,
    Frequency,
    IncomeFrequency,
    LeftoverAllocation,
    MonthPlan,
    PlanConfiguration,
    PlanDay,
    Pot,
    PotContribution,
    PotFrequency,
    PotPriority,
    PotType,
    Rules,
    Thresholds,
    Weekday,
    WeeklyAllocation,
    WeeklyPlan,
    WeekStatus,
    YearPlan,
)
from hubplanner.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Configuration models
    "Expense",
    "Frequency",
    "IncomeFrequency",
    "PlanConfiguration",
    "Pot",
    "PotFrequency",
    "PotPriority",
    "PotType",
    "Rules",
    "Thresholds",
    "Weekday",
    "WeeklyAllocation",
    # Ledger models
    "ContributionKind",
    "DayStatus",
    "ExpenseEntry",
    "MonthPlan",
    "PlanDay",
    "PotContribution",
    "YearPlan",
    # Weekly summary models
    "LeftoverAllocation",
    "WeeklyPlan",
    "WeekStatus",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
