"""
Derived Plan Views

Read-only views over a generated plan for charts, calendar filters and
alerts. These are computed, never stored, and never write back into the
configuration.

DESIGN DECISION: Nothing in here reads the wall clock. "Today" is always
passed in, so the same plan gives the same views.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from hubplanner.models.plan import PlanConfiguration, PlanDay, PotType, YearPlan


class ChartPoint(BaseModel):
    """One day of the monthly timeline chart."""

    day_of_month: int
    income: Decimal
    expenses: Decimal
    pots: Decimal
    balance: Decimal


class UpcomingAlert(BaseModel):
    """A near-term day worth flagging."""

    date: date
    message: str
    level: str = Field(
        ...,
        pattern="^(warning|info)$"
    )


class PotProgress(BaseModel):
    """
    Projected progress of one configured pot.

    contributed is what this run moved into the pot; the configured
    current balance is reported alongside, untouched.
    """

    pot_id: str
    pot_name: str
    pot_type: PotType
    goal_amount: Decimal
    current_balance: Decimal
    contributed: Decimal
    projected_balance: Decimal

    @property
    def percent_of_goal(self) -> Optional[float]:
        if self.goal_amount <= 0:
            return None
        return float(self.projected_balance / self.goal_amount * 100)


def daily_chart_series(days: list[PlanDay]) -> list[ChartPoint]:
    """Per-day income, expense total, pot total and balance."""
    return [
        ChartPoint(
            day_of_month=day.date.day,
            income=day.income,
            expenses=day.expense_total,
            pots=day.pot_total,
            balance=day.balance_after,
        )
        for day in days
    ]


def category_totals(days: list[PlanDay]) -> dict[str, Decimal]:
    """Expense totals per category, in first-seen order."""
    totals: dict[str, Decimal] = {}
    for day in days:
        for expense in day.expenses:
            totals[expense.category] = totals.get(expense.category, Decimal("0")) + expense.amount
    return totals


def filter_days_by_category(days: list[PlanDay], categories: list[str]) -> list[PlanDay]:
    """Days with at least one expense in `categories`. Empty filter keeps all."""
    if not categories:
        return list(days)
    wanted = set(categories)
    return [d for d in days if any(e.category in wanted for e in d.expenses)]


def upcoming_alerts(
    days: list[PlanDay],
    today: date,
    warning_threshold: Decimal,
    horizon_days: int = 3,
) -> list[UpcomingAlert]:
    """
    Alerts for days from `today` up to `horizon_days` ahead (inclusive).

    Level is 'warning' when the day's balance is below the warning
    threshold, 'info' otherwise.
    """
    last = today + timedelta(days=horizon_days)
    alerts = []
    for day in days:
        if today <= day.date <= last:
            alerts.append(UpcomingAlert(
                date=day.date,
                message=f"{len(day.expenses)} expenses due",
                level="warning" if day.balance_after < warning_threshold else "info",
            ))
    return alerts


def pot_progress(plan: YearPlan, config: PlanConfiguration) -> list[PotProgress]:
    """Contributions per configured pot over the whole plan."""
    contributed: dict[str, Decimal] = {pot.id: Decimal("0") for pot in config.pots}
    for day in plan.days:
        for contribution in day.pots:
            if contribution.pot_id in contributed:
                contributed[contribution.pot_id] += contribution.amount

    return [
        PotProgress(
            pot_id=pot.id,
            pot_name=pot.name,
            pot_type=pot.type,
            goal_amount=pot.goal_amount,
            current_balance=pot.current_balance,
            contributed=contributed[pot.id],
            projected_balance=pot.current_balance + contributed[pot.id],
        )
        for pot in config.pots
    ]
