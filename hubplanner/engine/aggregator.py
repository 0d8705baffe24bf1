"""
Weekly Plan Aggregator

Second, independent pass over a sequence of PlanDays (normally one
selected month) that re-buckets them into Monday-Sunday calendar weeks
for the weekly summary cards.

NOTE: Week indexes here count calendar weeks from the start of the viewed
range. They are NOT the simulator's week-of-month index, and near month
edges the two may name a different leftover destination for the same
days. Both behaviours are kept as they are.
"""

from datetime import timedelta
from decimal import Decimal
from typing import Optional

from hubplanner.engine.dates import calendar_week_start
from hubplanner.models.plan import (
    LeftoverAllocation,
    PlanConfiguration,
    PlanDay,
    Thresholds,
    WeeklyPlan,
    WeekStatus,
)
from hubplanner.presentation import DefaultPlanFormatter, PlanFormatter


DEFAULT_AHEAD_MARGIN = Decimal("100")


def classify_week(
    end_balance: Decimal,
    thresholds: Thresholds,
    ahead_margin: Decimal = DEFAULT_AHEAD_MARGIN,
) -> WeekStatus:
    """behind below danger; ahead above warning + margin; else on-track."""
    if end_balance < thresholds.danger:
        return WeekStatus.BEHIND
    if end_balance > thresholds.warning + ahead_margin:
        return WeekStatus.AHEAD
    return WeekStatus.ON_TRACK


def generate_weekly_plans(
    days: list[PlanDay],
    config: PlanConfiguration,
    formatter: Optional[PlanFormatter] = None,
    ahead_margin: Decimal = DEFAULT_AHEAD_MARGIN,
) -> list[WeeklyPlan]:
    """
    Partition `days` into calendar weeks and summarise each one.

    Weeks with no days in the input are skipped but still consume an
    index, so indexes always match the calendar position of the week.
    """
    if not days:
        return []

    formatter = formatter or DefaultPlanFormatter()
    thresholds = config.rules.thresholds

    buckets: dict = {}
    for day in days:
        buckets.setdefault(calendar_week_start(day.date), []).append(day)

    weeks = []
    week_start = calendar_week_start(min(d.date for d in days))
    last_start = calendar_week_start(max(d.date for d in days))
    week_index = 0

    while week_start <= last_start:
        week_index += 1
        week_end = week_start + timedelta(days=6)
        week_days = sorted(buckets.get(week_start, []), key=lambda d: d.date)

        if week_days:
            income = sum((d.income for d in week_days), Decimal("0"))
            expenses = sum((d.expense_total for d in week_days), Decimal("0"))
            pots = sum((d.pot_total for d in week_days), Decimal("0"))
            leftover = income - expenses - pots
            end_balance = week_days[-1].balance_after

            pot_type = config.rules.weekly_allocation.pot_type_for(week_index)
            pot = config.find_pot_by_type(pot_type)
            allocation = LeftoverAllocation(
                pot_type=pot_type,
                pot_name=pot.name if pot else None,
                amount=leftover,
            )

            weeks.append(WeeklyPlan(
                label=(
                    f"Week {week_index} "
                    f"({week_start.strftime('%b %d')} - {week_end.strftime('%b %d')})"
                ),
                week_index=week_index,
                week_start=week_start,
                week_end=week_end,
                income=income,
                expenses=expenses,
                pots=pots,
                leftover=leftover,
                leftover_allocation=allocation,
                unallocated_surplus=sum(
                    (d.unallocated_surplus for d in week_days), Decimal("0")
                ),
                end_balance=end_balance,
                actions=formatter.week_actions(week_index, allocation.label),
                status=classify_week(end_balance, thresholds, ahead_margin),
            ))

        week_start += timedelta(days=7)

    return weeks
