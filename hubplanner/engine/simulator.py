"""
Daily Ledger Simulator

Projects the running balance one calendar day at a time across a
horizon of months (12 by default), starting on the 1st of the start
date's month.

Per month:
1. Reset the accumulator of every essential monthly pot and derive each
   one's flat daily target (goal / days in month).
2. Per day:
   a. Add the day's share of income
   b. Subtract due expenses, in essential-category order
   c. Fund essential monthly pots: min(daily target, remaining need, balance)
   d. On Mondays fund essential weekly pots with goal / 4, if covered
   e. Classify the day and attach recommendations
3. At each week close, sweep the leftover (see allocator.py).
4. Record each essential monthly pot's month-end total on the MonthPlan.

GUARANTEES:
- Deterministic: same configuration + start date = identical output
- Never raises for degenerate input; an under-funded schedule simply
  produces negative balances and DANGER days
- No recorded expense or contribution is ever negative
- PlanConfiguration (including Pot.current_balance) is never mutated
"""

from datetime import date
from decimal import Decimal
from typing import Optional

import structlog

from hubplanner.engine.allocator import WeekAccumulator, allocate_weekly_leftover
from hubplanner.engine.dates import (
    add_months,
    days_in_month,
    is_week_close,
    iter_month_days,
    month_key,
    week_of_month,
)
from hubplanner.engine.schedule import due_expenses
from hubplanner.models.plan import (
    DayStatus,
    Expense,
    ExpenseEntry,
    IncomeFrequency,
    MonthPlan,
    PlanConfiguration,
    PlanDay,
    PotContribution,
    Thresholds,
    YearPlan,
    money,
    non_negative,
)
from hubplanner.presentation import DefaultPlanFormatter, PlanFormatter


logger = structlog.get_logger(__name__)

DEFAULT_HORIZON_MONTHS = 12
WEEKS_PER_MONTH = 4
# Income smoothing divisors: weekly income over 7 days, monthly over 30
DAYS_PER_WEEK = 7
DAYS_PER_MONTH_SMOOTHING = 30


class PotLedger:
    """
    Month-to-date accumulated balance of each essential monthly pot.

    Owned by a single run and discarded afterwards.
    """

    def __init__(self):
        self._accumulated: dict[str, Decimal] = {}

    def reset(self, pot_ids: list[str]) -> None:
        self._accumulated = {pot_id: Decimal("0") for pot_id in pot_ids}

    def accumulated(self, pot_id: str) -> Decimal:
        return self._accumulated.get(pot_id, Decimal("0"))

    def add(self, pot_id: str, amount: Decimal) -> None:
        self._accumulated[pot_id] = self.accumulated(pot_id) + amount

    def snapshot(self) -> dict[str, Decimal]:
        return dict(self._accumulated)


def daily_income_for(config: PlanConfiguration) -> Decimal:
    """
    Income credited every day.

    Weekly and monthly income are spread evenly rather than lump-paid.
    """
    amount = non_negative(config.income_amount)
    if config.income_frequency == IncomeFrequency.WEEKLY:
        return money(amount / DAYS_PER_WEEK)
    if config.income_frequency == IncomeFrequency.MONTHLY:
        return money(amount / DAYS_PER_MONTH_SMOOTHING)
    return money(amount)


def sort_by_essential_order(expenses: list[Expense], order: list[str]) -> list[Expense]:
    """
    Sort by the position of each expense's category in `order`.

    Matching is case-insensitive. Categories not listed go last; ties keep
    their configured order.
    """
    ranks = {category.lower(): position for position, category in enumerate(order)}
    unlisted = len(ranks)
    return sorted(expenses, key=lambda e: ranks.get(e.category.lower(), unlisted))


def classify_day(balance: Decimal, thresholds: Thresholds) -> DayStatus:
    """danger if below danger; else warning if below warning; else good."""
    if balance < thresholds.danger:
        return DayStatus.DANGER
    if balance < thresholds.warning:
        return DayStatus.WARNING
    return DayStatus.GOOD


def generate_year_plan(
    config: PlanConfiguration,
    start_date: date,
    months: int = DEFAULT_HORIZON_MONTHS,
    formatter: Optional[PlanFormatter] = None,
) -> YearPlan:
    """
    Run the engine.

    Args:
        config: Plan configuration, treated as an immutable value
        start_date: Any date in the first month of the plan
        months: Number of consecutive months to project
        formatter: Source of recommendation strings

    Returns:
        YearPlan with one MonthPlan per month and one PlanDay per date
    """
    formatter = formatter or DefaultPlanFormatter()
    rules = config.rules
    income = daily_income_for(config)
    essential_monthly = [p for p in config.pots if p.is_essential_monthly]
    essential_weekly = [p for p in config.pots if p.is_essential_weekly]

    running_balance = money(config.starting_balance)
    ledger = PotLedger()
    plan = YearPlan(start_date=start_date, starting_balance=running_balance)

    for offset in range(months):
        first_day = add_months(start_date, offset)
        month_length = days_in_month(first_day)

        ledger.reset([p.id for p in essential_monthly])
        daily_targets = {
            p.id: money(non_negative(p.goal_amount) / month_length)
            for p in essential_monthly
        }

        month = MonthPlan(key=month_key(first_day), month_start=first_day)
        week = WeekAccumulator()

        for day in iter_month_days(first_day):
            week_index = week_of_month(day)

            # Income
            running_balance += income

            # Expenses, in essential order
            entries = []
            for expense in sort_by_essential_order(
                due_expenses(config.expenses, day, start_date),
                rules.essential_order,
            ):
                amount = money(non_negative(expense.amount))
                running_balance -= amount
                entries.append(ExpenseEntry(
                    id=expense.id,
                    name=expense.name,
                    amount=amount,
                    category=expense.category,
                ))

            # Essential monthly pots, pro-rata
            contributions = []
            for pot in essential_monthly:
                target = daily_targets[pot.id]
                if target <= 0:
                    continue
                needed = non_negative(pot.goal_amount) - ledger.accumulated(pot.id)
                contribution = min(target, needed, running_balance)
                if contribution > 0:
                    running_balance -= contribution
                    ledger.add(pot.id, contribution)
                    contributions.append(PotContribution(
                        pot_id=pot.id,
                        pot_name=pot.name,
                        amount=contribution,
                        pot_type=pot.type,
                    ))

            # Essential weekly pots, flat share on Mondays
            if day.weekday() == 0:
                for pot in essential_weekly:
                    share = money(non_negative(pot.goal_amount) / WEEKS_PER_MONTH)
                    if share > 0 and running_balance >= share:
                        running_balance -= share
                        contributions.append(PotContribution(
                            pot_id=pot.id,
                            pot_name=pot.name,
                            amount=share,
                            pot_type=pot.type,
                        ))

            status = classify_day(running_balance, rules.thresholds)
            plan_day = PlanDay(
                date=day,
                income=income,
                expenses=entries,
                pots=contributions,
                balance_after=running_balance,
                week_of_month=week_index,
                status=status,
                recommendations=formatter.day_recommendations(
                    status,
                    week_index,
                    rules.weekly_allocation.pot_type_for(week_index),
                ),
            )
            month.days.append(plan_day)
            week.add(plan_day)

            if is_week_close(day):
                sweep = allocate_weekly_leftover(week, week_index, config)
                running_balance -= sweep.swept
                week.reset()

        month.essential_pot_totals = ledger.snapshot()
        plan.months.append(month)

    logger.debug(
        "year_plan_generated",
        start_date=start_date.isoformat(),
        months=len(plan.months),
        final_balance=str(plan.final_balance),
    )
    return plan
