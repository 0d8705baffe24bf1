"""
Weekly Leftover Allocator

Invoked by the simulator whenever a week closes (Sunday, or the last day
of a month that ends mid-week). Routes the week's unused surplus into the
pot selected by the week-of-month policy table.

The sweep is an explicit transfer out of free cash: the week's last day
gets an extra pot contribution and its balance drops by the leftover, on
top of that day's own income/expense math.

KNOWN GAP: if no pot of the required type exists the leftover is not
moved anywhere. The ledger is left untouched and the amount is only
reported as `unallocated_surplus` on the week's last day.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hubplanner.models.plan import (
    ContributionKind,
    PlanConfiguration,
    PlanDay,
    Pot,
    PotContribution,
    PotType,
)


class WeekAccumulator(BaseModel):
    """Totals of the days since the last week boundary."""

    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    pots: Decimal = Decimal("0")
    days: list[PlanDay] = Field(default_factory=list)

    def add(self, day: PlanDay) -> None:
        self.income += day.income
        self.expenses += day.expense_total
        self.pots += day.pot_total
        self.days.append(day)

    @property
    def leftover(self) -> Decimal:
        return self.income - self.expenses - self.pots

    def reset(self) -> None:
        self.income = Decimal("0")
        self.expenses = Decimal("0")
        self.pots = Decimal("0")
        self.days = []


class LeftoverSweep(BaseModel):
    """Outcome of one week close."""
    model_config = ConfigDict(frozen=True)

    leftover: Decimal
    pot_type: Optional[PotType] = None
    pot: Optional[Pot] = None

    @property
    def swept(self) -> Decimal:
        """Amount actually moved into a pot."""
        if self.pot is not None and self.leftover > 0:
            return self.leftover
        return Decimal("0")

    @property
    def unallocated(self) -> Decimal:
        if self.pot is None and self.leftover > 0:
            return self.leftover
        return Decimal("0")


def allocate_weekly_leftover(
    accumulator: WeekAccumulator,
    week_of_month: int,
    config: PlanConfiguration,
) -> LeftoverSweep:
    """
    Close a week and sweep its leftover.

    Mutates the accumulator's last day (contribution, balance, unallocated
    surplus). The caller must subtract `swept` from its running balance.
    """
    leftover = accumulator.leftover
    if leftover <= 0 or not accumulator.days:
        return LeftoverSweep(leftover=leftover)

    pot_type = config.rules.weekly_allocation.pot_type_for(week_of_month)
    pot = config.find_pot_by_type(pot_type)
    last_day = accumulator.days[-1]

    if pot is None:
        last_day.unallocated_surplus += leftover
        return LeftoverSweep(leftover=leftover, pot_type=pot_type)

    last_day.pots.append(PotContribution(
        pot_id=pot.id,
        pot_name=pot.name,
        amount=leftover,
        pot_type=pot.type,
        kind=ContributionKind.SWEEP,
    ))
    last_day.balance_after -= leftover

    return LeftoverSweep(leftover=leftover, pot_type=pot_type, pot=pot)
