"""
Configuration Builder

Produces PlanConfiguration values for the engine:
1. suggest_configuration() - from transaction history and savings goals
2. demo_configuration()    - the Financial Hub's sample schema
3. load/dump_configuration() - JSON round trip via pydantic

DESIGN DECISION: Suggestions are a starting point for the user to edit,
never a final plan. Amounts are rounded to whole units on purpose.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, ValidationError

from hubplanner.models.plan import (
    Expense,
    Frequency,
    IncomeFrequency,
    PlanConfiguration,
    Pot,
    PotFrequency,
    PotPriority,
    PotType,
    Rules,
    Thresholds,
    Weekday,
)


SUGGESTION_MIN_TRANSACTIONS = 3
SUGGESTED_DAY_OF_MONTH = 1
HIGH_PRIORITY_GOAL = Decimal("1000")
DEFAULT_ESSENTIAL_ORDER = [
    "Food", "Transport", "Housing", "Utilities", "Entertainment", "Healthcare", "Other",
]


class ConfigurationLoadError(Exception):
    """A configuration file could not be read or parsed."""
    pass


class Transaction(BaseModel):
    """A historical transaction. Income is positive, spending negative."""

    date: date
    amount: Decimal
    category: Optional[str] = None
    description: Optional[str] = None


class SavingsGoal(BaseModel):
    """A savings goal tracked elsewhere in the app."""

    id: str
    title: str = Field(..., min_length=1)
    target_amount: Decimal = Field(..., ge=0)
    current_amount: Decimal = Field(default=Decimal("0"), ge=0)


def _whole(value: Decimal) -> Decimal:
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def suggest_configuration(
    transactions: list[Transaction],
    goals: Optional[list[SavingsGoal]] = None,
    starting_balance: Decimal = Decimal("0"),
    currency: str = "GBP",
    thresholds: Optional[Thresholds] = None,
) -> PlanConfiguration:
    """
    Suggest a configuration from transaction history.

    - Income: total positive amounts / number of distinct income dates,
      as a daily income
    - Expenses: one monthly expense per category with at least three
      spending transactions, at the category's average amount
    - Pots: one monthly savings pot per goal
    """
    goals = goals or []

    income_txns = [t for t in transactions if t.amount > 0]
    daily_income = Decimal("0")
    if income_txns:
        total_income = sum((t.amount for t in income_txns), Decimal("0"))
        income_days = len({t.date for t in income_txns})
        daily_income = _whole(total_income / max(income_days, 1))

    # Category order is first-seen order, for deterministic output
    spending: dict[str, list[Decimal]] = {}
    for t in transactions:
        if t.amount < 0:
            spending.setdefault(t.category or "Other", []).append(abs(t.amount))

    expenses = []
    for category, amounts in spending.items():
        if len(amounts) < SUGGESTION_MIN_TRANSACTIONS:
            continue
        average = sum(amounts, Decimal("0")) / len(amounts)
        expenses.append(Expense(
            id=f"suggested_{category}",
            name=f"{category} Expense",
            amount=_whole(average),
            frequency=Frequency.MONTHLY,
            day_of_month=SUGGESTED_DAY_OF_MONTH,
            category=category,
            notes=f"Based on {len(amounts)} transactions",
        ))

    pots = [
        Pot(
            id=goal.id,
            name=goal.title,
            goal_amount=goal.target_amount,
            current_balance=goal.current_amount,
            frequency=PotFrequency.MONTHLY,
            type=PotType.SAVINGS,
            priority=(
                PotPriority.HIGH if goal.target_amount > HIGH_PRIORITY_GOAL
                else PotPriority.MEDIUM
            ),
        )
        for goal in goals
    ]

    return PlanConfiguration(
        currency=currency,
        starting_balance=starting_balance,
        income_frequency=IncomeFrequency.DAILY,
        income_amount=daily_income,
        expenses=expenses,
        pots=pots,
        rules=Rules(
            essential_order=list(DEFAULT_ESSENTIAL_ORDER),
            thresholds=thresholds or Thresholds(),
        ),
    )


def demo_configuration() -> PlanConfiguration:
    """The sample schema the Financial Hub starts with."""
    return PlanConfiguration(
        name="Demo",
        currency="GBP",
        starting_balance=Decimal("340"),
        income_frequency=IncomeFrequency.DAILY,
        income_amount=Decimal("180"),
        expenses=[
            Expense(id="exp_petrol", name="Petrol", amount=Decimal("20"),
                    frequency=Frequency.DAILY, category="petrol"),
            Expense(id="exp_food", name="Food", amount=Decimal("50"),
                    frequency=Frequency.WEEKLY, day_of_week=Weekday.MONDAY, category="food"),
            Expense(id="exp_car_rent", name="Car Rent", amount=Decimal("240"),
                    frequency=Frequency.BIWEEKLY, day_of_week=Weekday.FRIDAY, category="rent"),
            Expense(id="exp_bills", name="Bills", amount=Decimal("990"),
                    frequency=Frequency.MONTHLY, day_of_month=28, category="bills"),
            Expense(id="exp_cleaning", name="Cleaning", amount=Decimal("15"),
                    frequency=Frequency.BIWEEKLY, day_of_week=Weekday.SATURDAY, category="cleaning"),
        ],
        pots=[
            Pot(id="pot_savings", name="Savings Pot", goal_amount=Decimal("800"),
                frequency=PotFrequency.MONTHLY, priority=PotPriority.HIGH, type=PotType.SAVINGS),
            Pot(id="pot_next_month", name="Next-Month Pot", goal_amount=Decimal("700"),
                frequency=PotFrequency.FLEXIBLE, priority=PotPriority.HIGH, type=PotType.NEXT_MONTH),
            Pot(id="pot_buffer", name="Buffer", goal_amount=Decimal("0"),
                frequency=PotFrequency.FLEXIBLE, priority=PotPriority.LOW, type=PotType.BUFFER),
            Pot(id="pot_bills", name="Bills Pot", goal_amount=Decimal("990"),
                frequency=PotFrequency.MONTHLY, priority=PotPriority.HIGH, type=PotType.ESSENTIAL),
            Pot(id="pot_car_rent", name="Car Rent Pot", goal_amount=Decimal("480"),
                frequency=PotFrequency.MONTHLY, priority=PotPriority.HIGH, type=PotType.ESSENTIAL),
        ],
        rules=Rules(
            essential_order=["petrol", "food", "rent", "bills", "cleaning", "other"],
            thresholds=Thresholds(warning=Decimal("100"), danger=Decimal("0")),
        ),
    )


def load_configuration(path: Union[str, Path]) -> PlanConfiguration:
    """
    Read a configuration from a JSON file.

    Raises:
        ConfigurationLoadError: If the file is missing, unreadable or invalid
    """
    source = Path(path)
    try:
        raw = source.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationLoadError(f"Could not read configuration {source}: {e}") from e

    try:
        return PlanConfiguration.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigurationLoadError(f"Invalid configuration in {source}: {e}") from e


def dump_configuration(config: PlanConfiguration, path: Union[str, Path]) -> None:
    """Write a configuration as indented JSON."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(config.model_dump_json(indent=2), encoding="utf-8")
