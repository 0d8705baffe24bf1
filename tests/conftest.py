"""Shared fixtures for the planner tests."""

import pytest
from datetime import date
from decimal import Decimal

from hubplanner.builder import demo_configuration
from hubplanner.models.plan import (
    Expense,
    Frequency,
    IncomeFrequency,
    PlanConfiguration,
    Pot,
    PotFrequency,
    PotType,
)


# Thursday; the month closes on a Saturday
OCTOBER_2026 = date(2026, 10, 1)


@pytest.fixture
def october() -> date:
    return OCTOBER_2026


@pytest.fixture
def petrol_only_config() -> PlanConfiguration:
    """340 start, 180/day income, 20/day petrol, no pots at all."""
    return PlanConfiguration(
        name="Petrol only",
        starting_balance=Decimal("340"),
        income_frequency=IncomeFrequency.DAILY,
        income_amount=Decimal("180"),
        expenses=[
            Expense(
                id="exp_petrol",
                name="Petrol",
                amount=Decimal("20"),
                frequency=Frequency.DAILY,
                category="petrol",
            ),
        ],
    )


@pytest.fixture
def sweep_config() -> PlanConfiguration:
    """100/day income, no expenses, both leftover destination pots."""
    return PlanConfiguration(
        name="Sweeps",
        starting_balance=Decimal("0"),
        income_amount=Decimal("100"),
        pots=[
            Pot(
                id="pot_next",
                name="Next-Month Pot",
                goal_amount=Decimal("700"),
                frequency=PotFrequency.FLEXIBLE,
                type=PotType.NEXT_MONTH,
            ),
            Pot(
                id="pot_buffer",
                name="Buffer",
                frequency=PotFrequency.FLEXIBLE,
                type=PotType.BUFFER,
            ),
        ],
    )


@pytest.fixture
def demo_config() -> PlanConfiguration:
    return demo_configuration()
