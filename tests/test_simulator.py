"""
Tests for the daily ledger simulator

Covers the end-to-end scenario, balance continuity, essential pot funding,
expense ordering, status precedence and determinism.
"""

import pytest
from datetime import date
from decimal import Decimal

from hubplanner.engine.aggregator import generate_weekly_plans
from hubplanner.engine.simulator import (
    PotLedger,
    classify_day,
    daily_income_for,
    generate_year_plan,
    sort_by_essential_order,
)
from hubplanner.export import export_plan_csv
from hubplanner.models.plan import (
    DayStatus,
    Expense,
    Frequency,
    IncomeFrequency,
    PlanConfiguration,
    Pot,
    PotFrequency,
    PotType,
    Thresholds,
)
from hubplanner.presentation import DefaultPlanFormatter


def _essential_pot(goal, frequency=PotFrequency.MONTHLY, pot_id="pot_essential") -> Pot:
    return Pot(
        id=pot_id,
        name="Essentials",
        goal_amount=Decimal(goal),
        frequency=frequency,
        type=PotType.ESSENTIAL,
    )


def _contributions(day, pot_id):
    return [p.amount for p in day.pots if p.pot_id == pot_id]


class TestEndToEnd:
    """The petrol-only scenario: +160 every day."""

    def test_first_days(self, petrol_only_config, october):
        plan = generate_year_plan(petrol_only_config, october)
        days = plan.days

        assert days[0].date == october
        assert days[0].income == Decimal("180")
        assert days[0].expense_total == Decimal("20")
        assert days[0].balance_after == Decimal("500")
        assert days[1].balance_after == Decimal("660")

    def test_balance_grows_by_160_per_day(self, petrol_only_config, october):
        plan = generate_year_plan(petrol_only_config, october)

        for i, day in enumerate(plan.days):
            assert day.balance_after == Decimal("340") + Decimal("160") * (i + 1)
            assert day.status == DayStatus.GOOD

    def test_twelve_months_by_default(self, petrol_only_config, october):
        plan = generate_year_plan(petrol_only_config, october)

        assert len(plan.months) == 12
        assert len(plan.days) == 365
        assert plan.month_keys[0] == "October 2026"
        assert plan.month_keys[-1] == "September 2027"
        assert plan.final_balance == Decimal("340") + Decimal("160") * 365

    def test_mid_month_start_covers_whole_month(self, petrol_only_config):
        plan = generate_year_plan(petrol_only_config, date(2026, 10, 15), months=1)

        assert plan.days[0].date == date(2026, 10, 1)
        assert len(plan.days) == 31

    def test_custom_horizon(self, petrol_only_config, october):
        plan = generate_year_plan(petrol_only_config, october, months=3)
        assert plan.month_keys == ["October 2026", "November 2026", "December 2026"]

    def test_demo_first_day(self, demo_config, october):
        """Income, petrol, then the two essential pots pro-rata."""
        day = generate_year_plan(demo_config, october, months=1).days[0]

        assert [e.name for e in day.expenses] == ["Petrol"]
        assert [p.pot_id for p in day.pots] == ["pot_bills", "pot_car_rent"]
        assert [p.amount for p in day.pots] == [Decimal("31.94"), Decimal("15.48")]
        assert day.balance_after == Decimal("452.58")


class TestLedgerInvariants:
    """Properties every generated plan must hold."""

    def test_balance_continuity(self, demo_config, october):
        plan = generate_year_plan(demo_config, october)

        previous = plan.starting_balance
        for day in plan.days:
            assert day.balance_after == previous + day.net_flow
            previous = day.balance_after

    def test_no_negative_entries(self, demo_config, october):
        plan = generate_year_plan(demo_config, october)

        for day in plan.days:
            assert all(e.amount >= 0 for e in day.expenses)
            assert all(p.amount >= 0 for p in day.pots)
            assert day.unallocated_surplus >= 0

    def test_idempotent(self, demo_config, october):
        first = generate_year_plan(demo_config, october)
        second = generate_year_plan(demo_config, october)
        assert first.model_dump() == second.model_dump()

    def test_weekly_plans_and_export_identical_across_runs(self, demo_config, october):
        first = generate_year_plan(demo_config, october)
        second = generate_year_plan(demo_config, october)

        for first_month, second_month in zip(first.months, second.months):
            first_weeks = generate_weekly_plans(first_month.days, demo_config)
            second_weeks = generate_weekly_plans(second_month.days, demo_config)
            assert [w.model_dump() for w in first_weeks] == [w.model_dump() for w in second_weeks]
        assert export_plan_csv(first) == export_plan_csv(second)

    def test_configuration_not_mutated(self, demo_config, october):
        before = demo_config.model_dump()
        generate_year_plan(demo_config, october)
        assert demo_config.model_dump() == before

    def test_negative_expense_is_clamped(self, october):
        config = PlanConfiguration(
            income_amount=Decimal("10"),
            expenses=[Expense(name="Refund", amount=Decimal("-30"), frequency=Frequency.DAILY)],
        )
        day = generate_year_plan(config, october, months=1).days[0]

        assert day.expenses[0].amount == Decimal("0")
        assert day.balance_after == Decimal("10")

    def test_empty_configuration(self, october):
        plan = generate_year_plan(PlanConfiguration(), october, months=1)

        assert len(plan.days) == 31
        assert all(d.balance_after == 0 for d in plan.days)
        assert all(d.status == DayStatus.WARNING for d in plan.days)


class TestEssentialPots:
    """Tests for scheduled funding of essential pots."""

    def test_monthly_pot_daily_target(self, october):
        config = PlanConfiguration(income_amount=Decimal("100"), pots=[_essential_pot("310")])
        plan = generate_year_plan(config, october, months=1)

        assert all(_contributions(d, "pot_essential") == [Decimal("10")] for d in plan.days)

    def test_monthly_pot_capped_at_goal(self, october):
        config = PlanConfiguration(income_amount=Decimal("100"), pots=[_essential_pot("100")])
        plan = generate_year_plan(config, october, months=2)
        october_days = plan.months[0].days

        total = sum((sum(_contributions(d, "pot_essential"), Decimal("0")) for d in october_days), Decimal("0"))
        assert total == Decimal("100")
        assert _contributions(october_days[0], "pot_essential") == [Decimal("3.23")]
        assert _contributions(october_days[-1], "pot_essential") == [Decimal("3.10")]

    def test_month_end_totals_recorded(self, october):
        config = PlanConfiguration(income_amount=Decimal("100"), pots=[_essential_pot("100")])
        plan = generate_year_plan(config, october, months=2)

        assert plan.months[0].essential_pot_totals == {"pot_essential": Decimal("100")}
        assert plan.months[1].essential_pot_totals == {"pot_essential": Decimal("99.90")}

    def test_month_end_totals_empty_without_essential_pots(self, sweep_config, october):
        plan = generate_year_plan(sweep_config, october, months=1)
        assert plan.months[0].essential_pot_totals == {}

    def test_monthly_pot_resets_each_month(self, october):
        config = PlanConfiguration(income_amount=Decimal("100"), pots=[_essential_pot("100")])
        plan = generate_year_plan(config, october, months=2)
        november_first = plan.months[1].days[0]

        assert _contributions(november_first, "pot_essential") == [Decimal("3.33")]

    def test_monthly_pot_capped_by_balance(self, october):
        config = PlanConfiguration(starting_balance=Decimal("5"), pots=[_essential_pot("310")])
        days = generate_year_plan(config, october, months=1).days

        assert _contributions(days[0], "pot_essential") == [Decimal("5")]
        assert days[0].balance_after == Decimal("0")
        assert all(not d.pots for d in days[1:])

    def test_monthly_pot_current_balance_ignored(self, october):
        pot = _essential_pot("310")
        pot.current_balance = Decimal("310")
        config = PlanConfiguration(income_amount=Decimal("100"), pots=[pot])

        day = generate_year_plan(config, october, months=1).days[0]
        assert _contributions(day, "pot_essential") == [Decimal("10")]

    def test_weekly_pot_funded_on_mondays(self, october):
        config = PlanConfiguration(
            income_amount=Decimal("100"),
            pots=[_essential_pot("200", frequency=PotFrequency.WEEKLY)],
        )
        days = generate_year_plan(config, october, months=1).days

        funded = [d.date for d in days if _contributions(d, "pot_essential")]
        assert funded == [date(2026, 10, 5), date(2026, 10, 12), date(2026, 10, 19), date(2026, 10, 26)]
        assert _contributions(days[4], "pot_essential") == [Decimal("50")]

    def test_weekly_pot_skipped_when_uncovered(self, october):
        config = PlanConfiguration(
            income_amount=Decimal("10"),
            pots=[_essential_pot("400", frequency=PotFrequency.WEEKLY)],
        )
        monday = generate_year_plan(config, october, months=1).days[4]

        assert monday.date == date(2026, 10, 5)
        assert monday.pots == []

    def test_savings_pots_never_funded_by_day_loop(self, october):
        config = PlanConfiguration(
            income_amount=Decimal("100"),
            pots=[Pot(id="holiday", name="Holiday", goal_amount=Decimal("500"), type=PotType.SAVINGS)],
        )
        days = generate_year_plan(config, october, months=1).days
        assert all(not d.pots for d in days)


class TestExpenseOrdering:
    """Tests for essential-order sorting."""

    def test_sort_is_case_insensitive(self):
        bills = Expense(id="b", name="Bills", amount=Decimal("1"), frequency=Frequency.DAILY, category="Bills")
        petrol = Expense(id="p", name="Petrol", amount=Decimal("1"), frequency=Frequency.DAILY, category="PETROL")

        ordered = sort_by_essential_order([bills, petrol], ["petrol", "bills"])
        assert [e.id for e in ordered] == ["p", "b"]

    def test_unknown_categories_go_last_in_list_order(self):
        zoo = Expense(id="z", name="Zoo", amount=Decimal("1"), frequency=Frequency.DAILY, category="zoo")
        gym = Expense(id="g", name="Gym", amount=Decimal("1"), frequency=Frequency.DAILY, category="gym")
        food = Expense(id="f", name="Food", amount=Decimal("1"), frequency=Frequency.DAILY, category="food")

        ordered = sort_by_essential_order([zoo, food, gym], ["food"])
        assert [e.id for e in ordered] == ["f", "z", "g"]

    def test_plan_records_expenses_in_essential_order(self, october):
        config = PlanConfiguration(
            income_amount=Decimal("100"),
            expenses=[
                Expense(id="b", name="Bills", amount=Decimal("5"), frequency=Frequency.DAILY, category="bills"),
                Expense(id="p", name="Petrol", amount=Decimal("5"), frequency=Frequency.DAILY, category="petrol"),
            ],
        )
        day = generate_year_plan(config, october, months=1).days[0]
        assert [e.id for e in day.expenses] == ["p", "b"]


class TestIncome:
    """Tests for income smoothing."""

    @pytest.mark.parametrize("frequency,amount,expected", [
        (IncomeFrequency.DAILY, "180", "180.00"),
        (IncomeFrequency.WEEKLY, "700", "100.00"),
        (IncomeFrequency.MONTHLY, "3000", "100.00"),
        (IncomeFrequency.MONTHLY, "1000", "33.33"),
        (IncomeFrequency.DAILY, "-10", "0.00"),
    ])
    def test_daily_income(self, frequency, amount, expected):
        config = PlanConfiguration(income_frequency=frequency, income_amount=Decimal(amount))
        assert daily_income_for(config) == Decimal(expected)


class TestStatus:
    """Tests for day classification and recommendations."""

    @pytest.mark.parametrize("balance,expected", [
        ("-5", DayStatus.DANGER),
        ("0", DayStatus.WARNING),
        ("50", DayStatus.WARNING),
        ("100", DayStatus.GOOD),
        ("150", DayStatus.GOOD),
    ])
    def test_classify_day(self, balance, expected):
        assert classify_day(Decimal(balance), Thresholds()) == expected

    def test_danger_recommendation_overrides(self, october):
        config = PlanConfiguration(starting_balance=Decimal("-50"))
        day = generate_year_plan(config, october, months=1).days[0]

        assert day.status == DayStatus.DANGER
        assert day.recommendations == [DefaultPlanFormatter.DANGER_TEXT]

    def test_recommendation_follows_week_of_month(self, petrol_only_config, october):
        days = generate_year_plan(petrol_only_config, october, months=1).days

        assert days[0].recommendations == [DefaultPlanFormatter.NEXT_MONTH_TEXT]
        assert days[11].week_of_month == 3
        assert days[11].recommendations == [DefaultPlanFormatter.BUFFER_TEXT]


class TestPotLedger:
    """Tests for the month-to-date pot accumulator."""

    def test_reset_and_add(self):
        ledger = PotLedger()
        ledger.reset(["a"])
        ledger.add("a", Decimal("2.50"))
        ledger.add("a", Decimal("1.25"))

        assert ledger.accumulated("a") == Decimal("3.75")
        assert ledger.accumulated("missing") == Decimal("0")

        ledger.reset(["a"])
        assert ledger.snapshot() == {"a": Decimal("0")}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
