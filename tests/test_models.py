"""
Tests for Financial Hub Planner models

Test strategy:
1. Unit tests for individual components (models, helpers)
2. Flow tests live beside the component they exercise
3. No wall-clock reads in assertions (dates are always passed in)
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from hubplanner.models.plan import (
    ContributionKind,
    DayStatus,
    Expense,
    ExpenseEntry,
    Frequency,
    LeftoverAllocation,
    PlanConfiguration,
    PlanDay,
    Pot,
    PotContribution,
    PotFrequency,
    PotType,
    Rules,
    Weekday,
    WeeklyAllocation,
    format_amount,
    money,
    non_negative,
)
from hubplanner.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from hubplanner.models.validation import ValidationIssue, ValidationResult


class TestMoneyHelpers:
    """Tests for amount helpers."""

    def test_money_rounds_half_up(self):
        assert money(Decimal("0.005")) == Decimal("0.01")
        assert money(Decimal("31.935")) == Decimal("31.94")
        assert money(Decimal("2.344")) == Decimal("2.34")

    def test_non_negative_clamps(self):
        assert non_negative(Decimal("-5")) == Decimal("0")
        assert non_negative(Decimal("5")) == Decimal("5")

    def test_format_amount_two_decimals(self):
        assert format_amount(Decimal("20")) == "20.00"
        assert format_amount(Decimal("-3.1")) == "-3.10"


class TestConfigurationModels:
    """Tests for the engine input models."""

    def test_expense_creation(self):
        expense = Expense(
            name="Food",
            amount=Decimal("50"),
            frequency=Frequency.WEEKLY,
            day_of_week=Weekday.MONDAY,
            category="food",
        )
        assert expense.id.startswith("exp_")
        assert expense.day_of_week == Weekday.MONDAY
        assert expense.day_of_month is None

    def test_expense_strips_whitespace(self):
        expense = Expense(name="  Petrol  ", amount=Decimal("20"), frequency=Frequency.DAILY)
        assert expense.name == "Petrol"

    def test_expense_default_category(self):
        expense = Expense(name="Misc", amount=Decimal("1"), frequency=Frequency.DAILY)
        assert expense.category == "other"

    def test_expense_rejects_day_of_month_out_of_range(self):
        with pytest.raises(ValueError):
            Expense(name="Bad", amount=Decimal("1"), frequency=Frequency.MONTHLY, day_of_month=32)

    def test_expense_accepts_missing_anchor(self):
        """Missing anchors are an engine concern, not a schema error."""
        expense = Expense(name="Gym", amount=Decimal("30"), frequency=Frequency.WEEKLY)
        assert expense.day_of_week is None

    def test_frequency_values(self):
        assert Frequency("one-time") == Frequency.ONE_TIME
        assert PotType("next-month") == PotType.NEXT_MONTH

    def test_weekday_number_matches_date_weekday(self):
        assert Weekday.MONDAY.number == 0
        assert Weekday.FRIDAY.number == 4
        assert Weekday.of(date(2026, 10, 5)) == Weekday.MONDAY
        assert Weekday.of(date(2026, 10, 4)) == Weekday.SUNDAY

    def test_pot_essential_flags(self):
        monthly = Pot(name="Bills Pot", type=PotType.ESSENTIAL, frequency=PotFrequency.MONTHLY)
        weekly = Pot(name="Food Pot", type=PotType.ESSENTIAL, frequency=PotFrequency.WEEKLY)
        savings = Pot(name="Holiday", type=PotType.SAVINGS, frequency=PotFrequency.WEEKLY)

        assert monthly.is_essential_monthly and not monthly.is_essential_weekly
        assert weekly.is_essential_weekly and not weekly.is_essential_monthly
        assert not savings.is_essential_weekly

    def test_weekly_allocation_policy(self):
        allocation = WeeklyAllocation()
        assert allocation.pot_type_for(1) == PotType.NEXT_MONTH
        assert allocation.pot_type_for(2) == PotType.NEXT_MONTH
        assert allocation.pot_type_for(3) == PotType.BUFFER
        assert allocation.pot_type_for(6) == PotType.BUFFER

    def test_default_rules(self):
        rules = Rules()
        assert rules.essential_order[0] == "petrol"
        assert rules.thresholds.warning == Decimal("100")
        assert rules.thresholds.danger == Decimal("0")

    def test_find_pot_by_type_returns_first(self):
        config = PlanConfiguration(pots=[
            Pot(id="a", name="Buffer A", type=PotType.BUFFER),
            Pot(id="b", name="Buffer B", type=PotType.BUFFER),
        ])
        assert config.find_pot_by_type(PotType.BUFFER).id == "a"
        assert config.find_pot_by_type(PotType.NEXT_MONTH) is None


class TestLedgerModels:
    """Tests for PlanDay and its export row."""

    def _day(self, **overrides) -> PlanDay:
        values = dict(
            date=date(2026, 10, 1),
            income=Decimal("180"),
            expenses=[ExpenseEntry(id="e1", name="Petrol", amount=Decimal("20"), category="petrol")],
            pots=[PotContribution(
                pot_id="p1",
                pot_name="Bills Pot",
                amount=Decimal("31.94"),
                pot_type=PotType.ESSENTIAL,
            )],
            balance_after=Decimal("468.06"),
            week_of_month=1,
            status=DayStatus.GOOD,
            recommendations=["Leftovers go to Next-Month Pot"],
        )
        values.update(overrides)
        return PlanDay(**values)

    def test_plan_day_totals(self):
        day = self._day()
        assert day.expense_total == Decimal("20")
        assert day.pot_total == Decimal("31.94")
        assert day.net_flow == Decimal("128.06")

    def test_contribution_defaults_to_scheduled(self):
        assert self._day().pots[0].kind == ContributionKind.SCHEDULED

    def test_to_csv_row(self):
        row = self._day().to_csv_row()
        assert row == (
            '"2026-10-01",Week 1,180.00,"Petrol:20.00","Bills Pot:31.94",'
            '468.06,good,"Leftovers go to Next-Month Pot"'
        )

    def test_to_csv_row_escapes_quotes(self):
        day = self._day(expenses=[
            ExpenseEntry(id="e1", name='Say "hi"', amount=Decimal("5"), category="other"),
        ])
        assert '"Say ""hi"":5.00"' in day.to_csv_row()

    def test_to_csv_row_empty_lists(self):
        day = self._day(expenses=[], pots=[], recommendations=[])
        assert day.to_csv_row() == '"2026-10-01",Week 1,180.00,"","",468.06,good,""'

    def test_week_of_month_bounds(self):
        with pytest.raises(ValueError):
            self._day(week_of_month=0)


class TestLeftoverAllocation:
    """Tests for the leftover destination label."""

    def test_label_prefers_pot_name(self):
        allocation = LeftoverAllocation(pot_type=PotType.BUFFER, pot_name="Rainy Day", amount=Decimal("5"))
        assert allocation.label == "Rainy Day"

    def test_label_without_pot(self):
        assert LeftoverAllocation(pot_type=PotType.NEXT_MONTH, amount=Decimal("0")).label == "Next-Month Pot"
        assert LeftoverAllocation(pot_type=PotType.BUFFER, amount=Decimal("0")).label == "Buffer"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        event = AuditEvent(
            event_type=AuditEventType.PLAN_GENERATED,
            description="Plan generated",
        )
        assert event.event_type == AuditEventType.PLAN_GENERATED
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        event = AuditEvent(
            event_type=AuditEventType.PLAN_EXPORTED,
            description="Plan exported",
            details={"path": "plan.csv", "row_count": 365},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "plan_exported"
        assert log_dict["details"]["row_count"] == 365
        assert log_dict["entity_id"] is None

    def test_audit_event_builder_plan_generated(self):
        run_id = uuid4()
        correlation_id = uuid4()

        event = AuditEventBuilder.plan_generated(
            run_id=run_id,
            start_date=date(2026, 10, 1),
            months=12,
            days=365,
            final_balance="1234.00",
            correlation_id=correlation_id,
        )

        assert event.entity_id == run_id
        assert event.correlation_id == correlation_id
        assert event.details["start_date"] == "2026-10-01"

    def test_audit_event_builder_leftover_unallocated_is_warning(self):
        event = AuditEventBuilder.leftover_unallocated(
            run_id=uuid4(),
            day=date(2026, 10, 4),
            amount="640.00",
            pot_type="next-month",
            correlation_id=uuid4(),
        )
        assert event.severity == AuditSeverity.WARNING
        assert "next-month" in event.description

    def test_configuration_validated_severity_follows_warnings(self):
        clean = AuditEventBuilder.configuration_validated(0, [], uuid4())
        noisy = AuditEventBuilder.configuration_validated(1, ["No buffer pot"], uuid4())
        assert clean.severity == AuditSeverity.INFO
        assert noisy.severity == AuditSeverity.WARNING


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_warnings_lists_warning_messages(self):
        result = ValidationResult(issues=[
            ValidationIssue(field="pots", issue_type="no_destination_pot",
                            message="No buffer pot", severity="warning"),
            ValidationIssue(field="expenses[x]", issue_type="short_month_skip",
                            message="Skipped in short months", severity="info"),
        ])
        assert result.warnings == ["No buffer pot"]
        assert result.has_errors is False
        assert result.is_clean is False

    def test_severity_pattern(self):
        with pytest.raises(ValueError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
