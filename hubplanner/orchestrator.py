"""
Planner Facade for the Financial Hub

This module ties the components together and defines the end-to-end
flow the Financial Hub runs whenever the configuration or start date
changes:

1. Check  → ConfigurationValidator (warnings only, never blocks)
2. Project → generate_year_plan (whole horizon, from scratch)
3. Audit  → danger days and unallocated leftovers are made visible
4. View   → weekly summaries for one selected month
5. Export → CSV

DESIGN DECISION: Every run is regenerated from scratch. The facade holds
no plan state between runs; a PlanRun is a value the caller keeps.
"""

from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from hubplanner.audit import AuditLogger, configure_logging, create_correlation_id
from hubplanner.builder import SavingsGoal, Transaction, suggest_configuration
from hubplanner.config import get_settings
from hubplanner.config.settings import Settings
from hubplanner.engine import generate_weekly_plans, generate_year_plan
from hubplanner.export import PlanExportError, write_plan_csv
from hubplanner.insights import UpcomingAlert, upcoming_alerts
from hubplanner.models.plan import (
    DayStatus,
    PlanConfiguration,
    Thresholds,
    WeeklyPlan,
    YearPlan,
)
from hubplanner.models.validation import ValidationResult
from hubplanner.presentation import DefaultPlanFormatter, PlanFormatter
from hubplanner.validation import ConfigurationValidator


class UnknownMonthError(KeyError):
    """A month was requested that the plan does not cover."""
    pass


class PlanRun(BaseModel):
    """One generated plan plus the context it was produced in."""

    run_id: UUID = Field(default_factory=uuid4)
    correlation_id: UUID
    start_date: date
    config: PlanConfiguration
    plan: YearPlan
    validation: ValidationResult


class FinancialHubPlanner:
    """
    Orchestrates planner runs.

    Flow:
    1. Validate configuration (report, never block)
    2. Generate the day-by-day plan
    3. Audit the run and its degradations
    4. Serve weekly views and exports from the resulting PlanRun
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        audit_logger: Optional[AuditLogger] = None,
        formatter: Optional[PlanFormatter] = None,
        validator: Optional[ConfigurationValidator] = None,
    ):
        self._settings = settings or get_settings()
        self._engine_settings = self._settings.engine
        self._export_settings = self._settings.export
        self._audit_logger = audit_logger
        self._formatter = formatter or DefaultPlanFormatter()
        self._validator = validator or ConfigurationValidator()

    def suggest_configuration(
        self,
        transactions: list[Transaction],
        goals: Optional[list[SavingsGoal]] = None,
        starting_balance: Decimal = Decimal("0"),
        correlation_id: Optional[UUID] = None,
    ) -> PlanConfiguration:
        """Suggest a starting configuration using the app's defaults."""
        correlation_id = correlation_id or create_correlation_id()
        app_settings = self._settings.app

        config = suggest_configuration(
            transactions,
            goals,
            starting_balance=starting_balance,
            currency=app_settings.default_currency,
            thresholds=Thresholds(
                warning=app_settings.default_warning_threshold,
                danger=app_settings.default_danger_threshold,
            ),
        )

        if self._audit_logger:
            self._audit_logger.log_configuration_suggested(
                expense_count=len(config.expenses),
                pot_count=len(config.pots),
                transaction_count=len(transactions),
                correlation_id=correlation_id,
            )

        return config

    def generate(
        self,
        config: PlanConfiguration,
        start_date: date,
        correlation_id: Optional[UUID] = None,
    ) -> PlanRun:
        """
        Generate a full plan for `config` starting in `start_date`'s month.

        Returns:
            PlanRun holding the plan and the validation report
        """
        correlation_id = correlation_id or create_correlation_id()

        validation = self._validator.validate(config)
        if self._audit_logger:
            self._audit_logger.log_configuration_validated(
                warnings=validation.warnings,
                correlation_id=correlation_id,
            )

        try:
            plan = generate_year_plan(
                config,
                start_date,
                months=self._engine_settings.horizon_months,
                formatter=self._formatter,
            )
        except Exception as e:
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"start_date": start_date.isoformat()},
                    correlation_id=correlation_id,
                )
            raise

        run = PlanRun(
            correlation_id=correlation_id,
            start_date=start_date,
            config=config,
            plan=plan,
            validation=validation,
        )

        if self._audit_logger:
            self._audit_run(run)

        return run

    def _audit_run(self, run: PlanRun) -> None:
        """Record the run and surface what the ledger does silently."""
        days = run.plan.days
        self._audit_logger.log_plan_generated(
            run_id=run.run_id,
            start_date=run.start_date,
            months=len(run.plan.months),
            days=len(days),
            final_balance=run.plan.final_balance,
            correlation_id=run.correlation_id,
        )

        danger_days = [d for d in days if d.status == DayStatus.DANGER]
        if danger_days:
            self._audit_logger.log_danger_days(
                run_id=run.run_id,
                count=len(danger_days),
                first_date=danger_days[0].date,
                lowest_balance=min(d.balance_after for d in danger_days),
                correlation_id=run.correlation_id,
            )

        allocation = run.config.rules.weekly_allocation
        for day in days:
            if day.unallocated_surplus > 0:
                self._audit_logger.log_leftover_unallocated(
                    run_id=run.run_id,
                    day=day.date,
                    amount=day.unallocated_surplus,
                    pot_type=allocation.pot_type_for(day.week_of_month).value,
                    correlation_id=run.correlation_id,
                )

    def weekly_plans(
        self,
        run: PlanRun,
        month_key: Optional[str] = None,
    ) -> list[WeeklyPlan]:
        """
        Weekly summaries for one month of a run.

        Args:
            run: A generated run
            month_key: e.g. 'October 2026'; defaults to the first month

        Raises:
            UnknownMonthError: If the month is not part of the plan
        """
        if month_key is None:
            if not run.plan.months:
                return []
            month = run.plan.months[0]
        else:
            month = run.plan.month(month_key)
            if month is None:
                raise UnknownMonthError(month_key)

        weeks = generate_weekly_plans(
            month.days,
            run.config,
            formatter=self._formatter,
            ahead_margin=self._engine_settings.ahead_margin,
        )

        if self._audit_logger:
            self._audit_logger.log_weekly_plans_generated(
                run_id=run.run_id,
                month_key=month.key,
                week_count=len(weeks),
                correlation_id=run.correlation_id,
            )

        return weeks

    def upcoming_alerts(self, run: PlanRun, today: date) -> list[UpcomingAlert]:
        """Alerts for the next few days of the run."""
        return upcoming_alerts(
            run.plan.days,
            today,
            warning_threshold=run.config.rules.thresholds.warning,
            horizon_days=self._engine_settings.upcoming_alert_days,
        )

    def export_csv(
        self,
        run: PlanRun,
        path: Optional[Union[str, Path]] = None,
    ) -> Path:
        """
        Write the run's CSV export.

        Args:
            run: A generated run
            path: Target file; defaults to the configured export path

        Raises:
            PlanExportError: If the file cannot be written
        """
        target = Path(path) if path else self._export_settings.default_path

        try:
            row_count = write_plan_csv(run.plan, target)
        except PlanExportError as e:
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type="PlanExportError",
                    error_message=str(e),
                    details={"path": str(target)},
                    correlation_id=run.correlation_id,
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_plan_exported(
                run_id=run.run_id,
                path=str(target),
                row_count=row_count,
                correlation_id=run.correlation_id,
            )

        return target


def create_planner(
    audit_logger: Optional[AuditLogger] = None,
) -> FinancialHubPlanner:
    """
    Factory function to create a planner with default components.

    Applies the configured log level to the hubplanner loggers.

    Args:
        audit_logger: Audit logger to use. Defaults to a local-only logger.
    """
    settings = get_settings()
    configure_logging(settings.app.effective_log_level)

    return FinancialHubPlanner(
        settings=settings,
        audit_logger=audit_logger or AuditLogger(),
    )
