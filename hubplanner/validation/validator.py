"""
Configuration Checks

DESIGN DECISION: The engine never rejects a configuration. It degrades
deterministically instead:
- an expense without its anchor never fires
- a day-of-month anchor beyond a month's length is skipped that month
- negative amounts are clamped to zero
- a leftover with no destination pot is left unallocated

Those are all silent inside the ledger, so this validator reports them
up front for human review. It NEVER fixes anything.
"""

from hubplanner.models.plan import Frequency, PlanConfiguration, PotType
from hubplanner.models.validation import ValidationIssue, ValidationResult


SHORTEST_MONTH_DAYS = 28


class ConfigurationValidator:
    """Checks a PlanConfiguration for inputs the engine will quietly degrade."""

    def validate(self, config: PlanConfiguration) -> ValidationResult:
        issues = []
        issues.extend(self._check_expenses(config))
        issues.extend(self._check_pots(config))
        issues.extend(self._check_rules(config))
        return ValidationResult(issues=issues)

    def _check_expenses(self, config: PlanConfiguration) -> list[ValidationIssue]:
        issues = []
        known_categories = {c.lower() for c in config.rules.essential_order}

        for expense in config.expenses:
            field = f"expenses[{expense.id}]"

            if expense.frequency in (Frequency.WEEKLY, Frequency.BIWEEKLY):
                if expense.day_of_week is None:
                    issues.append(ValidationIssue(
                        field=field,
                        issue_type="missing_anchor",
                        message=f"'{expense.name}' has no day of week and will never be applied",
                        severity="warning",
                        suggested_fix="Pick the weekday this expense is paid on",
                    ))

            if expense.frequency in (Frequency.MONTHLY, Frequency.ONE_TIME):
                if expense.day_of_month is None:
                    issues.append(ValidationIssue(
                        field=field,
                        issue_type="missing_anchor",
                        message=f"'{expense.name}' has no day of month and will never be applied",
                        severity="warning",
                        suggested_fix="Pick the day of the month this expense is paid on",
                    ))
                elif expense.day_of_month > SHORTEST_MONTH_DAYS:
                    issues.append(ValidationIssue(
                        field=field,
                        issue_type="short_month_skip",
                        message=(
                            f"'{expense.name}' is due on day {expense.day_of_month} "
                            "and is skipped in months without that day"
                        ),
                        severity="info",
                    ))

            if expense.frequency == Frequency.ONE_TIME:
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="one_time_repeats",
                    message=f"'{expense.name}' is one-time but repeats every month on its day",
                    severity="info",
                ))

            if expense.amount < 0:
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="negative_amount",
                    message=f"'{expense.name}' has a negative amount and will be treated as 0",
                    severity="warning",
                    suggested_fix="Enter expenses as positive amounts",
                ))

            if expense.category.lower() not in known_categories:
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="unordered_category",
                    message=(
                        f"Category '{expense.category}' is not in the essential order; "
                        f"'{expense.name}' is paid after listed categories"
                    ),
                    severity="info",
                ))

        return issues

    def _check_pots(self, config: PlanConfiguration) -> list[ValidationIssue]:
        issues = []

        for pot in config.pots:
            if pot.goal_amount < 0:
                issues.append(ValidationIssue(
                    field=f"pots[{pot.id}]",
                    issue_type="negative_amount",
                    message=f"Pot '{pot.name}' has a negative goal and will not be funded",
                    severity="warning",
                ))

        allocation = config.rules.weekly_allocation
        for pot_type in dict.fromkeys([allocation.weeks_1_2, allocation.weeks_3_5]):
            if config.find_pot_by_type(pot_type) is None:
                issues.append(ValidationIssue(
                    field="pots",
                    issue_type="no_destination_pot",
                    message=(
                        f"No '{pot_type.value}' pot: weekly leftovers routed to it "
                        "will stay unallocated"
                    ),
                    severity="warning",
                    suggested_fix=f"Add a pot of type '{pot_type.value}'",
                ))

        if config.income_amount < 0:
            issues.append(ValidationIssue(
                field="income_amount",
                issue_type="negative_amount",
                message="Income is negative and will be treated as 0",
                severity="warning",
            ))

        return issues

    def _check_rules(self, config: PlanConfiguration) -> list[ValidationIssue]:
        issues = []
        thresholds = config.rules.thresholds

        if thresholds.warning < thresholds.danger:
            issues.append(ValidationIssue(
                field="rules.thresholds",
                issue_type="inverted_thresholds",
                message=(
                    f"Warning threshold ({thresholds.warning}) is below the danger "
                    f"threshold ({thresholds.danger}); no day can be a warning"
                ),
                severity="warning",
                suggested_fix="Set the warning threshold above the danger threshold",
            ))

        if config.rules.weekly_allocation.weeks_1_2 == PotType.ESSENTIAL or (
            config.rules.weekly_allocation.weeks_3_5 == PotType.ESSENTIAL
        ):
            issues.append(ValidationIssue(
                field="rules.weekly_allocation",
                issue_type="essential_sweep",
                message="Weekly leftovers are routed to an essential pot",
                severity="info",
            ))

        return issues

