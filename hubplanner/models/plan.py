"""
Core Data Models for the Financial Hub Planner

These models define the schemas for everything flowing into and out of
the projection engine:
1. PlanConfiguration (input) - supplied wholesale by the configuration builder
2. PlanDay / YearPlan (output) - one ledger record per calendar date
3. WeeklyPlan (output) - derived weekly summary cards

DESIGN DECISION: Money is Decimal, quantised to cents where the engine
derives a per-day amount. Float drift would make the daily ledger
unauditable, and the whole point of the plan is trustworthy forecasting.

DESIGN DECISION: Input models do NOT reject odd amounts or missing anchors.
The engine treats the configuration as an opaque value and degrades
deterministically instead (see hubplanner.validation for the warnings).
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


CENT = Decimal("0.01")


def money(value: Decimal) -> Decimal:
    """Quantise an amount to cents."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def non_negative(value: Decimal) -> Decimal:
    """Clamp an amount at zero."""
    return value if value > 0 else Decimal("0")


def format_amount(value: Decimal) -> str:
    """Two-decimal plain rendering used by exports and labels."""
    return f"{money(value):.2f}"


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Frequency(str, Enum):
    """
    How often an expense recurs.

    NOTE: ONE_TIME fires every month on its day-of-month. It is a
    once-per-month construct despite the name.
    """
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    ONE_TIME = "one-time"


class IncomeFrequency(str, Enum):
    """Income cadence. Income is always spread evenly across days."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Weekday(str, Enum):
    """Day-of-week anchors for weekly and biweekly expenses."""
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @property
    def number(self) -> int:
        """0-based index matching date.weekday() (Monday = 0)."""
        return list(Weekday).index(self)

    @classmethod
    def of(cls, day: date) -> "Weekday":
        return list(cls)[day.weekday()]


class PotFrequency(str, Enum):
    """Funding cadence of a pot."""
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    FLEXIBLE = "flexible"


class PotPriority(str, Enum):
    """Carried through for display; the engine does not read it."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class PotType(str, Enum):
    """
    Controls how and when the engine funds a pot.

    ESSENTIAL   - funded by the day loop (monthly pro-rata or weekly share)
    BUFFER      - receives weekly leftover sweeps for weeks 3+
    NEXT_MONTH  - receives weekly leftover sweeps for weeks 1-2
    SAVINGS     - passive record, never mutated by the engine
    """
    ESSENTIAL = "essential"
    SAVINGS = "savings"
    BUFFER = "buffer"
    NEXT_MONTH = "next-month"


class DayStatus(str, Enum):
    """Daily balance classification, evaluated danger → warning → good."""
    GOOD = "good"
    WARNING = "warning"
    DANGER = "danger"


class WeekStatus(str, Enum):
    """Weekly summary classification."""
    BEHIND = "behind"
    ON_TRACK = "on-track"
    AHEAD = "ahead"


class ContributionKind(str, Enum):
    """Where a pot flow came from."""
    SCHEDULED = "scheduled"  # Day loop (essential pots)
    SWEEP = "sweep"          # Weekly leftover allocator


# =============================================================================
# CONFIGURATION MODELS (input)
# =============================================================================

class Expense(BaseModel):
    """
    A recurring (or once-per-month) outgoing.

    Weekly/biweekly expenses are anchored by day_of_week,
    monthly/one-time expenses by day_of_month. A missing anchor makes
    the expense inert; it is not an error.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(
        default_factory=lambda: f"exp_{uuid4().hex[:7]}",
        description="Expense identifier"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Display name"
    )
    amount: Decimal = Field(
        ...,
        description="Positive magnitude of the expense"
    )
    frequency: Frequency
    day_of_week: Optional[Weekday] = Field(
        default=None,
        description="Anchor for weekly and biweekly expenses"
    )
    day_of_month: Optional[int] = Field(
        default=None,
        ge=1,
        le=31,
        description="Anchor for monthly and one-time expenses"
    )
    category: str = Field(
        default="other",
        description="Used for display and for essential ordering"
    )
    notes: Optional[str] = None


class Pot(BaseModel):
    """
    A named savings bucket.

    current_balance is the source of truth held by the configuration
    collaborator. The engine NEVER writes back to it.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(
        default_factory=lambda: f"pot_{uuid4().hex[:7]}",
        description="Pot identifier"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=200
    )
    goal_amount: Decimal = Field(
        default=Decimal("0"),
        description="Target amount (per month for monthly pots)"
    )
    current_balance: Decimal = Field(
        default=Decimal("0"),
        description="Balance held before the plan starts"
    )
    frequency: PotFrequency = PotFrequency.MONTHLY
    priority: PotPriority = PotPriority.MEDIUM
    type: PotType = PotType.SAVINGS

    @property
    def is_essential_monthly(self) -> bool:
        return self.type == PotType.ESSENTIAL and self.frequency == PotFrequency.MONTHLY

    @property
    def is_essential_weekly(self) -> bool:
        return self.type == PotType.ESSENTIAL and self.frequency == PotFrequency.WEEKLY


class Thresholds(BaseModel):
    """Balance thresholds used for day and week status."""

    warning: Decimal = Field(
        default=Decimal("100"),
        description="Balance below this is a warning"
    )
    danger: Decimal = Field(
        default=Decimal("0"),
        description="Balance below this is danger"
    )


class WeeklyAllocation(BaseModel):
    """
    Week-of-month leftover policy table.

    Weeks 1-2 sweep into one pot type, weeks 3 and later into another.
    """

    weeks_1_2: PotType = Field(
        default=PotType.NEXT_MONTH,
        description="Destination pot type for weeks 1 and 2"
    )
    weeks_3_5: PotType = Field(
        default=PotType.BUFFER,
        description="Destination pot type for weeks 3 and later"
    )

    def pot_type_for(self, week_index: int) -> PotType:
        return self.weeks_1_2 if week_index <= 2 else self.weeks_3_5


class Rules(BaseModel):
    """User-editable planning rules."""

    essential_order: list[str] = Field(
        default_factory=lambda: ["petrol", "food", "rent", "bills", "cleaning", "other"],
        description="Expense categories in payment priority order"
    )
    weekly_allocation: WeeklyAllocation = Field(default_factory=WeeklyAllocation)
    thresholds: Thresholds = Field(default_factory=Thresholds)


class PlanConfiguration(BaseModel):
    """
    Everything the engine needs for one run.

    Treated as an immutable value: a change means a full regeneration.
    income_amount is interpreted per income_frequency (a daily amount,
    a weekly amount, or a monthly amount).
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = None
    currency: str = Field(
        default="GBP",
        min_length=3,
        max_length=3
    )
    starting_balance: Decimal = Decimal("0")
    income_frequency: IncomeFrequency = IncomeFrequency.DAILY
    income_amount: Decimal = Decimal("0")
    expenses: list[Expense] = Field(default_factory=list)
    pots: list[Pot] = Field(default_factory=list)
    rules: Rules = Field(default_factory=Rules)

    def find_pot_by_type(self, pot_type: PotType) -> Optional[Pot]:
        """First pot of the given type, in list order."""
        for pot in self.pots:
            if pot.type == pot_type:
                return pot
        return None


# =============================================================================
# LEDGER MODELS (output)
# =============================================================================

class ExpenseEntry(BaseModel):
    """An expense that fired on a given day."""

    id: str
    name: str
    amount: Decimal
    category: str


class PotContribution(BaseModel):
    """Money moved from free cash into a pot on a given day."""

    pot_id: str
    pot_name: str
    amount: Decimal
    pot_type: PotType
    kind: ContributionKind = ContributionKind.SCHEDULED


class PlanDay(BaseModel):
    """
    One ledger record per calendar date.

    balance_after includes everything that happened that day, including
    a weekly leftover sweep when this day closes a week.
    """

    date: date
    income: Decimal
    expenses: list[ExpenseEntry] = Field(default_factory=list)
    pots: list[PotContribution] = Field(default_factory=list)
    balance_after: Decimal
    week_of_month: int = Field(ge=1, le=6)
    status: DayStatus
    recommendations: list[str] = Field(default_factory=list)

    # Leftover that closed a week here but had no destination pot.
    # Reporting only: the balance is not affected.
    unallocated_surplus: Decimal = Decimal("0")

    @property
    def expense_total(self) -> Decimal:
        return sum((e.amount for e in self.expenses), Decimal("0"))

    @property
    def pot_total(self) -> Decimal:
        return sum((p.amount for p in self.pots), Decimal("0"))

    @property
    def net_flow(self) -> Decimal:
        """income - expenses - pot flows; balance delta for the day."""
        return self.income - self.expense_total - self.pot_total

    def to_csv_row(self) -> str:
        """
        Convert to one export row.

        Columns in order:
        [Date, Week, Income, Expenses, Pot Contributions, Balance, Status,
         Recommendations]
        Text columns are double-quoted.
        """
        # Built by hand: csv.writer cannot quote text columns while leaving
        # Week, amounts and status bare.
        expenses = ";".join(f"{e.name}:{format_amount(e.amount)}" for e in self.expenses)
        pots = ";".join(f"{p.pot_name}:{format_amount(p.amount)}" for p in self.pots)
        recommendations = ";".join(self.recommendations)

        return ",".join([
            _quote(self.date.isoformat()),
            f"Week {self.week_of_month}",
            format_amount(self.income),
            _quote(expenses),
            _quote(pots),
            format_amount(self.balance_after),
            self.status.value,
            _quote(recommendations),
        ])


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


class MonthPlan(BaseModel):
    """All PlanDays of one calendar month."""

    key: str = Field(
        ...,
        description="Display key, e.g. 'October 2026'"
    )
    month_start: date
    days: list[PlanDay] = Field(default_factory=list)
    essential_pot_totals: dict[str, Decimal] = Field(
        default_factory=dict,
        description="Month-end scheduled total per essential monthly pot id"
    )


class YearPlan(BaseModel):
    """
    Result of one engine run: consecutive months of PlanDays.

    Months are an ordered list so iteration order never depends on
    mapping insertion order.
    """

    start_date: date
    starting_balance: Decimal
    months: list[MonthPlan] = Field(default_factory=list)

    @property
    def month_keys(self) -> list[str]:
        return [m.key for m in self.months]

    @property
    def days(self) -> list[PlanDay]:
        return [day for m in self.months for day in m.days]

    @property
    def final_balance(self) -> Decimal:
        all_days = self.days
        return all_days[-1].balance_after if all_days else self.starting_balance

    def month(self, key: str) -> Optional[MonthPlan]:
        for m in self.months:
            if m.key == key:
                return m
        return None


# =============================================================================
# WEEKLY SUMMARY MODELS (output)
# =============================================================================

class LeftoverAllocation(BaseModel):
    """Where a week's leftover is routed by the policy table."""

    pot_type: PotType
    pot_name: Optional[str] = Field(
        default=None,
        description="Configured pot of that type, None if there is none"
    )
    amount: Decimal

    @property
    def label(self) -> str:
        if self.pot_name:
            return self.pot_name
        return "Next-Month Pot" if self.pot_type == PotType.NEXT_MONTH else self.pot_type.value.title()


class WeeklyPlan(BaseModel):
    """Summary card for one Monday-Sunday calendar week."""

    label: str
    week_index: int = Field(ge=1)
    week_start: date
    week_end: date
    income: Decimal
    expenses: Decimal
    pots: Decimal
    leftover: Decimal
    leftover_allocation: LeftoverAllocation
    unallocated_surplus: Decimal = Decimal("0")
    end_balance: Decimal
    actions: list[str] = Field(default_factory=list)
    status: WeekStatus
