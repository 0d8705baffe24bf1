"""
Plan Formatter Interface

DESIGN DECISION: Recommendation strings and weekly action checklists are
presentation, not computed facts. The numeric engine asks a formatter for
them through this interface so the wording can be swapped (localisation,
a different UI) without touching the ledger math.

DefaultPlanFormatter returns the fixed texts the Financial Hub has always
shown. The weekly checklist is NOT derived from the configured expenses.
"""

from abc import ABC, abstractmethod

from hubplanner.models.plan import DayStatus, PotType


class PlanFormatter(ABC):
    """
    Abstract interface for plan display strings.

    Any formatter must implement these methods and must be deterministic.
    """

    @abstractmethod
    def day_recommendations(
        self,
        status: DayStatus,
        week_of_month: int,
        leftover_pot_type: PotType,
    ) -> list[str]:
        """
        Recommendations attached to one PlanDay.

        Args:
            status: The day's balance status
            week_of_month: Simulator week-of-month index
            leftover_pot_type: Pot type the policy table routes this
                               week's leftover to

        Returns:
            Short human-readable strings
        """
        pass

    @abstractmethod
    def week_actions(self, week_index: int, leftover_label: str) -> list[str]:
        """
        Action checklist for one WeeklyPlan card.

        Args:
            week_index: Calendar week index within the viewed range
            leftover_label: Display name of the leftover destination

        Returns:
            Ordered checklist lines
        """
        pass


class DefaultPlanFormatter(PlanFormatter):
    """Fixed English texts."""

    DANGER_TEXT = "Balance below danger threshold - adjust pots or expenses"
    NEXT_MONTH_TEXT = "Leftovers go to Next-Month Pot"
    BUFFER_TEXT = "Leftovers go to Buffer"

    def day_recommendations(
        self,
        status: DayStatus,
        week_of_month: int,
        leftover_pot_type: PotType,
    ) -> list[str]:
        if status == DayStatus.DANGER:
            return [self.DANGER_TEXT]
        if leftover_pot_type == PotType.NEXT_MONTH:
            return [self.NEXT_MONTH_TEXT]
        if leftover_pot_type == PotType.BUFFER:
            return [self.BUFFER_TEXT]
        return [f"Leftovers go to {leftover_pot_type.value.title()} pot"]

    def week_actions(self, week_index: int, leftover_label: str) -> list[str]:
        actions = [
            "1. Cover petrol daily (20/day)",
            "2. Cover food on Monday (50)",
        ]

        if week_index in (1, 3):
            actions.append("3. Contribute to Car Rent pot (120)")
        if week_index in (2, 4):
            actions.append("3. Pay Car Rent from pot (240)")

        actions.append("4. Contribute to Bills pot (250/week)")
        actions.append("5. Contribute to Savings pot (200/week)")
        actions.append(f"6. Leftovers → {leftover_label}")
        return actions
