"""
Schedule Matcher

Pure predicate: is a given expense due on a given calendar date?

Degenerate input never raises. An expense without the anchor its
frequency needs simply never fires.
"""

from datetime import date

from hubplanner.engine.dates import first_weekday_on_or_after
from hubplanner.models.plan import Expense, Frequency


BIWEEKLY_PERIOD_DAYS = 14


def matches_schedule(expense: Expense, day: date, plan_start: date) -> bool:
    """
    Return True if `expense` is due on `day`.

    - daily:     always
    - one-time:  on its day-of-month, every month that has that day
    - monthly:   on its day-of-month; no rollover into short months
    - weekly:    on its weekday
    - biweekly:  on its weekday, every 14 days counted from the first such
                 weekday on or after `plan_start`
    """
    if expense.frequency == Frequency.DAILY:
        return True

    if expense.frequency in (Frequency.ONE_TIME, Frequency.MONTHLY):
        if expense.day_of_month is None:
            return False
        return day.day == expense.day_of_month

    if expense.frequency == Frequency.WEEKLY:
        if expense.day_of_week is None:
            return False
        return day.weekday() == expense.day_of_week.number

    if expense.frequency == Frequency.BIWEEKLY:
        if expense.day_of_week is None:
            return False
        if day.weekday() != expense.day_of_week.number:
            return False
        first_match = first_weekday_on_or_after(plan_start, expense.day_of_week)
        return (day - first_match).days % BIWEEKLY_PERIOD_DAYS == 0

    return False


def due_expenses(expenses: list[Expense], day: date, plan_start: date) -> list[Expense]:
    """All expenses due on `day`, in their configured list order."""
    return [e for e in expenses if matches_schedule(e, day, plan_start)]
