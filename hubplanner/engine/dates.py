"""
Calendar helpers for the projection engine.

TWO week-numbering systems live here and they are NOT the same thing:

- week_of_month(): the simulator's index. Monday-anchored, reset at every
  calendar month boundary, so the 1st of a month is always in week 1.
- calendar_week_start(): the aggregator's Monday-Sunday partition, which
  spans month boundaries.

Near month edges the two can disagree. Keep them separate.
"""

import calendar
from datetime import date, timedelta
from typing import Iterator

from hubplanner.models.plan import Weekday


def month_start(day: date) -> date:
    return day.replace(day=1)


def days_in_month(day: date) -> int:
    return calendar.monthrange(day.year, day.month)[1]


def month_end(day: date) -> date:
    return day.replace(day=days_in_month(day))


def add_months(day: date, months: int) -> date:
    """First day of the month `months` after the month of `day`."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def iter_month_days(start: date) -> Iterator[date]:
    """Every calendar date of the month containing `start`, in order."""
    current = month_start(start)
    last = month_end(start)
    while current <= last:
        yield current
        current += timedelta(days=1)


def month_key(day: date) -> str:
    """Display key for a month, e.g. 'October 2026'."""
    return f"{calendar.month_name[day.month]} {day.year}"


def week_of_month(day: date) -> int:
    """
    Simulator week-of-month index (1-based, Monday-anchored).

    Counts whole weeks from the Monday on or before the 1st of the month.
    """
    first = month_start(day)
    anchor = first - timedelta(days=first.weekday())
    return (day - anchor).days // 7 + 1


def calendar_week_start(day: date) -> date:
    """Monday of the calendar week containing `day`."""
    return day - timedelta(days=day.weekday())


def first_weekday_on_or_after(start: date, weekday: Weekday) -> date:
    offset = (weekday.number - start.weekday()) % 7
    return start + timedelta(days=offset)


def is_week_close(day: date) -> bool:
    """Sunday, or the last day of the month when a month ends mid-week."""
    return day.weekday() == 6 or day == month_end(day)
