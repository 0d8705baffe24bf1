"""Derived plan views package."""

from hubplanner.insights.views import (
    ChartPoint,
    PotProgress,
    UpcomingAlert,
    category_totals,
    daily_chart_series,
    filter_days_by_category,
    pot_progress,
    upcoming_alerts,
)

__all__ = [
    "ChartPoint",
    "PotProgress",
    "UpcomingAlert",
    "category_totals",
    "daily_chart_series",
    "filter_days_by_category",
    "pot_progress",
    "upcoming_alerts",
]
