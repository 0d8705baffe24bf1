"""Presentation strings package."""

from hubplanner.presentation.formatter import DefaultPlanFormatter, PlanFormatter

__all__ = ["DefaultPlanFormatter", "PlanFormatter"]
