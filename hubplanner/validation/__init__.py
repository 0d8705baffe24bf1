"""Configuration checks package."""

from hubplanner.validation.validator import ConfigurationValidator

__all__ = ["ConfigurationValidator"]
