"""
Configuration Management for the Financial Hub Planner

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All tunables are centralized here.
The engine itself takes plain arguments; the planner facade reads these
settings and passes them in, so the engine stays free of environment reads.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Projection engine tunables."""

    model_config = SettingsConfigDict(
        env_prefix="HUBPLANNER_ENGINE_",
        extra="ignore"
    )

    horizon_months: int = Field(
        default=12,
        ge=1,
        le=60,
        description="Number of consecutive months to project"
    )
    ahead_margin: Decimal = Field(
        default=Decimal("100"),
        ge=0,
        description="A week is 'ahead' when it ends above warning + this margin"
    )
    upcoming_alert_days: int = Field(
        default=3,
        ge=0,
        le=31,
        description="How many days ahead upcoming alerts look"
    )


class ExportSettings(BaseSettings):
    """Plan export configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HUBPLANNER_EXPORT_",
        extra="ignore"
    )

    filename: str = Field(
        default="moneyLens-plan.csv",
        description="Default export file name"
    )
    directory: str = Field(
        default=".",
        description="Directory exports are written to"
    )

    @field_validator('filename')
    @classmethod
    def validate_filename(cls, v: str) -> str:
        """Export file names must not contain path separators."""
        if Path(v).name != v:
            raise ValueError(f"Export filename must be a bare file name, got {v!r}")
        return v

    @property
    def default_path(self) -> Path:
        return Path(self.directory) / self.filename


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Logging
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode (forces DEBUG logging)"
    )
    log_level: str = Field(
        default="INFO",
        description="Standard library log level for hubplanner loggers"
    )

    # Defaults for new configurations
    default_currency: str = Field(
        default="GBP",
        min_length=3,
        max_length=3,
        description="Currency code for suggested configurations"
    )
    default_warning_threshold: Decimal = Field(
        default=Decimal("100"),
        description="Warning balance threshold for suggested configurations"
    )
    default_danger_threshold: Decimal = Field(
        default=Decimal("0"),
        description="Danger balance threshold for suggested configurations"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def engine(self) -> EngineSettings:
        return EngineSettings()

    @property
    def export(self) -> ExportSettings:
        return ExportSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, Optional[bool | str]]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus {name}_error entries.
    Useful for startup checks.
    """
    results: dict[str, Optional[bool | str]] = {}

    settings = get_settings()

    for name in ("engine", "export", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
