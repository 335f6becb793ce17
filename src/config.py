"""Application configuration via pydantic-settings.

Everything is loaded from environment variables (.env file).
Settings are organized into logical groups and composed into a single Settings object.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DATA_DIR = Path(__file__).resolve().parent / "data"


class ValuationSettings(BaseSettings):
    """Optional external valuation services (PolicyEngine UK, MissingBenefit)."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    policyengine_enabled: bool = Field(
        default=True,
        description="Call the PolicyEngine UK household API for precise figures",
    )
    policyengine_api_url: str = Field(
        default="https://household.api.policyengine.org/uk/calculate",
        description="PolicyEngine UK household calculate endpoint",
    )
    policyengine_year: int = Field(default=2025, description="Tax year start used for PolicyEngine periods")
    missing_benefit_api_url: str = Field(
        default="",
        description="MissingBenefit calculate proxy URL (empty = disabled)",
    )
    missing_benefit_api_key: str = Field(default="", description="MissingBenefit API key")
    timeout_seconds: float = Field(default=5.0, gt=0, description="Per-request timeout for valuation calls")


class Settings(BaseSettings):
    """Root settings composing all sub-settings.

    Usage:
        settings = Settings()
        settings.catalogue_path
        settings.valuation.timeout_seconds
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Static data files
    catalogue_path: Path = Field(default=_DATA_DIR / "entitlements.json")
    rates_path: Path = Field(default=_DATA_DIR / "benefit_rates.json")

    # Composed settings (loaded from same .env)
    valuation: ValuationSettings = Field(default_factory=ValuationSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper


# Module-level singleton; import this wherever settings are needed.
settings = Settings()
