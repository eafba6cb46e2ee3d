"""
Service configuration using Pydantic Settings.
Values come from LEAD_VALIDATOR_* environment variables or a local .env file.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings loaded from environment variables."""

    # ── App ──────────────────────────────────────────────
    app_name: str = "Lead Validator"
    log_level: str = "INFO"

    # ── Title coverage thresholds ────────────────────────
    title_min_total_coverage: float = 0.75
    title_min_level_coverage: float = 1.0
    title_min_keyword_coverage: float = 0.3
    title_require_title: bool = True
    title_missing_limit: int = 6

    # ── Report ───────────────────────────────────────────
    output_sheet_name: str = "Result"

    model_config = SettingsConfigDict(
        env_prefix="LEAD_VALIDATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings (singleton)."""
    return Settings()
