"""Application configuration using pydantic-settings."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize LOG_LEVEL to an uppercase Python logging level."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {valid}, got {v!r}")
        return v.upper()

    @field_validator("BASE_CURRENCY", mode="before")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("MAX_REPLAY_DAYS")
    @classmethod
    def validate_max_replay_days(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"MAX_REPLAY_DAYS must be positive, got {v}")
        return v

    # App settings
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    # Valuation replay
    BASE_CURRENCY: str = "USD"
    # Hard cap on simulated days (~13.7 years)
    MAX_REPLAY_DAYS: int = 5000
    # Days shown before the first ledger entry for the "ALL" range
    ALL_RANGE_BUFFER_DAYS: int = 2

    # Price history planning
    HISTORY_BUFFER_DAYS: int = 7
    DEFAULT_HISTORY_YEARS: int = 5


settings = Settings()
