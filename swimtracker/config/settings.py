import os
from datetime import date
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_database_url() -> str:
    """Get database URL, using absolute path for SQLite to avoid path resolution issues."""
    db_url = os.getenv("SWIMTRACKER_DATABASE_URL", "")
    if db_url:
        logger.info(f"Using SWIMTRACKER_DATABASE_URL from environment: {db_url}")
        return db_url

    # Use absolute path for SQLite
    db_path = Path(__file__).parent.parent.parent / "swimtracker.db"
    abs_path = db_path.resolve()
    db_url = f"sqlite:///{abs_path}"
    logger.debug(f"Using default database path: {db_url}")
    return db_url


class Settings(BaseSettings):
    database_url: str = Field(default_factory=get_database_url)
    log_level: str = Field(default="INFO")
    log_file: str | None = Field(default=None, description="Optional rotating log file")

    # Endurance goal: week 0 starts on training_start_date
    training_start_date: date = Field(default=date(2025, 12, 28))
    goal_date: date = Field(default=date(2026, 8, 30))
    goal_distance_meters: float = Field(default=3000.0, gt=0)
    default_baseline_meters: float = Field(default=625.0, ge=0)
    week_start_day: int = Field(
        default=6,
        description="First day of the training week as a Python weekday number (0=Monday, 6=Sunday)",
    )

    sample_fetch_timeout_seconds: float = Field(
        default=10.0,
        description="Per-stream timeout when fetching samples from the sample source",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SWIMTRACKER_",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("week_start_day")
    @classmethod
    def validate_week_start_day(cls, value: int) -> int:
        """Validate the week start day, defaulting to Sunday when out of range."""
        if not 0 <= value <= 6:
            logger.warning(f"Invalid WEEK_START_DAY '{value}'. Expected 0 (Monday) to 6 (Sunday). Defaulting to 6 (Sunday).")
            return 6
        return value

    @field_validator("sample_fetch_timeout_seconds")
    @classmethod
    def validate_fetch_timeout(cls, value: float) -> float:
        """Validate that the sample fetch timeout is positive."""
        if value <= 0:
            logger.warning(f"Invalid SAMPLE_FETCH_TIMEOUT_SECONDS '{value}'. Defaulting to 10 seconds.")
            return 10.0
        return value


settings = Settings()
