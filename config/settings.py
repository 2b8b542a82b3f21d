"""
Application settings using Pydantic.

Loads configuration from environment variables with validation and type coercion.
"""

from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseType(str, Enum):
    """Database backend type."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"


class LedgerSettings(BaseSettings):
    """Ledger and dashboard behaviour."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="LEDGER_", extra="ignore")

    account_id: str = Field(default="main", description="Id of the singleton account document")
    recent_bets_limit: int = Field(
        default=5,
        ge=1,
        description="Number of bets shown in the recent bets view",
    )
    chart_days: int = Field(
        default=7,
        ge=1,
        description="Length of the daily profit series",
    )
    default_period: str = Field(
        default="1m",
        description="Dashboard period filter (1d, 1w, 1m, all)",
    )
    reverse_on_delete: bool = Field(
        default=False,
        description="Reverse a settled bet's balance effect when it is deleted",
    )
    currency_symbol: str = Field(default="€", description="Display currency symbol")

    @field_validator("default_period")
    @classmethod
    def validate_default_period(cls, v: str) -> str:
        """Validate the period is one the dashboard understands."""
        valid_periods = {"1d", "1w", "1m", "all"}
        lower = v.lower()
        if lower not in valid_periods:
            raise ValueError(f"Invalid period: {v}. Must be one of {valid_periods}")
        return lower


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_type: DatabaseType = Field(
        default=DatabaseType.SQLITE,
        alias="DATABASE_TYPE",
        description="Database backend type",
    )
    database_url: str = Field(
        default="sqlite:///data/bet_ledger.db",
        alias="DATABASE_URL",
        description="Database connection URL",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )
    log_file: Path = Field(
        default=Path("data/logs/ledger.log"),
        alias="LOG_FILE",
        description="Log file path",
    )

    ledger: LedgerSettings = Field(default_factory=LedgerSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper

    def is_sqlite(self) -> bool:
        """Check if the configured backend is SQLite."""
        return self.database_type == DatabaseType.SQLITE


# Global settings instance - import this
settings = Settings()
