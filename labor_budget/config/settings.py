"""
Configuration management for the labor budget tracker.
"""

from decimal import Decimal
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LaborBudgetConfig(BaseSettings):
    """Configuration settings for the labor budget tracker."""

    # Storage
    data_file: str = Field(default="labor_budget_data.json", alias="DATA_FILE")

    # Engine defaults
    default_rate_prof: Decimal = Field(default=Decimal("50"), ge=0, alias="DEFAULT_RATE_PROF")
    default_rate_serv: Decimal = Field(default=Decimal("35"), ge=0, alias="DEFAULT_RATE_SERV")
    daily_work_hours: Decimal = Field(default=Decimal("8"), gt=0, alias="DAILY_WORK_HOURS")
    ranking_size: int = Field(default=5, ge=1, alias="RANKING_SIZE")

    # Logging
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="standard", alias="LOG_FORMAT")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, ge=1, alias="LOG_MAX_BYTES")
    log_backup_count: int = Field(default=5, ge=0, alias="LOG_BACKUP_COUNT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        valid_formats = ["standard", "json"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()

    @field_validator("log_file")
    @classmethod
    def blank_log_file_is_none(cls, v):
        """An empty LOG_FILE disables file logging."""
        if v is None or not v.strip():
            return None
        return v.strip()


def load_config(env_file: Optional[str] = None) -> LaborBudgetConfig:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return LaborBudgetConfig()


# Global configuration instance
_config: Optional[LaborBudgetConfig] = None


def get_config() -> LaborBudgetConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> LaborBudgetConfig:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
