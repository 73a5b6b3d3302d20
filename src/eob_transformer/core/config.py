"""
Transformation Engine Configuration.

Settings for the ambient concerns of the engine (logging and batch
fan-out). The transformation rules themselves are not configurable.
Source: https://docs.pydantic.dev/latest/concepts/pydantic_settings/
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class TransformerSettings(BaseSettings):
    """
    Engine settings loaded from environment variables.

    All variables are prefixed with ``EOB_`` (e.g. ``EOB_LOG_LEVEL``).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="EOB_",
    )

    # =========================================================================
    # Logging
    # =========================================================================
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    JSON_LOGS: bool = Field(
        default=False,
        description="Serialize log records as JSON instead of the console format",
    )
    LOG_FILE: Optional[str] = Field(
        default=None,
        description="Optional rotating log file path",
    )

    # =========================================================================
    # Batch Transformation
    # =========================================================================
    BATCH_MAX_WORKERS: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Worker threads used by transform_claims",
    )
    BATCH_FAIL_FAST: bool = Field(
        default=False,
        description="Re-raise the first transformation error instead of collecting it",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(VALID_LOG_LEVELS)}")
        return level


@lru_cache
def get_settings() -> TransformerSettings:
    """
    Get cached settings instance.

    Returns:
        TransformerSettings instance
    """
    return TransformerSettings()
