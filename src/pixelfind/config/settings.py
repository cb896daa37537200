"""Configuration management for pixelfind using pydantic-settings.

Settings are read from environment variables with the ``PIXELFIND_`` prefix
and from an optional ``.env`` file.

Examples:
    PIXELFIND_DEFAULT_THRESHOLD=0.9
    PIXELFIND_INCLUDE_LAST_POSITION=true
    PIXELFIND_DEBUG_MODE=true
    PIXELFIND_LOG_FILE=./logs/pixelfind.log
"""

import os
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError


class PixelfindSettings(BaseSettings):
    """Main configuration settings for pixelfind."""

    model_config = SettingsConfigDict(
        env_prefix="PIXELFIND_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Matching settings
    default_threshold: float = Field(
        1.0,
        ge=0.0,
        le=1.0,
        description="Per-channel similarity threshold used when a call does not pass one",
    )
    include_last_position: bool = Field(
        False,
        description="Scan the last row and column where the template still fits",
    )

    # Logging settings
    debug_mode: bool = Field(False, description="Enable debug logging")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Log level used when debug mode is off"
    )
    log_file: Path | None = Field(None, description="Optional log file")
    structured_logging: bool = Field(False, description="Render log lines as JSON")

    @property
    def effective_log_level(self) -> str:
        """Log level after applying debug mode."""
        return "DEBUG" if self.debug_mode else self.log_level


class TestSettings(PixelfindSettings):
    """Test-specific settings."""

    model_config = SettingsConfigDict(
        env_prefix="PIXELFIND_",
        env_file=".env.test",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"


# Singleton instance
_settings: PixelfindSettings | None = None


def get_settings(env: str | None = None) -> PixelfindSettings:
    """Get the singleton settings instance.

    Args:
        env: Environment name ('test' selects TestSettings). Defaults to
            the PIXELFIND_ENV environment variable.

    Returns:
        PixelfindSettings instance

    Raises:
        ConfigurationError: If the environment holds invalid values
    """
    global _settings

    if _settings is None:
        env_name = env or os.getenv("PIXELFIND_ENV", "default")
        try:
            if env_name == "test":
                _settings = TestSettings()
            else:
                _settings = PixelfindSettings()
        except ValidationError as e:
            raise ConfigurationError("Invalid pixelfind settings", cause=e) from e

    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (mainly for testing)."""
    global _settings
    _settings = None
