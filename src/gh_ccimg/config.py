# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides download limits, retry tuning and logging defaults overridable by CLI flags

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="GH_CCIMG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Download limits
    max_size_mb: int = Field(default=20, gt=0, description="Maximum image size in megabytes")
    timeout_seconds: float = Field(default=15.0, gt=0, description="Per-request timeout in seconds")
    concurrency: int = Field(default=5, ge=1, description="Number of concurrent download workers")

    # Retry tuning
    max_retries: int = Field(default=3, ge=0, description="Retries after the first attempt for transient failures")
    base_delay_seconds: float = Field(default=0.5, ge=0, description="Base delay for exponential backoff")

    # Logging Configuration
    log_mode: Literal["interactive", "production"] | None = Field(
        default=None, description="Logging output mode (auto-detected when unset)"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path")


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
