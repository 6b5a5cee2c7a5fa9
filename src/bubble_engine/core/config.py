"""
Bubble Engine Centralized Configuration

Provides validated, type-safe access to environment variables using Pydantic Settings.

Usage:
    from bubble_engine.core.config import get_settings

    settings = get_settings()
    if settings.log_level == "DEBUG":
        ...

Environment Variables:
    BUBBLE_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    BUBBLE_DEBUG: Legacy debug flag (enables DEBUG level if set)
    BUBBLE_LOG_JSON: Output logs as JSON
    BUBBLE_ENGINE_CONFIG: Path to a YAML engine configuration file
    BUBBLE_DAILY_BUDGET: Default daily interrupt budget for new engines
    BUBBLE_FOCUS_MODE: Default focus mode for new engines
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_env_file() -> Path | None:
    """
    Find .env file by searching for the project root marker.

    Searches upward from this file's location for pyproject.toml,
    then checks for .env in that directory.

    Returns:
        Path to .env if found, None otherwise
    """
    current = Path(__file__).resolve().parent

    for _ in range(10):  # Limit search depth
        if (current / "pyproject.toml").exists():
            env_file = current / ".env"
            if env_file.exists():
                return env_file
            return None
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


_ENV_FILE = _find_project_env_file()


class BubbleSettings(BaseSettings):
    """
    Bubble engine settings with validation.

    Environment variables are loaded with the BUBBLE_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUBBLE_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # =========================================================================
    # Logging Configuration
    # =========================================================================

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Log level for engine components",
    )

    debug: bool = Field(
        default=False,
        description="Legacy debug flag (enables DEBUG level if set)",
    )

    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format for machine parsing",
    )

    # =========================================================================
    # Engine Defaults
    # =========================================================================

    engine_config: Optional[Path] = Field(
        default=None,
        description="YAML file overriding weights, thresholds and budget defaults",
    )

    daily_budget: int = Field(
        default=15,
        description="Default daily interrupt budget (clamped to 10-30 by the budget manager)",
    )

    focus_mode: Literal["available", "focused", "dnd"] = Field(
        default="available",
        description="Focus mode new engines start in",
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("focus_mode", mode="before")
    @classmethod
    def lowercase_focus_mode(cls, v: str) -> str:
        """Normalize focus mode to lowercase."""
        if isinstance(v, str):
            return v.lower()
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def effective_log_level(self) -> str:
        """
        Get effective log level, respecting legacy BUBBLE_DEBUG.

        Priority:
        1. Explicit BUBBLE_LOG_LEVEL
        2. BUBBLE_DEBUG=1 -> DEBUG
        3. Default: WARNING
        """
        if self.debug and self.log_level == "WARNING":
            return "DEBUG"
        return self.log_level

    @property
    def log_level_int(self) -> int:
        """Get effective log level as logging constant."""
        return getattr(logging, self.effective_log_level)


# =============================================================================
# Singleton Accessor
# =============================================================================


@lru_cache(maxsize=1)
def get_settings() -> BubbleSettings:
    """
    Get the singleton settings instance.

    Settings are loaded and validated on first access.

    Returns:
        BubbleSettings instance
    """
    return BubbleSettings()


def reset_settings() -> None:
    """
    Reset the settings cache (for testing).

    The next get_settings() call reloads from environment variables.
    """
    get_settings.cache_clear()


def is_debug_enabled() -> bool:
    """Check if debug logging is enabled."""
    return get_settings().effective_log_level == "DEBUG"


def is_json_logging() -> bool:
    """Check if JSON logging is enabled."""
    return get_settings().log_json
