"""Settings management using Pydantic for type validation and configuration."""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, Field, PrivateAttr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError
from .models import CalendarConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "CALENDARCURSOR_"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    console_level: str = Field(
        default="WARNING",
        description="Console log level: DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL",
    )
    console_colors: bool = Field(
        default=True, description="Enable colored console output (auto-detected)"
    )
    file_enabled: bool = Field(default=False, description="Enable file logging")
    file_directory: Optional[str] = Field(default=None, description="Log file directory")
    file_name: str = Field(default="calendarcursor.log", description="Log file name")


class CalendarCursorSettings(BaseSettings):
    """Application settings with environment variable and YAML support.

    Priority order: explicit arguments > environment variables > YAML > defaults.
    """

    _explicit_args: set = PrivateAttr(default_factory=set)
    _env_vars_set: set = PrivateAttr(default_factory=set)

    # Calendar Configuration
    week_start: Union[int, str] = Field(
        default="monday", description="First day of the week (name or 0=Sunday..6=Saturday)"
    )
    year_window_size: int = Field(default=9, description="Number of years in the years window")
    escalate_month_crossings: bool = Field(
        default=False,
        description="Rebuild month-level fields when a day/week change leaves the month",
    )

    # File Paths
    config_dir: Path = Field(default_factory=lambda: Path.home() / ".config" / "calendarcursor")
    config_path: Optional[Path] = Field(
        default=None, description="Explicit YAML configuration file"
    )

    # Logging Configuration
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings, description="Logging settings"
    )

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, **kwargs: Any) -> None:
        # Track which environment variables are set before calling parent
        env_vars_set = {
            key[len(ENV_PREFIX) :].lower() for key in os.environ if key.startswith(ENV_PREFIX)
        }

        super().__init__(**kwargs)

        self._explicit_args = set(kwargs.keys())
        self._env_vars_set = env_vars_set

        self._load_yaml_config()

    def _find_config_file(self) -> Optional[Path]:
        """Find configuration file in order of preference."""
        if self.config_path is not None:
            return self.config_path if self.config_path.exists() else None

        project_config = Path.cwd() / "config" / "config.yaml"
        if project_config.exists():
            return project_config

        user_config = self.config_dir / "config.yaml"
        if user_config.exists():
            return user_config

        return None

    def _can_override(self, setting: str) -> bool:
        return setting not in self._explicit_args and setting not in self._env_vars_set

    def _load_calendar_config(self, config_data: dict) -> None:
        """Load calendar settings from the ``calendar`` section of YAML data."""
        calendar_config = config_data.get("calendar") or {}

        for setting in ("week_start", "year_window_size", "escalate_month_crossings"):
            if setting in calendar_config and self._can_override(setting):
                setattr(self, setting, calendar_config[setting])

    def _load_logging_config(self, config_data: dict) -> None:
        """Load logging settings from the ``logging`` section of YAML data."""
        logging_config = config_data.get("logging") or {}
        if "logging" in self._explicit_args or any(
            key.startswith("logging") for key in self._env_vars_set
        ):
            return

        for setting in LoggingSettings.model_fields:
            if setting in logging_config:
                setattr(self.logging, setting, logging_config[setting])

    def _load_yaml_config(self) -> None:
        """Load configuration from YAML file if it exists."""
        config_file = self._find_config_file()
        if not config_file:
            return

        try:
            with config_file.open(encoding="utf-8") as f:
                config_data = yaml.safe_load(f)

            if not config_data:
                return

            self._load_calendar_config(config_data)
            self._load_logging_config(config_data)
            logger.debug(f"Loaded YAML config from {config_file}")

        except (OSError, yaml.YAMLError, AttributeError) as e:
            # Don't fail if YAML loading fails, just continue with defaults/env vars
            logger.warning(f"Could not load YAML config from {config_file}: {e}")

    def to_calendar_config(self) -> CalendarConfig:
        """Build the validated calendar configuration.

        Returns:
            New ``CalendarConfig`` from the calendar settings

        Raises:
            ConfigurationError: If any calendar setting is invalid
        """
        try:
            return CalendarConfig(
                week_start=self.week_start,
                year_window_size=self.year_window_size,
                escalate_month_crossings=self.escalate_month_crossings,
            )
        except ValidationError as e:
            first_error = e.errors()[0]
            field_name = str(first_error["loc"][0]) if first_error["loc"] else None
            raise ConfigurationError(
                "Invalid calendar configuration",
                field_name=field_name,
                field_value=getattr(self, field_name, None) if field_name else None,
                validation_errors=[err["msg"] for err in e.errors()],
            ) from e


# Global settings management
_settings_instance: Optional[CalendarCursorSettings] = None


def get_settings() -> CalendarCursorSettings:
    """Get the global settings instance, creating it lazily if needed."""
    if globals()["_settings_instance"] is None:
        globals()["_settings_instance"] = CalendarCursorSettings()
    return globals()["_settings_instance"]


def reset_settings() -> None:
    """Reset the global settings instance (primarily for testing)."""
    globals()["_settings_instance"] = None
