"""Configuration module for the Calendar Navigator.

Handles environment variable parsing with defaults and validation.
"""

import os
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

DEFAULT_PICKER_URL = "https://testautomationpractice.blogspot.com/"
DEFAULT_MAX_NAVIGATIONS = 120
DEFAULT_STEP_DELAY_MS = 100


class WidgetSelectors(BaseModel):
    """CSS selectors for a jQuery UI style datepicker."""

    input: str = Field(default="#datepicker", description="Date input field")
    calendar: str = Field(default=".ui-datepicker", description="Calendar overlay")
    year: str = Field(default=".ui-datepicker-year", description="Displayed year")
    month: str = Field(default=".ui-datepicker-month", description="Displayed month")
    next_button: str = Field(
        default=".ui-datepicker-next", description="Next month control"
    )
    prev_button: str = Field(
        default=".ui-datepicker-prev", description="Previous month control"
    )
    day_cells: str = Field(
        default=".ui-datepicker-calendar td", description="Day cells of the grid"
    )


class NavigatorConfig(BaseModel):
    """Configuration for calendar navigation."""

    max_navigations: int = Field(
        default=DEFAULT_MAX_NAVIGATIONS, ge=1, description="Navigation budget"
    )
    step_delay_ms: int = Field(
        default=DEFAULT_STEP_DELAY_MS, ge=0, description="Pause after each click"
    )
    strict_day: bool = Field(
        default=False, description="Raise when the target day cell is missing"
    )
    log_level: str = Field(default="INFO", description="Logging level")
    picker_url: str = Field(
        default=DEFAULT_PICKER_URL, description="Page hosting the datepicker"
    )
    headless: bool = Field(default=True, description="Run browser headless")
    timeout_ms: int = Field(default=30000, ge=1, description="Browser timeout")
    slow_mo_ms: int = Field(
        default=0, ge=0, description="Delay Playwright adds to every browser action"
    )
    selectors: WidgetSelectors = Field(default_factory=WidgetSelectors)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_log_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_log_levels}")
        return v.upper()

    @field_validator("picker_url")
    @classmethod
    def validate_picker_url(cls, v: str) -> str:
        """Validate picker URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("picker_url must be a valid HTTP/HTTPS URL")
        if not urlparse(v).netloc:
            raise ValueError("picker_url must have a valid domain")
        return v


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a valid integer, got: {raw!r}") from e


def _bool_from_env(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() in ("1", "true", "yes")


def load_config() -> NavigatorConfig:
    """Load configuration from environment variables with defaults.

    Returns:
        NavigatorConfig: Parsed and validated configuration object

    Raises:
        ValueError: If environment variables are invalid
    """
    return NavigatorConfig(
        max_navigations=_int_from_env(
            "NAVIGATOR_MAX_NAVIGATIONS", DEFAULT_MAX_NAVIGATIONS
        ),
        step_delay_ms=_int_from_env("NAVIGATOR_STEP_DELAY_MS", DEFAULT_STEP_DELAY_MS),
        strict_day=_bool_from_env("NAVIGATOR_STRICT_DAY", False),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        picker_url=os.getenv("NAVIGATOR_URL", DEFAULT_PICKER_URL),
        headless=_bool_from_env("NAVIGATOR_HEADLESS", True),
        timeout_ms=_int_from_env("NAVIGATOR_TIMEOUT_MS", 30000),
        slow_mo_ms=_int_from_env("NAVIGATOR_SLOW_MO_MS", 0),
    )
