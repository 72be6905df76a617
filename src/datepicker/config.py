"""Configuration module for the date picker engine.

Handles environment variable parsing with defaults and validation.
"""

import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .translations import resolve_language

DEFAULT_DATE_FORMAT = "yyyy-mm-dd"
DEFAULT_SEPARATOR = " t/m "


class DatePickerConfig(BaseModel):
    """Configuration for calendar views and pickers."""

    date_format: str = Field(
        default=DEFAULT_DATE_FORMAT, description="User-facing date format (e.g. dd/mm/yyyy)"
    )
    separator: str = Field(
        default=DEFAULT_SEPARATOR, min_length=1, description="Separator between range dates"
    )
    start_of_week: int = Field(
        default=0, ge=0, le=6, description="First weekday of a grid row, 0=Sunday"
    )
    locale: str = Field(default="en", description="Locale for UI strings")
    month_span: int = Field(
        default=2, ge=1, le=2, description="Number of months shown side by side"
    )
    disable_weekends: bool = Field(default=False, description="Disable weekend days")
    show_other_months: bool = Field(
        default=False, description="Highlight filler days of adjacent months"
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("date_format")
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        """Validate that the format names year, month and day."""
        lowered = v.lower()
        missing = [token for token in ("yyyy", "mm", "dd") if token not in lowered]
        if missing:
            raise ValueError(
                f"Invalid date_format: {v}. Missing tokens: {', '.join(missing)}"
            )
        return v

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        """Reduce the locale to a supported language code."""
        return resolve_language(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_log_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_log_levels}")
        return v.upper()


def _parse_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a valid integer, got: {raw!r}") from e


def _parse_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def load_config(locale: Optional[str] = None) -> DatePickerConfig:
    """Load configuration from environment variables with defaults.

    Args:
        locale: Overrides DATEPICKER_LOCALE / LANG when given

    Returns:
        DatePickerConfig: Parsed and validated configuration object

    Raises:
        ValueError: If an environment variable holds an invalid value
    """
    if locale is None:
        locale = os.getenv("DATEPICKER_LOCALE") or os.getenv("LANG") or "en"

    return DatePickerConfig(
        date_format=os.getenv("DATEPICKER_FORMAT", DEFAULT_DATE_FORMAT),
        separator=os.getenv("DATEPICKER_SEPARATOR", DEFAULT_SEPARATOR),
        start_of_week=_parse_int("DATEPICKER_START_OF_WEEK", "0"),
        locale=locale,
        month_span=_parse_int("DATEPICKER_MONTH_SPAN", "2"),
        disable_weekends=_parse_bool("DATEPICKER_DISABLE_WEEKENDS"),
        show_other_months=_parse_bool("DATEPICKER_SHOW_OTHER_MONTHS"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
