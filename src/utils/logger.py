"""
Structured Logger configuration for the date picker engine.

This module provides a centralized logger configuration with structured JSON logging
shared by the pattern engine, the calendar view and the range highlighter.

Environment-aware logging:
- LOG_LEVEL selects the level (defaults to INFO)
- Logs are written as JSON to stdout; the CLI raises the level to ERROR unless --verbose
"""

import os
from typing import Any, Optional

from aws_lambda_powertools import Logger


class DatePickerLogger:
    """
    Centralized logger for the date picker engine with structured logging.

    Provides structured logging with consistent log formatting across the
    calendar math, view and picker modules.
    """

    def __init__(self, service_name: str = "datepicker"):
        """
        Initialize the logger with service configuration.

        Args:
            service_name: Name of the service for log identification
        """
        self.service_name = service_name

        self._logger = Logger(
            service=service_name,
            level=os.getenv("LOG_LEVEL", "INFO"),
            use_datetime_directive=True,
            json_default=self._custom_serializer,
        )

    def get_logger(self) -> Logger:
        """
        Get the configured structured Logger instance.

        Returns:
            Configured Logger instance
        """
        return self._logger

    def log_range_render(
        self, date_range: Any, class_name: str, months: list[tuple[int, int]]
    ) -> None:
        """
        Log a range highlight being applied to a sequence of month views.

        Args:
            date_range: The range being rendered
            class_name: Highlight class applied to the day cells
            months: (year, month) pairs touched by the range
        """
        self._logger.debug(
            "Rendering date range highlight",
            extra={
                "operation": "range_render",
                "start": str(date_range.start),
                "end": str(date_range.end),
                "class_name": class_name,
                "months": [f"{year}-{month:02d}" for year, month in months],
                "service": self.service_name,
            },
        )

    def log_parse_failure(
        self, text: str, template: str, reason: Optional[str] = None
    ) -> None:
        """
        Log user-typed text that could not be turned into a date.

        Args:
            text: The rejected input
            template: The pattern template it was matched against
            reason: Why the value was rejected, if known
        """
        log_data = {
            "operation": "parse_failure",
            "text": text,
            "template": template,
            "service": self.service_name,
        }
        if reason is not None:
            log_data["reason"] = reason

        self._logger.warning(f"Could not parse date value: {text!r}", extra=log_data)

    def log_month_view_created(self, year: int, month: int) -> None:
        """
        Log creation of a month view model.

        Args:
            year: Year of the month view
            month: Month of the month view (1-12)
        """
        self._logger.debug(
            "Month view created",
            extra={
                "operation": "month_view_created",
                "month": f"{year}-{month:02d}",
                "service": self.service_name,
            },
        )

    @staticmethod
    def _custom_serializer(obj: Any) -> Any:
        """
        JSON fallback for objects the default encoder rejects, including Pydantic models.

        Args:
            obj: Object to serialize

        Returns:
            Serializable representation of the object
        """
        if hasattr(obj, "isoformat"):
            return obj.isoformat()
        elif hasattr(obj, "model_dump"):
            return obj.model_dump()
        elif hasattr(obj, "__dict__"):
            return obj.__dict__
        else:
            return str(obj)


# Global logger instance
datepicker_logger = DatePickerLogger()


def get_logger() -> Logger:
    """
    Get the global logger instance.

    Returns:
        Configured structured Logger
    """
    return datepicker_logger.get_logger()
