"""
Utility modules for the date picker engine.

This package provides the structured logging infrastructure shared by the
calendar, view and picker modules.
"""

from .logger import DatePickerLogger, datepicker_logger, get_logger

__all__ = [
    "get_logger",
    "datepicker_logger",
    "DatePickerLogger",
]
