# Date picker engine

from .calendar_math import day_of_week, days_in_month, is_leap_year, week_number
from .calendar_view import (
    CalendarContext,
    CalendarView,
    get_default_view,
    init_default_view,
    reset_default_view,
)
from .config import DatePickerConfig, load_config
from .models import CalendarDate, CalendarRange, MarkedDate
from .month_view import DayCell, MonthViewModel
from .pattern import Pattern, PatternError
from .pickers import DatePicker, DateRangePicker, PickerKind, PickerOptions, create_picker
from .range_highlighter import HighlightSpan, RangeHighlighter

__all__ = [
    "day_of_week",
    "days_in_month",
    "is_leap_year",
    "week_number",
    "CalendarContext",
    "CalendarView",
    "get_default_view",
    "init_default_view",
    "reset_default_view",
    "DatePickerConfig",
    "load_config",
    "CalendarDate",
    "CalendarRange",
    "MarkedDate",
    "DayCell",
    "MonthViewModel",
    "Pattern",
    "PatternError",
    "DatePicker",
    "DateRangePicker",
    "PickerKind",
    "PickerOptions",
    "create_picker",
    "HighlightSpan",
    "RangeHighlighter",
]
