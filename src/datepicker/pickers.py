"""
Single-date and date-range pickers.

Both picker kinds share one options model and the same parsing helpers and
expose the same interface; `create_picker` dispatches on a PickerKind tag.
Pickers hold their text value the way an input field would and drive a
CalendarView when opened.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict, Field

from ..utils.logger import datepicker_logger, get_logger
from .calendar_view import SELECTED_CLASS, CalendarView, get_default_view
from .config import DEFAULT_DATE_FORMAT, DEFAULT_SEPARATOR, DatePickerConfig
from .models import CalendarDate, CalendarRange
from .pattern import Pattern

logger = get_logger()


class PickerKind(str, Enum):
    SINGLE_DATE = "single_date"
    RANGE = "range"


class PickerOptions(BaseModel):
    """Options shared by both picker kinds.

    Attributes:
        format: User-facing date format such as "dd/mm/yyyy"
        start_date: "today" or a date in `format`; earlier days are disabled
        disable_weekends: Weekend days cannot be selected
        separator: Text between the two dates of a range value
        on_change: Called with (value, text) after a selection
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    format: str = Field(default=DEFAULT_DATE_FORMAT)
    start_date: Optional[str] = Field(default=None)
    disable_weekends: bool = Field(default=False)
    separator: str = Field(default=DEFAULT_SEPARATOR, min_length=1)
    on_change: Optional[Callable[[Any, str], Any]] = Field(default=None, exclude=True)

    @classmethod
    def from_config(cls, config: DatePickerConfig, **overrides: Any) -> "PickerOptions":
        values = {
            "format": config.date_format,
            "disable_weekends": config.disable_weekends,
            "separator": config.separator,
        }
        values.update(overrides)
        return cls(**values)


def build_date_pattern(date_format: str) -> Pattern:
    """Turn a "yyyy-mm-dd" style format into a Pattern with year/month/day slots."""
    template = (
        date_format.lower()
        .replace("yyyy", "{year}", 1)
        .replace("mm", "{month}", 1)
        .replace("dd", "{day}", 1)
    )
    return Pattern(template)


def parse_date_text(pattern: Pattern, text: str) -> Optional[CalendarDate]:
    """Parse user-typed text with pattern.

    Returns:
        The date, or None when the text does not match or names a day that
        does not exist
    """
    parts = pattern.match(text.strip())
    if parts is None:
        datepicker_logger.log_parse_failure(text, pattern.template, "no match")
        return None

    try:
        return CalendarDate(int(parts["year"]), int(parts["month"]), int(parts["day"]))
    except (KeyError, ValueError) as e:
        datepicker_logger.log_parse_failure(text, pattern.template, str(e))
        return None


def resolve_start_date(
    pattern: Pattern, value: Optional[str], view: CalendarView
) -> Optional[CalendarDate]:
    """Resolve the start_date option: "today", formatted text or nothing."""
    if not value:
        return None
    if value == "today":
        return view.context.today()
    return parse_date_text(pattern, value)


class Picker(Protocol):
    """Interface shared by the picker kinds."""

    kind: PickerKind
    text: str

    def init_options(self) -> None: ...

    def set_value(self, text: str) -> None: ...

    def open(self) -> None: ...

    def on_select_date(self, target: CalendarDate, ends_range: bool) -> None: ...

    def on_select_range(self, date_range: CalendarRange) -> None: ...


class DatePicker:
    """Picks one date."""

    kind = PickerKind.SINGLE_DATE

    def __init__(
        self,
        options: Optional[PickerOptions] = None,
        view: Optional[CalendarView] = None,
        text: str = "",
    ):
        self.options = options or PickerOptions()
        self.view = view or get_default_view()
        self.date_format = build_date_pattern(self.options.format)
        self.value: Optional[CalendarDate] = None
        self.start_date: Optional[CalendarDate] = None
        self.text = ""

        self.init_options()
        if text:
            self.set_value(text)

    def init_options(self) -> None:
        self.start_date = resolve_start_date(
            self.date_format, self.options.start_date, self.view
        )

    def set_value(self, text: str) -> None:
        """Take a new text value; text that does not parse clears the date."""
        self.text = text
        self.value = parse_date_text(self.date_format, text) if text else None

    def open(self) -> None:
        """Prepare the shared view for this picker and open it."""
        target = self.value or self.view.context.today()
        view = self.view

        view.on_select_date = self.on_select_date
        view.on_select_range = None
        view.show_header = False
        view.show_month(target.year, target.month)
        view.set_start_date(self.start_date)
        view.disable_weekends(self.options.disable_weekends)
        view.clear_all_ranges()
        view.unmark_date(None, SELECTED_CLASS)
        if self.value is not None:
            view.mark_date(self.value, SELECTED_CLASS)
        view.open()

    def on_select_date(self, target: CalendarDate, ends_range: bool) -> None:
        self.value = target
        self.text = self.date_format.fill_date(target)
        self.view.close()

        logger.info("Date selected", extra={"date": str(target), "text": self.text})
        if self.options.on_change:
            self.options.on_change(target, self.text)

    def on_select_range(self, date_range: CalendarRange) -> None:
        # Single-date pickers never start a range
        return None


class DateRangePicker:
    """Picks an inclusive range of dates with two clicks."""

    kind = PickerKind.RANGE

    def __init__(
        self,
        options: Optional[PickerOptions] = None,
        view: Optional[CalendarView] = None,
        text: str = "",
    ):
        self.options = options or PickerOptions()
        self.view = view or get_default_view()
        self.date_format = build_date_pattern(self.options.format)
        self.value: Optional[CalendarRange] = None
        self.start_date: Optional[CalendarDate] = None
        self.text = ""

        self.init_options()
        if text:
            self.set_value(text)

    def init_options(self) -> None:
        self.start_date = resolve_start_date(
            self.date_format, self.options.start_date, self.view
        )

    def set_value(self, text: str) -> None:
        """Take "<start><separator><end>"; a missing or bad end makes a one-day range."""
        self.text = text
        self.value = None

        pair = text.split(self.options.separator) if text else []
        if not pair or not pair[0]:
            return

        start = parse_date_text(self.date_format, pair[0])
        if start is None:
            return

        end = None
        if len(pair) > 1 and pair[1]:
            end = parse_date_text(self.date_format, pair[1])

        self.value = CalendarRange(start, end)

    def format_value(self, date_range: CalendarRange) -> str:
        return (
            self.date_format.fill_date(date_range.start)
            + self.options.separator
            + self.date_format.fill_date(date_range.end)
        )

    def open(self) -> None:
        """Prepare the shared view for this picker and open it."""
        target = self.value.start if self.value else self.view.context.today()
        view = self.view

        view.on_select_date = self.on_select_date
        view.on_select_range = self.on_select_range
        view.show_header = True
        view.show_month(target.year, target.month)
        view.set_start_date(self.start_date)
        view.disable_weekends(self.options.disable_weekends)
        view.clear_all_ranges()
        if self.value is not None:
            view.show_month(self.value.start.year, self.value.start.month)
            view.mark_date_range(self.value, SELECTED_CLASS, select_in_header=True)
        view.open()

    def on_select_date(self, target: CalendarDate, ends_range: bool) -> None:
        if not ends_range:
            self.value = None
            self.view.clear_all_ranges()
            self.view.start_range_select(target)

    def on_select_range(self, date_range: CalendarRange) -> None:
        self.value = date_range
        self.view.mark_date_range(date_range, SELECTED_CLASS, select_in_header=True)
        self.text = self.format_value(date_range)
        self.view.close()

        logger.info(
            "Date range selected",
            extra={
                "start": str(date_range.start),
                "end": str(date_range.end),
                "text": self.text,
            },
        )
        if self.options.on_change:
            self.options.on_change(date_range, self.text)


def create_picker(
    kind: Union[PickerKind, str],
    options: Optional[PickerOptions] = None,
    view: Optional[CalendarView] = None,
    text: str = "",
) -> Union[DatePicker, DateRangePicker]:
    """Build the picker for kind."""
    kind = PickerKind(kind)
    if kind is PickerKind.RANGE:
        return DateRangePicker(options, view, text)
    return DatePicker(options, view, text)
