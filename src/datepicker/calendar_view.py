"""
Calendar popup state, independent of any rendering technology.

The view owns a cache of month view models, the list of active range
highlights and the range selection state machine driven by clicks and hovers.
Renderers read the visible month views and project their cell state.
"""

from collections.abc import Callable, Iterable
from datetime import date
from typing import Any, Optional, Union

from ..utils.logger import datepicker_logger, get_logger
from .calendar_math import MAX_YEAR, MIN_YEAR, is_supported_year, month_key, next_month, prev_month
from .config import DatePickerConfig
from .models import CalendarDate, CalendarRange, MarkedDate
from .month_view import DayCell, MonthViewModel
from .range_highlighter import RangeHighlighter
from .translations import Translation, get_translation

logger = get_logger()

HIGHLIGHT_CLASS = "highlight"
SELECTED_CLASS = "selected"


class CalendarContext:
    """
    Explicit settings shared by a calendar view and the pickers composed with it.

    Attributes:
        start_of_week: First grid column weekday, 0=Sunday
        month_span: Number of months shown side by side
        show_other_months: Highlight filler days of adjacent months
        locale: Language code for UI strings
        translation: UI strings for locale
    """

    def __init__(
        self,
        start_of_week: int = 0,
        locale: str = "en",
        month_span: int = 2,
        show_other_months: bool = False,
        clock: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize the context.

        Args:
            start_of_week: First grid column weekday, 0=Sunday
            locale: Locale for UI strings
            month_span: Number of months shown side by side
            show_other_months: Highlight filler days of adjacent months
            clock: Returns the current local date (defaults to date.today)
        """
        self.start_of_week = start_of_week
        self.locale = locale
        self.translation: Translation = get_translation(locale)
        self.month_span = month_span
        self.show_other_months = show_other_months
        self.clock = clock or date.today

    @classmethod
    def from_config(
        cls, config: DatePickerConfig, clock: Optional[Callable[[], date]] = None
    ) -> "CalendarContext":
        return cls(
            start_of_week=config.start_of_week,
            locale=config.locale,
            month_span=config.month_span,
            show_other_months=config.show_other_months,
            clock=clock,
        )

    def today(self) -> CalendarDate:
        return CalendarDate.today(self.clock())


class CalendarView:
    """
    Interactive calendar state shared by the pickers on a page.

    Month views are created on first reference and cached for the lifetime
    of the view. All calls are synchronous.
    """

    def __init__(self, context: Optional[CalendarContext] = None):
        self.context = context or CalendarContext()
        self.month_views: dict[tuple[int, int], MonthViewModel] = {}
        self.visible_months: list[tuple[int, int]] = []
        self.curr_year: Optional[int] = None
        self.curr_month: Optional[int] = None

        self.range_select_start: Optional[CalendarDate] = None
        self.curr_range: Optional[CalendarRange] = None
        self.range_highlighter: Optional[RangeHighlighter] = None
        self.range_highlighters: list[RangeHighlighter] = []

        self.on_select_date: Optional[Callable[[CalendarDate, bool], Any]] = None
        self.on_select_range: Optional[Callable[[CalendarRange], Any]] = None

        self.start_date: Optional[CalendarDate] = None
        self.weekends_disabled = False
        self.prev_enabled = True
        self.marked_dates: dict[int, dict[int, list[MarkedDate]]] = {}

        self.selected_start: Optional[CalendarDate] = None
        self.selected_end: Optional[CalendarDate] = None
        self.tooltip: Optional[str] = None
        self.show_header = False
        self.is_open = False

    # Month views

    def get_month_view(self, year: int, month: int) -> MonthViewModel:
        """Return the cached view for (year, month), building it on first use."""
        key = (year, month)
        if key not in self.month_views:
            view = MonthViewModel.build(
                year, month, self.context.start_of_week, self.context.today()
            )
            view.apply_marked_dates(self.marked_dates_for(year, month))
            view.set_disabled(self._is_disabled)
            self.month_views[key] = view
            datepicker_logger.log_month_view_created(year, month)
        return self.month_views[key]

    @property
    def visible_views(self) -> list[MonthViewModel]:
        return [self.get_month_view(year, month) for year, month in self.visible_months]

    def show_month(self, year: int, month: int) -> list[MonthViewModel]:
        """Show month_span consecutive months starting at (year, month).

        Months past the last supported year are left out.

        Raises:
            ValueError: If (year, month) itself is outside the supported years
        """
        if not is_supported_year(year):
            raise ValueError(
                f"Cannot show {year}-{month:02d}, supported years are {MIN_YEAR}-{MAX_YEAR}"
            )

        self.curr_year, self.curr_month = year, month
        self.visible_months = []
        for _ in range(self.context.month_span):
            if not is_supported_year(year):
                break
            self.visible_months.append((year, month))
            year, month = next_month(year, month)

        self.respect_start_date()
        return self.visible_views

    def show_prev_month(self) -> list[MonthViewModel]:
        return self._show_if_supported(*prev_month(*self._current()))

    def show_next_month(self) -> list[MonthViewModel]:
        return self._show_if_supported(*next_month(*self._current()))

    def _show_if_supported(self, year: int, month: int) -> list[MonthViewModel]:
        if not is_supported_year(year):
            return self.visible_views
        return self.show_month(year, month)

    def _current(self) -> tuple[int, int]:
        if self.curr_year is None or self.curr_month is None:
            today = self.context.today()
            return today.year, today.month
        return self.curr_year, self.curr_month

    # Marks

    def mark_date(self, target: CalendarDate, label: str) -> None:
        self.get_month_view(target.year, target.month).mark(target.day, label)

    def unmark_date(self, target: Optional[CalendarDate], label: str) -> None:
        """Remove label from target, or from every cached month when target is None."""
        if target is not None:
            self.get_month_view(target.year, target.month).unmark(target.day, label)
            return
        for view in self.month_views.values():
            view.unmark_all(label)

    def set_marked_dates(
        self, records: Iterable[Union[MarkedDate, dict[str, str]]]
    ) -> None:
        """Replace the marked dates, regrouped by year then month."""
        grouped: dict[int, dict[int, list[MarkedDate]]] = {}
        for record in records:
            if not isinstance(record, MarkedDate):
                record = MarkedDate.model_validate(record)
            target = record.calendar_date
            grouped.setdefault(target.year, {}).setdefault(target.month, []).append(record)
        self.marked_dates = grouped

        for (year, month), view in self.month_views.items():
            view.clear_marked_dates()
            view.apply_marked_dates(self.marked_dates_for(year, month))

    def marked_dates_for(self, year: int, month: int) -> list[MarkedDate]:
        return self.marked_dates.get(year, {}).get(month, [])

    # Ranges

    def mark_date_range(
        self,
        date_range: CalendarRange,
        class_name: str,
        select_in_header: bool = False,
        keep: bool = True,
    ) -> RangeHighlighter:
        """Render a range highlight, optionally tracking it for clear_all_ranges()."""
        highlighter = RangeHighlighter(
            date_range, self, class_name, self.context.show_other_months
        )
        highlighter.render()
        if select_in_header:
            self.selected_start = date_range.start
            self.selected_end = date_range.end
        if keep:
            self.range_highlighters.append(highlighter)
        return highlighter

    def clear_all_ranges(self) -> None:
        today = self.context.today()
        for view in self.month_views.values():
            view.set_today(today)

        for highlighter in self.range_highlighters:
            highlighter.unrender()
        self.range_highlighters = []

    def start_range_select(self, target: CalendarDate) -> None:
        self.range_select_start = target
        self.curr_range = CalendarRange(target, target.clone())
        self.range_highlighter = self.mark_date_range(
            self.curr_range, HIGHLIGHT_CLASS, select_in_header=True, keep=False
        )

    def click(self, target: CalendarDate) -> bool:
        """Select a day. Returns False when the day is disabled."""
        if self._cell(target).disabled:
            logger.debug("Ignoring click on disabled day", extra={"date": str(target)})
            return False

        ends_range = self.range_select_start is not None

        if self.on_select_date:
            self.on_select_date(target, ends_range)

        if ends_range:
            if self.range_highlighter is not None:
                self.range_highlighter.unrender()
                self.range_highlighter = None
            self.tooltip = None
            self.curr_range = CalendarRange(self.range_select_start, target)

            if self.on_select_range:
                self.on_select_range(self.curr_range)

            self.range_select_start = None
            self.curr_range = None

        return True

    def hover(self, target: CalendarDate) -> Optional[str]:
        """Preview the range from the selection start to target.

        Returns:
            Tooltip text with the day count, or None when no range is being selected
        """
        if self.range_select_start is None or self._cell(target).disabled:
            return None

        if self.range_highlighter is not None:
            self.range_highlighter.unrender()
        self.curr_range = CalendarRange(self.range_select_start, target)
        self.range_highlighter = self.mark_date_range(
            self.curr_range, HIGHLIGHT_CLASS, select_in_header=True, keep=False
        )
        self.tooltip = self.context.translation.num_days(self.curr_range.num_days())
        return self.tooltip

    # Restrictions

    def set_start_date(self, start_date: Optional[CalendarDate]) -> None:
        """Disable every day before start_date, moving forward if showing an earlier month."""
        self.start_date = start_date
        current = self._current()
        if start_date is not None and month_key(*current) < month_key(
            start_date.year, start_date.month
        ):
            self.show_month(start_date.year, start_date.month)
        else:
            self.respect_start_date()

    def disable_weekends(self, disabled: bool) -> None:
        self.weekends_disabled = disabled
        self.respect_start_date()

    def respect_start_date(self) -> None:
        for view in self.month_views.values():
            view.set_disabled(self._is_disabled)

        self.prev_enabled = not (
            self.start_date is not None
            and (self.curr_year, self.curr_month)
            == (self.start_date.year, self.start_date.month)
        )

    def _is_disabled(self, cell: DayCell) -> bool:
        if self.start_date is not None and cell.key < self.start_date.key:
            return True
        return self.weekends_disabled and cell.is_weekend

    def _cell(self, target: CalendarDate) -> DayCell:
        return self.get_month_view(target.year, target.month).cell(target.day)

    # Popup state

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False
        self.tooltip = None


_default_view: Optional[CalendarView] = None


def init_default_view(context: Optional[CalendarContext] = None) -> CalendarView:
    """Create the process-wide view shared by pickers that are not given one."""
    global _default_view
    _default_view = CalendarView(context)
    return _default_view


def get_default_view() -> CalendarView:
    """Return the process-wide view, creating it with default settings if needed."""
    if _default_view is None:
        return init_default_view()
    return _default_view


def reset_default_view() -> None:
    """Drop the process-wide view; the next get_default_view() builds a fresh one."""
    global _default_view
    _default_view = None
