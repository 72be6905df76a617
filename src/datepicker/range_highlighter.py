"""
Range highlighting across month views.

Given a date range that may span many months, this module marks exactly which
day cells of which month views belong to the range, flags the first and last
day, and can strip those highlights again.
"""

from typing import Protocol

from pydantic import BaseModel, Field

from ..utils.logger import datepicker_logger, get_logger
from .calendar_math import month_key, next_month, prev_month
from .models import CalendarRange
from .month_view import MonthViewModel, RowSegment

logger = get_logger()


class MonthViewProvider(Protocol):
    """Resolves (year, month) to a month view, creating it on first reference."""

    def get_month_view(self, year: int, month: int) -> MonthViewModel: ...


class HighlightSpan(BaseModel):
    """The part of a range that falls inside one month.

    Attributes:
        year: Year of the month
        month: Month (1-12)
        first_day: First highlighted day of the month
        last_day: Last highlighted day of the month
        is_first: The span holds the first day of the range
        is_last: The span holds the last day of the range
        segments: Per grid row runs of the span, for bar-style renderers
    """

    year: int
    month: int = Field(..., ge=1, le=12)
    first_day: int = Field(..., ge=1, le=31)
    last_day: int = Field(..., ge=1, le=31)
    is_first: bool = False
    is_last: bool = False
    segments: list[RowSegment] = Field(default_factory=list)

    @property
    def num_days(self) -> int:
        return self.last_day - self.first_day + 1


class RangeHighlighter:
    """
    Applies one range highlight to the month views of a provider.

    Callers render a new highlight only after unrendering the previous one
    on the same months.
    """

    def __init__(
        self,
        date_range: CalendarRange,
        provider: MonthViewProvider,
        class_name: str = "highlight",
        show_other_months: bool = False,
    ):
        """
        Initialize the highlighter.

        Args:
            date_range: The range to display
            provider: Month view source, typically a CalendarView
            class_name: Highlight class for the day cells
            show_other_months: Also highlight filler days of adjacent months
        """
        if date_range.end.key < date_range.start.key:
            # Endpoints were mutated after the range was normalized
            logger.warning(
                "Range endpoints out of order, highlighting start day only",
                extra={"start": str(date_range.start), "end": str(date_range.end)},
            )
            date_range = CalendarRange(date_range.start.clone())

        self.range = date_range
        self.provider = provider
        self.class_name = class_name
        self.show_other_months = show_other_months
        self.spans: list[HighlightSpan] = []

    def render(self) -> list[HighlightSpan]:
        """Highlight every day of the range, month by month.

        Returns:
            One span per touched month, in order
        """
        start, end = self.range.start, self.range.end
        year, month = start.year, start.month
        first_day = start.day
        last_key = month_key(end.year, end.month)

        self.spans = []
        while month_key(year, month) <= last_key:
            view = self.provider.get_month_view(year, month)
            ends_here = (year, month) == (end.year, end.month)
            last_day = end.day if ends_here else view.num_days

            for day in range(first_day, last_day + 1):
                view.cell(day).highlights.add(self.class_name)

            is_first = not self.spans
            if is_first:
                view.cell(first_day).range_start = True
            if ends_here:
                view.cell(last_day).range_end = True

            self.spans.append(
                HighlightSpan(
                    year=year,
                    month=month,
                    first_day=first_day,
                    last_day=last_day,
                    is_first=is_first,
                    is_last=ends_here,
                    segments=view.row_segments(first_day, last_day),
                )
            )

            year, month = next_month(year, month)
            first_day = 1

        if self.show_other_months:
            self._render_filler_days()

        datepicker_logger.log_range_render(
            self.range, self.class_name, [(s.year, s.month) for s in self.spans]
        )
        return list(self.spans)

    def unrender(self) -> None:
        """Clear every range highlight from the months this range touches.

        Clearing works on the cell state, not on what this instance applied,
        so it is safe to call repeatedly or after the views were reset.
        """
        for year, month in self._involved_months():
            self.provider.get_month_view(year, month).clear_highlights()
        self.spans = []

    def _involved_months(self) -> list[tuple[int, int]]:
        months = self.range.month_keys()
        if self.show_other_months:
            months = (
                [prev_month(*months[0])] + months + [next_month(*months[-1])]
            )
        return months

    def _render_filler_days(self) -> None:
        """Highlight filler days of every involved grid that fall in the range."""
        start_key, end_key = self.range.start.key, self.range.end.key
        for year, month in self._involved_months():
            view = self.provider.get_month_view(year, month)
            if view.cells[-1].key < start_key or view.cells[0].key > end_key:
                continue
            for cell in view.filler_cells:
                if not start_key <= cell.key <= end_key:
                    continue
                cell.highlights.add(self.class_name)
                if cell.key == start_key:
                    cell.range_start = True
                if cell.key == end_key:
                    cell.range_end = True
