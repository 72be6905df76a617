"""Per-month grid model consumed by the range highlighter and the renderers.

A month grid is 7 columns wide. Leading and trailing filler days from the
adjacent months complete the first and last rows. Each cell carries an
explicit state record; renderers project it into presentation classes with
DayCell.css_classes() instead of parsing class strings.
"""

import datetime
from collections.abc import Callable, Iterable
from typing import Optional

from pydantic import BaseModel, Field

from .calendar_math import day_of_week, days_in_month, has_grid, next_month, prev_month, week_number
from .models import CalendarDate, MarkedDate

HIGHLIGHT_CLASS_PREFIX = "cal-range-"
RANGE_START_CLASS = "cal-day-rangestart"
RANGE_END_CLASS = "cal-day-rangeend"


class DayCell(BaseModel):
    """State of one day cell in a month grid.

    Attributes:
        year: Year of the date shown in the cell
        month: Month of the date shown in the cell
        day: Day of the month shown in the cell
        weekday: Weekday of the date, 0=Sunday .. 6=Saturday
        in_month: False for filler days borrowed from an adjacent month
        today: The cell shows the current date
        disabled: The date cannot be selected
        highlights: Range highlight class names applied to the cell
        range_start: The cell is the first day of a highlighted range
        range_end: The cell is the last day of a highlighted range
        labels: Ad-hoc marks such as "selected"
        marked: Classes coming from the marked-dates input
    """

    year: int
    month: int
    day: int
    weekday: int = Field(..., ge=0, le=6)
    in_month: bool = True
    today: bool = False
    disabled: bool = False
    highlights: set[str] = Field(default_factory=set)
    range_start: bool = False
    range_end: bool = False
    labels: set[str] = Field(default_factory=set)
    marked: set[str] = Field(default_factory=set)

    @property
    def is_weekend(self) -> bool:
        return self.weekday in (0, 6)

    @property
    def date(self) -> CalendarDate:
        return CalendarDate(self.year, self.month, self.day)

    @property
    def key(self) -> str:
        """Sortable YYYYMMDD key, comparable with CalendarDate.key."""
        return f"{self.year:04d}{self.month:02d}{self.day:02d}"

    def to_date(self) -> datetime.date:
        return datetime.date(self.year, self.month, self.day)

    @property
    def cell_id(self) -> str:
        return f"cal-day-{self.year:04d}-{self.month:02d}-{self.day:02d}"

    @property
    def is_highlighted(self) -> bool:
        return bool(self.highlights) or self.range_start or self.range_end

    def clear_highlights(self) -> None:
        self.highlights.clear()
        self.range_start = False
        self.range_end = False

    def css_classes(self) -> list[str]:
        """Project the cell state into presentation class names."""
        classes = ["cal-day"]
        if self.is_weekend:
            classes.append("cal-day-weekend")
        if not self.in_month:
            classes.append("cal-day-other-month")
        if self.today:
            classes.append("today")
        if self.disabled:
            classes.append("disabled")
        classes.extend(HIGHLIGHT_CLASS_PREFIX + name for name in sorted(self.highlights))
        if self.range_start:
            classes.append(RANGE_START_CLASS)
        if self.range_end:
            classes.append(RANGE_END_CLASS)
        classes.extend(sorted(self.labels))
        classes.extend(sorted(self.marked))
        return classes


class RowSegment(BaseModel):
    """A run of consecutive day cells within one grid row."""

    row: int = Field(..., ge=0)
    column: int = Field(..., ge=0, le=6)
    length: int = Field(..., ge=1, le=7)


class MonthViewModel(BaseModel):
    """Derived facts and cell state for one displayed (year, month).

    Attributes:
        year: Displayed year
        month: Displayed month (1-12)
        start_of_week: First grid column weekday, 0=Sunday .. 6=Saturday
        start_weekday: Grid column of the 1st, equal to the leading filler count
        num_days: Days in the month
        trailing_days: Filler days after the last day of the month
        start_week: Week label of the 1st
        end_week: Week label of the last day
        cells: All grid cells in display order, fillers included
    """

    year: int
    month: int = Field(..., ge=1, le=12)
    start_of_week: int = Field(default=0, ge=0, le=6)
    start_weekday: int = Field(..., ge=0, le=6)
    num_days: int = Field(..., ge=28, le=31)
    trailing_days: int = Field(..., ge=0, le=6)
    start_week: int
    end_week: int
    cells: list[DayCell]

    @classmethod
    def build(
        cls,
        year: int,
        month: int,
        start_of_week: int = 0,
        today: Optional[CalendarDate] = None,
    ) -> "MonthViewModel":
        """Compute the grid for (year, month) with weeks starting on start_of_week.

        Raises:
            ValueError: If the grid's filler days fall outside datetime.date's years
        """
        if not has_grid(year, month):
            raise ValueError(f"No calendar grid for {year}-{month:02d}")

        num_days = days_in_month(year, month)
        start_weekday = (day_of_week(year, month, 1) - start_of_week) % 7
        trailing_days = (7 - (start_weekday + num_days) % 7) % 7

        cells: list[DayCell] = []

        prev_year, prev_mon = prev_month(year, month)
        prev_num_days = days_in_month(prev_year, prev_mon)
        for offset in range(start_weekday, 0, -1):
            cells.append(_make_cell(prev_year, prev_mon, prev_num_days - offset + 1, False))

        for day in range(1, num_days + 1):
            cells.append(_make_cell(year, month, day, True))

        next_year, next_mon = next_month(year, month)
        for day in range(1, trailing_days + 1):
            cells.append(_make_cell(next_year, next_mon, day, False))

        view = cls(
            year=year,
            month=month,
            start_of_week=start_of_week,
            start_weekday=start_weekday,
            num_days=num_days,
            trailing_days=trailing_days,
            start_week=week_number(year, month, 1),
            end_week=week_number(year, month, num_days),
            cells=cells,
        )
        if today is not None:
            view.set_today(today)
        return view

    @property
    def key(self) -> tuple[int, int]:
        return self.year, self.month

    @property
    def days(self) -> list[DayCell]:
        """In-month cells, indexable by day - 1."""
        return self.cells[self.start_weekday : self.start_weekday + self.num_days]

    @property
    def filler_cells(self) -> list[DayCell]:
        return [cell for cell in self.cells if not cell.in_month]

    @property
    def grid_start(self) -> datetime.date:
        return self.cells[0].to_date()

    @property
    def grid_end(self) -> datetime.date:
        return self.cells[-1].to_date()

    def cell(self, day: int) -> DayCell:
        """Return the in-month cell for day (1-based)."""
        if not 1 <= day <= self.num_days:
            raise IndexError(f"day {day} outside {self.year}-{self.month:02d}")
        return self.cells[self.start_weekday + day - 1]

    def find_cell(self, date: CalendarDate) -> Optional[DayCell]:
        """Return the in-month cell showing date, if this view shows it."""
        if (date.year, date.month) != self.key:
            return None
        return self.cell(date.day)

    def weeks(self) -> list[list[DayCell]]:
        """Grid rows of 7 cells."""
        return [self.cells[i : i + 7] for i in range(0, len(self.cells), 7)]

    def week_labels(self) -> list[int]:
        """Week label for each grid row, taken from its first in-month day."""
        labels = []
        for row in self.weeks():
            first = next(cell for cell in row if cell.in_month)
            labels.append(week_number(first.year, first.month, first.day))
        return labels

    def row_segments(self, first_day: int, last_day: int) -> list[RowSegment]:
        """Split the in-month day span first_day..last_day into per-row runs."""
        segments: list[RowSegment] = []
        day = first_day
        while day <= last_day:
            position = self.start_weekday + day - 1
            column = position % 7
            length = min(7 - column, last_day - day + 1)
            segments.append(RowSegment(row=position // 7, column=column, length=length))
            day += length
        return segments

    def set_today(self, today: CalendarDate) -> None:
        for cell in self.cells:
            cell.today = cell.in_month and cell.key == today.key

    def mark(self, day: int, label: str) -> None:
        self.cell(day).labels.add(label)

    def unmark(self, day: int, label: str) -> None:
        self.cell(day).labels.discard(label)

    def unmark_all(self, label: str) -> None:
        """Remove label from every cell of the month."""
        for cell in self.cells:
            cell.labels.discard(label)

    def clear_highlights(self) -> None:
        """Strip range highlights and range boundary flags from every cell.

        Other state (weekend, today, disabled, labels, marked dates) is kept.
        """
        for cell in self.cells:
            cell.clear_highlights()

    def clear_marked_dates(self) -> None:
        for cell in self.cells:
            cell.marked.clear()

    def apply_marked_dates(self, records: Iterable[MarkedDate]) -> None:
        """Add the class of every record that falls inside this month."""
        for record in records:
            target = record.calendar_date
            if (target.year, target.month) == self.key:
                self.cell(target.day).marked.add(record.class_name)

    def set_disabled(self, predicate: Callable[[DayCell], bool]) -> None:
        """Disable the in-month cells for which predicate returns True."""
        for cell in self.days:
            cell.disabled = predicate(cell)

    def highlighted_days(self) -> list[int]:
        return [cell.day for cell in self.days if cell.is_highlighted]


def _make_cell(year: int, month: int, day: int, in_month: bool) -> DayCell:
    return DayCell(
        year=year,
        month=month,
        day=day,
        weekday=day_of_week(year, month, day),
        in_month=in_month,
    )
