"""Unit tests for month grid view models."""

from datetime import date

import pytest

from src.datepicker.models import CalendarDate, MarkedDate
from src.datepicker.month_view import DayCell, MonthViewModel, RowSegment


class TestMonthViewBuild:
    """Test cases for MonthViewModel.build()."""

    def test_january_2024_sunday_first(self):
        """Test the grid of a month starting on Monday with Sunday-first weeks."""
        view = MonthViewModel.build(2024, 1)

        assert view.start_weekday == 1
        assert view.num_days == 31
        assert view.trailing_days == 3
        assert len(view.cells) == 35
        assert view.grid_start == date(2023, 12, 31)
        assert view.grid_end == date(2024, 2, 3)

    def test_january_2024_monday_first(self):
        """Test that start_of_week shifts the leading filler count."""
        view = MonthViewModel.build(2024, 1, start_of_week=1)

        assert view.start_weekday == 0
        assert view.trailing_days == 4
        assert view.cells[0].date == CalendarDate(2024, 1, 1)
        assert view.grid_end == date(2024, 2, 4)

    def test_february_leap_year(self):
        """Test February 2024 facts."""
        view = MonthViewModel.build(2024, 2)

        assert view.start_weekday == 4
        assert view.num_days == 29
        assert view.trailing_days == 2
        assert [cell.day for cell in view.cells[:4]] == [28, 29, 30, 31]
        assert view.start_week == 5
        assert view.end_week == 9

    @pytest.mark.parametrize("year,month", [(2024, 1), (2024, 2), (2023, 2), (2024, 9), (2026, 2)])
    def test_grid_is_whole_weeks(self, year, month):
        """Test that every grid is made of complete rows."""
        view = MonthViewModel.build(year, month)

        assert len(view.cells) % 7 == 0
        assert all(len(row) == 7 for row in view.weeks())
        assert len(view.days) == view.num_days
        assert all(cell.in_month for cell in view.days)

    def test_today_flag(self):
        """Test that only the in-month cell for today is flagged."""
        view = MonthViewModel.build(2024, 1, today=CalendarDate(2024, 1, 15))

        assert view.cell(15).today
        assert sum(cell.today for cell in view.cells) == 1

    def test_today_flag_ignores_fillers(self):
        """Test that a filler showing today's date is not flagged."""
        view = MonthViewModel.build(2024, 1, today=CalendarDate(2024, 2, 1))

        assert not any(cell.today for cell in view.cells)


class TestMonthViewCells:
    """Test cell lookup and state helpers."""

    def test_cell_lookup(self):
        """Test 1-based day access."""
        view = MonthViewModel.build(2024, 1)

        assert view.cell(1).date == CalendarDate(2024, 1, 1)
        assert view.cell(31).date == CalendarDate(2024, 1, 31)

    def test_cell_out_of_range(self):
        """Test that days outside the month raise IndexError."""
        view = MonthViewModel.build(2024, 2)

        with pytest.raises(IndexError):
            view.cell(30)
        with pytest.raises(IndexError):
            view.cell(0)

    def test_find_cell_other_month(self):
        """Test that find_cell only resolves dates of its own month."""
        view = MonthViewModel.build(2024, 1)

        assert view.find_cell(CalendarDate(2024, 1, 9)).day == 9
        assert view.find_cell(CalendarDate(2024, 2, 1)) is None

    def test_week_labels_monday_first(self):
        """Test one label per grid row."""
        view = MonthViewModel.build(2024, 1, start_of_week=1)

        assert view.week_labels() == [1, 2, 3, 4, 5]

    def test_mark_and_unmark(self):
        """Test ad-hoc labels."""
        view = MonthViewModel.build(2024, 1)
        view.mark(10, "selected")
        view.mark(11, "selected")

        assert "selected" in view.cell(10).css_classes()

        view.unmark(10, "selected")
        assert "selected" not in view.cell(10).labels

        view.unmark_all("selected")
        assert not view.cell(11).labels

    def test_apply_marked_dates(self):
        """Test that only records of this month are applied."""
        view = MonthViewModel.build(2024, 12)
        view.apply_marked_dates(
            [
                MarkedDate(date="2024-12-25", class_name="holiday"),
                MarkedDate(date="2025-01-01", class_name="holiday"),
            ]
        )

        assert view.cell(25).marked == {"holiday"}
        assert sum(bool(cell.marked) for cell in view.cells) == 1

        view.clear_marked_dates()
        assert not view.cell(25).marked

    def test_set_disabled_only_in_month(self):
        """Test that the predicate is applied to in-month cells only."""
        view = MonthViewModel.build(2024, 1)
        view.set_disabled(lambda cell: cell.is_weekend)

        assert view.cell(6).disabled
        assert view.cell(7).disabled
        assert not view.cell(8).disabled
        assert not view.cells[0].disabled

    def test_clear_highlights_keeps_other_state(self):
        """Test that clearing highlights leaves today, labels and marks intact."""
        view = MonthViewModel.build(2024, 1, today=CalendarDate(2024, 1, 15))
        cell = view.cell(15)
        cell.highlights.add("highlight")
        cell.range_start = True
        cell.labels.add("selected")
        cell.marked.add("holiday")

        view.clear_highlights()

        assert not cell.is_highlighted
        assert cell.today
        assert cell.labels == {"selected"}
        assert cell.marked == {"holiday"}
        assert view.highlighted_days() == []


class TestRowSegments:
    """Test splitting day spans into grid rows."""

    def test_full_month(self):
        """Test the segments of a whole month."""
        view = MonthViewModel.build(2024, 1)

        assert view.row_segments(1, 31) == [
            RowSegment(row=0, column=1, length=6),
            RowSegment(row=1, column=0, length=7),
            RowSegment(row=2, column=0, length=7),
            RowSegment(row=3, column=0, length=7),
            RowSegment(row=4, column=0, length=4),
        ]

    def test_span_within_row(self):
        """Test a short span."""
        view = MonthViewModel.build(2024, 1)

        assert view.row_segments(30, 31) == [RowSegment(row=4, column=2, length=2)]

    def test_segment_lengths_cover_span(self):
        """Test that the segment lengths add up to the span length."""
        view = MonthViewModel.build(2024, 2, start_of_week=1)

        segments = view.row_segments(3, 27)
        assert sum(segment.length for segment in segments) == 25


class TestDayCell:
    """Test cases for DayCell state projection."""

    def test_css_classes_plain(self):
        """Test an ordinary weekday."""
        cell = DayCell(year=2024, month=1, day=10, weekday=3)

        assert cell.css_classes() == ["cal-day"]
        assert cell.cell_id == "cal-day-2024-01-10"

    def test_css_classes_full_state(self):
        """Test the order of projected classes."""
        cell = DayCell(
            year=2024,
            month=2,
            day=3,
            weekday=6,
            in_month=False,
            today=True,
            disabled=True,
            highlights={"highlight"},
            range_start=True,
            range_end=True,
            labels={"selected"},
            marked={"holiday"},
        )

        assert cell.css_classes() == [
            "cal-day",
            "cal-day-weekend",
            "cal-day-other-month",
            "today",
            "disabled",
            "cal-range-highlight",
            "cal-day-rangestart",
            "cal-day-rangeend",
            "selected",
            "holiday",
        ]

    def test_weekday_validation(self):
        """Test that weekday must be 0-6."""
        with pytest.raises(ValueError):
            DayCell(year=2024, month=1, day=1, weekday=7)


class TestMonthViewYearLimits:
    """Test grids at the edges of the supported years."""

    def test_first_supported_month(self):
        """Test that leading fillers may come from year 1."""
        view = MonthViewModel.build(2, 1, today=CalendarDate(2, 1, 1))

        assert view.cells[0].year == 1
        assert view.cell(1).today
        assert view.grid_start.year == 1

    def test_last_supported_month(self):
        """Test that trailing fillers may come from year 9999."""
        view = MonthViewModel.build(9998, 12)

        assert view.cells[-1].year == 9999
        assert view.grid_end.year == 9999

    def test_neighbour_grid_of_first_year(self):
        """Test the December grid before the first supported year."""
        view = MonthViewModel.build(1, 12, today=CalendarDate(2, 1, 1))

        assert "00020101" in {cell.key for cell in view.filler_cells}
        assert not any(cell.today for cell in view.cells)

    @pytest.mark.parametrize("year,month", [(1, 1), (9999, 12), (0, 12), (10000, 1)])
    def test_grid_outside_date_range(self, year, month):
        """Test that grids needing unrepresentable filler days are rejected."""
        with pytest.raises(ValueError, match="No calendar grid"):
            MonthViewModel.build(year, month)
