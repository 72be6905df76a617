"""Data models for the date picker engine.

Contains Pydantic models for calendar dates, date ranges and marked dates.
"""

from collections.abc import Callable, Iterator
from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from .calendar_math import MAX_YEAR, MIN_YEAR, day_of_week, days_in_month, month_key, next_month
from .pattern import Pattern

FIRST_ORDINAL = date(MIN_YEAR, 1, 1).toordinal()
LAST_ORDINAL = date(MAX_YEAR, 12, 31).toordinal()

ISO_PATTERN = Pattern("{year:[0-9][0-9][0-9][0-9]}-{month:[0-9][0-9]}-{day:[0-9][0-9]}")


class CalendarDate(BaseModel):
    """A (year, month, day) triple in the proleptic Gregorian calendar.

    Ordering and equality go through `key`, never identity. Arithmetic
    mutates in place and returns the instance, so loops work on a clone().

    Attributes:
        year: Year (2-9998)
        month: Month (1-12)
        day: Day of the month (1-num_days)
    """

    year: int = Field(..., ge=MIN_YEAR, le=MAX_YEAR, description="Year")
    month: int = Field(..., ge=1, le=12, description="Month (1-12)")
    day: int = Field(..., ge=1, le=31, description="Day of the month")

    def __init__(self, year: int, month: int, day: int):
        super().__init__(year=year, month=month, day=day)

    @model_validator(mode="after")
    def validate_day_in_month(self) -> "CalendarDate":
        """Reject days past the end of the month (e.g. April 31)."""
        if self.day > days_in_month(self.year, self.month):
            raise ValueError(
                f"day {self.day} is out of range for {self.year}-{self.month:02d}"
            )
        return self

    @computed_field
    @property
    def key(self) -> str:
        """Sortable YYYYMMDD key."""
        return f"{self.year:04d}{self.month:02d}{self.day:02d}"

    @property
    def num_days(self) -> int:
        """Number of days in this date's month."""
        return days_in_month(self.year, self.month)

    @property
    def weekday(self) -> int:
        """Weekday of this date, 0=Sunday .. 6=Saturday."""
        return day_of_week(self.year, self.month, self.day)

    @property
    def cell_id(self) -> str:
        """Identity of the day cell showing this date."""
        return f"cal-day-{self}"

    @classmethod
    def from_string(cls, value: str) -> "CalendarDate":
        """Parse a zero-padded "YYYY-MM-DD" string.

        Raises:
            ValueError: If the string is not an ISO date or names a day that
                does not exist
        """
        parts = ISO_PATTERN.match(value)
        if parts is None:
            raise ValueError(f"Cannot parse ISO date string '{value}'")
        return cls(int(parts["year"]), int(parts["month"]), int(parts["day"]))

    @classmethod
    def from_date(cls, value: date) -> "CalendarDate":
        """Build from a datetime.date (or datetime)."""
        return cls(value.year, value.month, value.day)

    @classmethod
    def today(cls, reference_date: Optional[date] = None) -> "CalendarDate":
        """Return the current local date, or reference_date when given."""
        if reference_date is None:
            reference_date = date.today()
        return cls.from_date(reference_date)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def clone(self) -> "CalendarDate":
        """Return an independent copy."""
        return CalendarDate(self.year, self.month, self.day)

    def increase_with(self, days: int) -> "CalendarDate":
        """Advance by exactly `days` calendar days, rolling over months and years.

        A negative count moves backwards.

        Raises:
            ValueError: If the result would fall outside the supported years;
                the date is left unchanged
        """
        if days < 0:
            return self.decrease_with(-days)

        self._check_shift(days)
        for _ in range(days):
            self.day += 1
            if self.day > days_in_month(self.year, self.month):
                self.year, self.month = next_month(self.year, self.month)
                self.day = 1
        return self

    def decrease_with(self, days: int) -> "CalendarDate":
        """Go back exactly `days` calendar days, rolling over months and years.

        A negative count moves forwards.
        """
        if days < 0:
            return self.increase_with(-days)

        self._check_shift(-days)
        for _ in range(days):
            self.day -= 1
            if self.day < 1:
                if self.month == 1:
                    self.year -= 1
                    self.month = 12
                else:
                    self.month -= 1
                self.day = days_in_month(self.year, self.month)
        return self

    def _check_shift(self, days: int) -> None:
        target = self.to_date().toordinal() + days
        if not FIRST_ORDINAL <= target <= LAST_ORDINAL:
            raise ValueError(
                f"{self} moved by {days} days is outside years {MIN_YEAR}-{MAX_YEAR}"
            )

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self.key < other.key

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self.key <= other.key

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self.key > other.key

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self.key >= other.key


class CalendarRange(BaseModel):
    """An inclusive, normalized (start <= end) pair of calendar dates.

    Attributes:
        start: First day of the range
        end: Last day of the range, defaults to start (a one-day range)
    """

    start: CalendarDate = Field(..., description="First day of the range")
    end: CalendarDate = Field(..., description="Last day of the range")

    def __init__(self, start: CalendarDate, end: Optional[CalendarDate] = None):
        super().__init__(start=start, end=end)

    @model_validator(mode="before")
    @classmethod
    def default_end_to_start(cls, data: Any) -> Any:
        """A missing end makes a one-day range with its own copy of start."""
        if isinstance(data, dict) and data.get("end") is None:
            start = data.get("start")
            if isinstance(start, CalendarDate):
                start = start.clone()
            data = {**data, "end": start}
        return data

    @model_validator(mode="after")
    def normalize_order(self) -> "CalendarRange":
        """Swap the endpoints when given in reverse order."""
        if self.end.key < self.start.key:
            self.start, self.end = self.end, self.start
        return self

    def num_days(self) -> int:
        """Inclusive number of days between start and end (always >= 1)."""
        return (self.end.to_date() - self.start.to_date()).days + 1

    def contains(self, value: CalendarDate) -> bool:
        return self.start.key <= value.key <= self.end.key

    def dates(self) -> Iterator[CalendarDate]:
        """Yield an independent copy of every date from start to end."""
        current = self.start.clone()
        while current.key <= self.end.key:
            yield current.clone()
            if current.key == self.end.key:
                break
            current.increase_with(1)

    def each(self, callback: Callable[[CalendarDate, int, bool], Any]) -> None:
        """Invoke callback(date, index, is_last) for every date in the range."""
        for index, current in enumerate(self.dates()):
            callback(current, index, current.key == self.end.key)

    def month_keys(self) -> list[tuple[int, int]]:
        """Ordered (year, month) pairs touched by the range."""
        year, month = self.start.year, self.start.month
        last = month_key(self.end.year, self.end.month)
        months = []
        while month_key(year, month) <= last:
            months.append((year, month))
            year, month = next_month(year, month)
        return months

    def __str__(self) -> str:
        return f"{self.start}/{self.end}"


class MarkedDate(BaseModel):
    """A date annotated with a presentation class (e.g. a holiday marker).

    Attributes:
        date: ISO "YYYY-MM-DD" date string
        class_name: Class applied to the day cell
    """

    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(..., description="ISO date string")
    class_name: str = Field(
        ..., min_length=1, alias="className", description="Class for the day cell"
    )

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        """Validate and canonicalize the ISO date."""
        return str(CalendarDate.from_string(v))

    @property
    def calendar_date(self) -> CalendarDate:
        return CalendarDate.from_string(self.date)
