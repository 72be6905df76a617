"""Pure calendar calculations for the proleptic Gregorian calendar.

Weekdays follow the 0=Sunday .. 6=Saturday convention used by the grids.
"""

from datetime import MAXYEAR, MINYEAR, date

# Days before the first of each month in a non-leap year, indexed by month (1-12)
MONTH_OFFSETS = [0, 0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334]

# Selectable years; one year of margin keeps every grid's filler days representable
MIN_YEAR = MINYEAR + 1
MAX_YEAR = MAXYEAR - 1


def is_supported_year(year: int) -> bool:
    return MIN_YEAR <= year <= MAX_YEAR


def has_grid(year: int, month: int) -> bool:
    """Check that (year, month) and both adjacent months fit in datetime.date."""
    return 1 <= month <= 12 and (MINYEAR, 1) < (year, month) < (MAXYEAR, 12)


def is_leap_year(year: int) -> bool:
    """Check the Gregorian leap-year rule."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in the given month.

    Months before August alternate 31/30 starting with 31 for January,
    months from August on alternate 31/30 starting with 31 for August.
    """
    if month == 2:
        return 29 if is_leap_year(year) else 28
    elif month < 8:
        return 30 + (month % 2)
    return 31 - (month % 2)


def day_of_week(year: int, month: int, day: int) -> int:
    """Return the weekday of a date, 0=Sunday .. 6=Saturday."""
    return date(year, month, day).isoweekday() % 7


def day_of_year(year: int, month: int, day: int) -> int:
    """Return the 1-based day-of-year for the given date."""
    leap_day = 1 if month > 2 and is_leap_year(year) else 0
    return MONTH_OFFSETS[month] + day + leap_day


def week_number(year: int, month: int, day: int) -> int:
    """Return a Monday-based week label for the given date.

    Week 1 is the week holding January 1st unless that day falls on a Friday,
    Saturday or Sunday, in which case those first days belong to week 52 of
    the previous year. The label is monotonic within a year and matches
    ISO-8601 for most dates, but late December days are never rolled over
    into week 1 of the next year.
    """
    jan1 = day_of_week(year, 1, 1)
    jan1_monday_based = (jan1 + 6) % 7

    week = (day_of_year(year, month, day) - 1 + jan1_monday_based) // 7 + 1

    if jan1 == 0 or jan1 >= 5:
        week -= 1
        if week < 1:
            week = 52

    return week


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    if month == 12:
        return year + 1, 1
    return year, month + 1


def month_key(year: int, month: int) -> int:
    """Composite year*100+month used to compare and walk months."""
    return year * 100 + month
