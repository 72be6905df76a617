#!/usr/bin/env python3
"""
Date Picker CLI - terminal front end for the calendar engine.

Renders month grids with range highlights and marked dates, and parses or
formats dates with the configured user-facing format.
"""

import os
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from src.datepicker.calendar_math import week_number  # noqa: E402
from src.datepicker.calendar_view import CalendarContext, CalendarView  # noqa: E402
from src.datepicker.config import DatePickerConfig, load_config  # noqa: E402
from src.datepicker.models import CalendarDate, CalendarRange, MarkedDate  # noqa: E402
from src.datepicker.month_view import DayCell, MonthViewModel  # noqa: E402
from src.datepicker.pickers import (  # noqa: E402
    DateRangePicker,
    PickerOptions,
    build_date_pattern,
    parse_date_text,
)
from src.datepicker.translations import get_translation  # noqa: E402

# Respect NO_COLOR env var for plain output in pipes and CI logs
use_rich = os.getenv("NO_COLOR") is None
console = Console(
    no_color=not use_rich,
    highlight=False,
)
app = typer.Typer(
    name="datepicker",
    help="📅 Date Picker - calendar grids, range highlights and date formats",
    rich_markup_mode="rich",
)

DAY_ABBR = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MONTH_NAMES = [
    "",
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def setup_environment(verbose: bool = False) -> None:
    """Set up environment variables for CLI usage."""
    load_dotenv()

    log_level = "DEBUG" if verbose else "ERROR"  # Only show errors unless verbose
    os.environ["LOG_LEVEL"] = log_level

    from src.utils.logger import datepicker_logger

    datepicker_logger.get_logger().setLevel(log_level)


def handle_cli_error(e: Exception, verbose: bool = False) -> None:
    """Handle CLI errors with user-friendly messages."""
    console.print(f"[red]❌ Error: {escape(str(e))}[/red]")

    if verbose:
        console.print("\n[dim]Full stack trace:[/dim]")
        console.print_exception()
    else:
        console.print("[dim]💡 Use --verbose/-v to see full error details[/dim]")


def create_view(
    config: DatePickerConfig,
    start_of_week: Optional[int] = None,
    show_other_months: Optional[bool] = None,
) -> CalendarView:
    """Create a calendar view from configuration plus CLI overrides."""
    updates = {}
    if start_of_week is not None:
        updates["start_of_week"] = start_of_week
    if show_other_months is not None:
        updates["show_other_months"] = show_other_months
    if updates:
        config = DatePickerConfig.model_validate({**config.model_dump(), **updates})
    return CalendarView(CalendarContext.from_config(config))


def parse_marked(values: list[str]) -> list[MarkedDate]:
    """Parse "YYYY-MM-DD:class" arguments."""
    records = []
    for value in values:
        iso, _, class_name = value.partition(":")
        records.append(MarkedDate(date=iso, class_name=class_name or "marked"))
    return records


def cell_markup(cell: DayCell, show_other_months: bool) -> str:
    """Project a day cell's state into rich markup."""
    if not cell.in_month and not show_other_months:
        return ""

    text = f"{cell.day:>2}"
    styles = []
    if not cell.in_month or cell.disabled:
        styles.append("dim")
    if cell.highlights:
        styles.append("reverse")
    if cell.range_start or cell.range_end or cell.today:
        styles.append("bold")
    if cell.today:
        styles.append("cyan")
    if cell.marked:
        styles.append("underline")
    elif cell.labels:
        styles.append("green")
    if cell.is_weekend and not cell.highlights:
        styles.append("magenta")

    if not styles:
        return text
    style = " ".join(styles)
    return f"[{style}]{text}[/{style}]"


def display_month(view: MonthViewModel, show_other_months: bool = False) -> None:
    """Display one month grid with week labels."""
    table = Table(
        title=f"{MONTH_NAMES[view.month]} {view.year}",
        show_header=True,
        header_style="bold magenta",
        box=None,
    )
    table.add_column("Wk", style="dim", justify="right")
    for i in range(7):
        table.add_column(DAY_ABBR[(i + view.start_of_week) % 7], justify="right")

    for label, row in zip(view.week_labels(), view.weeks()):
        table.add_row(str(label), *(cell_markup(cell, show_other_months) for cell in row))

    console.print(table)


@app.command()
def month(
    year: Annotated[int, typer.Argument(help="Year to display")],
    month_number: Annotated[int, typer.Argument(metavar="MONTH", help="Month to display (1-12)")],
    date_range: Annotated[
        Optional[str],
        typer.Option("--range", "-r", help="Range to highlight, in the configured format"),
    ] = None,
    marked: Annotated[
        Optional[list[str]],
        typer.Option("--marked", "-m", help="Marked date as YYYY-MM-DD:class"),
    ] = None,
    start_of_week: Annotated[
        Optional[int],
        typer.Option("--start-of-week", "-w", help="First weekday column, 0=Sunday"),
    ] = None,
    other_months: Annotated[
        bool, typer.Option("--other-months", "-o", help="Show filler days of adjacent months")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show detailed logs and full error traces")
    ] = False,
) -> None:
    """
    🗓️  Show month grids, optionally with a highlighted range and marked dates.
    """
    setup_environment(verbose)

    try:
        config = load_config()
        view = create_view(config, start_of_week, other_months or None)
        if marked:
            view.set_marked_dates(parse_marked(marked))

        views = view.show_month(year, month_number)

        selected: Optional[CalendarRange] = None
        if date_range:
            picker = DateRangePicker(PickerOptions.from_config(config), view, date_range)
            if picker.value is None:
                console.print(f"[yellow]⚠️  Could not parse range: {date_range}[/yellow]")
            else:
                selected = picker.value
                view.mark_date_range(selected, "selected", select_in_header=True)

        for month_view in views:
            display_month(month_view, view.context.show_other_months)

        if selected is not None:
            days_text = view.context.translation.num_days(selected.num_days())
            console.print(
                Panel(
                    f"{selected.start} → {selected.end} ({days_text})",
                    title="📌 Selected range",
                    border_style="cyan",
                )
            )

    except Exception as e:
        handle_cli_error(e, verbose)
        raise typer.Exit(1) from e


@app.command()
def parse(
    text: Annotated[str, typer.Argument(help="Date text in the configured format")],
    date_format: Annotated[
        Optional[str], typer.Option("--format", "-f", help="Date format, e.g. dd/mm/yyyy")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """
    🔍 Parse a formatted date and print it as YYYY-MM-DD.
    """
    setup_environment(verbose)

    try:
        pattern = build_date_pattern(date_format or load_config().date_format)
    except ValueError as e:
        handle_cli_error(e, verbose)
        raise typer.Exit(1) from e

    parsed = parse_date_text(pattern, text)
    if parsed is None:
        console.print(f"[red]❌ '{escape(text)}' does not match {pattern.template}[/red]")
        raise typer.Exit(1)

    console.print(str(parsed))


@app.command("format")
def format_date(
    iso_date: Annotated[str, typer.Argument(metavar="DATE", help="Date as YYYY-MM-DD")],
    date_format: Annotated[
        Optional[str], typer.Option("--format", "-f", help="Date format, e.g. dd/mm/yyyy")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """
    ✏️  Format a YYYY-MM-DD date with the configured format.
    """
    setup_environment(verbose)

    try:
        target = CalendarDate.from_string(iso_date)
        pattern = build_date_pattern(date_format or load_config().date_format)
    except ValueError as e:
        handle_cli_error(e, verbose)
        raise typer.Exit(1) from e

    console.print(pattern.fill_date(target))


@app.command()
def days(
    start: Annotated[str, typer.Argument(help="First date as YYYY-MM-DD")],
    end: Annotated[str, typer.Argument(help="Last date as YYYY-MM-DD")],
    locale: Annotated[
        Optional[str], typer.Option("--locale", "-l", help="Locale for the day count text")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """
    🔢 Count the days of an inclusive range.
    """
    setup_environment(verbose)

    try:
        selected = CalendarRange(CalendarDate.from_string(start), CalendarDate.from_string(end))
        translation = get_translation(locale or load_config().locale)
    except ValueError as e:
        handle_cli_error(e, verbose)
        raise typer.Exit(1) from e

    console.print(translation.num_days(selected.num_days()))


@app.command()
def week(
    iso_date: Annotated[str, typer.Argument(metavar="DATE", help="Date as YYYY-MM-DD")],
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """
    📆 Print the week label of a date.
    """
    setup_environment(verbose)

    try:
        target = CalendarDate.from_string(iso_date)
    except ValueError as e:
        handle_cli_error(e, verbose)
        raise typer.Exit(1) from e

    console.print(str(week_number(target.year, target.month, target.day)))


@app.command("config")
def show_config() -> None:
    """
    ⚙️  Show the configuration read from the environment.
    """
    setup_environment()

    try:
        config = load_config()
    except ValueError as e:
        handle_cli_error(e)
        raise typer.Exit(1) from e

    config_table = Table(show_header=False, box=None, padding=(0, 1))
    config_table.add_column("Setting", style="cyan")
    config_table.add_column("Value", style="white")

    config_table.add_row("Date format", config.date_format)
    config_table.add_row("Range separator", repr(config.separator))
    config_table.add_row("Start of week", DAY_ABBR[config.start_of_week])
    config_table.add_row("Locale", config.locale)
    config_table.add_row("Months shown", str(config.month_span))
    config_table.add_row("Weekends disabled", str(config.disable_weekends))
    config_table.add_row("Other months shown", str(config.show_other_months))

    console.print(Panel(config_table, title="📋 Configuration", border_style="cyan"))


if __name__ == "__main__":
    app()
