"""Unit tests for CLI module."""

import os
import re
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from src.cli.main import app, handle_cli_error, parse_marked, setup_environment
from src.datepicker.models import MarkedDate

runner = CliRunner()


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text."""
    ansi_escape = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")
    return ansi_escape.sub("", text)


@pytest.fixture(autouse=True)
def clean_environment():
    """Run every CLI test with an empty environment and no .env loading."""
    with (
        patch.dict(os.environ, {}, clear=True),
        patch("src.cli.main.load_dotenv"),
    ):
        yield


class TestCliUtilityFunctions:
    """Test cases for CLI utility functions."""

    def test_setup_environment_default(self):
        """Test default environment setup."""
        setup_environment()

        assert os.environ.get("LOG_LEVEL") == "ERROR"

    def test_setup_environment_verbose(self):
        """Test verbose environment setup."""
        setup_environment(verbose=True)

        assert os.environ.get("LOG_LEVEL") == "DEBUG"

    def test_parse_marked(self):
        """Test parsing --marked values."""
        assert parse_marked(["2024-12-25:holiday", "2024-12-31"]) == [
            MarkedDate(date="2024-12-25", class_name="holiday"),
            MarkedDate(date="2024-12-31", class_name="marked"),
        ]

    def test_handle_cli_error(self):
        """Test error display."""
        with patch("src.cli.main.console") as mock_console:
            handle_cli_error(ValueError("boom"))

            printed = mock_console.print.call_args_list[0][0][0]
            assert "Error: boom" in printed


class TestParseAndFormatCommands:
    """Test the parse and format commands."""

    def test_parse_with_format(self):
        """Test parsing a formatted date."""
        result = runner.invoke(app, ["parse", "07/03/2024", "--format", "dd/mm/yyyy"])

        assert result.exit_code == 0
        assert "2024-03-07" in strip_ansi(result.stdout)

    def test_parse_uses_configured_format(self):
        """Test DATEPICKER_FORMAT."""
        with patch.dict(os.environ, {"DATEPICKER_FORMAT": "dd-mm-yyyy"}):
            result = runner.invoke(app, ["parse", "07-03-2024"])

        assert result.exit_code == 0
        assert "2024-03-07" in strip_ansi(result.stdout)

    def test_parse_mismatch(self):
        """Test text that does not match the format."""
        result = runner.invoke(app, ["parse", "March 7", "-f", "dd/mm/yyyy"])

        assert result.exit_code == 1
        assert "does not match" in strip_ansi(result.stdout)

    def test_format(self):
        """Test formatting an ISO date."""
        result = runner.invoke(app, ["format", "2024-03-07", "-f", "dd/mm/yyyy"])

        assert result.exit_code == 0
        assert "07/03/2024" in strip_ansi(result.stdout)

    def test_format_invalid_date(self):
        """Test formatting a date that does not exist."""
        result = runner.invoke(app, ["format", "2024-02-30"])

        assert result.exit_code == 1
        assert "Error" in strip_ansi(result.stdout)


class TestDaysAndWeekCommands:
    """Test the days and week commands."""

    def test_days_leap_year(self):
        """Test counting a whole leap year."""
        result = runner.invoke(app, ["days", "2024-01-01", "2024-12-31"])

        assert result.exit_code == 0
        assert "366 days" in strip_ansi(result.stdout)

    def test_days_reversed_dutch(self):
        """Test reversed input and a Dutch day count."""
        result = runner.invoke(app, ["days", "2024-02-02", "2024-01-30", "--locale", "nl"])

        assert result.exit_code == 0
        assert "4 dagen" in strip_ansi(result.stdout)

    def test_week(self):
        """Test the week label command."""
        result = runner.invoke(app, ["week", "2024-01-08"])

        assert result.exit_code == 0
        assert strip_ansi(result.stdout).strip() == "2"


class TestMonthCommand:
    """Test the month grid command."""

    def test_month_shows_two_months(self):
        """Test the default two-month display."""
        result = runner.invoke(app, ["month", "2024", "1"])

        output = strip_ansi(result.stdout)
        assert result.exit_code == 0
        assert "January 2024" in output
        assert "February 2024" in output

    def test_month_with_range(self):
        """Test highlighting a range."""
        result = runner.invoke(
            app, ["month", "2024", "1", "--range", "2024-01-30 t/m 2024-02-02"]
        )

        output = strip_ansi(result.stdout)
        assert result.exit_code == 0
        assert "Selected range" in output
        assert "2024-01-30 → 2024-02-02 (4 days)" in output

    def test_month_with_bad_range(self):
        """Test an unparseable range."""
        result = runner.invoke(app, ["month", "2024", "1", "--range", "soon"])

        assert result.exit_code == 0
        assert "Could not parse range" in strip_ansi(result.stdout)

    def test_month_invalid_month(self):
        """Test an out-of-range month number."""
        result = runner.invoke(app, ["month", "2024", "13"])

        assert result.exit_code == 1


class TestConfigCommand:
    """Test the config command."""

    def test_show_config(self):
        """Test showing configuration from the environment."""
        with patch.dict(os.environ, {"DATEPICKER_START_OF_WEEK": "1"}):
            result = runner.invoke(app, ["config"])

        output = strip_ansi(result.stdout)
        assert result.exit_code == 0
        assert "yyyy-mm-dd" in output
        assert "Mon" in output

    def test_show_config_invalid(self):
        """Test an invalid environment value."""
        with patch.dict(os.environ, {"DATEPICKER_MONTH_SPAN": "many"}):
            result = runner.invoke(app, ["config"])

        assert result.exit_code == 1


class TestCommandErrorHandling:
    """Test that configuration and format errors are reported, not raised."""

    def test_parse_invalid_environment(self):
        """Test parse with a non-numeric start of week."""
        with patch.dict(os.environ, {"DATEPICKER_START_OF_WEEK": "abc"}):
            result = runner.invoke(app, ["parse", "2024-01-02"])

        assert result.exit_code == 1
        assert not isinstance(result.exception, ValueError)
        assert "DATEPICKER_START_OF_WEEK must be a valid integer" in strip_ansi(result.stdout)

    def test_parse_uncompilable_format(self):
        """Test parse with a format that is not a valid pattern."""
        result = runner.invoke(app, ["parse", "2024-01-02", "--format", "yyyy{x:(}mm-dd"])

        assert result.exit_code == 1
        assert "Cannot compile pattern" in strip_ansi(result.stdout)

    def test_format_uncompilable_format(self):
        """Test format with a format that is not a valid pattern."""
        result = runner.invoke(app, ["format", "2024-01-02", "--format", "yyyy{x:(}mm-dd"])

        assert result.exit_code == 1
        assert not isinstance(result.exception, ValueError)
        assert "Cannot compile pattern" in strip_ansi(result.stdout)

    def test_format_invalid_environment(self):
        """Test format with an invalid configured format."""
        with patch.dict(os.environ, {"DATEPICKER_FORMAT": "yyyy-mm"}):
            result = runner.invoke(app, ["format", "2024-01-02"])

        assert result.exit_code == 1
        assert "Error" in strip_ansi(result.stdout)

    def test_days_invalid_environment(self):
        """Test days with a non-numeric month span."""
        with patch.dict(os.environ, {"DATEPICKER_MONTH_SPAN": "two"}):
            result = runner.invoke(app, ["days", "2024-01-01", "2024-01-03"])

        assert result.exit_code == 1
        assert not isinstance(result.exception, ValueError)
        assert "DATEPICKER_MONTH_SPAN must be a valid integer" in strip_ansi(result.stdout)
