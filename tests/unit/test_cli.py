"""Tests for the leave-calc CLI.

Each test runs against an isolated config directory (LEAVE_CALC_CONFIG_PATH).
"""

import json

import pytest
from click.testing import CliRunner

from leavecalc.cli.__main__ import cli


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Empty config directory for each test."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("LEAVE_CALC_CONFIG_PATH", str(config_dir))
    return {"config_dir": config_dir, "tmp": tmp_path}


@pytest.fixture
def with_holiday(isolated_env):
    """Config with Wednesday 2024-03-06 as a holiday."""
    (isolated_env["config_dir"] / "holidays.yaml").write_text("- {date: '2024-03-06', name: Test Day}\n")
    return isolated_env


def run(*args):
    return CliRunner().invoke(cli, list(args))


class TestDateCommands:
    """workdays, add-workdays, next-workday, end-date."""

    def test_workdays(self, isolated_env):
        result = run("workdays", "2024-03-04", "2024-03-08")
        assert result.exit_code == 0
        assert result.output.strip() == "5"

    def test_workdays_uses_configured_holidays(self, with_holiday):
        assert run("workdays", "2024-03-04", "2024-03-08").output.strip() == "4"
        assert run("workdays", "2024-03-04", "2024-03-08", "--no-holidays").output.strip() == "5"

    def test_workdays_extra_holiday(self, isolated_env):
        result = run("workdays", "2024-03-04", "2024-03-08", "--holiday", "2024-03-07")
        assert result.output.strip() == "4"

    def test_workdays_lenient_date_input(self, isolated_env):
        assert run("workdays", "2024/3/4", "8/3/2024").output.strip() == "5"

    def test_workdays_json(self, isolated_env):
        result = run("workdays", "2024-03-09", "2024-03-10", "--format", "json")
        assert json.loads(result.output) == {"start": "2024-03-09", "end": "2024-03-10", "workdays": 0}

    def test_bad_date_is_usage_error(self, isolated_env):
        result = run("workdays", "someday", "2024-03-08")
        assert result.exit_code == 2
        assert "Invalid start date 'someday'" in result.output

    def test_malformed_holiday_file_reported(self, isolated_env):
        (isolated_env["config_dir"] / "holidays.yaml").write_text("- nope\n")
        result = run("workdays", "2024-03-04", "2024-03-08")
        assert result.exit_code == 1
        assert "Invalid holiday file" in result.output

    def test_add_workdays(self, isolated_env):
        assert run("add-workdays", "2024-03-08", "1").output.strip() == "2024-03-11"

    def test_next_workday_with_holiday(self, isolated_env):
        result = run("next-workday", "2024-03-08", "--holiday", "2024-03-11")
        assert result.output.strip() == "2024-03-12"

    def test_end_date(self, with_holiday):
        assert run("end-date", "2024-03-04", "5").output.strip() == "2024-03-11"

    def test_default_format_from_settings(self, isolated_env):
        assert run("settings", "output-format", "json").exit_code == 0
        result = run("next-workday", "2024-03-08")
        assert json.loads(result.output)["next_workday"] == "2024-03-11"


class TestLeaveReconcile:
    """leave reconcile."""

    def test_text_output(self, isolated_env):
        result = run("leave", "reconcile", "--start", "2024-03-04", "--end", "2024-03-08",
                     "--annual", "2", "--off", "4")

        assert result.exit_code == 0
        assert "Required workdays: 5" in result.output
        assert "Selected:          5 (annual 2, off 3)" in result.output
        assert "Resume work on:    2024-03-11" in result.output
        assert "Balance change: annual +2, off +3" in result.output

    def test_edit_shows_refund(self, isolated_env):
        result = run("leave", "reconcile", "--start", "2024-03-04", "--end", "2024-03-06",
                     "--annual", "1", "--off", "2", "--old-annual", "2", "--old-off", "3")

        assert "Balance change: annual -1, off -1" in result.output

    def test_too_few_advisory(self, isolated_env):
        result = run("leave", "reconcile", "--start", "2024-03-04", "--end", "2024-03-08",
                     "--annual", "1")

        assert "selected_too_few: Your date range needs 5 day(s), but you selected 1." in result.output
        assert "Mismatch:          -4" in result.output

    def test_json_weekend_range(self, isolated_env):
        result = run("leave", "reconcile", "--start", "2024-03-09", "--end", "2024-03-10",
                     "--annual", "2", "--format", "json")

        out = json.loads(result.output)
        assert out["required_days"] == 0
        assert out["prompt"]["type"] == "invalid_range"
        assert out["resume_work_on"] is None
        assert out["next_req"]["annual_days"] == 0

    def test_json_respects_holidays(self, with_holiday):
        result = run("leave", "reconcile", "--start", "2024-03-04", "--end", "2024-03-08",
                     "--annual", "4", "--format", "json")

        out = json.loads(result.output)
        assert out["required_days"] == 4
        assert out["prompt"] is None
        assert out["resume_work_on"] == "2024-03-11"

    def test_missing_required_option(self, isolated_env):
        result = run("leave", "reconcile", "--start", "2024-03-04")
        assert result.exit_code == 2


class TestLeaveCheckAndBalance:
    """leave check and leave apply-balance."""

    def test_check_match(self, isolated_env):
        result = run("leave", "check", "--start", "2024-03-04", "--end", "2024-03-08",
                     "--annual", "2.5", "--off", "2.5")
        assert result.exit_code == 0
        assert "Mismatch: +0" in result.output

    def test_check_mismatch_exits_nonzero(self, isolated_env):
        result = run("leave", "check", "--start", "2024-03-04", "--end", "2024-03-08",
                     "--annual", "3", "--off", "3", "--format", "json")
        assert result.exit_code == 1
        assert json.loads(result.output)["mismatch"] == 1.0

    def test_apply_balance(self, isolated_env):
        result = run("leave", "apply-balance", "--annual-balance", "10", "--off-balance", "2",
                     "--annual-delta", "3", "--off-delta", "-1", "--format", "json")

        assert json.loads(result.output) == {
            "before": {"annual_leave": 10, "off_days": 2},
            "after": {"annual_leave": 7, "off_days": 3},
        }

    def test_apply_balance_defaults(self, isolated_env):
        result = run("leave", "apply-balance", "--annual-delta", "1")
        assert "Annual leave: 21 -> 20" in result.output
        assert "Off days:     0 -> 0" in result.output


class TestHolidaysCommands:
    """holidays add/show/remove/import."""

    def test_add_and_show(self, isolated_env):
        assert run("holidays", "add", "2024-12-25", "Christmas").exit_code == 0
        assert run("holidays", "add", "2025-01-01").exit_code == 0

        result = run("holidays", "show")
        assert "2024-12-25  Christmas" in result.output
        assert "2025-01-01  Holiday" in result.output

        result = run("holidays", "show", "--year", "2025", "--format", "json")
        assert json.loads(result.output) == [{"date": "2025-01-01", "name": "Holiday"}]

    def test_show_empty(self, isolated_env):
        result = run("holidays", "show")
        assert "No holidays configured" in result.output

    def test_show_bad_year(self, isolated_env):
        assert run("holidays", "show", "--year", "24").exit_code == 2

    def test_remove(self, isolated_env):
        run("holidays", "add", "2024-12-25", "Christmas")

        result = run("holidays", "remove", "2024-12-25")
        assert result.exit_code == 0
        assert "Removed 1 holiday(s)" in result.output

        result = run("holidays", "remove", "2024-12-25")
        assert result.exit_code == 1
        assert "No holiday on 2024-12-25" in result.output

    def test_import(self, isolated_env):
        source = isolated_env["tmp"] / "list.yaml"
        source.write_text("- 2024-12-25\n- 2024-12-26\n")

        result = run("holidays", "import", str(source))
        assert result.exit_code == 0
        assert "2 holiday(s)" in result.output
        assert run("workdays", "2024-12-23", "2024-12-27").output.strip() == "3"

    def test_import_bad_file(self, isolated_env):
        source = isolated_env["tmp"] / "bad.yaml"
        source.write_text("- {day: 2024-12-25}\n")

        result = run("holidays", "import", str(source))
        assert result.exit_code == 1
        assert "Invalid holiday file" in result.output


class TestSettingsCommands:
    """settings show / holidays-file."""

    def test_show_defaults(self, isolated_env):
        result = run("settings", "show")
        assert result.exit_code == 0
        assert "No settings configured" in result.output
        assert "default_output_format: text" in result.output

    def test_custom_holidays_file(self, isolated_env):
        custom = isolated_env["tmp"] / "team.yaml"
        custom.write_text("- 2024-03-06\n")

        assert run("settings", "holidays-file", str(custom)).exit_code == 0
        assert run("holidays", "path").output.strip() == str(custom.resolve())
        assert run("workdays", "2024-03-04", "2024-03-08").output.strip() == "4"

        result = run("settings", "holidays-file", "--clear")
        assert "Cleared holidays setting." in result.output
        assert run("workdays", "2024-03-04", "2024-03-08").output.strip() == "5"

    def test_invalid_holidays_file_not_saved(self, isolated_env):
        bad = isolated_env["tmp"] / "bad.yaml"
        bad.write_text("- {day: 2024-12-25}\n")

        result = run("settings", "holidays-file", str(bad))
        assert result.exit_code == 1
        assert "Invalid holiday file" in result.output
        assert not (isolated_env["config_dir"] / "settings.json").exists()

    def test_holidays_file_reports_current(self, isolated_env):
        result = run("settings", "holidays-file")
        assert "Holidays come from (default):" in result.output
        assert "(not created yet)" in result.output

        run("holidays", "add", "2024-12-25")
        assert "(1 holiday(s))" in run("settings", "holidays-file").output

    def test_holidays_file_path_and_clear_conflict(self, isolated_env):
        result = run("settings", "holidays-file", "x.yaml", "--clear")
        assert result.exit_code == 2


class TestCalendarEnd:
    """Commands near 9999-12-31, the last representable date."""

    def test_workdays_to_last_day(self, isolated_env):
        assert run("workdays", "9999-12-27", "9999-12-31").output.strip() == "5"

    def test_reconcile_to_last_day(self, isolated_env):
        result = run("leave", "reconcile", "--start", "9999-12-27", "--end", "9999-12-31",
                     "--annual", "5", "--format", "json")

        assert result.exit_code == 0
        out = json.loads(result.output)
        assert out["required_days"] == 5
        assert out["resume_work_on"] is None

    def test_next_workday_past_last_day(self, isolated_env):
        result = run("next-workday", "9999-12-31", "--format", "json")
        assert result.exit_code == 0
        assert json.loads(result.output)["next_workday"] == ""
