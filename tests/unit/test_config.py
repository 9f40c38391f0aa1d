"""Tests for settings and holiday file handling.

Uses isolated directories via tmp_path and LEAVE_CALC_CONFIG_PATH
to avoid touching real configuration.
"""

import json

import pytest

from leavecalc.sdk.config import (
    ConfigNotFoundError,
    HolidayFileError,
    add_holiday,
    get_config_dir,
    get_holidays_path,
    get_output_format,
    import_holidays,
    load_holiday_entries,
    load_holidays,
    load_settings,
    remove_holiday,
    set_setting,
)


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Point the SDK at an empty config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("LEAVE_CALC_CONFIG_PATH", str(config_dir))
    return {"config_dir": config_dir, "tmp": tmp_path}


class TestConfigDir:
    """Config directory resolution."""

    def test_env_var_wins(self, isolated_env):
        assert get_config_dir() == isolated_env["config_dir"]

    def test_xdg_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("LEAVE_CALC_CONFIG_PATH", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_dir() == tmp_path / "leave-calc"


class TestSettings:
    """settings.json access."""

    def test_missing_settings_is_empty(self, isolated_env):
        assert load_settings() == {}

    def test_set_setting_persists(self, isolated_env):
        set_setting("default_output_format", "json")
        saved = json.loads((isolated_env["config_dir"] / "settings.json").read_text())
        assert saved == {"default_output_format": "json"}
        assert get_output_format() == "json"

    def test_unknown_output_format_falls_back_to_text(self, isolated_env):
        set_setting("default_output_format", "xml")
        assert get_output_format() == "text"


class TestHolidayFile:
    """Loading and validating holidays.yaml."""

    def test_no_file_means_no_holidays(self, isolated_env):
        assert load_holidays() == []

    def test_require_exists_raises(self, isolated_env):
        with pytest.raises(ConfigNotFoundError):
            get_holidays_path(require_exists=True)

    def test_bare_list_with_unquoted_dates(self, isolated_env):
        (isolated_env["config_dir"] / "holidays.yaml").write_text(
            "- 2024-12-25\n"
            "- date: 2024-01-01\n"
            "  name: New Year\n"
        )
        entries = load_holiday_entries()

        assert [(e.date, e.name) for e in entries] == [
            ("2024-01-01", "New Year"),
            ("2024-12-25", "Holiday"),
        ]
        assert load_holidays() == ["2024-01-01", "2024-12-25"]

    def test_mapping_with_holidays_key(self, isolated_env):
        (isolated_env["config_dir"] / "holidays.yaml").write_text(
            "holidays:\n"
            "  - date: '2024-06-18'\n"
            "    name: National Day\n"
        )
        assert load_holidays() == ["2024-06-18"]

    def test_duplicates_collapse(self, isolated_env):
        (isolated_env["config_dir"] / "holidays.yaml").write_text(
            "- {date: '2024-12-25', name: Christmas}\n"
            "- {date: '2024-12-25', name: Christmas}\n"
            "- {date: '2024-12-25', name: Christmas Day}\n"
        )
        assert len(load_holiday_entries()) == 2
        assert load_holidays() == ["2024-12-25"]

    def test_empty_file(self, isolated_env):
        (isolated_env["config_dir"] / "holidays.yaml").write_text("")
        assert load_holidays() == []

    @pytest.mark.parametrize("content", [
        "- 2024-13-01\n",
        "- {date: '2024-12-25', nmae: Typo}\n",
        "- [unclosed\n",
        "holidays: 5\n",
    ])
    def test_malformed_file_raises(self, isolated_env, content):
        (isolated_env["config_dir"] / "holidays.yaml").write_text(content)
        with pytest.raises(HolidayFileError):
            load_holiday_entries()

    def test_custom_json_path_from_settings(self, isolated_env):
        custom = isolated_env["tmp"] / "team.json"
        custom.write_text(json.dumps([{"date": "2024-05-01", "name": "Labour Day"}]))
        set_setting("holidays", str(custom))

        assert get_holidays_path() == custom
        assert load_holidays() == ["2024-05-01"]

    def test_custom_path_missing_raises_when_required(self, isolated_env):
        set_setting("holidays", str(isolated_env["tmp"] / "nope.yaml"))
        with pytest.raises(ConfigNotFoundError):
            get_holidays_path(require_exists=True)


class TestHolidayEdits:
    """add_holiday, remove_holiday, import_holidays."""

    def test_add_creates_file(self, isolated_env):
        entries = add_holiday("2024-12-25", "Christmas")

        assert [(e.date, e.name) for e in entries] == [("2024-12-25", "Christmas")]
        assert (isolated_env["config_dir"] / "holidays.yaml").exists()

    def test_add_is_idempotent(self, isolated_env):
        add_holiday("2024-12-25", "Christmas")
        entries = add_holiday("2024-12-25", "Christmas")
        assert len(entries) == 1

    def test_add_invalid_date_raises(self, isolated_env):
        with pytest.raises(HolidayFileError):
            add_holiday("2024-02-30")

    def test_remove(self, isolated_env):
        add_holiday("2024-12-25", "Christmas")
        add_holiday("2024-12-26", "Boxing Day")

        assert remove_holiday("2024-12-25") == 1
        assert load_holidays() == ["2024-12-26"]
        assert remove_holiday("2024-12-25") == 0

    def test_import_merges(self, isolated_env):
        add_holiday("2024-12-25", "Christmas")
        source = isolated_env["tmp"] / "extra.yaml"
        source.write_text("- 2024-01-01\n- {date: '2024-12-25', name: Christmas}\n")

        entries = import_holidays(source)

        assert [e.date for e in entries] == ["2024-01-01", "2024-12-25"]

    def test_import_replace(self, isolated_env):
        add_holiday("2024-12-25", "Christmas")
        source = isolated_env["tmp"] / "extra.json"
        source.write_text(json.dumps(["2025-01-01"]))

        import_holidays(source, replace=True)

        assert load_holidays() == ["2025-01-01"]

    def test_import_malformed_leaves_file_alone(self, isolated_env):
        add_holiday("2024-12-25", "Christmas")
        source = isolated_env["tmp"] / "bad.yaml"
        source.write_text("- not-a-date\n")

        with pytest.raises(HolidayFileError):
            import_holidays(source, replace=True)
        assert load_holidays() == ["2024-12-25"]
