"""Settings CLI commands for Leave Calc.

Manages settings.json - holiday file location, output preferences.
"""

import click
from pathlib import Path

from leavecalc.sdk import (
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_settings_path,
    get_holidays_path,
    get_output_format,
    load_holiday_entries,
    HolidayFileError,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - holidays: custom holiday file path
    - default_output_format: text or json
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective values:")
    click.echo(f"  holidays: {get_holidays_path()}")
    click.echo(f"  default_output_format: {get_output_format()}")


def _describe_holiday_file(path: Path) -> str:
    if not path.exists():
        return f"{path} (not created yet)"
    try:
        count = len(load_holiday_entries(path))
    except HolidayFileError:
        return f"{path} (invalid, see 'leave-calc holidays show')"
    return f"{path} ({count} holiday(s))"


@settings.command("holidays-file")
@click.argument("path", required=False, type=click.Path(dir_okay=False))
@click.option("--clear", is_flag=True, help="Go back to holidays.yaml in the config directory")
def settings_holidays_file(path, clear):
    """Point workday counts at a shared holiday file.

    With no arguments, shows which file is in use. An existing file is
    validated before the setting is saved.

    Examples:
        leave-calc settings holidays-file ~/team/holidays.yaml
        leave-calc settings holidays-file --clear
    """
    if path and clear:
        raise click.UsageError("Give a PATH or --clear, not both.")

    if clear:
        current = load_settings()
        removed = current.pop("holidays", None)
        if removed is not None:
            save_settings(current)
        click.echo("Cleared holidays setting." if removed is not None else "holidays was not set.")
        click.echo(f"Holidays come from: {_describe_holiday_file(get_holidays_path())}")
        return

    if not path:
        source = "custom" if get_setting("holidays") else "default"
        click.echo(f"Holidays come from ({source}): {_describe_holiday_file(get_holidays_path())}")
        return

    holidays_path = Path(path).expanduser().resolve()
    if holidays_path.exists():
        try:
            entries = load_holiday_entries(holidays_path)
        except HolidayFileError as e:
            raise click.ClickException(str(e))
        click.echo(f"Found {len(entries)} holiday(s) in {holidays_path}")

    set_setting("holidays", str(holidays_path))
    click.echo(f"Set holidays: {holidays_path}")


@settings.command("output-format")
@click.argument("fmt", type=click.Choice(["text", "json"]))
def settings_output_format(fmt):
    """Set the default output format for commands that support --format."""
    set_setting("default_output_format", fmt)
    click.echo(f"Set default_output_format: {fmt}")
