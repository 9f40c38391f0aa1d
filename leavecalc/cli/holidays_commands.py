"""Holiday list CLI commands.

Manages the holiday file (holidays.yaml) that workday counts skip.
"""

import json
from pathlib import Path

import click

from leavecalc.sdk import (
    HolidayFileError,
    add_holiday,
    get_holidays_path,
    import_holidays,
    load_holiday_entries,
    remove_holiday,
)

from .dates_commands import format_option, parse_date_arg, resolve_format


@click.group()
def holidays():
    """Manage the public holiday list (holidays.yaml).

    Dates listed here are treated as non-workdays by every command.
    """
    pass


@holidays.command("show")
@click.option("--year", type=str, default=None, help="Only show holidays in this year.")
@format_option
def holidays_show(year, output_format):
    """List configured holidays."""
    if year and (not year.isdigit() or len(year) != 4):
        raise click.BadParameter(f"Invalid year '{year}'. Must be 4 digits.")

    try:
        entries = load_holiday_entries()
    except HolidayFileError as e:
        raise click.ClickException(str(e))

    if year:
        entries = [e for e in entries if e.date.startswith(f"{year}-")]

    if resolve_format(output_format) == "json":
        click.echo(json.dumps([e.model_dump() for e in entries], indent=2))
        return

    if not entries:
        click.echo(f"No holidays configured ({get_holidays_path()})")
        return

    for entry in entries:
        click.echo(f"{entry.date}  {entry.name}")


@holidays.command("add")
@click.argument("date")
@click.argument("name", required=False, default="Holiday")
def holidays_add(date, name):
    """Add DATE (YYYY-MM-DD) to the holiday list, with an optional NAME."""
    date_iso = parse_date_arg(date, "date")
    try:
        entries = add_holiday(date_iso, name)
    except HolidayFileError as e:
        raise click.ClickException(str(e))

    click.echo(f"Added {date_iso} ({name}). {len(entries)} holiday(s) configured.")


@holidays.command("remove")
@click.argument("date")
def holidays_remove(date):
    """Remove every holiday on DATE."""
    date_iso = parse_date_arg(date, "date")
    try:
        removed = remove_holiday(date_iso)
    except HolidayFileError as e:
        raise click.ClickException(str(e))

    if not removed:
        raise click.ClickException(f"No holiday on {date_iso}.")
    click.echo(f"Removed {removed} holiday(s) on {date_iso}.")


@holidays.command("import")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--replace", is_flag=True, help="Replace the current list instead of merging.")
def holidays_import(source, replace):
    """Import holidays from a YAML or JSON file.

    SOURCE holds a list of dates, or of {date, name} entries.
    """
    try:
        entries = import_holidays(Path(source), replace=replace)
    except HolidayFileError as e:
        raise click.ClickException(str(e))

    action = "Replaced with" if replace else "Merged into"
    click.echo(f"{action} {get_holidays_path()}: {len(entries)} holiday(s).")


@holidays.command("path")
def holidays_path():
    """Print the holiday file path in use."""
    click.echo(str(get_holidays_path()))
