"""Workday date CLI commands.

Thin wrappers over leavecalc.sdk.dates. Holidays come from the configured
holiday file unless --no-holidays is given; --holiday adds extra dates.
"""

import json

import click

from leavecalc.sdk import (
    HolidayFileError,
    add_workdays_iso,
    coerce_iso,
    end_date_for_workday_count,
    get_output_format,
    load_holidays,
    next_workday_iso,
    workdays_between_inclusive,
)


def parse_date_arg(value: str, label: str) -> str:
    """Normalize a command-line date, raising BadParameter if unreadable."""
    iso = coerce_iso(value)
    if not iso:
        raise click.BadParameter(f"Invalid {label} '{value}'. Use YYYY-MM-DD.")
    return iso


def resolve_holidays(use_configured: bool, extra: tuple) -> list:
    """Configured holiday dates plus any --holiday values."""
    dates = set()
    if use_configured:
        try:
            dates.update(load_holidays())
        except HolidayFileError as e:
            raise click.ClickException(str(e))
    for value in extra:
        dates.add(parse_date_arg(value, "holiday"))
    return sorted(dates)


def resolve_format(output_format):
    return output_format or get_output_format()


def holiday_options(f):
    """Shared --holidays/--no-holidays and --holiday options."""
    f = click.option("--holiday", "extra_holidays", multiple=True,
                     help="Extra holiday date (YYYY-MM-DD). Repeatable.")(f)
    f = click.option("--holidays/--no-holidays", "use_holidays", default=True,
                     help="Skip dates from the configured holiday file (default: on).")(f)
    return f


def format_option(f):
    return click.option("--format", "output_format", type=click.Choice(["text", "json"]),
                        default=None, help="Output format (default: settings default_output_format).")(f)


def _emit(output_format, payload: dict, text: str):
    if resolve_format(output_format) == "json":
        click.echo(json.dumps(payload, indent=2))
    else:
        click.echo(text)


@click.command("workdays")
@click.argument("start")
@click.argument("end")
@holiday_options
@format_option
def workdays(start, end, use_holidays, extra_holidays, output_format):
    """Count workdays from START to END inclusive.

    Weekends and holidays are not counted. Prints 0 when END is before START.

    \b
    Examples:
      leave-calc workdays 2024-03-04 2024-03-08
      leave-calc workdays 2024-03-04 2024-03-08 --holiday 2024-03-06
    """
    start_iso = parse_date_arg(start, "start date")
    end_iso = parse_date_arg(end, "end date")
    holidays = resolve_holidays(use_holidays, extra_holidays)

    count = workdays_between_inclusive(start_iso, end_iso, holidays)
    _emit(output_format, {"start": start_iso, "end": end_iso, "workdays": count}, str(count))


@click.command("add-workdays")
@click.argument("start")
@click.argument("count", type=int)
@holiday_options
@format_option
def add_workdays(start, count, use_holidays, extra_holidays, output_format):
    """Print the date COUNT workdays after START (START itself not counted)."""
    start_iso = parse_date_arg(start, "start date")
    holidays = resolve_holidays(use_holidays, extra_holidays)

    result = add_workdays_iso(start_iso, count, holidays)
    _emit(output_format, {"start": start_iso, "workdays": max(0, count), "date": result}, result)


@click.command("next-workday")
@click.argument("date")
@holiday_options
@format_option
def next_workday(date, use_holidays, extra_holidays, output_format):
    """Print the first workday after DATE."""
    date_iso = parse_date_arg(date, "date")
    holidays = resolve_holidays(use_holidays, extra_holidays)

    result = next_workday_iso(date_iso, holidays)
    _emit(output_format, {"date": date_iso, "next_workday": result}, result)


@click.command("end-date")
@click.argument("start")
@click.argument("count", type=int)
@holiday_options
@format_option
def end_date(start, count, use_holidays, extra_holidays, output_format):
    """Print the end date so START..END covers COUNT workdays.

    A COUNT of 1 or less prints START unchanged.
    """
    start_iso = parse_date_arg(start, "start date")
    holidays = resolve_holidays(use_holidays, extra_holidays)

    result = end_date_for_workday_count(start_iso, count, holidays)
    _emit(output_format, {"start": start_iso, "workdays": count, "end": result}, result)
