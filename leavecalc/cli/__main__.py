"""Leave Calc CLI - Command-line interface for workday and leave calculations."""

import logging
import os

import click

from leavecalc import __version__

from .dates_commands import workdays, add_workdays, next_workday, end_date
from .leave_commands import leave as leave_group
from .holidays_commands import holidays as holidays_group
from .settings_commands import settings as settings_group


@click.group()
@click.version_option(version=__version__, prog_name="leave-calc")
def cli():
    """Leave Calc - workday counting and leave reconciliation.

    Counts workdays (Mon-Fri, minus holidays), reconciles leave requests
    against their annual/off day split, and works out balance changes.

    Configuration is loaded from (in order):

    \b
    1. LEAVE_CALC_CONFIG_PATH environment variable
    2. ~/.config/leave-calc/ (XDG default)

    Run 'leave-calc settings show' to see the files in use.
    """
    pass


cli.add_command(workdays)
cli.add_command(add_workdays)
cli.add_command(next_workday)
cli.add_command(end_date)
cli.add_command(leave_group)
cli.add_command(holidays_group)
cli.add_command(settings_group)


def _configure_logging():
    # LOG_LEVEL=DEBUG shows reconciliation and holiday file details
    log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def main():
    """Entry point for the CLI."""
    _configure_logging()
    cli()


if __name__ == "__main__":
    main()
