"""Leave reconciliation CLI commands."""

import json

import click

from leavecalc.sdk import (
    LeaveBalance,
    LeaveDelta,
    check_allocation,
    reconcile_leave_change,
    resume_work_on,
)

from .dates_commands import (
    format_option,
    holiday_options,
    parse_date_arg,
    resolve_format,
    resolve_holidays,
)


@click.group("leave")
def leave():
    """Leave request reconciliation commands.

    \b
    Usage:
    1. leave-calc leave reconcile --start ... --end ... --annual N --off N
    2. Apply the reported balance change with: leave-calc leave apply-balance
    """
    pass


def _signed(n) -> str:
    return f"+{n}" if n > 0 else str(n)


@leave.command("reconcile")
@click.option("--start", required=True, help="First day of leave (YYYY-MM-DD).")
@click.option("--end", required=True, help="Last day of leave (YYYY-MM-DD), inclusive.")
@click.option("--annual", type=float, default=0, show_default=True, help="Annual leave days selected.")
@click.option("--off", type=float, default=0, show_default=True, help="Off days selected.")
@click.option("--old-annual", type=float, default=None, help="Annual days on the request being edited.")
@click.option("--old-off", type=float, default=None, help="Off days on the request being edited.")
@holiday_options
@format_option
def leave_reconcile(start, end, annual, off, old_annual, old_off, use_holidays, extra_holidays, output_format):
    """Check a leave range against the selected annual/off split.

    Reports the workdays the range needs, the split after normalization
    (excess off days are dropped first), any mismatch advisory, and the
    balance change relative to --old-annual/--old-off.

    \b
    Examples:
      leave-calc leave reconcile --start 2024-03-04 --end 2024-03-08 --annual 2 --off 3
      leave-calc leave reconcile --start 2024-03-04 --end 2024-03-06 \\
          --annual 1 --off 2 --old-annual 2 --old-off 3
    """
    start_iso = parse_date_arg(start, "start date")
    end_iso = parse_date_arg(end, "end date")
    holidays = resolve_holidays(use_holidays, extra_holidays)

    old_req = None
    if old_annual is not None or old_off is not None:
        old_req = {"annual_days": old_annual or 0, "off_days": old_off or 0}

    result = reconcile_leave_change(
        start_iso=start_iso,
        end_iso=end_iso,
        annual_days=annual,
        off_days=off,
        old_req=old_req,
        holidays=holidays,
    )
    resume_on = resume_work_on(end_iso, holidays) if result.required_days else ""

    if resolve_format(output_format) == "json":
        output = result.to_dict()
        output["resume_work_on"] = resume_on or None
        click.echo(json.dumps(output, indent=2))
        return

    split = result.next_req
    click.echo(f"Leave: {start_iso} to {end_iso}")
    click.echo(f"  Required workdays: {result.required_days}")
    click.echo(f"  Selected:          {result.selected_days} (annual {split.annual_days}, off {split.off_days})")
    click.echo(f"  Mismatch:          {_signed(result.mismatch)}")
    if resume_on:
        click.echo(f"  Resume work on:    {resume_on}")

    if result.prompt:
        click.echo()
        click.secho(f"{result.prompt.type}: {result.prompt.message}", fg="yellow")

    click.echo()
    click.echo(
        f"Balance change: annual {_signed(result.delta.annual_delta)}, "
        f"off {_signed(result.delta.off_delta)}"
    )


@leave.command("check")
@click.option("--start", required=True, help="First day of leave (YYYY-MM-DD).")
@click.option("--end", required=True, help="Last day of leave (YYYY-MM-DD), inclusive.")
@click.option("--annual", type=float, default=0, show_default=True, help="Annual leave days (half days allowed).")
@click.option("--off", type=float, default=0, show_default=True, help="Off days (half days allowed).")
@holiday_options
@format_option
def leave_check(start, end, annual, off, use_holidays, extra_holidays, output_format):
    """Compare a half-day allocation with the range's workdays.

    Nothing is adjusted; exits non-zero when the allocation doesn't match.
    """
    start_iso = parse_date_arg(start, "start date")
    end_iso = parse_date_arg(end, "end date")
    holidays = resolve_holidays(use_holidays, extra_holidays)

    check = check_allocation(start_iso, end_iso, annual, off, holidays)

    if resolve_format(output_format) == "json":
        click.echo(json.dumps(check.to_dict(), indent=2))
    else:
        click.echo(f"Required: {check.required}")
        click.echo(f"Selected: {check.selected:g} (annual {check.annual:g}, off {check.off:g})")
        click.echo(f"Mismatch: {check.mismatch:+g}")

    if check.mismatch != 0:
        raise SystemExit(1)


@leave.command("apply-balance")
@click.option("--annual-balance", type=float, default=None, help="Current annual leave balance (default 21).")
@click.option("--off-balance", type=float, default=None, help="Current off-day balance (default 0).")
@click.option("--annual-delta", type=int, default=0, show_default=True, help="Annual delta from reconcile.")
@click.option("--off-delta", type=int, default=0, show_default=True, help="Off-day delta from reconcile.")
@format_option
def leave_apply_balance(annual_balance, off_balance, annual_delta, off_delta, output_format):
    """Apply a reconcile delta to a balance and print the result.

    Positive deltas consume balance, negative deltas refund it. Annual
    leave is capped at 42 days; neither balance goes below 0.
    """
    record = {}
    if annual_balance is not None:
        record["annualLeave"] = annual_balance
    if off_balance is not None:
        record["offDays"] = off_balance

    before = LeaveBalance.from_record(record)
    after = before.apply_delta(LeaveDelta(annual_delta=annual_delta, off_delta=off_delta))

    if resolve_format(output_format) == "json":
        click.echo(json.dumps({"before": before.to_dict(), "after": after.to_dict()}, indent=2))
        return

    click.echo(f"Annual leave: {before.annual_leave} -> {after.annual_leave}")
    click.echo(f"Off days:     {before.off_days} -> {after.off_days}")
