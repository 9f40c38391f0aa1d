"""Leave Calc MCP Server - FastMCP tools for workday and leave reconciliation."""

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field, ValidationError

from leavecalc.sdk import (
    LeaveChangeInput,
    coerce_iso,
    load_holiday_entries,
    load_holidays,
    reconcile_leave_change,
    resume_work_on,
    workdays_between_inclusive,
)

logger = logging.getLogger(__name__)

mcp = FastMCP("leave-calc")


def _holidays(use_configured: bool, extra: list[str] | None) -> list[str]:
    dates = set(load_holidays()) if use_configured else set()
    for value in extra or []:
        iso = coerce_iso(value)
        if iso:
            dates.add(iso)
    return sorted(dates)


# --- Tools ---

@mcp.tool()
async def count_workdays(
    start_date: str = Field(description="First day (YYYY-MM-DD)"),
    end_date: str = Field(description="Last day (YYYY-MM-DD), inclusive"),
    use_configured_holidays: bool = Field(default=True, description="Skip dates from the configured holiday file"),
    extra_holidays: list[str] | None = Field(default=None, description="Additional holiday dates (YYYY-MM-DD)"),
) -> dict[str, Any]:
    """Count workdays (Mon-Fri, excluding holidays) in an inclusive date range. Returns 0 for invalid or inverted ranges."""
    try:
        start_iso = coerce_iso(start_date)
        end_iso = coerce_iso(end_date)
        holidays = _holidays(use_configured_holidays, extra_holidays)
        return {
            "start_date": start_iso,
            "end_date": end_iso,
            "workdays": workdays_between_inclusive(start_iso, end_iso, holidays),
            "holidays_considered": len(holidays),
        }
    except Exception as e:
        logger.error(f"Error counting workdays: {e}")
        return {"error": str(e), "workdays": None}


@mcp.tool()
async def reconcile_leave(
    start_date: str = Field(description="Proposed first day of leave (YYYY-MM-DD)"),
    end_date: str = Field(description="Proposed last day of leave (YYYY-MM-DD), inclusive"),
    annual_days: float = Field(default=0, description="Annual leave days selected"),
    off_days: float = Field(default=0, description="Off days selected"),
    old_request: dict[str, Any] | None = Field(
        default=None,
        description="The request being edited (annual_days/off_days plus any stored fields), or null for a new request",
    ),
    use_configured_holidays: bool = Field(default=True, description="Skip dates from the configured holiday file"),
) -> dict[str, Any]:
    """Reconcile a leave date range against its annual/off split. Returns required/selected days, a mismatch advisory (or null), the normalized request, and the balance delta (positive = consume, negative = refund)."""
    try:
        payload = LeaveChangeInput.model_validate({
            "startDate": start_date,
            "endDate": end_date,
            "annualDays": annual_days,
            "offDays": off_days,
            "oldReq": old_request,
        })
        holidays = _holidays(use_configured_holidays, None)
        result = reconcile_leave_change(**payload.to_kwargs(), holidays=holidays)
        output = result.to_dict()
        output["resume_work_on"] = (
            resume_work_on(payload.end_iso, holidays) if result.required_days else None
        )
        return output
    except ValidationError as e:
        return {"error": f"Invalid input: {e}"}
    except Exception as e:
        logger.error(f"Error reconciling leave: {e}")
        return {"error": str(e)}


@mcp.tool()
async def list_holidays(
    year: str | None = Field(default=None, description="Filter by year (e.g., '2025')"),
) -> dict[str, Any]:
    """List configured public holidays (date and name)."""
    try:
        entries = load_holiday_entries()
        if year:
            entries = [e for e in entries if e.date.startswith(f"{year}-")]
        return {"holidays": [e.model_dump() for e in entries], "count": len(entries)}
    except Exception as e:
        logger.error(f"Error listing holidays: {e}")
        return {"error": str(e), "holidays": [], "count": 0}


# --- Resources ---

@mcp.resource("leavecalc://holidays")
async def holidays_resource() -> str:
    """All configured holidays as JSON."""
    try:
        return json.dumps([e.model_dump() for e in load_holiday_entries()], indent=2)
    except Exception as e:
        return json.dumps({"error": str(e)})


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
