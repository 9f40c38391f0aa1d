"""Pydantic schemas for data crossing into the SDK.

Holiday files are strict (extra='forbid') so a typo in a hand-edited file
is a clear error instead of a silently skipped holiday. Leave change
payloads come from clients and are lenient: unknown keys are ignored,
dates are coerced, day counts are left for the reconciler to clamp.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from .dates import coerce_iso, parse_iso, to_iso


class HolidayEntry(BaseModel):
    """A single non-working day."""

    model_config = ConfigDict(extra="forbid")

    date: str = Field(..., description="Holiday date (YYYY-MM-DD)")
    name: str = Field(default="Holiday", description="Display name")

    @field_validator("date", mode="before")
    @classmethod
    def check_date(cls, v: Any) -> str:
        # YAML reads unquoted 2024-12-25 as a date object
        if isinstance(v, date):
            return to_iso(v)
        if not isinstance(v, str) or parse_iso(v.strip()) is None:
            raise ValueError(f"invalid holiday date {v!r}, expected YYYY-MM-DD")
        return v.strip()

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v: Any) -> str:
        name = str(v or "").strip()
        return name or "Holiday"


class HolidayFile(BaseModel):
    """Contents of holidays.yaml.

    Accepts either a bare list or a mapping with a 'holidays' list. List
    items may be plain date strings or {date, name} mappings.
    """

    model_config = ConfigDict(extra="forbid")

    holidays: List[HolidayEntry] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def accept_shapes(cls, data: Any) -> Any:
        if data is None:
            return {"holidays": []}
        if isinstance(data, list):
            data = {"holidays": data}
        if isinstance(data, dict) and isinstance(data.get("holidays"), list):
            data = dict(data)
            data["holidays"] = [
                {"date": item} if isinstance(item, (str, date)) else item
                for item in data["holidays"]
            ]
        return data


class LeaveChangeInput(BaseModel):
    """Leave form payload as sent by a client."""

    model_config = ConfigDict(extra="ignore")

    start_iso: str = Field(
        default="",
        validation_alias=AliasChoices("start_iso", "startISO", "startDate", "start_date"),
    )
    end_iso: str = Field(
        default="",
        validation_alias=AliasChoices("end_iso", "endISO", "endDate", "end_date"),
    )
    annual_days: Any = Field(default=0, validation_alias=AliasChoices("annual_days", "annualDays"))
    off_days: Any = Field(default=0, validation_alias=AliasChoices("off_days", "offDays"))
    old_req: Optional[Dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("old_req", "oldReq"),
    )

    @field_validator("start_iso", "end_iso", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> str:
        return coerce_iso(v)

    def to_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for reconcile_leave_change()."""
        return {
            "start_iso": self.start_iso,
            "end_iso": self.end_iso,
            "annual_days": self.annual_days,
            "off_days": self.off_days,
            "old_req": self.old_req,
        }
