"""Leave balance arithmetic.

Applies reconciliation deltas to a user's balance record. The record itself
lives elsewhere (user store); this module only reads and returns values.

Stored user records carry two generations of field names:
    annualLeave / leaveBalance   - annual leave days left
    offDays / offDayBalance      - off days left
Both are read (current name first) and both are written back.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional

from .dates import next_workday_iso, round_half_up, to_number
from .reconcile import LeaveDelta, clamp

# Upper bound the admin UI allows for annual leave.
ANNUAL_LEAVE_CAP = 42
DEFAULT_ANNUAL_LEAVE = 21
DEFAULT_OFF_DAYS = 0


def _to_int(value: Any, fallback: int) -> int:
    num = to_number(value)
    return fallback if num is None else round_half_up(num)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class LeaveBalance:
    """Days left on each balance, always within the allowed bounds."""

    annual_leave: int = DEFAULT_ANNUAL_LEAVE
    off_days: int = DEFAULT_OFF_DAYS

    def __post_init__(self):
        self.annual_leave = clamp(_to_int(self.annual_leave, DEFAULT_ANNUAL_LEAVE), 0, ANNUAL_LEAVE_CAP)
        self.off_days = max(0, _to_int(self.off_days, DEFAULT_OFF_DAYS))

    @classmethod
    def from_record(cls, record: Optional[Mapping[str, Any]]) -> "LeaveBalance":
        """Read balances from a user record, falling back to legacy field names."""
        record = record or {}

        annual = record.get("annualLeave")
        if not _is_number(annual):
            annual = record.get("leaveBalance")
        if not _is_number(annual):
            annual = DEFAULT_ANNUAL_LEAVE

        off = record.get("offDays")
        if not _is_number(off):
            off = record.get("offDayBalance")
        if not _is_number(off):
            off = DEFAULT_OFF_DAYS

        return cls(annual_leave=annual, off_days=off)

    def apply_delta(self, delta: LeaveDelta) -> "LeaveBalance":
        """Return the balance after a reconciliation delta.

        Positive deltas consume balance, negative deltas refund it.
        Results are clamped, so over-consumption bottoms out at 0.
        """
        return LeaveBalance(
            annual_leave=self.annual_leave - delta.annual_delta,
            off_days=self.off_days - delta.off_delta,
        )

    def refund(self, annual: Any = 0, off: Any = 0) -> "LeaveBalance":
        return LeaveBalance(
            annual_leave=self.annual_leave + _to_int(annual, 0),
            off_days=self.off_days + _to_int(off, 0),
        )

    def to_record(self) -> Dict[str, int]:
        return {
            "annualLeave": self.annual_leave,
            "leaveBalance": self.annual_leave,
            "offDays": self.off_days,
            "offDayBalance": self.off_days,
        }

    def to_dict(self) -> Dict[str, int]:
        return {"annual_leave": self.annual_leave, "off_days": self.off_days}


def resume_work_on(end_iso: str, holidays: Optional[Iterable[Any]] = None) -> str:
    """First workday after a leave's last day.

    "" if end_iso is unparseable or is the last day of the calendar.
    """
    return next_workday_iso(end_iso, holidays)
