"""Leave day reconciliation.

Compares the workdays a leave date range actually covers against the days
the user allocated to each balance ("annual" and "off"), and works out the
balance change an edit implies.

SDK layer - pure logic, no I/O, no state between calls. CLI and MCP tools
are thin wrappers around reconcile_leave_change().

Split rules:
    - Allocations are whole days, clamped to [0, MAX_SPLIT_DAYS].
    - A split may never exceed the range's required workdays. When it does,
      off days are cut first, then annual days. Off days are the more
      flexible allocation; callers wanting the reverse must pre-adjust.

Delta sign:
    Positive delta = consume more of the stored balance.
    Negative delta = refund to the stored balance.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Literal, Mapping, Optional, Tuple, Union

from .dates import round_half_up, to_number, workdays_between_inclusive

logger = logging.getLogger(__name__)

MAX_SPLIT_DAYS = 9999

AdvisoryType = Literal["invalid_range", "selected_too_few", "selected_too_many"]

INVALID_RANGE_MESSAGE = "Your date range is invalid. End date must be same or after start date."

# Accepted key spellings for request mappings (stored records use camelCase).
_REQUEST_KEYS = {
    "start_iso": ("start_iso", "startISO"),
    "end_iso": ("end_iso", "endISO"),
    "annual_days": ("annual_days", "annualDays"),
    "off_days": ("off_days", "offDays"),
    "total_days": ("total_days", "totalDays"),
}


def clamp(value: Any, lo: int, hi: int) -> int:
    """Coerce value to an integer in [lo, hi].

    Non-numeric, missing or non-finite values become lo. Everything else
    is rounded half-up before clamping.
    """
    num = to_number(value)
    if num is None:
        return lo
    return max(lo, min(hi, round_half_up(num)))


def to_half(value: Any, fallback: float = 0) -> float:
    """Round to the nearest half day (half-up). Non-numeric -> fallback."""
    num = to_number(value)
    if num is None:
        return fallback
    return round_half_up(num * 2) / 2


@dataclass
class LeaveSplit:
    """Whole-day allocation of a leave request across the two balances."""

    annual_days: int = 0
    off_days: int = 0

    @property
    def total(self) -> int:
        return self.annual_days + self.off_days

    def to_dict(self) -> Dict[str, int]:
        return {
            "annual_days": self.annual_days,
            "off_days": self.off_days,
            "total": self.total,
        }


@dataclass
class LeaveDelta:
    """Signed per-balance change to apply to a stored leave balance."""

    annual_delta: int = 0
    off_delta: int = 0

    def negated(self) -> "LeaveDelta":
        return LeaveDelta(annual_delta=-self.annual_delta, off_delta=-self.off_delta)

    def to_dict(self) -> Dict[str, int]:
        return {"annual_delta": self.annual_delta, "off_delta": self.off_delta}


@dataclass
class Advisory:
    """Mismatch hint for the leave form to show (or replace with its own text)."""

    type: AdvisoryType
    message: str
    required: int
    selected: int
    mismatch: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "message": self.message,
            "required": self.required,
            "selected": self.selected,
            "mismatch": self.mismatch,
        }


@dataclass
class LeaveRequest:
    """A leave request's date range and split.

    Fields of a stored request this module doesn't know about (ids, user,
    status...) ride along in `extra` and are written back untouched.
    """

    start_iso: str = ""
    end_iso: str = ""
    annual_days: int = 0
    off_days: int = 0
    total_days: int = 0
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def split(self) -> LeaveSplit:
        return LeaveSplit(annual_days=self.annual_days, off_days=self.off_days)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "LeaveRequest":
        """Build a request from a stored record or form payload.

        Both snake_case and camelCase keys are read. Day counts are clamped
        here, once, so nothing downstream has to re-default them.
        """
        if not data:
            return cls()

        known = set()
        values: Dict[str, Any] = {}
        for attr, keys in _REQUEST_KEYS.items():
            for key in keys:
                known.add(key)
                if key in data and attr not in values:
                    values[attr] = data[key]

        start = values.get("start_iso")
        end = values.get("end_iso")
        return cls(
            start_iso=start if isinstance(start, str) else "",
            end_iso=end if isinstance(end, str) else "",
            annual_days=clamp(values.get("annual_days"), 0, MAX_SPLIT_DAYS),
            off_days=clamp(values.get("off_days"), 0, MAX_SPLIT_DAYS),
            total_days=clamp(values.get("total_days"), 0, MAX_SPLIT_DAYS),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra,
            "start_iso": self.start_iso,
            "end_iso": self.end_iso,
            "annual_days": self.annual_days,
            "off_days": self.off_days,
            "total_days": self.total_days,
        }


@dataclass
class ReconciliationResult:
    """Everything a leave-edit handler needs to accept, prompt or auto-correct."""

    required_days: int
    selected_days: int
    mismatch: int
    prompt: Optional[Advisory]
    next_req: LeaveRequest
    delta: LeaveDelta

    @property
    def is_balanced(self) -> bool:
        return self.prompt is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "required_days": self.required_days,
            "selected_days": self.selected_days,
            "mismatch": self.mismatch,
            "prompt": self.prompt.to_dict() if self.prompt else None,
            "next_req": self.next_req.to_dict(),
            "delta": self.delta.to_dict(),
        }


@dataclass
class AllocationCheck:
    """Half-day tolerant comparison of required vs allocated days."""

    required: int
    selected: float
    mismatch: float
    annual: float
    off: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "required": self.required,
            "selected": self.selected,
            "mismatch": self.mismatch,
            "annual": self.annual,
            "off": self.off,
        }


SplitLike = Union[LeaveSplit, LeaveRequest, Mapping[str, Any], None]


def normalize_split(required_days: int, annual_days: Any, off_days: Any) -> LeaveSplit:
    """Force a proposed split to whole days that fit within required_days.

    Args:
        required_days: Workdays the date range covers (ceiling for the total)
        annual_days: Proposed annual-leave days (any numeric-ish value)
        off_days: Proposed off days (any numeric-ish value)

    Returns:
        LeaveSplit with non-negative integers and total <= required_days.
        Off days absorb any excess before annual days do.
    """
    a = clamp(annual_days, 0, MAX_SPLIT_DAYS)
    o = clamp(off_days, 0, MAX_SPLIT_DAYS)

    over = a + o - required_days
    if over > 0:
        reduce_off = min(o, over)
        o -= reduce_off
        over -= reduce_off
        a -= min(a, over)

    return LeaveSplit(annual_days=a, off_days=o)


def _split_values(req: SplitLike) -> Tuple[int, int]:
    if req is None:
        return 0, 0
    if isinstance(req, (LeaveSplit, LeaveRequest)):
        annual, off = req.annual_days, req.off_days
    else:
        annual = req.get("annual_days", req.get("annualDays", 0))
        off = req.get("off_days", req.get("offDays", 0))
    return clamp(annual, 0, MAX_SPLIT_DAYS), clamp(off, 0, MAX_SPLIT_DAYS)


def leave_diff(old_req: SplitLike, next_req: SplitLike) -> LeaveDelta:
    """Per-balance change from old_req to next_req (None counts as no days)."""
    old_annual, old_off = _split_values(old_req)
    next_annual, next_off = _split_values(next_req)
    return LeaveDelta(
        annual_delta=next_annual - old_annual,
        off_delta=next_off - old_off,
    )


def _advisory_for(required: int, selected: int, mismatch: int) -> Optional[Advisory]:
    if required == 0:
        # Also hit by valid ranges that only cover weekends/holidays.
        return Advisory("invalid_range", INVALID_RANGE_MESSAGE, required, selected, mismatch)
    if mismatch < 0:
        return Advisory(
            "selected_too_few",
            f"Your date range needs {required} day(s), but you selected {selected}.",
            required, selected, mismatch,
        )
    if mismatch > 0:
        return Advisory(
            "selected_too_many",
            f"You selected {selected} day(s), but the date range only needs {required}.",
            required, selected, mismatch,
        )
    return None


def reconcile_leave_change(
    start_iso: str,
    end_iso: str,
    annual_days: Any = 0,
    off_days: Any = 0,
    old_req: SplitLike = None,
    holidays: Optional[Iterable[Any]] = None,
) -> ReconciliationResult:
    """Reconcile a proposed leave range and split against an existing request.

    Args:
        start_iso: Proposed first day of leave (YYYY-MM-DD)
        end_iso: Proposed last day of leave (YYYY-MM-DD), inclusive
        annual_days: Proposed annual-leave days
        off_days: Proposed off days
        old_req: The request being edited (a LeaveRequest, a stored record
            mapping, or just its LeaveSplit), or None for a new request
        holidays: DateISO strings that are not workdays

    Returns:
        ReconciliationResult. Bad dates give required_days == 0 and an
        "invalid_range" prompt; bad numbers are clamped. Never raises.
    """
    required = workdays_between_inclusive(start_iso, end_iso, holidays)
    split = normalize_split(required, annual_days, off_days)
    selected = split.total
    mismatch = selected - required

    prompt = _advisory_for(required, selected, mismatch)

    if isinstance(old_req, LeaveRequest):
        base = old_req
    elif isinstance(old_req, LeaveSplit):
        base = LeaveRequest(annual_days=old_req.annual_days, off_days=old_req.off_days)
    else:
        base = LeaveRequest.from_mapping(old_req)

    next_req = replace(
        base,
        start_iso=start_iso,
        end_iso=end_iso,
        annual_days=split.annual_days,
        off_days=split.off_days,
        total_days=required,
        extra=dict(base.extra),
    )

    delta = leave_diff(old_req if old_req is not None else LeaveSplit(), next_req)

    logger.debug(
        f"reconcile {start_iso}..{end_iso}: required={required} selected={selected} "
        f"mismatch={mismatch} prompt={prompt.type if prompt else None} "
        f"delta=({delta.annual_delta}, {delta.off_delta})"
    )

    return ReconciliationResult(
        required_days=required,
        selected_days=selected,
        mismatch=mismatch,
        prompt=prompt,
        next_req=next_req,
        delta=delta,
    )


def check_allocation(
    start_iso: str,
    end_iso: str,
    annual_days: Any,
    off_days: Any,
    holidays: Optional[Iterable[Any]] = None,
) -> AllocationCheck:
    """Compare allocated days to the range's workdays, allowing half days.

    Unlike reconcile_leave_change() nothing is clamped to the required
    count; the mismatch (positive = too many) is reported as-is.
    """
    required = workdays_between_inclusive(start_iso, end_iso, holidays)
    a = max(0, to_half(annual_days, 0))
    o = max(0, to_half(off_days, 0))
    selected = to_half(a + o, 0)
    mismatch = to_half(selected - required, 0)
    return AllocationCheck(required=required, selected=selected, mismatch=mismatch, annual=a, off=o)
