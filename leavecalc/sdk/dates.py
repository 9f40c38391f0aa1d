"""Workday arithmetic over YYYY-MM-DD dates.

SDK layer - pure logic, no I/O. Every function here degrades to an empty
result ("" or 0) on bad input instead of raising, so leave forms can call
them with whatever the user typed.

Dates are plain calendar dates (datetime.date). They are never routed
through UTC, so a date string always means the same day regardless of the
machine's time zone.

A workday is Monday-Friday and not listed in the caller's holiday set.
"""

import math
import re
from datetime import date, datetime, timedelta
from typing import Any, FrozenSet, Iterable, Optional

ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

_ISO_WITH_TIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]")
_YMD_DASH_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_YMD_SLASH_RE = re.compile(r"^(\d{4})/(\d{1,2})/(\d{1,2})$")
_DMY_SLASH_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")

# Number() spellings: decimal with optional exponent, or unsigned 0x/0o/0b.
_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_RADIX_RE = re.compile(r"^0([xXoObB])([0-9a-fA-F]+)$")
_RADIX_BASES = {"x": 16, "o": 8, "b": 2}

# Epoch values above this are milliseconds, below are seconds.
EPOCH_MS_THRESHOLD = 1e12

ONE_DAY = timedelta(days=1)


def _make_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_iso(value: Any) -> Optional[date]:
    """Parse a strict YYYY-MM-DD string into a date.

    Returns None for anything that is not a string in exactly that form,
    or that names a day the calendar doesn't have (e.g. 2024-02-30).
    """
    if not value or not isinstance(value, str):
        return None
    m = ISO_DATE_RE.match(value)
    if not m:
        return None
    return _make_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def to_iso(d: Any) -> str:
    """Format a date (or datetime) as YYYY-MM-DD, or "" if it isn't one."""
    if isinstance(d, datetime):
        d = d.date()
    if not isinstance(d, date):
        return ""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def coerce_iso(value: Any) -> str:
    """Normalize the date shapes leave forms and stored records contain.

    Accepted:
        - "YYYY-MM-DDThh:mm..." or "YYYY-MM-DD hh:mm" (date part kept as-is)
        - "YYYY-M-D", "YYYY/M/D", "D/M/YYYY"
        - date / datetime objects
        - epoch seconds, or epoch milliseconds when above 1e12
          (int, float, or an all-digit string), converted in local time

    Args:
        value: Anything a client might send as a date.

    Returns:
        DateISO string, or "" if the value can't be read as a date.
    """
    if value is None or value == "":
        return ""

    if isinstance(value, str):
        s = value.strip()
        if _ISO_WITH_TIME_RE.match(s):
            return s[:10]
        m = _YMD_DASH_RE.match(s) or _YMD_SLASH_RE.match(s)
        if m:
            return to_iso(_make_date(int(m.group(1)), int(m.group(2)), int(m.group(3))))
        m = _DMY_SLASH_RE.match(s)
        if m:
            return to_iso(_make_date(int(m.group(3)), int(m.group(2)), int(m.group(1))))
        if s.isdigit():
            return _epoch_to_iso(int(s))
        return ""

    if isinstance(value, date):
        return to_iso(value)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _epoch_to_iso(value)

    return ""


def _epoch_to_iso(num: float) -> str:
    try:
        if not math.isfinite(num):
            return ""
    except OverflowError:
        return ""
    seconds = num / 1000 if num > EPOCH_MS_THRESHOLD else num
    try:
        return to_iso(datetime.fromtimestamp(seconds))
    except (OverflowError, OSError, ValueError):
        return ""


def holiday_set(holidays: Optional[Iterable[Any]]) -> FrozenSet[str]:
    """Build the lookup set for holiday membership checks.

    Strings are used verbatim (membership is an exact string match);
    date objects are formatted first. Falsy entries are dropped.
    """
    if not holidays:
        return frozenset()
    out = set()
    for h in holidays:
        if not h:
            continue
        out.add(to_iso(h) if isinstance(h, date) else str(h))
    return frozenset(out)


def _is_workday(d: date, holidays: FrozenSet[str]) -> bool:
    # date.weekday(): Monday=0 .. Sunday=6
    return d.weekday() < 5 and to_iso(d) not in holidays


def is_weekend(date_iso: str) -> bool:
    """True if the date is a Saturday or Sunday. False for unparseable input."""
    d = parse_iso(date_iso)
    if d is None:
        return False
    return d.weekday() >= 5


def is_workday(date_iso: str, holidays: Optional[Iterable[Any]] = None) -> bool:
    d = parse_iso(date_iso)
    if d is None:
        return False
    return _is_workday(d, holiday_set(holidays))


def round_half_up(x: float) -> int:
    """Round to the nearest integer, with .5 going up (toward +inf)."""
    return int(math.floor(x + 0.5))


def to_number(value: Any) -> Optional[float]:
    """Coerce a form value to a finite float, or None.

    Numbers and numeric strings are accepted; blank strings count as 0.
    Strings follow the spellings a JavaScript form would send ("1e3",
    "0x10"), so Python-only forms like "1_000" or "inf" are rejected.
    Ints too large for a float count as non-finite.
    """
    if isinstance(value, bool):
        return float(value)
    try:
        if isinstance(value, (int, float)):
            num = float(value)
        elif isinstance(value, str):
            num = _parse_number_string(value.strip())
            if num is None:
                return None
        else:
            return None
    except (OverflowError, ValueError):
        return None
    return num if math.isfinite(num) else None


def _parse_number_string(s: str) -> Optional[float]:
    if not s:
        return 0.0
    if _DECIMAL_RE.match(s):
        return float(s)
    m = _RADIX_RE.match(s)
    if m:
        try:
            return float(int(m.group(2), _RADIX_BASES[m.group(1).lower()]))
        except ValueError:
            return None
    return None


def _day_count_arg(value: Any) -> int:
    num = to_number(value)
    if num is None:
        return 0
    return max(0, round_half_up(num))


def workdays_between_inclusive(
    start_iso: str,
    end_iso: str,
    holidays: Optional[Iterable[Any]] = None,
) -> int:
    """Count workdays in the inclusive range [start_iso, end_iso].

    Args:
        start_iso: First day of the range (YYYY-MM-DD)
        end_iso: Last day of the range (YYYY-MM-DD), inclusive
        holidays: DateISO strings to treat as non-workdays

    Returns:
        Number of Mon-Fri days not in holidays. 0 if either date is
        unparseable or end is before start.
    """
    start = parse_iso(start_iso)
    end = parse_iso(end_iso)
    if start is None or end is None or end < start:
        return 0

    hset = holiday_set(holidays)
    count = 0
    for offset in range((end - start).days + 1):
        if _is_workday(start + timedelta(days=offset), hset):
            count += 1
    return count


def add_workdays_iso(
    start_iso: str,
    workdays_to_add: Any,
    holidays: Optional[Iterable[Any]] = None,
) -> str:
    """Advance start_iso by N workdays, not counting the start day itself.

    N is rounded to an integer and clamped at 0; N == 0 returns the start.
    Returns "" if start_iso is unparseable or the result would fall after
    9999-12-31.
    """
    start = parse_iso(start_iso)
    if start is None:
        return ""

    hset = holiday_set(holidays)
    remaining = _day_count_arg(workdays_to_add)
    cur = start
    try:
        while remaining > 0:
            cur += ONE_DAY
            if _is_workday(cur, hset):
                remaining -= 1
    except OverflowError:
        return ""
    return to_iso(cur)


def next_workday_iso(date_iso: str, holidays: Optional[Iterable[Any]] = None) -> str:
    """Return the first workday strictly after date_iso.

    Returns "" if date_iso is unparseable or no workday follows it before
    the end of the calendar.

    This is the day someone on leave through date_iso is back at work.
    """
    base = parse_iso(date_iso)
    if base is None:
        return ""

    hset = holiday_set(holidays)
    try:
        cur = base + ONE_DAY
        while not _is_workday(cur, hset):
            cur += ONE_DAY
    except OverflowError:
        return ""
    return to_iso(cur)


def end_date_for_workday_count(
    start_iso: str,
    desired_workdays: Any,
    holidays: Optional[Iterable[Any]] = None,
) -> str:
    """Find the end date whose inclusive range from start_iso holds N workdays.

    For N <= 1 the start date is returned unchanged, whether or not it is
    itself a workday. For larger N, walk forward from the start counting
    workdays and stop on the day the count is reached.

    Returns:
        DateISO end date, or "" if start_iso is unparseable or the count
        can't be reached by 9999-12-31.
    """
    start = parse_iso(start_iso)
    if start is None:
        return ""
    desired = _day_count_arg(desired_workdays)
    if desired <= 1:
        return start_iso

    hset = holiday_set(holidays)
    counted = 0
    cur = start
    while True:
        if _is_workday(cur, hset):
            counted += 1
            if counted >= desired:
                return to_iso(cur)
        try:
            cur += ONE_DAY
        except OverflowError:
            return ""
