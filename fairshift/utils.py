import datetime as dt
from typing import Any, Optional
from dateutil import parser as date_parser
from dateutil.rrule import rrule, DAILY

_DEFAULT_A = dt.datetime(2000, 1, 1)
_DEFAULT_B = dt.datetime(2001, 2, 2)


def date_list(start: dt.date, end: dt.date):
    return [d.date() for d in rrule(DAILY, dtstart=start, until=end)]


def parse_date(value: Any) -> Optional[dt.date]:
    """Parse a shift date into a calendar date; None when it can't be parsed."""
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    # Store timestamps
    for attr in ("to_datetime", "toDate"):
        convert = getattr(value, attr, None)
        if callable(convert):
            try:
                return parse_date(convert())
            except (TypeError, ValueError, OverflowError):
                return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return dt.date.fromisoformat(text)
        except ValueError:
            pass
        # Parse against two different defaults: any field dateutil had to fill in
        # (no year, month or day in the text) shows up as a mismatch.
        try:
            first = date_parser.parse(text, default=_DEFAULT_A).date()
            second = date_parser.parse(text, default=_DEFAULT_B).date()
        except (ValueError, OverflowError):
            return None
        return first if first == second else None
    return None


def day_of_week(d: dt.date) -> int:
    """0=Sunday .. 6=Saturday, as stored on availability rules."""
    return (d.weekday() + 1) % 7


def is_same_week(a: dt.date, b: dt.date) -> bool:
    return a.isocalendar()[:2] == b.isocalendar()[:2]


def is_same_month(a: dt.date, b: dt.date) -> bool:
    return (a.year, a.month) == (b.year, b.month)


def normalize_time(value: str) -> str:
    """'6:00' -> '06:00' so times compare as strings."""
    value = (value or "").strip()
    if ":" not in value:
        return value
    hours, minutes = value.split(":", 1)
    return f"{hours.strip().zfill(2)}:{minutes.strip()[:2].zfill(2)}"


def parse_shift_start_time(time_range: str) -> str:
    return normalize_time((time_range or "").split("-", 1)[0])


def is_time_in_range(time: str, start: str, end: str) -> bool:
    return normalize_time(start) <= normalize_time(time) < normalize_time(end)
