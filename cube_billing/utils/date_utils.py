"""Date manipulation utilities"""

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

ONE_DAY = timedelta(days=1)


def _instant_kind(instant) -> str:
    if not isinstance(instant, datetime):
        return "date"
    return "naive" if instant.tzinfo is None else "aware"


def align_instants(start, end):
    """
    Make two instants subtractable.

    Pairs of the same kind (two dates, two naive or two aware datetimes) pass
    through unchanged. Otherwise both become aware datetimes: naive values are
    read as UTC, and a plain date becomes midnight in the other value's
    timezone (UTC if it has none).
    """
    if _instant_kind(start) == _instant_kind(end):
        return start, end
    tz = next(
        (i.tzinfo for i in (start, end) if isinstance(i, datetime) and i.tzinfo is not None),
        timezone.utc,
    )
    return _as_aware(start, tz), _as_aware(end, tz)


def _as_aware(instant, tz):
    if isinstance(instant, datetime):
        return instant if instant.tzinfo is not None else instant.replace(tzinfo=timezone.utc)
    return datetime.combine(instant, time.min, tzinfo=tz)


def whole_days_between(start, end) -> int:
    """Whole days from start to end, rounded down (negative if end precedes start)"""
    start, end = align_instants(start, end)
    return (end - start) // ONE_DAY


def ceil_days_between(start, end) -> int:
    """Days from start to end, rounded up"""
    start, end = align_instants(start, end)
    return -((start - end) // ONE_DAY)


def add_days(instant, days: int):
    """Shift a date or datetime by a number of calendar days"""
    return instant + timedelta(days=days)


def to_business_date(instant, tz_name: str) -> date:
    """
    Convert an instant to the calendar date it falls on in the business timezone.

    Naive datetimes are treated as UTC, which is what the rental backend emits.
    Plain dates are already calendar days and pass through unchanged.
    """
    if not isinstance(instant, datetime):
        return instant
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(ZoneInfo(tz_name)).date()


def business_today(tz_name: str) -> date:
    """Current calendar date in the business timezone"""
    return to_business_date(datetime.now(timezone.utc), tz_name)


def ordinal_suffix(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def format_date_readable(value: date) -> str:
    """Format a date as e.g. "9th September 2025" for reminder copy"""
    return f"{value.day}{ordinal_suffix(value.day)} {value.strftime('%B')} {value.year}"
