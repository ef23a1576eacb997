"""
Display dates and relative-time labels for event starts.
"""

import math
from datetime import date, datetime, timedelta
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.errors import InvalidTimezoneError
from models.events import CalendarEvent

NOW_LABEL = "Now"

# Fixed English names; strftime %a/%b would follow the process locale
DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@lru_cache(maxsize=128)
def resolve_timezone(time_zone: str) -> ZoneInfo:
    """Resolve an IANA timezone name. An empty name means UTC."""
    if not time_zone:
        return ZoneInfo("UTC")
    try:
        return ZoneInfo(time_zone)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise InvalidTimezoneError(time_zone) from e


def is_all_day(event: CalendarEvent) -> bool:
    """An event without a timed start is an all-day event."""
    return not event.get("start_date_time")


def round_to_minute(delta: timedelta) -> timedelta:
    """Round to the nearest minute, halfway values away from zero."""
    minutes = math.floor(abs(delta.total_seconds()) / 60 + 0.5)
    return timedelta(minutes=minutes if delta >= timedelta(0) else -minutes)


def short_hand_until(delta: timedelta) -> str:
    """Format as whole hours ('3h') if at least an hour, else minutes ('45m')."""
    hours = delta.total_seconds() / 3600
    if hours >= 1.0:
        return f"{int(hours)}h"
    return f"{int(delta.total_seconds() / 60)}m"


def same_date(a: datetime, b: datetime) -> bool:
    """Check if two datetimes fall on the same calendar day."""
    return a.date() == b.date()


def parse_start(event: CalendarEvent, tz: ZoneInfo) -> datetime:
    """
    Parse the event start into an aware datetime in tz.

    All-day starts become local midnight. Timed starts without an offset
    are taken as local to tz.

    Raises:
        ValueError: start string is not parseable
    """
    if is_all_day(event):
        start = date.fromisoformat(event.get("start_date") or "")
        return datetime(start.year, start.month, start.day, tzinfo=tz)

    start = datetime.fromisoformat(event["start_date_time"])
    if start.tzinfo is None:
        return start.replace(tzinfo=tz)
    return start.astimezone(tz)


def display_date(start: datetime, all_day: bool) -> str:
    """Format as 'Mon, Jan 02, 15:04', or 'Mon, Jan 02,' for all-day events."""
    day = f"{DAY_NAMES[start.weekday()]}, {MONTH_NAMES[start.month - 1]} {start.day:02d},"
    if all_day:
        return day
    return f"{day} {start.hour:02d}:{start.minute:02d}"


def relative_label(start: datetime, now: datetime) -> str:
    """
    Short label for the time remaining until start.

    Days are counted from raw elapsed hours, not calendar days, so a DST
    change can shift the count by one.
    """
    remaining = round_to_minute(start - now)
    if remaining < timedelta(0):
        return NOW_LABEL
    if same_date(start, now.astimezone(start.tzinfo)):
        return short_hand_until(remaining)
    days = int(remaining.total_seconds() / 3600 // 24)
    if days > 0:
        return f"{days}d"
    return short_hand_until(remaining)


def format_start(event: CalendarEvent, time_zone: str, now: datetime) -> tuple[str, str]:
    """
    Format the event start for display.

    Returns:
        Tuple of (display_date, label). If the start cannot be parsed the
        raw string is displayed and the label is empty.

    Raises:
        InvalidTimezoneError: time_zone does not resolve
    """
    tz = resolve_timezone(time_zone)

    all_day = is_all_day(event)
    raw = (event.get("start_date") if all_day else event.get("start_date_time")) or ""
    try:
        start = parse_start(event, tz)
    except (ValueError, OverflowError):
        # OverflowError: offset conversion pushed the start outside datetime's range
        return raw, ""

    return display_date(start, all_day), relative_label(start, now)
