"""Tests for display dates and relative-time labels."""

import locale
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from core.errors import InvalidTimezoneError
from services.timefmt import (
    format_start,
    relative_label,
    resolve_timezone,
    round_to_minute,
    short_hand_until,
)

NEW_YORK = ZoneInfo("America/New_York")


def timed(start: str) -> dict:
    return {"title": "Event", "start_date_time": start, "start_date": None, "attendees": []}


def all_day(start: str) -> dict:
    return {"title": "Event", "start_date_time": None, "start_date": start, "attendees": []}


def test_short_hand_until():
    assert short_hand_until(timedelta(minutes=45)) == "45m"
    assert short_hand_until(timedelta(minutes=59)) == "59m"
    assert short_hand_until(timedelta(hours=1)) == "1h"
    assert short_hand_until(timedelta(hours=3, minutes=50)) == "3h"
    assert short_hand_until(timedelta(0)) == "0m"


def test_round_to_minute():
    assert round_to_minute(timedelta(minutes=44, seconds=30)) == timedelta(minutes=45)
    assert round_to_minute(timedelta(minutes=44, seconds=29)) == timedelta(minutes=44)
    assert round_to_minute(timedelta(seconds=-30)) == timedelta(minutes=-1)
    assert round_to_minute(timedelta(seconds=-29)) == timedelta(0)


def test_resolve_timezone():
    assert resolve_timezone("Europe/London") == ZoneInfo("Europe/London")
    with pytest.raises(InvalidTimezoneError):
        resolve_timezone("Mars/Olympus_Mons")


def test_empty_timezone_is_utc():
    assert resolve_timezone("") == ZoneInfo("UTC")


def test_label_now_for_past_start(now):
    start = (now - timedelta(hours=2)).astimezone(NEW_YORK)
    assert relative_label(start, now) == "Now"


@pytest.mark.parametrize("tz_name", ["UTC", "America/New_York", "Asia/Kolkata", "Pacific/Auckland"])
def test_label_now_in_any_timezone(now, tz_name):
    event = timed((now - timedelta(minutes=5)).isoformat())
    _, label = format_start(event, tz_name, now)
    assert label == "Now"


def test_label_same_day_has_no_day_component():
    """Test an event late on the same local day still shows hours."""
    now = datetime(2025, 11, 4, 0, 10, tzinfo=NEW_YORK)
    start = datetime(2025, 11, 4, 23, 50, tzinfo=NEW_YORK)
    assert relative_label(start, now) == "23h"


def test_label_days_from_elapsed_hours(now):
    start = (now + timedelta(hours=50)).astimezone(NEW_YORK)
    assert relative_label(start, now) == "2d"


def test_label_next_day_under_24_hours():
    """Test crossing midnight with less than a day remaining."""
    now = datetime(2025, 11, 4, 23, 30, tzinfo=NEW_YORK)
    assert relative_label(datetime(2025, 11, 5, 0, 15, tzinfo=NEW_YORK), now) == "45m"
    assert relative_label(datetime(2025, 11, 5, 9, 0, tzinfo=NEW_YORK), now) == "9h"


def test_label_days_ignore_calendar_difference_across_dst():
    """Test day count comes from elapsed hours over a DST change."""
    # Sat Nov 01 noon EDT -> Mon Nov 03 midnight EST is 37 elapsed hours
    now = datetime(2025, 11, 1, 12, 0, tzinfo=NEW_YORK)
    _, label = format_start(all_day("2025-11-03"), "America/New_York", now)
    assert label == "1d"


def test_format_timed_event(now):
    display, label = format_start(timed("2025-11-04T15:30:00Z"), "America/New_York", now)
    assert display == "Tue, Nov 04, 10:30"
    assert label == "1h"


def test_format_converts_offset_to_request_timezone(now):
    display, label = format_start(timed("2025-11-04T20:00:00+01:00"), "America/New_York", now)
    assert display == "Tue, Nov 04, 14:00"
    assert label == "5h"


def test_format_naive_start_is_local(now):
    display, label = format_start(timed("2025-11-04T12:00:00"), "America/New_York", now)
    assert display == "Tue, Nov 04, 12:00"
    assert label == "3h"


def test_format_all_day_event(now):
    display, label = format_start(all_day("2025-11-06"), "America/New_York", now)
    assert display == "Thu, Nov 06,"
    assert label == "1d"


def test_format_all_day_event_today_is_now(now):
    display, label = format_start(all_day("2025-11-04"), "America/New_York", now)
    assert display == "Tue, Nov 04,"
    assert label == "Now"


def test_format_same_instant_other_timezone(now):
    display, _ = format_start(timed("2025-11-04T15:30:00Z"), "Asia/Tokyo", now)
    assert display == "Wed, Nov 05, 00:30"


def test_unparseable_start_is_degraded(now):
    assert format_start(timed("next tuesday"), "America/New_York", now) == ("next tuesday", "")
    assert format_start(all_day("2025-13-45"), "America/New_York", now) == ("2025-13-45", "")


def test_invalid_timezone(now):
    with pytest.raises(InvalidTimezoneError):
        format_start(timed("2025-11-04T15:30:00Z"), "Not/AZone", now)


def test_now_may_be_utc_or_local(now):
    local_now = now.astimezone(NEW_YORK)
    event = timed("2025-11-04T15:30:00Z")
    assert format_start(event, "America/New_York", now) == format_start(
        event, "America/New_York", local_now
    )


def test_start_out_of_range_after_conversion_is_degraded(now):
    start = "0001-01-01T00:00:00+14:00"
    assert format_start(timed(start), "America/New_York", now) == (start, "")


def test_names_are_english_in_any_locale(now):
    saved = locale.setlocale(locale.LC_TIME)
    try:
        locale.setlocale(locale.LC_TIME, "de_DE.UTF-8")
    except locale.Error:
        pytest.skip("de_DE.UTF-8 locale not installed")
    try:
        display, _ = format_start(timed("2025-11-04T15:30:00Z"), "America/New_York", now)
    finally:
        locale.setlocale(locale.LC_TIME, saved)
    assert display == "Tue, Nov 04, 10:30"
