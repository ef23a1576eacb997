"""
Data models for calendar events.

TypedDicts keep the event source output as plain dictionaries; the render
pipeline only reads them.
"""

from typing import TypedDict


class Attendee(TypedDict):
    """Attendee email and their response to the invitation."""
    email: str
    response_status: str


class CalendarEvent(TypedDict):
    """Upcoming event as returned by the event source.

    Exactly one of start_date_time (RFC 3339, timed events) and
    start_date (YYYY-MM-DD, all-day events) is set.
    """
    title: str
    start_date_time: str | None
    start_date: str | None
    attendees: list[Attendee]
