"""
Agenda rendering: events in, terminal text out.
"""

import asyncio
import textwrap
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from core.config import DATE_COLOR, LABEL_COLOR, NO_EVENTS_MESSAGE, UPSTREAM_TIMEOUT_SECONDS
from core.errors import PersistenceError, UpstreamFetchError
from models.credentials import CredentialRecord
from models.events import CalendarEvent
from models.requests import RenderRequest
from services.credentials import CredentialCache, TokenRefresher, refresh_credential
from services.rules import color_text, color_title, is_excluded
from services.timefmt import format_start, is_all_day

DEFAULT_RESPONSE_STATUS = "needsAction"

EventSource = Callable[[CredentialRecord, int, datetime], Awaitable[list[CalendarEvent]]]


def wrap_title(title: str, width: int) -> str:
    """Word-wrap on whitespace only; long words stay whole."""
    return textwrap.fill(
        title,
        width=max(width, 1),
        break_long_words=False,
        break_on_hyphens=False,
    )


def get_response_status(event: CalendarEvent, account_email: str | None) -> str:
    """Find the account's own response among the attendees (last match wins)."""
    status = DEFAULT_RESPONSE_STATUS
    if not account_email:
        return status
    for attendee in event.get("attendees") or []:
        if attendee["email"].lower() == account_email.lower():
            status = attendee["response_status"]
    return status


def render_event(
    event: CalendarEvent, request: RenderRequest, now: datetime, account_email: str | None
) -> str:
    """Render one event: title line(s), date and label line, blank line."""
    display_date, label = format_start(event, request.time_zone, now)
    title = color_title(
        wrap_title(event["title"], request.max_width),
        get_response_status(event, account_email),
        request,
    )

    when = color_text(display_date, DATE_COLOR, request)
    if label:
        when = f"{when} {color_text(label, LABEL_COLOR, request)}"
    return f"{title}\n{when}\n\n"


def render_agenda(
    events: list[CalendarEvent],
    request: RenderRequest,
    now: datetime,
    account_email: str | None = None,
) -> str:
    """
    Render events (already ordered and capped by the source) as text.

    An empty input gives NO_EVENTS_MESSAGE, but if every event is filtered
    out the result is an empty string.
    """
    if not events:
        return NO_EVENTS_MESSAGE

    parts = []
    for event in events:
        if is_excluded(event["title"], request):
            continue
        if is_all_day(event) and not request.all_day:
            continue
        parts.append(render_event(event, request, now, account_email))
    return "".join(parts)


async def generate_agenda(
    request: RenderRequest,
    cache: CredentialCache,
    fetch_events: EventSource,
    now: datetime | None = None,
    timeout: float = UPSTREAM_TIMEOUT_SECONDS,
    refresh_token: TokenRefresher | None = None,
) -> tuple[str, int]:
    """
    Look up the user's credential, fetch their events and render them.

    The request must already be prepared. "now" is captured once and used
    for the fetch window and every label. One deadline of timeout seconds
    covers the credential lookup, the token refresh and the fetch. When
    refresh_token is given an expired token is renewed and stored before
    fetching.

    Returns:
        Tuple of (text, events_fetched)

    Raises:
        PersistenceError: deadline passed while reading storage
        UpstreamFetchError: deadline passed while refreshing or fetching
    """
    if now is None:
        now = datetime.now(timezone.utc)

    stage = "storage"
    try:
        async with asyncio.timeout(timeout):
            record = await asyncio.to_thread(cache.get, request.user_id)
            stage = "upstream"
            if refresh_token is not None:
                record = await asyncio.to_thread(
                    refresh_credential, cache, record, refresh_token, now
                )
            events = await fetch_events(record, request.max_results, now)
    except TimeoutError as e:
        if stage == "storage":
            raise PersistenceError(
                f"Timed out after {timeout:g}s reading credentials for {request.user_id}"
            ) from e
        raise UpstreamFetchError(f"Timed out after {timeout:g}s retrieving events") from e

    return render_agenda(events, request, now, account_email=record.email), len(events)
