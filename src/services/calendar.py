"""
Upcoming event fetching from MS Graph.
"""

from datetime import datetime, timedelta

from msgraph.generated.models.o_data_errors.o_data_error import ODataError
from msgraph.generated.users.item.calendar_view.calendar_view_request_builder import (
    CalendarViewRequestBuilder,
)

from core.config import CALENDAR_HORIZON_DAYS
from core.errors import UpstreamFetchError
from core.graph_client import get_graph_client
from models.credentials import CredentialRecord
from models.events import Attendee, CalendarEvent


async def fetch_upcoming_events(
    record: CredentialRecord, max_results: int, now: datetime
) -> list[CalendarEvent]:
    """
    Fetch the user's next events from their default calendar.

    Uses calendarView so recurring events come back as single instances,
    ordered by start time and capped at max_results.
    """
    if max_results < 1:
        return []

    graph = get_graph_client(record.token)

    start_str = now.strftime("%Y-%m-%dT%H:%M:%SZ")
    end_str = (now + timedelta(days=CALENDAR_HORIZON_DAYS)).strftime("%Y-%m-%dT%H:%M:%SZ")

    query_params = CalendarViewRequestBuilder.CalendarViewRequestBuilderGetQueryParameters(
        start_date_time=start_str,
        end_date_time=end_str,
        orderby=["start/dateTime"],
        top=max_results,
    )
    config = CalendarViewRequestBuilder.CalendarViewRequestBuilderGetRequestConfiguration(
        query_parameters=query_params
    )

    try:
        events_response = await graph.me.calendar_view.get(request_configuration=config)
    except ODataError as e:
        message = e.error.message if e.error else str(e)
        raise UpstreamFetchError(f"Unable to retrieve upcoming events: {message}") from e
    except Exception as e:
        # transport, auth and decoding failures from the SDK
        raise UpstreamFetchError(f"Unable to retrieve upcoming events: {e}") from e

    raw_events = events_response.value if events_response and events_response.value else []

    return [parse_event(event) for event in raw_events if not event.is_cancelled]


def parse_event(event) -> CalendarEvent:
    """Parse MS Graph event into our format."""
    start_date_time = None
    start_date = None

    if event.start and event.start.date_time:
        raw = event.start.date_time
        if event.is_all_day:
            start_date = raw[:10]
        elif (event.start.time_zone or "UTC") == "UTC":
            # Graph returns UTC wall time with 7 fractional digits and no offset
            start_date_time = raw.split(".")[0] + "+00:00"
        else:
            start_date_time = raw

    attendees: list[Attendee] = []
    for attendee in event.attendees or []:
        email = ""
        if attendee.email_address and attendee.email_address.address:
            email = attendee.email_address.address
        response = "needsAction"
        if attendee.status and attendee.status.response:
            response = attendee.status.response.value
        attendees.append({"email": email, "response_status": response})

    return {
        "title": event.subject or "",
        "start_date_time": start_date_time,
        "start_date": start_date,
        "attendees": attendees,
    }
