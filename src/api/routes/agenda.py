"""Agenda rendering endpoint."""

import time
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import PlainTextResponse

from api.dependencies import get_credential_cache, get_event_source, get_token_refresher
from api.logging import RequestLog, log_request
from api.models.responses import ErrorCodes
from core.config import DEFAULT_MAX_RESULTS, DEFAULT_TIME_ZONE
from core.errors import (
    CorruptRecordError,
    CredentialNotFoundError,
    PersistenceError,
    RequestValidationError,
    TermcalError,
    UpstreamFetchError,
)
from models.requests import RenderRequest
from services.agenda import EventSource, generate_agenda
from services.credentials import CredentialCache, TokenRefresher

router = APIRouter()


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _error_response(
    request_log: RequestLog,
    status_code: int,
    error: TermcalError,
    detail_type: str | None = None,
) -> PlainTextResponse:
    """Record the error on the request log and return it as plain text."""
    request_log.status_code = status_code
    request_log.error_code = error.code
    request_log.error_message = str(error)
    if detail_type:
        request_log.details.append((detail_type, str(error)))
    return PlainTextResponse(str(error), status_code=status_code)


@router.get("/cal/{user_id}", response_class=PlainTextResponse)
async def render_calendar(
    request: Request,
    user_id: str,
    limit: Annotated[int, Query(description="Maximum events to fetch (capped at 50)")] = DEFAULT_MAX_RESULTS,
    tz: Annotated[str, Query(description="IANA timezone name")] = DEFAULT_TIME_ZONE,
    all_day: Annotated[bool, Query(alias="allDay", description="Include all-day events")] = True,
    highlights: Annotated[str, Query(description="CSV of regex,color pairs")] = "",
    exclude: Annotated[str, Query(description="CSV of regex patterns to hide")] = "",
    width: Annotated[int, Query(description="Wrap titles at this column")] = 0,
    no_color: Annotated[bool, Query(alias="noColor", description="Disable ANSI colors")] = False,
    cache: CredentialCache = Depends(get_credential_cache),
    fetch_events: EventSource = Depends(get_event_source),
    refresh_token: TokenRefresher = Depends(get_token_refresher),
):
    """
    Render the user's upcoming events as terminal text.

    Meant for `curl`; ANSI colors are embedded unless noColor is set.
    """
    start_time = time.time()

    render_request = RenderRequest(
        user_id=user_id,
        max_results=limit,
        time_zone=tz,
        all_day=all_day,
        highlights=highlights,
        exclude=exclude,
        max_width=width,
        no_color=no_color,
    )

    # Initialize request log
    request_log = RequestLog(
        endpoint="/cal/{user_id}",
        method="GET",
        client_ip=get_client_ip(request),
        user_id=user_id,
        time_zone=tz,
    )

    try:
        render_request.prepare()
        request_log.max_results = render_request.max_results

        text, events_fetched = await generate_agenda(
            render_request, cache, fetch_events, refresh_token=refresh_token
        )

        request_log.status_code = 200
        request_log.events_fetched = events_fetched
        return PlainTextResponse(text)

    except RequestValidationError as e:
        return _error_response(
            request_log, status.HTTP_400_BAD_REQUEST, e, "validation_error"
        )

    except CredentialNotFoundError as e:
        return _error_response(request_log, status.HTTP_404_NOT_FOUND, e)

    except UpstreamFetchError as e:
        return _error_response(
            request_log, status.HTTP_502_BAD_GATEWAY, e, "upstream_error"
        )

    except CorruptRecordError as e:
        return _error_response(request_log, status.HTTP_500_INTERNAL_SERVER_ERROR, e)

    except PersistenceError as e:
        return _error_response(request_log, status.HTTP_500_INTERNAL_SERVER_ERROR, e)

    except Exception as e:
        # Unexpected errors
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        return PlainTextResponse(
            "Internal server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        # Always log the request
        try:
            log_request(request_log)
        except Exception:
            # Don't fail the request if logging fails
            pass
