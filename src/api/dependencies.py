"""FastAPI dependencies for shared resources."""

from fastapi import Request

from services.agenda import EventSource
from services.credentials import CredentialCache, TokenRefresher


def get_credential_cache(request: Request) -> CredentialCache:
    """Process-wide credential cache created in the app lifespan."""
    return request.app.state.credential_cache


def get_event_source(request: Request) -> EventSource:
    """Event fetcher used to load a user's upcoming events."""
    return request.app.state.fetch_events


def get_token_refresher(request: Request) -> TokenRefresher:
    """Exchanges a refresh token for a new access token."""
    return request.app.state.refresh_token
