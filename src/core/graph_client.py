"""
MS Graph client setup for a user's delegated OAuth token.
"""

from datetime import datetime, timedelta, timezone

import msal
from azure.core.credentials import AccessToken
from msgraph import GraphServiceClient

from core.config import GRAPH_APP_ID, GRAPH_CLIENT_SECRET, GRAPH_SCOPES, GRAPH_TENANT_ID
from core.errors import UpstreamFetchError
from models.credentials import OAuthToken

_msal_app: msal.ClientApplication | None = None


class OAuthTokenCredential:
    """Token credential serving an already-issued access token.

    Expired tokens are renewed before a client is built (see
    refresh_oauth_token), so this never refreshes on its own.
    """

    def __init__(self, token: OAuthToken):
        self._token = token

    def get_token(self, *scopes: str, **kwargs) -> AccessToken:
        expiry = self._token.expiry or datetime.now(timezone.utc) + timedelta(hours=1)
        return AccessToken(self._token.access_token, int(expiry.timestamp()))


def get_graph_client(token: OAuthToken) -> GraphServiceClient:
    """Create a Graph client acting as the token's user."""
    return GraphServiceClient(credentials=OAuthTokenCredential(token), scopes=GRAPH_SCOPES)


def get_msal_app() -> msal.ClientApplication:
    """Get or create the MSAL application used for token refresh (lazy initialization)."""
    global _msal_app
    if _msal_app is None:
        authority = f"https://login.microsoftonline.com/{GRAPH_TENANT_ID}"
        if GRAPH_CLIENT_SECRET:
            _msal_app = msal.ConfidentialClientApplication(
                GRAPH_APP_ID, client_credential=GRAPH_CLIENT_SECRET, authority=authority
            )
        else:
            _msal_app = msal.PublicClientApplication(GRAPH_APP_ID, authority=authority)
    return _msal_app


def refresh_oauth_token(token: OAuthToken) -> OAuthToken:
    """
    Exchange the refresh token for a new token.

    The provider may rotate the refresh token; the old one is kept when it
    does not.

    Raises:
        UpstreamFetchError: refresh was rejected or the provider is unreachable
    """
    try:
        result = get_msal_app().acquire_token_by_refresh_token(
            token.refresh_token, scopes=GRAPH_SCOPES
        )
    except Exception as e:
        raise UpstreamFetchError(f"Unable to refresh access token: {e}") from e

    if "access_token" not in result:
        reason = result.get("error_description") or result.get("error") or "unknown error"
        raise UpstreamFetchError(f"Unable to refresh access token: {reason}")

    return OAuthToken(
        access_token=result["access_token"],
        refresh_token=result.get("refresh_token") or token.refresh_token,
        token_type=result.get("token_type", "Bearer"),
        expiry=datetime.now(timezone.utc) + timedelta(seconds=int(result.get("expires_in", 3600))),
    )
