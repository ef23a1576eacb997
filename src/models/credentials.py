"""Credential records stored per user."""

import hashlib
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class OAuthToken(BaseModel):
    """OAuth token payload as issued by the identity provider."""

    model_config = ConfigDict(frozen=True)

    access_token: str
    refresh_token: str | None = None
    token_type: str = "Bearer"
    expiry: datetime | None = None


class CredentialRecord(BaseModel):
    """
    Credential for one end user.

    The token is replaced wholesale on re-authorization (build a new record
    with the same id); records are never mutated in place.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    token: OAuthToken
    email: str | None = None  # account address, matched against attendees


def derive_user_id(upstream_id: str) -> str:
    """
    Derive the stable, shareable user id from the provider's user id.

    Example: 'ab12cd34ef-0011223344-5566778899-aabbccddee'
    """
    digest = hashlib.sha1(upstream_id.encode()).digest()
    return "-".join(
        digest[start:end].hex() for start, end in ((0, 5), (5, 10), (10, 15), (15, 20))
    )
