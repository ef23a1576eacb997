"""
Read-through, write-through credential cache over durable storage.
"""

import sqlite3
import threading
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Protocol

from pydantic import ValidationError

from core.config import TOKEN_REFRESH_LEEWAY_SECONDS
from core.errors import CorruptRecordError, CredentialNotFoundError, PersistenceError
from models.credentials import CredentialRecord, OAuthToken

TokenRefresher = Callable[[OAuthToken], OAuthToken]


class CredentialStore(Protocol):
    """Durable key/value storage, one serialized record per user id."""

    def get(self, user_id: str) -> str | None: ...

    def upsert(self, user_id: str, data: str) -> None: ...


class CredentialCache:
    """
    In-memory map of user id -> CredentialRecord in front of a store.

    Built once at startup and shared by all requests. Entries never expire.
    A read that falls through to the store is not added to the map; only
    put() populates it.
    """

    def __init__(self, store: CredentialStore):
        self._store = store
        self._cache: dict[str, CredentialRecord] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> CredentialRecord:
        """
        Get the credential for user_id.

        Raises:
            CredentialNotFoundError: no record stored
            CorruptRecordError: stored record cannot be decoded
            PersistenceError: storage read failed
        """
        with self._lock:
            record = self._cache.get(user_id)
        if record is not None:
            return record

        try:
            data = self._store.get(user_id)
        except sqlite3.Error as e:
            raise PersistenceError(f"Error reading credentials for {user_id}: {e}") from e

        if data is None:
            raise CredentialNotFoundError(f"No credentials for {user_id}")
        try:
            return CredentialRecord.model_validate_json(data)
        except ValidationError as e:
            raise CorruptRecordError(f"Error getting credentials for {user_id}") from e

    def put(self, record: CredentialRecord) -> None:
        """
        Upsert the record into the store, then into memory.

        Raises:
            PersistenceError: storage write failed (memory left unchanged)
        """
        data = record.model_dump_json()
        with self._lock:
            try:
                self._store.upsert(record.id, data)
            except sqlite3.Error as e:
                raise PersistenceError(f"Error saving credentials for {record.id}: {e}") from e
            self._cache[record.id] = record


def token_expired(
    token: OAuthToken,
    now: datetime,
    leeway: timedelta = timedelta(seconds=TOKEN_REFRESH_LEEWAY_SECONDS),
) -> bool:
    """Check if the access token expires within leeway of now (no expiry: never)."""
    if token.expiry is None:
        return False
    return token.expiry - leeway <= now


def refresh_credential(
    cache: CredentialCache,
    record: CredentialRecord,
    refresh_token: TokenRefresher,
    now: datetime,
) -> CredentialRecord:
    """
    Renew an expired token and store the replaced record.

    Records that are still valid, or that have no refresh token, are
    returned unchanged.

    Raises:
        UpstreamFetchError: provider refused the refresh (from refresh_token)
        PersistenceError: the renewed record could not be stored
    """
    if not record.token.refresh_token or not token_expired(record.token, now):
        return record

    renewed = record.model_copy(update={"token": refresh_token(record.token)})
    cache.put(renewed)
    return renewed
