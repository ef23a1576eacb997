#!/usr/bin/env python3
"""
Store a user's OAuth token and print their shareable agenda link.

Re-running for the same upstream id replaces the stored token.

Usage:
    uv run python src/scripts/add_credential.py --upstream-id 00000000-... \\
        --access-token eyJ0... --refresh-token 0.AX... --expires-in 3600 \\
        --email someone@example.com
"""

import argparse
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH, PUBLIC_BASE_URL
from core.database import SqliteCredentialStore
from core.errors import PersistenceError
from models.credentials import CredentialRecord, OAuthToken, derive_user_id
from services.credentials import CredentialCache


def build_record(
    upstream_id: str,
    access_token: str,
    refresh_token: str | None = None,
    expires_in: int | None = None,
    email: str | None = None,
) -> CredentialRecord:
    """Build the credential record for an upstream account."""
    expiry = None
    if expires_in is not None:
        expiry = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
    return CredentialRecord(
        id=derive_user_id(upstream_id),
        token=OAuthToken(
            access_token=access_token,
            refresh_token=refresh_token,
            expiry=expiry,
        ),
        email=email,
    )


def agenda_link(user_id: str) -> str:
    return f"{PUBLIC_BASE_URL.rstrip('/')}/cal/{user_id}"


def main():
    parser = argparse.ArgumentParser(description="Register a user's calendar credential")
    parser.add_argument("--upstream-id", required=True, help="Provider's user id")
    parser.add_argument("--access-token", required=True)
    parser.add_argument("--refresh-token")
    parser.add_argument("--expires-in", type=int, help="Token lifetime in seconds")
    parser.add_argument("--email", help="Account address (for response colors)")
    args = parser.parse_args()

    record = build_record(
        args.upstream_id,
        args.access_token,
        refresh_token=args.refresh_token,
        expires_in=args.expires_in,
        email=args.email,
    )

    cache = CredentialCache(SqliteCredentialStore(DB_PATH))
    try:
        cache.put(record)
    except PersistenceError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Stored credentials for {record.id}")
    print(f"  Link: {agenda_link(record.id)}")


if __name__ == "__main__":
    main()
