"""
Pytest configuration and shared fixtures.
"""

import sqlite3
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models.credentials import CredentialRecord, OAuthToken  # noqa: E402


class MemoryCredentialStore:
    """Dict-backed credential store that counts reads and can fail writes."""

    def __init__(self):
        self.rows: dict[str, str] = {}
        self.reads = 0
        self.fail_writes = False

    def get(self, user_id: str) -> str | None:
        self.reads += 1
        return self.rows.get(user_id)

    def upsert(self, user_id: str, data: str) -> None:
        if self.fail_writes:
            raise sqlite3.OperationalError("database is locked")
        self.rows[user_id] = data


@pytest.fixture
def now():
    """Tue, Nov 04 2025 09:00 in America/New_York (EST)."""
    return datetime(2025, 11, 4, 14, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_event():
    """Sample timed event starting at 10:30 New York time."""
    return {
        "title": "Design review",
        "start_date_time": "2025-11-04T15:30:00+00:00",
        "start_date": None,
        "attendees": [
            {"email": "pat@example.com", "response_status": "accepted"},
            {"email": "sam@example.com", "response_status": "declined"},
        ],
    }


@pytest.fixture
def all_day_event():
    """Sample all-day event on Thursday."""
    return {
        "title": "Offsite",
        "start_date_time": None,
        "start_date": "2025-11-06",
        "attendees": [],
    }


@pytest.fixture
def credential_record():
    """Credential for a registered user."""
    return CredentialRecord(
        id="ab12cd34ef-0011223344-5566778899-aabbccddee",
        token=OAuthToken(
            access_token="access-1",
            refresh_token="refresh-1",
            expiry=datetime(2025, 11, 4, 15, 0, tzinfo=timezone.utc),
        ),
        email="pat@example.com",
    )


@pytest.fixture
def memory_store():
    return MemoryCredentialStore()


@pytest.fixture
def db_path(tmp_path):
    """Initialized SQLite database in a temp directory."""
    from scripts.init_db import create_database

    path = tmp_path / "db" / "termcal.db"
    create_database(path)
    return path
