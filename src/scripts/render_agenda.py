#!/usr/bin/env python3
"""
Render a user's upcoming agenda to stdout.

Usage:
    uv run python src/scripts/render_agenda.py ab12cd34ef-... --tz Europe/London --exclude '^Lunch'
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH, DEFAULT_MAX_RESULTS, DEFAULT_TIME_ZONE
from core.database import SqliteCredentialStore
from core.errors import TermcalError
from core.graph_client import refresh_oauth_token
from models.requests import RenderRequest
from services.agenda import generate_agenda
from services.calendar import fetch_upcoming_events
from services.credentials import CredentialCache


def parse_args(argv: list[str] | None = None) -> RenderRequest:
    """Parse command line options into a render request."""
    parser = argparse.ArgumentParser(description="Render upcoming calendar events")
    parser.add_argument("user_id")
    parser.add_argument("--limit", type=int, default=DEFAULT_MAX_RESULTS)
    parser.add_argument("--tz", default=DEFAULT_TIME_ZONE)
    parser.add_argument("--no-all-day", action="store_true", help="Hide all-day events")
    parser.add_argument("--highlights", default="", help="CSV of regex,color pairs")
    parser.add_argument("--exclude", default="", help="CSV of regex patterns")
    parser.add_argument("--width", type=int, default=0)
    parser.add_argument("--no-color", action="store_true")
    args = parser.parse_args(argv)

    return RenderRequest(
        user_id=args.user_id,
        max_results=args.limit,
        time_zone=args.tz,
        all_day=not args.no_all_day,
        highlights=args.highlights,
        exclude=args.exclude,
        max_width=args.width,
        no_color=args.no_color,
    )


async def main():
    request = parse_args()
    cache = CredentialCache(SqliteCredentialStore(DB_PATH))

    try:
        request.prepare()
        text, _ = await generate_agenda(
            request, cache, fetch_upcoming_events, refresh_token=refresh_oauth_token
        )
    except TermcalError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(text, end="")


if __name__ == "__main__":
    asyncio.run(main())
