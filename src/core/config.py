"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(
    os.environ.get("TERMCAL_DB_PATH", str(PROJECT_ROOT / "data" / "db" / "termcal.db"))
)

# =============================================================================
# RENDER DEFAULTS
# =============================================================================

DEFAULT_MAX_RESULTS = 10
MAX_RESULTS_CAP = 50
DEFAULT_TIME_ZONE = "America/New_York"
DEFAULT_MAX_WIDTH = 50

NO_EVENTS_MESSAGE = "No upcoming events found."

DATE_COLOR = "cyan"
LABEL_COLOR = "blue"

# =============================================================================
# MS GRAPH
# =============================================================================

GRAPH_SCOPES = ["https://graph.microsoft.com/Calendars.Read"]
GRAPH_TENANT_ID = os.environ.get("MICROSOFT_GRAPH_TENANT_ID", "common")
GRAPH_APP_ID = os.environ.get("MICROSOFT_GRAPH_APP_ID", "")
GRAPH_CLIENT_SECRET = os.environ.get("MICROSOFT_GRAPH_CLIENT_SECRET", "")
TOKEN_REFRESH_LEEWAY_SECONDS = int(os.environ.get("TOKEN_REFRESH_LEEWAY_SECONDS", "300"))
CALENDAR_HORIZON_DAYS = int(os.environ.get("CALENDAR_HORIZON_DAYS", "365"))
UPSTREAM_TIMEOUT_SECONDS = float(os.environ.get("UPSTREAM_TIMEOUT_SECONDS", "10"))

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
PUBLIC_BASE_URL = os.environ.get("PUBLIC_BASE_URL", f"http://localhost:{API_PORT}")
API_VERSION = "1.0.0"
