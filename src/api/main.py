"""FastAPI application entry point."""

import warnings
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import agenda_router, health_router
from core.config import API_DEBUG, API_VERSION, DB_PATH
from core.database import SqliteCredentialStore
from core.graph_client import refresh_oauth_token
from services.calendar import fetch_upcoming_events
from services.credentials import CredentialCache


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup: verify the database exists, build shared resources
    if not DB_PATH.exists():
        warnings.warn(f"Credential database not found at {DB_PATH}")

    app.state.credential_cache = CredentialCache(SqliteCredentialStore(DB_PATH))
    app.state.fetch_events = fetch_upcoming_events
    app.state.refresh_token = refresh_oauth_token

    yield


app = FastAPI(
    title="termcal",
    description="Upcoming calendar events rendered as terminal text",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)

# CORS middleware (for development)
if API_DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            code=ErrorCodes.INTERNAL_ERROR,
            details=[],
        ).model_dump(),
    )


# Include routers
app.include_router(health_router)
app.include_router(agenda_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
