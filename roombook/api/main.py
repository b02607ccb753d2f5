import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from roombook import __version__
from roombook.api.deps import get_context, get_rules
from roombook.app_shell.config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    # Load rules and prepare storage on startup (fail-fast)
    try:
        rules = get_rules()
        configure_logging(rules)
        get_context()
    except Exception as e:
        print(f"CRITICAL: Startup failed: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("roombook API started")
    yield


app = FastAPI(
    title="Roombook API",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from roombook.api.routes import bookings, rooms  # noqa: E402

app.include_router(rooms.router, prefix="/api/rooms", tags=["Rooms"])
app.include_router(bookings.router, prefix="/api/bookings", tags=["Bookings"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
