"""
DelipuCash Backend: Health Check Routes
=========================================

What:  Readiness (/health) and liveness (/ping) probes, plus the service
       banner at /.
Who:   Called by load balancers, uptime monitors and the Vercel platform.

Status levels:
    - healthy:   database answered SELECT 1 (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, stop routing traffic)

/ping never touches the database: it only proves the process is serving.
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from delipucash import __version__
from delipucash.config import Settings
from delipucash.database import ping_database
from delipucash.schemas.common import HealthResponse, IndexResponse, PingResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Listed by GET / and in the body of unknown-route 404s
AVAILABLE_ROUTES = ("/", "/health", "/ping", "/api/responses/*")

# Initialized once when the module loads
_start_time = time.time()


@router.get("/", response_model=IndexResponse, summary="Service banner")
async def index() -> IndexResponse:
    return IndexResponse(
        message="DelipuCash Mobile API Server",
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        endpoints={"health": "/health", "ping": "/ping", "responses": "/api/responses/*"},
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request) -> JSONResponse:
    """
    Probe the database and report aggregate status.

    Returns HealthResponse with 200 when the database is reachable and 503
    otherwise, so probes can act on the status code alone. The reported
    environment is the one the app was built with (create_app settings).
    """
    app_settings: Settings = request.app.state.settings
    connected = await ping_database()
    if not connected:
        logger.warning("Health check: database unreachable")

    payload = HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        environment=app_settings.environment,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(
        status_code=200 if connected else 503,
        content=payload.model_dump(mode="json", by_alias=True),
    )


@router.get("/ping", response_model=PingResponse, summary="Liveness probe")
async def ping() -> PingResponse:
    return PingResponse(timestamp=datetime.now(timezone.utc))
