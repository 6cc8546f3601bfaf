"""
Catalog API — Health Check and Welcome Routes
===============================================

What:  GET / (plain-text welcome) and GET /health (dependency probe).
Who:   Humans poking the server, Docker health checks, load balancers.

Status levels:
    - healthy:   MongoDB answered a ping
    - unhealthy: MongoDB unreachable (handlers would answer 500)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from pymongo.errors import PyMongoError

from app import __version__
from app.database import DocumentStore, get_store
from app.schemas.document import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Welcome text")
async def home_page() -> str:
    logger.debug("Endpoint hit: home page")
    return "Welcome to the HomePage!"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Pings MongoDB and reports overall status and uptime.",
)
async def health_check(store: DocumentStore = Depends(get_store)) -> HealthResponse:
    """Never raises: an unreachable store is reported, not propagated."""
    db_status = "connected"
    overall = "healthy"

    try:
        await store.ping()
    except PyMongoError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: MongoDB unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
