"""Health check endpoints. No authentication required.

- /health       — legacy, backward-compatible
- /health/live  — liveness probe (always 200)
- /health/ready — readiness probe (checks Weaviate)
"""

import asyncio

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_weaviate_client
from app.core.weaviate import WeaviateClient

router = APIRouter()
logger = structlog.stdlib.get_logger("weaviate_dashboard.health")

# Timeout for the readiness ping (seconds)
_HEALTH_CHECK_TIMEOUT = 3.0


@router.get("/health")
async def health_check():
    """Legacy health check — backward compatible."""
    return {"status": "healthy", "service": "weaviate-dashboard"}


@router.get("/health/live")
async def liveness():
    """Liveness probe — process is alive."""
    return {"status": "live"}


async def _check_weaviate(client: WeaviateClient) -> dict:
    try:
        ok = await asyncio.wait_for(client.ping(), timeout=_HEALTH_CHECK_TIMEOUT)
    except TimeoutError:
        logger.warning("readiness_check_failed", dependency="weaviate", error="timeout")
        return {"status": "error", "detail": "timeout", "_healthy": False}
    if not ok:
        logger.warning("readiness_check_failed", dependency="weaviate", url=client.base_url)
        return {"status": "error", "detail": "not ready", "_healthy": False}
    return {"status": "ok", "_healthy": True}


@router.get("/health/ready")
async def readiness(client: WeaviateClient = Depends(get_weaviate_client)):
    """Readiness probe. Fails while Weaviate is not ready."""
    result = await _check_weaviate(client)
    healthy = result.pop("_healthy")
    return JSONResponse(
        content={
            "status": "ready" if healthy else "not_ready",
            "checks": {"weaviate": result},
        },
        status_code=200 if healthy else 503,
    )
