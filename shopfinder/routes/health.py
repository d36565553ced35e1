from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from shopfinder.services.catalogue import CatalogueError, get_base_catalogue
from shopfinder.services.overrides import get_override_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthcheck() -> dict[str, str]:
    """
    Basic liveness probe - returns OK if the application is running.
    """
    return {"status": "ok"}


@router.get("/health")
async def health() -> JSONResponse:
    """
    Checks the base catalogue loaded and the override store is usable.
    Returns 200 if all checks pass, 503 if any check fails.
    """
    health_status: Dict[str, Any] = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {},
    }

    overall_healthy = True

    try:
        shops = get_base_catalogue()
        health_status["checks"]["catalogue"] = {
            "status": "healthy",
            "message": f"{len(shops)} shops loaded",
        }
    except CatalogueError as e:
        logger.error("Catalogue health check failed: %s", e)
        health_status["checks"]["catalogue"] = {
            "status": "unhealthy",
            "message": str(e),
        }
        overall_healthy = False

    store = get_override_store()
    path = store.path
    if path is not None and path.exists() and not path.is_file():
        health_status["checks"]["overrides"] = {
            "status": "unhealthy",
            "message": f"{path} is not a file",
        }
        overall_healthy = False
    else:
        health_status["checks"]["overrides"] = {
            "status": "healthy",
            "message": f"{len(store.all())} shops edited",
        }

    if not overall_healthy:
        health_status["status"] = "unhealthy"
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=health_status,
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content=health_status)
