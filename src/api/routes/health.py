"""
Health endpoints.

/health and /live never touch the catalog. /health/detailed and /ready
read one catalog row through the OutfitEngine, on the same retrieval path
and under the same time budget as a compose request, so a catalog that
cannot serve outfits does not report ready.
"""

import time
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config.database import SupabaseClientError
from config.settings import get_settings
from core.logging import get_logger
from outfits.exceptions import RetrievalError
from services.outfit_engine import OutfitEngine, get_outfit_engine


logger = get_logger(__name__)

router = APIRouter(tags=["Health"])

SERVICE_NAME = "outfit-api"


def get_health_engine() -> Optional[OutfitEngine]:
    """Engine for catalog checks; None when no catalog is configured."""
    try:
        return get_outfit_engine()
    except SupabaseClientError:
        return None


def check_catalog(engine: Optional[OutfitEngine]) -> Dict[str, Any]:
    """Catalog status, error and latency for one single-row read."""
    if engine is None:
        return {"status": "not_configured", "error": None, "latency_ms": None}

    started = time.perf_counter()
    error = None
    try:
        status = engine.catalog_status()
    except RetrievalError as e:
        status, error = "error", str(e)
        logger.warning("Catalog health check failed", error=error)
    return {
        "status": status,
        "error": error,
        "latency_ms": round((time.perf_counter() - started) * 1000, 1),
    }


@router.get("/health")
async def health_check() -> Dict[str, str]:
    """Process is up. No dependencies are checked."""
    return {"status": "healthy", "service": SERVICE_NAME}


@router.get("/health/detailed")
def detailed_health_check(
    engine: Optional[OutfitEngine] = Depends(get_health_engine),
) -> Dict[str, Any]:
    settings = get_settings()
    catalog = dict(check_catalog(engine), table=settings.catalog_table)
    return {
        "status": "healthy" if catalog["status"] == "connected" else "degraded",
        "service": SERVICE_NAME,
        "environment": settings.environment,
        "checks": {"catalog": catalog},
    }


@router.get("/ready")
def readiness_check(engine: Optional[OutfitEngine] = Depends(get_health_engine)):
    """503 until the catalog returns a row."""
    catalog = check_catalog(engine)
    if catalog["status"] == "connected":
        return {"status": "ready"}
    return JSONResponse(
        status_code=503,
        content={"status": "not_ready", "reason": f"catalog_{catalog['status']}"},
    )


@router.get("/live")
async def liveness_check() -> Dict[str, str]:
    return {"status": "alive"}
