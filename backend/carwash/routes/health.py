# backend/carwash/routes/health.py
"""
Health check and metrics endpoints for monitoring and load balancers.
"""

from datetime import datetime, timezone
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Response
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import __version__
from ..api.dependencies import get_cache_service_dep, get_db
from ..core.config import settings
from ..database import get_db_pool_status
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..services.cache_service import CacheService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health(
    db: Session = Depends(get_db),
    cache: CacheService = Depends(get_cache_service_dep),
) -> Dict[str, Any]:
    """Liveness plus a database round trip, pool usage and the active cache backend."""
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.error(f"Health check database failure: {e}")
        database = "error"

    return {
        "status": "healthy" if database == "ok" else "degraded",
        "version": __version__,
        "environment": settings.environment,
        "database": database,
        "cache": cache.backend,
        "pool": get_db_pool_status(),
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }


@router.get("/metrics")
def metrics() -> Response:
    """Prometheus exposition of the application registry. Public, no auth."""
    return Response(
        content=prometheus_metrics.get_metrics(),
        media_type=prometheus_metrics.get_content_type(),
    )
