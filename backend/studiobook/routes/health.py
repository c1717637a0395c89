# backend/studiobook/routes/health.py
"""
Health check and metrics endpoints.

``/health`` checks database connectivity; ``/metrics`` exposes the
Prometheus registry filled by ``@BaseService.measure_operation``.
"""

from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.constants import API_VERSION, BRAND_NAME
from ..database import get_db
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..schemas.availability_calendar import HealthCheckResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthCheckResponse)
def health_check(db: Session = Depends(get_db)) -> HealthCheckResponse:
    """
    Basic health check endpoint.

    Returns:
        Simple status indicating the service is running.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = True
        status = "healthy"
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        db_status = False
        status = "degraded"

    return HealthCheckResponse(
        status=status,
        service=f"{BRAND_NAME} API",
        version=API_VERSION,
        timestamp=datetime.now(timezone.utc),
        checks={"database": db_status},
    )


@router.get("/metrics", include_in_schema=False, response_class=Response, response_model=None)
def get_prometheus_metrics() -> Response:
    """Expose Prometheus metrics for scraping."""
    return Response(
        content=prometheus_metrics.get_metrics(),
        media_type=prometheus_metrics.get_content_type(),
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
    )
