"""
Health check endpoints for monitoring and orchestration (K8s, Docker, etc.)

Provides multiple health check endpoints:
- /health: Basic liveness check (always returns 200)
- /health/store: Document store reachability check
- /health/ready: Readiness check (all dependencies healthy)
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.dependencies import get_document_store
from app.application.interfaces.document_store import DocumentStore
from app.config import Settings, get_settings
from app.domain.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "rental-analytics"


@router.get("/health")
async def health_check():
    """
    Basic liveness probe.

    Returns 200 OK if the application is running.
    """
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/store")
async def health_check_store(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
):
    """
    Document store connectivity check.

    Returns 503 Service Unavailable if the configured store cannot be read.
    """
    try:
        await store.ping()
        return {"status": "healthy", "component": "store", "backend": settings.store_backend}
    except StoreUnavailableError as e:
        logger.error("Store health check failed", exc_info=e, extra={"backend": settings.store_backend})
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "component": "store",
                "backend": settings.store_backend,
                "error": "Document store unavailable",
            },
        )


@router.get("/health/ready")
async def health_check_ready(store: DocumentStore = Depends(get_document_store)):
    """
    Readiness probe for K8s/orchestration.

    Returns 503 if the document store is not reachable.
    """
    health_status = {"status": "ready", "checks": {}}

    try:
        await store.ping()
        health_status["checks"]["store"] = "healthy"
    except StoreUnavailableError as e:
        logger.error("Readiness check: store unhealthy", exc_info=e)
        health_status["status"] = "not_ready"
        health_status["checks"]["store"] = "unhealthy"
        return JSONResponse(status_code=503, content=health_status)

    return health_status


@router.get("/health/live")
async def health_check_live():
    """Alias for /health for Kubernetes liveness probe."""
    return {"status": "ok", "service": SERVICE_NAME}
