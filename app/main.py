import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.deps import get_engine
from app.api.routers.analytics import router as analytics_router
from app.api.routers.health import router as health_router
from app.config import get_settings
from app.domain.errors import (
    DomainError,
    InvalidDateRangeError,
    InvalidTrendPeriodError,
    StoreUnavailableError,
)
from app.infrastructure.db.tables import metadata

settings = get_settings()

# Configure structured logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.store_backend != "sql":
        yield
        return
    engine = get_engine()
    # Initialize DB tables (for dev/demo purposes)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield
    await engine.dispose()

app = FastAPI(
    title="Rental Analytics API",
    version="0.1.0",
    lifespan=lifespan
)


def _domain_error_response(status_code: int, exc: DomainError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    logger.error(
        "Document store unavailable",
        extra={"path": request.url.path, "collection": exc.collection, "reason": exc.reason},
    )
    return _domain_error_response(503, exc)


@app.exception_handler(InvalidTrendPeriodError)
async def invalid_trend_period_handler(request: Request, exc: InvalidTrendPeriodError):
    return _domain_error_response(422, exc)


@app.exception_handler(InvalidDateRangeError)
async def invalid_date_range_handler(request: Request, exc: InvalidDateRangeError):
    return _domain_error_response(422, exc)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    logger.warning("Domain error", extra={"path": request.url.path, "code": exc.code})
    return _domain_error_response(400, exc)


# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler to prevent stack trace exposure to clients.
    All unhandled exceptions are logged internally and return a generic error message.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "message": "An unexpected error occurred. Please contact support with the error_id if the issue persists."
        }
    )


app.include_router(health_router, tags=["Health"])
app.include_router(analytics_router, prefix="/api/v1", tags=["Analytics"])
