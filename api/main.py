"""FastAPI surface for demand letter templates and generation."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import letters, templates
from api.logging_config import configure_logging
from api.middleware import (
    CostTrackingMiddleware,
    PayloadSizeLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from core.config import get_settings
from core.exceptions import (
    ConfigurationError,
    ContentQualityError,
    GenerationTimeoutError,
    ServiceError,
    StenoError,
    StructuralError,
    TextExtractionError,
)
from letter_factory import DemandLetterFactory

# Configure logging first
configure_logging()

logger = logging.getLogger("steno.api")

# Most specific classes first
ERROR_STATUS_CODES: list[tuple[type[StenoError], int]] = [
    (StructuralError, 400),
    (ContentQualityError, 422),
    (TextExtractionError, 422),
    (ConfigurationError, 503),
    (GenerationTimeoutError, 504),
    (ServiceError, 502),
]


def status_code_for(exc: StenoError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan (startup and shutdown)."""
    logger.info("Starting Steno API")
    factory = DemandLetterFactory()
    letters.configure_factory(factory)
    app.state.letter_factory = factory
    logger.info(f"Letter factory ready (provider: {factory.client.provider})")

    yield

    logger.info("Shutting down Steno API")


app = FastAPI(
    title="Steno Demand Letter API",
    description="Demand letter templates and AI letter generation.",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.startup_time = time.time()

# Attach rate limiter to app state and add exception handler
app.state.limiter = letters.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

cors_origins = get_settings().cors_origin_list
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Response-Time-Ms"],
    )

# Add middleware (order matters - last added is executed first)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(CostTrackingMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(PayloadSizeLimitMiddleware)  # Check payload size first


@app.exception_handler(StenoError)
async def steno_exception_handler(request: Request, exc: StenoError) -> JSONResponse:
    """Map pipeline errors onto HTTP statuses."""
    request_id = getattr(request.state, "request_id", "unknown")
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{exc.__class__.__name__}: {exc.message} | request_id={request_id}")
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": status_code,
                "type": exc.__class__.__name__,
                "message": exc.message,
                "details": exc.details,
                "request_id": request_id,
            }
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Return standardized JSON error responses."""
    request_id = getattr(request.state, "request_id", "unknown")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.status_code,
                "message": exc.detail,
                "request_id": request_id,
            }
        },
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return standardized validation error responses."""
    request_id = getattr(request.state, "request_id", "unknown")
    errors = []
    for error in exc.errors():
        location = " -> ".join(str(loc) for loc in error["loc"])
        errors.append({"field": location, "message": error["msg"]})

    return JSONResponse(
        status_code=422,
        content={
            "error": {
                "code": 422,
                "message": "Validation error",
                "details": errors[:10],  # Limit to first 10 errors
                "request_id": request_id,
            }
        },
    )


app.include_router(templates.router, prefix="/templates", tags=["templates"])
app.include_router(letters.router, tags=["letters"])


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    """Basic health check for load balancers and monitoring."""
    return {"status": "healthy"}


@app.get("/health/ready", tags=["system"])
async def readiness_probe(request: Request) -> dict:
    """Readiness probe: is a letter factory installed and is its provider configured?"""
    factory = getattr(request.app.state, "letter_factory", None)
    checks = {
        "letter_factory": factory is not None,
        "llm_credentials": bool(factory and factory.client.is_configured),
    }
    uptime_seconds = time.time() - getattr(request.app.state, "startup_time", time.time())

    return {
        "status": "ready" if all(checks.values()) else "not_ready",
        "uptime_seconds": round(uptime_seconds, 2),
        "checks": checks,
    }
