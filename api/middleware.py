"""Middleware for request logging, cost tracking and security."""

from __future__ import annotations

import os
import time
import uuid
from collections.abc import Callable
from decimal import Decimal

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from api.logging_config import get_performance_logger, get_request_logger

request_logger = get_request_logger()
performance_logger = get_performance_logger()

# Maximum request body size (10MB by default)
MAX_REQUEST_SIZE = 10 * 1024 * 1024  # 10MB in bytes

# Requests slower than this are logged as performance warnings; generation
# legitimately takes tens of seconds, so it is excluded
SLOW_REQUEST_MS = 1000
GENERATION_PATH = "/letters/generate"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests and responses with tracing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Log request and response details with correlation ID."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        request_logger.info(f"[{request_id}] {method} {path} | client={client_ip}")

        start_time = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start_time) * 1000

        status_code = response.status_code
        level = "info" if status_code < 400 else "error" if status_code < 500 else "critical"
        getattr(request_logger, level)(
            f"[{request_id}] {method} {path} | "
            f"status={status_code} | duration={duration_ms:.2f}ms | client={client_ip}"
        )

        if duration_ms > SLOW_REQUEST_MS and path != GENERATION_PATH:
            performance_logger.warning(
                f"Slow request: {method} {path} | "
                f"duration={duration_ms:.2f}ms | client={client_ip} | request_id={request_id}"
            )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.2f}"
        return response


class CostTrackingMiddleware(BaseHTTPMiddleware):
    """Middleware to accumulate the estimated LLM cost of letter generation.

    The generation route stores its estimate on ``request.state.generation_cost``.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.total_estimated_cost = Decimal("0")
        self.generation_count = 0

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        cost = getattr(request.state, "generation_cost", None)
        if cost is not None and response.status_code == 200:
            self.generation_count += 1
            self.total_estimated_cost += cost
            performance_logger.info(
                f"Letter generated | "
                f"estimated_cost=${cost:.4f} | "
                f"total_cost=${self.total_estimated_cost:.2f} | "
                f"total_generations={self.generation_count}"
            )

        return response


class PayloadSizeLimitMiddleware(BaseHTTPMiddleware):
    """Middleware to enforce maximum request payload size."""

    def __init__(self, app: ASGIApp, max_size: int = MAX_REQUEST_SIZE):
        super().__init__(app)
        self.max_size = max_size

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        content_length = request.headers.get("content-length")

        if content_length and content_length.isdigit() and int(content_length) > self.max_size:
            request_logger.warning(
                f"Request payload too large: {content_length} bytes "
                f"(max: {self.max_size} bytes) | path={request.url.path}"
            )
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={
                    "error": {
                        "code": status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        "message": (
                            f"Request payload too large. Maximum size: {self.max_size} bytes "
                            f"({self.max_size // (1024 * 1024)}MB)"
                        ),
                    }
                },
            )

        return await call_next(request)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    SECURITY_HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "Cache-Control": "no-store, no-cache, must-revalidate, private",
        "Pragma": "no-cache",
    }

    def __init__(self, app: ASGIApp, enable_hsts: bool | None = None):
        super().__init__(app)
        # HSTS only makes sense behind HTTPS
        self.enable_hsts = enable_hsts if enable_hsts is not None else (
            os.getenv("PRODUCTION_MODE", "").lower() == "true"
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        for header, value in self.SECURITY_HEADERS.items():
            response.headers[header] = value

        if self.enable_hsts:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response
