"""Evidence Manager - API Middleware
Request logging, API key enforcement and security headers.
"""

import secrets
import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from api.responses import envelope_content
from core.logging import get_logger
from core.responses import ResponseMessage


# Health endpoints reachable without the API key
API_KEY_EXEMPT_PATHS = {"/", "/health", "/live", "/ready"}


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Rejects requests that do not carry the static API key.

    Fails closed: with no key configured every non-exempt request is
    rejected.
    """

    def __init__(self, app, api_key: str, header_name: str = "X-Api-Key"):
        super().__init__(app)
        self.api_key = api_key
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # CORS preflights never carry custom headers
        if request.method == "OPTIONS" or request.url.path in API_KEY_EXEMPT_PATHS:
            return await call_next(request)

        provided = request.headers.get(self.header_name, "")
        if not self.api_key or not secrets.compare_digest(provided, self.api_key):
            get_logger().warning(
                "Rejected request without valid API key",
                method=request.method,
                path=request.url.path,
            )
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content=envelope_content(
                    ResponseMessage.USER_IS_NOT_AUTHENTICATED, ["Invalid or missing API key"]
                ),
            )

        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging all HTTP requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        logger = get_logger()

        # Generate request ID
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.perf_counter()

        logger.debug(
            "Request started",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client=request.client.host if request.client else "unknown",
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request failed: {e!s}",
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                duration_ms=round(duration_ms, 2),
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            f"{request.method} {request.url.path} - {response.status_code}",
            request_id=request_id,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware for adding security headers."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response
