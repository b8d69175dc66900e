"""API middleware for the Product Catalog API.

Provides:
- Request ID correlation
- Bearer token authentication
- Error handling
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from catalog_api.domain.exceptions import UnauthenticatedError
from catalog_api.infrastructure.security import get_token_service

logger = structlog.get_logger()


# ============================================================================
# Request ID Middleware
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware to add request ID for correlation.

    Generates or extracts a request ID and adds it to:
    - Request state for access in handlers
    - Response headers for client correlation
    - Log context for tracing
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Process request with correlation ID.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response with request ID header.
        """
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start_time = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=getattr(response, "status_code", 500),
                duration_ms=round(duration_ms, 2),
            )
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[self.HEADER_NAME] = request_id
        return response


# ============================================================================
# Bearer Authentication Middleware
# ============================================================================


# Paths that don't require authentication
PUBLIC_PATHS = {
    "/health",
    "/ready",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/api/auth/login",
}


def _unauthorized(request: Request, error_code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={
            "error_code": error_code,
            "message": message,
            "details": [],
            "request_id": getattr(request.state, "request_id", None),
        },
        headers={"WWW-Authenticate": "Bearer"},
    )


class BearerAuthMiddleware(BaseHTTPMiddleware):
    """Middleware for JWT bearer authentication.

    Verifies "Authorization: Bearer <token>" and stores the resulting
    principal in ``request.state.principal`` for route dependencies.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Validate the bearer token for protected endpoints.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response or 401 error.
        """
        path = request.url.path.rstrip("/") or "/"
        if path in PUBLIC_PATHS or path.startswith("/docs") or path.startswith("/redoc"):
            return await call_next(request)

        auth_header = request.headers.get("Authorization")
        if not auth_header:
            logger.warning("Missing authorization header", path=path, method=request.method)
            return _unauthorized(request, "UNAUTHORIZED", "Missing Authorization header")

        parts = auth_header.split(" ", 1)
        if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
            logger.warning("Invalid authorization format", path=path, method=request.method)
            return _unauthorized(
                request,
                "UNAUTHORIZED",
                "Invalid Authorization header format. Use 'Bearer <token>'",
            )

        try:
            principal = get_token_service().verify(parts[1].strip())
        except UnauthenticatedError as e:
            logger.warning("Invalid bearer token", path=path, method=request.method)
            return _unauthorized(request, e.error_code, e.message)

        request.state.principal = principal
        structlog.contextvars.bind_contextvars(username=principal.username)
        try:
            return await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("username")


# ============================================================================
# Error Handling Middleware
# ============================================================================


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware for consistent error handling.

    Catches unhandled exceptions and returns standardized error responses.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Handle errors uniformly.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response or error response.
        """
        try:
            return await call_next(request)
        except Exception as e:
            request_id = getattr(request.state, "request_id", None)

            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error=str(e),
            )

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error_code": "INTERNAL_ERROR",
                    "message": "An internal error occurred",
                    "details": [],
                    "request_id": request_id,
                },
            )


# ============================================================================
# Middleware Setup
# ============================================================================


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application.

    Middleware is added in reverse order (last added = first executed),
    so the request ID is assigned before authentication runs.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(BearerAuthMiddleware)
    app.add_middleware(RequestIdMiddleware)
