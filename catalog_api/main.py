"""Product Catalog API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_api.api.auth import router as auth_router
from catalog_api.api.errors import to_http_exception
from catalog_api.api.health import router as health_router
from catalog_api.api.middleware import setup_middleware
from catalog_api.api.products import router as products_router
from catalog_api.catalog.memory import get_memory_store
from catalog_api.catalog.seed import seed_store
from catalog_api.domain.exceptions import CatalogError
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.logging_config import configure_logging

configure_logging(settings.log_level)

logger = structlog.get_logger()


async def _seed_catalog() -> None:
    if settings.store_backend == "database":
        from catalog_api.catalog.repository import ProductRepository
        from catalog_api.infrastructure.database import session_scope

        async with session_scope() as session:
            await seed_store(ProductRepository(session))
    else:
        await seed_store(get_memory_store())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting Product Catalog API",
        version=settings.api_version,
        debug=settings.debug,
        store_backend=settings.store_backend,
    )

    if settings.store_backend == "database":
        from catalog_api.infrastructure.database import create_tables

        await create_tables()
        logger.info("Database tables ready")

    if settings.seed_catalog:
        await _seed_catalog()

    yield

    if settings.store_backend == "database":
        from catalog_api.infrastructure.database import dispose_engine

        await dispose_engine()

    logger.info("Shutting down Product Catalog API")


app = FastAPI(
    title="Product Catalog API",
    description="Product catalog with role-based administration and paged search",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

# Setup custom middleware (request ID, bearer auth, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(auth_router)
app.include_router(products_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    request_id = getattr(request.state, "request_id", None)

    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
        details = detail.get("details", [])
    else:
        error_code = "ERROR"
        message = str(detail)
        details = []

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details,
            "request_id": request_id,
        },
        headers=exc.headers,
    )


@app.exception_handler(CatalogError)
async def catalog_exception_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Render catalog errors raised by services and query parsing."""
    http_exc = to_http_exception(exc)
    if http_exc.status_code >= 500:
        logger.error("Catalog error", error_code=exc.error_code, **exc.context)
    else:
        logger.info("Request rejected", error_code=exc.error_code, **exc.context)
    return await http_exception_handler(request, http_exc)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Map framework validation errors to the catalog error format.

    Errors located only in query parameters are INVALID_QUERY; anything
    involving the path or body is VALIDATION_FAILED.
    """
    errors = exc.errors()
    query_only = bool(errors) and all(error["loc"] and error["loc"][0] == "query" for error in errors)

    details = [
        {
            "field": ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0]),
            "message": error["msg"],
        }
        for error in errors
    ]

    return JSONResponse(
        status_code=400,
        content={
            "error_code": "INVALID_QUERY" if query_only else "VALIDATION_FAILED",
            "message": "Invalid query parameters" if query_only else "Validation failed",
            "details": details,
            "request_id": getattr(request.state, "request_id", None),
        },
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions with consistent format."""
    request_id = getattr(request.state, "request_id", None)

    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )

    return JSONResponse(
        status_code=500,
        content={
            "error_code": "INTERNAL_ERROR",
            "message": "An internal error occurred",
            "details": [],
            "request_id": request_id,
        },
    )
