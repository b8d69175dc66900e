"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from catalog_api.api.dependencies import get_product_store
from catalog_api.catalog.store import ProductStore
from catalog_api.infrastructure.config import settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    return HealthResponse(
        status="healthy",
        service="product-catalog-api",
        version=settings.api_version,
    )


@router.get("/ready")
async def readiness_check(
    store: Annotated[ProductStore, Depends(get_product_store)],
) -> JSONResponse:
    """Check if the product store answers queries.

    Returns:
        Readiness status; 503 when the store is unreachable.
    """
    try:
        await store.count()
    except Exception as e:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "store": settings.store_backend, "error": str(e)},
        )
    return JSONResponse(content={"status": "ready", "store": settings.store_backend})
