"""API layer module.

Contains FastAPI routers, middleware and request/response schemas.
"""

from catalog_api.api.auth import router as auth_router
from catalog_api.api.health import router as health_router
from catalog_api.api.products import router as products_router

__all__ = [
    "auth_router",
    "health_router",
    "products_router",
]
