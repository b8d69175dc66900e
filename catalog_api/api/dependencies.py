"""Route dependencies shared by the API routers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request

from catalog_api.api.errors import to_http_exception
from catalog_api.application.catalog_service import CatalogService, get_catalog_service
from catalog_api.catalog.memory import get_memory_store
from catalog_api.catalog.store import ProductStore
from catalog_api.domain.exceptions import UnauthenticatedError
from catalog_api.domain.value_objects import Principal
from catalog_api.infrastructure.config import settings


async def get_product_store() -> AsyncGenerator[ProductStore, None]:
    """Yield the configured product store for one request."""
    if settings.store_backend == "database":
        from catalog_api.catalog.repository import ProductRepository
        from catalog_api.infrastructure.database import session_scope

        async with session_scope() as session:
            yield ProductRepository(session)
    else:
        yield get_memory_store()


def get_principal(request: Request) -> Principal:
    """Get the principal verified by the authentication middleware."""
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise to_http_exception(UnauthenticatedError("Authentication required"))
    return principal


def get_service(
    request: Request,
    store: Annotated[ProductStore, Depends(get_product_store)],
) -> CatalogService:
    """Get catalog service with request ID."""
    request_id = getattr(request.state, "request_id", None)
    return get_catalog_service(store=store, request_id=request_id)


CurrentPrincipal = Annotated[Principal, Depends(get_principal)]
Service = Annotated[CatalogService, Depends(get_service)]
