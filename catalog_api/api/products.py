"""Product API endpoints.

Provides the listing (legacy and paged), lookup, and admin-only
create/update/delete endpoints for the catalog.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Query, Request, Response, status

from catalog_api.api.dependencies import CurrentPrincipal, Service
from catalog_api.api.schemas import (
    ErrorResponse,
    PagedProductsResponse,
    ProductResponse,
)
from catalog_api.catalog.query import ProductQuery
from catalog_api.infrastructure.config import settings

router = APIRouter(prefix="/api/products", tags=["Products"])

# The body is read raw and decoded by the service after the role check
PRODUCT_BODY_DOC: dict[str, Any] = {
    "requestBody": {
        "required": True,
        "description": "Product fields; all four are required",
        "content": {
            "application/json": {
                "schema": {
                    "type": "object",
                    "required": ["name", "price", "stock", "status"],
                    "properties": {
                        "name": {"type": "string", "maxLength": 255},
                        "price": {"type": "number", "exclusiveMinimum": 0},
                        "stock": {"type": "integer", "minimum": 0},
                        "status": {"type": "string", "enum": ["ACTIVE", "DISCONTINUED"]},
                    },
                },
                "example": {"name": "Widget", "price": 9.99, "stock": 5, "status": "ACTIVE"},
            }
        },
    }
}

_MUTATION_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
}


@router.get(
    "",
    response_model=list[ProductResponse],
    responses={401: {"model": ErrorResponse}},
    summary="List all products",
    description="Unfiltered, unpaginated list of every product, id ascending.",
)
async def list_products(service: Service) -> list[ProductResponse]:
    """List all products."""
    products = await service.list_all()
    return [ProductResponse.from_entity(p) for p in products]


@router.get(
    "/paged",
    response_model=PagedProductsResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
    },
    summary="Search products",
    description="Search, filter, sort and paginate the catalog.",
)
async def search_products(
    service: Service,
    q: Annotated[str | None, Query(description="Case-insensitive name substring")] = None,
    status_filter: Annotated[
        str | None, Query(alias="status", description="ACTIVE or DISCONTINUED")
    ] = None,
    sort: Annotated[
        str | None, Query(description="field,dir pairs separated by ';' (e.g. price,desc)")
    ] = None,
    page: Annotated[int, Query(description="Zero-based page index")] = 0,
    size: Annotated[int | None, Query(description="Page size (1-200)")] = None,
) -> PagedProductsResponse:
    """Get one page of products matching the filters.

    Args:
        service: Catalog service.
        q: Search term.
        status_filter: Status filter.
        sort: Sort specification.
        page: Page index.
        size: Page size; defaults to the configured page size.

    Returns:
        Requested page with the total match count.

    Raises:
        InvalidQueryError: If page, size, status or sort is invalid.
    """
    query = ProductQuery.parse(
        term=q,
        status=status_filter,
        sort=sort,
        page=page,
        size=size if size is not None else settings.default_page_size,
    )
    result = await service.search(query)

    return PagedProductsResponse(
        items=[ProductResponse.from_entity(p) for p in result.items],
        total_elements=result.total_elements,
        page=result.page,
        size=result.size,
    )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Get product",
)
async def get_product(product_id: int, service: Service) -> ProductResponse:
    """Get a product by ID."""
    return ProductResponse.from_entity(await service.get(product_id))


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_MUTATION_ERRORS,
    summary="Create product",
    description="Create a product (admin only).",
    openapi_extra=PRODUCT_BODY_DOC,
)
async def create_product(
    principal: CurrentPrincipal,
    service: Service,
    request: Request,
) -> ProductResponse:
    """Create a new product.

    Raises:
        ForbiddenError: If the caller is not an admin.
        ValidationFailedError: If the payload is invalid.
    """
    product = await service.create(await request.body(), principal)
    return ProductResponse.from_entity(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        **_MUTATION_ERRORS,
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update product",
    description="Replace all fields of a product (admin only).",
    openapi_extra=PRODUCT_BODY_DOC,
)
async def update_product(
    product_id: int,
    principal: CurrentPrincipal,
    service: Service,
    request: Request,
) -> ProductResponse:
    """Replace a product's name, price, stock and status.

    Raises:
        ForbiddenError: If the caller is not an admin.
        ValidationFailedError: If the payload is invalid.
        ProductNotFoundError: If the product does not exist.
        InvalidStateTransitionError: If reactivating a discontinued product.
    """
    product = await service.update(product_id, await request.body(), principal)
    return ProductResponse.from_entity(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Delete product",
    description="Delete a product (admin only).",
)
async def delete_product(
    product_id: int,
    principal: CurrentPrincipal,
    service: Service,
) -> Response:
    """Delete a product.

    Raises:
        ForbiddenError: If the caller is not an admin.
        ProductNotFoundError: If the product does not exist.
    """
    await service.delete(product_id, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
