"""Catalog application service.

Handles product reads and the admin-only mutations. Every mutation is
checked in a fixed order: authorization, payload structure, business
rules, existence of the target, then the status transition.
"""

import json
from decimal import Decimal
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, StrictInt, ValidationError, field_validator

from catalog_api.catalog.query import PageResult, ProductQuery
from catalog_api.catalog.store import ProductStore
from catalog_api.domain.entities import Product
from catalog_api.domain.exceptions import (
    FieldError,
    ForbiddenError,
    ProductNotFoundError,
    ValidationFailedError,
)
from catalog_api.domain.state_machines import ProductStatus
from catalog_api.domain.value_objects import Principal, ProductDetails

logger = structlog.get_logger()


# ============================================================================
# Payload
# ============================================================================


class ProductPayload(BaseModel):
    """Structural shape of a create/update request body.

    Unknown keys are ignored. Business rules (positive price, trimmed
    name, etc.) are checked afterwards by :class:`ProductDetails`.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    price: Decimal
    stock: StrictInt
    status: ProductStatus

    @field_validator("price", mode="before")
    @classmethod
    def _price_from_number(cls, value: Any) -> Any:
        # Floats go through str so 9.99 stays 9.99 rather than its binary expansion
        if isinstance(value, bool):
            raise ValueError("not a number")
        if isinstance(value, float):
            return Decimal(str(value))
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


_FIELD_LABELS = {
    "name": "Name",
    "price": "Price",
    "stock": "Stock",
    "status": "Status",
}

_TYPE_MESSAGES = {
    "name": "Product name must be a string",
    "price": "Price must be a number",
    "stock": "Stock must be an integer",
    "status": "Status must be one of: ACTIVE, DISCONTINUED",
}


def _structural_errors(exc: ValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    seen: set[str] = set()
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "body"
        if field in seen:
            continue
        seen.add(field)
        if error["type"] == "missing":
            errors.append(FieldError(field, f"{_FIELD_LABELS.get(field, field)} is required"))
        else:
            errors.append(FieldError(field, _TYPE_MESSAGES.get(field, "Invalid value")))
    return errors


def _decode_body(raw: bytes) -> Any:
    if not raw.strip():
        raise ValidationFailedError([FieldError("body", "Request body is required")])
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationFailedError(
            [FieldError("body", "Request body must be valid JSON")]
        ) from None


def parse_product_payload(body: Any) -> ProductDetails:
    """Validate a request body into product details.

    Args:
        body: Raw JSON bytes, or an already decoded value.

    Returns:
        Validated, normalized product details.

    Raises:
        ValidationFailedError: With every structural error, or else with
            every business rule violation.
    """
    if isinstance(body, (bytes, bytearray)):
        body = _decode_body(bytes(body))

    if not isinstance(body, dict):
        raise ValidationFailedError([FieldError("body", "Request body must be a JSON object")])

    try:
        payload = ProductPayload.model_validate(body)
    except ValidationError as e:
        raise ValidationFailedError(_structural_errors(e)) from None

    return ProductDetails.create(
        name=payload.name,
        price=payload.price,
        stock=payload.stock,
        status=payload.status,
    )


# ============================================================================
# Service
# ============================================================================


class CatalogService:
    """Application service for the product catalog.

    Holds no state between calls; every read goes to the store.
    """

    def __init__(self, store: ProductStore, request_id: str | None = None) -> None:
        """Initialize service.

        Args:
            store: Product store backend.
            request_id: Request ID for correlation.
        """
        self.store = store
        self.request_id = request_id

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_all(self) -> list[Product]:
        """All products, id ascending."""
        return await self.store.list_all()

    async def search(self, query: ProductQuery) -> PageResult[Product]:
        """Run a listing query."""
        result = await self.store.search(query)
        logger.debug(
            "Products queried",
            term=query.term,
            status=query.status.value if query.status else None,
            sort=";".join(str(key) for key in query.sort),
            page=query.page,
            size=query.size,
            total=result.total_elements,
            request_id=self.request_id,
        )
        return result

    async def get(self, product_id: int) -> Product:
        """Get a product by id.

        Raises:
            ProductNotFoundError: If no product has that id.
        """
        product = await self.store.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _authorize(self, principal: Principal, action: str) -> None:
        if not principal.is_admin:
            logger.warning(
                "Mutation rejected for non-admin",
                action=action,
                username=principal.username,
                role=principal.role.value,
                request_id=self.request_id,
            )
            raise ForbiddenError(action)

    async def create(self, payload: Any, principal: Principal) -> Product:
        """Create a product.

        Args:
            payload: Raw request body.
            principal: Authenticated caller.

        Returns:
            The stored product with its assigned id.

        Raises:
            ForbiddenError: If the caller is not an admin.
            ValidationFailedError: If the payload is invalid.
        """
        self._authorize(principal, "create")
        details = parse_product_payload(payload)

        product = await self.store.insert(details)

        logger.info(
            "Product created",
            product_id=product.id,
            name=product.name,
            actor=principal.username,
            request_id=self.request_id,
        )
        return product

    async def update(self, product_id: int, payload: Any, principal: Principal) -> Product:
        """Replace all mutable fields of a product.

        Args:
            product_id: Target product id.
            payload: Raw request body.
            principal: Authenticated caller.

        Returns:
            The updated product.

        Raises:
            ForbiddenError: If the caller is not an admin.
            ValidationFailedError: If the payload is invalid.
            ProductNotFoundError: If the product does not exist.
            InvalidStateTransitionError: If reactivating a discontinued product.
        """
        self._authorize(principal, "update")
        details = parse_product_payload(payload)

        product = await self.store.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        previous_status = product.status
        product.replace(details)
        product = await self.store.save(product)

        logger.info(
            "Product updated",
            product_id=product.id,
            previous_status=previous_status.value,
            status=product.status.value,
            actor=principal.username,
            request_id=self.request_id,
        )
        return product

    async def delete(self, product_id: int, principal: Principal) -> None:
        """Delete a product.

        Raises:
            ForbiddenError: If the caller is not an admin.
            ProductNotFoundError: If the product does not exist.
        """
        self._authorize(principal, "delete")

        if not await self.store.delete(product_id):
            raise ProductNotFoundError(product_id)

        logger.info(
            "Product deleted",
            product_id=product_id,
            actor=principal.username,
            request_id=self.request_id,
        )


def get_catalog_service(
    store: ProductStore,
    request_id: str | None = None,
) -> CatalogService:
    """Get catalog service instance.

    Args:
        store: Product store backend.
        request_id: Request ID for correlation.

    Returns:
        CatalogService instance.
    """
    return CatalogService(store=store, request_id=request_id)
