"""API schemas for the Product Catalog API.

Pydantic models for request/response validation and serialization.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from catalog_api.domain.entities import Product
from catalog_api.domain.state_machines import ProductStatus

# Prices are Decimal internally and plain JSON numbers on the wire
JsonPrice = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Auth Schemas
# ============================================================================


class LoginRequest(BaseModel):
    """Login credentials."""

    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Password")


class LoginResponse(BaseModel):
    """Issued bearer token and the identity it carries."""

    token: str = Field(..., description="JWT bearer token")
    username: str
    role: str = Field(..., description="ADMIN or USER")


# ============================================================================
# Product Schemas
# ============================================================================


class ProductResponse(BaseModel):
    """Product representation."""

    id: int
    name: str
    price: JsonPrice
    stock: int
    status: ProductStatus

    @classmethod
    def from_entity(cls, product: Product) -> "ProductResponse":
        """Convert Product entity to response schema."""
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            stock=product.stock,
            status=product.status,
        )


class PagedProductsResponse(BaseModel):
    """One page of a product listing."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[ProductResponse]
    total_elements: int = Field(
        ...,
        alias="totalElements",
        description="Matching products, ignoring pagination",
    )
    page: int = Field(..., description="Zero-based page index")
    size: int = Field(..., description="Page size")
