"""Domain layer for the product catalog.

Contains the Product entity, its value objects and status state
machine, and the catalog exception taxonomy.
"""

from catalog_api.domain.entities import Product
from catalog_api.domain.exceptions import (
    CatalogError,
    FieldError,
    ForbiddenError,
    InvalidQueryError,
    InvalidStateTransitionError,
    ProductNotFoundError,
    UnauthenticatedError,
    ValidationFailedError,
)
from catalog_api.domain.state_machines import ProductStatus, validate_status_transition
from catalog_api.domain.value_objects import Principal, ProductDetails, Role

__all__ = [
    # Entities
    "Product",
    # Value objects
    "Principal",
    "ProductDetails",
    "Role",
    # State machines
    "ProductStatus",
    "validate_status_transition",
    # Exceptions
    "CatalogError",
    "FieldError",
    "ForbiddenError",
    "InvalidQueryError",
    "InvalidStateTransitionError",
    "ProductNotFoundError",
    "UnauthenticatedError",
    "ValidationFailedError",
]
