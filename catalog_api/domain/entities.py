"""Domain entities.

The catalog has a single entity, :class:`Product`, identified by a
server-assigned integer id that never changes.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from catalog_api.domain.state_machines import ProductStatus, validate_status_transition
from catalog_api.domain.value_objects import ProductDetails


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """Product entity in the catalog.

    Two products are equal when all their catalog fields are equal;
    timestamps are bookkeeping and do not take part in comparison.

    Attributes:
        id: Unique product identifier.
        name: Product name.
        price: Price with two fraction digits.
        stock: Available quantity.
        status: Lifecycle status.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: int
    name: str
    price: Decimal
    stock: int
    status: ProductStatus
    created_at: datetime = field(default_factory=_utcnow, compare=False)
    updated_at: datetime = field(default_factory=_utcnow, compare=False)

    @classmethod
    def from_details(cls, product_id: int, details: ProductDetails) -> "Product":
        """Build a new product from validated details.

        Args:
            product_id: Server-assigned identifier.
            details: Validated product fields.

        Returns:
            New Product.
        """
        return cls(
            id=product_id,
            name=details.name,
            price=details.price,
            stock=details.stock,
            status=details.status,
        )

    @property
    def details(self) -> ProductDetails:
        """Current mutable fields as a value object."""
        return ProductDetails(
            name=self.name,
            price=self.price,
            stock=self.stock,
            status=self.status,
        )

    def replace(self, details: ProductDetails) -> None:
        """Replace all mutable fields at once.

        Args:
            details: New validated fields.

        Raises:
            InvalidStateTransitionError: If the status change is not allowed.
        """
        validate_status_transition(self.id, self.status, details.status)
        self.name = details.name
        self.price = details.price
        self.stock = details.stock
        self.status = details.status
        self.updated_at = _utcnow()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "stock": self.stock,
            "status": self.status.value,
        }
