"""Value Objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than identity. They are interchangeable when their values are equal.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Self

from catalog_api.domain.exceptions import FieldError, ValidationFailedError
from catalog_api.domain.state_machines import ProductStatus

MAX_NAME_LENGTH = 255
PRICE_QUANTUM = Decimal("0.01")
MAX_PRICE = Decimal("100000000")  # Numeric(10, 2)
MAX_STOCK = 2**31 - 1  # Integer column


# ============================================================================
# Identity
# ============================================================================


class Role(str, Enum):
    """Roles a principal can hold.

    ADMIN has full CRUD access to the catalog; USER is read-only.
    """

    ADMIN = "ADMIN"
    USER = "USER"


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of a request.

    Produced by the access gate from a verified bearer token and passed
    explicitly into every service call that needs it.
    """

    username: str
    role: Role

    @property
    def is_admin(self) -> bool:
        """Check whether the principal may mutate the catalog."""
        return self.role == Role.ADMIN


# ============================================================================
# Product Details
# ============================================================================


@dataclass(frozen=True)
class ProductDetails:
    """The four mutable fields of a product, already validated.

    Instances are only built through :meth:`create`, which enforces the
    business invariants and normalizes the values (trimmed name, price
    quantized to cents).

    Attributes:
        name: Trimmed product name.
        price: Positive price with two fraction digits.
        stock: Non-negative stock quantity.
        status: Product status.
    """

    name: str
    price: Decimal
    stock: int
    status: ProductStatus

    @classmethod
    def create(
        cls,
        name: str,
        price: Decimal,
        stock: int,
        status: ProductStatus = ProductStatus.ACTIVE,
    ) -> Self:
        """Validate business rules and build product details.

        All field errors are collected before raising, so a caller
        sees every problem with the payload at once.

        Args:
            name: Product name (trimmed before checks).
            price: Product price.
            stock: Stock quantity.
            status: Product status.

        Returns:
            Validated ProductDetails.

        Raises:
            ValidationFailedError: If any field violates a business rule.
        """
        errors = validate_product_fields(name, price, stock)
        if errors:
            raise ValidationFailedError(errors)
        return cls(
            name=name.strip(),
            price=price.quantize(PRICE_QUANTUM),
            stock=stock,
            status=status,
        )


def validate_product_fields(name: str, price: Decimal, stock: int) -> list[FieldError]:
    """Check product business rules.

    Args:
        name: Product name.
        price: Product price.
        stock: Stock quantity.

    Returns:
        Field errors; empty when everything is valid.
    """
    errors: list[FieldError] = []

    trimmed = name.strip()
    if not trimmed:
        errors.append(FieldError("name", "Product name is required"))
    elif len(trimmed) > MAX_NAME_LENGTH:
        errors.append(
            FieldError("name", f"Product name must be at most {MAX_NAME_LENGTH} characters")
        )

    if not price.is_finite() or price <= 0:
        errors.append(FieldError("price", "Price must be greater than 0"))
    elif price >= MAX_PRICE:
        errors.append(FieldError("price", f"Price must be less than {MAX_PRICE}"))
    elif price != price.quantize(PRICE_QUANTUM):
        errors.append(FieldError("price", "Price must have at most 2 decimal places"))

    if stock < 0:
        errors.append(FieldError("stock", "Stock cannot be negative"))
    elif stock > MAX_STOCK:
        errors.append(FieldError("stock", f"Stock must be at most {MAX_STOCK}"))

    return errors
