"""Product create/edit form state and validation.

The form holds raw user input as strings; :func:`validate_product_form`
checks it without side effects and returns field-level messages using
the same wording as the server.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from catalog_client.models import ProductItem

MAX_NAME_LENGTH = 255
MAX_STOCK = 2**31 - 1
STATUSES = ("ACTIVE", "DISCONTINUED")


@dataclass
class ProductForm:
    """Editable product fields as entered by the user."""

    name: str = ""
    price: str = ""
    stock: str = "0"
    status: str = "ACTIVE"

    @classmethod
    def from_product(cls, product: ProductItem) -> "ProductForm":
        """Prefill the form for editing an existing product."""
        return cls(
            name=product.name,
            price=str(product.price),
            stock=str(product.stock),
            status=product.status,
        )

    def to_payload(self) -> dict[str, Any]:
        """Build the request body. Only call on a valid form."""
        return {
            "name": self.name.strip(),
            "price": float(Decimal(self.price.strip())),
            "stock": int(self.stock.strip()),
            "status": self.status.strip().upper(),
        }


def validate_product_form(form: ProductForm) -> dict[str, str]:
    """Validate form input.

    Args:
        form: Form to check.

    Returns:
        Message per invalid field; empty when the form can be submitted.
    """
    errors: dict[str, str] = {}

    name = form.name.strip()
    if not name:
        errors["name"] = "Product name is required"
    elif len(name) > MAX_NAME_LENGTH:
        errors["name"] = f"Product name must be at most {MAX_NAME_LENGTH} characters"

    price_text = form.price.strip()
    if not price_text:
        errors["price"] = "Price is required"
    else:
        try:
            price = Decimal(price_text)
        except InvalidOperation:
            errors["price"] = "Price must be a number"
        else:
            if not price.is_finite() or price <= 0:
                errors["price"] = "Price must be greater than 0"
            elif price != price.quantize(Decimal("0.01")):
                errors["price"] = "Price must have at most 2 decimal places"

    stock_text = form.stock.strip()
    if not stock_text:
        errors["stock"] = "Stock is required"
    else:
        try:
            stock = int(stock_text)
        except ValueError:
            errors["stock"] = "Stock must be an integer"
        else:
            if stock < 0:
                errors["stock"] = "Stock cannot be negative"
            elif stock > MAX_STOCK:
                errors["stock"] = f"Stock must be at most {MAX_STOCK}"

    if form.status.strip().upper() not in STATUSES:
        errors["status"] = "Status must be one of: ACTIVE, DISCONTINUED"

    return errors
