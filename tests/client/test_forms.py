"""Tests for product form validation."""

from decimal import Decimal

import pytest

from catalog_client.forms import ProductForm, validate_product_form
from catalog_client.models import ProductItem


class TestValidateProductForm:
    """Tests for validate_product_form."""

    def test_valid_form(self) -> None:
        """A complete form has no errors."""
        form = ProductForm(name="Widget", price="9.99", stock="5", status="ACTIVE")
        assert validate_product_form(form) == {}

    def test_default_form_needs_name_and_price(self) -> None:
        """A fresh form is incomplete."""
        assert validate_product_form(ProductForm()) == {
            "name": "Product name is required",
            "price": "Price is required",
        }

    @pytest.mark.parametrize(
        ("price", "message"),
        [
            ("abc", "Price must be a number"),
            ("0", "Price must be greater than 0"),
            ("-5", "Price must be greater than 0"),
            ("1.999", "Price must have at most 2 decimal places"),
        ],
    )
    def test_price_rules(self, price: str, message: str) -> None:
        """Price messages match the server's wording."""
        form = ProductForm(name="Widget", price=price)
        assert validate_product_form(form) == {"price": message}

    @pytest.mark.parametrize(
        ("stock", "message"),
        [
            ("", "Stock is required"),
            ("1.5", "Stock must be an integer"),
            ("-1", "Stock cannot be negative"),
            ("2147483648", "Stock must be at most 2147483647"),
        ],
    )
    def test_stock_rules(self, stock: str, message: str) -> None:
        """Stock must be a non-negative integer."""
        form = ProductForm(name="Widget", price="1", stock=stock)
        assert validate_product_form(form) == {"stock": message}

    def test_long_name(self) -> None:
        """Names over 255 characters are rejected."""
        form = ProductForm(name="x" * 256, price="1")
        assert "name" in validate_product_form(form)

    def test_unknown_status(self) -> None:
        """Only the two statuses are accepted."""
        form = ProductForm(name="Widget", price="1", status="ARCHIVED")
        assert validate_product_form(form) == {"status": "Status must be one of: ACTIVE, DISCONTINUED"}


class TestProductForm:
    """Tests for ProductForm conversions."""

    def test_to_payload(self) -> None:
        """Payload has typed, trimmed values."""
        form = ProductForm(name=" Widget ", price="9.99", stock="5", status="discontinued")
        assert form.to_payload() == {
            "name": "Widget",
            "price": 9.99,
            "stock": 5,
            "status": "DISCONTINUED",
        }

    def test_from_product(self) -> None:
        """Editing prefills every field."""
        product = ProductItem(id=1, name="Widget", price=Decimal("9.99"), stock=5, status="ACTIVE")
        assert ProductForm.from_product(product) == ProductForm(
            name="Widget", price="9.99", stock="5", status="ACTIVE"
        )
