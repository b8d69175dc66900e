"""Shared fixtures for all tests."""

from decimal import Decimal

import pytest

import catalog_api.catalog.memory as memory
from catalog_api.domain.state_machines import ProductStatus
from catalog_api.domain.value_objects import Principal, ProductDetails, Role


@pytest.fixture(autouse=True)
def reset_memory_store():
    """Give every test an empty in-memory catalog."""
    memory._store = None
    yield
    memory._store = None


@pytest.fixture
def admin() -> Principal:
    """Admin principal."""
    return Principal(username="admin", role=Role.ADMIN)


@pytest.fixture
def viewer() -> Principal:
    """Read-only principal."""
    return Principal(username="user", role=Role.USER)


@pytest.fixture
def widget() -> ProductDetails:
    """Active product details."""
    return ProductDetails.create("Widget", Decimal("9.99"), 5)


@pytest.fixture
def gadget() -> ProductDetails:
    """Discontinued product details."""
    return ProductDetails.create("Gadget", Decimal("19.99"), 0, ProductStatus.DISCONTINUED)
