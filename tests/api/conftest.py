"""Shared fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from catalog_api.domain.value_objects import Principal, Role
from catalog_api.infrastructure.security import get_token_service
from catalog_api.main import app


def bearer(username: str, role: Role) -> dict[str, str]:
    """Authorization header for a freshly issued token."""
    token = get_token_service().issue(Principal(username=username, role=role))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client() -> TestClient:
    """Create test client without authentication."""
    return TestClient(app)


@pytest.fixture
def admin_client() -> TestClient:
    """Create test client authenticated as ADMIN."""
    return TestClient(app, headers=bearer("admin", Role.ADMIN))


@pytest.fixture
def user_client() -> TestClient:
    """Create test client authenticated as USER."""
    return TestClient(app, headers=bearer("user", Role.USER))


@pytest.fixture
def create_product(admin_client: TestClient):
    """Create a product through the API and return its JSON."""

    def _create(
        name: str,
        price: float = 1.0,
        stock: int = 0,
        status: str = "ACTIVE",
    ) -> dict:
        response = admin_client.post(
            "/api/products",
            json={"name": name, "price": price, "stock": stock, "status": status},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
