"""Tests for the catalog API client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from catalog_client.api_client import APIError, CatalogAPIClient
from catalog_client.session import Session, SessionState


def make_response(status_code: int, data=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = data
    return response


@pytest.fixture
def session() -> SessionState:
    state = SessionState()
    state.login(Session(token="tok-123", username="admin", role="ADMIN"))
    return state


@pytest.fixture
def client(session: SessionState) -> CatalogAPIClient:
    return CatalogAPIClient(base_url="http://localhost:8000/", session=session)


def mock_http(client: CatalogAPIClient, **request_kwargs):
    """Patch the underlying httpx client; yields the request mock."""
    mock_http_client = AsyncMock()
    mock_http_client.request = AsyncMock(**request_kwargs)
    return patch.object(client, "_get_client", new=AsyncMock(return_value=mock_http_client)), mock_http_client


class TestCatalogAPIClient:
    """Tests for CatalogAPIClient."""

    def test_initialization(self, client: CatalogAPIClient) -> None:
        """Base URL is normalized and the HTTP client is lazy."""
        assert client.base_url == "http://localhost:8000"
        assert client._client is None

    @pytest.mark.asyncio
    async def test_sends_bearer_token(self, client: CatalogAPIClient) -> None:
        """The session token is sent with every request."""
        patcher, http = mock_http(client, return_value=make_response(200, []))
        with patcher:
            result = await client.list_products()

        assert result.success is True
        assert http.request.call_args.kwargs["headers"] == {"Authorization": "Bearer tok-123"}

    @pytest.mark.asyncio
    async def test_search_drops_blank_params(self, client: CatalogAPIClient) -> None:
        """None and blank filters are not sent."""
        patcher, http = mock_http(
            client,
            return_value=make_response(200, {"items": [], "totalElements": 0, "page": 0, "size": 10}),
        )
        with patcher:
            await client.search_products(term="", status=None, sort="price,asc", page=0, size=10)

        kwargs = http.request.call_args.kwargs
        assert kwargs["url"] == "/api/products/paged"
        assert kwargs["params"] == {"sort": "price,asc", "page": 0, "size": 10}

    @pytest.mark.asyncio
    async def test_error_response(self, client: CatalogAPIClient) -> None:
        """Server errors are parsed into APIError."""
        patcher, _ = mock_http(
            client,
            return_value=make_response(
                400,
                {
                    "error_code": "VALIDATION_FAILED",
                    "message": "Validation failed",
                    "details": [{"field": "price", "message": "Price must be greater than 0"}],
                },
            ),
        )
        with patcher:
            result = await client.create_product({"name": "Widget"})

        assert result.success is False
        assert result.error.error_code == "VALIDATION_FAILED"
        assert result.error.status_code == 400
        assert result.error.field_errors() == {"price": "Price must be greater than 0"}

    @pytest.mark.asyncio
    async def test_non_json_error(self, client: CatalogAPIClient) -> None:
        """Error bodies that are not JSON leave the message empty."""
        response = make_response(502)
        response.json.side_effect = ValueError("not json")
        patcher, _ = mock_http(client, return_value=response)
        with patcher:
            result = await client.delete_product(1)

        assert result.success is False
        assert result.error.status_code == 502
        assert result.error.message == ""

    @pytest.mark.asyncio
    async def test_unauthorized_expires_session(
        self, client: CatalogAPIClient, session: SessionState
    ) -> None:
        """A 401 tears down the session."""
        patcher, _ = mock_http(
            client,
            return_value=make_response(401, {"error_code": "INVALID_TOKEN", "message": "expired"}),
        )
        with patcher:
            result = await client.list_products()

        assert result.error.status_code == 401
        assert session.current is None

    @pytest.mark.asyncio
    async def test_forbidden_keeps_session(
        self, client: CatalogAPIClient, session: SessionState
    ) -> None:
        """A 403 does not touch the session."""
        patcher, _ = mock_http(
            client,
            return_value=make_response(403, {"error_code": "FORBIDDEN", "message": "Admin privileges required"}),
        )
        with patcher:
            result = await client.delete_product(1)

        assert result.error.message == "Admin privileges required"
        assert session.current is not None

    @pytest.mark.asyncio
    async def test_no_content(self, client: CatalogAPIClient) -> None:
        """204 responses succeed without data."""
        patcher, _ = mock_http(client, return_value=make_response(204))
        with patcher:
            result = await client.delete_product(1)

        assert result.success is True
        assert result.data is None

    @pytest.mark.asyncio
    async def test_timeout_is_transport_error(self, client: CatalogAPIClient) -> None:
        """Timeouts have no status code."""
        patcher, _ = mock_http(client, side_effect=httpx.TimeoutException("timeout"))
        with patcher:
            result = await client.list_products()

        assert result.success is False
        assert result.error.error_code == "TIMEOUT"
        assert result.error.is_transport_error

    @pytest.mark.asyncio
    async def test_connection_error_is_transport_error(
        self, client: CatalogAPIClient, session: SessionState
    ) -> None:
        """Connection failures have no status code and keep the session."""
        patcher, _ = mock_http(client, side_effect=httpx.ConnectError("refused"))
        with patcher:
            result = await client.list_products()

        assert result.error.error_code == "REQUEST_ERROR"
        assert result.error.status_code is None
        assert session.current is not None

    @pytest.mark.asyncio
    async def test_login_starts_session(self) -> None:
        """Successful login stores the session without sending a token."""
        state = SessionState()
        client = CatalogAPIClient(base_url="http://localhost:8000", session=state)
        patcher, http = mock_http(
            client,
            return_value=make_response(200, {"token": "new", "username": "user", "role": "USER"}),
        )
        with patcher:
            result = await client.login("user", "user123")

        assert result.success is True
        assert state.current == Session(token="new", username="user", role="USER")
        assert http.request.call_args.kwargs["headers"] == {}

    @pytest.mark.asyncio
    async def test_failed_login_does_not_expire(self, session: SessionState) -> None:
        """A 401 from login is a credential error, not an expiry."""
        client = CatalogAPIClient(base_url="http://localhost:8000", session=session)
        patcher, _ = mock_http(
            client,
            return_value=make_response(401, {"error_code": "INVALID_CREDENTIALS", "message": "Invalid username or password"}),
        )
        with patcher:
            result = await client.login("admin", "wrong")

        assert result.success is False
        assert session.current is not None


def test_api_error_field_errors_skip_non_field_details() -> None:
    """Details without a field are ignored."""
    error = APIError("X", "m", 400, details=[{"message": "general"}, {"field": "name", "message": "bad"}])
    assert error.field_errors() == {"name": "bad"}
