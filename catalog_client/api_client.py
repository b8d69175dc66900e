"""Product Catalog API Client.

Thin HTTP client for communicating with the Product Catalog REST API.
This module handles authentication, error handling, and response parsing.
"""

from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

from catalog_client.session import Session, SessionState

logger = structlog.get_logger()


@dataclass
class APIError:
    """Represents an API error response.

    ``status_code`` is None when no HTTP response was received
    (timeout or connection failure).
    """

    error_code: str
    message: str
    status_code: int | None
    details: list[dict[str, Any]] = field(default_factory=list)

    @property
    def is_transport_error(self) -> bool:
        """Check whether the request never got a response."""
        return self.status_code is None

    def field_errors(self) -> dict[str, str]:
        """Field-level messages keyed by field name."""
        return {
            detail["field"]: detail.get("message", "")
            for detail in self.details
            if isinstance(detail, dict) and detail.get("field")
        }


@dataclass
class APIResponse:
    """Represents an API response."""

    success: bool
    data: dict[str, Any] | list[Any] | None = None
    error: APIError | None = None


class CatalogAPIClient:
    """HTTP client for the Product Catalog REST API.

    Injects the bearer token from the shared session state and tears
    the session down when the server answers 401.
    """

    def __init__(
        self,
        base_url: str,
        session: SessionState,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the API client.

        Args:
            base_url: Catalog API base URL.
            session: Shared session state supplying the token.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        authenticated: bool = True,
    ) -> APIResponse:
        """Make an API request.

        Args:
            method: HTTP method.
            path: API endpoint path.
            json: Request body as JSON.
            params: Query parameters.
            authenticated: Whether to send the session token.

        Returns:
            APIResponse with success status and data or error.
        """
        client = await self._get_client()

        headers = {}
        token = self.session.token
        if authenticated and token:
            headers["Authorization"] = f"Bearer {token}"

        # Filter out None and blank params
        if params:
            params = {k: v for k, v in params.items() if v is not None and v != ""}

        try:
            logger.debug(
                "Making API request",
                method=method,
                path=path,
                has_body=json is not None,
            )

            response = await client.request(
                method=method,
                url=path,
                json=json,
                params=params,
                headers=headers,
            )

            if response.status_code >= 400:
                if response.status_code == 401 and authenticated:
                    self.session.expire()
                return APIResponse(success=False, error=self._parse_error(response))

            # Handle empty responses (204 No Content)
            if response.status_code == 204:
                return APIResponse(success=True, data=None)

            try:
                data = response.json()
            except ValueError:
                logger.error("Invalid JSON in API response", path=path)
                return APIResponse(
                    success=False,
                    error=APIError(
                        error_code="INVALID_RESPONSE",
                        message="Server returned an invalid response",
                        status_code=response.status_code,
                    ),
                )
            return APIResponse(success=True, data=data)

        except httpx.TimeoutException as e:
            logger.error("API request timeout", path=path, error=str(e))
            return APIResponse(
                success=False,
                error=APIError(
                    error_code="TIMEOUT",
                    message=f"Request timed out: {path}",
                    status_code=None,
                ),
            )
        except httpx.RequestError as e:
            logger.error("API request failed", path=path, error=str(e))
            return APIResponse(
                success=False,
                error=APIError(
                    error_code="REQUEST_ERROR",
                    message=f"Request failed: {str(e)}",
                    status_code=None,
                ),
            )

    @staticmethod
    def _parse_error(response: httpx.Response) -> APIError:
        try:
            error_data = response.json()
        except ValueError:
            error_data = None

        if not isinstance(error_data, dict):
            return APIError(
                error_code="HTTP_ERROR",
                message="",
                status_code=response.status_code,
            )

        details = error_data.get("details") or []
        return APIError(
            error_code=error_data.get("error_code", "UNKNOWN_ERROR"),
            message=error_data.get("message", ""),
            status_code=response.status_code,
            details=details if isinstance(details, list) else [],
        )

    # =========================================================================
    # Auth Endpoints
    # =========================================================================

    async def login(self, username: str, password: str) -> APIResponse:
        """Exchange credentials for a token and start a session.

        Args:
            username: Username.
            password: Password.

        Returns:
            APIResponse with token, username and role.
        """
        result = await self._request(
            method="POST",
            path="/api/auth/login",
            json={"username": username, "password": password},
            authenticated=False,
        )
        if result.success and isinstance(result.data, dict):
            self.session.login(
                Session(
                    token=result.data["token"],
                    username=result.data["username"],
                    role=result.data["role"],
                )
            )
        return result

    # =========================================================================
    # Product Endpoints
    # =========================================================================

    async def list_products(self) -> APIResponse:
        """List every product (unpaginated).

        Returns:
            APIResponse with a list of products.
        """
        return await self._request(method="GET", path="/api/products")

    async def search_products(
        self,
        term: str | None = None,
        status: str | None = None,
        sort: str | None = None,
        page: int = 0,
        size: int = 50,
    ) -> APIResponse:
        """Get one page of products.

        Args:
            term: Case-insensitive name substring.
            status: Status filter.
            sort: Sort specification (e.g. "price,desc").
            page: Zero-based page index.
            size: Page size.

        Returns:
            APIResponse with items, totalElements, page and size.
        """
        return await self._request(
            method="GET",
            path="/api/products/paged",
            params={
                "q": term,
                "status": status,
                "sort": sort,
                "page": page,
                "size": size,
            },
        )

    async def get_product(self, product_id: int) -> APIResponse:
        """Get a product by ID."""
        return await self._request(method="GET", path=f"/api/products/{product_id}")

    async def create_product(self, payload: dict[str, Any]) -> APIResponse:
        """Create a product.

        Args:
            payload: name, price, stock and status.

        Returns:
            APIResponse with the created product.
        """
        return await self._request(method="POST", path="/api/products", json=payload)

    async def update_product(self, product_id: int, payload: dict[str, Any]) -> APIResponse:
        """Replace all fields of a product.

        Args:
            product_id: Product to update.
            payload: name, price, stock and status.

        Returns:
            APIResponse with the updated product.
        """
        return await self._request(
            method="PUT", path=f"/api/products/{product_id}", json=payload
        )

    async def delete_product(self, product_id: int) -> APIResponse:
        """Delete a product."""
        return await self._request(method="DELETE", path=f"/api/products/{product_id}")
