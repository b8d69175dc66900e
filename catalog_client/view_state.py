"""Product list view state.

Holds the active filters, the last page fetched from the server and
the status of in-flight work. The server is the source of truth: after
every successful mutation the view re-runs its current query instead
of patching the local page.

Queries are sequence-stamped. When responses arrive out of order, only
the response to the most recently issued query is applied.
"""

import structlog

from catalog_client.api_client import APIResponse, CatalogAPIClient
from catalog_client.config import settings
from catalog_client.debounce import Debouncer
from catalog_client.forms import ProductForm, validate_product_form
from catalog_client.models import ProductItem, ProductPage

logger = structlog.get_logger()

FORM_INVALID_MESSAGE = "Please fix validation errors."
LOAD_FAILED_MESSAGE = "Failed to load products"
CREATE_FAILED_MESSAGE = "Create failed"
UPDATE_FAILED_MESSAGE = "Update failed"
DELETE_FAILED_MESSAGE = "Delete failed"


def _error_message(result: APIResponse, fallback: str) -> str:
    if result.error is not None and result.error.message:
        return result.error.message
    return fallback


class ProductListView:
    """State behind a paged, filterable product list.

    Attributes:
        term: Applied search term ("" for none).
        status: Applied status filter.
        sort: Applied sort specification.
        page: Zero-based page index.
        size: Page size.
        result: Last page applied from the server.
        loading: A query is in flight.
        saving: At least one mutation is in flight.
        error: Last load or delete error.
        form_error: Last create/update error.
        form_errors: Field messages for the create/edit form.
    """

    def __init__(
        self,
        client: CatalogAPIClient,
        page_size: int = 50,
        debounce_seconds: float | None = None,
    ) -> None:
        """Initialize view state.

        Args:
            client: API client.
            page_size: Initial page size.
            debounce_seconds: Search quiet period; defaults to the client setting.
        """
        self.client = client

        self.term = ""
        self.status: str | None = None
        self.sort: str | None = None
        self.page = 0
        self.size = page_size

        self.result: ProductPage | None = None
        self.loading = False
        self._mutations = 0
        self.error: str | None = None
        self.form_error: str | None = None
        self.form_errors: dict[str, str] = {}

        self._issued = 0
        delay = settings.search_debounce_seconds if debounce_seconds is None else debounce_seconds
        self._search = Debouncer(delay, self._apply_search)
        self._search.reset(self.term)

    @property
    def items(self) -> list[ProductItem]:
        """Products on the current page."""
        return self.result.items if self.result else []

    @property
    def total_elements(self) -> int:
        """Matching products across all pages."""
        return self.result.total_elements if self.result else 0

    @property
    def saving(self) -> bool:
        """Whether any create, update or delete is in flight."""
        return self._mutations > 0

    @property
    def search_pending(self) -> bool:
        """Whether typed input is waiting for its quiet period."""
        return self._search.pending

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    async def load(self) -> bool:
        """Issue the current query and apply its response.

        Returns:
            False if a newer query was issued before this one returned.
        """
        self._issued += 1
        sequence = self._issued
        self.loading = True

        result = await self.client.search_products(
            term=self.term or None,
            status=self.status,
            sort=self.sort,
            page=self.page,
            size=self.size,
        )

        if sequence != self._issued:
            logger.debug("Dropping stale query response", sequence=sequence, latest=self._issued)
            return False

        self.loading = False
        if result.success and isinstance(result.data, dict):
            self.result = ProductPage.from_dict(result.data)
            self.error = None
        else:
            self.error = _error_message(result, LOAD_FAILED_MESSAGE)
        return True

    def on_search_input(self, text: str) -> None:
        """Feed raw search box input; the query runs after the quiet period."""
        self._search.push(text.strip())

    async def _apply_search(self, term: str) -> None:
        self.term = term
        self.page = 0
        await self.load()

    async def set_status(self, status: str | None) -> None:
        """Change the status filter and query page 0 immediately."""
        self.status = status.strip().upper() if status and status.strip() else None
        self.page = 0
        await self.load()

    async def set_page(self, page: int) -> None:
        """Go to a page."""
        self.page = page
        await self.load()

    async def set_page_size(self, size: int) -> None:
        """Change the page size and return to page 0."""
        self.size = size
        self.page = 0
        await self.load()

    async def set_sort(self, sort: str | None) -> None:
        """Change the sort order."""
        self.sort = sort or None
        await self.load()

    async def clear_filters(self) -> None:
        """Reset term and status, discard pending input, and query page 0."""
        self._search.reset("")
        self.term = ""
        self.status = None
        self.page = 0
        await self.load()

    async def wait_for_search(self) -> None:
        """Wait for search queries already started by the debouncer."""
        await self._search.drain()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def save(self, form: ProductForm, product_id: int | None = None) -> bool:
        """Create (no id) or update a product, then reload the current page.

        Returns:
            True on success.
        """
        errors = validate_product_form(form)
        if errors:
            self.form_errors = errors
            self.form_error = FORM_INVALID_MESSAGE
            return False

        self.form_errors = {}
        self.form_error = None
        self._mutations += 1
        try:
            if product_id is None:
                result = await self.client.create_product(form.to_payload())
                fallback = CREATE_FAILED_MESSAGE
            else:
                result = await self.client.update_product(product_id, form.to_payload())
                fallback = UPDATE_FAILED_MESSAGE
        finally:
            self._mutations -= 1

        if not result.success:
            self.form_error = _error_message(result, fallback)
            if result.error is not None:
                self.form_errors = result.error.field_errors()
            return False

        await self.load()
        return True

    async def delete(self, product_id: int) -> bool:
        """Delete a product, then reload the current page.

        Returns:
            True on success.
        """
        self._mutations += 1
        try:
            result = await self.client.delete_product(product_id)
        finally:
            self._mutations -= 1

        if not result.success:
            if result.error is not None and result.error.status_code == 404:
                # Already gone on the server; drop the stale row
                await self.load()
            self.error = _error_message(result, DELETE_FAILED_MESSAGE)
            return False

        await self.load()
        return True
