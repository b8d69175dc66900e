"""Tests for the catalog application service."""

from decimal import Decimal

import pytest

from catalog_api.application.catalog_service import (
    CatalogService,
    get_catalog_service,
    parse_product_payload,
)
from catalog_api.catalog.memory import InMemoryProductStore
from catalog_api.catalog.query import ProductQuery
from catalog_api.domain import Principal, ProductDetails, ProductStatus
from catalog_api.domain.exceptions import (
    ForbiddenError,
    InvalidStateTransitionError,
    ProductNotFoundError,
    ValidationFailedError,
)

WIDGET = {"name": "Widget", "price": 9.99, "stock": 5, "status": "ACTIVE"}
GADGET = {"name": "Gadget", "price": 19.99, "stock": 0, "status": "DISCONTINUED"}


@pytest.fixture
def store() -> InMemoryProductStore:
    return InMemoryProductStore()


@pytest.fixture
def service(store: InMemoryProductStore) -> CatalogService:
    return get_catalog_service(store=store, request_id="req-1")


class TestParseProductPayload:
    """Tests for payload validation."""

    def test_valid_payload(self) -> None:
        """Valid payloads become normalized details."""
        details = parse_product_payload({**WIDGET, "name": "  Widget ", "status": "active"})
        assert details == ProductDetails.create("Widget", Decimal("9.99"), 5)

    def test_float_price_keeps_two_decimals(self) -> None:
        """JSON floats are read as their decimal text."""
        assert parse_product_payload({**WIDGET, "price": 0.1}).price == Decimal("0.10")

    def test_string_price_accepted(self) -> None:
        """Numeric strings are accepted for price."""
        assert parse_product_payload({**WIDGET, "price": "12.50"}).price == Decimal("12.50")

    def test_unknown_fields_ignored(self) -> None:
        """Extra keys do not fail validation."""
        assert parse_product_payload({**WIDGET, "id": 99}).name == "Widget"

    def test_missing_fields(self) -> None:
        """Every missing field is reported."""
        with pytest.raises(ValidationFailedError) as exc_info:
            parse_product_payload({})

        messages = {d.field: d.message for d in exc_info.value.details}
        assert messages == {
            "name": "Name is required",
            "price": "Price is required",
            "stock": "Stock is required",
            "status": "Status is required",
        }

    def test_wrong_types(self) -> None:
        """Type errors are reported per field."""
        with pytest.raises(ValidationFailedError) as exc_info:
            parse_product_payload(
                {"name": "Widget", "price": "abc", "stock": 1.5, "status": "ARCHIVED"}
            )

        messages = {d.field: d.message for d in exc_info.value.details}
        assert messages == {
            "price": "Price must be a number",
            "stock": "Stock must be an integer",
            "status": "Status must be one of: ACTIVE, DISCONTINUED",
        }

    def test_boolean_price_rejected(self) -> None:
        """true is not a price."""
        with pytest.raises(ValidationFailedError) as exc_info:
            parse_product_payload({**WIDGET, "price": True})
        assert exc_info.value.fields == ["price"]

    def test_business_rules_after_structure(self) -> None:
        """Well-formed but invalid values report business messages together."""
        with pytest.raises(ValidationFailedError) as exc_info:
            parse_product_payload({"name": " ", "price": -1, "stock": -2, "status": "ACTIVE"})

        assert exc_info.value.fields == ["name", "price", "stock"]

    def test_stock_out_of_integer_range(self) -> None:
        """Stock that the database column cannot hold is a field error."""
        with pytest.raises(ValidationFailedError) as exc_info:
            parse_product_payload({**WIDGET, "stock": 2**31})
        assert exc_info.value.fields == ["stock"]

    @pytest.mark.parametrize(
        ("raw", "message"),
        [
            (b"", "Request body is required"),
            (b"{not json", "Request body must be valid JSON"),
            (b"\xc3\x28", "Request body must be valid JSON"),
        ],
    )
    def test_raw_body_errors(self, raw: bytes, message: str) -> None:
        """Raw bodies that cannot be decoded are reported on the body field."""
        with pytest.raises(ValidationFailedError) as exc_info:
            parse_product_payload(raw)
        assert [(e.field, e.message) for e in exc_info.value.details] == [("body", message)]

    def test_raw_body_decoded(self) -> None:
        """JSON bytes are decoded before validation."""
        details = parse_product_payload(b'{"name": "Widget", "price": 9.99, "stock": 5, "status": "ACTIVE"}')
        assert details.price == Decimal("9.99")

    @pytest.mark.parametrize("body", [None, [], "Widget"])
    def test_non_object_body(self, body) -> None:
        """The body must be a JSON object."""
        with pytest.raises(ValidationFailedError) as exc_info:
            parse_product_payload(body)
        assert exc_info.value.fields == ["body"]


class TestCatalogServiceMutations:
    """Tests for create, update and delete."""

    @pytest.mark.asyncio
    async def test_create(self, service: CatalogService, admin: Principal) -> None:
        """Admins can create products."""
        product = await service.create(WIDGET, admin)
        assert product.id == 1
        assert product.price == Decimal("9.99")

    @pytest.mark.asyncio
    async def test_non_admin_cannot_mutate(
        self, service: CatalogService, store: InMemoryProductStore, admin: Principal, viewer: Principal
    ) -> None:
        """USER mutations are forbidden and leave the store unchanged."""
        product = await service.create(WIDGET, admin)

        with pytest.raises(ForbiddenError):
            await service.create(GADGET, viewer)
        with pytest.raises(ForbiddenError):
            await service.update(product.id, GADGET, viewer)
        with pytest.raises(ForbiddenError):
            await service.delete(product.id, viewer)

        assert await store.count() == 1
        assert (await service.get(product.id)).name == "Widget"

    @pytest.mark.asyncio
    async def test_authorization_before_validation(
        self, service: CatalogService, viewer: Principal
    ) -> None:
        """An invalid payload from a USER is still Forbidden."""
        with pytest.raises(ForbiddenError):
            await service.create({}, viewer)
        with pytest.raises(ForbiddenError):
            await service.update(1, b"{not json", viewer)

    @pytest.mark.asyncio
    async def test_forbidden_does_not_reveal_existence(
        self, service: CatalogService, admin: Principal, viewer: Principal
    ) -> None:
        """Existing and missing ids give the same error for a USER."""
        product = await service.create(WIDGET, admin)

        with pytest.raises(ForbiddenError) as existing:
            await service.delete(product.id, viewer)
        with pytest.raises(ForbiddenError) as missing:
            await service.delete(999, viewer)

        assert existing.value.message == missing.value.message

    @pytest.mark.asyncio
    async def test_update_is_full_replace(self, service: CatalogService, admin: Principal) -> None:
        """Update returns exactly the payload's fields and is visible to queries."""
        product = await service.create(WIDGET, admin)
        payload = {"name": "Widget XL", "price": 11.0, "stock": 1, "status": "DISCONTINUED"}

        updated = await service.update(product.id, payload, admin)

        assert (updated.name, updated.price, updated.stock, updated.status) == (
            "Widget XL",
            Decimal("11.00"),
            1,
            ProductStatus.DISCONTINUED,
        )
        page = await service.search(ProductQuery.parse(term="xl"))
        assert [p.id for p in page.items] == [product.id]

    @pytest.mark.asyncio
    async def test_validation_before_existence(
        self, service: CatalogService, admin: Principal
    ) -> None:
        """An invalid payload fails validation even for unknown ids."""
        with pytest.raises(ValidationFailedError):
            await service.update(999, {"name": ""}, admin)

    @pytest.mark.asyncio
    async def test_update_unknown_product(self, service: CatalogService, admin: Principal) -> None:
        """Valid updates of unknown ids are NotFound."""
        with pytest.raises(ProductNotFoundError) as exc_info:
            await service.update(999, WIDGET, admin)
        assert exc_info.value.product_id == 999

    @pytest.mark.asyncio
    async def test_update_cannot_reactivate(self, service: CatalogService, admin: Principal) -> None:
        """Discontinued products stay discontinued."""
        product = await service.create(GADGET, admin)

        with pytest.raises(InvalidStateTransitionError):
            await service.update(product.id, {**GADGET, "status": "ACTIVE"}, admin)

        assert (await service.get(product.id)).status == ProductStatus.DISCONTINUED

    @pytest.mark.asyncio
    async def test_delete(self, service: CatalogService, admin: Principal) -> None:
        """Deleted products are gone from the next query."""
        await service.create(WIDGET, admin)
        second = await service.create(GADGET, admin)

        await service.delete(second.id, admin)

        page = await service.search(ProductQuery())
        assert page.total_elements == 1
        assert [p.id for p in page.items] == [1]

    @pytest.mark.asyncio
    async def test_delete_unknown_product(self, service: CatalogService, admin: Principal) -> None:
        """Deleting an unknown id is NotFound."""
        with pytest.raises(ProductNotFoundError):
            await service.delete(42, admin)


class TestCatalogServiceReads:
    """Tests for reads."""

    @pytest.mark.asyncio
    async def test_get_unknown(self, service: CatalogService) -> None:
        """Unknown ids raise NotFound."""
        with pytest.raises(ProductNotFoundError):
            await service.get(1)

    @pytest.mark.asyncio
    async def test_list_all(self, service: CatalogService, admin: Principal) -> None:
        """list_all returns products by id."""
        await service.create(GADGET, admin)
        await service.create(WIDGET, admin)
        assert [p.name for p in await service.list_all()] == ["Gadget", "Widget"]
