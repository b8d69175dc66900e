"""Tests for the in-memory product store."""

from decimal import Decimal

import pytest

from catalog_api.catalog.memory import InMemoryProductStore, get_memory_store
from catalog_api.catalog.query import ProductQuery
from catalog_api.catalog.seed import SAMPLE_PRODUCTS, seed_store
from catalog_api.domain import Product, ProductDetails, ProductStatus
from catalog_api.domain.exceptions import ProductNotFoundError


@pytest.fixture
def store() -> InMemoryProductStore:
    """Empty store."""
    return InMemoryProductStore()


class TestInMemoryProductStore:
    """Tests for InMemoryProductStore."""

    @pytest.mark.asyncio
    async def test_insert_assigns_increasing_ids(
        self, store: InMemoryProductStore, widget: ProductDetails, gadget: ProductDetails
    ) -> None:
        """Ids start at 1 and increase."""
        first = await store.insert(widget)
        second = await store.insert(gadget)
        assert (first.id, second.id) == (1, 2)
        assert await store.count() == 2

    @pytest.mark.asyncio
    async def test_ids_are_not_reused(
        self, store: InMemoryProductStore, widget: ProductDetails
    ) -> None:
        """Deleting the newest product does not free its id."""
        first = await store.insert(widget)
        await store.delete(first.id)
        second = await store.insert(widget)
        assert second.id == 2

    @pytest.mark.asyncio
    async def test_returned_products_are_copies(
        self, store: InMemoryProductStore, widget: ProductDetails
    ) -> None:
        """Mutating a returned product does not change the store."""
        product = await store.insert(widget)
        product.name = "Changed"

        stored = await store.get(product.id)
        assert stored is not None
        assert stored.name == "Widget"

    @pytest.mark.asyncio
    async def test_save_overwrites(
        self, store: InMemoryProductStore, widget: ProductDetails
    ) -> None:
        """save persists all fields."""
        product = await store.insert(widget)
        product.replace(ProductDetails.create("Widget", Decimal("1.50"), 9))
        await store.save(product)

        stored = await store.get(product.id)
        assert stored is not None
        assert stored.price == Decimal("1.50")
        assert stored.stock == 9

    @pytest.mark.asyncio
    async def test_save_missing_product(
        self, store: InMemoryProductStore, widget: ProductDetails
    ) -> None:
        """Saving a product that no longer exists fails."""
        with pytest.raises(ProductNotFoundError):
            await store.save(Product.from_details(99, widget))

    @pytest.mark.asyncio
    async def test_delete(self, store: InMemoryProductStore, widget: ProductDetails) -> None:
        """delete reports whether anything was removed."""
        product = await store.insert(widget)
        assert await store.delete(product.id) is True
        assert await store.delete(product.id) is False
        assert await store.get(product.id) is None

    @pytest.mark.asyncio
    async def test_search_after_delete(
        self, store: InMemoryProductStore, widget: ProductDetails, gadget: ProductDetails
    ) -> None:
        """A deleted product disappears from the next query."""
        await store.insert(widget)
        deleted = await store.insert(gadget)
        await store.delete(deleted.id)

        result = await store.search(ProductQuery())
        assert result.total_elements == 1
        assert [p.id for p in result.items] == [1]

    @pytest.mark.asyncio
    async def test_list_all_by_id(
        self, store: InMemoryProductStore, widget: ProductDetails, gadget: ProductDetails
    ) -> None:
        """list_all returns every product by id."""
        await store.insert(gadget)
        await store.insert(widget)
        assert [p.name for p in await store.list_all()] == ["Gadget", "Widget"]


class TestSeedStore:
    """Tests for sample catalog seeding."""

    @pytest.mark.asyncio
    async def test_seeds_empty_store(self, store: InMemoryProductStore) -> None:
        """An empty store receives the sample products."""
        inserted = await seed_store(store)
        assert inserted == len(SAMPLE_PRODUCTS) == 5

        discontinued = await store.search(ProductQuery(status=ProductStatus.DISCONTINUED))
        assert [p.name for p in discontinued.items] == ["Samsung Galaxy S24"]

    @pytest.mark.asyncio
    async def test_skips_non_empty_store(
        self, store: InMemoryProductStore, widget: ProductDetails
    ) -> None:
        """Seeding is skipped when products exist."""
        await store.insert(widget)
        assert await seed_store(store) == 0
        assert await store.count() == 1

    @pytest.mark.asyncio
    async def test_force(self, store: InMemoryProductStore, widget: ProductDetails) -> None:
        """force seeds regardless of existing products."""
        await store.insert(widget)
        assert await seed_store(store, force=True) == 5
        assert await store.count() == 6


def test_get_memory_store_is_singleton() -> None:
    """The global store is shared."""
    assert get_memory_store() is get_memory_store()
