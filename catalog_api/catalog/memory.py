"""In-memory product store.

Used for development and tests, and as the default backend. All
operations complete without yielding to the event loop, so each one
is atomic with respect to other requests on the same loop.
"""

import itertools
from dataclasses import replace

from catalog_api.catalog.query import ID_ASC, PageResult, ProductQuery, execute_query, sort_products
from catalog_api.domain.entities import Product
from catalog_api.domain.exceptions import ProductNotFoundError
from catalog_api.domain.value_objects import ProductDetails


class InMemoryProductStore:
    """In-memory repository for products."""

    def __init__(self) -> None:
        self._products: dict[int, Product] = {}
        self._ids = itertools.count(1)

    async def insert(self, details: ProductDetails) -> Product:
        """Store a new product and assign its id."""
        product = Product.from_details(next(self._ids), details)
        self._products[product.id] = product
        return replace(product)

    async def get(self, product_id: int) -> Product | None:
        """Get product by ID."""
        product = self._products.get(product_id)
        return replace(product) if product else None

    async def save(self, product: Product) -> Product:
        """Overwrite an existing product; last write wins."""
        if product.id not in self._products:
            raise ProductNotFoundError(product.id)
        self._products[product.id] = replace(product)
        return replace(product)

    async def delete(self, product_id: int) -> bool:
        """Delete a product by ID."""
        return self._products.pop(product_id, None) is not None

    async def list_all(self) -> list[Product]:
        """List all products, id ascending."""
        return [replace(p) for p in sort_products(self._products.values(), (ID_ASC,))]

    async def search(self, query: ProductQuery) -> PageResult[Product]:
        """Filter, sort and page the stored products."""
        result = execute_query(self._products.values(), query)
        result.items = [replace(p) for p in result.items]
        return result

    async def count(self) -> int:
        """Count stored products."""
        return len(self._products)


# Global store instance
_store: InMemoryProductStore | None = None


def get_memory_store() -> InMemoryProductStore:
    """Get in-memory store singleton."""
    global _store
    if _store is None:
        _store = InMemoryProductStore()
    return _store
