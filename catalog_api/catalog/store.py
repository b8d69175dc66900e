"""Product store interface.

Both the in-memory store and the SQLAlchemy repository implement this
protocol, so the catalog service never depends on a storage backend.
"""

from typing import Protocol

from catalog_api.catalog.query import PageResult, ProductQuery
from catalog_api.domain.entities import Product
from catalog_api.domain.value_objects import ProductDetails


class ProductStore(Protocol):
    """Persistent collection of products.

    Every mutating call is atomic and visible to the next read once it
    returns. Returned products are detached copies; changing them does
    not change the store until :meth:`save` is called.
    """

    async def insert(self, details: ProductDetails) -> Product:
        """Store a new product and assign its id."""
        ...

    async def get(self, product_id: int) -> Product | None:
        """Get a product by id."""
        ...

    async def save(self, product: Product) -> Product:
        """Persist the fields of an existing product.

        Raises:
            ProductNotFoundError: If the product no longer exists.
        """
        ...

    async def delete(self, product_id: int) -> bool:
        """Delete a product. Returns False if it did not exist."""
        ...

    async def list_all(self) -> list[Product]:
        """All products, id ascending."""
        ...

    async def search(self, query: ProductQuery) -> PageResult[Product]:
        """Run a listing query."""
        ...

    async def count(self) -> int:
        """Number of stored products."""
        ...
