"""Product catalog storage and querying.

Provides the listing query engine, the store protocol and its two
backends (in-memory and SQLAlchemy), and sample catalog seeding.
"""

from catalog_api.catalog.memory import InMemoryProductStore, get_memory_store
from catalog_api.catalog.query import (
    MAX_PAGE_SIZE,
    PageResult,
    ProductQuery,
    SortKey,
    execute_query,
    parse_sort,
)
from catalog_api.catalog.store import ProductStore

__all__ = [
    # Query
    "MAX_PAGE_SIZE",
    "PageResult",
    "ProductQuery",
    "SortKey",
    "execute_query",
    "parse_sort",
    # Stores
    "InMemoryProductStore",
    "ProductStore",
    "get_memory_store",
]
