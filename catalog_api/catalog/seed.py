"""Sample catalog seeding.

Loads a small, fixed product catalog into an empty store. Used by the
``seed_catalog`` startup flag and by ``scripts/seed_catalog.py``.
"""

from decimal import Decimal

import structlog

from catalog_api.catalog.store import ProductStore
from catalog_api.domain.state_machines import ProductStatus
from catalog_api.domain.value_objects import ProductDetails

logger = structlog.get_logger()

SAMPLE_PRODUCTS: tuple[ProductDetails, ...] = (
    ProductDetails.create("Laptop Dell XPS 15", Decimal("1299.99"), 15),
    ProductDetails.create("iPhone 15 Pro", Decimal("999.00"), 25),
    ProductDetails.create("Sony WH-1000XM5", Decimal("349.99"), 40),
    ProductDetails.create("iPad Pro 12.9", Decimal("1099.00"), 10),
    ProductDetails.create(
        "Samsung Galaxy S24", Decimal("799.99"), 0, ProductStatus.DISCONTINUED
    ),
)


async def seed_store(store: ProductStore, force: bool = False) -> int:
    """Insert the sample catalog.

    Args:
        store: Target product store.
        force: Seed even when the store already holds products.

    Returns:
        Number of products inserted (0 when skipped).
    """
    existing = await store.count()
    if existing and not force:
        logger.info("Products already exist, skipping seed", existing=existing)
        return 0

    for details in SAMPLE_PRODUCTS:
        await store.insert(details)

    logger.info("Sample catalog seeded", inserted=len(SAMPLE_PRODUCTS))
    return len(SAMPLE_PRODUCTS)
