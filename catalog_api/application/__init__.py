"""Application layer module.

Contains application services (use cases) that orchestrate
domain logic and infrastructure.
"""

from catalog_api.application.catalog_service import (
    CatalogService,
    ProductPayload,
    get_catalog_service,
    parse_product_payload,
)

__all__ = [
    "CatalogService",
    "ProductPayload",
    "get_catalog_service",
    "parse_product_payload",
]
