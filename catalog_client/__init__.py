"""Product Catalog client.

Async API client plus the view state a product list screen needs:
session handling, debounced search, form validation, and
last-issued-wins query reconciliation.
"""

from catalog_client.api_client import APIError, APIResponse, CatalogAPIClient
from catalog_client.config import ClientSettings, configure_logging
from catalog_client.debounce import Debouncer
from catalog_client.forms import ProductForm, validate_product_form
from catalog_client.models import ProductItem, ProductPage
from catalog_client.session import Session, SessionState
from catalog_client.view_state import ProductListView

__all__ = [
    "APIError",
    "APIResponse",
    "CatalogAPIClient",
    "ClientSettings",
    "Debouncer",
    "ProductForm",
    "ProductItem",
    "ProductListView",
    "ProductPage",
    "Session",
    "SessionState",
    "configure_logging",
    "validate_product_form",
]
