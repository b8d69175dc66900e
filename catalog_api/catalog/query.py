"""Product listing query.

Defines the query value (search term, status filter, sort keys, page),
the paginated result container, and the in-process query engine that
applies a query to a sequence of products. The SQL store builds the
equivalent statement in :mod:`catalog_api.catalog.repository`; both
honour the same ordering rules.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Self, TypeVar

from catalog_api.domain.entities import Product
from catalog_api.domain.exceptions import InvalidQueryError
from catalog_api.domain.state_machines import ProductStatus

T = TypeVar("T")

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 200
DEFAULT_PAGE_SIZE = 50

SORTABLE_FIELDS = ("id", "name", "price", "stock", "status", "created_at", "updated_at")

# Aliases accepted from clients that send camelCase field names
_FIELD_ALIASES = {"createdAt": "created_at", "updatedAt": "updated_at"}

_SORT_VALUES: dict[str, Callable[[Product], Any]] = {
    "id": lambda p: p.id,
    "name": lambda p: p.name.lower(),
    "price": lambda p: p.price,
    "stock": lambda p: p.stock,
    "status": lambda p: p.status.value,
    "created_at": lambda p: p.created_at,
    "updated_at": lambda p: p.updated_at,
}


@dataclass(frozen=True)
class SortKey:
    """One sort criterion.

    Attributes:
        field: Sortable field name.
        descending: Whether to sort high-to-low.
    """

    field: str
    descending: bool = False

    def __str__(self) -> str:
        return f"{self.field},{'desc' if self.descending else 'asc'}"


ID_ASC = SortKey("id")


def parse_sort(sort: str | None) -> tuple[SortKey, ...]:
    """Parse a sort specification.

    Format: ``"field,dir"`` with several keys separated by ``;``
    (e.g. ``"status,asc;price,desc"``). Direction defaults to ascending.

    Args:
        sort: Sort specification; None or blank means id ascending.

    Returns:
        Parsed sort keys (never empty).

    Raises:
        InvalidQueryError: If a field or direction is not recognised.
    """
    if sort is None or not sort.strip():
        return (ID_ASC,)

    keys: list[SortKey] = []
    for token in sort.split(";"):
        if not token.strip():
            continue
        parts = [part.strip() for part in token.split(",")]
        if len(parts) > 2:
            raise InvalidQueryError("sort", f"Invalid sort key: '{token.strip()}'")

        name = _FIELD_ALIASES.get(parts[0], parts[0])
        if name not in SORTABLE_FIELDS:
            raise InvalidQueryError(
                "sort",
                f"Unknown sort field '{parts[0]}'. Allowed: {', '.join(SORTABLE_FIELDS)}",
            )

        direction = parts[1].lower() if len(parts) == 2 and parts[1] else "asc"
        if direction not in ("asc", "desc"):
            raise InvalidQueryError(
                "sort", f"Invalid sort direction '{parts[1]}'. Use 'asc' or 'desc'"
            )

        keys.append(SortKey(name, descending=direction == "desc"))

    return tuple(keys) or (ID_ASC,)


@dataclass(frozen=True)
class ProductQuery:
    """Search, filter, sort and page parameters for a product listing.

    Construction validates the page window, so an instance is always
    executable.

    Attributes:
        term: Case-insensitive substring to look for in names.
        status: Exact status to keep.
        sort: Primary sort keys.
        page: Zero-based page index.
        size: Page size (1-200).
    """

    term: str | None = None
    status: ProductStatus | None = None
    sort: tuple[SortKey, ...] = (ID_ASC,)
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 0:
            raise InvalidQueryError("page", f"Page index must be >= 0, got: {self.page}")
        if not MIN_PAGE_SIZE <= self.size <= MAX_PAGE_SIZE:
            raise InvalidQueryError(
                "size",
                f"Page size must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}, got: {self.size}",
            )

    @classmethod
    def parse(
        cls,
        term: str | None = None,
        status: str | ProductStatus | None = None,
        sort: str | None = None,
        page: int = 0,
        size: int = DEFAULT_PAGE_SIZE,
    ) -> Self:
        """Build a query from raw request values.

        Blank terms and blank statuses mean "no filter".

        Raises:
            InvalidQueryError: If any value is out of range or unknown.
        """
        normalized_term = term.strip() if term else None

        parsed_status: ProductStatus | None = None
        if isinstance(status, ProductStatus):
            parsed_status = status
        elif status and status.strip():
            try:
                parsed_status = ProductStatus.parse(status)
            except ValueError:
                raise InvalidQueryError(
                    "status",
                    f"Invalid product status: '{status}'. Valid values are: ACTIVE, DISCONTINUED",
                ) from None

        return cls(
            term=normalized_term or None,
            status=parsed_status,
            sort=parse_sort(sort),
            page=page,
            size=size,
        )

    @property
    def offset(self) -> int:
        """Index of the first item on the page."""
        return self.page * self.size

    @property
    def limit(self) -> int:
        """Maximum number of items on the page."""
        return self.size

    @property
    def ordering(self) -> tuple[SortKey, ...]:
        """Sort keys with id ascending appended as the final tie-break."""
        if any(key.field == "id" for key in self.sort):
            return self.sort
        return (*self.sort, ID_ASC)

    def matches(self, product: Product) -> bool:
        """Check whether a product passes the filters."""
        if self.term and self.term.lower() not in product.name.lower():
            return False
        if self.status is not None and product.status != self.status:
            return False
        return True


@dataclass
class PageResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: Items on the requested page.
        total_elements: Count of all matching items, ignoring pagination.
        page: Zero-based page index.
        size: Requested page size.
    """

    items: list[T] = field(default_factory=list)
    total_elements: int = 0
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return (self.total_elements + self.size - 1) // self.size

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.total_pages - 1

    @property
    def has_previous(self) -> bool:
        """Check if there's a previous page."""
        return self.page > 0


def sort_products(products: Iterable[Product], keys: tuple[SortKey, ...]) -> list[Product]:
    """Sort products by several keys with mixed directions.

    Applies stable sorts from the least to the most significant key.

    Args:
        products: Products to sort.
        keys: Sort keys, most significant first.

    Returns:
        New sorted list.
    """
    ordered = list(products)
    for key in reversed(keys):
        ordered.sort(key=_SORT_VALUES[key.field], reverse=key.descending)
    return ordered


def execute_query(products: Iterable[Product], query: ProductQuery) -> PageResult[Product]:
    """Run a query against an in-memory collection.

    Args:
        products: Every product in the store.
        query: Query to apply.

    Returns:
        The requested page; empty when the page is past the end.
    """
    matching = [p for p in products if query.matches(p)]
    ordered = sort_products(matching, query.ordering)
    return PageResult(
        items=ordered[query.offset : query.offset + query.limit],
        total_elements=len(matching),
        page=query.page,
        size=query.size,
    )
