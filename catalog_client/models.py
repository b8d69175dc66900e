"""Client-side product models parsed from API JSON."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class ProductItem:
    """A product as returned by the API."""

    id: int
    name: str
    price: Decimal
    stock: int
    status: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductItem":
        """Parse a product JSON object."""
        return cls(
            id=int(data["id"]),
            name=data["name"],
            price=Decimal(str(data["price"])),
            stock=int(data["stock"]),
            status=data["status"],
        )


@dataclass(frozen=True)
class ProductPage:
    """One page of a product listing."""

    items: list[ProductItem] = field(default_factory=list)
    total_elements: int = 0
    page: int = 0
    size: int = 50

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductPage":
        """Parse a paged listing JSON object."""
        return cls(
            items=[ProductItem.from_dict(item) for item in data.get("items", [])],
            total_elements=int(data.get("totalElements", 0)),
            page=int(data.get("page", 0)),
            size=int(data.get("size", 50)),
        )

    @property
    def total_pages(self) -> int:
        """Number of pages for the current size."""
        return (self.total_elements + self.size - 1) // self.size if self.size else 0

    @property
    def ids(self) -> list[int]:
        """Ids of the items on this page, in order."""
        return [item.id for item in self.items]
