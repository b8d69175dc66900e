"""SQLAlchemy models for the product catalog.

Defines the products table for persistent storage.
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog_api.domain.entities import Product
from catalog_api.domain.state_machines import ProductStatus
from catalog_api.infrastructure.database import Base


class ProductModel(Base):
    """Product row.

    Attributes:
        id: Auto-incremented product identifier.
        name: Product name (at most 255 characters).
        price: Price with two fraction digits.
        stock: Available quantity.
        status: ACTIVE or DISCONTINUED.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductModel(id={self.id}, name={self.name[:30]}, status={self.status})>"

    def to_entity(self) -> Product:
        """Convert to a detached domain entity."""
        return Product(
            id=self.id,
            name=self.name,
            price=self.price,
            stock=self.stock,
            status=ProductStatus(self.status),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
