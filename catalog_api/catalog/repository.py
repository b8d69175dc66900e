"""Product repository for database operations.

Provides CRUD operations for products with filtering, sorting and
pagination pushed down to SQL. Each mutation commits before returning,
so its effect is visible to the next request.
"""

from typing import Any

from sqlalchemy import Select, and_, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.catalog.models import ProductModel
from catalog_api.catalog.query import PageResult, ProductQuery, SortKey
from catalog_api.domain.entities import Product
from catalog_api.domain.exceptions import ProductNotFoundError
from catalog_api.domain.value_objects import ProductDetails

_SORT_COLUMNS: dict[str, Any] = {
    "id": ProductModel.id,
    "name": func.lower(ProductModel.name),
    "price": ProductModel.price,
    "stock": ProductModel.stock,
    "status": ProductModel.status,
    "created_at": ProductModel.created_at,
    "updated_at": ProductModel.updated_at,
}


def _filter_conditions(query: ProductQuery) -> list[Any]:
    conditions = []

    if query.term:
        conditions.append(ProductModel.name.icontains(query.term, autoescape=True))

    if query.status is not None:
        conditions.append(ProductModel.status == query.status.value)

    return conditions


def _order_clause(key: SortKey) -> Any:
    column = _SORT_COLUMNS[key.field]
    return column.desc() if key.descending else column.asc()


def build_search_statement(query: ProductQuery) -> Select[tuple[ProductModel]]:
    """Build the page SELECT for a query.

    Args:
        query: Listing query.

    Returns:
        Statement with filters, ordering (id tie-break last), limit and offset.
    """
    statement = select(ProductModel)

    conditions = _filter_conditions(query)
    if conditions:
        statement = statement.where(and_(*conditions))

    statement = statement.order_by(*(_order_clause(key) for key in query.ordering))

    return statement.limit(query.limit).offset(query.offset)


def build_count_statement(query: ProductQuery) -> Select[tuple[int]]:
    """Build the COUNT over the filtered set, ignoring pagination.

    Args:
        query: Listing query.

    Returns:
        Count statement.
    """
    statement = select(func.count(ProductModel.id))

    conditions = _filter_conditions(query)
    if conditions:
        statement = statement.where(and_(*conditions))

    return statement


class ProductRepository:
    """Repository for Product database operations.

    Example usage:
        async with session_scope() as session:
            repo = ProductRepository(session)
            page = await repo.search(ProductQuery.parse(term="lap", size=20))
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def insert(self, details: ProductDetails) -> Product:
        """Insert a product and return it with its assigned id."""
        model = ProductModel(
            name=details.name,
            price=details.price,
            stock=details.stock,
            status=details.status.value,
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.commit()
        return model.to_entity()

    async def get(self, product_id: int) -> Product | None:
        """Get product by ID."""
        model = await self.session.get(ProductModel, product_id)
        return model.to_entity() if model else None

    async def save(self, product: Product) -> Product:
        """Write all mutable fields of an existing product.

        Raises:
            ProductNotFoundError: If the row was deleted meanwhile.
        """
        model = await self.session.get(ProductModel, product.id)
        if model is None:
            raise ProductNotFoundError(product.id)

        model.name = product.name
        model.price = product.price
        model.stock = product.stock
        model.status = product.status.value
        model.updated_at = product.updated_at

        await self.session.flush()
        await self.session.commit()
        return model.to_entity()

    async def delete(self, product_id: int) -> bool:
        """Delete a product by ID."""
        result = await self.session.execute(
            delete(ProductModel).where(ProductModel.id == product_id)
        )
        await self.session.commit()
        return bool(result.rowcount)

    async def list_all(self) -> list[Product]:
        """List all products, id ascending."""
        result = await self.session.execute(select(ProductModel).order_by(ProductModel.id.asc()))
        return [model.to_entity() for model in result.scalars().all()]

    async def search(self, query: ProductQuery) -> PageResult[Product]:
        """Find products with filtering, sorting, and pagination.

        Args:
            query: Listing query.

        Returns:
            Requested page plus the total count of matching rows.
        """
        total = (await self.session.execute(build_count_statement(query))).scalar_one()

        items: list[Product] = []
        if query.offset < total:
            result = await self.session.execute(build_search_statement(query))
            items = [model.to_entity() for model in result.scalars().all()]

        return PageResult(
            items=items,
            total_elements=total,
            page=query.page,
            size=query.size,
        )

    async def count(self) -> int:
        """Count all products."""
        result = await self.session.execute(select(func.count(ProductModel.id)))
        return result.scalar_one()
