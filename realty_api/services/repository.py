"""Store gateway used by the resource handlers.

A ``Repository`` wraps the request's ``AsyncSession`` for one model.
It is created per request, so handlers never share a session.
"""

import logging
from typing import Any, Generic, Iterable, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import and_, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import ColumnElement

from realty_api.core.exceptions import NotFoundException
from realty_api.models.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def eager_options(model: Type[Base], paths: Iterable[str]) -> List[Any]:
    """Build ``selectinload`` options from dotted relationship paths.

    Example:
        >>> eager_options(User, ["favorite_sales.sale_unit"])
    """
    options = []
    for path in paths:
        current = model
        loader = None
        for name in path.split("."):
            attribute = getattr(current, name)
            loader = selectinload(attribute) if loader is None else loader.selectinload(attribute)
            current = attribute.property.mapper.class_
        options.append(loader)
    return options


class Repository(Generic[ModelT]):
    """Find, list, add and delete rows of one model.

    Args:
        session: Request scoped async session.
        model: Mapped class handled by this repository.
        includes: Relationship paths loaded with every fetched row.
    """

    def __init__(
        self,
        session: AsyncSession,
        model: Type[ModelT],
        includes: Iterable[str] = (),
    ) -> None:
        self.session = session
        self.model = model
        self.options = eager_options(model, includes)

    def _select(self):
        return select(self.model).options(*self.options)

    async def get(self, item_id: str) -> Optional[ModelT]:
        result = await self.session.execute(
            self._select().where(self.model.id == item_id)
        )
        return result.scalar_one_or_none()

    async def get_or_404(self, item_id: str, label: str) -> ModelT:
        """Fetch a row by primary key.

        Raises:
            NotFoundException: If no row has this id.
        """
        item = await self.get(item_id)
        if item is None:
            raise NotFoundException(
                f"{label} not found!",
                details={"id": item_id},
            )
        return item

    async def exists(self, item_id: str) -> bool:
        result = await self.session.execute(
            select(func.count()).select_from(self.model).where(self.model.id == item_id)
        )
        return result.scalar_one() > 0

    async def find_by(
        self,
        values: dict,
        exclude_id: Optional[str] = None,
    ) -> Optional[ModelT]:
        """Return the first row whose columns equal ``values``."""
        conditions = [getattr(self.model, name) == value for name, value in values.items()]
        if exclude_id is not None:
            conditions.append(self.model.id != exclude_id)
        result = await self.session.execute(
            select(self.model).where(and_(*conditions)).limit(1)
        )
        return result.scalars().first()

    async def list(
        self,
        conditions: Sequence[ColumnElement] = (),
        limit: int = 20,
    ) -> Sequence[ModelT]:
        """List rows matching every condition, most recently updated first."""
        query = self._select().where(*conditions)
        if hasattr(self.model, "updated_at"):
            query = query.order_by(self.model.updated_at.desc())
        result = await self.session.execute(query.limit(limit))
        return result.scalars().all()

    async def count_where(self, model: Type[Base], column: str, value: Any) -> int:
        """Count rows of another model pointing at ``value``."""
        result = await self.session.execute(
            select(func.count()).select_from(model).where(getattr(model, column) == value)
        )
        return result.scalar_one()

    def add(self, item: ModelT) -> ModelT:
        self.session.add(item)
        return item

    async def delete(self, item: ModelT) -> None:
        await self.session.delete(item)

    async def delete_many(self, ids: Sequence[str]) -> int:
        """Delete rows by primary key in one statement.

        Returns:
            Number of deleted rows.
        """
        result = await self.session.execute(
            delete(self.model).where(self.model.id.in_(ids))
        )
        logger.debug(f"Deleted {result.rowcount} {self.model.__tablename__} rows")
        return result.rowcount
