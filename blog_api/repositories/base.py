"""Generic SQLAlchemy repository."""
from typing import Generic, TypeVar

from sqlalchemy import Select, delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class SQLAlchemyRepository(Generic[ModelT]):
    """
    Record access for one mapped class, bound to a request's session.

    Subclasses set ``model`` and may override ``_select`` to add the
    eager-load options every read of that entity needs.
    """

    model: type[ModelT]

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    def _select(self) -> Select:
        return select(self.model)

    async def _all(self, query: Select) -> list[ModelT]:
        result = await self.db.execute(query)
        return list(result.unique().scalars().all())

    async def add(self, entity: ModelT) -> ModelT:
        """Persist *entity*; its identity is assigned by the flush."""
        self.db.add(entity)
        await self.db.flush()
        return entity

    async def get_by_id(self, entity_id: int) -> ModelT | None:
        result = await self.db.execute(self._select().where(self.model.id == entity_id))
        return result.unique().scalar_one_or_none()

    async def list_all(self) -> list[ModelT]:
        return await self._all(self._select().order_by(self.model.id))

    async def exists_by_id(self, entity_id: int) -> bool:
        return bool(await self.db.scalar(select(exists().where(self.model.id == entity_id))))

    async def delete_by_id(self, entity_id: int) -> None:
        # Dependent rows go with it through ON DELETE CASCADE.
        await self.db.execute(delete(self.model).where(self.model.id == entity_id))
        await self.db.flush()
