"""
Generic async persistence port shared by the entity repositories.

Every statement runs inside `store_errors`, so callers only ever see
AppError kinds: NotFound for a missing row, ResourceAlreadyExists for a
duplicate key and UnknownError for anything else the store reports.
"""
from typing import ClassVar, FrozenSet, Generic, List, Type, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import AppError, ErrorKind, store_errors

ModelT = TypeVar("ModelT")


class CrudRepository(Generic[ModelT]):
    model: ClassVar[Type]
    # Columns a partial update may touch
    updatable_fields: ClassVar[FrozenSet[str]] = frozenset()

    def __init__(self, logger):
        self._logger = logger.bind(repository=type(self).__name__)

    def _select_all(self):
        return select(self.model).order_by(self.model.id)

    def _select_by_id(self, entity_id: int):
        return select(self.model).where(self.model.id == entity_id)

    async def _reload(self, db: AsyncSession, entity_id: int) -> ModelT:
        stmt = self._select_by_id(entity_id).execution_options(populate_existing=True)
        result = await db.execute(stmt)
        return result.scalars().one()

    async def get_all(self, db: AsyncSession) -> List[ModelT]:
        async with store_errors(db, self._logger, "get_all"):
            result = await db.execute(self._select_all())
            return list(result.scalars().all())

    async def get_by_id(self, db: AsyncSession, entity_id: int) -> ModelT:
        async with store_errors(db, self._logger, "get_by_id"):
            result = await db.execute(self._select_by_id(entity_id))
            entity = result.scalars().first()
        if entity is None:
            raise AppError(ErrorKind.NOT_FOUND, f"{self.model.__name__} {entity_id} not found")
        return entity

    async def create(self, db: AsyncSession, entity: ModelT) -> ModelT:
        async with store_errors(db, self._logger, "create"):
            db.add(entity)
            await db.commit()
            return await self._reload(db, entity.id)

    async def update(self, db: AsyncSession, entity_id: int, fields: dict) -> ModelT:
        unknown = set(fields) - self.updatable_fields
        if unknown:
            raise AppError(
                ErrorKind.VALIDATION_ERROR, f"fields not updatable: {', '.join(sorted(unknown))}"
            )

        entity = await self.get_by_id(db, entity_id)
        if not fields:
            return entity

        async with store_errors(db, self._logger, "update"):
            for name, value in fields.items():
                setattr(entity, name, value)
            await db.commit()
            return await self._reload(db, entity_id)

    async def delete(self, db: AsyncSession, entity_id: int) -> None:
        async with store_errors(db, self._logger, "delete"):
            result = await db.execute(delete(self.model).where(self.model.id == entity_id))
            await db.commit()
        if result.rowcount == 0:
            raise AppError(ErrorKind.NOT_FOUND, f"{self.model.__name__} {entity_id} not found")
