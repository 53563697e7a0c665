from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from shared.errors import store_errors
from shared.persistence import CrudRepository

from .models import Order


class OrderRepository(CrudRepository[Order]):
    model = Order
    # Items and pricing are immutable once the order exists
    updatable_fields = frozenset({"status"})

    def _select_by_id(self, entity_id: int):
        return super()._select_by_id(entity_id).options(selectinload(Order.items))

    async def get_by_user(self, db: AsyncSession, user_id: int) -> List[Order]:
        async with store_errors(db, self._logger, "get_by_user"):
            result = await db.execute(
                select(Order)
                .where(Order.user_id == user_id)
                .options(selectinload(Order.items))
                .order_by(Order.ordered_at.desc(), Order.id.desc())
            )
            return list(result.scalars().all())
