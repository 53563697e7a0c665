from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import store_errors
from shared.persistence import CrudRepository

from .models import Category, Product


class CategoryRepository(CrudRepository[Category]):
    model = Category
    updatable_fields = frozenset({"name", "slug", "description"})


class ProductRepository(CrudRepository[Product]):
    model = Product
    updatable_fields = frozenset(
        {"name", "description", "sku", "price", "stock", "category_id", "image_url", "is_active"}
    )

    def _select_all(self):
        return super()._select_all().where(Product.is_active.is_(True))

    async def get_by_category(self, db: AsyncSession, category_id: int) -> List[Product]:
        async with store_errors(db, self._logger, "get_by_category"):
            result = await db.execute(
                select(Product)
                .where(Product.category_id == category_id)
                .where(Product.is_active.is_(True))
                .order_by(Product.id)
            )
            return list(result.scalars().all())
