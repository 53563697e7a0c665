from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from .models import Category, Product
from .repository import CategoryRepository, ProductRepository
from .schemas import CategoryCreate, CategoryUpdate, ProductCreate, ProductUpdate


class CategoryService:

    def __init__(self, repository: CategoryRepository, logger):
        self._repository = repository
        self._logger = logger

    async def get_all(self, db: AsyncSession) -> List[Category]:
        self._logger.info("getting all categories")
        return await self._repository.get_all(db)

    async def get_by_id(self, db: AsyncSession, category_id: int) -> Category:
        self._logger.info("getting category by id", category_id=category_id)
        return await self._repository.get_by_id(db, category_id)

    async def create(self, db: AsyncSession, data: CategoryCreate) -> Category:
        self._logger.info("creating category", slug=data.slug)
        category = Category(name=data.name, slug=data.slug, description=data.description)
        return await self._repository.create(db, category)

    async def update(self, db: AsyncSession, category_id: int, patch: CategoryUpdate) -> Category:
        fields = patch.changes()
        self._logger.info("updating category", category_id=category_id, fields=sorted(fields))
        return await self._repository.update(db, category_id, fields)

    async def delete(self, db: AsyncSession, category_id: int) -> None:
        self._logger.info("deleting category", category_id=category_id)
        await self._repository.delete(db, category_id)


class ProductService:

    def __init__(self, repository: ProductRepository, logger):
        self._repository = repository
        self._logger = logger

    async def get_all(self, db: AsyncSession) -> List[Product]:
        self._logger.info("getting all products")
        return await self._repository.get_all(db)

    async def get_by_id(self, db: AsyncSession, product_id: int) -> Product:
        self._logger.info("getting product by id", product_id=product_id)
        return await self._repository.get_by_id(db, product_id)

    async def get_by_category(self, db: AsyncSession, category_id: int) -> List[Product]:
        self._logger.info("getting products by category", category_id=category_id)
        return await self._repository.get_by_category(db, category_id)

    async def create(self, db: AsyncSession, data: ProductCreate) -> Product:
        self._logger.info("creating product", sku=data.sku)
        product = Product(
            name=data.name,
            description=data.description,
            sku=data.sku,
            price=data.price,
            stock=data.stock,
            category_id=data.category_id,
            image_url=data.image_url,
            is_active=data.is_active,
        )
        return await self._repository.create(db, product)

    async def update(self, db: AsyncSession, product_id: int, patch: ProductUpdate) -> Product:
        fields = patch.changes()
        self._logger.info("updating product", product_id=product_id, fields=sorted(fields))
        return await self._repository.update(db, product_id, fields)

    async def delete(self, db: AsyncSession, product_id: int) -> None:
        self._logger.info("deleting product", product_id=product_id)
        await self._repository.delete(db, product_id)
