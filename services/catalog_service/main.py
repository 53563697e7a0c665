from typing import Optional

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from shared.config.app_factory import create_service_app
from shared.config.database import CATALOG_SCHEMA, create_tables
from shared.config.settings import Settings

from .models import Category, Product
from .repository import CategoryRepository, ProductRepository
from .router import category_router, product_router, public_router
from .service import CategoryService, ProductService


def install_catalog_service(app: FastAPI) -> None:
    logger = app.state.logger
    app.state.category_service = CategoryService(CategoryRepository(logger), logger)
    app.state.product_service = ProductService(ProductRepository(logger), logger)

    app.include_router(category_router)
    app.include_router(product_router)


async def init_catalog_store(app: FastAPI) -> None:
    await create_tables(app.state.engine, CATALOG_SCHEMA, [Category.__table__, Product.__table__])


def create_catalog_app(
    settings: Optional[Settings] = None, engine: Optional[AsyncEngine] = None
) -> FastAPI:
    settings = settings or Settings.from_env()
    catalog_app = create_service_app(
        "Catalog Service",
        "catalog_service",
        settings,
        engine,
        description="Categories and products.",
    )
    install_catalog_service(catalog_app)
    catalog_app.include_router(public_router)

    @catalog_app.on_event("startup")
    async def startup_event():
        await init_catalog_store(catalog_app)

    return catalog_app
