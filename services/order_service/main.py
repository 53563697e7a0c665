from typing import Optional

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from shared.config.app_factory import create_service_app
from shared.config.database import ORDER_SCHEMA, create_tables
from shared.config.settings import Settings

from .models import Order, OrderItem  # Import to register with Base
from .repository import OrderRepository
from .router import public_router, router
from .service import OrderService


def install_order_service(app: FastAPI) -> None:
    app.state.order_service = OrderService(OrderRepository(app.state.logger), app.state.logger)
    app.include_router(router)


async def init_order_store(app: FastAPI) -> None:
    await create_tables(app.state.engine, ORDER_SCHEMA, [Order.__table__, OrderItem.__table__])


def create_order_app(
    settings: Optional[Settings] = None, engine: Optional[AsyncEngine] = None
) -> FastAPI:
    settings = settings or Settings.from_env()
    order_app = create_service_app("Order Service", "order_service", settings, engine)
    install_order_service(order_app)
    order_app.include_router(public_router)

    @order_app.on_event("startup")
    async def startup_event():
        await init_order_store(order_app)

    return order_app
