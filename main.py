"""
All three services in one process on one engine, for local development.

    python main.py
"""
from typing import Optional

import uvicorn
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from shared.config.app_factory import create_service_app
from shared.config.settings import Settings

from services.user_service.main import init_user_store, install_user_service
from services.catalog_service.main import init_catalog_store, install_catalog_service
from services.order_service.main import init_order_store, install_order_service


def create_app(settings: Optional[Settings] = None, engine: Optional[AsyncEngine] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = create_service_app("Ecommerce Cluster", "ecommerce_cluster", settings, engine)

    install_user_service(app)
    install_catalog_service(app)
    install_order_service(app)

    @app.get("/health", include_in_schema=False)
    async def health_check():
        return {"service": "cluster", "status": "running"}

    @app.on_event("startup")
    async def startup_event():
        # Catalog first: products reference categories
        await init_catalog_store(app)
        await init_order_store(app)
        await init_user_store(app)

    return app


if __name__ == "__main__":
    config = Settings.from_env()
    uvicorn.run(create_app(config), host="0.0.0.0", port=config.server_port)
