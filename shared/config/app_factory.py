from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from shared.errors import register_error_handlers
from shared.observability.setup import setup_observability
from shared.security import PasswordHasher, TokenService

from .database import attach_database, build_engine
from .settings import Settings


def configure_cors(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def create_service_app(
    title: str,
    service_name: str,
    settings: Settings,
    engine: Optional[AsyncEngine] = None,
    description: str = "",
) -> FastAPI:
    """
    Common wiring for a database-backed service: observability, the error
    boundary, the engine/session factory and the token/password services.

    Everything lands on `app.state`; the service module then adds its own
    repositories, use cases and routers.
    """
    app = FastAPI(title=title, version="1.0.0", description=description)
    app.state.settings = settings

    # --- OBSERVABILITY BOOTSTRAP ---
    logger = setup_observability(app, service_name, settings)
    register_error_handlers(app)
    configure_cors(app, settings)

    owns_engine = engine is None
    attach_database(app, engine or build_engine(settings))

    app.state.token_service = TokenService(settings.jwt)
    app.state.password_hasher = PasswordHasher(settings.bcrypt_rounds)

    @app.on_event("shutdown")
    async def dispose_engine() -> None:
        if owns_engine:
            await app.state.engine.dispose()
        logger.info("service stopped")

    logger.info("service configured", env=settings.env)
    return app
