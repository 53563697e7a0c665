"""
User service: registration, login, token refresh and user CRUD.

Run with `uvicorn --factory services.user_service.main:create_user_app`.
"""
from typing import Optional

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from shared.config.app_factory import create_service_app
from shared.config.database import USER_SCHEMA, create_tables
from shared.config.settings import Settings

from .models import User
from .repository import UserRepository
from .router import auth_router, public_router, user_router
from .service import AuthService, UserService, seed_initial_user


def install_user_service(app: FastAPI) -> None:
    """Wire the user use cases and routers onto an app built by create_service_app."""
    logger = app.state.logger
    repository = UserRepository(logger)
    users = UserService(repository, app.state.password_hasher, logger)

    app.state.user_repository = repository
    app.state.user_service = users
    app.state.auth_service = AuthService(
        repository, users, app.state.token_service, app.state.password_hasher, logger
    )

    app.include_router(auth_router)
    app.include_router(user_router)


async def init_user_store(app: FastAPI) -> None:
    await create_tables(app.state.engine, USER_SCHEMA, [User.__table__])

    settings: Settings = app.state.settings
    if settings.seed_email and settings.seed_password:
        await seed_initial_user(
            app.state.session_factory,
            app.state.user_repository,
            app.state.password_hasher,
            settings.seed_email,
            settings.seed_password,
            app.state.logger,
        )
    else:
        app.state.logger.info("initial user seed skipped: START_USER_EMAIL or START_USER_PW not set")


def create_user_app(
    settings: Optional[Settings] = None, engine: Optional[AsyncEngine] = None
) -> FastAPI:
    settings = settings or Settings.from_env()
    user_app = create_service_app(
        "User Service",
        "user_service",
        settings,
        engine,
        description="Registration, JWT login/refresh and user management.",
    )
    install_user_service(user_app)
    user_app.include_router(public_router)

    @user_app.on_event("startup")
    async def startup_event() -> None:
        await init_user_store(user_app)

    return user_app
