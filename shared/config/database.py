from typing import Iterable, Optional

from fastapi import FastAPI, Request
from sqlalchemy import Table, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from .settings import Settings

# One schema per service to keep the microservice data isolated
USER_SCHEMA = "user_schema"
CATALOG_SCHEMA = "catalog_schema"
ORDER_SCHEMA = "order_schema"
SERVICE_SCHEMAS = (USER_SCHEMA, CATALOG_SCHEMA, ORDER_SCHEMA)

Base = declarative_base()


def build_engine(settings: Settings) -> AsyncEngine:
    url = make_url(settings.database_url)
    options = {"echo": settings.sql_echo}

    if url.get_backend_name() == "sqlite":
        # SQLite has no schemas: map every service schema onto the main database.
        options["execution_options"] = {
            "schema_translate_map": {schema: None for schema in SERVICE_SCHEMAS}
        }
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool

    return create_async_engine(url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, expire_on_commit=False)


def attach_database(app: FastAPI, engine: AsyncEngine) -> None:
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)


async def create_tables(
    engine: AsyncEngine, schema: str, tables: Optional[Iterable[Table]] = None
) -> None:
    """Create the service schema (where the store supports it) and its tables."""
    async with engine.begin() as conn:
        if conn.dialect.name == "postgresql":
            await conn.execute(text(f"CREATE SCHEMA IF NOT EXISTS {schema}"))
        await conn.run_sync(
            Base.metadata.create_all, tables=list(tables) if tables is not None else None
        )


async def get_db(request: Request):
    async with request.app.state.session_factory() as session:
        yield session
