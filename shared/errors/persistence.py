"""
Classification of store failures into error kinds.

Repositories wrap every statement in `store_errors(...)`; nothing above the
repository layer sees a SQLAlchemy exception.
"""
import sqlite3
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .kinds import AppError, ErrorKind

PG_UNIQUE_VIOLATION = "23505"
MYSQL_DUPLICATE_ENTRY = 1062
SQLITE_UNIQUE_CODES = frozenset(
    {sqlite3.SQLITE_CONSTRAINT_UNIQUE, sqlite3.SQLITE_CONSTRAINT_PRIMARYKEY}
)


def _driver_errors(exc: IntegrityError):
    # The async adapters wrap the driver exception; the code may sit on either
    error = exc.orig
    seen = set()
    while error is not None and id(error) not in seen:
        seen.add(id(error))
        yield error
        error = error.__cause__


def is_unique_violation(exc: IntegrityError) -> bool:
    """Inspect the driver error carried by an IntegrityError for a duplicate-key code."""
    for orig in _driver_errors(exc):
        # asyncpg and psycopg expose the SQLSTATE
        sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
        if sqlstate is not None:
            return sqlstate == PG_UNIQUE_VIOLATION

        sqlite_code = getattr(orig, "sqlite_errorcode", None)
        if sqlite_code is not None:
            return sqlite_code in SQLITE_UNIQUE_CODES

        args = getattr(orig, "args", ())
        if args and isinstance(args[0], int):
            return args[0] == MYSQL_DUPLICATE_ENTRY
    return False


def classify_store_error(exc: SQLAlchemyError) -> AppError:
    if isinstance(exc, IntegrityError) and is_unique_violation(exc):
        return AppError(ErrorKind.RESOURCE_ALREADY_EXISTS, str(exc.orig))
    return AppError(ErrorKind.UNKNOWN_ERROR, str(exc))


@asynccontextmanager
async def store_errors(db: AsyncSession, logger, operation: str):
    try:
        yield
    except SQLAlchemyError as exc:
        await db.rollback()
        error = classify_store_error(exc)
        if error.kind is ErrorKind.RESOURCE_ALREADY_EXISTS:
            logger.info("duplicate resource rejected", operation=operation)
        else:
            logger.error("store operation failed", operation=operation, error=str(exc))
        raise error from exc
