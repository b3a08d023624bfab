"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions surface as BlogError subclasses (core/errors.py)
    - Store waits are bounded: pool checkout, connect and per-statement timeouts

Design Decisions:
    - Process-wide db_manager created in the FastAPI lifespan and disposed on shutdown
      (ADR: no global import side effects, guaranteed release)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - translate_store_errors wraps gateway methods so every route sees typed errors
"""

import functools
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, InterfaceError, DBAPIError, SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy import text

from blog_api.core.errors import (
    BlogError, ConstraintViolationError, DatabaseError, StoreUnavailableError,
)

logger = logging.getLogger(__name__)

# OSError covers refused connections and socket timeouts the driver raises unwrapped
_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError, OSError)


def _engine_options(
    database_url: str,
    pool_size: int,
    max_overflow: int,
    pool_timeout: float,
    connect_timeout: float,
    command_timeout: float,
) -> dict:
    """Build create_async_engine kwargs for the driver behind database_url."""
    if database_url.startswith("sqlite"):
        # SQLite has no server to wait on; pool sizing does not apply to it
        return {"connect_args": {"timeout": connect_timeout}}
    options = {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_timeout": pool_timeout,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }
    if database_url.startswith("postgresql+asyncpg"):
        options["connect_args"] = {
            "timeout": connect_timeout,
            "command_timeout": command_timeout,
        }
    return options


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_timeout: float = 10.0,
        connect_timeout: float = 10.0,
        command_timeout: float = 30.0,
    ):
        self.engine = create_async_engine(
            database_url,
            **_engine_options(
                database_url, pool_size, max_overflow,
                pool_timeout, connect_timeout, command_timeout,
            ),
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except BlogError:
            await session.rollback()
            raise
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise ConstraintViolationError("commit") from e
        except _UNAVAILABLE_ERRORS as e:
            await _rollback_quietly(session)
            logger.error(f"DB unavailable: {e}")
            raise StoreUnavailableError("execute") from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DatabaseError("Database driver error", "query") from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown") from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (used by /health/ready)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def close(self) -> None:
        """Dispose the engine and every pooled connection."""
        await self.engine.dispose()


async def _rollback_quietly(session: AsyncSession) -> None:
    """Roll back a session whose connection may already be gone."""
    try:
        await session.rollback()
    except SQLAlchemyError as e:
        logger.warning(f"Rollback after store failure also failed: {e}")


def translate_store_errors(operation: str):
    """Decorate a gateway coroutine so SQLAlchemy failures become BlogError subclasses.

    The decorated method's instance must expose the AsyncSession as `_db`; it is
    rolled back before the typed error is raised so the session stays usable.
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            try:
                return await func(self, *args, **kwargs)
            except IntegrityError as e:
                await self._db.rollback()
                logger.warning(
                    f"Constraint violation during {operation}: {e.orig}",
                    extra={"operation": operation, "error_code": "CONSTRAINT_VIOLATION"},
                )
                raise ConstraintViolationError(operation) from e
            except _UNAVAILABLE_ERRORS as e:
                await _rollback_quietly(self._db)
                logger.error(
                    f"Store unavailable during {operation}: {e}",
                    extra={"operation": operation, "error_code": "STORE_UNAVAILABLE"},
                )
                raise StoreUnavailableError(operation) from e
            except SQLAlchemyError as e:
                await _rollback_quietly(self._db)
                logger.error(
                    f"Store error during {operation}: {e}",
                    extra={"operation": operation, "error_code": "DATABASE_ERROR"},
                )
                raise DatabaseError("Database operation failed", operation) from e
        return wrapper
    return decorator


# Process-wide manager (created in lifespan, released by close_db)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.close()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise StoreUnavailableError("connect")
    async with db_manager.session() as session:
        yield session
