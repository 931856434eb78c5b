"""Database Session Manager — async connection pool, data gateway, automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - IntegrityError maps to ConflictError; every other SQLAlchemy exception to DatabaseError
    - DataGateway.transaction() commits once at the outermost level, rolls back on any exception
    - SQLite connections always run with PRAGMA foreign_keys=ON

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Gateway returns plain dicts (row mappings), never ORM instances: repositories project
      rows themselves and nothing lazy-loads after the session closes
    - Nested transaction() calls join the outer one instead of opening savepoints
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.engine import Result
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.sql import Executable

from aquatour.core.errors import CRMError, ConflictError, DatabaseError

logger = logging.getLogger(__name__)

_INTEGRITY_MESSAGE = "Record conflicts with existing data"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(
    database_url: str, pool_size: int = 20, max_overflow: int = 10,
    **kwargs: Any,
) -> AsyncEngine:
    """Create the async engine; pool sizing only applies to server databases."""
    options = dict(kwargs)
    if not database_url.startswith("sqlite"):
        options.setdefault("pool_size", pool_size)
        options.setdefault("max_overflow", max_overflow)
        options.setdefault("pool_pre_ping", True)
        options.setdefault("pool_recycle", 3600)
    engine = create_async_engine(database_url, **options)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
        **engine_kwargs: Any,
    ):
        self.engine = build_engine(
            database_url, pool_size=pool_size, max_overflow=max_overflow,
            **engine_kwargs,
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
        except CRMError:
            await session.rollback()
            raise
        except IntegrityError as e:
            await session.rollback()
            logger.warning(f"DB integrity error: {e}")
            raise ConflictError(_INTEGRITY_MESSAGE) from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute") from e
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
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


class DataGateway:
    """Parameterized query/execute plus a scoped transaction over one AsyncSession.

    Every repository, the uniqueness validator and the referential guard talk to
    the store only through this object, so store exceptions are mapped in one place.
    """

    def __init__(self, session: AsyncSession):
        self._session = session
        self._depth = 0

    async def _run(self, statement: Executable, operation: str) -> Result:
        try:
            return await self._session.execute(statement)
        except IntegrityError as e:
            logger.warning(
                f"Integrity constraint violated during {operation}: {e.orig}",
                extra={"error_code": "CONFLICT"},
            )
            raise ConflictError(_INTEGRITY_MESSAGE) from e
        except SQLAlchemyError as e:
            logger.error(
                f"DB {operation} error: {e}",
                extra={"error_code": "DATABASE_ERROR"},
            )
            raise DatabaseError("Database operation failed", operation) from e

    async def query(self, statement: Executable) -> list[dict]:
        result = await self._run(statement, "query")
        return [dict(row) for row in result.mappings().all()]

    async def query_one(self, statement: Executable) -> dict | None:
        result = await self._run(statement, "query")
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def scalar(self, statement: Executable) -> Any:
        result = await self._run(statement, "query")
        return result.scalar()

    async def execute(self, statement: Executable) -> Result:
        """Run a mutation (insert/update/delete) and return the raw result."""
        return await self._run(statement, "execute")

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator["DataGateway", None]:
        """Commit on clean exit, roll back on any exception; nested calls join."""
        if self._depth > 0:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
            return

        self._depth = 1
        try:
            yield self
            await self._commit()
        except BaseException:
            await self._session.rollback()
            raise
        finally:
            self._depth = 0

    async def _commit(self) -> None:
        try:
            await self._session.commit()
        except IntegrityError as e:
            logger.warning(f"Integrity constraint violated on commit: {e.orig}")
            raise ConflictError(_INTEGRITY_MESSAGE) from e
        except SQLAlchemyError as e:
            logger.error(f"DB commit error: {e}")
            raise DatabaseError("Database operation failed", "commit") from e


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def close_db() -> None:
    global db_manager
    if db_manager:
        await db_manager.dispose()
    db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
