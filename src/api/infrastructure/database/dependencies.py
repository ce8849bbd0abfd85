"""Database handle and its FastAPI dependencies.

The application owns exactly one ``Database``: it is opened in the FastAPI
lifespan, stored on ``app.state.database``, and disposed at shutdown.
Request handlers receive sessions from it through ``get_write_session``.
"""

from __future__ import annotations

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_engine
from infrastructure.database.models import Base
from infrastructure.observability import ConnectionProbe, DefaultConnectionProbe
from infrastructure.settings import DatabaseSettings


class Database:
    """Explicitly owned store handle wrapping an engine and its sessionmaker.

    Sessions are created with ``expire_on_commit=False`` and do NOT
    auto-commit. Callers manage transactions with ``async with session.begin()``.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        probe: ConnectionProbe | None = None,
    ) -> None:
        self._engine = engine
        self._probe = probe or DefaultConnectionProbe()
        self._sessionmaker = async_sessionmaker(
            engine,
            expire_on_commit=False,
            class_=AsyncSession,
        )

    @classmethod
    def open(
        cls,
        settings: DatabaseSettings,
        probe: ConnectionProbe | None = None,
    ) -> Database:
        """Create the engine for the given settings and wrap it.

        Args:
            settings: Database connection settings
            probe: Optional connection probe for observability

        Returns:
            Database handle ready to hand out sessions
        """
        database = cls(create_engine(settings), probe=probe)
        database._probe.database_opened(
            target=settings.connection_string,
            pool_size=settings.pool_size,
        )
        return database

    @property
    def engine(self) -> AsyncEngine:
        """The underlying async engine."""
        return self._engine

    def session(self) -> AsyncSession:
        """Create a new session bound to this database."""
        return self._sessionmaker()

    async def create_schema(self) -> None:
        """Create all tables known to the ORM metadata (idempotent)."""
        async with self._engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)
        self._probe.schema_created(table_count=len(Base.metadata.tables))

    async def ping(self) -> bool:
        """Run a trivial query to verify the database is reachable."""
        try:
            async with self._engine.connect() as connection:
                await connection.execute(text("SELECT 1"))
            return True
        except Exception as e:
            self._probe.health_check_failed(e)
            return False

    async def close(self) -> None:
        """Dispose the engine and all pooled connections."""
        await self._engine.dispose()
        self._probe.database_closed()


def get_database(request: Request) -> Database:
    """Return the database handle opened by the application lifespan."""
    return request.app.state.database


async def get_write_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for the current request (FastAPI dependency).

    The session is configured to NOT auto-commit. Services open the
    transaction explicitly:

        async with session.begin():
            ...

    Yields:
        AsyncSession for database operations
    """
    async with database.session() as session:
        yield session
