"""Integration test fixtures.

Each test gets its own SQLite database file under pytest's tmp_path, with
the schema created from the ORM metadata. No external services are needed.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient

from infrastructure.database.dependencies import Database
from infrastructure.settings import DatabaseSettings, get_database_settings


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: end-to-end tests against a temporary SQLite database",
    )


@pytest.fixture
def sqlite_path(tmp_path) -> str:
    return str(tmp_path / "rbac.db")


@pytest.fixture
def db_settings(sqlite_path: str) -> DatabaseSettings:
    """Database settings pointing at a fresh SQLite file."""
    return DatabaseSettings(driver="sqlite+aiosqlite", database=sqlite_path)


@pytest_asyncio.fixture
async def database(db_settings: DatabaseSettings) -> AsyncGenerator[Database, None]:
    """Provide an opened database with the RBAC schema created."""
    import rbac.infrastructure.models  # noqa: F401

    database = Database.open(db_settings)
    await database.create_schema()
    yield database
    await database.close()


@pytest_asyncio.fixture
async def async_client(
    monkeypatch: pytest.MonkeyPatch, sqlite_path: str
) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for testing the full application.

    The application lifespan runs for real: it reads RBAC_DB_* settings,
    opens the database and creates the schema.
    """
    from main import app

    monkeypatch.setenv("RBAC_DB_DRIVER", "sqlite+aiosqlite")
    monkeypatch.setenv("RBAC_DB_DATABASE", sqlite_path)
    monkeypatch.setenv("RBAC_DB_CREATE_SCHEMA", "true")
    get_database_settings.cache_clear()

    try:
        async with LifespanManager(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                yield client
    finally:
        get_database_settings.cache_clear()
