"""Fixtures wiring RBAC services to a real database.

Each ``rbac.<service>()`` context opens a fresh session, the same way
every HTTP request gets its own session in the application.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import pytest
from sqlalchemy import func, select

from infrastructure.database.dependencies import Database
from rbac.application.services import (
    GroupService,
    PermissionAggregator,
    PermissionEvaluator,
    PermissionService,
    ResourceService,
    UserService,
)
from rbac.infrastructure import (
    GroupRepository,
    MembershipRepository,
    PermissionRepository,
    ResourceRepository,
    UserRepository,
)


class RbacServices:
    """Builds services bound to a new session per use."""

    def __init__(self, database: Database) -> None:
        self._database = database

    @asynccontextmanager
    async def users(self) -> AsyncIterator[UserService]:
        async with self._database.session() as session:
            yield UserService(session=session, user_repository=UserRepository(session))

    @asynccontextmanager
    async def groups(self) -> AsyncIterator[GroupService]:
        async with self._database.session() as session:
            yield GroupService(
                session=session,
                group_repository=GroupRepository(session),
                membership_repository=MembershipRepository(session),
            )

    @asynccontextmanager
    async def resources(self) -> AsyncIterator[ResourceService]:
        async with self._database.session() as session:
            yield ResourceService(
                session=session, resource_repository=ResourceRepository(session)
            )

    @asynccontextmanager
    async def permissions(self) -> AsyncIterator[PermissionService]:
        async with self._database.session() as session:
            yield PermissionService(
                session=session, permission_repository=PermissionRepository(session)
            )

    @asynccontextmanager
    async def evaluator(self) -> AsyncIterator[PermissionEvaluator]:
        async with self._database.session() as session:
            yield PermissionEvaluator(
                session=session,
                user_repository=UserRepository(session),
                permission_repository=PermissionRepository(session),
            )

    @asynccontextmanager
    async def aggregator(self) -> AsyncIterator[PermissionAggregator]:
        async with self._database.session() as session:
            yield PermissionAggregator(
                session=session,
                user_repository=UserRepository(session),
                permission_repository=PermissionRepository(session),
            )

    async def count(self, model: type) -> int:
        """Count rows in a model's table."""
        async with self._database.session() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()


@pytest.fixture
def rbac(database: Database) -> RbacServices:
    return RbacServices(database)
