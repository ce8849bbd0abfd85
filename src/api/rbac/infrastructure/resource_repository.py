"""SQLAlchemy implementation of IResourceRepository."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from rbac.domain.aggregates import Resource
from rbac.domain.changes import ResourceChanges
from rbac.domain.value_objects import ResourceId
from rbac.infrastructure.mappers import RESOURCE_LOAD, to_resource
from rbac.infrastructure.models import PermissionModel, ResourceModel
from rbac.infrastructure.mutation_guards import require_row, translate_integrity_errors
from rbac.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from rbac.ports.exceptions import ConflictError
from rbac.ports.repositories import IResourceRepository

DUPLICATE_RESOURCE_MESSAGE = "Resource with this key already exists"


class ResourceRepository(IResourceRepository):
    """Repository for Resource aggregates backed by the resources table.

    Deleting a resource removes every grant naming it in the same
    transaction.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: RepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultRepositoryProbe()

    async def create(
        self, key: str, name: str | None, description: str | None
    ) -> Resource:
        await self._ensure_unique_key(key)

        model = ResourceModel(key=key, name=name, description=description)
        self._session.add(model)
        with translate_integrity_errors(DUPLICATE_RESOURCE_MESSAGE):
            await self._session.flush()

        self._probe.row_saved("resource", model.id, created=True)
        return await self._reload(model.id)

    async def get_by_id(self, resource_id: ResourceId) -> Resource | None:
        stmt = (
            select(ResourceModel)
            .where(ResourceModel.id == resource_id.value)
            .options(*RESOURCE_LOAD)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.row_not_found("resource", resource_id.value)
            return None

        return to_resource(model)

    async def list_all(self) -> list[Resource]:
        stmt = select(ResourceModel).options(*RESOURCE_LOAD).order_by(ResourceModel.id)
        result = await self._session.execute(stmt)
        return [to_resource(model) for model in result.scalars().all()]

    async def update(
        self, resource_id: ResourceId, changes: ResourceChanges
    ) -> Resource:
        model = await require_row(
            self._session,
            ResourceModel,
            resource_id.value,
            entity="resource",
            exclusive=True,
        )

        if changes.key is not None:
            await self._ensure_unique_key(changes.key, exclude_id=model.id)

        for field, value in changes.as_dict().items():
            setattr(model, field, value)
        with translate_integrity_errors(DUPLICATE_RESOURCE_MESSAGE):
            await self._session.flush()

        self._probe.row_saved("resource", model.id, created=False)
        return await self._reload(model.id)

    async def delete(self, resource_id: ResourceId) -> None:
        model = await require_row(
            self._session,
            ResourceModel,
            resource_id.value,
            entity="resource",
            exclusive=True,
        )

        permissions = await self._session.execute(
            delete(PermissionModel).where(PermissionModel.resource_id == model.id)
        )
        await self._session.delete(model)
        await self._session.flush()

        self._probe.row_deleted(
            "resource", resource_id.value, permissions_removed=permissions.rowcount
        )

    async def _ensure_unique_key(self, key: str, exclude_id: int | None = None) -> None:
        stmt = select(ResourceModel.id).where(ResourceModel.key == key)
        if exclude_id is not None:
            stmt = stmt.where(ResourceModel.id != exclude_id)
        result = await self._session.execute(stmt)
        if result.first() is not None:
            self._probe.duplicate_rejected("resource", "key", key)
            raise ConflictError(DUPLICATE_RESOURCE_MESSAGE)

    async def _reload(self, row_id: int) -> Resource:
        """Re-read a row with its grants after a write."""
        stmt = (
            select(ResourceModel)
            .where(ResourceModel.id == row_id)
            .options(*RESOURCE_LOAD)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return to_resource(result.scalar_one())
