"""Resource application service for the RBAC bounded context."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from rbac.application.observability import (
    DefaultResourceServiceProbe,
    ResourceServiceProbe,
)
from rbac.application.services.transaction import unit_of_work
from rbac.domain.aggregates import Resource
from rbac.domain.changes import ResourceChanges
from rbac.domain.value_objects import ResourceId
from rbac.ports.exceptions import NotFoundError, RBACError
from rbac.ports.repositories import IResourceRepository


class ResourceService:
    """Application service for resource management."""

    def __init__(
        self,
        session: AsyncSession,
        resource_repository: IResourceRepository,
        probe: ResourceServiceProbe | None = None,
    ):
        self._session = session
        self._resource_repository = resource_repository
        self._probe = probe or DefaultResourceServiceProbe()

    async def create_resource(
        self, key: str, name: str | None = None, description: str | None = None
    ) -> Resource:
        """Create a new resource.

        Raises:
            ConflictError: If the key is already taken
        """
        try:
            async with unit_of_work(self._session):
                resource = await self._resource_repository.create(
                    key=key, name=name, description=description
                )
        except RBACError as e:
            self._probe.resource_operation_failed("create", str(e))
            raise

        self._probe.resource_created(resource_id=resource.id.value, key=resource.key)
        return resource

    async def get_resource(self, resource_id: ResourceId) -> Resource:
        async with unit_of_work(self._session):
            resource = await self._resource_repository.get_by_id(resource_id)

        if resource is None:
            raise NotFoundError(f"Resource {resource_id} not found", entity="resource")
        return resource

    async def list_resources(self) -> list[Resource]:
        async with unit_of_work(self._session):
            return await self._resource_repository.list_all()

    async def update_resource(
        self, resource_id: ResourceId, changes: ResourceChanges
    ) -> Resource:
        try:
            async with unit_of_work(self._session):
                resource = await self._resource_repository.update(
                    resource_id, changes
                )
        except RBACError as e:
            self._probe.resource_operation_failed(
                "update", str(e), resource_id=resource_id.value
            )
            raise

        self._probe.resource_updated(
            resource_id=resource_id.value, fields=sorted(changes.as_dict())
        )
        return resource

    async def delete_resource(self, resource_id: ResourceId) -> None:
        """Delete a resource and every grant on it.

        Raises:
            NotFoundError: If the resource does not exist
        """
        try:
            async with unit_of_work(self._session):
                await self._resource_repository.delete(resource_id)
        except RBACError as e:
            self._probe.resource_operation_failed(
                "delete", str(e), resource_id=resource_id.value
            )
            raise

        self._probe.resource_deleted(resource_id=resource_id.value)
