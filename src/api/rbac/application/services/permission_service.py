"""Permission grant service for the RBAC bounded context.

Manages the (group, resource) grants that the evaluator and the
aggregator read.
"""

from __future__ import annotations

from dataclasses import asdict

from sqlalchemy.ext.asyncio import AsyncSession

from rbac.application.observability import (
    DefaultPermissionServiceProbe,
    PermissionServiceProbe,
)
from rbac.application.services.transaction import unit_of_work
from rbac.domain.aggregates import Permission
from rbac.domain.changes import PermissionFlagChanges
from rbac.domain.value_objects import GroupId, PermissionFlags, ResourceId
from rbac.ports.exceptions import RBACError
from rbac.ports.repositories import IPermissionRepository


class PermissionService:
    """Application service for permission grants."""

    def __init__(
        self,
        session: AsyncSession,
        permission_repository: IPermissionRepository,
        probe: PermissionServiceProbe | None = None,
    ):
        """Initialize PermissionService with dependencies.

        Args:
            session: Database session for transaction management
            permission_repository: Repository for grant persistence
            probe: Optional domain probe for observability
        """
        self._session = session
        self._permission_repository = permission_repository
        self._probe = probe or DefaultPermissionServiceProbe()

    async def grant(
        self,
        group_id: GroupId,
        resource_id: ResourceId,
        flags: PermissionFlags,
    ) -> Permission:
        """Create the grant for a (group, resource) pair.

        Raises:
            NotFoundError: If the group or resource does not exist
            ConflictError: If the pair already has a grant
        """
        try:
            async with unit_of_work(self._session):
                permission = await self._permission_repository.create(
                    group_id=group_id, resource_id=resource_id, flags=flags
                )
        except RBACError as e:
            self._probe.permission_operation_failed(
                "grant",
                str(e),
                group_id=group_id.value,
                resource_id=resource_id.value,
            )
            raise

        self._probe.permission_granted(
            group_id=group_id.value,
            resource_id=resource_id.value,
            flags=asdict(flags),
        )
        return permission

    async def list_group_permissions(self, group_id: GroupId) -> list[Permission]:
        """List the grants held by a group.

        Raises:
            NotFoundError: If the group does not exist
        """
        async with unit_of_work(self._session):
            return await self._permission_repository.list_for_group(group_id)

    async def update_grant(
        self,
        group_id: GroupId,
        resource_id: ResourceId,
        changes: PermissionFlagChanges,
    ) -> Permission:
        """Merge the provided flags into an existing grant.

        Raises:
            NotFoundError: If the pair has no grant
        """
        try:
            async with unit_of_work(self._session):
                permission = await self._permission_repository.update(
                    group_id=group_id, resource_id=resource_id, changes=changes
                )
        except RBACError as e:
            self._probe.permission_operation_failed(
                "update",
                str(e),
                group_id=group_id.value,
                resource_id=resource_id.value,
            )
            raise

        self._probe.permission_updated(
            group_id=group_id.value,
            resource_id=resource_id.value,
            fields=sorted(changes.as_dict()),
        )
        return permission

    async def revoke(self, group_id: GroupId, resource_id: ResourceId) -> None:
        """Delete the grant for a (group, resource) pair.

        Raises:
            NotFoundError: If the pair has no grant
        """
        try:
            async with unit_of_work(self._session):
                await self._permission_repository.delete(
                    group_id=group_id, resource_id=resource_id
                )
        except RBACError as e:
            self._probe.permission_operation_failed(
                "revoke",
                str(e),
                group_id=group_id.value,
                resource_id=resource_id.value,
            )
            raise

        self._probe.permission_revoked(
            group_id=group_id.value, resource_id=resource_id.value
        )
