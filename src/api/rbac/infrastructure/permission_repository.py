"""SQLAlchemy implementation of IPermissionRepository.

A grant is addressed by its (group, resource) pair. The evaluator and the
aggregator read grants through the memberships table, so both answer from
one SQL statement each.
"""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from rbac.domain.aggregates import Permission
from rbac.domain.changes import PermissionFlagChanges
from rbac.domain.value_objects import GroupId, PermissionFlags, ResourceId, UserId
from rbac.infrastructure.mappers import PERMISSION_LOAD, to_permission
from rbac.infrastructure.models import (
    GroupModel,
    MembershipModel,
    PermissionModel,
    ResourceModel,
)
from rbac.infrastructure.mutation_guards import require_row, translate_integrity_errors
from rbac.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from rbac.ports.exceptions import ConflictError, NotFoundError
from rbac.ports.repositories import IPermissionRepository

DUPLICATE_PERMISSION_MESSAGE = "Permission for this group and resource already exists"
PERMISSION_NOT_FOUND_MESSAGE = "Permission not found"


class PermissionRepository(IPermissionRepository):
    """Repository for permission grants backed by the permissions table."""

    def __init__(
        self,
        session: AsyncSession,
        probe: RepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultRepositoryProbe()

    async def create(
        self, group_id: GroupId, resource_id: ResourceId, flags: PermissionFlags
    ) -> Permission:
        """Insert a grant after locking both parents FOR SHARE.

        Raises:
            NotFoundError: If the group or resource does not exist
            ConflictError: If the pair already has a grant
        """
        await require_row(self._session, GroupModel, group_id.value, entity="group")
        await require_row(
            self._session, ResourceModel, resource_id.value, entity="resource"
        )

        if await self._find(group_id, resource_id) is not None:
            self._probe.duplicate_rejected(
                "permission", "group_resource", f"{group_id}:{resource_id}"
            )
            raise ConflictError(DUPLICATE_PERMISSION_MESSAGE)

        model = PermissionModel(
            group_id=group_id.value,
            resource_id=resource_id.value,
            can_read=flags.can_read,
            can_create=flags.can_create,
            can_update=flags.can_update,
            can_delete=flags.can_delete,
        )
        self._session.add(model)
        with translate_integrity_errors(DUPLICATE_PERMISSION_MESSAGE):
            await self._session.flush()

        self._probe.row_saved("permission", model.id, created=True)
        return await self._reload(model.id)

    async def list_for_group(self, group_id: GroupId) -> list[Permission]:
        result = await self._session.execute(
            select(GroupModel.id).where(GroupModel.id == group_id.value)
        )
        if result.first() is None:
            self._probe.row_not_found("group", group_id.value)
            raise NotFoundError(f"Group {group_id} not found", entity="group")

        stmt = (
            select(PermissionModel)
            .where(PermissionModel.group_id == group_id.value)
            .options(*PERMISSION_LOAD)
            .order_by(PermissionModel.id)
        )
        result = await self._session.execute(stmt)
        return [to_permission(model) for model in result.scalars().all()]

    async def update(
        self,
        group_id: GroupId,
        resource_id: ResourceId,
        changes: PermissionFlagChanges,
    ) -> Permission:
        model = await self._find(group_id, resource_id, lock=True)
        if model is None:
            raise NotFoundError(PERMISSION_NOT_FOUND_MESSAGE, entity="permission")

        for field, value in changes.as_dict().items():
            setattr(model, field, value)
        await self._session.flush()

        self._probe.row_saved("permission", model.id, created=False)
        return await self._reload(model.id)

    async def delete(self, group_id: GroupId, resource_id: ResourceId) -> None:
        result = await self._session.execute(
            delete(PermissionModel).where(
                PermissionModel.group_id == group_id.value,
                PermissionModel.resource_id == resource_id.value,
            )
        )
        if result.rowcount == 0:
            raise NotFoundError(PERMISSION_NOT_FOUND_MESSAGE, entity="permission")

        self._probe.row_deleted("permission", group_id.value)

    async def list_for_user_and_resource(
        self, user_id: UserId, resource_key: str
    ) -> list[Permission]:
        stmt = (
            self._grants_for_user(user_id)
            .where(ResourceModel.key == resource_key)
            .order_by(PermissionModel.id)
        )
        result = await self._session.execute(stmt)
        return [to_permission(model) for model in result.scalars().all()]

    async def list_for_user(self, user_id: UserId) -> list[Permission]:
        stmt = self._grants_for_user(user_id).order_by(
            PermissionModel.group_id, PermissionModel.id
        )
        result = await self._session.execute(stmt)
        return [to_permission(model) for model in result.scalars().all()]

    def _grants_for_user(self, user_id: UserId):
        """Select grants held by any group the user belongs to."""
        return (
            select(PermissionModel)
            .join(MembershipModel, MembershipModel.group_id == PermissionModel.group_id)
            .join(ResourceModel, ResourceModel.id == PermissionModel.resource_id)
            .where(MembershipModel.user_id == user_id.value)
            .options(contains_eager(PermissionModel.resource))
        )

    async def _find(
        self, group_id: GroupId, resource_id: ResourceId, lock: bool = False
    ) -> PermissionModel | None:
        stmt = select(PermissionModel).where(
            PermissionModel.group_id == group_id.value,
            PermissionModel.resource_id == resource_id.value,
        )
        if lock:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _reload(self, row_id: int) -> Permission:
        """Re-read a row with its resource after a write."""
        stmt = (
            select(PermissionModel)
            .where(PermissionModel.id == row_id)
            .options(*PERMISSION_LOAD)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return to_permission(result.scalar_one())
