"""SQLAlchemy implementation of IGroupRepository."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from rbac.domain.aggregates import Group
from rbac.domain.changes import GroupChanges
from rbac.domain.value_objects import GroupId
from rbac.infrastructure.mappers import GROUP_LOAD, to_group
from rbac.infrastructure.models import GroupModel, MembershipModel, PermissionModel
from rbac.infrastructure.mutation_guards import require_row, translate_integrity_errors
from rbac.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from rbac.ports.exceptions import ConflictError
from rbac.ports.repositories import IGroupRepository

DUPLICATE_GROUP_MESSAGE = "Group with this name already exists"


class GroupRepository(IGroupRepository):
    """Repository for Group aggregates backed by the groups table.

    Returned groups are fully hydrated: members come from memberships and
    grants from permissions, each with its resource key. Deleting a group
    removes both kinds of dependent rows in the same transaction.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: RepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultRepositoryProbe()

    async def create(self, name: str, description: str | None) -> Group:
        await self._ensure_unique_name(name)

        model = GroupModel(name=name, description=description)
        self._session.add(model)
        with translate_integrity_errors(DUPLICATE_GROUP_MESSAGE):
            await self._session.flush()

        self._probe.row_saved("group", model.id, created=True)
        return await self._reload(model.id)

    async def get_by_id(self, group_id: GroupId) -> Group | None:
        stmt = (
            select(GroupModel)
            .where(GroupModel.id == group_id.value)
            .options(*GROUP_LOAD)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.row_not_found("group", group_id.value)
            return None

        return to_group(model)

    async def list_all(self) -> list[Group]:
        stmt = select(GroupModel).options(*GROUP_LOAD).order_by(GroupModel.id)
        result = await self._session.execute(stmt)
        return [to_group(model) for model in result.scalars().all()]

    async def update(self, group_id: GroupId, changes: GroupChanges) -> Group:
        model = await require_row(
            self._session, GroupModel, group_id.value, entity="group", exclusive=True
        )

        if changes.name is not None:
            await self._ensure_unique_name(changes.name, exclude_id=model.id)

        for field, value in changes.as_dict().items():
            setattr(model, field, value)
        with translate_integrity_errors(DUPLICATE_GROUP_MESSAGE):
            await self._session.flush()

        self._probe.row_saved("group", model.id, created=False)
        return await self._reload(model.id)

    async def delete(self, group_id: GroupId) -> None:
        """Delete a group, its memberships and its permission grants.

        The group row is locked first so concurrent membership and grant
        inserts (which lock it FOR SHARE) either finish before the cascade
        runs or find the group gone.
        """
        model = await require_row(
            self._session, GroupModel, group_id.value, entity="group", exclusive=True
        )

        permissions = await self._session.execute(
            delete(PermissionModel).where(PermissionModel.group_id == model.id)
        )
        memberships = await self._session.execute(
            delete(MembershipModel).where(MembershipModel.group_id == model.id)
        )
        await self._session.delete(model)
        await self._session.flush()

        self._probe.row_deleted(
            "group",
            group_id.value,
            memberships_removed=memberships.rowcount,
            permissions_removed=permissions.rowcount,
        )

    async def _ensure_unique_name(
        self, name: str, exclude_id: int | None = None
    ) -> None:
        stmt = select(GroupModel.id).where(GroupModel.name == name)
        if exclude_id is not None:
            stmt = stmt.where(GroupModel.id != exclude_id)
        result = await self._session.execute(stmt)
        if result.first() is not None:
            self._probe.duplicate_rejected("group", "name", name)
            raise ConflictError(DUPLICATE_GROUP_MESSAGE)

    async def _reload(self, row_id: int) -> Group:
        """Re-read a row with its relationships after a write."""
        stmt = (
            select(GroupModel)
            .where(GroupModel.id == row_id)
            .options(*GROUP_LOAD)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return to_group(result.scalar_one())
