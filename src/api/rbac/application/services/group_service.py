"""Group application service for the RBAC bounded context.

Manages groups and their user memberships.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from rbac.application.observability import DefaultGroupServiceProbe, GroupServiceProbe
from rbac.application.services.transaction import unit_of_work
from rbac.domain.aggregates import Group, Membership
from rbac.domain.changes import GroupChanges
from rbac.domain.value_objects import GroupId, UserId
from rbac.ports.exceptions import NotFoundError, RBACError
from rbac.ports.repositories import IGroupRepository, IMembershipRepository


class GroupService:
    """Application service for group management.

    Orchestrates group CRUD and membership changes. Manages database
    transactions.
    """

    def __init__(
        self,
        session: AsyncSession,
        group_repository: IGroupRepository,
        membership_repository: IMembershipRepository,
        probe: GroupServiceProbe | None = None,
    ):
        """Initialize GroupService with dependencies.

        Args:
            session: Database session for transaction management
            group_repository: Repository for group persistence
            membership_repository: Repository for user-group links
            probe: Optional domain probe for observability
        """
        self._session = session
        self._group_repository = group_repository
        self._membership_repository = membership_repository
        self._probe = probe or DefaultGroupServiceProbe()

    async def create_group(self, name: str, description: str | None = None) -> Group:
        """Create a new group.

        Raises:
            ConflictError: If the group name is already taken
        """
        try:
            async with unit_of_work(self._session):
                group = await self._group_repository.create(
                    name=name, description=description
                )
        except RBACError as e:
            self._probe.group_operation_failed("create", str(e))
            raise

        self._probe.group_created(group_id=group.id.value, name=group.name)
        return group

    async def get_group(self, group_id: GroupId) -> Group:
        """Get a group with its members and permissions.

        Raises:
            NotFoundError: If the group does not exist
        """
        async with unit_of_work(self._session):
            group = await self._group_repository.get_by_id(group_id)

        if group is None:
            raise NotFoundError(f"Group {group_id} not found", entity="group")
        return group

    async def list_groups(self) -> list[Group]:
        async with unit_of_work(self._session):
            return await self._group_repository.list_all()

    async def update_group(self, group_id: GroupId, changes: GroupChanges) -> Group:
        """Merge the provided fields into a group.

        Raises:
            NotFoundError: If the group does not exist
            ConflictError: If the new name is already taken
        """
        try:
            async with unit_of_work(self._session):
                group = await self._group_repository.update(group_id, changes)
        except RBACError as e:
            self._probe.group_operation_failed(
                "update", str(e), group_id=group_id.value
            )
            raise

        self._probe.group_updated(
            group_id=group_id.value, fields=sorted(changes.as_dict())
        )
        return group

    async def delete_group(self, group_id: GroupId) -> None:
        """Delete a group with its memberships and permission grants.

        Raises:
            NotFoundError: If the group does not exist
        """
        try:
            async with unit_of_work(self._session):
                await self._group_repository.delete(group_id)
        except RBACError as e:
            self._probe.group_operation_failed(
                "delete", str(e), group_id=group_id.value
            )
            raise

        self._probe.group_deleted(group_id=group_id.value)

    async def add_member(self, group_id: GroupId, user_id: UserId) -> Membership:
        """Add a user to a group.

        Raises:
            NotFoundError: If the group or user does not exist
            ConflictError: If the user is already a member
        """
        try:
            async with unit_of_work(self._session):
                membership = await self._membership_repository.add(
                    user_id=user_id, group_id=group_id
                )
        except RBACError as e:
            self._probe.group_operation_failed(
                "add_member", str(e), group_id=group_id.value
            )
            raise

        self._probe.member_added(group_id=group_id.value, user_id=user_id.value)
        return membership

    async def remove_member(self, group_id: GroupId, user_id: UserId) -> None:
        """Remove a user from a group.

        Raises:
            NotFoundError: If the user is not a member of the group
        """
        try:
            async with unit_of_work(self._session):
                await self._membership_repository.remove(
                    user_id=user_id, group_id=group_id
                )
        except RBACError as e:
            self._probe.group_operation_failed(
                "remove_member", str(e), group_id=group_id.value
            )
            raise

        self._probe.member_removed(group_id=group_id.value, user_id=user_id.value)
