"""Repository protocols (ports) for the RBAC bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Every method runs inside the caller's transaction; the
application services own commit and rollback.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from rbac.domain.aggregates import Group, Membership, Permission, Resource, User
from rbac.domain.changes import (
    GroupChanges,
    PermissionFlagChanges,
    ResourceChanges,
    UserChanges,
)
from rbac.domain.value_objects import GroupId, PermissionFlags, ResourceId, UserId


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User aggregate persistence.

    Returned users carry the groups they belong to.
    """

    async def create(self, username: str, email: str, name: str | None) -> User:
        """Insert a new user.

        Raises:
            ConflictError: If the username or email is already taken
        """
        ...

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by id, or None if it does not exist."""
        ...

    async def exists(self, user_id: UserId) -> bool:
        """Check whether a user with the given id exists."""
        ...

    async def list_all(self) -> list[User]:
        """List every user ordered by id."""
        ...

    async def update(self, user_id: UserId, changes: UserChanges) -> User:
        """Merge the provided fields into an existing user.

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If the new username or email is already taken
        """
        ...

    async def delete(self, user_id: UserId) -> None:
        """Delete a user together with all of its memberships.

        Raises:
            NotFoundError: If the user does not exist
        """
        ...


@runtime_checkable
class IGroupRepository(Protocol):
    """Repository for Group aggregate persistence.

    Returned groups carry their members and permission grants.
    """

    async def create(self, name: str, description: str | None) -> Group:
        """Insert a new group.

        Raises:
            ConflictError: If the name is already taken
        """
        ...

    async def get_by_id(self, group_id: GroupId) -> Group | None:
        """Retrieve a group by id, or None if it does not exist."""
        ...

    async def list_all(self) -> list[Group]:
        """List every group ordered by id."""
        ...

    async def update(self, group_id: GroupId, changes: GroupChanges) -> Group:
        """Merge the provided fields into an existing group.

        Raises:
            NotFoundError: If the group does not exist
            ConflictError: If the new name is already taken
        """
        ...

    async def delete(self, group_id: GroupId) -> None:
        """Delete a group together with its memberships and permissions.

        Raises:
            NotFoundError: If the group does not exist
        """
        ...


@runtime_checkable
class IResourceRepository(Protocol):
    """Repository for Resource aggregate persistence."""

    async def create(
        self, key: str, name: str | None, description: str | None
    ) -> Resource:
        """Insert a new resource.

        Raises:
            ConflictError: If the key is already taken
        """
        ...

    async def get_by_id(self, resource_id: ResourceId) -> Resource | None:
        """Retrieve a resource by id, or None if it does not exist."""
        ...

    async def list_all(self) -> list[Resource]:
        """List every resource ordered by id."""
        ...

    async def update(
        self, resource_id: ResourceId, changes: ResourceChanges
    ) -> Resource:
        """Merge the provided fields into an existing resource.

        Raises:
            NotFoundError: If the resource does not exist
            ConflictError: If the new key is already taken
        """
        ...

    async def delete(self, resource_id: ResourceId) -> None:
        """Delete a resource together with every permission naming it.

        Raises:
            NotFoundError: If the resource does not exist
        """
        ...


@runtime_checkable
class IPermissionRepository(Protocol):
    """Repository for (group, resource) permission grants."""

    async def create(
        self, group_id: GroupId, resource_id: ResourceId, flags: PermissionFlags
    ) -> Permission:
        """Insert a grant for a group on a resource.

        Raises:
            NotFoundError: If the group or resource does not exist
            ConflictError: If the pair already has a grant
        """
        ...

    async def list_for_group(self, group_id: GroupId) -> list[Permission]:
        """List the grants held by a group.

        Raises:
            NotFoundError: If the group does not exist
        """
        ...

    async def update(
        self,
        group_id: GroupId,
        resource_id: ResourceId,
        changes: PermissionFlagChanges,
    ) -> Permission:
        """Merge the provided flags into an existing grant.

        Raises:
            NotFoundError: If the pair has no grant
        """
        ...

    async def delete(self, group_id: GroupId, resource_id: ResourceId) -> None:
        """Delete the grant for a pair.

        Raises:
            NotFoundError: If the pair has no grant
        """
        ...

    async def list_for_user_and_resource(
        self, user_id: UserId, resource_key: str
    ) -> list[Permission]:
        """List the grants on a resource held by any group the user is in."""
        ...

    async def list_for_user(self, user_id: UserId) -> list[Permission]:
        """List every grant held by any group the user is in."""
        ...


@runtime_checkable
class IMembershipRepository(Protocol):
    """Repository for user-to-group links."""

    async def add(self, user_id: UserId, group_id: GroupId) -> Membership:
        """Link a user to a group.

        Raises:
            NotFoundError: If the user or group does not exist
            ConflictError: If the user is already in the group
        """
        ...

    async def remove(self, user_id: UserId, group_id: GroupId) -> None:
        """Unlink a user from a group.

        Raises:
            NotFoundError: If the link does not exist
        """
        ...
