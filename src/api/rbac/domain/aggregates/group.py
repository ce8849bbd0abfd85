"""Group aggregate for the RBAC context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from rbac.domain.aggregates.permission import Permission
from rbac.domain.value_objects import GroupId, ResourceId, UserId, UserRef


@dataclass(frozen=True)
class Group:
    """Group aggregate: a named collection of users sharing a permission set.

    The group's lifecycle is independent of its members. Deleting a group
    removes its memberships and permission grants, never the users or
    resources themselves.
    """

    id: GroupId
    name: str
    description: str | None = None
    members: list[UserRef] = field(default_factory=list)
    permissions: list[Permission] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def has_member(self, user_id: UserId) -> bool:
        """Check if a user is a member of this group."""
        return any(m.id == user_id for m in self.members)

    def permission_for(self, resource_id: ResourceId) -> Permission | None:
        """Return this group's grant on a resource, if any."""
        for permission in self.permissions:
            if permission.resource_id == resource_id:
                return permission
        return None
