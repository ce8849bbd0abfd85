"""Permission aggregate for the RBAC context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from rbac.domain.value_objects import Action, GroupId, PermissionFlags, ResourceId


@dataclass(frozen=True)
class Permission:
    """A capability grant scoped to exactly one (group, resource) pair.

    Business rules:
    - At most one Permission exists per (group_id, resource_id)
    - A second grant for the same pair is rejected; change flags by updating
    - Flags are independent; there is no implication between actions
    """

    id: int
    group_id: GroupId
    resource_id: ResourceId
    resource_key: str
    flags: PermissionFlags = PermissionFlags()
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def allows(self, action: Action) -> bool:
        """Check whether this grant allows ``action`` on its resource."""
        return self.flags.allows(action)
