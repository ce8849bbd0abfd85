"""Access decisions and the audit view of a user's grants.

Two deliberately separate views of the same data:

- ``is_allowed`` is the decision view. It collapses every applicable grant
  into one boolean by logical OR.
- ``EffectivePermissions`` is the audit view. It keeps one entry per
  (group, grant) pair so callers can see where each capability comes from.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from rbac.domain.aggregates import Permission
from rbac.domain.value_objects import Action, GroupId, GroupRef, PermissionFlags, UserId


def is_allowed(grants: Iterable[Permission], action: Action) -> bool:
    """Decide whether any grant allows ``action``.

    Pure OR across grants: a single grant is sufficient, there is no deny
    and no precedence. Stops at the first grant that allows the action.
    An empty iterable yields False.
    """
    return any(grant.allows(action) for grant in grants)


@dataclass(frozen=True)
class EffectivePermission:
    """One grant a user holds, tagged with the group it comes from."""

    group_id: GroupId
    resource_key: str
    flags: PermissionFlags


@dataclass(frozen=True)
class EffectivePermissions:
    """All groups of a user and every grant those groups hold.

    ``permissions`` is a flattening, not a de-duplication: two groups that
    both grant on the same resource produce two entries.
    """

    user_id: UserId
    groups: list[GroupRef] = field(default_factory=list)
    permissions: list[EffectivePermission] = field(default_factory=list)

    @classmethod
    def from_group_grants(
        cls,
        user_id: UserId,
        groups: list[GroupRef],
        grants: Iterable[Permission],
    ) -> EffectivePermissions:
        """Build the audit view from the user's groups and their grants.

        Args:
            user_id: The user the view describes
            groups: Every group the user belongs to
            grants: Every permission row held by those groups

        Returns:
            EffectivePermissions with one entry per grant
        """
        return cls(
            user_id=user_id,
            groups=list(groups),
            permissions=[
                EffectivePermission(
                    group_id=grant.group_id,
                    resource_key=grant.resource_key,
                    flags=grant.flags,
                )
                for grant in grants
            ],
        )
