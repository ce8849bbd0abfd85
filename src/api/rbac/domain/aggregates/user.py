"""User aggregate for the RBAC context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from rbac.domain.value_objects import GroupId, GroupRef, UserId


@dataclass(frozen=True)
class User:
    """User aggregate representing a person who can be granted access.

    A user holds no permissions directly; everything a user may do comes
    from the groups listed in ``groups``.
    """

    id: UserId
    username: str
    email: str
    name: str | None = None
    groups: list[GroupRef] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.username})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)

    def is_member_of(self, group_id: GroupId) -> bool:
        """Check whether the user belongs to the given group."""
        return any(g.id == group_id for g in self.groups)
