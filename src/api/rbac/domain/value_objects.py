"""Value objects for the RBAC domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

# Identifiers are stored in 32-bit INTEGER primary key columns
MAX_ID = 2_147_483_647


def _parse_positive_int(value: str, kind: str) -> int:
    """Parse a store identifier from its string form.

    Raises:
        ValueError: If value is not a positive base-10 integer in range
    """
    text = value.strip()
    if not text.isascii() or not text.isdigit():
        raise ValueError(f"Invalid {kind}: {value!r}")
    parsed = int(text)
    if parsed < 1 or parsed > MAX_ID:
        raise ValueError(f"Invalid {kind}: {value!r}")
    return parsed


@dataclass(frozen=True)
class UserId:
    """Identifier for a User aggregate.

    Server-assigned positive integer; opaque to callers.
    """

    value: int

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from a path or query string.

        Raises:
            ValueError: If value is not a positive integer
        """
        return cls(value=_parse_positive_int(value, "UserId"))


@dataclass(frozen=True)
class GroupId:
    """Identifier for a Group aggregate."""

    value: int

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)

    @classmethod
    def from_string(cls, value: str) -> GroupId:
        """Create GroupId from a path or query string.

        Raises:
            ValueError: If value is not a positive integer
        """
        return cls(value=_parse_positive_int(value, "GroupId"))


@dataclass(frozen=True)
class ResourceId:
    """Identifier for a Resource aggregate."""

    value: int

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)

    @classmethod
    def from_string(cls, value: str) -> ResourceId:
        """Create ResourceId from a path or query string.

        Raises:
            ValueError: If value is not a positive integer
        """
        return cls(value=_parse_positive_int(value, "ResourceId"))


class Action(StrEnum):
    """Actions a permission grant can allow on a resource."""

    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class PermissionFlags:
    """The four independent capability flags of a grant.

    Each flag defaults to False; a grant with every flag False is valid
    and allows nothing.
    """

    can_read: bool = False
    can_create: bool = False
    can_update: bool = False
    can_delete: bool = False

    def allows(self, action: Action) -> bool:
        """Return the flag that corresponds to ``action``."""
        match action:
            case Action.READ:
                return self.can_read
            case Action.CREATE:
                return self.can_create
            case Action.UPDATE:
                return self.can_update
            case Action.DELETE:
                return self.can_delete
        raise ValueError(f"Unknown action: {action!r}")


@dataclass(frozen=True)
class GroupRef:
    """Lightweight reference to a group (id and name)."""

    id: GroupId
    name: str


@dataclass(frozen=True)
class UserRef:
    """Lightweight reference to a user (id and username)."""

    id: UserId
    username: str
