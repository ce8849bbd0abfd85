"""Pydantic models shared across RBAC API routers."""

from __future__ import annotations

from datetime import datetime
from typing import TypeVar

from pydantic import BaseModel, Field

from rbac.domain.aggregates import Permission
from rbac.domain.value_objects import GroupId, GroupRef, ResourceId, UserId, UserRef
from rbac.ports.exceptions import InvalidInputError

IdT = TypeVar("IdT", UserId, GroupId, ResourceId)


def parse_id(id_type: type[IdT], raw: str, label: str) -> IdT:
    """Parse a path or query identifier.

    Raises:
        InvalidInputError: If ``raw`` is not a positive integer id
    """
    try:
        return id_type.from_string(raw)
    except ValueError as e:
        raise InvalidInputError(f"Invalid {label} ID format") from e


class MessageResponse(BaseModel):
    """Response body for successful deletes."""

    message: str


class GroupSummaryResponse(BaseModel):
    """A group as seen from one of its members."""

    id: int = Field(..., description="Group ID")
    name: str = Field(..., description="Group name")

    @classmethod
    def from_domain(cls, ref: GroupRef) -> GroupSummaryResponse:
        return cls(id=ref.id.value, name=ref.name)


class UserSummaryResponse(BaseModel):
    """A user as seen from a group it belongs to."""

    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Username")

    @classmethod
    def from_domain(cls, ref: UserRef) -> UserSummaryResponse:
        return cls(id=ref.id.value, username=ref.username)


class PermissionResponse(BaseModel):
    """Response model for a (group, resource) grant."""

    id: int
    group_id: int
    resource_id: int
    resource_key: str = Field(..., description="Key of the granted resource")
    can_read: bool
    can_create: bool
    can_update: bool
    can_delete: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, permission: Permission) -> PermissionResponse:
        """Convert a domain Permission to an API response.

        Args:
            permission: Permission domain aggregate

        Returns:
            PermissionResponse with flags flattened
        """
        return cls(
            id=permission.id,
            group_id=permission.group_id.value,
            resource_id=permission.resource_id.value,
            resource_key=permission.resource_key,
            can_read=permission.flags.can_read,
            can_create=permission.flags.can_create,
            can_update=permission.flags.can_update,
            can_delete=permission.flags.can_delete,
            created_at=permission.created_at,
            updated_at=permission.updated_at,
        )
