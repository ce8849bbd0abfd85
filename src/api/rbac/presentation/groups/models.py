"""Pydantic models for group API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from rbac.domain.aggregates import Group, Membership
from rbac.domain.changes import GroupChanges
from rbac.domain.value_objects import MAX_ID, UserId
from rbac.presentation.models import PermissionResponse, UserSummaryResponse


class CreateGroupRequest(BaseModel):
    """Request model for creating a group."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Group name", min_length=1, max_length=255)
    description: str | None = Field(default=None, description="Group description")


class UpdateGroupRequest(BaseModel):
    """Request model for updating group metadata."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None

    def to_changes(self) -> GroupChanges:
        """Convert the request to a domain change set."""
        return GroupChanges(name=self.name, description=self.description)


class AddGroupMemberRequest(BaseModel):
    """Request model for adding a user to a group."""

    model_config = ConfigDict(extra="forbid")

    user_id: int = Field(..., description="User ID to add", ge=1, le=MAX_ID)

    def to_domain_id(self) -> UserId:
        """Convert the request's user ID to a domain UserId."""
        return UserId(value=self.user_id)


class GroupMembershipResponse(BaseModel):
    """Response model for a newly created membership."""

    user_id: int
    group_id: int
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, membership: Membership) -> GroupMembershipResponse:
        return cls(
            user_id=membership.user.id.value,
            group_id=membership.group.id.value,
            created_at=membership.created_at,
        )


class GroupResponse(BaseModel):
    """Response model for group."""

    id: int = Field(..., description="Group ID")
    name: str = Field(..., description="Group name")
    description: str | None = None
    members: list[UserSummaryResponse] = Field(
        default_factory=list, description="Users in the group"
    )
    permissions: list[PermissionResponse] = Field(
        default_factory=list, description="Grants held by the group"
    )
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, group: Group) -> GroupResponse:
        """Convert domain Group aggregate to API response.

        Args:
            group: Group domain aggregate

        Returns:
            GroupResponse with members and permissions
        """
        return cls(
            id=group.id.value,
            name=group.name,
            description=group.description,
            members=[UserSummaryResponse.from_domain(m) for m in group.members],
            permissions=[PermissionResponse.from_domain(p) for p in group.permissions],
            created_at=group.created_at,
            updated_at=group.updated_at,
        )
