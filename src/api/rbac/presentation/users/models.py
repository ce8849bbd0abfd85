"""Pydantic models for user API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from rbac.domain.aggregates import User
from rbac.domain.changes import UserChanges
from rbac.presentation.models import GroupSummaryResponse


class CreateUserRequest(BaseModel):
    """Request model for creating a user."""

    model_config = ConfigDict(extra="forbid")

    username: str = Field(..., description="Unique username", min_length=1, max_length=255)
    email: EmailStr = Field(..., description="Unique email address")
    name: str | None = Field(default=None, description="Display name", max_length=255)


class UpdateUserRequest(BaseModel):
    """Request model for updating a user. Omitted fields are left unchanged."""

    model_config = ConfigDict(extra="forbid")

    username: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    name: str | None = Field(default=None, max_length=255)

    def to_changes(self) -> UserChanges:
        """Convert the request to a domain change set."""
        return UserChanges(username=self.username, email=self.email, name=self.name)


class UserResponse(BaseModel):
    """Response model for user."""

    id: int = Field(..., description="User ID")
    username: str
    email: str
    name: str | None = None
    groups: list[GroupSummaryResponse] = Field(
        default_factory=list, description="Groups the user belongs to"
    )
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, user: User) -> UserResponse:
        """Convert domain User aggregate to API response.

        Args:
            user: User domain aggregate

        Returns:
            UserResponse with group summaries
        """
        return cls(
            id=user.id.value,
            username=user.username,
            email=user.email,
            name=user.name,
            groups=[GroupSummaryResponse.from_domain(g) for g in user.groups],
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
