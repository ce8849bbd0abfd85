"""Pydantic models for permission grants and access queries."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from rbac.domain.access import EffectivePermission, EffectivePermissions
from rbac.domain.changes import PermissionFlagChanges
from rbac.domain.value_objects import MAX_ID, PermissionFlags, ResourceId
from rbac.presentation.models import GroupSummaryResponse


class CreatePermissionRequest(BaseModel):
    """Request model for granting a group permissions on a resource.

    Flags that are omitted default to False.
    """

    model_config = ConfigDict(extra="forbid")

    resource_id: int = Field(..., description="Resource ID", ge=1, le=MAX_ID)
    can_read: bool = False
    can_create: bool = False
    can_update: bool = False
    can_delete: bool = False

    def to_domain_id(self) -> ResourceId:
        return ResourceId(value=self.resource_id)

    def to_flags(self) -> PermissionFlags:
        """Convert the request's flags to domain PermissionFlags."""
        return PermissionFlags(
            can_read=self.can_read,
            can_create=self.can_create,
            can_update=self.can_update,
            can_delete=self.can_delete,
        )


class UpdatePermissionRequest(BaseModel):
    """Request model for changing the flags of an existing grant.

    Omitted flags keep their current value.
    """

    model_config = ConfigDict(extra="forbid")

    can_read: bool | None = None
    can_create: bool | None = None
    can_update: bool | None = None
    can_delete: bool | None = None

    def to_changes(self) -> PermissionFlagChanges:
        """Convert the request to a domain change set."""
        return PermissionFlagChanges(
            can_read=self.can_read,
            can_create=self.can_create,
            can_update=self.can_update,
            can_delete=self.can_delete,
        )


class PermissionCheckResponse(BaseModel):
    """Response model for a single access check."""

    allowed: bool


class EffectivePermissionResponse(BaseModel):
    """One grant held by one of the user's groups."""

    group_id: int = Field(..., description="Group the grant comes from")
    resource_key: str
    can_read: bool
    can_create: bool
    can_update: bool
    can_delete: bool

    @classmethod
    def from_domain(cls, entry: EffectivePermission) -> EffectivePermissionResponse:
        return cls(
            group_id=entry.group_id.value,
            resource_key=entry.resource_key,
            can_read=entry.flags.can_read,
            can_create=entry.flags.can_create,
            can_update=entry.flags.can_update,
            can_delete=entry.flags.can_delete,
        )


class UserPermissionsResponse(BaseModel):
    """Response model for a user's effective permissions."""

    user_id: int
    groups: list[GroupSummaryResponse] = Field(default_factory=list)
    permissions: list[EffectivePermissionResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, effective: EffectivePermissions) -> UserPermissionsResponse:
        """Convert the domain audit view to an API response.

        Args:
            effective: EffectivePermissions computed for one user

        Returns:
            UserPermissionsResponse with one entry per group grant
        """
        return cls(
            user_id=effective.user_id.value,
            groups=[GroupSummaryResponse.from_domain(g) for g in effective.groups],
            permissions=[
                EffectivePermissionResponse.from_domain(p)
                for p in effective.permissions
            ],
        )
