"""Pydantic models for resource API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from rbac.domain.aggregates import Resource
from rbac.domain.changes import ResourceChanges
from rbac.presentation.models import PermissionResponse


class CreateResourceRequest(BaseModel):
    """Request model for creating a resource.

    Keys conventionally look like ``account/change-password``; the format
    is not enforced.
    """

    model_config = ConfigDict(extra="forbid")

    key: str = Field(..., description="Unique resource key", min_length=1, max_length=512)
    name: str | None = Field(default=None, max_length=255)
    description: str | None = None


class UpdateResourceRequest(BaseModel):
    """Request model for updating a resource."""

    model_config = ConfigDict(extra="forbid")

    key: str | None = Field(default=None, min_length=1, max_length=512)
    name: str | None = Field(default=None, max_length=255)
    description: str | None = None

    def to_changes(self) -> ResourceChanges:
        """Convert the request to a domain change set."""
        return ResourceChanges(
            key=self.key, name=self.name, description=self.description
        )


class ResourceResponse(BaseModel):
    """Response model for resource."""

    id: int = Field(..., description="Resource ID")
    key: str
    name: str | None = None
    description: str | None = None
    permissions: list[PermissionResponse] = Field(
        default_factory=list, description="Grants on this resource"
    )
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, resource: Resource) -> ResourceResponse:
        return cls(
            id=resource.id.value,
            key=resource.key,
            name=resource.name,
            description=resource.description,
            permissions=[
                PermissionResponse.from_domain(p) for p in resource.permissions
            ],
            created_at=resource.created_at,
            updated_at=resource.updated_at,
        )
