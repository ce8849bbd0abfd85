"""Resource aggregate for the RBAC context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from rbac.domain.aggregates.permission import Permission
from rbac.domain.value_objects import ResourceId


@dataclass(frozen=True)
class Resource:
    """A named protectable entity addressed by a unique string key.

    Keys conventionally look like paths (``account/change-password``), but
    they are matched by exact equality only; there is no prefix or wildcard
    matching between keys.
    """

    id: ResourceId
    key: str
    name: str | None = None
    description: str | None = None
    permissions: list[Permission] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
