"""Partial-update descriptors for RBAC aggregates.

A field left as None means "not provided": updates merge only the
fields that are set.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class _Changes:
    def as_dict(self) -> dict[str, Any]:
        """Return only the fields that were provided."""
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class UserChanges(_Changes):
    username: str | None = None
    email: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class GroupChanges(_Changes):
    name: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class ResourceChanges(_Changes):
    key: str | None = None
    name: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class PermissionFlagChanges(_Changes):
    can_read: bool | None = None
    can_create: bool | None = None
    can_update: bool | None = None
    can_delete: bool | None = None
