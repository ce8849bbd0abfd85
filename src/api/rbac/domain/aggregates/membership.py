"""Membership link between a user and a group."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from rbac.domain.value_objects import GroupRef, UserRef


@dataclass(frozen=True)
class Membership:
    """A (user, group) link. Each pair exists at most once."""

    user: UserRef
    group: GroupRef
    created_at: datetime | None = None
