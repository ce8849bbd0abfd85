"""Entity store for the RBAC bounded context.

SQLAlchemy repositories implementing the ports in ``rbac.ports.repositories``.
"""

from rbac.infrastructure.group_repository import GroupRepository
from rbac.infrastructure.membership_repository import MembershipRepository
from rbac.infrastructure.permission_repository import PermissionRepository
from rbac.infrastructure.resource_repository import ResourceRepository
from rbac.infrastructure.user_repository import UserRepository

__all__ = [
    "GroupRepository",
    "MembershipRepository",
    "PermissionRepository",
    "ResourceRepository",
    "UserRepository",
]
