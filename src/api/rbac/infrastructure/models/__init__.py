"""SQLAlchemy ORM models for the RBAC bounded context.

These models map to database tables and are used by repository implementations.
"""

from rbac.infrastructure.models.group import GroupModel
from rbac.infrastructure.models.membership import MembershipModel
from rbac.infrastructure.models.permission import PermissionModel
from rbac.infrastructure.models.resource import ResourceModel
from rbac.infrastructure.models.user import UserModel

__all__ = [
    "GroupModel",
    "MembershipModel",
    "PermissionModel",
    "ResourceModel",
    "UserModel",
]
