"""Domain aggregates for the RBAC context.

Aggregates are the core business objects. They carry state and the small
amount of decision logic the domain has, without depending on infrastructure.
"""

from rbac.domain.aggregates.group import Group
from rbac.domain.aggregates.membership import Membership
from rbac.domain.aggregates.permission import Permission
from rbac.domain.aggregates.resource import Resource
from rbac.domain.aggregates.user import User

__all__ = [
    "Group",
    "Membership",
    "Permission",
    "Resource",
    "User",
]
