"""Application services for the RBAC bounded context.

Application services orchestrate domain aggregates and repositories to
fulfill use cases. They are the "front door" to the RBAC context.
"""

from rbac.application.services.group_service import GroupService
from rbac.application.services.permission_aggregator import PermissionAggregator
from rbac.application.services.permission_evaluator import PermissionEvaluator
from rbac.application.services.permission_service import PermissionService
from rbac.application.services.resource_service import ResourceService
from rbac.application.services.user_service import UserService

__all__ = [
    "GroupService",
    "PermissionAggregator",
    "PermissionEvaluator",
    "PermissionService",
    "ResourceService",
    "UserService",
]
