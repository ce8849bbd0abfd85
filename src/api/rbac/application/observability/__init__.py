"""Domain-Oriented Observability for the RBAC application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from rbac.application.observability.access_probe import (
    AccessProbe,
    DefaultAccessProbe,
)
from rbac.application.observability.group_service_probe import (
    DefaultGroupServiceProbe,
    GroupServiceProbe,
)
from rbac.application.observability.permission_service_probe import (
    DefaultPermissionServiceProbe,
    PermissionServiceProbe,
)
from rbac.application.observability.resource_service_probe import (
    DefaultResourceServiceProbe,
    ResourceServiceProbe,
)
from rbac.application.observability.user_service_probe import (
    DefaultUserServiceProbe,
    UserServiceProbe,
)

__all__ = [
    "AccessProbe",
    "DefaultAccessProbe",
    "GroupServiceProbe",
    "DefaultGroupServiceProbe",
    "PermissionServiceProbe",
    "DefaultPermissionServiceProbe",
    "ResourceServiceProbe",
    "DefaultResourceServiceProbe",
    "UserServiceProbe",
    "DefaultUserServiceProbe",
]
