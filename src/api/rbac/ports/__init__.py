"""Ports (interfaces) for the RBAC bounded context.

Ports define the contracts for repositories and the error taxonomy without
specifying implementation details. This allows for dependency inversion
and makes the domain layer independent of infrastructure.
"""

from rbac.ports.exceptions import (
    ConflictError,
    InternalError,
    InvalidInputError,
    NotFoundError,
    RBACError,
)
from rbac.ports.repositories import (
    IGroupRepository,
    IMembershipRepository,
    IPermissionRepository,
    IResourceRepository,
    IUserRepository,
)

__all__ = [
    "ConflictError",
    "IGroupRepository",
    "IMembershipRepository",
    "IPermissionRepository",
    "IResourceRepository",
    "IUserRepository",
    "InternalError",
    "InvalidInputError",
    "NotFoundError",
    "RBACError",
]
