"""RBAC presentation layer - aggregate-based organization.

Organizes presentation concerns by domain aggregate (users, groups,
resources, permissions) following vertical slicing. Each aggregate package
contains its own routes and models.
"""

from __future__ import annotations

from fastapi import APIRouter

from rbac.presentation import groups, permissions, resources, users

# Main RBAC router; all administrative endpoints live under /api
router = APIRouter(
    prefix="/api",
)

# Include all aggregate routers
router.include_router(users.router)
router.include_router(groups.router)
router.include_router(resources.router)
router.include_router(permissions.router)

__all__ = ["router"]
