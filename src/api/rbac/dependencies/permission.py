"""Dependencies for permission grants and access decisions.

The evaluator and the aggregator share one AccessProbe factory; the grant
service has its own probe.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_write_session
from rbac.application.observability import (
    AccessProbe,
    DefaultAccessProbe,
    DefaultPermissionServiceProbe,
    PermissionServiceProbe,
)
from rbac.application.services import (
    PermissionAggregator,
    PermissionEvaluator,
    PermissionService,
)
from rbac.dependencies.user import get_user_repository
from rbac.infrastructure.permission_repository import PermissionRepository
from rbac.infrastructure.user_repository import UserRepository


def get_permission_service_probe() -> PermissionServiceProbe:
    """Get PermissionServiceProbe instance."""
    return DefaultPermissionServiceProbe()


def get_access_probe() -> AccessProbe:
    """Get AccessProbe instance."""
    return DefaultAccessProbe()


def get_permission_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> PermissionRepository:
    """Get PermissionRepository instance.

    Args:
        session: Async database session

    Returns:
        PermissionRepository instance
    """
    return PermissionRepository(session=session)


def get_permission_service(
    permission_repo: Annotated[
        PermissionRepository, Depends(get_permission_repository)
    ],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    probe: Annotated[PermissionServiceProbe, Depends(get_permission_service_probe)],
) -> PermissionService:
    """Get PermissionService instance."""
    return PermissionService(
        session=session,
        permission_repository=permission_repo,
        probe=probe,
    )


def get_permission_evaluator(
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    permission_repo: Annotated[
        PermissionRepository, Depends(get_permission_repository)
    ],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    probe: Annotated[AccessProbe, Depends(get_access_probe)],
) -> PermissionEvaluator:
    """Get PermissionEvaluator instance.

    Args:
        user_repo: User repository (shares session via FastAPI dependency caching)
        permission_repo: Permission repository (same session)
        session: Database session for transaction management
        probe: Access probe for observability

    Returns:
        PermissionEvaluator instance
    """
    return PermissionEvaluator(
        session=session,
        user_repository=user_repo,
        permission_repository=permission_repo,
        probe=probe,
    )


def get_permission_aggregator(
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    permission_repo: Annotated[
        PermissionRepository, Depends(get_permission_repository)
    ],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    probe: Annotated[AccessProbe, Depends(get_access_probe)],
) -> PermissionAggregator:
    """Get PermissionAggregator instance."""
    return PermissionAggregator(
        session=session,
        user_repository=user_repo,
        permission_repository=permission_repo,
        probe=probe,
    )
