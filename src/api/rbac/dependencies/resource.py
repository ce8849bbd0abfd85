from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_write_session
from rbac.application.observability import (
    DefaultResourceServiceProbe,
    ResourceServiceProbe,
)
from rbac.application.services import ResourceService
from rbac.infrastructure.resource_repository import ResourceRepository


def get_resource_service_probe() -> ResourceServiceProbe:
    return DefaultResourceServiceProbe()


def get_resource_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> ResourceRepository:
    return ResourceRepository(session=session)


def get_resource_service(
    resource_repo: Annotated[ResourceRepository, Depends(get_resource_repository)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    resource_service_probe: Annotated[
        ResourceServiceProbe, Depends(get_resource_service_probe)
    ],
) -> ResourceService:
    """Get ResourceService instance.

    Args:
        resource_repo: Resource repository (shares session via FastAPI dependency caching)
        session: Database session for transaction management
        resource_service_probe: Resource service probe for observability

    Returns:
        ResourceService instance
    """
    return ResourceService(
        session=session,
        resource_repository=resource_repo,
        probe=resource_service_probe,
    )
