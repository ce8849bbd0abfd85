from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_write_session
from rbac.application.observability import DefaultUserServiceProbe, UserServiceProbe
from rbac.application.services import UserService
from rbac.infrastructure.user_repository import UserRepository


def get_user_service_probe() -> UserServiceProbe:
    return DefaultUserServiceProbe()


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> UserRepository:
    return UserRepository(session=session)


def get_user_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    probe: Annotated[UserServiceProbe, Depends(get_user_service_probe)],
) -> UserService:
    """Build the request-scoped UserService.

    FastAPI caches ``get_write_session`` per request, so the repository and
    the service's transaction share one session.
    """
    return UserService(session=session, user_repository=user_repo, probe=probe)
