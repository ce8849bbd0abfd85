from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_write_session
from rbac.application.observability import (
    DefaultGroupServiceProbe,
    GroupServiceProbe,
)
from rbac.application.services import GroupService
from rbac.infrastructure.group_repository import GroupRepository
from rbac.infrastructure.membership_repository import MembershipRepository


def get_group_service_probe() -> GroupServiceProbe:
    return DefaultGroupServiceProbe()


def get_group_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> GroupRepository:
    return GroupRepository(session=session)


def get_membership_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> MembershipRepository:
    return MembershipRepository(session=session)


def get_group_service(
    group_repo: Annotated[GroupRepository, Depends(get_group_repository)],
    membership_repo: Annotated[
        MembershipRepository, Depends(get_membership_repository)
    ],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    group_service_probe: Annotated[GroupServiceProbe, Depends(get_group_service_probe)],
) -> GroupService:
    """Get GroupService instance.

    Membership changes go through the group service, so both repositories
    are injected here and share the request's session.
    """
    return GroupService(
        session=session,
        group_repository=group_repo,
        membership_repository=membership_repo,
        probe=group_service_probe,
    )
