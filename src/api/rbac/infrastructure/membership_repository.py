"""SQLAlchemy implementation of IMembershipRepository."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from rbac.domain.aggregates import Membership
from rbac.domain.value_objects import GroupId, UserId
from rbac.infrastructure.mappers import to_group_ref, to_user_ref
from rbac.infrastructure.models import GroupModel, MembershipModel, UserModel
from rbac.infrastructure.mutation_guards import require_row, translate_integrity_errors
from rbac.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from rbac.ports.exceptions import ConflictError, NotFoundError
from rbac.ports.repositories import IMembershipRepository

DUPLICATE_MEMBERSHIP_MESSAGE = "User is already assigned to this group"
MEMBERSHIP_NOT_FOUND_MESSAGE = "User-group relationship not found"


class MembershipRepository(IMembershipRepository):
    """Repository for rows in the memberships join table."""

    def __init__(
        self,
        session: AsyncSession,
        probe: RepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultRepositoryProbe()

    async def add(self, user_id: UserId, group_id: GroupId) -> Membership:
        """Link a user to a group.

        Group and user are locked FOR SHARE, in that order, so a concurrent
        delete of either cannot leave an orphaned membership behind.

        Raises:
            NotFoundError: If the group or user does not exist
            ConflictError: If the user is already in the group
        """
        group = await require_row(
            self._session, GroupModel, group_id.value, entity="group"
        )
        user = await require_row(self._session, UserModel, user_id.value, entity="user")

        existing = await self._session.execute(
            select(MembershipModel.user_id).where(
                MembershipModel.user_id == user_id.value,
                MembershipModel.group_id == group_id.value,
            )
        )
        if existing.first() is not None:
            self._probe.duplicate_rejected(
                "membership", "user_group", f"{user_id}:{group_id}"
            )
            raise ConflictError(DUPLICATE_MEMBERSHIP_MESSAGE)

        model = MembershipModel(user_id=user_id.value, group_id=group_id.value)
        self._session.add(model)
        with translate_integrity_errors(DUPLICATE_MEMBERSHIP_MESSAGE):
            await self._session.flush()

        self._probe.row_saved("membership", user_id.value, created=True)
        return Membership(
            user=to_user_ref(user),
            group=to_group_ref(group),
            created_at=model.created_at,
        )

    async def remove(self, user_id: UserId, group_id: GroupId) -> None:
        result = await self._session.execute(
            delete(MembershipModel).where(
                MembershipModel.user_id == user_id.value,
                MembershipModel.group_id == group_id.value,
            )
        )
        if result.rowcount == 0:
            raise NotFoundError(MEMBERSHIP_NOT_FOUND_MESSAGE, entity="membership")

        self._probe.row_deleted("membership", user_id.value)
