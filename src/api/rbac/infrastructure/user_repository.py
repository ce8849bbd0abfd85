"""SQLAlchemy implementation of IUserRepository."""

from __future__ import annotations

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rbac.domain.aggregates import User
from rbac.domain.changes import UserChanges
from rbac.domain.value_objects import UserId
from rbac.infrastructure.mappers import USER_LOAD, to_user
from rbac.infrastructure.models import MembershipModel, UserModel
from rbac.infrastructure.mutation_guards import require_row, translate_integrity_errors
from rbac.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from rbac.ports.exceptions import ConflictError
from rbac.ports.repositories import IUserRepository

DUPLICATE_USER_MESSAGE = "User with this username or email already exists"


class UserRepository(IUserRepository):
    """Repository for User aggregates backed by the users table.

    Group membership is read through the memberships table; writes to
    memberships go through MembershipRepository. Deleting a user removes
    its memberships in the same transaction.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: RepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultRepositoryProbe()

    async def create(self, username: str, email: str, name: str | None) -> User:
        await self._ensure_unique(username=username, email=email)

        model = UserModel(username=username, email=email, name=name)
        self._session.add(model)
        with translate_integrity_errors(DUPLICATE_USER_MESSAGE):
            await self._session.flush()

        self._probe.row_saved("user", model.id, created=True)
        return await self._reload(model.id)

    async def get_by_id(self, user_id: UserId) -> User | None:
        stmt = select(UserModel).where(UserModel.id == user_id.value).options(*USER_LOAD)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.row_not_found("user", user_id.value)
            return None

        return to_user(model)

    async def exists(self, user_id: UserId) -> bool:
        stmt = select(UserModel.id).where(UserModel.id == user_id.value)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> list[User]:
        stmt = select(UserModel).options(*USER_LOAD).order_by(UserModel.id)
        result = await self._session.execute(stmt)
        return [to_user(model) for model in result.scalars().all()]

    async def update(self, user_id: UserId, changes: UserChanges) -> User:
        model = await require_row(
            self._session, UserModel, user_id.value, entity="user", exclusive=True
        )

        await self._ensure_unique(
            username=changes.username,
            email=changes.email,
            exclude_id=model.id,
        )

        for field, value in changes.as_dict().items():
            setattr(model, field, value)
        with translate_integrity_errors(DUPLICATE_USER_MESSAGE):
            await self._session.flush()

        self._probe.row_saved("user", model.id, created=False)
        return await self._reload(model.id)

    async def delete(self, user_id: UserId) -> None:
        model = await require_row(
            self._session, UserModel, user_id.value, entity="user", exclusive=True
        )

        result = await self._session.execute(
            delete(MembershipModel).where(MembershipModel.user_id == model.id)
        )
        await self._session.delete(model)
        await self._session.flush()

        self._probe.row_deleted(
            "user", user_id.value, memberships_removed=result.rowcount
        )

    async def _ensure_unique(
        self,
        username: str | None = None,
        email: str | None = None,
        exclude_id: int | None = None,
    ) -> None:
        """Raise ConflictError if another user already holds username or email."""
        clauses = []
        if username is not None:
            clauses.append(UserModel.username == username)
        if email is not None:
            clauses.append(UserModel.email == email)
        if not clauses:
            return

        stmt = select(UserModel.username, UserModel.email).where(or_(*clauses))
        if exclude_id is not None:
            stmt = stmt.where(UserModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        row = result.first()
        if row is None:
            return

        if username is not None and row.username == username:
            self._probe.duplicate_rejected("user", "username", username)
        else:
            self._probe.duplicate_rejected("user", "email", email or "")
        raise ConflictError(DUPLICATE_USER_MESSAGE)

    async def _reload(self, row_id: int) -> User:
        """Re-read a row with its relationships after a write."""
        stmt = (
            select(UserModel)
            .where(UserModel.id == row_id)
            .options(*USER_LOAD)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return to_user(result.scalar_one())
