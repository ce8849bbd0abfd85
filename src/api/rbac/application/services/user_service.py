"""User application service for the RBAC bounded context."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from rbac.application.observability import DefaultUserServiceProbe, UserServiceProbe
from rbac.application.services.transaction import unit_of_work
from rbac.domain.aggregates import User
from rbac.domain.changes import UserChanges
from rbac.domain.value_objects import UserId
from rbac.ports.exceptions import NotFoundError, RBACError
from rbac.ports.repositories import IUserRepository


class UserService:
    """Application service for user management.

    Each public method is one use case running in its own transaction.
    """

    def __init__(
        self,
        session: AsyncSession,
        user_repository: IUserRepository,
        probe: UserServiceProbe | None = None,
    ):
        """Initialize UserService with dependencies.

        Args:
            session: Database session for transaction management
            user_repository: Repository for user persistence
            probe: Optional domain probe for observability
        """
        self._session = session
        self._user_repository = user_repository
        self._probe = probe or DefaultUserServiceProbe()

    async def create_user(
        self, username: str, email: str, name: str | None = None
    ) -> User:
        """Create a new user.

        Raises:
            ConflictError: If the username or email is already taken
        """
        try:
            async with unit_of_work(self._session):
                user = await self._user_repository.create(
                    username=username, email=email, name=name
                )
        except RBACError as e:
            self._probe.user_operation_failed("create", str(e))
            raise

        self._probe.user_created(user_id=user.id.value, username=user.username)
        return user

    async def get_user(self, user_id: UserId) -> User:
        """Get a user with the groups it belongs to.

        Raises:
            NotFoundError: If the user does not exist
        """
        async with unit_of_work(self._session):
            user = await self._user_repository.get_by_id(user_id)

        if user is None:
            raise NotFoundError(f"User {user_id} not found", entity="user")
        return user

    async def list_users(self) -> list[User]:
        async with unit_of_work(self._session):
            return await self._user_repository.list_all()

    async def update_user(self, user_id: UserId, changes: UserChanges) -> User:
        """Merge the provided fields into a user.

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If the new username or email is already taken
        """
        try:
            async with unit_of_work(self._session):
                user = await self._user_repository.update(user_id, changes)
        except RBACError as e:
            self._probe.user_operation_failed("update", str(e), user_id=user_id.value)
            raise

        self._probe.user_updated(
            user_id=user_id.value, fields=sorted(changes.as_dict())
        )
        return user

    async def delete_user(self, user_id: UserId) -> None:
        """Delete a user and its group memberships.

        Raises:
            NotFoundError: If the user does not exist
        """
        try:
            async with unit_of_work(self._session):
                await self._user_repository.delete(user_id)
        except RBACError as e:
            self._probe.user_operation_failed("delete", str(e), user_id=user_id.value)
            raise

        self._probe.user_deleted(user_id=user_id.value)
