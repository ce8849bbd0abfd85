"""Permission evaluator: answers "may user U perform action A on resource R?"."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from rbac.application.observability import AccessProbe, DefaultAccessProbe
from rbac.application.services.transaction import unit_of_work
from rbac.domain.access import is_allowed
from rbac.domain.value_objects import Action, UserId
from rbac.ports.exceptions import NotFoundError, RBACError
from rbac.ports.repositories import IPermissionRepository, IUserRepository


class PermissionEvaluator:
    """Decides single access checks.

    A user is allowed an action on a resource when at least one group the
    user belongs to holds a grant on that exact resource key with the
    action's flag set. Grants never deny, so the decision is a plain OR
    and a user with no applicable grant is refused.
    """

    def __init__(
        self,
        session: AsyncSession,
        user_repository: IUserRepository,
        permission_repository: IPermissionRepository,
        probe: AccessProbe | None = None,
    ):
        """Initialize PermissionEvaluator with dependencies.

        Args:
            session: Database session for transaction management
            user_repository: Repository used to confirm the user exists
            permission_repository: Repository that resolves grants via memberships
            probe: Optional domain probe for observability
        """
        self._session = session
        self._user_repository = user_repository
        self._permission_repository = permission_repository
        self._probe = probe or DefaultAccessProbe()

    async def check(self, user_id: UserId, resource_key: str, action: Action) -> bool:
        """Evaluate whether the user may perform ``action`` on ``resource_key``.

        Args:
            user_id: The user being checked
            resource_key: Resource key, matched by exact string equality
            action: The action being attempted

        Returns:
            True if any of the user's groups grants the action, False
            otherwise (including when the user has no groups or the key
            names no resource)

        Raises:
            NotFoundError: If the user does not exist
        """
        try:
            async with unit_of_work(self._session):
                if not await self._user_repository.exists(user_id):
                    raise NotFoundError(f"User {user_id} not found", entity="user")
                grants = await self._permission_repository.list_for_user_and_resource(
                    user_id=user_id, resource_key=resource_key
                )
        except RBACError as e:
            self._probe.access_query_failed("check", user_id.value, str(e))
            raise

        allowed = is_allowed(grants, action)
        self._probe.permission_checked(
            user_id=user_id.value,
            resource_key=resource_key,
            action=action.value,
            allowed=allowed,
            grants_considered=len(grants),
        )
        return allowed
