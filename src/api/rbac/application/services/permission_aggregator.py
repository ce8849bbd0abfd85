"""Permission aggregator: lists everything a user can do and why."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from rbac.application.observability import AccessProbe, DefaultAccessProbe
from rbac.application.services.transaction import unit_of_work
from rbac.domain.access import EffectivePermissions
from rbac.domain.value_objects import UserId
from rbac.ports.exceptions import NotFoundError, RBACError
from rbac.ports.repositories import IPermissionRepository, IUserRepository


class PermissionAggregator:
    """Builds the provenance-tagged listing of a user's grants.

    Unlike PermissionEvaluator this never collapses anything: each grant
    held by each of the user's groups is reported separately.
    """

    def __init__(
        self,
        session: AsyncSession,
        user_repository: IUserRepository,
        permission_repository: IPermissionRepository,
        probe: AccessProbe | None = None,
    ):
        self._session = session
        self._user_repository = user_repository
        self._permission_repository = permission_repository
        self._probe = probe or DefaultAccessProbe()

    async def effective_permissions(self, user_id: UserId) -> EffectivePermissions:
        """List the user's groups and every grant those groups hold.

        Groups without grants still appear in ``groups``. Both reads run in
        one transaction.

        Raises:
            NotFoundError: If the user does not exist
        """
        try:
            async with unit_of_work(self._session):
                user = await self._user_repository.get_by_id(user_id)
                if user is None:
                    raise NotFoundError(f"User {user_id} not found", entity="user")
                grants = await self._permission_repository.list_for_user(user_id)
        except RBACError as e:
            self._probe.access_query_failed(
                "effective_permissions", user_id.value, str(e)
            )
            raise

        result = EffectivePermissions.from_group_grants(
            user_id=user_id, groups=user.groups, grants=grants
        )
        self._probe.effective_permissions_listed(
            user_id=user_id.value,
            group_count=len(result.groups),
            permission_count=len(result.permissions),
        )
        return result
