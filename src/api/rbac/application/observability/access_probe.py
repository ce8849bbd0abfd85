"""Protocol for access decision observability.

Captures the outcome of permission checks and effective-permission
listings. Each check is logged with its decision and the number of
grants that were considered.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class AccessProbe(Protocol):
    """Domain probe for the permission evaluator and aggregator."""

    def permission_checked(
        self,
        user_id: int,
        resource_key: str,
        action: str,
        allowed: bool,
        grants_considered: int,
    ) -> None:
        """Record the decision for a single access check."""
        ...

    def effective_permissions_listed(
        self, user_id: int, group_count: int, permission_count: int
    ) -> None:
        """Record that a user's effective permissions were computed."""
        ...

    def access_query_failed(self, operation: str, user_id: int, error: str) -> None:
        """Record that a check or listing could not be answered."""
        ...

    def with_context(self, context: ObservationContext) -> AccessProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAccessProbe:
    """Default implementation of AccessProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultAccessProbe:
        """Create a new probe with observation context bound."""
        return DefaultAccessProbe(logger=self._logger, context=context)

    def permission_checked(
        self,
        user_id: int,
        resource_key: str,
        action: str,
        allowed: bool,
        grants_considered: int,
    ) -> None:
        """Record the decision for a single access check."""
        self._logger.debug(
            "permission_checked",
            user_id=user_id,
            resource_key=resource_key,
            action=action,
            allowed=allowed,
            grants_considered=grants_considered,
            **self._get_context_kwargs(),
        )

    def effective_permissions_listed(
        self, user_id: int, group_count: int, permission_count: int
    ) -> None:
        """Record that a user's effective permissions were computed."""
        self._logger.debug(
            "effective_permissions_listed",
            user_id=user_id,
            group_count=group_count,
            permission_count=permission_count,
            **self._get_context_kwargs(),
        )

    def access_query_failed(self, operation: str, user_id: int, error: str) -> None:
        """Record that a check or listing could not be answered."""
        self._logger.warning(
            "access_query_failed",
            operation=operation,
            user_id=user_id,
            error=error,
            **self._get_context_kwargs(),
        )
