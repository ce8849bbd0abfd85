"""Protocol for permission grant service observability.

Grants are addressed by (group, resource); every event carries both ids.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class PermissionServiceProbe(Protocol):
    """Domain probe for permission grant operations."""

    def permission_granted(
        self, group_id: int, resource_id: int, flags: dict[str, bool]
    ) -> None:
        """Record that a grant was created."""
        ...

    def permission_updated(
        self, group_id: int, resource_id: int, fields: list[str]
    ) -> None:
        """Record that a grant's flags were changed."""
        ...

    def permission_revoked(self, group_id: int, resource_id: int) -> None:
        """Record that a grant was deleted."""
        ...

    def permission_operation_failed(
        self,
        operation: str,
        error: str,
        group_id: int | None = None,
        resource_id: int | None = None,
    ) -> None:
        """Record that a grant use case failed."""
        ...

    def with_context(self, context: ObservationContext) -> PermissionServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPermissionServiceProbe:
    """Default implementation of PermissionServiceProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultPermissionServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultPermissionServiceProbe(logger=self._logger, context=context)

    def permission_granted(
        self, group_id: int, resource_id: int, flags: dict[str, bool]
    ) -> None:
        """Record that a grant was created."""
        self._logger.info(
            "permission_granted",
            group_id=group_id,
            resource_id=resource_id,
            **flags,
            **self._get_context_kwargs(),
        )

    def permission_updated(
        self, group_id: int, resource_id: int, fields: list[str]
    ) -> None:
        """Record that a grant's flags were changed."""
        self._logger.info(
            "permission_updated",
            group_id=group_id,
            resource_id=resource_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def permission_revoked(self, group_id: int, resource_id: int) -> None:
        """Record that a grant was deleted."""
        self._logger.info(
            "permission_revoked",
            group_id=group_id,
            resource_id=resource_id,
            **self._get_context_kwargs(),
        )

    def permission_operation_failed(
        self,
        operation: str,
        error: str,
        group_id: int | None = None,
        resource_id: int | None = None,
    ) -> None:
        """Record that a grant use case failed."""
        self._logger.warning(
            "permission_operation_failed",
            operation=operation,
            group_id=group_id,
            resource_id=resource_id,
            error=error,
            **self._get_context_kwargs(),
        )
