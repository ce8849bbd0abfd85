"""Protocol for group application service observability.

Defines the interface for domain probes that capture application-level
domain events for group and membership operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class GroupServiceProbe(Protocol):
    """Domain probe for group application service operations."""

    def group_created(self, group_id: int, name: str) -> None:
        """Record that a group was created."""
        ...

    def group_updated(self, group_id: int, fields: list[str]) -> None:
        """Record that a group was updated."""
        ...

    def group_deleted(self, group_id: int) -> None:
        """Record that a group was deleted."""
        ...

    def member_added(self, group_id: int, user_id: int) -> None:
        """Record that a user was added to a group."""
        ...

    def member_removed(self, group_id: int, user_id: int) -> None:
        """Record that a user was removed from a group."""
        ...

    def group_operation_failed(
        self, operation: str, error: str, group_id: int | None = None
    ) -> None:
        """Record that a group use case failed."""
        ...

    def with_context(self, context: ObservationContext) -> GroupServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGroupServiceProbe:
    """Default implementation of GroupServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultGroupServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultGroupServiceProbe(logger=self._logger, context=context)

    def group_created(self, group_id: int, name: str) -> None:
        """Record that a group was created."""
        self._logger.info(
            "group_created",
            group_id=group_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def group_updated(self, group_id: int, fields: list[str]) -> None:
        """Record that a group was updated."""
        self._logger.info(
            "group_updated",
            group_id=group_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def group_deleted(self, group_id: int) -> None:
        """Record that a group was deleted."""
        self._logger.info(
            "group_deleted",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def member_added(self, group_id: int, user_id: int) -> None:
        """Record that a user was added to a group."""
        self._logger.info(
            "group_member_added",
            group_id=group_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def member_removed(self, group_id: int, user_id: int) -> None:
        """Record that a user was removed from a group."""
        self._logger.info(
            "group_member_removed",
            group_id=group_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def group_operation_failed(
        self, operation: str, error: str, group_id: int | None = None
    ) -> None:
        """Record that a group use case failed."""
        self._logger.warning(
            "group_operation_failed",
            operation=operation,
            group_id=group_id,
            error=error,
            **self._get_context_kwargs(),
        )
