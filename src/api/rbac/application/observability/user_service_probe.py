"""Protocol for user application service observability.

Defines the interface for domain probes that capture application-level
domain events for user service operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class UserServiceProbe(Protocol):
    """Domain probe for user application service operations."""

    def user_created(self, user_id: int, username: str) -> None:
        """Record that a user was created."""
        ...

    def user_updated(self, user_id: int, fields: list[str]) -> None:
        """Record that a user was updated."""
        ...

    def user_deleted(self, user_id: int) -> None:
        """Record that a user was deleted."""
        ...

    def user_operation_failed(
        self, operation: str, error: str, user_id: int | None = None
    ) -> None:
        """Record that a user use case failed."""
        ...

    def with_context(self, context: ObservationContext) -> UserServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserServiceProbe:
    """Default implementation of UserServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserServiceProbe(logger=self._logger, context=context)

    def user_created(self, user_id: int, username: str) -> None:
        """Record that a user was created."""
        self._logger.info(
            "user_created",
            user_id=user_id,
            username=username,
            **self._get_context_kwargs(),
        )

    def user_updated(self, user_id: int, fields: list[str]) -> None:
        """Record that a user was updated."""
        self._logger.info(
            "user_updated",
            user_id=user_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def user_deleted(self, user_id: int) -> None:
        """Record that a user was deleted."""
        self._logger.info(
            "user_deleted",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_operation_failed(
        self, operation: str, error: str, user_id: int | None = None
    ) -> None:
        """Record that a user use case failed."""
        self._logger.warning(
            "user_operation_failed",
            operation=operation,
            user_id=user_id,
            error=error,
            **self._get_context_kwargs(),
        )
