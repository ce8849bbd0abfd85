"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class ConnectionProbe(Protocol):
    """Domain probe for database handle observability.

    Captures lifecycle events of the application's database handle
    without exposing logging implementation details.
    """

    def database_opened(self, target: str, pool_size: int) -> None:
        """Record that the database handle was opened."""
        ...

    def schema_created(self, table_count: int) -> None:
        """Record that tables were created at startup."""
        ...

    def health_check_failed(self, error: Exception) -> None:
        """Record that a database health check failed."""
        ...

    def database_closed(self) -> None:
        """Record that the database handle was disposed."""
        ...

    def with_context(self, context: ObservationContext) -> ConnectionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultConnectionProbe:
    """Default implementation of ConnectionProbe using structlog.

    Supports observation context for including request-scoped metadata
    with all log events.
    """

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

    def with_context(self, context: ObservationContext) -> DefaultConnectionProbe:
        """Create a new probe with observation context bound."""
        return DefaultConnectionProbe(logger=self._logger, context=context)

    def database_opened(self, target: str, pool_size: int) -> None:
        """Record that the database handle was opened."""
        self._logger.info(
            "database_opened",
            target=target,
            pool_size=pool_size,
            **self._get_context_kwargs(),
        )

    def schema_created(self, table_count: int) -> None:
        """Record that tables were created at startup."""
        self._logger.info(
            "database_schema_created",
            table_count=table_count,
            **self._get_context_kwargs(),
        )

    def health_check_failed(self, error: Exception) -> None:
        """Record that a database health check failed."""
        self._logger.error(
            "database_health_check_failed",
            error=str(error),
            **self._get_context_kwargs(),
        )

    def database_closed(self) -> None:
        """Record that the database handle was disposed."""
        self._logger.info(
            "database_closed",
            **self._get_context_kwargs(),
        )
