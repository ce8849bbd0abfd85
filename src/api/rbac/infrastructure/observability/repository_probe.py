"""Domain probe for RBAC repository operations.

Following Domain-Oriented Observability patterns, this probe captures
store-level events: rows written, duplicates rejected, and the rows removed
by explicit cascade procedures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class RepositoryProbe(Protocol):
    """Domain probe for entity store operations."""

    def row_saved(self, entity: str, row_id: int, created: bool) -> None:
        """Record that a row was inserted or updated."""
        ...

    def row_not_found(self, entity: str, row_id: int) -> None:
        """Record that a referenced row does not exist."""
        ...

    def duplicate_rejected(self, entity: str, field: str, value: str) -> None:
        """Record that a write was refused because a unique value is taken."""
        ...

    def row_deleted(
        self,
        entity: str,
        row_id: int,
        memberships_removed: int = 0,
        permissions_removed: int = 0,
    ) -> None:
        """Record that a row and its dependent rows were deleted."""
        ...

    def with_context(self, context: ObservationContext) -> RepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRepositoryProbe:
    """Default implementation of RepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultRepositoryProbe(logger=self._logger, context=context)

    def row_saved(self, entity: str, row_id: int, created: bool) -> None:
        """Record that a row was inserted or updated."""
        self._logger.debug(
            f"{entity}_saved",
            row_id=row_id,
            created=created,
            **self._get_context_kwargs(),
        )

    def row_not_found(self, entity: str, row_id: int) -> None:
        """Record that a referenced row does not exist."""
        self._logger.debug(
            f"{entity}_not_found",
            row_id=row_id,
            **self._get_context_kwargs(),
        )

    def duplicate_rejected(self, entity: str, field: str, value: str) -> None:
        """Record that a write was refused because a unique value is taken."""
        self._logger.warning(
            f"duplicate_{entity}_{field}",
            value=value,
            **self._get_context_kwargs(),
        )

    def row_deleted(
        self,
        entity: str,
        row_id: int,
        memberships_removed: int = 0,
        permissions_removed: int = 0,
    ) -> None:
        """Record that a row and its dependent rows were deleted."""
        self._logger.info(
            f"{entity}_deleted",
            row_id=row_id,
            memberships_removed=memberships_removed,
            permissions_removed=permissions_removed,
            **self._get_context_kwargs(),
        )
