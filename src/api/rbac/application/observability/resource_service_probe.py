"""Protocol for resource application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class ResourceServiceProbe(Protocol):
    """Domain probe for resource application service operations."""

    def resource_created(self, resource_id: int, key: str) -> None:
        ...

    def resource_updated(self, resource_id: int, fields: list[str]) -> None:
        ...

    def resource_deleted(self, resource_id: int) -> None:
        ...

    def resource_operation_failed(
        self, operation: str, error: str, resource_id: int | None = None
    ) -> None:
        ...

    def with_context(self, context: ObservationContext) -> ResourceServiceProbe:
        ...


class DefaultResourceServiceProbe:
    """Default implementation of ResourceServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultResourceServiceProbe:
        return DefaultResourceServiceProbe(logger=self._logger, context=context)

    def resource_created(self, resource_id: int, key: str) -> None:
        self._logger.info(
            "resource_created",
            resource_id=resource_id,
            key=key,
            **self._get_context_kwargs(),
        )

    def resource_updated(self, resource_id: int, fields: list[str]) -> None:
        self._logger.info(
            "resource_updated",
            resource_id=resource_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def resource_deleted(self, resource_id: int) -> None:
        self._logger.info(
            "resource_deleted",
            resource_id=resource_id,
            **self._get_context_kwargs(),
        )

    def resource_operation_failed(
        self, operation: str, error: str, resource_id: int | None = None
    ) -> None:
        self._logger.warning(
            "resource_operation_failed",
            operation=operation,
            resource_id=resource_id,
            error=error,
            **self._get_context_kwargs(),
        )
