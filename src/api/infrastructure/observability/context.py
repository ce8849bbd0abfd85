"""Request-scoped metadata attached to probe events."""

from __future__ import annotations

import dataclasses
from typing import Any


@dataclasses.dataclass(frozen=True)
class ObservationContext:
    """Metadata bound to a probe with ``with_context()``.

    Lets a permission check or a cascade delete be correlated with the
    admin request that caused it.

    Attributes:
        request_id: Identifier of the request being served
        actor: Admin username or calling service, when known
        extra: Free-form fields merged into every event
    """

    request_id: str | None = None
    actor: str | None = None
    extra: dict[str, Any] = dataclasses.field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Event fields for this context; unset identifiers are left out."""
        fields = {
            name: value
            for name, value in (("request_id", self.request_id), ("actor", self.actor))
            if value is not None
        }
        return {**fields, **self.extra}

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        return dataclasses.replace(self, extra={**self.extra, **kwargs})
