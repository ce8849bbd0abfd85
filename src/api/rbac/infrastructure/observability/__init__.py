"""Domain-Oriented Observability for RBAC infrastructure."""

from rbac.infrastructure.observability.repository_probe import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)

__all__ = [
    "DefaultRepositoryProbe",
    "RepositoryProbe",
]
