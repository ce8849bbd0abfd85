"""Database infrastructure - shared store primitives."""

from infrastructure.database.dependencies import (
    Database,
    get_database,
    get_write_session,
)
from infrastructure.database.models import Base, TimestampMixin

__all__ = [
    "Base",
    "Database",
    "TimestampMixin",
    "get_database",
    "get_write_session",
]
