"""SQLAlchemy ORM model for the resources table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, TimestampMixin

if TYPE_CHECKING:
    from rbac.infrastructure.models.permission import PermissionModel


class ResourceModel(Base, TimestampMixin):
    """ORM model for resources table.

    ``key`` is the lookup handle used by permission checks and is
    globally unique.
    """

    __tablename__ = "resources"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    permissions: Mapped[list[PermissionModel]] = relationship(
        "PermissionModel",
        viewonly=True,
        order_by="PermissionModel.id",
        lazy="raise",
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<ResourceModel(id={self.id}, key={self.key})>"
