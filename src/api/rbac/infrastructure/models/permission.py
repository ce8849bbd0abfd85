"""SQLAlchemy ORM model for the permissions table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, TimestampMixin

if TYPE_CHECKING:
    from rbac.infrastructure.models.resource import ResourceModel


class PermissionModel(Base, TimestampMixin):
    """ORM model for permissions table.

    Foreign Key Constraints:
    - group_id references groups.id with RESTRICT delete
    - resource_id references resources.id with RESTRICT delete
    The application deletes grants explicitly inside the parent's delete
    transaction; the database refuses to leave an orphan behind.

    Unique Constraint:
    - (group_id, resource_id): at most one grant per pair
    """

    __tablename__ = "permissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("groups.id", ondelete="RESTRICT"),
        nullable=False,
    )
    resource_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("resources.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    can_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_create: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_update: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_delete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    resource: Mapped[ResourceModel] = relationship(
        "ResourceModel",
        viewonly=True,
        lazy="raise",
    )

    __table_args__ = (UniqueConstraint("group_id", "resource_id"),)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<PermissionModel(group_id={self.group_id}, "
            f"resource_id={self.resource_id})>"
        )
