"""SQLAlchemy ORM model for the groups table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, TimestampMixin

if TYPE_CHECKING:
    from rbac.infrastructure.models.permission import PermissionModel
    from rbac.infrastructure.models.user import UserModel


class GroupModel(Base, TimestampMixin):
    """ORM model for groups table.

    Group names are globally unique. Rows in memberships and permissions
    reference groups.id with RESTRICT; the repository deletes them
    explicitly before deleting the group.
    """

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    members: Mapped[list[UserModel]] = relationship(
        "UserModel",
        secondary="memberships",
        viewonly=True,
        order_by="UserModel.id",
        lazy="raise",
    )
    permissions: Mapped[list[PermissionModel]] = relationship(
        "PermissionModel",
        viewonly=True,
        order_by="PermissionModel.id",
        lazy="raise",
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<GroupModel(id={self.id}, name={self.name})>"
