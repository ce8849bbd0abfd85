"""SQLAlchemy ORM model for the users table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, TimestampMixin

if TYPE_CHECKING:
    from rbac.infrastructure.models.group import GroupModel


class UserModel(Base, TimestampMixin):
    """ORM model for users table.

    Username and email carry unique constraints so racing creates resolve
    to one row and one IntegrityError.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Read-only view; memberships are written through MembershipModel
    groups: Mapped[list[GroupModel]] = relationship(
        "GroupModel",
        secondary="memberships",
        viewonly=True,
        order_by="GroupModel.id",
        lazy="raise",
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserModel(id={self.id}, username={self.username})>"
