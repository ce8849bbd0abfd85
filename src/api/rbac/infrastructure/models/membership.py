"""SQLAlchemy ORM model for the memberships join table."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, _utc_now

if TYPE_CHECKING:
    from rbac.infrastructure.models.group import GroupModel
    from rbac.infrastructure.models.user import UserModel


class MembershipModel(Base):
    """ORM model for the user <-> group join table.

    The composite primary key (user_id, group_id) makes a duplicate
    membership impossible at the store level. Both foreign keys use
    RESTRICT; users and groups delete their memberships explicitly.
    """

    __tablename__ = "memberships"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        primary_key=True,
    )
    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("groups.id", ondelete="RESTRICT"),
        primary_key=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=_utc_now,
        nullable=False,
    )

    user: Mapped[UserModel] = relationship("UserModel", viewonly=True, lazy="raise")
    group: Mapped[GroupModel] = relationship("GroupModel", viewonly=True, lazy="raise")

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<MembershipModel(user_id={self.user_id}, group_id={self.group_id})>"
