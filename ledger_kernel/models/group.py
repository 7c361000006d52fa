"""
Module: ledger_kernel.models.group
Responsibility: ORM persistence for user groups and group membership.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    - Group.name is unique (uq_group_name).
    - A user appears at most once per group (uq_group_user); the single row
      says whether the user is an admin or a plain member.
"""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import Base, TrackedBase, UUIDString
from ledger_kernel.db.types import LongText, Name


class Group(TrackedBase):
    """A named set of users, granted access to journals as a whole."""

    __tablename__ = "groups"

    __table_args__ = (UniqueConstraint("name", name="uq_group_name"),)

    name: Mapped[Name] = mapped_column(nullable=False)

    description: Mapped[LongText] = mapped_column(default="", nullable=False)

    users: Mapped[list["GroupUser"]] = relationship(
        back_populates="group",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Group {self.name}>"


class GroupUser(Base):
    """Membership of a user in a group."""

    __tablename__ = "group_users"

    __table_args__ = (
        UniqueConstraint("group_id", "user_id", name="uq_group_user"),
        Index("idx_group_user_user", "user_id"),
    )

    group_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
    )

    user_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    group: Mapped[Group] = relationship(back_populates="users")
