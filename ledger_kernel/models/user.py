"""
Module: ledger_kernel.models.user
Responsibility: ORM persistence for users and their external auth identities.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    - User.name is unique (uq_user_name).
    - (provider, value) identifies at most one AuthId (uq_auth_id_provider_value).
    - UserRole is totally ordered: USER < ADMIN < OWNER.  Read rules compare
      roles with ``>``, so the stored value is the integer rank.
"""

from enum import IntEnum
from uuid import UUID

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import Base, TrackedBase, UUIDString
from ledger_kernel.db.types import Name


class UserRole(IntEnum):
    """Privilege rank of a user."""

    USER = 0
    ADMIN = 1
    OWNER = 2


class User(TrackedBase):
    """A person operating the ledger."""

    __tablename__ = "users"

    __table_args__ = (
        UniqueConstraint("name", name="uq_user_name"),
        Index("idx_user_role", "role"),
    )

    name: Mapped[Name] = mapped_column(nullable=False)

    role: Mapped[UserRole] = mapped_column(
        Integer,
        default=UserRole.USER,
        nullable=False,
    )

    auth_ids: Mapped[list["AuthId"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User {self.name} role={UserRole(self.role).name}>"

    @property
    def is_privileged(self) -> bool:
        """ADMIN and OWNER users read every journal, group, account and record."""
        return self.role > UserRole.USER


class AuthId(Base):
    """External identity (provider, value) bound to a user."""

    __tablename__ = "auth_ids"

    __table_args__ = (
        UniqueConstraint("provider", "value", name="uq_auth_id_provider_value"),
        Index("idx_auth_id_user", "user_id"),
    )

    user_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    provider: Mapped[str] = mapped_column(String(100), nullable=False)

    value: Mapped[str] = mapped_column(String(255), nullable=False)

    user: Mapped[User] = relationship(back_populates="auth_ids")
