"""
Module: ledger_kernel.models.journal
Responsibility: ORM persistence for journals (the books that own accounts and
    records), their tags, and their user/group access lists.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    - Journal.name is unique (uq_journal_name).
    - A user or group appears at most once per journal access list; the row's
      is_admin flag separates admins from members.
    - Archived journals stay readable but are excluded from list reads unless
      the query asks for them.
"""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import Base, TrackedBase, UUIDString
from ledger_kernel.db.types import LongText, Name, TagText, UnitCode

if TYPE_CHECKING:
    from ledger_kernel.models.account import Account
    from ledger_kernel.models.record import Record


class Journal(TrackedBase):
    """A set of books kept in one unit."""

    __tablename__ = "journals"

    __table_args__ = (
        UniqueConstraint("name", name="uq_journal_name"),
        Index("idx_journal_archived", "is_archived"),
    )

    name: Mapped[Name] = mapped_column(nullable=False)

    description: Mapped[LongText] = mapped_column(default="", nullable=False)

    # Reporting unit of the whole journal (e.g. "CNY")
    unit: Mapped[UnitCode] = mapped_column(nullable=False)

    is_archived: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    tags: Mapped[list["JournalTag"]] = relationship(
        back_populates="journal",
        cascade="all, delete-orphan",
    )

    users: Mapped[list["JournalUser"]] = relationship(
        back_populates="journal",
        cascade="all, delete-orphan",
    )

    groups: Mapped[list["JournalGroup"]] = relationship(
        back_populates="journal",
        cascade="all, delete-orphan",
    )

    accounts: Mapped[list["Account"]] = relationship(back_populates="journal")

    records: Mapped[list["Record"]] = relationship(back_populates="journal")

    def __repr__(self) -> str:
        return f"<Journal {self.name}>"


class JournalTag(Base):
    """Free-form label on a journal."""

    __tablename__ = "journal_tags"

    __table_args__ = (
        UniqueConstraint("journal_id", "tag", name="uq_journal_tag"),
    )

    journal_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("journals.id", ondelete="CASCADE"),
        nullable=False,
    )

    tag: Mapped[TagText] = mapped_column(nullable=False)

    journal: Mapped[Journal] = relationship(back_populates="tags")


class JournalUser(Base):
    """A user on a journal's access list."""

    __tablename__ = "journal_users"

    __table_args__ = (
        UniqueConstraint("journal_id", "user_id", name="uq_journal_user"),
        Index("idx_journal_user_user", "user_id"),
    )

    journal_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("journals.id", ondelete="CASCADE"),
        nullable=False,
    )

    user_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    journal: Mapped[Journal] = relationship(back_populates="users")


class JournalGroup(Base):
    """A group on a journal's access list."""

    __tablename__ = "journal_groups"

    __table_args__ = (
        UniqueConstraint("journal_id", "group_id", name="uq_journal_group"),
        Index("idx_journal_group_group", "group_id"),
    )

    journal_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("journals.id", ondelete="CASCADE"),
        nullable=False,
    )

    group_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
    )

    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    journal: Mapped[Journal] = relationship(back_populates="groups")
