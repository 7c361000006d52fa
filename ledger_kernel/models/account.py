"""
Module: ledger_kernel.models.account
Responsibility: ORM persistence for accounts -- the per-journal buckets that
    record items post quantities into -- and their tags.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    - Every account belongs to exactly one journal (journal_id NOT NULL).
      Account visibility is derived from that journal; the account has no
      access list of its own.
    - A tag appears at most once per account (uq_account_tag).

Failure modes:
    - IntegrityError when journal_id references a missing journal.
"""

from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import Base, TrackedBase, UUIDString
from ledger_kernel.db.types import LongText, Name, TagText, UnitCode

if TYPE_CHECKING:
    from ledger_kernel.models.journal import Journal


class AccountType(str, Enum):
    """Financial statement placement of an account."""

    INCOME = "income"
    EXPENSE = "expense"
    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"


class AccountStrategy(str, Enum):
    """How the holding value of an account is derived from its items."""

    DIRECT = "direct"  # Latest price wins
    AVERAGE = "average"  # Weighted average cost
    FIFO = "fifo"  # First in, first out lots


class Account(TrackedBase):
    """
    A single account inside a journal.

    Contract:
        unit may differ from the journal unit (e.g. a stock position held in
        a CNY journal).  typ and strategy are stored as their string values.
    """

    __tablename__ = "accounts"

    __table_args__ = (
        Index("idx_account_journal", "journal_id"),
        Index("idx_account_unit", "unit"),
        Index("idx_account_type", "typ"),
    )

    journal_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("journals.id", ondelete="CASCADE"),
        nullable=False,
    )

    name: Mapped[Name] = mapped_column(nullable=False)

    description: Mapped[LongText] = mapped_column(default="", nullable=False)

    typ: Mapped[AccountType] = mapped_column(String(20), nullable=False)

    strategy: Mapped[AccountStrategy] = mapped_column(
        String(20),
        default=AccountStrategy.DIRECT.value,
        nullable=False,
    )

    unit: Mapped[UnitCode] = mapped_column(nullable=False)

    is_archived: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    journal: Mapped["Journal"] = relationship(back_populates="accounts")

    tags: Mapped[list["AccountTag"]] = relationship(
        back_populates="account",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Account {self.name} ({self.unit})>"


class AccountTag(Base):
    """Free-form label on an account."""

    __tablename__ = "account_tags"

    __table_args__ = (
        UniqueConstraint("account_id", "tag", name="uq_account_tag"),
    )

    account_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    )

    tag: Mapped[TagText] = mapped_column(nullable=False)

    account: Mapped[Account] = relationship(back_populates="tags")
