"""
Module: ledger_kernel.models.record
Responsibility: ORM persistence for records (dated double-entry postings),
    their items and their tags.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    - Every record belongs to exactly one journal; record visibility is
      derived from that journal.
    - A record holds at most one item per account (uq_record_item_account).
    - amount and price are Decimal, never float.

Non-goals:
    - Balancing the items of a record is a write-side rule and is not checked
      here.
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_kernel.db.base import Base, TrackedBase, UUIDString
from ledger_kernel.db.types import Amount, LongText, Name, TagText

if TYPE_CHECKING:
    from ledger_kernel.models.journal import Journal


class RecordType(str, Enum):
    """Kind of record."""

    RECORD = "record"  # Ordinary posting
    CHECK = "check"  # Balance assertion on a date


class Record(TrackedBase):
    """A dated posting in a journal."""

    __tablename__ = "records"

    __table_args__ = (
        Index("idx_record_journal", "journal_id"),
        Index("idx_record_date", "date"),
    )

    journal_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("journals.id", ondelete="CASCADE"),
        nullable=False,
    )

    name: Mapped[Name] = mapped_column(nullable=False)

    description: Mapped[LongText] = mapped_column(default="", nullable=False)

    typ: Mapped[RecordType] = mapped_column(
        String(20),
        default=RecordType.RECORD.value,
        nullable=False,
    )

    date: Mapped[datetime.date] = mapped_column(nullable=False)

    journal: Mapped["Journal"] = relationship(back_populates="records")

    tags: Mapped[list["RecordTag"]] = relationship(
        back_populates="record",
        cascade="all, delete-orphan",
    )

    items: Mapped[list["RecordItem"]] = relationship(
        back_populates="record",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Record {self.name} {self.date}>"


class RecordTag(Base):
    """Free-form label on a record."""

    __tablename__ = "record_tags"

    __table_args__ = (
        UniqueConstraint("record_id", "tag", name="uq_record_tag"),
    )

    record_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("records.id", ondelete="CASCADE"),
        nullable=False,
    )

    tag: Mapped[TagText] = mapped_column(nullable=False)

    record: Mapped[Record] = relationship(back_populates="tags")


class RecordItem(Base):
    """Quantity posted to one account by a record."""

    __tablename__ = "record_items"

    __table_args__ = (
        UniqueConstraint("record_id", "account_id", name="uq_record_item_account"),
        Index("idx_record_item_account", "account_id"),
    )

    record_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("records.id", ondelete="CASCADE"),
        nullable=False,
    )

    account_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    )

    amount: Mapped[Amount] = mapped_column(nullable=False)

    # Unit price in the journal unit; None when the account unit equals it
    price: Mapped[Decimal | None] = mapped_column(nullable=True)

    record: Mapped[Record] = relationship(back_populates="items")
