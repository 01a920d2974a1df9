"""
Module: farm_kernel.models.journal
Responsibility: ORM persistence for journal entries and their lines -- the
    source every ledger and financial statement is derived from.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - entry_reference is unique (JE-YYYYMMDD-NNNN in the admin UI).
    - Lines are immutable once created; there is no update path.
    - Balance (sum of debits == sum of credits) is checked before insert by
      farm_kernel.domain.ledger.check_entry_balanced; total_debit/total_credit
      on the header mirror the checked sums.
    - line_seq orders lines within an entry; together with entry_date and the
      entry's created_at it gives ledgers a deterministic ordering.
"""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from farm_kernel.db.base import TrackedBase, UUIDString

if TYPE_CHECKING:
    from farm_kernel.models.account import ChartOfAccount


class JournalEntry(TrackedBase):
    """A posted double-entry transaction header."""

    __tablename__ = "journal_entries"

    __table_args__ = (
        UniqueConstraint("entry_reference", name="uq_journal_entries_reference"),
        Index("idx_journal_entries_date", "entry_date"),
    )

    entry_reference: Mapped[str] = mapped_column(String(50), nullable=False)

    entry_date: Mapped[date] = mapped_column(Date, nullable=False)

    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    total_debit: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))

    total_credit: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))

    lines: Mapped[list["JournalEntryLine"]] = relationship(
        back_populates="entry",
        order_by="JournalEntryLine.line_seq",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<JournalEntry {self.entry_reference} {self.entry_date}>"


class JournalEntryLine(TrackedBase):
    """One debit-or-credit posting within a journal entry."""

    __tablename__ = "journal_entry_lines"

    __table_args__ = (
        Index("idx_journal_entry_lines_account", "account_id"),
        Index("idx_journal_entry_lines_entry", "journal_entry_id"),
    )

    journal_entry_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("journal_entries.id"),
        nullable=False,
    )

    account_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("chart_of_accounts.id"),
        nullable=False,
    )

    debit_amount: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))

    credit_amount: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))

    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    line_seq: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    entry: Mapped["JournalEntry"] = relationship(back_populates="lines")

    account: Mapped["ChartOfAccount"] = relationship(back_populates="lines")

    def __repr__(self) -> str:
        return (
            f"<JournalEntryLine {self.account_id} "
            f"Dr {self.debit_amount} Cr {self.credit_amount}>"
        )
