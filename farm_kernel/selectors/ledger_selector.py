"""
Module: farm_kernel.selectors.ledger_selector
Responsibility: Read-only ledger queries: journal entry lines for an account
    or a date window, joined with their entry's date and reference, and the
    debit/credit totals used to verify the double-entry invariant.
Architecture position: Kernel > Selectors.  Returns JournalLineData snapshots
    consumed by the pure functions in domain/ledger.py and the reporting
    statements.

Invariants enforced:
    - No stored balances: every balance is derived at query time from
      journal_entry_lines.
    - Deterministic ordering: entry_date ASC, then the entry's created_at,
      then line_seq.  Lines posted on the same day therefore replay in
      insertion order regardless of backend.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select

from farm_kernel.domain.ledger import JournalLineData
from farm_kernel.models.journal import JournalEntry, JournalEntryLine
from farm_kernel.selectors.base import BaseSelector


class LedgerSelector(BaseSelector):
    """Selector for journal entry lines and their totals."""

    def _base_query(
        self,
        account_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        before: date | None = None,
    ):
        query = select(
            JournalEntryLine.account_id,
            JournalEntryLine.debit_amount,
            JournalEntryLine.credit_amount,
            JournalEntryLine.description.label("line_description"),
            JournalEntry.entry_date,
            JournalEntry.entry_reference,
            JournalEntry.description.label("entry_description"),
        ).join(JournalEntry, JournalEntryLine.journal_entry_id == JournalEntry.id)

        if account_id is not None:
            query = query.where(JournalEntryLine.account_id == account_id)
        if date_from is not None:
            query = query.where(JournalEntry.entry_date >= date_from)
        if date_to is not None:
            query = query.where(JournalEntry.entry_date <= date_to)
        if before is not None:
            query = query.where(JournalEntry.entry_date < before)

        return query.order_by(
            JournalEntry.entry_date,
            JournalEntry.created_at,
            JournalEntryLine.line_seq,
        )

    def lines(
        self,
        account_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        before: date | None = None,
    ) -> list[JournalLineData]:
        """
        Journal entry lines matching the filters, oldest first.

        Args:
            account_id: Restrict to one account.
            date_from: Inclusive lower bound on entry_date.
            date_to: Inclusive upper bound on entry_date.
            before: Exclusive upper bound on entry_date (opening balances).
        """
        results = self.session.execute(
            self._base_query(account_id, date_from, date_to, before)
        ).all()

        return [
            JournalLineData(
                account_id=row.account_id,
                debit_amount=row.debit_amount or Decimal("0"),
                credit_amount=row.credit_amount or Decimal("0"),
                entry_date=row.entry_date,
                description=row.line_description or row.entry_description,
                entry_reference=row.entry_reference,
            )
            for row in results
        ]

    def total_debits_credits(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> tuple[Decimal, Decimal]:
        """
        Total debits and credits across all accounts in the window.

        For a correctly posted ledger the two are equal.
        """
        query = (
            select(
                func.coalesce(func.sum(JournalEntryLine.debit_amount), 0).label("debits"),
                func.coalesce(func.sum(JournalEntryLine.credit_amount), 0).label("credits"),
            )
            .select_from(JournalEntryLine)
            .join(JournalEntry, JournalEntryLine.journal_entry_id == JournalEntry.id)
        )
        if date_from is not None:
            query = query.where(JournalEntry.entry_date >= date_from)
        if date_to is not None:
            query = query.where(JournalEntry.entry_date <= date_to)

        result = self.session.execute(query).one()
        return Decimal(str(result.debits)), Decimal(str(result.credits))
