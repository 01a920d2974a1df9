"""
Ledger balance engine -- running balances with accounting sign conventions.

Responsibility:
    Pure reductions over journal entry lines already fetched from the
    datastore: per-account balance, opening balance before a cutoff, running
    balance ledger, and the balanced-entry check applied before posting.

Architecture position:
    Kernel > Domain.  ZERO I/O.  Inputs are frozen ``JournalLineData``
    snapshots; the ORM rows never reach this module.

Invariants enforced:
    - Sign convention: a line contributes ``debit - credit`` to a
      debit-normal account (Asset, Expense) and ``credit - debit`` to a
      credit-normal account (Liability, Equity, Revenue).
    - ``build_ledger`` is order-preserving and accumulative:
      ``closing == opening + sum(contribution(line))``.
    - Inputs are never mutated; the same line sequence always yields the
      same result.

Failure modes:
    - UnknownAccountTypeError for an account type outside the five types.
    - check_entry_balanced raises MissingAccountError, NegativeAmountError,
      MixedSideLineError, OneSidedEntryError or UnbalancedEntryError.  The
      balance functions themselves are total: empty input yields zero.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from farm_kernel.exceptions import (
    MissingAccountError,
    MixedSideLineError,
    NegativeAmountError,
    OneSidedEntryError,
    UnbalancedEntryError,
)
from farm_kernel.models.account import (
    NORMAL_BALANCE_BY_TYPE,
    AccountType,
    NormalBalance,
)

ZERO = Decimal("0")
BALANCE_TOLERANCE = Decimal("0.01")


@dataclass(frozen=True)
class JournalLineData:
    """Snapshot of one journal entry line joined with its entry's date."""

    account_id: UUID
    debit_amount: Decimal
    credit_amount: Decimal
    entry_date: date
    description: str | None = None
    entry_reference: str | None = None


@dataclass(frozen=True)
class RunningBalanceRow:
    """One ledger row: the posting and the balance after it."""

    entry_date: date
    description: str | None
    debit: Decimal
    credit: Decimal
    balance: Decimal
    entry_reference: str | None = None


@dataclass(frozen=True)
class LedgerResult:
    entries: tuple[RunningBalanceRow, ...]
    opening_balance: Decimal
    closing_balance: Decimal


@dataclass(frozen=True)
class EntryTotals:
    total_debit: Decimal
    total_credit: Decimal


def _amount(value: Decimal | None) -> Decimal:
    return value if value is not None else ZERO


def is_debit_normal(account_type: AccountType | str) -> bool:
    return NORMAL_BALANCE_BY_TYPE[AccountType.parse(account_type)] == NormalBalance.DEBIT


def signed_contribution(line: JournalLineData, account_type: AccountType | str) -> Decimal:
    """A single line's effect on the balance of an account of this type."""
    debit = _amount(line.debit_amount)
    credit = _amount(line.credit_amount)
    if is_debit_normal(account_type):
        return debit - credit
    return credit - debit


def compute_account_balance(
    lines: Iterable[JournalLineData],
    account_type: AccountType | str,
) -> Decimal:
    """Sum of signed contributions; zero for no lines."""
    account_type = AccountType.parse(account_type)
    return sum(
        (signed_contribution(line, account_type) for line in lines),
        ZERO,
    )


def compute_opening_balance(
    lines: Iterable[JournalLineData],
    account_type: AccountType | str,
    cutoff: date,
) -> Decimal:
    """Balance of the lines dated strictly before ``cutoff``."""
    return compute_account_balance(
        (line for line in lines if line.entry_date < cutoff),
        account_type,
    )


def build_ledger(
    lines: Iterable[JournalLineData],
    account_type: AccountType | str,
    opening_balance: Decimal = ZERO,
) -> LedgerResult:
    """
    Running balance over lines in the order given.

    Callers pass lines sorted ascending by date; ties keep their input
    order (this function never re-sorts).
    """
    account_type = AccountType.parse(account_type)
    running = opening_balance
    rows: list[RunningBalanceRow] = []

    for line in lines:
        running += signed_contribution(line, account_type)
        rows.append(
            RunningBalanceRow(
                entry_date=line.entry_date,
                description=line.description,
                debit=_amount(line.debit_amount),
                credit=_amount(line.credit_amount),
                balance=running,
                entry_reference=line.entry_reference,
            )
        )

    return LedgerResult(
        entries=tuple(rows),
        opening_balance=opening_balance,
        closing_balance=rows[-1].balance if rows else opening_balance,
    )


def check_entry_balanced(
    lines: Iterable[JournalLineData],
    tolerance: Decimal = BALANCE_TOLERANCE,
) -> EntryTotals:
    """
    Validate a journal entry before it is posted.

    Every line names an account and carries a non-negative debit or
    credit, never both.  The entry has at least one of each side, and
    debits equal credits within ``tolerance``.
    """
    total_debit = ZERO
    total_credit = ZERO

    for index, line in enumerate(lines):
        debit = _amount(line.debit_amount)
        credit = _amount(line.credit_amount)
        if line.account_id is None:
            raise MissingAccountError(index)
        for amount in (debit, credit):
            if amount < ZERO:
                raise NegativeAmountError(index, amount)
        if debit > ZERO and credit > ZERO:
            raise MixedSideLineError(index)
        total_debit += debit
        total_credit += credit

    if total_debit == ZERO or total_credit == ZERO:
        raise OneSidedEntryError(total_debit, total_credit)

    if abs(total_debit - total_credit) > tolerance:
        raise UnbalancedEntryError(total_debit, total_credit)

    return EntryTotals(total_debit=total_debit, total_credit=total_credit)
