"""
Module: farm_kernel.models.account
Responsibility: ORM persistence for the chart of accounts -- the target of
    every journal entry line.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - account_code is unique (uq_chart_of_accounts_code).
    - account_type determines the sign convention used for balances:
      Asset and Expense are debit-normal; Liability, Equity and Revenue
      are credit-normal (see NORMAL_BALANCE_BY_TYPE).
    - parent_account_id is a nullable self-reference, so accounts form a tree.
"""

from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from farm_kernel.db.base import TrackedBase, UUIDString
from farm_kernel.exceptions import UnknownAccountTypeError

if TYPE_CHECKING:
    from farm_kernel.models.journal import JournalEntryLine


class AccountType(str, Enum):
    """Types of accounts in the chart of accounts."""

    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    EXPENSE = "Expense"

    @classmethod
    def parse(cls, value: "AccountType | str") -> "AccountType":
        """Coerce a stored string into an AccountType (case-insensitive)."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise UnknownAccountTypeError(str(value))


class NormalBalance(str, Enum):
    """Normal balance side for an account."""

    DEBIT = "debit"
    CREDIT = "credit"


NORMAL_BALANCE_BY_TYPE: dict[AccountType, NormalBalance] = {
    AccountType.ASSET: NormalBalance.DEBIT,
    AccountType.EXPENSE: NormalBalance.DEBIT,
    AccountType.LIABILITY: NormalBalance.CREDIT,
    AccountType.EQUITY: NormalBalance.CREDIT,
    AccountType.REVENUE: NormalBalance.CREDIT,
}


class ChartOfAccount(TrackedBase):
    """
    Chart of accounts entry -- a single node in the general ledger tree.

    Contract:
        account_code is globally unique.  account_type is one of the five
        AccountType values and fixes the account's normal balance.
    """

    __tablename__ = "chart_of_accounts"

    __table_args__ = (
        UniqueConstraint("account_code", name="uq_chart_of_accounts_code"),
        Index("idx_chart_of_accounts_type", "account_type"),
        Index("idx_chart_of_accounts_active", "is_active"),
    )

    account_code: Mapped[str] = mapped_column(String(20), nullable=False)

    account_name: Mapped[str] = mapped_column(String(255), nullable=False)

    account_type: Mapped[AccountType] = mapped_column(String(20), nullable=False)

    parent_account_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        ForeignKey("chart_of_accounts.id"),
        nullable=True,
    )

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    parent: Mapped["ChartOfAccount | None"] = relationship(
        remote_side="ChartOfAccount.id",
        back_populates="children",
    )

    children: Mapped[list["ChartOfAccount"]] = relationship(
        back_populates="parent",
    )

    lines: Mapped[list["JournalEntryLine"]] = relationship(
        back_populates="account",
    )

    def __repr__(self) -> str:
        return f"<ChartOfAccount {self.account_code}: {self.account_name}>"

    @property
    def normal_balance(self) -> NormalBalance:
        return NORMAL_BALANCE_BY_TYPE[AccountType.parse(self.account_type)]

    @property
    def is_debit_normal(self) -> bool:
        return self.normal_balance == NormalBalance.DEBIT
