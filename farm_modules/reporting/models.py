"""
Financial Reporting Domain Models (``farm_modules.reporting.models``).

Responsibility
--------------
Frozen dataclass value objects for the statements the farm's finance pages
show: general ledger with running balance, income statement, balance sheet.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Built by the
functions in ``statements.py`` and returned by ``ReportingService``.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary fields use ``Decimal`` -- NEVER ``float``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from farm_kernel.domain.ledger import RunningBalanceRow


class ReportType(str, Enum):
    """Types of financial reports."""

    GENERAL_LEDGER = "general_ledger"
    INCOME_STATEMENT = "income_statement"
    BALANCE_SHEET = "balance_sheet"


@dataclass(frozen=True)
class ReportMetadata:
    """Metadata attached to every financial report."""

    report_type: ReportType
    currency: str
    generated_at: str  # ISO format timestamp from injected clock
    period_start: date | None = None
    period_end: date | None = None


@dataclass(frozen=True)
class StatementLine:
    """One account's balance on a statement, signed by its normal side."""

    account_id: UUID
    account_code: str
    account_name: str
    account_type: str
    balance: Decimal


@dataclass(frozen=True)
class IncomeStatementReport:
    revenues: tuple[StatementLine, ...]
    expenses: tuple[StatementLine, ...]
    total_revenue: Decimal
    total_expenses: Decimal
    net_income: Decimal
    metadata: ReportMetadata | None = None


@dataclass(frozen=True)
class BalanceSheetReport:
    """
    Assets against liabilities plus equity.

    ``total_equity`` already includes ``net_income``.  ``balance`` is
    ``total_assets - (total_liabilities + total_equity)``; a non-zero value
    beyond the configured tolerance is a reported discrepancy.
    """

    assets: tuple[StatementLine, ...]
    liabilities: tuple[StatementLine, ...]
    equity: tuple[StatementLine, ...]
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    net_income: Decimal
    balance: Decimal
    is_balanced: bool
    metadata: ReportMetadata | None = None


@dataclass(frozen=True)
class GeneralLedgerReport:
    account_id: UUID
    account_code: str
    account_name: str
    account_type: str
    opening_balance: Decimal
    entries: tuple[RunningBalanceRow, ...]
    closing_balance: Decimal
    metadata: ReportMetadata | None = None
