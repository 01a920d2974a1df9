"""
Pure financial statement transformation functions.

These functions turn account metadata and journal lines into structured
financial statements. ZERO I/O. ZERO side effects beyond logging.

All monetary values are Decimal. All inputs/outputs are frozen dataclasses.

Functions in this module follow the farm_kernel/domain/ purity convention:
- No database access
- No clock access
- No file I/O
- Deterministic: same inputs always produce same outputs
"""

from __future__ import annotations

import dataclasses
from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from uuid import UUID

from farm_kernel.domain.ledger import ZERO, JournalLineData, compute_account_balance
from farm_kernel.exceptions import InvalidReportPeriodError
from farm_kernel.logging_config import get_logger
from farm_kernel.models.account import AccountType
from farm_modules.reporting.config import ReportingConfig
from farm_modules.reporting.models import (
    BalanceSheetReport,
    IncomeStatementReport,
    ReportMetadata,
    StatementLine,
)

logger = get_logger("modules.reporting.statements")

# =========================================================================
# Bridge types
# =========================================================================


@dataclasses.dataclass(frozen=True)
class AccountInfo:
    """
    Snapshot of account metadata needed for classification.

    This is the bridge between the ORM layer (ChartOfAccount) and the pure
    transformation functions. The service converts rows to AccountInfo
    before calling any function here.
    """

    account_id: UUID
    code: str
    name: str
    account_type: AccountType
    parent_id: UUID | None = None
    is_active: bool = True


@dataclasses.dataclass(frozen=True)
class ReportPeriod:
    """Inclusive date window; either end may be open."""

    start: date | None = None
    end: date | None = None

    def __post_init__(self):
        if self.start is not None and self.end is not None and self.end < self.start:
            raise InvalidReportPeriodError(self.start, self.end)

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


ALL_TIME = ReportPeriod()


# =========================================================================
# Helpers
# =========================================================================


def _lines_by_account(
    lines: Iterable[JournalLineData],
    period: ReportPeriod,
) -> dict[UUID, list[JournalLineData]]:
    grouped: dict[UUID, list[JournalLineData]] = defaultdict(list)
    for line in lines:
        if period.contains(line.entry_date):
            grouped[line.account_id].append(line)
    return grouped


def _section(
    accounts: Iterable[AccountInfo],
    account_type: AccountType,
    grouped: Mapping[UUID, list[JournalLineData]],
    config: ReportingConfig,
) -> tuple[StatementLine, ...]:
    """Balance every account of one type; zero balances dropped after summation."""
    items: list[StatementLine] = []
    for acct in accounts:
        if acct.account_type != account_type:
            continue
        balance = compute_account_balance(grouped.get(acct.account_id, ()), account_type)
        if not config.include_zero_balances and balance == ZERO:
            continue
        items.append(
            StatementLine(
                account_id=acct.account_id,
                account_code=acct.code,
                account_name=acct.name,
                account_type=account_type.value,
                balance=balance,
            )
        )
    return tuple(sorted(items, key=lambda x: x.account_code))


def _total(items: tuple[StatementLine, ...]) -> Decimal:
    return sum((item.balance for item in items), ZERO)


# =========================================================================
# INCOME STATEMENT
# =========================================================================


def generate_income_statement(
    accounts: Iterable[AccountInfo],
    lines: Iterable[JournalLineData],
    period: ReportPeriod = ALL_TIME,
    config: ReportingConfig | None = None,
    metadata: ReportMetadata | None = None,
) -> IncomeStatementReport:
    """
    Revenue and expense balances over ``period``.

    net_income = total_revenue - total_expenses
    """
    config = config or ReportingConfig()
    accounts = tuple(accounts)
    grouped = _lines_by_account(lines, period)

    revenues = _section(accounts, AccountType.REVENUE, grouped, config)
    expenses = _section(accounts, AccountType.EXPENSE, grouped, config)
    total_revenue = _total(revenues)
    total_expenses = _total(expenses)

    return IncomeStatementReport(
        revenues=revenues,
        expenses=expenses,
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_income=total_revenue - total_expenses,
        metadata=metadata,
    )


# =========================================================================
# BALANCE SHEET
# =========================================================================


def generate_balance_sheet(
    accounts: Iterable[AccountInfo],
    lines: Iterable[JournalLineData],
    period: ReportPeriod = ALL_TIME,
    net_income: Decimal = ZERO,
    config: ReportingConfig | None = None,
    metadata: ReportMetadata | None = None,
) -> BalanceSheetReport:
    """
    Assets, liabilities and equity over ``period``.

    Net income for the same period is added to equity (retained earnings
    effect).  An out-of-balance result is logged and returned with
    ``is_balanced=False``; it is never raised.
    """
    config = config or ReportingConfig()
    accounts = tuple(accounts)
    grouped = _lines_by_account(lines, period)

    assets = _section(accounts, AccountType.ASSET, grouped, config)
    liabilities = _section(accounts, AccountType.LIABILITY, grouped, config)
    equity = _section(accounts, AccountType.EQUITY, grouped, config)

    total_assets = _total(assets)
    total_liabilities = _total(liabilities)
    total_equity = _total(equity) + net_income
    balance = total_assets - (total_liabilities + total_equity)
    is_balanced = abs(balance) < config.balance_tolerance

    if not is_balanced:
        logger.warning(
            "balance_sheet_out_of_balance",
            extra={
                "period_start": period.start,
                "period_end": period.end,
                "total_assets": str(total_assets),
                "total_liabilities": str(total_liabilities),
                "total_equity": str(total_equity),
                "discrepancy": str(balance),
            },
        )

    return BalanceSheetReport(
        assets=assets,
        liabilities=liabilities,
        equity=equity,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        total_equity=total_equity,
        net_income=net_income,
        balance=balance,
        is_balanced=is_balanced,
        metadata=metadata,
    )


# =========================================================================
# RENDERING
# =========================================================================


def render_to_dict(
    obj: object,
    precision: int | None = None,
) -> dict | list | str | int | float | bool | None:
    """
    Convert any report dataclass to a plain dict for JSON serialization.

    Decimal and UUID become strings, dates become ISO strings, enums their
    value; nested dataclasses become dicts and tuples become lists.  With
    ``precision`` set, every Decimal is rounded half-up to that many places
    first (``ReportingConfig.display_precision`` for the finance pages).
    """
    if obj is None:
        return None
    if isinstance(obj, Decimal):
        if precision is not None:
            obj = obj.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
        return str(obj)
    if isinstance(obj, UUID):
        return str(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (list, tuple)):
        return [render_to_dict(item, precision) for item in obj]
    if isinstance(obj, dict):
        return {str(k): render_to_dict(v, precision) for k, v in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: render_to_dict(getattr(obj, f.name), precision)
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, (str, int, float, bool)):
        return obj
    return str(obj)
