"""
Reporting Module Service (``farm_modules.reporting.service``).

Responsibility
--------------
Orchestrates the finance pages' reports -- general ledger with running
balance, income statement, balance sheet -- by bridging ``LedgerSelector``
to the pure functions in ``statements.py`` and ``farm_kernel.domain.ledger``.
This is a **read-only** service.

Architecture position
---------------------
**Modules layer**.  Constructor: ``session`` + ``clock`` + ``config``.

Invariants enforced
-------------------
* Read-only -- no mutations to the journal.
* Balances are derived from journal lines at query time; none are stored.
* Lines replay in ``entry_date``, entry ``created_at``, ``line_seq`` order.

Failure modes
-------------
* ``end < start``  -> ``InvalidReportPeriodError`` before any query.
* Unknown account  -> ``AccountNotFoundError``.
* Stored account_type outside the five types  -> ``UnknownAccountTypeError``.
* Selector query failure  -> exception propagates.
"""

from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from farm_kernel.domain.clock import Clock, SystemClock
from farm_kernel.domain.ledger import ZERO, build_ledger, compute_account_balance
from farm_kernel.exceptions import AccountNotFoundError
from farm_kernel.logging_config import get_logger
from farm_kernel.models.account import AccountType, ChartOfAccount
from farm_kernel.selectors.ledger_selector import LedgerSelector
from farm_modules.reporting.config import ReportingConfig
from farm_modules.reporting.models import (
    BalanceSheetReport,
    GeneralLedgerReport,
    IncomeStatementReport,
    ReportMetadata,
    ReportType,
)
from farm_modules.reporting.statements import (
    ALL_TIME,
    AccountInfo,
    ReportPeriod,
    generate_balance_sheet,
    generate_income_statement,
    render_to_dict,
)

logger = get_logger("modules.reporting.service")


class ReportingService:
    """
    Financial report generation service.

    Contract
    --------
    * Every public method returns a typed report DTO.
    * All methods are read-only.

    Guarantees
    ----------
    * Financial logic lives in the pure layer; this class only loads data.
    * Clock is injectable for deterministic report timestamps.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: ReportingConfig | None = None,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._config = config or ReportingConfig.with_defaults()
        self._ledger = LedgerSelector(session)

    # =========================================================================
    # Internal helpers
    # =========================================================================

    @staticmethod
    def _to_info(acct: ChartOfAccount) -> AccountInfo:
        return AccountInfo(
            account_id=acct.id,
            code=acct.account_code,
            name=acct.account_name,
            account_type=AccountType.parse(acct.account_type),
            parent_id=acct.parent_account_id,
            is_active=acct.is_active,
        )

    def _load_accounts(self) -> list[AccountInfo]:
        query = select(ChartOfAccount).order_by(ChartOfAccount.account_code)
        if not self._config.include_inactive:
            query = query.where(ChartOfAccount.is_active.is_(True))

        accounts = [self._to_info(acct) for acct in self._session.scalars(query)]
        logger.debug(
            "accounts_loaded_for_reporting",
            extra={"account_count": len(accounts)},
        )
        return accounts

    def _get_account(self, account_id: UUID) -> AccountInfo:
        acct = self._session.get(ChartOfAccount, account_id)
        if acct is None:
            raise AccountNotFoundError(str(account_id))
        return self._to_info(acct)

    def _build_metadata(
        self,
        report_type: ReportType,
        period: ReportPeriod,
    ) -> ReportMetadata:
        return ReportMetadata(
            report_type=report_type,
            currency=self._config.currency,
            generated_at=self._clock.now().isoformat(),
            period_start=period.start,
            period_end=period.end,
        )

    # =========================================================================
    # Public API
    # =========================================================================

    def general_ledger(
        self,
        account_id: UUID,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> GeneralLedgerReport:
        """
        Running-balance ledger for one account.

        The opening balance reduces every line dated before ``date_from``
        (zero when the window is open at the start).
        """
        period = ReportPeriod(date_from, date_to)
        account = self._get_account(account_id)

        opening = ZERO
        if date_from is not None:
            opening = compute_account_balance(
                self._ledger.lines(account_id=account_id, before=date_from),
                account.account_type,
            )

        window = self._ledger.lines(
            account_id=account_id, date_from=date_from, date_to=date_to,
        )
        result = build_ledger(window, account.account_type, opening)

        logger.info(
            "general_ledger_generated",
            extra={
                "account_id": account_id,
                "period_start": date_from,
                "period_end": date_to,
                "line_count": len(result.entries),
                "closing_balance": str(result.closing_balance),
            },
        )
        return GeneralLedgerReport(
            account_id=account.account_id,
            account_code=account.code,
            account_name=account.name,
            account_type=account.account_type.value,
            opening_balance=result.opening_balance,
            entries=result.entries,
            closing_balance=result.closing_balance,
            metadata=self._build_metadata(ReportType.GENERAL_LEDGER, period),
        )

    def income_statement(self, period: ReportPeriod = ALL_TIME) -> IncomeStatementReport:
        """Revenue and expenses for ``period``."""
        accounts = self._load_accounts()
        lines = self._ledger.lines(date_from=period.start, date_to=period.end)

        report = generate_income_statement(
            accounts,
            lines,
            period,
            self._config,
            self._build_metadata(ReportType.INCOME_STATEMENT, period),
        )

        logger.info(
            "income_statement_generated",
            extra={
                "period_start": period.start,
                "period_end": period.end,
                "total_revenue": str(report.total_revenue),
                "total_expenses": str(report.total_expenses),
                "net_income": str(report.net_income),
            },
        )
        return report

    def balance_sheet(self, period: ReportPeriod = ALL_TIME) -> BalanceSheetReport:
        """
        Balance sheet over the same window as the income statement.

        Net income for ``period`` is folded into equity.
        """
        accounts = self._load_accounts()
        lines = self._ledger.lines(date_from=period.start, date_to=period.end)

        income = generate_income_statement(accounts, lines, period, self._config)
        report = generate_balance_sheet(
            accounts,
            lines,
            period,
            income.net_income,
            self._config,
            self._build_metadata(ReportType.BALANCE_SHEET, period),
        )

        logger.info(
            "balance_sheet_generated",
            extra={
                "period_start": period.start,
                "period_end": period.end,
                "total_assets": str(report.total_assets),
                "total_liabilities": str(report.total_liabilities),
                "total_equity": str(report.total_equity),
                "is_balanced": report.is_balanced,
            },
        )
        return report

    def render(
        self,
        report: GeneralLedgerReport | IncomeStatementReport | BalanceSheetReport,
    ) -> dict:
        """Report as a JSON-ready dict, money rounded to ``display_precision``."""
        return render_to_dict(report, self._config.display_precision)
