"""
Reporting Module.

General ledger, income statement and balance sheet derived from the
journal. Pure statement functions live in ``statements``;
``ReportingService`` loads accounts and lines through the kernel selectors.
"""

from farm_modules.reporting.config import ReportingConfig
from farm_modules.reporting.models import (
    BalanceSheetReport,
    GeneralLedgerReport,
    IncomeStatementReport,
    ReportMetadata,
    ReportType,
    StatementLine,
)
from farm_modules.reporting.service import ReportingService
from farm_modules.reporting.statements import (
    ALL_TIME,
    AccountInfo,
    ReportPeriod,
    generate_balance_sheet,
    generate_income_statement,
    render_to_dict,
)

__all__ = [
    "ALL_TIME",
    "AccountInfo",
    "BalanceSheetReport",
    "GeneralLedgerReport",
    "IncomeStatementReport",
    "ReportMetadata",
    "ReportPeriod",
    "ReportType",
    "ReportingConfig",
    "ReportingService",
    "StatementLine",
    "generate_balance_sheet",
    "generate_income_statement",
    "render_to_dict",
]
