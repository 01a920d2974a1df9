"""
ReportingService over a real session: general ledger, income statement and
balance sheet derived from posted journal entries.
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from farm_kernel.exceptions import (
    AccountNotFoundError,
    InvalidReportPeriodError,
    UnknownAccountTypeError,
)
from farm_kernel.models.account import ChartOfAccount
from farm_modules.reporting.config import ReportingConfig
from farm_modules.reporting.models import ReportType
from farm_modules.reporting.service import ReportingService
from farm_modules.reporting.statements import ReportPeriod


@pytest.fixture
def books(create_account, post_entry):
    """
    A dairy's first two months.

    Jan 01  Capital     Bank Dr 10,000  / Capital Cr 10,000
    Jan 10  Milk sale   Bank Dr  1,000  / Milk    Cr  1,000
    Jan 20  Feed        Feed Dr    400  / Bank    Cr    400
    Feb 05  Milk sale   Bank Dr  1,500  / Milk    Cr  1,500
    Feb 05  Vet visit   Vet  Dr    200  / Bank    Cr    200
    """
    accts = {
        "bank": create_account("1000", "Bank", "Asset"),
        "capital": create_account("3000", "Owner Capital", "Equity"),
        "milk": create_account("4000", "Milk Sales", "Revenue"),
        "feed": create_account("5000", "Feed", "Expense"),
        "vet": create_account("5100", "Veterinary", "Expense"),
    }
    post_entry(date(2025, 1, 1), [(accts["bank"], "10000", "0"), (accts["capital"], "0", "10000")], "Capital injection")
    post_entry(date(2025, 1, 10), [(accts["bank"], "1000", "0"), (accts["milk"], "0", "1000")], "Milk to co-op")
    post_entry(date(2025, 1, 20), [(accts["feed"], "400", "0"), (accts["bank"], "0", "400")], "Dairy meal")
    post_entry(date(2025, 2, 5), [(accts["bank"], "1500", "0"), (accts["milk"], "0", "1500")], "Milk to co-op")
    post_entry(date(2025, 2, 5), [(accts["vet"], "200", "0"), (accts["bank"], "0", "200")], "Vet visit")
    return accts


class TestGeneralLedger:

    def test_full_history(self, reporting_service, books):
        report = reporting_service.general_ledger(books["bank"].id)

        assert report.account_code == "1000"
        assert report.account_type == "Asset"
        assert report.opening_balance == Decimal("0")
        assert [row.balance for row in report.entries] == [
            Decimal("10000"),
            Decimal("11000"),
            Decimal("10600"),
            Decimal("12100"),
            Decimal("11900"),
        ]
        assert report.closing_balance == Decimal("11900")

    def test_window_uses_opening_balance(self, reporting_service, books):
        report = reporting_service.general_ledger(
            books["bank"].id, date_from=date(2025, 2, 1), date_to=date(2025, 2, 28),
        )
        assert report.opening_balance == Decimal("10600")
        assert [row.description for row in report.entries] == ["Milk to co-op", "Vet visit"]
        assert report.closing_balance == Decimal("11900")
        assert report.metadata.report_type is ReportType.GENERAL_LEDGER
        assert report.metadata.period_start == date(2025, 2, 1)

    def test_same_day_entries_in_posting_order(self, reporting_service, books):
        report = reporting_service.general_ledger(books["bank"].id, date_from=date(2025, 2, 5))
        assert [(row.debit, row.credit) for row in report.entries] == [
            (Decimal("1500"), Decimal("0")),
            (Decimal("0"), Decimal("200")),
        ]

    def test_credit_normal_account(self, reporting_service, books):
        report = reporting_service.general_ledger(books["milk"].id)
        assert report.closing_balance == Decimal("2500")

    def test_unknown_account(self, reporting_service, books):
        missing = uuid4()
        with pytest.raises(AccountNotFoundError) as exc_info:
            reporting_service.general_ledger(missing)
        assert exc_info.value.account_id == str(missing)

    def test_invalid_window_rejected_before_query(self, reporting_service):
        with pytest.raises(InvalidReportPeriodError):
            reporting_service.general_ledger(
                uuid4(), date_from=date(2025, 3, 1), date_to=date(2025, 2, 1),
            )

    def test_unknown_stored_account_type(self, session, reporting_service):
        acct = ChartOfAccount(account_code="9000", account_name="Suspense", account_type="Contra")
        session.add(acct)
        session.flush()
        with pytest.raises(UnknownAccountTypeError):
            reporting_service.general_ledger(acct.id)


class TestIncomeStatement:

    def test_january(self, reporting_service, books):
        report = reporting_service.income_statement(
            ReportPeriod(date(2025, 1, 1), date(2025, 1, 31)),
        )
        assert report.total_revenue == Decimal("1000")
        assert report.total_expenses == Decimal("400")
        assert report.net_income == Decimal("600")
        assert [line.account_name for line in report.expenses] == ["Feed"]

    def test_all_time(self, reporting_service, books):
        report = reporting_service.income_statement()
        assert report.net_income == Decimal("1900")
        assert report.metadata.currency == "KES"
        assert report.metadata.generated_at == "2025-01-15T09:00:00+00:00"

    def test_inactive_accounts_excluded_by_default(self, session, reporting_service, books):
        books["vet"].is_active = False
        session.flush()
        report = reporting_service.income_statement()
        assert [line.account_name for line in report.expenses] == ["Feed"]

    def test_inactive_accounts_included_when_configured(
        self, session, deterministic_clock, books,
    ):
        books["vet"].is_active = False
        session.flush()
        service = ReportingService(
            session, deterministic_clock, ReportingConfig(include_inactive=True),
        )
        report = service.income_statement()
        assert [line.account_name for line in report.expenses] == ["Feed", "Veterinary"]


class TestBalanceSheet:

    def test_balances_all_time(self, reporting_service, books):
        report = reporting_service.balance_sheet()
        assert report.total_assets == Decimal("11900")
        assert report.total_liabilities == Decimal("0")
        assert report.total_equity == Decimal("11900")
        assert report.net_income == Decimal("1900")
        assert report.is_balanced is True

    def test_balances_for_a_window(self, reporting_service, books):
        report = reporting_service.balance_sheet(
            ReportPeriod(date(2025, 2, 1), date(2025, 2, 28)),
        )
        assert report.total_assets == Decimal("1300")
        assert report.net_income == Decimal("1300")
        assert report.is_balanced is True
        assert report.metadata.report_type is ReportType.BALANCE_SHEET

    def test_empty_books(self, reporting_service):
        report = reporting_service.balance_sheet()
        assert report.assets == ()
        assert report.is_balanced is True


class TestRender:

    def test_uses_display_precision(self, reporting_service, books):
        data = reporting_service.render(reporting_service.income_statement())
        assert data["net_income"] == "1900.00"
        assert data["metadata"]["currency"] == "KES"

    def test_custom_precision(self, session, deterministic_clock, books):
        service = ReportingService(
            session, deterministic_clock, ReportingConfig(display_precision=0),
        )
        data = service.render(service.general_ledger(books["bank"].id))
        assert data["closing_balance"] == "11900"
        assert [row["balance"] for row in data["entries"]][:2] == ["10000", "11000"]
