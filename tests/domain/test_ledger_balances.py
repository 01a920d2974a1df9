"""
Ledger balance engine: sign conventions, opening balances, running ledgers
and the balanced-entry check.  Pure; no database.
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from farm_kernel.domain.ledger import (
    JournalLineData,
    build_ledger,
    check_entry_balanced,
    compute_account_balance,
    compute_opening_balance,
    signed_contribution,
)
from farm_kernel.exceptions import (
    MissingAccountError,
    MixedSideLineError,
    NegativeAmountError,
    OneSidedEntryError,
    PostingError,
    UnbalancedEntryError,
    UnknownAccountTypeError,
)
from farm_kernel.models.account import AccountType

ACCOUNT = uuid4()


def _line(debit: str = "0", credit: str = "0", day: date = date(2025, 1, 10), desc: str | None = None):
    return JournalLineData(
        account_id=ACCOUNT,
        debit_amount=Decimal(debit),
        credit_amount=Decimal(credit),
        entry_date=day,
        description=desc,
    )


class TestSignedContribution:

    @pytest.mark.parametrize("account_type", [AccountType.ASSET, AccountType.EXPENSE])
    def test_debit_normal(self, account_type):
        assert signed_contribution(_line(debit="500"), account_type) == Decimal("500")
        assert signed_contribution(_line(credit="200"), account_type) == Decimal("-200")

    @pytest.mark.parametrize(
        "account_type",
        [AccountType.LIABILITY, AccountType.EQUITY, AccountType.REVENUE],
    )
    def test_credit_normal(self, account_type):
        assert signed_contribution(_line(debit="500"), account_type) == Decimal("-500")
        assert signed_contribution(_line(credit="200"), account_type) == Decimal("200")

    def test_stored_string_type_accepted(self):
        assert signed_contribution(_line(debit="10"), "expense") == Decimal("10")

    def test_unknown_type_raises(self):
        with pytest.raises(UnknownAccountTypeError) as exc_info:
            signed_contribution(_line(debit="10"), "Contra")
        assert exc_info.value.code == "UNKNOWN_ACCOUNT_TYPE"


class TestComputeAccountBalance:

    def test_asset_debit_500(self):
        assert compute_account_balance([_line(debit="500")], "Asset") == Decimal("500")

    def test_revenue_debit_500_is_negative(self):
        assert compute_account_balance([_line(debit="500")], "Revenue") == Decimal("-500")

    def test_empty_is_zero(self):
        assert compute_account_balance([], AccountType.LIABILITY) == Decimal("0")

    def test_mixed_lines(self):
        lines = [_line(debit="1000"), _line(credit="250.50"), _line(debit="0.50")]
        assert compute_account_balance(lines, AccountType.ASSET) == Decimal("750.00")

    def test_input_not_mutated(self):
        lines = [_line(debit="10"), _line(credit="3")]
        snapshot = list(lines)
        compute_account_balance(lines, AccountType.ASSET)
        assert lines == snapshot


class TestComputeOpeningBalance:

    def test_only_lines_strictly_before_cutoff(self):
        lines = [
            _line(debit="100", day=date(2025, 1, 1)),
            _line(debit="50", day=date(2025, 1, 31)),
            _line(debit="25", day=date(2025, 2, 1)),
        ]
        opening = compute_opening_balance(lines, AccountType.ASSET, date(2025, 2, 1))
        assert opening == Decimal("150")

    def test_cutoff_before_everything(self):
        lines = [_line(credit="100", day=date(2025, 3, 1))]
        assert compute_opening_balance(lines, "Liability", date(2025, 1, 1)) == Decimal("0")


class TestBuildLedger:

    def test_running_balance_accumulates(self):
        lines = [
            _line(debit="1000", desc="Opening float"),
            _line(credit="300", desc="Feed purchase"),
            _line(debit="50", desc="Egg sale"),
        ]
        result = build_ledger(lines, AccountType.ASSET, Decimal("200"))

        assert [row.balance for row in result.entries] == [
            Decimal("1200"),
            Decimal("900"),
            Decimal("950"),
        ]
        assert [row.description for row in result.entries] == [
            "Opening float",
            "Feed purchase",
            "Egg sale",
        ]
        assert result.opening_balance == Decimal("200")
        assert result.closing_balance == Decimal("950")

    def test_credit_normal_running_balance(self):
        lines = [_line(credit="1000"), _line(debit="100")]
        result = build_ledger(lines, AccountType.REVENUE)
        assert [row.balance for row in result.entries] == [Decimal("1000"), Decimal("900")]

    def test_empty_closing_equals_opening(self):
        result = build_ledger([], AccountType.EQUITY, Decimal("42"))
        assert result.entries == ()
        assert result.closing_balance == Decimal("42")

    def test_input_order_preserved(self):
        lines = [
            _line(debit="5", day=date(2025, 1, 2), desc="later date first"),
            _line(debit="7", day=date(2025, 1, 1), desc="earlier date second"),
        ]
        result = build_ledger(lines, AccountType.ASSET)
        assert [row.description for row in result.entries] == [
            "later date first",
            "earlier date second",
        ]

    def test_row_carries_amounts_and_reference(self):
        line = JournalLineData(
            account_id=ACCOUNT,
            debit_amount=Decimal("12"),
            credit_amount=Decimal("0"),
            entry_date=date(2025, 5, 5),
            description="Vaccines",
            entry_reference="JE-20250505-0001",
        )
        row = build_ledger([line], AccountType.EXPENSE).entries[0]
        assert row.debit == Decimal("12")
        assert row.credit == Decimal("0")
        assert row.entry_date == date(2025, 5, 5)
        assert row.entry_reference == "JE-20250505-0001"


class TestCheckEntryBalanced:

    def test_balanced_entry(self):
        totals = check_entry_balanced([_line(debit="400"), _line(credit="400")])
        assert totals.total_debit == Decimal("400")
        assert totals.total_credit == Decimal("400")

    def test_within_tolerance(self):
        check_entry_balanced([_line(debit="100.00"), _line(credit="99.995")])

    def test_unbalanced_raises(self):
        with pytest.raises(UnbalancedEntryError) as exc_info:
            check_entry_balanced([_line(debit="400"), _line(credit="390")])
        assert exc_info.value.debits == Decimal("400")
        assert exc_info.value.credits == Decimal("390")

    def test_line_with_both_sides_raises(self):
        with pytest.raises(MixedSideLineError) as exc_info:
            check_entry_balanced([_line(debit="10", credit="10"), _line(credit="0")])
        assert exc_info.value.line_index == 0

    def test_one_sided_entry_raises(self):
        with pytest.raises(OneSidedEntryError):
            check_entry_balanced([_line(debit="10"), _line(debit="5")])

    def test_empty_entry_is_one_sided(self):
        with pytest.raises(OneSidedEntryError):
            check_entry_balanced([])

    def test_negative_amounts_rejected(self):
        with pytest.raises(NegativeAmountError) as exc_info:
            check_entry_balanced([_line(debit="-100"), _line(credit="-100")])
        assert exc_info.value.line_index == 0
        assert exc_info.value.amount == Decimal("-100")
        assert exc_info.value.code == "NEGATIVE_AMOUNT"

    def test_negative_credit_on_later_line(self):
        with pytest.raises(NegativeAmountError) as exc_info:
            check_entry_balanced([_line(debit="50"), _line(credit="-50")])
        assert exc_info.value.line_index == 1

    def test_line_without_account_rejected(self):
        lines = [
            _line(debit="250"),
            JournalLineData(
                account_id=None,
                debit_amount=Decimal("0"),
                credit_amount=Decimal("250"),
                entry_date=date(2025, 1, 10),
            ),
        ]
        with pytest.raises(MissingAccountError) as exc_info:
            check_entry_balanced(lines)
        assert exc_info.value.line_index == 1

    def test_form_errors_are_posting_errors(self):
        for bad in (NegativeAmountError(0, Decimal("-1")), MissingAccountError(0)):
            assert isinstance(bad, PostingError)
