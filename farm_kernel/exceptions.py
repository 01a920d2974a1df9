"""
Typed exception hierarchy for the farm kernel.

Every error carries a class-level ``code`` (machine-readable, API-safe) and
its context as instance attributes, so callers catch by type and report by
field instead of parsing messages.

    FarmKernelError (base)
    |
    +-- AccessError
    |   +-- PermissionStoreError
    |
    +-- AccountError
    |   +-- AccountNotFoundError
    |   +-- UnknownAccountTypeError
    |
    +-- PostingError
    |   +-- UnbalancedEntryError
    |   +-- MixedSideLineError
    |   +-- OneSidedEntryError
    |   +-- NegativeAmountError
    |   +-- MissingAccountError
    |
    +-- ReportError
    |   +-- InvalidReportPeriodError
    |
    +-- ConfigError
        +-- AccessPolicyError

Category  | Code                      | When Raised
----------|---------------------------|------------------------------------------
Access    | PERMISSION_STORE_ERROR    | Dynamic permission lookup failed
          |                           | (caught by PermissionResolver, never
          |                           | surfaced to guards)
----------|---------------------------|------------------------------------------
Account   | ACCOUNT_NOT_FOUND         | Account ID doesn't exist
          | UNKNOWN_ACCOUNT_TYPE      | account_type outside the five types
----------|---------------------------|------------------------------------------
Posting   | UNBALANCED_ENTRY          | Debits != Credits beyond tolerance
          | MIXED_SIDE_LINE           | A line carries both debit and credit
          | ONE_SIDED_ENTRY           | Entry lacks a debit or a credit
          | NEGATIVE_AMOUNT           | A line carries a negative amount
          | MISSING_ACCOUNT           | A line has no account selected
----------|---------------------------|------------------------------------------
Report    | INVALID_REPORT_PERIOD     | Period end precedes period start
----------|---------------------------|------------------------------------------
Config    | ACCESS_POLICY_INVALID     | Access policy YAML fails validation

An out-of-balance balance sheet is NOT an exception: it is reported on the
statement (``is_balanced=False``) and logged.
"""

from decimal import Decimal


class FarmKernelError(Exception):
    """
    Base exception for all farm kernel errors.

    All subclasses must have a ``code`` class attribute.
    """

    code: str = "FARM_KERNEL_ERROR"


# Access-related exceptions


class AccessError(FarmKernelError):
    """Base exception for access-control errors."""

    code: str = "ACCESS_ERROR"


class PermissionStoreError(AccessError):
    """The dynamic permission store could not answer a lookup."""

    code: str = "PERMISSION_STORE_ERROR"

    def __init__(self, role_name: str, module_path: str | None, reason: str):
        self.role_name = role_name
        self.module_path = module_path
        self.reason = reason
        super().__init__(
            f"Permission lookup failed for role '{role_name}'"
            f"{f' on {module_path}' if module_path else ''}: {reason}"
        )


# Account-related exceptions


class AccountError(FarmKernelError):
    """Base exception for chart-of-accounts errors."""

    code: str = "ACCOUNT_ERROR"


class AccountNotFoundError(AccountError):
    """Account with given ID was not found."""

    code: str = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")


class UnknownAccountTypeError(AccountError):
    """Account type is not one of Asset/Liability/Equity/Revenue/Expense."""

    code: str = "UNKNOWN_ACCOUNT_TYPE"

    def __init__(self, account_type: str):
        self.account_type = account_type
        super().__init__(f"Unknown account type: {account_type!r}")


# Posting-related exceptions


class PostingError(FarmKernelError):
    """Base exception for journal entry validation errors."""

    code: str = "POSTING_ERROR"


class UnbalancedEntryError(PostingError):
    """Journal entry debits do not equal credits."""

    code: str = "UNBALANCED_ENTRY"

    def __init__(self, debits: Decimal, credits: Decimal):
        self.debits = debits
        self.credits = credits
        super().__init__(
            f"Entry is unbalanced: debits={debits}, credits={credits}"
        )


class MixedSideLineError(PostingError):
    """A journal line carries both a debit and a credit amount."""

    code: str = "MIXED_SIDE_LINE"

    def __init__(self, line_index: int):
        self.line_index = line_index
        super().__init__(
            f"Line {line_index} has both debit and credit; use one side only"
        )


class OneSidedEntryError(PostingError):
    """Journal entry has no debit or no credit."""

    code: str = "ONE_SIDED_ENTRY"

    def __init__(self, debits: Decimal, credits: Decimal):
        self.debits = debits
        self.credits = credits
        super().__init__("Entry must have at least one debit and one credit")


class NegativeAmountError(PostingError):
    """A journal line carries a negative debit or credit amount."""

    code: str = "NEGATIVE_AMOUNT"

    def __init__(self, line_index: int, amount: Decimal):
        self.line_index = line_index
        self.amount = amount
        super().__init__(f"Line {line_index} has a negative amount: {amount}")


class MissingAccountError(PostingError):
    """A journal line has no account selected."""

    code: str = "MISSING_ACCOUNT"

    def __init__(self, line_index: int):
        self.line_index = line_index
        super().__init__(f"Line {line_index} has no account")


# Report-related exceptions


class ReportError(FarmKernelError):
    """Base exception for report generation errors."""

    code: str = "REPORT_ERROR"


class InvalidReportPeriodError(ReportError):
    """Report period end precedes its start."""

    code: str = "INVALID_REPORT_PERIOD"

    def __init__(self, start: object, end: object):
        self.start = start
        self.end = end
        super().__init__(f"Report period end {end} precedes start {start}")


# Config-related exceptions


class ConfigError(FarmKernelError):
    """Base exception for configuration errors."""

    code: str = "CONFIG_ERROR"


class AccessPolicyError(ConfigError):
    """Access policy definition failed validation."""

    code: str = "ACCESS_POLICY_INVALID"

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid access policy in {source}: {reason}")
