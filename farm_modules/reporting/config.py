"""
Reporting Configuration Schema.

Report formatting options and the balance-sheet tolerance.  Accounts are
classified by their ``account_type``, not by code prefix.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Self

from farm_kernel.logging_config import get_logger

logger = get_logger("modules.reporting.config")


@dataclass
class ReportingConfig:
    """
    Configuration schema for the reporting module.

    Controls formatting and report generation.
    """

    # Currency shown on reports
    currency: str = "KES"

    # |assets - (liabilities + equity)| below this counts as balanced
    balance_tolerance: Decimal = Decimal("0.01")

    # Rounding precision for display
    display_precision: int = 2

    # Whether to include accounts with zero balance in reports
    include_zero_balances: bool = False

    # Whether to include inactive accounts
    include_inactive: bool = False

    def __post_init__(self):
        if self.display_precision < 0:
            raise ValueError("display_precision cannot be negative")
        if len(self.currency) != 3:
            raise ValueError("currency must be a 3-letter ISO 4217 code")
        self.balance_tolerance = Decimal(str(self.balance_tolerance))
        if self.balance_tolerance <= 0:
            raise ValueError("balance_tolerance must be positive")

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create config from dictionary."""
        logger.info(
            "reporting_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)
