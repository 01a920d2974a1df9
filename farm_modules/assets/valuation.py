"""
Fixed-asset book value.

Accumulated depreciation is entered by the operator; no depreciation
schedule is computed here.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class DepreciationMethod(str, Enum):
    STRAIGHT_LINE = "Straight-line"
    REDUCING_BALANCE = "Reducing balance"


def net_book_value(purchase_cost: Decimal, accumulated_depreciation: Decimal = Decimal("0")) -> Decimal:
    """purchase_cost - accumulated_depreciation."""
    if purchase_cost < 0:
        raise ValueError("purchase_cost cannot be negative")
    if accumulated_depreciation < 0:
        raise ValueError("accumulated_depreciation cannot be negative")
    return purchase_cost - accumulated_depreciation


@dataclass(frozen=True)
class AssetValuation:
    asset_name: str
    purchase_cost: Decimal
    accumulated_depreciation: Decimal = Decimal("0")
    depreciation_method: DepreciationMethod = DepreciationMethod.STRAIGHT_LINE
    depreciation_rate_percent: Decimal | None = None

    @property
    def net_book_value(self) -> Decimal:
        return net_book_value(self.purchase_cost, self.accumulated_depreciation)
