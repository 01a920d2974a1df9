"""Assets Module: fixed-asset book value."""

from farm_modules.assets.valuation import AssetValuation, DepreciationMethod, net_book_value

__all__ = ["AssetValuation", "DepreciationMethod", "net_book_value"]
