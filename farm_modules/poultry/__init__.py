"""Poultry Module: batch performance KPIs."""

from farm_modules.poultry.performance import (
    BatchActivity,
    BatchPerformance,
    ProductionType,
    compute_batch_performance,
    egg_production_percentage,
    feed_conversion_ratio,
    feed_cost_per_egg,
    mortality_percentage,
    profitability_percentage,
    safe_ratio,
)

__all__ = [
    "BatchActivity",
    "BatchPerformance",
    "ProductionType",
    "compute_batch_performance",
    "egg_production_percentage",
    "feed_conversion_ratio",
    "feed_cost_per_egg",
    "mortality_percentage",
    "profitability_percentage",
    "safe_ratio",
]
