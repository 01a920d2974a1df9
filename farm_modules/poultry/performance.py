"""
Poultry batch performance KPIs (``farm_modules.poultry.performance``).

Responsibility
--------------
Pure KPI arithmetic over a batch's aggregated activity: mortality, feed
conversion, lay rate, feed cost per egg and profitability.

Architecture position
---------------------
**Modules layer** -- ZERO I/O.  Callers aggregate stock movements, feed
issuances, sales and production rows into a ``BatchActivity`` first.

Invariants enforced
-------------------
* Every ratio goes through ``safe_ratio``: a zero or missing denominator
  yields ``None`` ("not computable"), never ``0`` and never an exception.
* Percentages are ratios times 100; nothing is rounded here.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

ZERO = Decimal("0")
HUNDRED = Decimal("100")

Number = Decimal | int


class ProductionType(str, Enum):
    BROILER = "Broiler"
    LAYER = "Layer"


def _dec(value: Number) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(value)


def safe_ratio(numerator: Number | None, denominator: Number | None) -> Decimal | None:
    """``numerator / denominator`` or None when either is absent or the denominator is zero."""
    if numerator is None or denominator is None:
        return None
    denominator = _dec(denominator)
    if denominator == ZERO:
        return None
    return _dec(numerator) / denominator


def _percentage(numerator: Number | None, denominator: Number | None) -> Decimal | None:
    ratio = safe_ratio(numerator, denominator)
    return None if ratio is None else ratio * HUNDRED


def feed_conversion_ratio(feed_kg: Number, weight_kg: Number) -> Decimal | None:
    """kg of feed per kg of live weight sold."""
    return safe_ratio(feed_kg, weight_kg)


def egg_production_percentage(eggs: int, bird_count: int) -> Decimal | None:
    """Eggs collected per bird in the flock, as a percentage (lay rate)."""
    return _percentage(eggs, bird_count)


def mortality_percentage(mortalities: int, initial_quantity: int) -> Decimal | None:
    return _percentage(mortalities, initial_quantity)


def feed_cost_per_egg(feed_cost: Number, total_eggs: int) -> Decimal | None:
    return safe_ratio(feed_cost, total_eggs)


def profitability_percentage(net_profit: Number, revenue: Number) -> Decimal | None:
    """Net profit as a percentage of revenue."""
    return _percentage(net_profit, revenue)


@dataclass(frozen=True)
class BatchActivity:
    """
    Aggregated activity for one poultry batch.

    ``latest_eggs`` / ``latest_bird_count`` come from the most recent
    production record and drive the lay rate; ``total_eggs`` drives feed
    cost per egg.
    """

    batch_id: str
    production_type: ProductionType
    initial_quantity: int
    mortalities: int = 0
    feed_kg: Decimal = ZERO
    feed_cost: Decimal = ZERO
    revenue: Decimal = ZERO
    weight_sold_kg: Decimal = ZERO
    total_eggs: int = 0
    latest_eggs: int | None = None
    latest_bird_count: int | None = None


@dataclass(frozen=True)
class BatchPerformance:
    batch_id: str
    production_type: ProductionType
    mortality_percentage: Decimal | None
    feed_conversion_ratio: Decimal | None
    production_percentage: Decimal | None
    feed_cost_per_egg: Decimal | None
    total_revenue: Decimal
    total_costs: Decimal
    net_profit: Decimal
    profitability_percentage: Decimal | None


def compute_batch_performance(activity: BatchActivity) -> BatchPerformance:
    """
    KPIs for one batch.

    Broilers get a feed conversion ratio; layers get lay rate and feed cost
    per egg.  Feed is the only cost tracked per batch.
    """
    production_type = ProductionType(activity.production_type)
    total_costs = activity.feed_cost
    net_profit = activity.revenue - total_costs

    fcr = None
    lay_rate = None
    cost_per_egg = None
    if production_type is ProductionType.BROILER:
        fcr = feed_conversion_ratio(activity.feed_kg, activity.weight_sold_kg)
    else:
        if activity.latest_eggs is not None:
            lay_rate = egg_production_percentage(
                activity.latest_eggs, activity.latest_bird_count or 0,
            )
        cost_per_egg = feed_cost_per_egg(activity.feed_cost, activity.total_eggs)

    return BatchPerformance(
        batch_id=activity.batch_id,
        production_type=production_type,
        mortality_percentage=mortality_percentage(
            activity.mortalities, activity.initial_quantity,
        ),
        feed_conversion_ratio=fcr,
        production_percentage=lay_rate,
        feed_cost_per_egg=cost_per_egg,
        total_revenue=activity.revenue,
        total_costs=total_costs,
        net_profit=net_profit,
        profitability_percentage=profitability_percentage(net_profit, activity.revenue),
    )
