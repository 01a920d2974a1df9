"""Poultry batch KPIs: division-safe ratios, broiler and layer performance."""

from decimal import Decimal

import pytest

from farm_modules.poultry import (
    BatchActivity,
    ProductionType,
    compute_batch_performance,
    egg_production_percentage,
    feed_conversion_ratio,
    mortality_percentage,
    safe_ratio,
)


class TestSafeRatio:

    @pytest.mark.parametrize(
        "numerator, denominator",
        [(1, 0), (Decimal("5"), Decimal("0")), (None, 5), (5, None)],
    )
    def test_not_computable(self, numerator, denominator):
        assert safe_ratio(numerator, denominator) is None

    def test_plain_division(self):
        assert safe_ratio(3, 4) == Decimal("0.75")

    def test_zero_numerator_is_zero(self):
        assert safe_ratio(0, 10) == Decimal("0")


class TestKpiHelpers:

    def test_feed_conversion(self):
        assert feed_conversion_ratio(Decimal("3000"), Decimal("2000")) == Decimal("1.5")

    def test_fcr_without_sales(self):
        assert feed_conversion_ratio(Decimal("3000"), Decimal("0")) is None

    def test_lay_rate(self):
        assert egg_production_percentage(450, 500) == Decimal("90")

    def test_mortality_of_empty_batch(self):
        assert mortality_percentage(0, 0) is None


class TestBatchPerformance:

    def test_broiler(self):
        perf = compute_batch_performance(
            BatchActivity(
                batch_id="BR-2025-01",
                production_type=ProductionType.BROILER,
                initial_quantity=1000,
                mortalities=50,
                feed_kg=Decimal("3000"),
                feed_cost=Decimal("150000"),
                revenue=Decimal("400000"),
                weight_sold_kg=Decimal("2000"),
            )
        )
        assert perf.mortality_percentage == Decimal("5")
        assert perf.feed_conversion_ratio == Decimal("1.5")
        assert perf.production_percentage is None
        assert perf.feed_cost_per_egg is None
        assert perf.total_costs == Decimal("150000")
        assert perf.net_profit == Decimal("250000")
        assert perf.profitability_percentage == Decimal("62.5")

    def test_layer(self):
        perf = compute_batch_performance(
            BatchActivity(
                batch_id="LY-2025-02",
                production_type="Layer",
                initial_quantity=500,
                feed_cost=Decimal("60000"),
                revenue=Decimal("90000"),
                total_eggs=12000,
                latest_eggs=450,
                latest_bird_count=500,
            )
        )
        assert perf.production_type is ProductionType.LAYER
        assert perf.production_percentage == Decimal("90")
        assert perf.feed_cost_per_egg == Decimal("5")
        assert perf.feed_conversion_ratio is None
        assert perf.mortality_percentage == Decimal("0")

    def test_new_layer_batch_has_no_rates(self):
        perf = compute_batch_performance(
            BatchActivity(
                batch_id="LY-2025-03",
                production_type=ProductionType.LAYER,
                initial_quantity=300,
            )
        )
        assert perf.production_percentage is None
        assert perf.feed_cost_per_egg is None
        assert perf.profitability_percentage is None

    def test_loss_without_revenue(self):
        perf = compute_batch_performance(
            BatchActivity(
                batch_id="BR-2025-04",
                production_type=ProductionType.BROILER,
                initial_quantity=200,
                feed_cost=Decimal("12000"),
            )
        )
        assert perf.net_profit == Decimal("-12000")
        assert perf.profitability_percentage is None
        assert perf.feed_conversion_ratio is None

    def test_unknown_production_type(self):
        with pytest.raises(ValueError):
            compute_batch_performance(
                BatchActivity(batch_id="X", production_type="Duck", initial_quantity=10)
            )
