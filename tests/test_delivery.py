"""Unit tests for the delivery time estimator."""

import pytest

from src.domain.delivery import DeliveryTimeEstimator, round_half_up
from src.domain.enums import OrderType


class TestRounding:
    def test_halves_round_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(19.2) == 19
        assert round_half_up(21.6) == 22


class TestDeliveryTimeEstimator:
    def setup_method(self):
        self.estimator = DeliveryTimeEstimator()

    def test_travel_minutes_three_per_km(self):
        assert self.estimator.travel_minutes(10_000) == 30
        assert self.estimator.travel_minutes(5_314) == 16  # 15.94 -> 16

    def test_standard_normal_load(self):
        # 16 min base x 1.2 load x 1.0 type = 19.2
        assert self.estimator.estimate(5_314, OrderType.STANDARD, 50) == 19

    def test_order_type_factors(self):
        d, load = 10_000, 50  # 30 min base, 36 after load
        assert self.estimator.estimate(d, OrderType.STANDARD, load) == 36
        assert self.estimator.estimate(d, OrderType.EXPRESS, load) == 25  # 25.2
        assert self.estimator.estimate(d, OrderType.SAME_DAY, load) == 43  # 43.2
        assert self.estimator.estimate(d, OrderType.SCHEDULED, load) == 54

    def test_eighty_percent_takes_low_factor(self):
        assert self.estimator.estimate(10_000, OrderType.STANDARD, 80) == 36
        assert self.estimator.estimate(10_000, OrderType.STANDARD, 80.01) == 45

    def test_overload_uses_high_factor(self):
        assert self.estimator.estimate(10_000, OrderType.STANDARD, 150) == 45

    def test_zero_distance_is_zero_minutes(self):
        assert self.estimator.estimate(0, OrderType.SCHEDULED, 99) == 0

    def test_deterministic(self):
        first = self.estimator.estimate(7_321.5, OrderType.SAME_DAY, 64.2)
        for _ in range(10):
            assert self.estimator.estimate(7_321.5, OrderType.SAME_DAY, 64.2) == first

    @pytest.mark.parametrize("load", [0, 50, 80, 95, 200])
    def test_express_faster_than_standard(self, load):
        for distance in range(1_000, 50_001, 750):
            express = self.estimator.estimate(distance, OrderType.EXPRESS, load)
            standard = self.estimator.estimate(distance, OrderType.STANDARD, load)
            assert express < standard

    def test_accepts_plain_string_order_type(self):
        assert self.estimator.estimate(10_000, "express", 50) == 25

    def test_custom_model(self):
        estimator = DeliveryTimeEstimator(
            minutes_per_km=2.0, high_load_threshold=50, normal_load_factor=1.0,
            high_load_factor=2.0,
        )
        assert estimator.estimate(10_000, OrderType.STANDARD, 50) == 20
        assert estimator.estimate(10_000, OrderType.STANDARD, 51) == 40
