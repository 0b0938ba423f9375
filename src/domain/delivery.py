"""
Delivery Time Estimator
=======================

Formula
-------
ETA = round(round(Distance_km x Minutes_Per_KM) x Load_Factor x Order_Type_Factor)

* **Load_Factor** = 1.5 when the facility is above 80 % load, else 1.2.
  Exactly 80 % takes the low factor.
* **Order_Type_Factor**: standard 1.0, express 0.7, same day 1.2,
  scheduled 1.5.

Both roundings are half-up, so a 2.5 minute leg becomes 3 minutes.

Complexity: O(1) per estimate.
"""

from __future__ import annotations

import math

from .enums import ORDER_TYPE_FACTORS, OrderType


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class DeliveryTimeEstimator:
    """Turns distance, facility load and order type into minutes."""

    def __init__(
        self,
        minutes_per_km: float = 3.0,
        high_load_threshold: float = 80.0,
        normal_load_factor: float = 1.2,
        high_load_factor: float = 1.5,
    ):
        self.minutes_per_km = minutes_per_km
        self.high_load_threshold = high_load_threshold
        self.normal_load_factor = normal_load_factor
        self.high_load_factor = high_load_factor

    def travel_minutes(self, distance_meters: float) -> int:
        """Unadjusted travel time for the leg."""
        return round_half_up(distance_meters / 1000 * self.minutes_per_km)

    def load_factor(self, load_percentage: float) -> float:
        if load_percentage > self.high_load_threshold:
            return self.high_load_factor
        return self.normal_load_factor

    def estimate(
        self,
        distance_meters: float,
        order_type: OrderType,
        load_percentage: float,
    ) -> int:
        base = self.travel_minutes(distance_meters)
        type_factor = ORDER_TYPE_FACTORS[OrderType(order_type)]
        return round_half_up(base * self.load_factor(load_percentage) * type_factor)
