"""
Coverage Analysis
=================

For a point and a request, evaluate every facility independently:

1. Great-circle distance from the point to the facility.
2. **In range** when that distance is within the service radius
   (boundary inclusive).
3. **Has product** when no product filter is set or the facility lists it.
4. **Has variant** when no variant filter is set, or the variant's parent
   product is listed by the facility.  Facility stock is tracked per
   product name only, so variant availability is inferred from it.
5. Load percentage and the load / order-type adjusted ETA.
6. **Can fulfill** = active and in range and has product and has variant.

Output preserves the input facility order.

Complexity: O(F) for F facilities.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from .delivery import DeliveryTimeEstimator
from .distance import distance_m
from .entities import (
    CoverageCheck,
    CoverageResult,
    Facility,
    GeoPoint,
    ProductVariant,
    SimulationRequest,
)

PREPARATION_MINUTES = 10


class CoverageAnalyzer:
    def __init__(
        self,
        estimator: Optional[DeliveryTimeEstimator] = None,
        preparation_minutes: int = PREPARATION_MINUTES,
    ):
        self.estimator = estimator or DeliveryTimeEstimator()
        self.preparation_minutes = preparation_minutes

    def analyze(
        self,
        point: GeoPoint,
        facilities: Sequence[Facility],
        request: SimulationRequest,
        variants: Optional[Mapping[str, ProductVariant]] = None,
    ) -> list[CoverageResult]:
        return [
            self.evaluate(point, facility, request, variants or {})
            for facility in facilities
        ]

    def evaluate(
        self,
        point: GeoPoint,
        facility: Facility,
        request: SimulationRequest,
        variants: Mapping[str, ProductVariant],
    ) -> CoverageResult:
        distance = distance_m(point, facility.coordinates)
        is_in_range = distance <= facility.radius_meters

        product = request.product_filter
        has_product = product is None or product in facility.products
        has_variant = _stocks_variant(facility, request.variant_filter, variants)

        load = facility.load_percentage
        return CoverageResult(
            facility=facility,
            distance_meters=distance,
            is_in_range=is_in_range,
            travel_time_minutes=self.estimator.travel_minutes(distance),
            delivery_time_minutes=self.estimator.estimate(
                distance, request.order_type, load
            ),
            has_product=has_product,
            has_variant=has_variant,
            load_percentage=load,
            can_fulfill=(
                facility.is_active and is_in_range and has_product and has_variant
            ),
        )

    def nearest(
        self,
        point: GeoPoint,
        facilities: Sequence[Facility],
        request: SimulationRequest,
        variants: Optional[Mapping[str, ProductVariant]] = None,
    ) -> Optional[CoverageCheck]:
        """
        Quick coverage check: the closest fulfilling facility, with an ETA
        of raw travel time plus preparation, and up to two runners-up.

        Ranking is by distance (stable), not by the adjusted ETA that
        :class:`SimulationEngine` uses.
        """
        return self.rank_nearest(self.analyze(point, facilities, request, variants))

    def rank_nearest(
        self, results: Sequence[CoverageResult]
    ) -> Optional[CoverageCheck]:
        """Quick coverage check over results that were already analysed."""
        candidates = sorted(
            (r for r in results if r.can_fulfill),
            key=lambda r: r.distance_meters,
        )
        if not candidates:
            return None
        best = candidates[0]
        return CoverageCheck(
            nearest=best,
            eta_minutes=best.travel_time_minutes + self.preparation_minutes,
            alternatives=tuple(candidates[1:3]),
        )


def _stocks_variant(
    facility: Facility,
    variant_id: Optional[str],
    variants: Mapping[str, ProductVariant],
) -> bool:
    if variant_id is None:
        return True
    variant = variants.get(variant_id)
    # Unknown variants never match
    return variant is not None and variant.product_name in facility.products
