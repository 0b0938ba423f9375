"""
Delivery Simulation Engine
==========================

1. Run coverage analysis for every facility.
2. Keep the results that can fulfil the request.
3. Stable-sort them by adjusted delivery time.  Equal ETAs keep the
   caller's facility order; there is no secondary key.
4. Best option = first, alternatives = the next two at most.

An unserviceable request is a normal result (``success=False`` with a
message naming the most specific constraint), never an exception.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from .coverage import CoverageAnalyzer
from .entities import (
    Facility,
    ProductVariant,
    SimulationRequest,
    SimulationResult,
)

MAX_ALTERNATIVES = 2


class SimulationEngine:
    """High-level API used by the simulator service and the API layer."""

    def __init__(self, analyzer: Optional[CoverageAnalyzer] = None):
        self.analyzer = analyzer or CoverageAnalyzer()

    def simulate(
        self,
        request: SimulationRequest,
        facilities: Sequence[Facility],
        variants: Optional[Mapping[str, ProductVariant]] = None,
        address: Optional[str] = None,
    ) -> SimulationResult:
        variants = variants or {}
        all_results = self.analyzer.analyze(
            request.point, facilities, request, variants
        )
        # sorted() is stable
        fulfillable = sorted(
            (r for r in all_results if r.can_fulfill),
            key=lambda r: r.delivery_time_minutes,
        )

        if not fulfillable:
            return SimulationResult(
                request=request,
                success=False,
                all_results=tuple(all_results),
                failure_message=failure_message(request, variants),
                address=address,
            )

        return SimulationResult(
            request=request,
            success=True,
            all_results=tuple(all_results),
            best_option=fulfillable[0],
            alternatives=tuple(fulfillable[1 : 1 + MAX_ALTERNATIVES]),
            address=address,
        )


def failure_message(
    request: SimulationRequest,
    variants: Mapping[str, ProductVariant],
) -> str:
    variant_id = request.variant_filter
    if variant_id is not None:
        variant = variants.get(variant_id)
        title = variant.title if variant else variant_id
        return f'No active facilities can deliver variant "{title}" to this location'
    if request.product_filter is not None:
        return (
            f'No active facilities can deliver "{request.product_filter}" '
            "to this location"
        )
    return "No active facilities can deliver to this location"
