"""
Simulator Service
=================

Glue between the HTTP layer and the pure domain.

Per simulation
--------------
1. Resolve the customer location: use the given point, or geocode the
   free-text address (first match only).
2. Optionally sleep ``simulation_delay_seconds`` to emulate a slow
   backend.
3. Run the simulation engine against the current catalog snapshot.
4. Record the result in the bounded history.

Geocoding failures propagate (``AddressNotFound`` / ``GeocodingError``)
before anything is simulated or recorded.  Concurrent submissions are
not serialised here; the caller holds the busy guard.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from src.config import settings
from src.domain.coverage import CoverageAnalyzer
from src.domain.delivery import DeliveryTimeEstimator
from src.domain.distance import format_distance
from src.domain.entities import (
    CoverageCheck,
    CoverageResult,
    GeoPoint,
    SimulationRequest,
    SimulationResult,
)
from src.domain.enums import ORDER_TYPE_LABELS, OrderType
from src.domain.history import SimulationHistory
from src.domain.simulation import SimulationEngine
from src.infrastructure.catalog import CatalogStore
from src.infrastructure.geocoder import GeocodeResult, NominatimGeocoder

logger = logging.getLogger(__name__)


def build_engine() -> SimulationEngine:
    """Engine wired with the delivery model from settings."""
    estimator = DeliveryTimeEstimator(
        minutes_per_km=settings.minutes_per_km,
        high_load_threshold=settings.high_load_threshold,
        normal_load_factor=settings.normal_load_factor,
        high_load_factor=settings.high_load_factor,
    )
    analyzer = CoverageAnalyzer(estimator, settings.preparation_minutes)
    return SimulationEngine(analyzer)


class SimulatorService:
    def __init__(
        self,
        catalog: CatalogStore,
        geocoder: NominatimGeocoder,
        engine: Optional[SimulationEngine] = None,
        history: Optional[SimulationHistory] = None,
        delay_seconds: Optional[float] = None,
    ):
        self.catalog = catalog
        self.geocoder = geocoder
        self.engine = engine or build_engine()
        self.history = (
            history if history is not None else SimulationHistory(settings.history_size)
        )
        self.delay_seconds = (
            delay_seconds
            if delay_seconds is not None
            else settings.simulation_delay_seconds
        )

    async def geocode(self, address: str) -> GeocodeResult:
        return await self.geocoder.geocode(address)

    async def resolve_point(
        self, point: Optional[GeoPoint], address: Optional[str]
    ) -> GeoPoint:
        if point is not None:
            return point
        match = await self.geocoder.geocode(address or "")
        logger.info("Resolved %r to %s", address, match.point)
        return match.point

    def analyze_coverage(
        self, request: SimulationRequest
    ) -> tuple[list[CoverageResult], Optional[CoverageCheck]]:
        snapshot = self.catalog.snapshot
        analyzer = self.engine.analyzer
        results = analyzer.analyze(
            request.point, snapshot.facilities, request, snapshot.variants
        )
        return results, analyzer.rank_nearest(results)

    async def simulate(
        self,
        *,
        point: Optional[GeoPoint] = None,
        address: Optional[str] = None,
        product: Optional[str] = None,
        variant_id: Optional[str] = None,
        order_type: OrderType = OrderType.STANDARD,
        quantity: int = 1,
    ) -> SimulationResult:
        resolved = await self.resolve_point(point, address)
        request = SimulationRequest(
            point=resolved,
            product=product,
            variant_id=variant_id,
            order_type=order_type,
            quantity=quantity,
        )

        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        snapshot = self.catalog.snapshot
        result = self.engine.simulate(
            request,
            snapshot.facilities,
            snapshot.variants,
            address=address if point is None else None,
        )
        self.history.record(result)

        if result.success:
            best = result.best_option
            logger.info(
                "%s simulation found %d option(s); best %s at %s, %d min",
                ORDER_TYPE_LABELS[request.order_type],
                result.options_found,
                best.facility.name,
                format_distance(best.distance_meters),
                best.delivery_time_minutes,
            )
        else:
            logger.info(
                "%s simulation found no option: %s",
                ORDER_TYPE_LABELS[request.order_type],
                result.failure_message,
            )
        return result
