"""
Domain entities for coverage analysis and delivery simulation.

Facilities, variants and requests are value objects supplied by the
caller; the domain never mutates them.  ``CoverageResult`` and
``SimulationResult`` are derived fresh for every request and are never
persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .enums import NO_FILTER_SENTINELS, FacilityType, OrderType


class InvalidFacility(ValueError):
    """Raised when a facility carries impossible capacity / radius / load."""


class InvalidRequest(ValueError):
    """Raised when a simulation request is malformed."""


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class ProductVariant:
    id: str
    product_name: str
    title: str
    sku: Optional[str] = None
    # Catalog passthrough; availability is decided by product_name only
    enabled: bool = True


@dataclass(frozen=True)
class Facility:
    id: str
    name: str
    coordinates: GeoPoint
    radius_meters: float
    type: FacilityType = FacilityType.WAREHOUSE
    is_active: bool = True
    products: frozenset[str] = frozenset()
    capacity: int = 1
    current_load: int = 0
    avg_delivery_time_minutes: Optional[float] = None
    address: Optional[str] = None

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise InvalidFacility(
                f"Facility {self.id}: capacity must be positive, got {self.capacity}"
            )
        if self.radius_meters < 0:
            raise InvalidFacility(
                f"Facility {self.id}: radius cannot be negative"
            )
        if self.current_load < 0:
            raise InvalidFacility(
                f"Facility {self.id}: current load cannot be negative"
            )
        # Accept any iterable of names but store an immutable set
        object.__setattr__(self, "products", frozenset(self.products))

    @property
    def load_percentage(self) -> float:
        """Current load as a share of capacity; above 100 means overloaded."""
        return 100 * self.current_load / self.capacity


@dataclass(frozen=True)
class SimulationRequest:
    point: GeoPoint
    product: Optional[str] = None
    variant_id: Optional[str] = None
    order_type: OrderType = OrderType.STANDARD
    quantity: int = 1

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise InvalidRequest(f"quantity must be at least 1, got {self.quantity}")
        try:
            order_type = OrderType(self.order_type)
        except ValueError as exc:
            raise InvalidRequest(f"unknown order type: {self.order_type!r}") from exc
        object.__setattr__(self, "order_type", order_type)

    @property
    def product_filter(self) -> Optional[str]:
        """The requested product name, or ``None`` when any product will do."""
        return _filter_value(self.product)

    @property
    def variant_filter(self) -> Optional[str]:
        return _filter_value(self.variant_id)


def _filter_value(value: Optional[str]) -> Optional[str]:
    if value is None or value.strip().lower() in NO_FILTER_SENTINELS:
        return None
    return value


# ── Derived results ───────────────────────────────────────────────────


@dataclass(frozen=True)
class CoverageResult:
    facility: Facility
    distance_meters: float
    is_in_range: bool
    travel_time_minutes: int
    delivery_time_minutes: int
    has_product: bool
    has_variant: bool
    load_percentage: float
    can_fulfill: bool


@dataclass(frozen=True)
class CoverageCheck:
    """Nearest fulfilling facility with a preparation-inclusive ETA."""

    nearest: CoverageResult
    eta_minutes: int
    alternatives: tuple[CoverageResult, ...] = ()


@dataclass(frozen=True)
class SimulationResult:
    request: SimulationRequest
    success: bool
    all_results: tuple[CoverageResult, ...]
    best_option: Optional[CoverageResult] = None
    alternatives: tuple[CoverageResult, ...] = ()
    failure_message: Optional[str] = None
    address: Optional[str] = None
    timestamp: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @property
    def options_found(self) -> int:
        return sum(1 for r in self.all_results if r.can_fulfill)
