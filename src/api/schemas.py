"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from src.domain.distance import format_distance
from src.domain.entities import (
    CoverageCheck,
    CoverageResult,
    Facility,
    GeoPoint,
    ProductVariant,
    SimulationResult,
)
from src.domain.enums import FacilityType, OrderType
from src.infrastructure.catalog import CatalogSnapshot


# ── Shared ────────────────────────────────────────────────────────────


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    def to_domain(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lng=self.lng)

    @classmethod
    def from_domain(cls, point: GeoPoint) -> "GeoPointSchema":
        return cls(lat=point.lat, lng=point.lng)


# ── Catalog ───────────────────────────────────────────────────────────


class FacilitySchema(BaseModel):
    id: str
    name: str
    type: FacilityType = FacilityType.WAREHOUSE
    address: Optional[str] = None
    coordinates: GeoPointSchema
    radius_meters: float = Field(..., ge=0)
    is_active: bool = True
    products: list[str] = []
    capacity: int = Field(..., gt=0)
    current_load: int = Field(0, ge=0)
    avg_delivery_time_minutes: Optional[float] = Field(None, ge=0)

    def to_domain(self) -> Facility:
        return Facility(
            id=self.id,
            name=self.name,
            type=self.type,
            address=self.address,
            coordinates=self.coordinates.to_domain(),
            radius_meters=self.radius_meters,
            is_active=self.is_active,
            products=frozenset(self.products),
            capacity=self.capacity,
            current_load=self.current_load,
            avg_delivery_time_minutes=self.avg_delivery_time_minutes,
        )

    @classmethod
    def from_domain(cls, facility: Facility) -> "FacilitySchema":
        return cls(
            id=facility.id,
            name=facility.name,
            type=facility.type,
            address=facility.address,
            coordinates=GeoPointSchema.from_domain(facility.coordinates),
            radius_meters=facility.radius_meters,
            is_active=facility.is_active,
            products=sorted(facility.products),
            capacity=facility.capacity,
            current_load=facility.current_load,
            avg_delivery_time_minutes=facility.avg_delivery_time_minutes,
        )


class VariantSchema(BaseModel):
    id: str
    product_name: str
    title: str
    sku: Optional[str] = None
    enabled: bool = True

    def to_domain(self) -> ProductVariant:
        return ProductVariant(
            id=self.id,
            product_name=self.product_name,
            title=self.title,
            sku=self.sku,
            enabled=self.enabled,
        )


class CatalogPayload(BaseModel):
    """Wholesale catalog snapshot; also the on-disk catalog file format."""

    facilities: list[FacilitySchema] = []
    products: list[str] = []
    variants: list[VariantSchema] = []

    @classmethod
    def from_snapshot(cls, snapshot: CatalogSnapshot) -> "CatalogPayload":
        return cls(
            facilities=[FacilitySchema.from_domain(f) for f in snapshot.facilities],
            products=list(snapshot.products),
            variants=[
                VariantSchema(
                    id=v.id,
                    product_name=v.product_name,
                    title=v.title,
                    sku=v.sku,
                    enabled=v.enabled,
                )
                for v in snapshot.variants.values()
            ],
        )


# ── Requests ──────────────────────────────────────────────────────────


class GeocodeRequest(BaseModel):
    address: str = Field("", max_length=500)


class LocationQuery(BaseModel):
    """Either an explicit point or a free-text address to geocode."""

    point: Optional[GeoPointSchema] = None
    address: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def _require_location(self):
        if self.point is None and self.address is None:
            raise ValueError("Provide either 'point' or 'address'")
        return self


class CoverageRequest(LocationQuery):
    product: Optional[str] = Field(
        None, description="Product name; 'any' / 'all' or omitted = no filter."
    )
    variant_id: Optional[str] = None
    order_type: OrderType = OrderType.STANDARD


class SimulationCreateRequest(CoverageRequest):
    quantity: int = Field(1, ge=1)


# ── Responses ─────────────────────────────────────────────────────────


class GeocodeResponse(BaseModel):
    lat: float
    lng: float
    display_name: str


class CoverageResultResponse(BaseModel):
    facility_id: str
    facility_name: str
    facility_type: FacilityType
    is_active: bool
    distance_meters: float
    distance_label: str
    is_in_range: bool
    travel_time_minutes: int
    delivery_time_minutes: int
    has_product: bool
    has_variant: bool
    load_percentage: float
    can_fulfill: bool

    @classmethod
    def from_domain(cls, result: CoverageResult) -> "CoverageResultResponse":
        facility = result.facility
        return cls(
            facility_id=facility.id,
            facility_name=facility.name,
            facility_type=facility.type,
            is_active=facility.is_active,
            distance_meters=round(result.distance_meters, 1),
            distance_label=format_distance(result.distance_meters),
            is_in_range=result.is_in_range,
            travel_time_minutes=result.travel_time_minutes,
            delivery_time_minutes=result.delivery_time_minutes,
            has_product=result.has_product,
            has_variant=result.has_variant,
            load_percentage=round(result.load_percentage, 1),
            can_fulfill=result.can_fulfill,
        )


class CoverageCheckResponse(BaseModel):
    nearest: CoverageResultResponse
    eta_minutes: int
    alternatives: list[CoverageResultResponse] = []

    @classmethod
    def from_domain(cls, check: CoverageCheck) -> "CoverageCheckResponse":
        return cls(
            nearest=CoverageResultResponse.from_domain(check.nearest),
            eta_minutes=check.eta_minutes,
            alternatives=[
                CoverageResultResponse.from_domain(r) for r in check.alternatives
            ],
        )


class CoverageResponse(BaseModel):
    point: GeoPointSchema
    results: list[CoverageResultResponse]
    nearest: Optional[CoverageCheckResponse] = None
    failure_message: Optional[str] = None


class SimulationResponse(BaseModel):
    timestamp: datetime
    address: Optional[str] = None
    point: GeoPointSchema
    product: Optional[str] = None
    variant_id: Optional[str] = None
    order_type: OrderType
    quantity: int
    success: bool
    options_found: int = 0
    best_option: Optional[CoverageResultResponse] = None
    alternatives: list[CoverageResultResponse] = []
    all_results: list[CoverageResultResponse] = []
    failure_message: Optional[str] = None

    @classmethod
    def from_domain(cls, result: SimulationResult) -> "SimulationResponse":
        req = result.request
        return cls(
            timestamp=result.timestamp,
            address=result.address,
            point=GeoPointSchema.from_domain(req.point),
            product=req.product_filter,
            variant_id=req.variant_filter,
            order_type=req.order_type,
            quantity=req.quantity,
            success=result.success,
            options_found=result.options_found,
            best_option=(
                CoverageResultResponse.from_domain(result.best_option)
                if result.best_option
                else None
            ),
            alternatives=[
                CoverageResultResponse.from_domain(r) for r in result.alternatives
            ],
            all_results=[
                CoverageResultResponse.from_domain(r) for r in result.all_results
            ],
            failure_message=result.failure_message,
        )


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
