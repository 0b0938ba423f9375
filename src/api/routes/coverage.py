"""
Coverage endpoints
==================

POST /api/v1/geocode  -- resolve a free-text address (first match only)
POST /api/v1/coverage -- evaluate every facility against a point
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.dependencies import get_simulator
from src.api.middleware import DEFAULT_LIMIT, GEOCODE_LIMIT, limiter
from src.api.schemas import (
    CoverageCheckResponse,
    CoverageRequest,
    CoverageResponse,
    CoverageResultResponse,
    ErrorResponse,
    GeocodeRequest,
    GeocodeResponse,
    GeoPointSchema,
)
from src.domain.entities import SimulationRequest
from src.domain.simulation import failure_message
from src.infrastructure.geocoder import AddressNotFound, GeocodingError
from src.services.simulator import SimulatorService

router = APIRouter(tags=["coverage"])

GEOCODE_ERRORS = {
    404: {"model": ErrorResponse, "description": "Address not found."},
    502: {"model": ErrorResponse, "description": "Geocoding service failed."},
}


@router.post(
    "/geocode",
    response_model=GeocodeResponse,
    summary="Geocode an address",
    responses=GEOCODE_ERRORS,
)
@limiter.limit(GEOCODE_LIMIT)
async def geocode(
    request: Request,
    body: GeocodeRequest,
    simulator: SimulatorService = Depends(get_simulator),
):
    try:
        match = await simulator.geocode(body.address)
    except AddressNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except GeocodingError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    return GeocodeResponse(
        lat=match.point.lat, lng=match.point.lng, display_name=match.display_name
    )


@router.post(
    "/coverage",
    response_model=CoverageResponse,
    summary="Analyse delivery coverage for a location",
    description=(
        "Returns one entry per facility in catalog order, plus the nearest "
        "facility able to fulfil the request (ETA includes preparation)."
    ),
    responses=GEOCODE_ERRORS,
)
@limiter.limit(DEFAULT_LIMIT)
async def analyze_coverage(
    request: Request,
    body: CoverageRequest,
    simulator: SimulatorService = Depends(get_simulator),
):
    try:
        point = await simulator.resolve_point(
            body.point.to_domain() if body.point else None, body.address
        )
    except AddressNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except GeocodingError as exc:
        raise HTTPException(status_code=502, detail=str(exc))

    query = SimulationRequest(
        point=point,
        product=body.product,
        variant_id=body.variant_id,
        order_type=body.order_type,
    )
    results, check = simulator.analyze_coverage(query)
    return CoverageResponse(
        point=GeoPointSchema.from_domain(point),
        results=[CoverageResultResponse.from_domain(r) for r in results],
        nearest=CoverageCheckResponse.from_domain(check) if check else None,
        failure_message=(
            None
            if check
            else failure_message(query, simulator.catalog.snapshot.variants)
        ),
    )
