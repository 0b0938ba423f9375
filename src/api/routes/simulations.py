"""
Simulation endpoints
====================

POST /api/v1/simulations         -- run a delivery simulation
GET  /api/v1/simulations/history -- most recent runs, newest first
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.dependencies import get_busy_guard, get_simulator
from src.api.middleware import DEFAULT_LIMIT, limiter
from src.api.schemas import ErrorResponse, SimulationCreateRequest, SimulationResponse
from src.infrastructure.geocoder import AddressNotFound, GeocodingError
from src.infrastructure.locks import BusyGuard, SimulationInProgress
from src.services.simulator import SimulatorService

router = APIRouter(prefix="/simulations", tags=["simulations"])


@router.post(
    "",
    response_model=SimulationResponse,
    summary="Simulate a customer order",
    description=(
        "Finds the fastest facility able to fulfil the order plus up to two "
        "alternatives.  An order no facility can serve is still a 200 with "
        "``success=false`` and a ``failure_message``."
    ),
    responses={
        404: {"model": ErrorResponse, "description": "Address not found."},
        409: {"model": ErrorResponse, "description": "Simulation already running."},
        502: {"model": ErrorResponse, "description": "Geocoding service failed."},
    },
)
@limiter.limit(DEFAULT_LIMIT)
async def create_simulation(
    request: Request,
    body: SimulationCreateRequest,
    simulator: SimulatorService = Depends(get_simulator),
    guard: BusyGuard = Depends(get_busy_guard),
):
    try:
        async with guard:
            result = await simulator.simulate(
                point=body.point.to_domain() if body.point else None,
                address=body.address,
                product=body.product,
                variant_id=body.variant_id,
                order_type=body.order_type,
                quantity=body.quantity,
            )
    except SimulationInProgress as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except AddressNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except GeocodingError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    return SimulationResponse.from_domain(result)


@router.get(
    "/history",
    response_model=list[SimulationResponse],
    summary="Recent simulations, newest first",
)
@limiter.limit(DEFAULT_LIMIT)
async def simulation_history(
    request: Request,
    simulator: SimulatorService = Depends(get_simulator),
):
    return [SimulationResponse.from_domain(r) for r in simulator.history.list()]
