"""
FastAPI application factory.

* Registers routes for coverage, simulations and admin.
* Loads the catalog snapshot from ``settings.catalog_file`` on startup.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
import logging

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.api.middleware import limiter
from src.api.routes import admin, coverage, simulations
from src.api.schemas import CatalogPayload
from src.config import settings
from src.infrastructure.catalog import CatalogStore
from src.infrastructure.geocoder import NominatimGeocoder
from src.infrastructure.locks import BusyGuard
from src.services.simulator import SimulatorService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def load_catalog_file(path: Path, catalog: CatalogStore) -> None:
    """Replace *catalog* with the JSON snapshot stored at *path*."""
    payload = CatalogPayload.model_validate_json(path.read_text(encoding="utf-8"))
    catalog.replace(
        facilities=[f.to_domain() for f in payload.facilities],
        products=payload.products,
        variants=[v.to_domain() for v in payload.variants],
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the configured catalog file on startup."""
    if settings.catalog_file is not None:
        load_catalog_file(settings.catalog_file, app.state.simulator.catalog)
        logger.info("Catalog loaded from %s", settings.catalog_file)
    else:
        logger.warning(
            "No catalog file configured; PUT /api/v1/admin/catalog before simulating"
        )
    yield


def create_app(simulator: Optional[SimulatorService] = None) -> FastAPI:
    app = FastAPI(
        title="Delivery Coverage & Simulation API",
        description=(
            "Checks which facilities can deliver to a customer location and "
            "simulates orders to find the fastest facility, accounting for "
            "service radius, stock, facility load and order urgency."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.simulator = simulator or SimulatorService(
        catalog=CatalogStore(), geocoder=NominatimGeocoder()
    )
    app.state.busy_guard = BusyGuard()

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Routers
    app.include_router(coverage.router, prefix="/api/v1")
    app.include_router(simulations.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
