"""
Shared test fixtures.

Facilities are built in-memory; the geocoder is backed by an
``httpx.MockTransport`` so no test touches the network.
"""

import json
from typing import Callable

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from seed import build_catalog
from src.domain.entities import Facility, GeoPoint, ProductVariant
from src.domain.enums import FacilityType
from src.infrastructure.catalog import CatalogStore
from src.infrastructure.geocoder import NominatimGeocoder
from src.services.simulator import SimulatorService

# Lower Manhattan / Midtown reference points
CUSTOMER = GeoPoint(40.7128, -74.0060)
MIDTOWN = GeoPoint(40.7580, -73.9855)

KNOWN_ADDRESSES = {
    "350 5th Ave, New York": {
        "lat": "40.7484", "lon": "-73.9857", "display_name": "Empire State Building",
    },
    "City Hall, New York": {
        "lat": "40.7128", "lon": "-74.0060", "display_name": "New York City Hall",
    },
}


@pytest.fixture
def make_facility() -> Callable[..., Facility]:
    """Factory with sensible defaults; override any field by keyword."""

    def _make(**overrides) -> Facility:
        fields = dict(
            id="f1",
            name="Facility",
            coordinates=MIDTOWN,
            radius_meters=6000,
            type=FacilityType.WAREHOUSE,
            is_active=True,
            products=frozenset({"Product A"}),
            capacity=100,
            current_load=50,
        )
        fields.update(overrides)
        return Facility(**fields)

    return _make


@pytest.fixture
def variants() -> dict[str, ProductVariant]:
    return {
        "var-1": ProductVariant("var-1", "Product A", "Red - Size M"),
        "var-2": ProductVariant("var-2", "Product A", "Blue - Size L"),
        "var-9": ProductVariant("var-9", "Product Z", "Green - Size S"),
    }


def nominatim_handler(request: httpx.Request) -> httpx.Response:
    """Fake Nominatim ``/search`` endpoint."""
    query = request.url.params.get("q", "")
    if query == "offline":
        raise httpx.ConnectError("geocoder unreachable", request=request)
    if query == "broken":
        return httpx.Response(500, text="internal error")
    match = KNOWN_ADDRESSES.get(query)
    return httpx.Response(200, content=json.dumps([match] if match else []))


@pytest.fixture
def geocoder() -> NominatimGeocoder:
    return NominatimGeocoder(
        base_url="http://geocoder.test",
        transport=httpx.MockTransport(nominatim_handler),
    )


@pytest.fixture
def demo_catalog() -> CatalogStore:
    payload = build_catalog()
    store = CatalogStore()
    store.replace(
        facilities=[f.to_domain() for f in payload.facilities],
        products=payload.products,
        variants=[v.to_domain() for v in payload.variants],
    )
    return store


@pytest.fixture
def simulator(demo_catalog, geocoder) -> SimulatorService:
    return SimulatorService(catalog=demo_catalog, geocoder=geocoder, delay_seconds=0)


@pytest.fixture
def app(simulator):
    from src.api.app import create_app
    from src.api.middleware import limiter

    limiter.reset()
    return create_app(simulator=simulator)


@pytest_asyncio.fixture
async def client(app):
    """AsyncClient wired to an app holding the demo catalog."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
