"""
Async client for a Nominatim-compatible geocoding service.

Only the first match is used.  Two failure modes are kept apart so the
caller can react differently:

* ``AddressNotFound`` -- blank input or zero matches (nothing to retry).
* ``GeocodingError``  -- the service could not be reached or answered
  with something unusable (retrying may help).

No automatic retries are made.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from src.config import settings
from src.domain.entities import GeoPoint

logger = logging.getLogger(__name__)


class AddressNotFound(Exception):
    """The address was empty or matched nothing."""


class GeocodingError(Exception):
    """The geocoding service failed or returned an unusable payload."""


@dataclass(frozen=True)
class GeocodeResult:
    point: GeoPoint
    display_name: str


class NominatimGeocoder:
    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.geocoder_url).rstrip("/")
        self.user_agent = user_agent or settings.geocoder_user_agent
        self.timeout = (
            timeout if timeout is not None else settings.geocoder_timeout_seconds
        )
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        )

    async def geocode(self, address: str) -> GeocodeResult:
        query = address.strip() if address else ""
        if not query:
            raise AddressNotFound("Please enter an address to search")

        params = {"format": "json", "q": query, "limit": 1}
        try:
            async with self._client() as client:
                response = await client.get("/search", params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            logger.warning("Geocoding request for %r failed: %s", query, exc)
            raise GeocodingError("Failed to geocode address") from exc
        except ValueError as exc:
            logger.warning("Geocoder returned invalid JSON for %r", query)
            raise GeocodingError("Failed to geocode address") from exc

        if not isinstance(data, list):
            raise GeocodingError("Unexpected geocoder response")
        if not data:
            raise AddressNotFound("Could not find the specified address")

        return _parse_match(data[0])


def _parse_match(match: dict) -> GeocodeResult:
    # Nominatim answers with string coordinates under "lat" / "lon"
    try:
        lat = float(match["lat"])
        lng = float(match["lon"] if "lon" in match else match["lng"])
    except (KeyError, TypeError, ValueError) as exc:
        raise GeocodingError("Geocoder match has no usable coordinates") from exc
    return GeocodeResult(
        point=GeoPoint(lat=lat, lng=lng),
        display_name=str(match.get("display_name", "")),
    )
