"""Async client for the Google Geocoding and Places web services."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

import httpx

from opportunity_finder.core.config import ConfigError

logger = logging.getLogger(__name__)

_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
_BASE_URL = "https://maps.googleapis.com/maps/api/place"

DETAIL_FIELDS = (
    "place_id",
    "name",
    "formatted_address",
    "geometry",
    "website",
    "url",
    "formatted_phone_number",
    "types",
    "business_status",
    "photos",
)


class GooglePlacesError(RuntimeError):
    """Raised when the Places API returns a non-successful response."""

    def __init__(self, status: Optional[str], message: Optional[str] = None) -> None:
        self.status = status
        self.error_message = message
        super().__init__(f"{status}: {message}" if message else str(status))


class GeocodeError(GooglePlacesError):
    """Raised when a location string cannot be resolved to coordinates."""

    def __init__(self, location: str, status: Optional[str], message: Optional[str] = None) -> None:
        self.location = location
        super().__init__(status, message)

    def __str__(self) -> str:
        detail = f"{self.status}: {self.error_message}" if self.error_message else str(self.status)
        return f"Geocoding failed for {self.location!r}: {detail}"


class GooglePlacesClient:
    """Thin async wrapper around Geocoding, Nearby Search and Place Details.

    Every call returns the decoded payload or raises ``GooglePlacesError``;
    the ``status`` field of the response is the only failure signal the
    services give besides HTTP errors.
    """

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not api_key:
            raise ConfigError("GOOGLE_API_KEY is required")
        self.api_key = api_key
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def __aenter__(self) -> "GooglePlacesClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._client.get(url, params={**params, "key": self.api_key})
        response.raise_for_status()
        return response.json()

    async def geocode(self, address: str) -> Tuple[float, float]:
        """Resolve a free-form address to ``(lat, lng)``."""
        payload = await self._get(_GEOCODE_URL, {"address": address})
        status = payload.get("status")
        results = payload.get("results") or []
        if status != "OK" or not results:
            logger.error("geocode failed: status=%s, error_message=%s", status, payload.get("error_message"))
            raise GeocodeError(address, status, payload.get("error_message"))
        location = results[0]["geometry"]["location"]
        return float(location["lat"]), float(location["lng"])

    async def nearby_search(
        self,
        location: Tuple[float, float],
        radius: float,
        *,
        type_: Optional[str] = None,
        keyword: Optional[str] = None,
        pagetoken: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Call Nearby Search; ``ZERO_RESULTS`` is returned like any other page."""
        if pagetoken:
            # Google ignores every other parameter once a page token is supplied.
            params: Dict[str, Any] = {"pagetoken": pagetoken}
        else:
            lat, lng = location
            params = {"location": f"{lat:.7f},{lng:.7f}", "radius": radius}
            if type_:
                params["type"] = type_
            if keyword:
                params["keyword"] = keyword

        payload = await self._get(f"{_BASE_URL}/nearbysearch/json", params)
        status = payload.get("status")
        if status not in {"OK", "ZERO_RESULTS"}:
            logger.error("nearby_search failed: status=%s, error_message=%s", status, payload.get("error_message"))
            raise GooglePlacesError(status, payload.get("error_message"))
        return payload

    async def place_details(self, place_id: str, fields: Iterable[str] = DETAIL_FIELDS) -> Dict[str, Any]:
        params = {"place_id": place_id, "fields": ",".join(fields)}
        payload = await self._get(f"{_BASE_URL}/details/json", params)
        status = payload.get("status")
        if status != "OK" or not payload.get("result"):
            logger.error("place_details failed: status=%s, error_message=%s", status, payload.get("error_message"))
            raise GooglePlacesError(status, payload.get("error_message"))
        return payload["result"]
