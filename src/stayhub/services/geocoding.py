"""Address geocoding through the Google Geocoding API."""

from collections.abc import Mapping
from typing import Protocol

import httpx

from stayhub.config import Settings, settings
from stayhub.exceptions import GeocodeFailedError
from stayhub.logging import get_logger

logger = get_logger(__name__)

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

ADDRESS_FIELDS = ("address", "city", "state", "country", "zip_code")


class Geocoder(Protocol):
    async def resolve(self, location: Mapping[str, object]) -> tuple[float, float]: ...


def format_address(location: Mapping[str, object]) -> str:
    """Join the non-empty address parts in postal order."""
    return ", ".join(str(location[field]) for field in ADDRESS_FIELDS if location.get(field))


class GoogleGeocoder:
    def __init__(self, config: Settings) -> None:
        self._api_key = config.google_maps_api_key
        self._timeout = config.geocoding_timeout

    async def resolve(self, location: Mapping[str, object]) -> tuple[float, float]:
        """Return (latitude, longitude) of the first match."""
        address = format_address(location)
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(
                    GEOCODE_URL, params={"address": address, "key": self._api_key}
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as exc:
            logger.warning("geocode_request_failed", address=address, error=str(exc))
            raise GeocodeFailedError() from exc

        results = payload.get("results") or []
        if not results:
            if payload.get("error_message"):
                raise GeocodeFailedError(f"Geocoding failed: {payload['error_message']}")
            raise GeocodeFailedError("No results found for the provided address")

        point = results[0]["geometry"]["location"]
        return float(point["lat"]), float(point["lng"])


def build_geocoder(config: Settings = settings) -> Geocoder | None:
    """Return the configured geocoder, or None while geocoding is switched off."""
    if not config.geocoding_enabled:
        return None
    return GoogleGeocoder(config)
