from typing import Optional

import httpx

from app.core import config
from app.core.errors import AddressNotFound, ServiceUnavailable
from app.features.places.entities import GeocodedAddress
from app.utils import get_logger

log = get_logger(__name__)


class GeocodingClient:
    """Resolves free-text addresses with the Google Geocoding API. No retries, the caller decides."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else config.GOOGLE_API_KEY
        self.url = url or config.GEOCODING_URL
        self.timeout = timeout if timeout is not None else config.GEOCODING_TIMEOUT
        self._transport = transport

    async def resolve(self, address: str) -> GeocodedAddress:
        """Return the canonical address and coordinates for the given text, raising AddressNotFound or ServiceUnavailable."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.url, params=dict(address=address, key=self.api_key))
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            log.info("Geocoding request failed: %s", e)
            raise ServiceUnavailable() from e

        status = data.get("status")
        results = data.get("results") or []
        if status == "ZERO_RESULTS" or (status == "OK" and len(results) == 0):
            raise AddressNotFound()
        if status != "OK":
            log.info("Geocoding failed with status %s: %s", status, data.get("error_message"))
            raise ServiceUnavailable()

        result = results[0]
        try:
            location = result["geometry"]["location"]
            lat, lng = location["lat"], location["lng"]
        except (KeyError, TypeError) as e:
            log.info("Unexpected geocoding response: %s", result)
            raise ServiceUnavailable() from e
        return GeocodedAddress(address=result.get("formatted_address") or address, lat=str(lat), lng=str(lng))
