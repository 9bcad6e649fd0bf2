"""Geocoding clients.

Resolves free-text addresses to coordinates. The OpenRouteService client
receives its API key at construction and never reads global configuration.
"""

from abc import ABC, abstractmethod

import httpx

from deliverybase.core.errors import ExternalServiceError
from deliverybase.core.logging import get_logger
from deliverybase.domain.entities import Coordinates

logger = get_logger(__name__)


class Geocoder(ABC):
    """Resolves an address string to at most one coordinate pair."""

    @abstractmethod
    async def geocode(self, query: str) -> Coordinates | None:
        """Look up an address.

        Args:
            query: Free-text address (e.g., 'Av. Siempre Viva 742, Quito, Ecuador').

        Returns:
            Coordinates of the best match, or None when nothing matched.

        Raises:
            ExternalServiceError: If the geocoding service fails.
        """
        pass


class OpenRouteServiceGeocoder(Geocoder):
    """Geocoder backed by the OpenRouteService search API."""

    SEARCH_PATH = "/geocode/search"

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.openrouteservice.org",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the geocoder.

        Args:
            api_key: OpenRouteService API key.
            base_url: Service base URL.
            timeout: Request timeout in seconds. None waits indefinitely.
            transport: Optional httpx transport, used to stub the service.
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def geocode(self, query: str) -> Coordinates | None:
        params = {"text": query, "size": 1}
        if self.api_key:
            params["api_key"] = self.api_key

        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            try:
                response = await client.get(self.SEARCH_PATH, params=params)
            except httpx.HTTPError as e:
                logger.error("Geocoding request failed", query=query, error=str(e))
                raise ExternalServiceError("geocoding", "Geocoding service unavailable") from e

        if response.status_code != 200:
            logger.error(
                "Geocoding service returned an error",
                query=query,
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise ExternalServiceError("geocoding", "Geocoding service error")

        features = response.json().get("features") or []
        if not features:
            logger.info("Geocoding returned no result", query=query)
            return None

        pair = (features[0].get("geometry") or {}).get("coordinates") or []
        try:
            return Coordinates.from_pair(pair[:2])
        except ValueError:
            logger.warning("Geocoding returned malformed coordinates", query=query, coordinates=pair)
            return None
