"""Routing clients.

Submits an ordered list of ``[longitude, latitude]`` pairs to a routing
service and returns its route description unchanged.
"""

from abc import ABC, abstractmethod
from typing import Any

import httpx

from deliverybase.core.errors import ExternalServiceError
from deliverybase.core.logging import get_logger

logger = get_logger(__name__)


class Router(ABC):
    """Computes a driving route through ordered coordinates."""

    @abstractmethod
    async def route(self, coordinates: list[list[float]]) -> dict[str, Any]:
        """Compute a route.

        Args:
            coordinates: Ordered ``[longitude, latitude]`` pairs.

        Returns:
            The routing service's route description (geometry, distance, duration).

        Raises:
            ExternalServiceError: If the routing service fails.
        """
        pass


class OpenRouteServiceRouter(Router):
    """Router backed by the OpenRouteService directions API."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.openrouteservice.org",
        profile: str = "driving-car",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the router.

        Args:
            api_key: OpenRouteService API key, sent in the Authorization header.
            base_url: Service base URL.
            profile: Routing profile (e.g., 'driving-car').
            timeout: Request timeout in seconds. None waits indefinitely.
            transport: Optional httpx transport, used to stub the service.
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.profile = profile
        self.timeout = timeout
        self.transport = transport

    @property
    def path(self) -> str:
        return f"/v2/directions/{self.profile}/geojson"

    async def route(self, coordinates: list[list[float]]) -> dict[str, Any]:
        headers = {"Accept": "application/json, application/geo+json"}
        if self.api_key:
            headers["Authorization"] = self.api_key

        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            try:
                response = await client.post(
                    self.path,
                    json={"coordinates": coordinates},
                    headers=headers,
                )
            except httpx.HTTPError as e:
                logger.error("Routing request failed", points=len(coordinates), error=str(e))
                raise ExternalServiceError("routing", "Routing service unavailable") from e

        if not response.is_success:
            logger.error(
                "Routing service returned an error",
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise ExternalServiceError("routing", "Routing service error")

        return response.json()
