"""Unit tests for the OpenRouteService geocoder."""

import httpx
import pytest

from deliverybase.core.errors import ExternalServiceError
from deliverybase.domain.entities import Coordinates
from deliverybase.infrastructure.services import OpenRouteServiceGeocoder


def _geocoder(handler) -> OpenRouteServiceGeocoder:
    return OpenRouteServiceGeocoder(
        api_key="test-key",
        base_url="https://ors.test",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_geocode_first_feature():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            json={
                "features": [
                    {"geometry": {"type": "Point", "coordinates": [-78.4912, -0.1865]}},
                    {"geometry": {"type": "Point", "coordinates": [10.0, 10.0]}},
                ]
            },
        )

    result = await _geocoder(handler).geocode("Av. Amazonas, Quito, Ecuador")

    assert result == Coordinates(-78.4912, -0.1865)
    assert requests[0].url.path == "/geocode/search"
    assert requests[0].url.params["text"] == "Av. Amazonas, Quito, Ecuador"
    assert requests[0].url.params["size"] == "1"
    assert requests[0].url.params["api_key"] == "test-key"


@pytest.mark.asyncio
async def test_geocode_no_match():
    result = await _geocoder(lambda request: httpx.Response(200, json={"features": []})).geocode(
        "Nowhere"
    )

    assert result is None


@pytest.mark.asyncio
async def test_geocode_malformed_coordinates():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"features": [{"geometry": {"coordinates": [1.0]}}]})

    assert await _geocoder(handler).geocode("Somewhere") is None


@pytest.mark.asyncio
async def test_geocode_service_error():
    with pytest.raises(ExternalServiceError) as exc_info:
        await _geocoder(lambda request: httpx.Response(403, text="forbidden")).geocode("x")

    assert exc_info.value.service == "geocoding"


@pytest.mark.asyncio
async def test_geocode_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ExternalServiceError):
        await _geocoder(handler).geocode("x")
