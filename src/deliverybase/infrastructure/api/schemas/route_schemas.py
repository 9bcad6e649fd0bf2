"""Route generation API schemas."""

from typing import Any

from pydantic import BaseModel, Field


class RouteStop(BaseModel):
    """An order to visit."""

    order_id: int | None = Field(None, description="Order being delivered")
    coordinates: list[float] = Field(
        ..., min_length=2, max_length=2, description="[longitude, latitude]"
    )


class GenerateRouteRequest(BaseModel):
    """Request body for route generation."""

    orders: list[RouteStop] = Field(..., min_length=1)
    start_address_id: int | None = Field(None, description="Address to start from")


class GenerateRouteResponse(BaseModel):
    """Route description from the routing service."""

    route: dict[str, Any]
    start_coordinates: list[float] | None = None
