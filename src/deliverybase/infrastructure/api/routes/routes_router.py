"""Route generation API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from deliverybase.core.errors import BadRequestError
from deliverybase.domain.entities import Actions, Coordinates
from deliverybase.domain.services import RouteService
from deliverybase.infrastructure.api.dependencies import CurrentUser, RouterDep, require_action
from deliverybase.infrastructure.api.schemas import (
    ErrorResponse,
    GenerateRouteRequest,
    GenerateRouteResponse,
)
from deliverybase.infrastructure.persistence.database import get_db_session

router = APIRouter()


@router.post(
    "",
    response_model=GenerateRouteResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Not enough points or invalid coordinates"},
        404: {"model": ErrorResponse, "description": "Start address not found"},
        502: {"model": ErrorResponse, "description": "Routing service failure"},
    },
)
async def generate_route(
    request: GenerateRouteRequest,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.GENERATE_ROUTE))],
    router_client: RouterDep,
    session: AsyncSession = Depends(get_db_session),
) -> GenerateRouteResponse:
    """Generate a driving route through the given orders."""
    try:
        stops = [Coordinates.from_pair(stop.coordinates) for stop in request.orders]
    except ValueError as e:
        raise BadRequestError(str(e)) from e
    result = await RouteService(session, router_client).generate_route(
        stops, start_address_id=request.start_address_id
    )
    start = result.pop("start_coordinates", None)
    return GenerateRouteResponse(route=result, start_coordinates=start)
