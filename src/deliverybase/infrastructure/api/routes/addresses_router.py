"""Addresses API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from deliverybase.core.config import get_settings
from deliverybase.domain.entities import Actions
from deliverybase.domain.services import AddressService
from deliverybase.infrastructure.api.dependencies import CurrentUser, GeocoderDep, require_action
from deliverybase.infrastructure.api.schemas import (
    AddressRequest,
    AddressResponse,
    AddressWithCoordinatesResponse,
    CreateAddressRequest,
    ErrorResponse,
    MessageResponse,
)
from deliverybase.infrastructure.persistence.database import get_db_session

router = APIRouter()


def _service(session: AsyncSession, geocoder=None) -> AddressService:
    return AddressService(
        session,
        geocoder=geocoder,
        max_addresses=get_settings().max_addresses_per_user,
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=AddressResponse,
    responses={
        404: {"model": ErrorResponse, "description": "User not found"},
        409: {"model": ErrorResponse, "description": "Address limit reached or not locatable"},
        502: {"model": ErrorResponse, "description": "Geocoding service failure"},
    },
)
async def create_address(
    request: CreateAddressRequest,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.CREATE_ADDRESS))],
    geocoder: GeocoderDep,
    session: AsyncSession = Depends(get_db_session),
) -> AddressResponse:
    """Register an address for a user, by default the current one."""
    address = await _service(session, geocoder).create_address(
        user_id=request.user_id or current_user.user_id,
        address=request.address,
        city=request.city,
        country=request.country,
        delivery=request.delivery,
    )
    await session.commit()
    return AddressResponse.model_validate(address)


@router.put(
    "/{address_id}",
    response_model=AddressResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Address not found"},
        409: {"model": ErrorResponse, "description": "Address not locatable"},
    },
)
async def edit_address(
    address_id: int,
    request: AddressRequest,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.EDIT_ADDRESS))],
    geocoder: GeocoderDep,
    session: AsyncSession = Depends(get_db_session),
) -> AddressResponse:
    """Edit an address."""
    address = await _service(session, geocoder).edit_address(
        address_id=address_id,
        address=request.address,
        city=request.city,
        country=request.country,
    )
    await session.commit()
    return AddressResponse.model_validate(address)


@router.delete(
    "/{address_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse, "description": "Address not found"}},
)
async def delete_address(
    address_id: int,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.EDIT_ADDRESS))],
    session: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """Delete an address."""
    await _service(session).delete_address(address_id)
    await session.commit()
    return MessageResponse(message="Address deleted")


@router.get(
    "/user/{user_id}",
    response_model=list[AddressResponse],
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_user_addresses(
    user_id: int,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.GET_ADDRESS))],
    session: AsyncSession = Depends(get_db_session),
) -> list[AddressResponse]:
    """List a user's addresses."""
    addresses = await _service(session).get_addresses_for_user(user_id)
    return [AddressResponse.model_validate(address) for address in addresses]


@router.get("/delivery", response_model=list[AddressWithCoordinatesResponse])
async def get_delivery_addresses(
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.GET_ADDRESS_DELIVERY))],
    session: AsyncSession = Depends(get_db_session),
) -> list[AddressWithCoordinatesResponse]:
    """List delivery origin addresses with their coordinates."""
    addresses = await _service(session).get_delivery_origin_addresses()
    return [AddressWithCoordinatesResponse.model_validate(address) for address in addresses]


@router.get(
    "/{address_id}",
    response_model=AddressResponse,
    responses={404: {"model": ErrorResponse, "description": "Address not found"}},
)
async def get_address(
    address_id: int,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.GET_ADDRESS))],
    session: AsyncSession = Depends(get_db_session),
) -> AddressResponse:
    """Get an address by ID."""
    address = await _service(session).get_address(address_id)
    return AddressResponse.model_validate(address)
