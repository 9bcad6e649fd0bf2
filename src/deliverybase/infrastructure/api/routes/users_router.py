"""Users API routes.

User administration: lookup, listing and deactivation.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from deliverybase.core.config import get_settings
from deliverybase.domain.entities import Actions
from deliverybase.domain.services import AccountService
from deliverybase.infrastructure.api.dependencies import CurrentUser, require_action
from deliverybase.infrastructure.api.schemas import (
    DeliveryUserResponse,
    ErrorResponse,
    UserListResponse,
    UserResponse,
)
from deliverybase.infrastructure.persistence.database import get_db_session

router = APIRouter()


@router.get("/deliveries", response_model=list[DeliveryUserResponse])
async def list_deliveries(
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.GET_DELIVERIES))],
    session: AsyncSession = Depends(get_db_session),
) -> list[DeliveryUserResponse]:
    """List active delivery users."""
    users = await AccountService(session).list_deliveries()
    return [DeliveryUserResponse.model_validate(user) for user in users]


@router.get("", response_model=UserListResponse)
async def list_users(
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.GET_USERS))],
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=100),
    role: str | None = Query(None, description="Filter by role name"),
    session: AsyncSession = Depends(get_db_session),
) -> UserListResponse:
    """List users, optionally filtered by role."""
    limit = limit or get_settings().default_page_size
    users, total, pages = await AccountService(session).list_users(page, limit, role)
    return UserListResponse(
        users=[UserResponse.model_validate(user) for user in users],
        total=total,
        total_pages=pages,
    )


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_user(
    user_id: int,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.GET_USERS))],
    session: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """Get a user by ID."""
    user = await AccountService(session).get_user(user_id)
    return UserResponse.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def deactivate_user(
    user_id: int,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.DELETE_USERS))],
    session: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """Deactivate a user. Users are never deleted."""
    user = await AccountService(session).deactivate_user(
        user_id, deactivated_by=current_user.user_id
    )
    await session.commit()
    return UserResponse.model_validate(user)
