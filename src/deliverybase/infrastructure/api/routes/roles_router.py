"""Roles API routes.

Role administration and the action catalogue.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from deliverybase.core.config import get_settings
from deliverybase.core.logging import get_logger
from deliverybase.domain.entities import Actions
from deliverybase.domain.services import RoleService
from deliverybase.infrastructure.api.dependencies import CurrentUser, require_action
from deliverybase.infrastructure.api.schemas import (
    ActionListResponse,
    ActionResponse,
    ErrorResponse,
    RoleActionsResponse,
    RoleRequest,
    RoleResponse,
)
from deliverybase.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=list[RoleResponse])
async def list_roles(
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.GET_ROLES))],
    session: AsyncSession = Depends(get_db_session),
) -> list[RoleResponse]:
    """List all roles, active or not."""
    roles = await RoleService(session).list_roles()
    logger.debug("Roles listed", count=len(roles), requested_by=current_user.user_id)
    return [RoleResponse.model_validate(role) for role in roles]


@router.get("/actions", response_model=ActionListResponse)
async def list_actions(
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.GET_ACTIONS))],
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=100),
    type: str | None = Query(None, description="Filter by action type"),
    session: AsyncSession = Depends(get_db_session),
) -> ActionListResponse:
    """Page through the action catalogue."""
    limit = limit or get_settings().default_actions_page_size
    actions, total, pages = await RoleService(session).list_actions(page, limit, type)
    return ActionListResponse(
        actions=[ActionResponse.model_validate(action) for action in actions],
        total=total,
        total_pages=pages,
    )


@router.get(
    "/{role_id}/actions",
    response_model=RoleActionsResponse,
    responses={404: {"model": ErrorResponse, "description": "Role not found"}},
)
async def get_role_actions(
    role_id: int,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.EDIT_ROLE))],
    session: AsyncSession = Depends(get_db_session),
) -> RoleActionsResponse:
    """Get a role with the names of its granted actions."""
    role, actions = await RoleService(session).get_role_actions(role_id)
    return RoleActionsResponse(role=RoleResponse.model_validate(role), actions=actions)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=RoleResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Unknown actions"},
        409: {"model": ErrorResponse, "description": "Role name already exists"},
    },
)
async def create_role(
    request: RoleRequest,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.CREATE_ROLE))],
    session: AsyncSession = Depends(get_db_session),
) -> RoleResponse:
    """Create a role with its grant set."""
    role = await RoleService(session).create_role(
        name=request.name,
        name_descriptive=request.name_descriptive,
        description=request.description,
        action_names=request.actions,
        created_by=current_user.user_id,
    )
    await session.commit()
    return RoleResponse.model_validate(role)


@router.put(
    "/{role_id}",
    response_model=RoleResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Unknown actions"},
        403: {"model": ErrorResponse, "description": "Foundational role cannot be renamed"},
        404: {"model": ErrorResponse, "description": "Role not found"},
        409: {"model": ErrorResponse, "description": "Role name already exists"},
    },
)
async def edit_role(
    role_id: int,
    request: RoleRequest,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.EDIT_ROLE))],
    session: AsyncSession = Depends(get_db_session),
) -> RoleResponse:
    """Overwrite a role and replace its grant set."""
    role = await RoleService(session).edit_role(
        role_id=role_id,
        name=request.name,
        name_descriptive=request.name_descriptive,
        description=request.description,
        action_names=request.actions,
        updated_by=current_user.user_id,
    )
    await session.commit()
    return RoleResponse.model_validate(role)


@router.delete(
    "/{role_id}",
    response_model=RoleResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Protected role"},
        404: {"model": ErrorResponse, "description": "Role not found"},
    },
)
async def delete_role(
    role_id: int,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.DELETE_ROLE))],
    session: AsyncSession = Depends(get_db_session),
) -> RoleResponse:
    """Deactivate a role, moving its users to ROLE_USER."""
    role = await RoleService(session).delete_role(role_id, deleted_by=current_user.user_id)
    await session.commit()
    return RoleResponse.model_validate(role)


@router.post(
    "/{role_id}/activate",
    response_model=RoleResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Role already active"},
        404: {"model": ErrorResponse, "description": "Role not found"},
    },
)
async def activate_role(
    role_id: int,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.ACTIVE_ROLE))],
    session: AsyncSession = Depends(get_db_session),
) -> RoleResponse:
    """Reactivate a role."""
    role = await RoleService(session).activate_role(role_id, activated_by=current_user.user_id)
    await session.commit()
    return RoleResponse.model_validate(role)
