"""Orders API routes.

Order placement, the guarded single-order transitions, the bulk status
override and the paginated listings.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from deliverybase.core.config import get_settings
from deliverybase.domain.entities import Actions, OrderStatus, StateUpdate
from deliverybase.domain.services import OrderService
from deliverybase.infrastructure.api.dependencies import CurrentUser, Notifier, require_action
from deliverybase.infrastructure.api.schemas import (
    AssignDeliveryRequest,
    ChangeStatesRequest,
    ChangeStatesResponse,
    CreateOrderRequest,
    ErrorResponse,
    OrderDetailResponse,
    OrderListResponse,
    OrderResponse,
    StateUpdateResponse,
)
from deliverybase.infrastructure.persistence.database import get_db_session, get_session_factory

router = APIRouter()


def _page(orders, total: int, pages: int) -> OrderListResponse:
    return OrderListResponse(
        orders=[OrderDetailResponse.model_validate(order) for order in orders],
        total=total,
        total_pages=pages,
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=OrderResponse,
    responses={
        404: {"model": ErrorResponse, "description": "User or address not found"},
        409: {"model": ErrorResponse, "description": "Permission denied"},
    },
)
async def create_order(
    request: CreateOrderRequest,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.CREATE_ORDER))],
    session: AsyncSession = Depends(get_db_session),
) -> OrderResponse:
    """Place an order for a customer, by default the current user."""
    order = await OrderService(session).create_order(
        user_id=request.user_id or current_user.user_id,
        amount=request.amount,
        total_price=request.total_price,
        address_id=request.address_id,
    )
    await session.commit()
    await session.refresh(order)
    return OrderResponse.model_validate(order)


@router.post(
    "/states",
    response_model=ChangeStatesResponse,
    responses={400: {"model": ErrorResponse, "description": "Unknown status"}},
)
async def change_states(
    request: ChangeStatesRequest,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.CHANGE_ORDER_STATUS))],
    notifier: Notifier,
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
    session: AsyncSession = Depends(get_db_session),
) -> ChangeStatesResponse:
    """Overwrite the status of several orders.

    Each entry is applied independently; the response lists every outcome.
    """
    service = OrderService(session, notifier=notifier, session_factory=session_factory)
    results = await service.change_states(
        [StateUpdate(order_id=item.id, status=item.status) for item in request.orders]
    )
    updated = sum(1 for result in results if result.updated)
    return ChangeStatesResponse(
        results=[StateUpdateResponse.model_validate(result) for result in results],
        updated=updated,
        failed=len(results) - updated,
    )


@router.post(
    "/{order_id}/cancel",
    response_model=OrderResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Order not found"},
        409: {"model": ErrorResponse, "description": "Order is not pending"},
    },
)
async def cancel_order(
    order_id: int,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.CANCEL_ORDER))],
    session: AsyncSession = Depends(get_db_session),
) -> OrderResponse:
    """Cancel a pending order."""
    order = await OrderService(session).cancel_order(order_id)
    await session.commit()
    return OrderResponse.model_validate(order)


@router.post(
    "/{order_id}/confirm",
    response_model=OrderResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Order not found"},
        409: {"model": ErrorResponse, "description": "Order is not pending"},
    },
)
async def confirm_order(
    order_id: int,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.CONFIRM_ORDER))],
    session: AsyncSession = Depends(get_db_session),
) -> OrderResponse:
    """Confirm a pending order."""
    order = await OrderService(session).confirm_order(order_id)
    await session.commit()
    return OrderResponse.model_validate(order)


@router.post(
    "/{order_id}/assign-delivery",
    response_model=OrderResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Order not found"},
        409: {"model": ErrorResponse, "description": "Order not confirmed or user not a courier"},
    },
)
async def assign_delivery(
    order_id: int,
    request: AssignDeliveryRequest,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.ASSIGN_DELIVERY))],
    session: AsyncSession = Depends(get_db_session),
) -> OrderResponse:
    """Assign a confirmed order to a delivery user."""
    order = await OrderService(session).assign_delivery(order_id, request.delivery_id)
    await session.commit()
    return OrderResponse.model_validate(order)


@router.get("", response_model=OrderListResponse)
async def list_orders(
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.GET_ORDERS))],
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=100),
    status: OrderStatus | None = Query(None),
    session: AsyncSession = Depends(get_db_session),
) -> OrderListResponse:
    """List all orders, newest first."""
    limit = limit or get_settings().default_page_size
    return _page(*await OrderService(session).list_orders(page, limit, status))


@router.get(
    "/user/{user_id}",
    response_model=OrderListResponse,
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def list_user_orders(
    user_id: int,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.GET_ORDERS_USER))],
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=100),
    status: OrderStatus | None = Query(None),
    session: AsyncSession = Depends(get_db_session),
) -> OrderListResponse:
    """List a customer's orders, newest first."""
    limit = limit or get_settings().default_page_size
    return _page(
        *await OrderService(session).list_orders_by_user(user_id, page, limit, status)
    )


@router.get(
    "/delivery/{delivery_id}",
    response_model=OrderListResponse,
    responses={400: {"model": ErrorResponse, "description": "Inconsistent date filters"}},
)
async def list_delivery_orders(
    delivery_id: int,
    current_user: Annotated[CurrentUser, Depends(require_action(Actions.GET_ORDERS_DELIVERY))],
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=100),
    status: OrderStatus | None = Query(None),
    on: date | None = Query(None, alias="date", description="Orders created on this day"),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    session: AsyncSession = Depends(get_db_session),
) -> OrderListResponse:
    """List the orders assigned to a delivery user, newest first."""
    limit = limit or get_settings().default_page_size
    return _page(
        *await OrderService(session).list_orders_by_delivery(
            delivery_id,
            page=page,
            limit=limit,
            status=status,
            on=on,
            start_date=start_date,
            end_date=end_date,
        )
    )
