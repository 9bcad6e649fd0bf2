"""Order API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from deliverybase.domain.entities import OrderStatus


class CreateOrderRequest(BaseModel):
    """Request body for placing an order."""

    amount: int = Field(..., gt=0, description="Number of units")
    total_price: float = Field(..., ge=0, description="Total price")
    address_id: int = Field(..., description="Destination address")
    user_id: int | None = Field(None, gt=0, description="Customer, defaults to the current user")


class AssignDeliveryRequest(BaseModel):
    """Request body for assigning an order to a courier."""

    delivery_id: int = Field(..., description="Delivery user ID")


class StateUpdateItem(BaseModel):
    """One entry of a bulk status change."""

    id: int = Field(..., description="Order ID")
    status: OrderStatus


class ChangeStatesRequest(BaseModel):
    """Request body for a bulk status change."""

    orders: list[StateUpdateItem] = Field(..., min_length=1)


class StateUpdateResponse(BaseModel):
    """Outcome of one bulk status change entry."""

    order_id: int
    status: OrderStatus
    updated: bool
    error: str | None = None
    notified: bool = False

    model_config = {"from_attributes": True}


class ChangeStatesResponse(BaseModel):
    """Outcome of a bulk status change."""

    results: list[StateUpdateResponse]
    updated: int
    failed: int


class OrderAddress(BaseModel):
    """Address summary embedded in order listings."""

    address: str
    city: str
    country: str

    model_config = {"from_attributes": True}


class OrderUser(BaseModel):
    """Owner summary embedded in order listings."""

    id: int
    name: str
    lastname: str
    email: str

    model_config = {"from_attributes": True}


class OrderResponse(BaseModel):
    """An order."""

    id: int
    amount: int
    total_price: float
    status: OrderStatus
    address_id: int
    user_id: int
    delivery_id: int | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class OrderDetailResponse(OrderResponse):
    """An order with its address and owner."""

    address: OrderAddress
    user: OrderUser


class OrderListResponse(BaseModel):
    """A page of orders."""

    orders: list[OrderDetailResponse]
    total: int
    total_pages: int
