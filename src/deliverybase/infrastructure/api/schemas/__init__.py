"""API Schemas for request/response validation."""

from deliverybase.infrastructure.api.schemas.address_schemas import (
    AddressRequest,
    AddressResponse,
    AddressWithCoordinatesResponse,
    CreateAddressRequest,
)
from deliverybase.infrastructure.api.schemas.auth_schemas import (
    EmailRequest,
    LoginRequest,
    LoginResponse,
    LoginUser,
    RegisterRequest,
    TokenRequest,
    UpdatePasswordRequest,
)
from deliverybase.infrastructure.api.schemas.common_schemas import ErrorResponse, MessageResponse
from deliverybase.infrastructure.api.schemas.order_schemas import (
    AssignDeliveryRequest,
    ChangeStatesRequest,
    ChangeStatesResponse,
    CreateOrderRequest,
    OrderDetailResponse,
    OrderListResponse,
    OrderResponse,
    StateUpdateResponse,
)
from deliverybase.infrastructure.api.schemas.role_schemas import (
    ActionListResponse,
    ActionResponse,
    RoleActionsResponse,
    RoleRequest,
    RoleResponse,
)
from deliverybase.infrastructure.api.schemas.route_schemas import (
    GenerateRouteRequest,
    GenerateRouteResponse,
)
from deliverybase.infrastructure.api.schemas.user_schemas import (
    DeliveryUserResponse,
    UserListResponse,
    UserResponse,
)

__all__ = [
    "ActionListResponse",
    "ActionResponse",
    "AddressRequest",
    "AddressResponse",
    "AddressWithCoordinatesResponse",
    "AssignDeliveryRequest",
    "ChangeStatesRequest",
    "ChangeStatesResponse",
    "CreateAddressRequest",
    "CreateOrderRequest",
    "DeliveryUserResponse",
    "EmailRequest",
    "ErrorResponse",
    "GenerateRouteRequest",
    "GenerateRouteResponse",
    "LoginRequest",
    "LoginResponse",
    "LoginUser",
    "MessageResponse",
    "OrderDetailResponse",
    "OrderListResponse",
    "OrderResponse",
    "RegisterRequest",
    "RoleActionsResponse",
    "RoleRequest",
    "RoleResponse",
    "StateUpdateResponse",
    "TokenRequest",
    "UpdatePasswordRequest",
    "UserListResponse",
    "UserResponse",
]
