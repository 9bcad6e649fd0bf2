"""API Routes for DeliveryBase."""

from deliverybase.infrastructure.api.routes.addresses_router import router as addresses_router
from deliverybase.infrastructure.api.routes.auth_router import router as auth_router
from deliverybase.infrastructure.api.routes.orders_router import router as orders_router
from deliverybase.infrastructure.api.routes.roles_router import router as roles_router
from deliverybase.infrastructure.api.routes.routes_router import router as routes_router
from deliverybase.infrastructure.api.routes.users_router import router as users_router

__all__ = [
    "addresses_router",
    "auth_router",
    "orders_router",
    "roles_router",
    "routes_router",
    "users_router",
]
