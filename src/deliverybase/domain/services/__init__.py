"""Domain services for DeliveryBase.

Services hold the business rules. They work on a SQLAlchemy session through
repositories, raise ``deliverybase.core.errors`` exceptions, and leave the
commit to the caller.
"""

from deliverybase.domain.services.account_service import (
    AccountService,
    LoginResult,
    validate_password,
)
from deliverybase.domain.services.address_service import AddressService
from deliverybase.domain.services.order_service import OrderService, day_range
from deliverybase.domain.services.pagination import total_pages
from deliverybase.domain.services.permission_directory import PermissionDirectory
from deliverybase.domain.services.role_service import RoleService
from deliverybase.domain.services.route_service import RouteService

__all__ = [
    "AccountService",
    "AddressService",
    "LoginResult",
    "OrderService",
    "PermissionDirectory",
    "RoleService",
    "RouteService",
    "day_range",
    "total_pages",
    "validate_password",
]
