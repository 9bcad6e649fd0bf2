"""Repositories for database operations."""

from deliverybase.infrastructure.persistence.repositories.action_repository import (
    ActionRepository,
)
from deliverybase.infrastructure.persistence.repositories.address_repository import (
    AddressRepository,
)
from deliverybase.infrastructure.persistence.repositories.order_repository import (
    OrderRepository,
)
from deliverybase.infrastructure.persistence.repositories.role_action_repository import (
    RoleActionRepository,
)
from deliverybase.infrastructure.persistence.repositories.role_repository import RoleRepository
from deliverybase.infrastructure.persistence.repositories.token_repository import (
    TokenRepository,
)
from deliverybase.infrastructure.persistence.repositories.user_repository import UserRepository

__all__ = [
    "ActionRepository",
    "AddressRepository",
    "OrderRepository",
    "RoleActionRepository",
    "RoleRepository",
    "TokenRepository",
    "UserRepository",
]
