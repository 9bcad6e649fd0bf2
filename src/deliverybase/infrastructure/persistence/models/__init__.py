"""SQLAlchemy models for DeliveryBase tables.

All models inherit from the Base class defined in database.py and are
created on application startup in development mode.
"""

from deliverybase.infrastructure.persistence.models.action import ActionModel
from deliverybase.infrastructure.persistence.models.address import AddressModel
from deliverybase.infrastructure.persistence.models.order import OrderModel
from deliverybase.infrastructure.persistence.models.role import RoleModel
from deliverybase.infrastructure.persistence.models.role_action import RoleActionModel
from deliverybase.infrastructure.persistence.models.token import TokenModel
from deliverybase.infrastructure.persistence.models.user import UserModel

__all__ = [
    "ActionModel",
    "AddressModel",
    "OrderModel",
    "RoleActionModel",
    "RoleModel",
    "TokenModel",
    "UserModel",
]
