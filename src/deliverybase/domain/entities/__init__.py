"""Domain entities for DeliveryBase.

Entities are pure Python dataclasses and enums that represent core business
concepts. They have no dependencies on infrastructure or external frameworks.
"""

from deliverybase.domain.entities.action import (
    DEFAULT_ACTIONS,
    DEFAULT_ROLE_GRANTS,
    DEFAULT_ROLES,
    ActionDefinition,
    Actions,
)
from deliverybase.domain.entities.address import Coordinates, geocoding_query
from deliverybase.domain.entities.notification import Notification, NotificationKind
from deliverybase.domain.entities.order import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    OrderStatus,
    StateUpdate,
    StateUpdateResult,
    can_transition,
)
from deliverybase.domain.entities.role import (
    PROTECTED_ROLES,
    ROLE_ADMIN,
    ROLE_DELIVERY,
    ROLE_USER,
    RoleGrants,
)

__all__ = [
    "ALLOWED_TRANSITIONS",
    "ActionDefinition",
    "Actions",
    "Coordinates",
    "DEFAULT_ACTIONS",
    "DEFAULT_ROLES",
    "DEFAULT_ROLE_GRANTS",
    "Notification",
    "NotificationKind",
    "OrderStatus",
    "PROTECTED_ROLES",
    "ROLE_ADMIN",
    "ROLE_DELIVERY",
    "ROLE_USER",
    "RoleGrants",
    "StateUpdate",
    "StateUpdateResult",
    "TERMINAL_STATUSES",
    "can_transition",
    "geocoding_query",
]
