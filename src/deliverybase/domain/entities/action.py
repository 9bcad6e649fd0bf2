"""Action vocabulary.

Actions are the closed vocabulary referenced by permission checks. They are
seeded out-of-band and read-only to the application; this module names them
so route guards and the seeder agree on spelling.
"""

from dataclasses import dataclass

from deliverybase.domain.entities.role import ROLE_ADMIN, ROLE_DELIVERY, ROLE_USER


class Actions:
    """Names of the actions checked by the API."""

    # Roles
    GET_ROLES = "GET_ROLES"
    CREATE_ROLE = "CREATE_ROLE"
    EDIT_ROLE = "EDIT_ROLE"
    DELETE_ROLE = "DELETE_ROLE"
    ACTIVE_ROLE = "ACTIVE_ROLE"
    GET_ACTIONS = "GET_ACTIONS"

    # Users
    GET_USERS = "GET_USERS"
    DELETE_USERS = "DELETE_USERS"
    GET_DELIVERIES = "GET_DELIVERIES"

    # Addresses
    CREATE_ADDRESS = "CREATE_ADDRESS"
    EDIT_ADDRESS = "EDIT_ADDRESS"
    GET_ADDRESS = "GET_ADDRESS"
    GET_ADDRESS_DELIVERY = "GET_ADDRESS_DELIVERY"

    # Orders
    CREATE_ORDER = "CREATE_ORDER"
    CANCEL_ORDER = "CANCEL_ORDER"
    CONFIRM_ORDER = "CONFIRM_ORDER"
    ASSIGN_DELIVERY = "ASSIGN_DELIVERY"
    CHANGE_ORDER_STATUS = "CHANGE_ORDER_STATUS"
    GET_ORDERS = "GET_ORDERS"
    GET_ORDERS_USER = "GET_ORDERS_USER"
    GET_ORDERS_DELIVERY = "GET_ORDERS_DELIVERY"

    # Routes
    GENERATE_ROUTE = "GENERATE_ROUTE"


@dataclass(frozen=True)
class ActionDefinition:
    """Seed definition for an action row.

    Attributes:
        name: Unique action name.
        description: Human-readable description.
        type: Category tag used for filtering the catalogue.
    """

    name: str
    description: str
    type: str


DEFAULT_ACTIONS: tuple[ActionDefinition, ...] = (
    ActionDefinition(Actions.GET_ROLES, "List roles", "ROLES"),
    ActionDefinition(Actions.CREATE_ROLE, "Create roles", "ROLES"),
    ActionDefinition(Actions.EDIT_ROLE, "Edit roles and their actions", "ROLES"),
    ActionDefinition(Actions.DELETE_ROLE, "Deactivate roles", "ROLES"),
    ActionDefinition(Actions.ACTIVE_ROLE, "Reactivate roles", "ROLES"),
    ActionDefinition(Actions.GET_ACTIONS, "List the action catalogue", "ROLES"),
    ActionDefinition(Actions.GET_USERS, "View users", "USERS"),
    ActionDefinition(Actions.DELETE_USERS, "Deactivate users", "USERS"),
    ActionDefinition(Actions.GET_DELIVERIES, "List delivery personnel", "USERS"),
    ActionDefinition(Actions.CREATE_ADDRESS, "Register addresses", "ADDRESSES"),
    ActionDefinition(Actions.EDIT_ADDRESS, "Edit or delete addresses", "ADDRESSES"),
    ActionDefinition(Actions.GET_ADDRESS, "View addresses", "ADDRESSES"),
    ActionDefinition(Actions.GET_ADDRESS_DELIVERY, "View delivery origin addresses", "ADDRESSES"),
    ActionDefinition(Actions.CREATE_ORDER, "Place orders", "ORDERS"),
    ActionDefinition(Actions.CANCEL_ORDER, "Cancel pending orders", "ORDERS"),
    ActionDefinition(Actions.CONFIRM_ORDER, "Confirm pending orders", "ORDERS"),
    ActionDefinition(Actions.ASSIGN_DELIVERY, "Assign orders to delivery personnel", "ORDERS"),
    ActionDefinition(Actions.CHANGE_ORDER_STATUS, "Bulk change order status", "ORDERS"),
    ActionDefinition(Actions.GET_ORDERS, "List all orders", "ORDERS"),
    ActionDefinition(Actions.GET_ORDERS_USER, "List a user's orders", "ORDERS"),
    ActionDefinition(Actions.GET_ORDERS_DELIVERY, "List a courier's orders", "ORDERS"),
    ActionDefinition(Actions.GENERATE_ROUTE, "Generate delivery routes", "ROUTES"),
)

DEFAULT_ROLE_GRANTS: dict[str, tuple[str, ...]] = {
    ROLE_ADMIN: tuple(action.name for action in DEFAULT_ACTIONS),
    ROLE_USER: (
        Actions.CREATE_ADDRESS,
        Actions.EDIT_ADDRESS,
        Actions.GET_ADDRESS,
        Actions.CREATE_ORDER,
        Actions.CANCEL_ORDER,
        Actions.GET_ORDERS_USER,
    ),
    ROLE_DELIVERY: (
        Actions.GET_ADDRESS,
        Actions.GET_ADDRESS_DELIVERY,
        Actions.GET_ORDERS_DELIVERY,
        Actions.CHANGE_ORDER_STATUS,
        Actions.GENERATE_ROUTE,
    ),
}

DEFAULT_ROLES: tuple[tuple[str, str, str], ...] = (
    (ROLE_ADMIN, "Administrator", "Full access to every action"),
    (ROLE_USER, "Customer", "Registers addresses and places orders"),
    (ROLE_DELIVERY, "Delivery", "Delivers orders along generated routes"),
)
