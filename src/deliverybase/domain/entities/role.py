"""Role entity for authorization.

Roles are data-driven: a role is nothing more than a named set of granted
action names. Three roles are foundational and seeded at startup.
"""

from dataclasses import dataclass, field

ROLE_ADMIN = "ROLE_ADMIN"
ROLE_USER = "ROLE_USER"
ROLE_DELIVERY = "ROLE_DELIVERY"

# Roles that can never be deactivated
PROTECTED_ROLES = frozenset({ROLE_ADMIN, ROLE_USER})


@dataclass(frozen=True)
class RoleGrants:
    """The resolved action set of a role at a point in time.

    Two roles are compared by their action names only, never by id.

    Attributes:
        role_name: Stable role identifier (e.g., 'ROLE_ADMIN').
        actions: Names of the actions currently granted to the role.
    """

    role_name: str = field(compare=False)
    actions: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        """Validate grant data after initialization."""
        if not self.role_name:
            raise ValueError("Role name is required")

    def allows(self, action: str) -> bool:
        """Check whether the action is part of this role's grant set."""
        return action in self.actions

    def action_names(self) -> list[str]:
        """Return granted action names in a stable order."""
        return sorted(self.actions)
