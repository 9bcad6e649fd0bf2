"""Permission directory.

Answers whether a user may perform an action by resolving the user's role
and the role's current grant set. Every check re-reads the grant table, so a
grant removed by a role edit takes effect on the very next request.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from deliverybase.core.errors import NotFoundError, PermissionDeniedError
from deliverybase.core.logging import get_logger
from deliverybase.domain.entities import RoleGrants
from deliverybase.infrastructure.persistence.repositories import (
    RoleActionRepository,
    RoleRepository,
    UserRepository,
)

logger = get_logger(__name__)


class PermissionDirectory:
    """Resolves role grants and checks permissions."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the permission directory.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.user_repo = UserRepository(session)
        self.role_repo = RoleRepository(session)
        self.role_action_repo = RoleActionRepository(session)

    async def get_grants(self, user_id: int) -> RoleGrants:
        """Resolve the current grant set of a user's role.

        Args:
            user_id: User ID.

        Returns:
            The role's grants.

        Raises:
            NotFoundError: If the user or their role does not exist.
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        role = await self.role_repo.get_by_id(user.role_id)
        if role is None:
            raise NotFoundError("Role not found")

        action_names = await self.role_action_repo.get_action_names(role.id)
        return RoleGrants(role_name=role.name, actions=frozenset(action_names))

    async def has_permission(self, user_id: int, action: str) -> bool:
        """Check whether a user's role currently grants an action."""
        grants = await self.get_grants(user_id)
        return grants.allows(action)

    async def require(self, user_id: int, action: str) -> None:
        """Ensure a user may perform an action.

        Raises:
            NotFoundError: If the user or their role does not exist.
            PermissionDeniedError: If the action is not granted.
        """
        if not await self.has_permission(user_id, action):
            logger.info("Permission denied", user_id=user_id, action=action)
            raise PermissionDeniedError(action)
