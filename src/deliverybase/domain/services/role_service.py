"""Role administration.

Roles are created, edited, deactivated and reactivated here. A role's grant
set is always replaced wholesale: every edit deletes all existing grants and
inserts the requested ones.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from deliverybase.core.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from deliverybase.core.logging import get_logger
from deliverybase.domain.entities import PROTECTED_ROLES, ROLE_DELIVERY, ROLE_USER
from deliverybase.domain.services.pagination import total_pages
from deliverybase.infrastructure.persistence.models import ActionModel, RoleModel
from deliverybase.infrastructure.persistence.repositories import (
    ActionRepository,
    RoleActionRepository,
    RoleRepository,
    UserRepository,
)

logger = get_logger(__name__)

# Roles whose stable name other code relies on
FOUNDATIONAL_ROLES = PROTECTED_ROLES | {ROLE_DELIVERY}


class RoleService:
    """Service for role administration business logic."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the role service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.role_repo = RoleRepository(session)
        self.action_repo = ActionRepository(session)
        self.role_action_repo = RoleActionRepository(session)
        self.user_repo = UserRepository(session)

    async def _get_role(self, role_id: int) -> RoleModel:
        role = await self.role_repo.get_by_id(role_id)
        if role is None:
            raise NotFoundError("Role not found")
        return role

    async def _resolve_actions(self, action_names: list[str]) -> list[ActionModel]:
        """Resolve action names, requiring every one of them to exist.

        Raises:
            BadRequestError: If any name does not resolve to an action.
        """
        actions = await self.action_repo.get_by_names(action_names)
        if len(actions) != len(action_names):
            found = {action.name for action in actions}
            unknown = sorted(set(action_names) - found)
            if unknown:
                raise BadRequestError(f"Unknown actions: {', '.join(unknown)}")
            raise BadRequestError("Duplicated actions in request")
        return actions

    async def list_roles(self) -> list[RoleModel]:
        """List every role, active or not."""
        return await self.role_repo.list_all()

    async def get_role_actions(self, role_id: int) -> tuple[RoleModel, list[str]]:
        """Get a role and the names of its granted actions.

        Raises:
            NotFoundError: If the role does not exist.
        """
        role = await self._get_role(role_id)
        return role, await self.role_action_repo.get_action_names(role.id)

    async def list_actions(
        self,
        page: int = 1,
        limit: int = 5,
        action_type: str | None = None,
    ) -> tuple[list[ActionModel], int, int]:
        """Page through the action catalogue.

        Returns:
            Tuple of (actions, total count, total pages).
        """
        actions, total = await self.action_repo.get_paginated(page, limit, action_type)
        return actions, total, total_pages(total, limit)

    async def create_role(
        self,
        name: str,
        name_descriptive: str,
        description: str | None,
        action_names: list[str],
        created_by: int | None = None,
    ) -> RoleModel:
        """Create a role with its grant set.

        Args:
            name: Unique stable name.
            name_descriptive: Unique human-readable label.
            description: Optional description.
            action_names: Actions to grant.
            created_by: ID of the user creating the role, for logging.

        Returns:
            The created role.

        Raises:
            ConflictError: If the name or label is already taken.
            BadRequestError: If any action name does not resolve.
        """
        if await self.role_repo.get_by_name(name) is not None:
            raise ConflictError(f"Role '{name}' already exists")
        if await self.role_repo.get_by_name_descriptive(name_descriptive) is not None:
            raise ConflictError(f"Role label '{name_descriptive}' already exists")

        actions = await self._resolve_actions(action_names)

        role = await self.role_repo.create(
            RoleModel(
                name=name,
                name_descriptive=name_descriptive,
                description=description,
                active=True,
            )
        )
        await self.role_action_repo.create_many(role.id, [action.id for action in actions])

        logger.info(
            "Role created successfully",
            role_id=role.id,
            role_name=name,
            actions=len(actions),
            created_by=created_by,
        )
        return role

    async def edit_role(
        self,
        role_id: int,
        name: str,
        name_descriptive: str,
        description: str | None,
        action_names: list[str],
        updated_by: int | None = None,
    ) -> RoleModel:
        """Overwrite a role's fields and replace its grant set.

        Existing grants are deleted before the new ones are validated, so the
        caller must discard the unit of work if this raises.

        Raises:
            NotFoundError: If the role does not exist.
            ForbiddenError: If a foundational role would be renamed.
            ConflictError: If the name or label belongs to another role.
            BadRequestError: If any action name does not resolve.
        """
        role = await self._get_role(role_id)

        if role.name in FOUNDATIONAL_ROLES and name != role.name:
            raise ForbiddenError(f"Role '{role.name}' cannot be renamed")

        other = await self.role_repo.get_by_name(name)
        if other is not None and other.id != role.id:
            raise ConflictError(f"Role '{name}' already exists")
        other = await self.role_repo.get_by_name_descriptive(name_descriptive)
        if other is not None and other.id != role.id:
            raise ConflictError(f"Role label '{name_descriptive}' already exists")

        role.name = name
        role.name_descriptive = name_descriptive
        role.description = description

        await self.role_action_repo.delete_for_role(role.id)
        actions = await self._resolve_actions(action_names)
        await self.role_action_repo.create_many(role.id, [action.id for action in actions])
        await self.role_repo.update(role)

        logger.info(
            "Role updated successfully",
            role_id=role.id,
            actions=len(actions),
            updated_by=updated_by,
        )
        return role

    async def delete_role(self, role_id: int, deleted_by: int | None = None) -> RoleModel:
        """Deactivate a role, moving its users to ``ROLE_USER``.

        Raises:
            NotFoundError: If the role does not exist.
            ForbiddenError: If the role is ``ROLE_ADMIN`` or ``ROLE_USER``.
        """
        role = await self._get_role(role_id)
        if role.name in PROTECTED_ROLES:
            raise ForbiddenError(f"Role '{role.name}' cannot be deleted")

        default_role = await self.role_repo.get_by_name(ROLE_USER)
        if default_role is None:
            raise NotFoundError(f"Role '{ROLE_USER}' not found")

        moved = await self.user_repo.reassign_role(role.id, default_role.id)
        role.active = False
        await self.role_repo.update(role)

        logger.info(
            "Role deactivated",
            role_id=role.id,
            users_reassigned=moved,
            deleted_by=deleted_by,
        )
        return role

    async def activate_role(self, role_id: int, activated_by: int | None = None) -> RoleModel:
        """Reactivate a role.

        Raises:
            NotFoundError: If the role does not exist.
            ForbiddenError: If the role is already active.
        """
        role = await self._get_role(role_id)
        if role.active:
            raise ForbiddenError("Role is already active")

        role.active = True
        await self.role_repo.update(role)
        logger.info("Role activated", role_id=role.id, activated_by=activated_by)
        return role
