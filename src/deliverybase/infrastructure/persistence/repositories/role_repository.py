"""Role repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from deliverybase.infrastructure.persistence.models import RoleModel


class RoleRepository:
    """Repository for role database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, role: RoleModel) -> RoleModel:
        """Create a new role.

        Args:
            role: Role model to create.

        Returns:
            Created role model with its generated ID.
        """
        self.session.add(role)
        await self.session.flush()
        return role

    async def get_by_id(self, role_id: int) -> RoleModel | None:
        """Get a role by ID.

        Args:
            role_id: Role ID.

        Returns:
            Role model if found, None otherwise.
        """
        result = await self.session.execute(
            select(RoleModel).where(RoleModel.id == role_id)
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> RoleModel | None:
        """Get a role by its stable name.

        Args:
            name: Role name (e.g., 'ROLE_USER').

        Returns:
            Role model if found, None otherwise.
        """
        result = await self.session.execute(
            select(RoleModel).where(RoleModel.name == name)
        )
        return result.scalar_one_or_none()

    async def get_by_name_descriptive(self, name_descriptive: str) -> RoleModel | None:
        """Get a role by its human-readable label."""
        result = await self.session.execute(
            select(RoleModel).where(RoleModel.name_descriptive == name_descriptive)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[RoleModel]:
        """List all roles ordered by ID, active or not."""
        result = await self.session.execute(select(RoleModel).order_by(RoleModel.id))
        return list(result.scalars().all())

    async def update(self, role: RoleModel) -> RoleModel:
        """Flush pending changes on a role.

        Args:
            role: Role model with modified attributes.

        Returns:
            The updated role model.
        """
        await self.session.flush()
        return role
