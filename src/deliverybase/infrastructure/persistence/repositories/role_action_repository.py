"""Role-action grant repository for database operations."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from deliverybase.infrastructure.persistence.models import ActionModel, RoleActionModel


class RoleActionRepository:
    """Repository for the grants linking roles to actions."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_action_names(self, role_id: int) -> list[str]:
        """Get the names of the actions currently granted to a role.

        Args:
            role_id: Role ID.

        Returns:
            Action names, ordered by action ID.
        """
        result = await self.session.execute(
            select(ActionModel.name)
            .join(RoleActionModel, RoleActionModel.action_id == ActionModel.id)
            .where(RoleActionModel.role_id == role_id)
            .order_by(ActionModel.id)
        )
        return list(result.scalars().all())

    async def create_many(self, role_id: int, action_ids: list[int]) -> None:
        """Bulk-insert one grant per action.

        Args:
            role_id: Role receiving the grants.
            action_ids: IDs of the actions to grant.
        """
        self.session.add_all(
            RoleActionModel(role_id=role_id, action_id=action_id) for action_id in action_ids
        )
        await self.session.flush()

    async def delete_for_role(self, role_id: int) -> int:
        """Delete every grant of a role.

        Args:
            role_id: Role ID.

        Returns:
            Number of grants deleted.
        """
        result = await self.session.execute(
            delete(RoleActionModel).where(RoleActionModel.role_id == role_id)
        )
        await self.session.flush()
        return result.rowcount
