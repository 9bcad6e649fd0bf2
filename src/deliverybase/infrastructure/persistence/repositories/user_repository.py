"""User repository for database operations."""

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from deliverybase.infrastructure.persistence.models import RoleModel, UserModel


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Args:
            user: User model to create.

        Returns:
            Created user model.
        """
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_id(self, user_id: int) -> UserModel | None:
        """Get a user by ID with the role loaded.

        Args:
            user_id: User ID.

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.id == user_id)
            .options(selectinload(UserModel.role))
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get a user by email with the role loaded.

        Args:
            email: User's email address.

        Returns:
            User model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.email == email)
            .options(selectinload(UserModel.role))
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if an email is already registered."""
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.email == email).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def get_paginated(
        self,
        page: int = 1,
        page_size: int = 10,
        role_name: str | None = None,
    ) -> tuple[list[UserModel], int]:
        """Get a page of users, optionally filtered by role name.

        Args:
            page: Page number (1-indexed).
            page_size: Number of items per page.
            role_name: Optional role name filter (e.g., 'ROLE_DELIVERY').

        Returns:
            Tuple of (list of users, total count).
        """
        query = select(UserModel)
        count_query = select(func.count(UserModel.id))
        if role_name:
            query = query.join(RoleModel).where(RoleModel.name == role_name)
            count_query = count_query.join(RoleModel).where(RoleModel.name == role_name)

        total = (await self.session.execute(count_query)).scalar_one() or 0

        offset = (page - 1) * page_size
        result = await self.session.execute(
            query.options(selectinload(UserModel.role))
            .order_by(UserModel.id)
            .offset(offset)
            .limit(page_size)
        )
        return list(result.scalars().all()), total

    async def list_by_role_name(self, role_name: str) -> list[UserModel]:
        """List active users holding a role.

        Args:
            role_name: Role name.

        Returns:
            Users ordered by ID.
        """
        result = await self.session.execute(
            select(UserModel)
            .join(RoleModel)
            .where(RoleModel.name == role_name, UserModel.active.is_(True))
            .order_by(UserModel.id)
        )
        return list(result.scalars().all())

    async def reassign_role(self, from_role_id: int, to_role_id: int) -> int:
        """Move every user holding one role to another.

        Args:
            from_role_id: Role being vacated.
            to_role_id: Role receiving the users.

        Returns:
            Number of users reassigned.
        """
        result = await self.session.execute(
            update(UserModel)
            .where(UserModel.role_id == from_role_id)
            .values(role_id=to_role_id)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.flush()
        return result.rowcount

    async def update(self, user: UserModel) -> UserModel:
        """Flush pending changes on a user."""
        await self.session.flush()
        return user

    async def count_all(self) -> int:
        """Count total number of users."""
        result = await self.session.execute(select(func.count(UserModel.id)))
        return result.scalar_one() or 0
