"""Address repository for database operations."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from deliverybase.infrastructure.persistence.models import AddressModel


class AddressRepository:
    """Repository for address database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, address: AddressModel) -> AddressModel:
        """Create a new address.

        Args:
            address: Address model to create.

        Returns:
            Created address model.
        """
        self.session.add(address)
        await self.session.flush()
        return address

    async def get_by_id(self, address_id: int) -> AddressModel | None:
        """Get an address by ID.

        Args:
            address_id: Address ID.

        Returns:
            Address model if found, None otherwise.
        """
        result = await self.session.execute(
            select(AddressModel).where(AddressModel.id == address_id)
        )
        return result.scalar_one_or_none()

    async def count_by_user(self, user_id: int) -> int:
        """Count the addresses a user currently holds."""
        result = await self.session.execute(
            select(func.count(AddressModel.id)).where(AddressModel.user_id == user_id)
        )
        return result.scalar_one() or 0

    async def list_by_user(self, user_id: int) -> list[AddressModel]:
        """List a user's addresses ordered by ID."""
        result = await self.session.execute(
            select(AddressModel)
            .where(AddressModel.user_id == user_id)
            .order_by(AddressModel.id)
        )
        return list(result.scalars().all())

    async def list_delivery_origins(self) -> list[AddressModel]:
        """List addresses flagged as delivery origins."""
        result = await self.session.execute(
            select(AddressModel)
            .where(AddressModel.delivery.is_(True))
            .order_by(AddressModel.id)
        )
        return list(result.scalars().all())

    async def update(self, address: AddressModel) -> AddressModel:
        """Flush pending changes on an address."""
        await self.session.flush()
        return address

    async def delete(self, address: AddressModel) -> None:
        """Hard-delete an address.

        Args:
            address: Address model to delete.
        """
        await self.session.delete(address)
        await self.session.flush()
