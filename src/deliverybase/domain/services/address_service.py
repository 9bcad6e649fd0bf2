"""Address book.

Each user holds a bounded number of addresses. When a geocoder is configured,
every created or edited address must resolve to coordinates.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from deliverybase.core.errors import ConflictError, NotFoundError
from deliverybase.core.logging import get_logger
from deliverybase.domain.entities import Coordinates, geocoding_query
from deliverybase.infrastructure.persistence.models import AddressModel
from deliverybase.infrastructure.persistence.repositories import AddressRepository, UserRepository
from deliverybase.infrastructure.services.geocoding_service import Geocoder

logger = get_logger(__name__)


class AddressService:
    """Service for address book business logic."""

    def __init__(
        self,
        session: AsyncSession,
        geocoder: Geocoder | None = None,
        max_addresses: int = 3,
    ) -> None:
        """Initialize the address service.

        Args:
            session: SQLAlchemy async session.
            geocoder: Geocoder used to resolve coordinates. None stores
                addresses without coordinates.
            max_addresses: Maximum number of addresses per user.
        """
        self.session = session
        self.geocoder = geocoder
        self.max_addresses = max_addresses
        self.address_repo = AddressRepository(session)
        self.user_repo = UserRepository(session)

    async def _locate(self, address: str, city: str, country: str) -> Coordinates | None:
        if self.geocoder is None:
            return None

        query = geocoding_query(address, city, country)
        coordinates = await self.geocoder.geocode(query)
        if coordinates is None:
            raise ConflictError("Address could not be located")
        return coordinates

    async def _get_address(self, address_id: int) -> AddressModel:
        address = await self.address_repo.get_by_id(address_id)
        if address is None:
            raise NotFoundError("Address not found")
        return address

    async def create_address(
        self,
        user_id: int,
        address: str,
        city: str,
        country: str,
        delivery: bool = False,
    ) -> AddressModel:
        """Register an address for a user.

        Raises:
            NotFoundError: If the user does not exist.
            ConflictError: If the user is at the address limit or the address
                cannot be geocoded.
        """
        if await self.user_repo.get_by_id(user_id) is None:
            raise NotFoundError("User not found")

        if await self.address_repo.count_by_user(user_id) >= self.max_addresses:
            raise ConflictError(
                f"A user cannot register more than {self.max_addresses} addresses"
            )

        coordinates = await self._locate(address, city, country)

        model = AddressModel(
            address=address,
            city=city,
            country=country,
            delivery=delivery,
            user_id=user_id,
        )
        model.coordinates = coordinates
        model = await self.address_repo.create(model)

        logger.info(
            "Address created",
            address_id=model.id,
            user_id=user_id,
            geocoded=coordinates is not None,
        )
        return model

    async def edit_address(
        self,
        address_id: int,
        address: str,
        city: str,
        country: str,
    ) -> AddressModel:
        """Overwrite an address, re-resolving its coordinates.

        Raises:
            NotFoundError: If the address does not exist.
            ConflictError: If the new address cannot be geocoded.
        """
        model = await self._get_address(address_id)
        coordinates = await self._locate(address, city, country)

        model.address = address
        model.city = city
        model.country = country
        model.coordinates = coordinates
        await self.address_repo.update(model)

        logger.info("Address updated", address_id=model.id)
        return model

    async def delete_address(self, address_id: int) -> None:
        """Hard-delete an address.

        Raises:
            NotFoundError: If the address does not exist.
        """
        model = await self._get_address(address_id)
        await self.address_repo.delete(model)
        logger.info("Address deleted", address_id=address_id, user_id=model.user_id)

    async def get_address(self, address_id: int) -> AddressModel:
        """Get an address by ID.

        Raises:
            NotFoundError: If the address does not exist.
        """
        return await self._get_address(address_id)

    async def get_addresses_for_user(self, user_id: int) -> list[AddressModel]:
        """List a user's addresses.

        Raises:
            NotFoundError: If the user does not exist.
        """
        if await self.user_repo.get_by_id(user_id) is None:
            raise NotFoundError("User not found")
        return await self.address_repo.list_by_user(user_id)

    async def get_delivery_origin_addresses(self) -> list[AddressModel]:
        """List addresses flagged as delivery origins."""
        return await self.address_repo.list_delivery_origins()
