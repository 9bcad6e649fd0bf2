"""Route generation.

Builds the ordered coordinate list for a delivery run and hands it to the
routing service. No optimization or caching happens locally.
"""

from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from deliverybase.core.errors import BadRequestError, NotFoundError
from deliverybase.core.logging import get_logger
from deliverybase.domain.entities import Coordinates
from deliverybase.infrastructure.persistence.repositories import AddressRepository
from deliverybase.infrastructure.services.routing_service import Router

logger = get_logger(__name__)


class RouteService:
    """Service for delivery route generation."""

    def __init__(self, session: AsyncSession, router: Router) -> None:
        """Initialize the route service.

        Args:
            session: SQLAlchemy async session.
            router: Routing service client.
        """
        self.session = session
        self.router = router
        self.address_repo = AddressRepository(session)

    async def generate_route(
        self,
        stops: Sequence[Coordinates],
        start_address_id: int | None = None,
    ) -> dict[str, Any]:
        """Compute a route through the given stops.

        Args:
            stops: Coordinates of each order to visit, in visiting order.
            start_address_id: Optional address to start from.

        Returns:
            The routing service's response, with ``start_coordinates`` added
            when a start address was given.

        Raises:
            NotFoundError: If the start address does not exist.
            BadRequestError: If the start address has no coordinates or fewer
                than two points would be routed.
            ExternalServiceError: If the routing service fails.
        """
        start: Coordinates | None = None
        if start_address_id is not None:
            address = await self.address_repo.get_by_id(start_address_id)
            if address is None:
                raise NotFoundError("Start address not found")
            if address.coordinates is None:
                raise BadRequestError("Start address has no coordinates")
            start = address.coordinates.normalized()

        points = [stop.normalized() for stop in stops]
        if start is not None:
            points.insert(0, start)

        if len(points) < 2:
            raise BadRequestError("A route needs at least two points")

        response = await self.router.route([point.as_pair() for point in points])
        logger.info(
            "Route generated",
            points=len(points),
            start_address_id=start_address_id,
        )

        result = dict(response)
        if start is not None:
            result["start_coordinates"] = start.as_pair()
        return result
