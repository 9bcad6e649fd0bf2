"""Address entities.

Coordinates are stored as a ``[longitude, latitude]`` pair, the order used by
the geocoding and routing services.
"""

from dataclasses import dataclass
from typing import Sequence

COORDINATE_PRECISION = 7


@dataclass(frozen=True)
class Coordinates:
    """A geographic point.

    Attributes:
        longitude: Longitude in decimal degrees.
        latitude: Latitude in decimal degrees.
    """

    longitude: float
    latitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -180 <= self.longitude <= 180:
            raise ValueError(f"Longitude out of range: {self.longitude}")
        if not -90 <= self.latitude <= 90:
            raise ValueError(f"Latitude out of range: {self.latitude}")

    @classmethod
    def from_pair(cls, pair: Sequence[float | str]) -> "Coordinates":
        """Build coordinates from a ``[lon, lat]`` sequence.

        Args:
            pair: Two numbers (or numeric strings), longitude first.

        Raises:
            ValueError: If the pair does not hold exactly two numeric values.
        """
        if len(pair) != 2:
            raise ValueError("Coordinates must be a [longitude, latitude] pair")
        return cls(longitude=float(pair[0]), latitude=float(pair[1]))

    def normalized(self) -> "Coordinates":
        """Round both components to the routing precision."""
        return Coordinates(
            longitude=round(self.longitude, COORDINATE_PRECISION),
            latitude=round(self.latitude, COORDINATE_PRECISION),
        )

    def as_pair(self) -> list[float]:
        """Return ``[longitude, latitude]``."""
        return [self.longitude, self.latitude]


def geocoding_query(address: str, city: str, country: str) -> str:
    """Build the free-text query sent to the geocoder."""
    return f"{address}, {city}, {country}"
