"""SQLAlchemy model for the addresses table."""

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deliverybase.domain.entities import Coordinates
from deliverybase.infrastructure.persistence.database import Base


class AddressModel(Base):
    """SQLAlchemy model for the addresses table.

    Attributes:
        id: Auto-incrementing primary key.
        address: Street address.
        city: City.
        country: Country.
        longitude: Geocoded longitude, if resolved.
        latitude: Geocoded latitude, if resolved.
        delivery: Whether this address is a delivery origin (depot).
        user_id: Owner of the address.
    """

    __tablename__ = "addresses"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    delivery: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
        comment="Whether this is a delivery origin address",
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    user: Mapped["UserModel"] = relationship(  # noqa: F821
        "UserModel",
        back_populates="addresses",
    )

    @property
    def coordinates(self) -> Coordinates | None:
        """Stored coordinates, or None when the address was not geocoded."""
        if self.longitude is None or self.latitude is None:
            return None
        return Coordinates(longitude=self.longitude, latitude=self.latitude)

    @coordinates.setter
    def coordinates(self, value: Coordinates | None) -> None:
        self.longitude = value.longitude if value else None
        self.latitude = value.latitude if value else None

    def __repr__(self) -> str:
        return f"<Address(id={self.id}, user_id={self.user_id}, delivery={self.delivery})>"
