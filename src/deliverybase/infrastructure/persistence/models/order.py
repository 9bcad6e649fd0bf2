"""SQLAlchemy model for the orders table.

Orders are never deleted. ``created_at`` is indexed for the delivery date
range filters.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deliverybase.domain.entities import OrderStatus
from deliverybase.infrastructure.persistence.database import Base


class OrderModel(Base):
    """SQLAlchemy model for the orders table.

    Attributes:
        id: Auto-incrementing primary key.
        amount: Number of units ordered.
        total_price: Total price of the order.
        status: Current ``OrderStatus`` value.
        address_id: Destination address.
        user_id: Customer who placed the order.
        delivery_id: Courier assigned to the order, if any.
        created_at: Timestamp when the order was placed.
        updated_at: Timestamp of the last status change.
    """

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    total_price: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=OrderStatus.PENDING.value,
        index=True,
        comment="Order status (PENDING, CONFIRMED, CANCELLED, WAITING, DELIVERED)",
    )
    address_id: Mapped[int] = mapped_column(
        ForeignKey("addresses.id"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    delivery_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"),
        nullable=True,
        index=True,
        comment="Assigned delivery user",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    address: Mapped["AddressModel"] = relationship("AddressModel")  # noqa: F821
    user: Mapped["UserModel"] = relationship(  # noqa: F821
        "UserModel",
        foreign_keys=[user_id],
    )
    delivery: Mapped[Optional["UserModel"]] = relationship(  # noqa: F821
        "UserModel",
        foreign_keys=[delivery_id],
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, status={self.status}, user_id={self.user_id})>"
