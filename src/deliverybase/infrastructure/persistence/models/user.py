"""SQLAlchemy model for the users table.

Users are deactivated through ``active`` and never removed, so their
addresses and orders are never orphaned.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deliverybase.infrastructure.persistence.database import Base


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Attributes:
        id: Auto-incrementing primary key.
        name: First name.
        lastname: Last name.
        email: Unique email address.
        password_hash: Hashed password.
        confirmed: Whether the email address has been confirmed.
        role_id: Foreign key to roles table.
        active: Whether the user can log in.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    lastname: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hashed password (argon2)",
    )
    confirmed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether the email address has been confirmed",
    )
    role_id: Mapped[int] = mapped_column(
        ForeignKey("roles.id"),
        nullable=False,
        index=True,
        comment="Foreign key to roles table",
    )
    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Whether the user can log in",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    # Relationships
    role: Mapped["RoleModel"] = relationship(  # noqa: F821
        "RoleModel",
        back_populates="users",
    )
    addresses: Mapped[list["AddressModel"]] = relationship(  # noqa: F821
        "AddressModel",
        back_populates="user",
    )
    tokens: Mapped[list["TokenModel"]] = relationship(  # noqa: F821
        "TokenModel",
        back_populates="user",
    )

    @property
    def role_name(self) -> str | None:
        """Get the role name from the related role.

        Note: This requires the 'role' relationship to be loaded.
        """
        if "role" in self.__dict__ and self.role:
            return self.role.name
        return None

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role_id={self.role_id})>"
