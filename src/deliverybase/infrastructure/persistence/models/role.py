"""SQLAlchemy model for the roles table.

Roles are soft-deleted through the ``active`` flag and never removed.
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deliverybase.infrastructure.persistence.database import Base


class RoleModel(Base):
    """SQLAlchemy model for the roles table.

    Attributes:
        id: Auto-incrementing primary key.
        name: Unique, stable role identifier (e.g., 'ROLE_ADMIN').
        name_descriptive: Unique human-readable label.
        description: Optional description of the role's purpose.
        active: Whether the role is active.
    """

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        index=True,
        comment="Stable role identifier (e.g., 'ROLE_ADMIN')",
    )
    name_descriptive: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="Human-readable role label",
    )
    description: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Description of the role's purpose",
    )
    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Whether the role is active",
    )

    # Relationships
    users: Mapped[list["UserModel"]] = relationship(  # noqa: F821
        "UserModel",
        back_populates="role",
    )
    role_actions: Mapped[list["RoleActionModel"]] = relationship(  # noqa: F821
        "RoleActionModel",
        back_populates="role",
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name}, active={self.active})>"
