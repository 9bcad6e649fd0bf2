"""SQLAlchemy model for the actions table.

Actions are the closed permission vocabulary. They are seeded at startup and
never modified by the application.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deliverybase.infrastructure.persistence.database import Base


class ActionModel(Base):
    """SQLAlchemy model for the actions table.

    Attributes:
        id: Auto-incrementing primary key.
        name: Unique action name (e.g., 'CREATE_ORDER').
        description: Human-readable description.
        type: Category tag (e.g., 'ORDERS').
    """

    __tablename__ = "actions"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        index=True,
        comment="Action name checked by permission guards",
    )
    description: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
        comment="Category tag used for filtering",
    )

    role_actions: Mapped[list["RoleActionModel"]] = relationship(  # noqa: F821
        "RoleActionModel",
        back_populates="action",
    )

    def __repr__(self) -> str:
        return f"<Action(id={self.id}, name={self.name}, type={self.type})>"
