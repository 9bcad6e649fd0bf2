"""SQLAlchemy model for the role_actions table.

Grants linking a role to an action. A role's grant set is replaced wholesale
whenever the role is edited.
"""

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deliverybase.infrastructure.persistence.database import Base


class RoleActionModel(Base):
    """SQLAlchemy model for the role_actions table.

    Attributes:
        id: Auto-incrementing primary key.
        role_id: Foreign key to roles table.
        action_id: Foreign key to actions table.
    """

    __tablename__ = "role_actions"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    role_id: Mapped[int] = mapped_column(
        ForeignKey("roles.id"),
        nullable=False,
        index=True,
    )
    action_id: Mapped[int] = mapped_column(
        ForeignKey("actions.id"),
        nullable=False,
        index=True,
    )

    role: Mapped["RoleModel"] = relationship(  # noqa: F821
        "RoleModel",
        back_populates="role_actions",
    )
    action: Mapped["ActionModel"] = relationship(  # noqa: F821
        "ActionModel",
        back_populates="role_actions",
    )

    __table_args__ = (
        UniqueConstraint("role_id", "action_id", name="uq_role_actions_role_action"),
    )

    def __repr__(self) -> str:
        return f"<RoleAction(role_id={self.role_id}, action_id={self.action_id})>"
