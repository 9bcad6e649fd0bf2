"""SQLAlchemy model for the tokens table.

One-time tokens used for email confirmation and password reset.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deliverybase.infrastructure.persistence.database import Base


class TokenModel(Base):
    """SQLAlchemy model for the tokens table.

    Attributes:
        id: Auto-incrementing primary key.
        token: Opaque token value.
        user_id: User the token was issued to.
        created_at: Timestamp when the token was issued.
    """

    __tablename__ = "tokens"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    token: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )

    user: Mapped["UserModel"] = relationship(  # noqa: F821
        "UserModel",
        back_populates="tokens",
    )

    def __repr__(self) -> str:
        return f"<Token(id={self.id}, user_id={self.user_id})>"
