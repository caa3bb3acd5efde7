"""
User model.

Represents a registered user. Owned by the account system, the check-in
core only reads it and increases the quota balance.
"""

from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base

if TYPE_CHECKING:
    from app.models.log import Log


class User(Base):
    """User model - registered users with a quota balance."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            'quota >= 0', name='check_user_quota_non_negative'
        ),
    )

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    # Telegram data (transport identity)
    telegram_id: Mapped[int | None] = mapped_column(
        BigInteger, unique=True, index=True, nullable=True
    )
    username: Mapped[str | None] = mapped_column(
        String(255), nullable=True, index=True
    )

    # Pricing / policy group
    group: Mapped[str] = mapped_column(
        String(64), default="default", nullable=False, index=True
    )

    # Balance
    quota: Mapped[int] = mapped_column(
        BigInteger, default=0, nullable=False
    )

    # Registration time in epoch seconds (<= 0 means not recorded)
    created_time: Mapped[int] = mapped_column(
        BigInteger,
        default=0,
        nullable=False,
        comment="Registration timestamp, epoch seconds (0 = unknown)",
    )

    # Relationships
    logs: Mapped[list["Log"]] = relationship(
        "Log",
        back_populates="user",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<User(id={self.id}, username={self.username}, "
            f"group={self.group}, quota={self.quota})>"
        )

