"""
Log model.

Append-only audit log. Check-in records (``LogType.SIGN``) double as the
only source of truth for "user signed on day D".
"""

from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base


if TYPE_CHECKING:
    from app.models.user import User


class LogType:
    """Log type constants."""

    TOPUP = "topup"
    CONSUME = "consume"
    MANAGE = "manage"
    SYSTEM = "system"
    SIGN = "sign"  # Daily check-in reward


class Log(Base):
    """
    Audit log entry.

    Records are created once and never updated or deleted by the
    check-in core.

    Attributes:
        id: Primary key
        user_id: Owner of the record
        username: Display name at the time of writing (best effort)
        created_at: Creation time, epoch seconds
        type: Kind discriminator (from LogType)
        content: Human-readable summary
        quota: Quota delta carried by this record
    """

    __tablename__ = "logs"
    __table_args__ = (
        # Range/count lookups: user + kind + time window
        Index("ix_logs_user_type_created", "user_id", "type", "created_at"),
    )

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    username: Mapped[str] = mapped_column(String(255), default="", nullable=False)

    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)

    type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)

    content: Mapped[str] = mapped_column(Text, default="", nullable=False)

    quota: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="logs",
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Log(id={self.id}, user_id={self.user_id}, "
            f"type={self.type}, created_at={self.created_at})>"
        )
