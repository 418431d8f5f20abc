"""Alert model."""
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from alertkit.owners import OwnerRef

from .base import Base
from .user import User


class Alert(Base):
    """An alert raised by a user on any registered owner."""

    __tablename__ = "alerts"
    __table_args__ = (
        Index("ix_alerts_owner", "owner_type", "owner_id"),
        Index("ix_alerts_created_at", "created_at"),
    )

    type: Mapped[str] = mapped_column(String(100), nullable=False, default="alert", server_default="alert")
    owner_type: Mapped[str] = mapped_column(String(100), nullable=False)
    owner_id: Mapped[int] = mapped_column(nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", onupdate="CASCADE", ondelete="CASCADE"), nullable=False, index=True
    )
    seen_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped[User] = relationship()

    @property
    def owner_ref(self) -> OwnerRef:
        return OwnerRef(kind=self.owner_type, id=self.owner_id)

    @property
    def is_new(self) -> bool:
        return self.seen_at is None

    @property
    def is_seen(self) -> bool:
        return not self.is_new
