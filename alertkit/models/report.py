"""Report, report item and their join table."""
from __future__ import annotations

from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from alertkit.owners import OwnerRef

from .base import Base
from .user import User

report_report_item = Table(
    "report_report_item",
    Base.metadata,
    Column("report_id", Integer, ForeignKey("reports.id", ondelete="CASCADE"), primary_key=True),
    Column("report_item_id", Integer, ForeignKey("report_items.id", ondelete="CASCADE"), primary_key=True),
)


class ReportStatus(str, PyEnum):
    """Derived lifecycle state of a report."""

    OPEN = "OPEN"
    ASSIGNED = "ASSIGNED"
    RESOLVED = "RESOLVED"


class ReportItem(Base):
    """A reason a report can reference, e.g. ``("abuse", "Spam")``."""

    __tablename__ = "report_items"

    type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)

    reports: Mapped[list["Report"]] = relationship(
        secondary=report_report_item, back_populates="report_items"
    )


class Report(Base):
    """A user-initiated flag on any registered owner."""

    __tablename__ = "reports"
    __table_args__ = (Index("ix_reports_owner", "owner_type", "owner_id"),)

    owner_type: Mapped[str] = mapped_column(String(100), nullable=False)
    owner_id: Mapped[int] = mapped_column(nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", onupdate="CASCADE", ondelete="CASCADE"), nullable=False, index=True
    )
    user_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    admin_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", onupdate="CASCADE", ondelete="SET NULL"), nullable=True, index=True
    )
    admin_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped[User] = relationship(foreign_keys=[user_id])
    admin: Mapped[User | None] = relationship(foreign_keys=[admin_id])
    report_items: Mapped[list[ReportItem]] = relationship(
        secondary=report_report_item, back_populates="reports"
    )

    @property
    def owner_ref(self) -> OwnerRef:
        return OwnerRef(kind=self.owner_type, id=self.owner_id)

    @property
    def is_resolved(self) -> bool:
        return self.resolved_at is not None

    @property
    def status(self) -> ReportStatus:
        if self.resolved_at is not None:
            return ReportStatus.RESOLVED
        if self.admin_id is not None:
            return ReportStatus.ASSIGNED
        return ReportStatus.OPEN
