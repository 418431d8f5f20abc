"""Owner models used by the test-suite."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from alertkit.models import AlertableMixin, Base, ReportableMixin


class Book(AlertableMixin, ReportableMixin, Base):
    __tablename__ = "books"

    name: Mapped[str] = mapped_column(String(100), nullable=False)


class Comment(AlertableMixin, ReportableMixin, Base):
    """Keeps its alerts and reports when deleted."""

    __tablename__ = "comments"
    __owner_kind__ = "comment"
    remove_alerts_on_delete = False
    remove_reports_on_delete = False

    body: Mapped[str] = mapped_column(String(255), nullable=False)


class Article(AlertableMixin, Base):
    """Alertable only."""

    __tablename__ = "articles"

    title: Mapped[str] = mapped_column(String(100), nullable=False)
