"""Capability mixins for owner models.

Mix ``AlertableMixin`` and/or ``ReportableMixin`` into a mapped class to register
it as an owner kind and give its instances access to their alerts and reports::

    class Book(AlertableMixin, ReportableMixin, Base):
        __tablename__ = "books"
        __owner_kind__ = "book"          # optional, defaults to the class name
        remove_alerts_on_delete = False  # optional, defaults to the setting

The behaviour itself lives in :mod:`alertkit.services.alerts` and
:mod:`alertkit.services.reports`; the mixins only hand out capability objects
bound to the instance.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from sqlalchemy import Select
from sqlalchemy.orm import Session, object_session

from alertkit.config import get_settings
from alertkit.owners import register_owner

if TYPE_CHECKING:
    from alertkit.core.actors import Actor
    from alertkit.services.alerts import Alertable
    from alertkit.services.reports import Reportable


def _is_mapped_subclass(cls: type) -> bool:
    return "__tablename__" in cls.__dict__ or "__table__" in cls.__dict__


def _bound_session(instance: Any, db: Session | None) -> Session:
    session = db or object_session(instance)
    if session is None:
        raise RuntimeError(f"{type(instance).__name__} instance is not attached to a session")
    return session


class OwnerMixin:
    """Registers concrete subclasses in the owner registry."""

    __owner_kind__: ClassVar[str | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if _is_mapped_subclass(cls):
            register_owner(cls)


class AlertableMixin(OwnerMixin):
    """Lets instances own :class:`Alert` rows."""

    remove_alerts_on_delete: ClassVar[bool | None] = None

    @classmethod
    def removes_alerts_on_delete(cls) -> bool:
        if cls.remove_alerts_on_delete is None:
            return get_settings().REMOVE_ALERTS_ON_DELETE
        return cls.remove_alerts_on_delete

    @classmethod
    def where_alerted_by(cls, actor: "Actor") -> Select:
        """``select(cls)`` narrowed to rows with at least one alert by ``actor``."""

        from alertkit.services.alerts import where_alerted_by

        return where_alerted_by(cls, actor)

    def alertable(self, db: Session | None = None, *, current_actor: "Actor | None" = None) -> "Alertable":
        from alertkit.services.alerts import Alertable

        return Alertable(_bound_session(self, db), self, current_actor=current_actor)

    @property
    def is_alerted(self) -> bool:
        return self.alertable().is_alerted()

    @property
    def alerts_count(self) -> int:
        return self.alertable().alerts_count()


class ReportableMixin(OwnerMixin):
    """Lets instances own :class:`Report` rows."""

    remove_reports_on_delete: ClassVar[bool | None] = None

    @classmethod
    def removes_reports_on_delete(cls) -> bool:
        if cls.remove_reports_on_delete is None:
            return get_settings().REMOVE_REPORTS_ON_DELETE
        return cls.remove_reports_on_delete

    @classmethod
    def where_reported_by(cls, actor: "Actor") -> Select:
        """``select(cls)`` narrowed to rows with at least one report by ``actor``."""

        from alertkit.services.reports import where_reported_by

        return where_reported_by(cls, actor)

    def reportable(self, db: Session | None = None, *, current_actor: "Actor | None" = None) -> "Reportable":
        from alertkit.services.reports import Reportable

        return Reportable(_bound_session(self, db), self, current_actor=current_actor)

    @property
    def is_reported(self) -> bool:
        return self.reportable().is_reported()

    @property
    def reports_count(self) -> int:
        return self.reportable().reports_count()


__all__ = ["OwnerMixin", "AlertableMixin", "ReportableMixin"]
