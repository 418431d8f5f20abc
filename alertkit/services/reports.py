"""Report services: the Reportable capability, report workflow and report items."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy import Select, delete, exists, func, insert, select
from sqlalchemy.orm import Session

from alertkit.core.actors import Actor, actor_id, resolve_actor_id
from alertkit.models.report import Report, ReportItem, report_report_item
from alertkit.owners import load_owner, owner_kind_of, owner_ref
from alertkit.utils.time import utcnow

logger = logging.getLogger(__name__)


class Reportable:
    """Report operations scoped to a single owner.

    Methods flush but never commit; the caller owns the transaction.
    """

    def __init__(self, db: Session, owner: Any, *, current_actor: Actor | None = None):
        self.db = db
        self.owner = owner_ref(owner)
        self.current_actor = current_actor

    def __repr__(self) -> str:
        return f"<Reportable {self.owner}>"

    def _owned(self, stmt):
        return stmt.where(Report.owner_type == self.owner.kind, Report.owner_id == self.owner.id)

    def reports(self) -> Select:
        return self._owned(select(Report)).order_by(Report.id.asc())

    def create_report(
        self,
        report_item_ids: Iterable[int] = (),
        user_message: str | None = None,
        actor: Actor | None = None,
    ) -> Report | None:
        """File a report on the owner and link it to ``report_item_ids``.

        Returns ``None`` without writing anything when no actor resolves. Item ids
        are not checked up front; an unknown id fails on the foreign key.
        """

        user_id = resolve_actor_id(actor, self.current_actor)
        if user_id is None:
            logger.info("Report not created: no actor", extra={"owner": str(self.owner)})
            return None

        item_ids = list(dict.fromkeys(int(item_id) for item_id in report_item_ids))
        report = Report(
            owner_type=self.owner.kind,
            owner_id=self.owner.id,
            user_id=user_id,
            user_message=user_message,
        )
        self.db.add(report)
        self.db.flush()
        if item_ids:
            self.db.execute(
                insert(report_report_item),
                [{"report_id": report.id, "report_item_id": item_id} for item_id in item_ids],
            )
            self.db.expire(report, ["report_items"])
        logger.info(
            "Report created",
            extra={"report_id": report.id, "owner": str(self.owner), "user_id": user_id, "items": item_ids},
        )
        return report

    def is_reported(self, actor: Actor | None = None) -> bool:
        """Any report on the owner, or any by ``actor`` when one is given."""

        criteria = self._owned(exists())
        if actor is not None:
            criteria = criteria.where(Report.user_id == actor_id(actor))
        return bool(self.db.scalar(criteria.select()))

    def reports_count(self) -> int:
        return self.db.scalar(self._owned(select(func.count(Report.id)))) or 0

    def remove_reports(self) -> int:
        """Delete every report of the owner together with its item links."""

        report_ids = self._owned(select(Report.id))
        self.db.execute(delete(report_report_item).where(report_report_item.c.report_id.in_(report_ids)))
        removed = self.db.execute(self._owned(delete(Report))).rowcount
        if removed:
            logger.info("Reports removed", extra={"owner": str(self.owner), "count": removed})
        return removed


def where_reported_by(model: type, actor: Actor) -> Select:
    """``select(model)`` narrowed to owners with at least one report by ``actor``."""

    return select(model).where(
        exists().where(
            Report.owner_type == owner_kind_of(model),
            Report.owner_id == model.id,
            Report.user_id == actor_id(actor),
        )
    )


# --- Report workflow --------------------------------------------------------


def get_report(db: Session, report_id: int) -> Report | None:
    return db.get(Report, report_id)


def assign_report(
    db: Session,
    report: Report,
    admin: Actor | None = None,
    *,
    current_actor: Actor | None = None,
) -> bool:
    """Assign ``report`` to an admin. Re-assigning overwrites the previous admin."""

    admin_id = resolve_actor_id(admin, current_actor)
    if admin_id is None:
        logger.info("Report not assigned: no admin", extra={"report_id": report.id})
        return False

    previous = report.admin_id
    report.admin_id = admin_id
    db.flush()
    db.expire(report, ["admin"])
    logger.info(
        "Report assigned",
        extra={"report_id": report.id, "admin_id": admin_id, "previous_admin_id": previous},
    )
    return True


def resolve_report(
    db: Session,
    report: Report,
    admin: Actor | None = None,
    *,
    current_actor: Actor | None = None,
    admin_message: str | None = None,
) -> bool:
    """Mark ``report`` resolved; an unassigned report is assigned to the resolver."""

    admin_id = resolve_actor_id(admin, current_actor)
    if admin_id is None:
        logger.info("Report not resolved: no admin", extra={"report_id": report.id})
        return False

    report.resolved_at = utcnow()
    if report.admin_id is None:
        report.admin_id = admin_id
        db.expire(report, ["admin"])
    if admin_message is not None:
        report.admin_message = admin_message
    db.flush()
    logger.info("Report resolved", extra={"report_id": report.id, "admin_id": report.admin_id})
    return True


def report_items_query(report: Report) -> Select:
    """Query for the items linked to ``report``."""

    return (
        select(ReportItem)
        .join(report_report_item, report_report_item.c.report_item_id == ReportItem.id)
        .where(report_report_item.c.report_id == report.id)
        .order_by(ReportItem.id.asc())
    )


def report_owner(db: Session, report: Report) -> Any | None:
    return load_owner(db, report.owner_ref)


def delete_report_record(db: Session, report: Report) -> None:
    """Delete one report; the ORM unlinks its items."""

    db.delete(report)
    db.flush()
    logger.info("Report deleted", extra={"report_id": report.id, "owner": str(report.owner_ref)})


# --- Report items -----------------------------------------------------------


def create_report_item(db: Session, *, item_type: str, title: str) -> ReportItem:
    item = ReportItem(type=item_type, title=title)
    db.add(item)
    db.flush()
    logger.info("Report item created", extra={"report_item_id": item.id, "type": item_type})
    return item


def list_report_items(db: Session, item_type: str | None = None) -> list[ReportItem]:
    stmt = select(ReportItem).order_by(ReportItem.id.asc())
    if item_type:
        stmt = stmt.where(ReportItem.type == item_type)
    return list(db.scalars(stmt).all())


def delete_report_item(db: Session, item: ReportItem) -> None:
    """Delete an item; the ORM unlinks it from every report that referenced it."""

    db.delete(item)
    db.flush()
    logger.info("Report item deleted", extra={"report_item_id": item.id})


__all__ = [
    "Reportable",
    "where_reported_by",
    "get_report",
    "assign_report",
    "resolve_report",
    "report_items_query",
    "report_owner",
    "delete_report_record",
    "create_report_item",
    "list_report_items",
    "delete_report_item",
]
