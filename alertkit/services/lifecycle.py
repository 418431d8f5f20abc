"""Owner deletion with alert/report cascade."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from alertkit.models.mixins import AlertableMixin, ReportableMixin
from alertkit.owners import owner_ref
from alertkit.services.alerts import Alertable
from alertkit.services.reports import Reportable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OwnerDeletion:
    """Number of dependent rows removed alongside an owner."""

    alerts: int = 0
    reports: int = 0


def delete_owner(db: Session, owner: Any) -> OwnerDeletion:
    """Delete ``owner`` and, per its class flags, its alerts and reports.

    Everything runs inside one savepoint: on failure nothing is removed and the
    error propagates. The enclosing transaction is left for the caller to commit.
    """

    ref = owner_ref(owner)
    cls = type(owner)
    alerts_removed = reports_removed = 0
    try:
        with db.begin_nested():
            if isinstance(owner, AlertableMixin) and cls.removes_alerts_on_delete():
                alerts_removed = Alertable(db, ref).remove_alerts()
            if isinstance(owner, ReportableMixin) and cls.removes_reports_on_delete():
                reports_removed = Reportable(db, ref).remove_reports()
            db.delete(owner)
            db.flush()
    except SQLAlchemyError:
        logger.exception("Owner deletion rolled back", extra={"owner": str(ref)})
        raise

    logger.info(
        "Owner deleted",
        extra={"owner": str(ref), "alerts_removed": alerts_removed, "reports_removed": reports_removed},
    )
    return OwnerDeletion(alerts=alerts_removed, reports=reports_removed)


__all__ = ["OwnerDeletion", "delete_owner"]
