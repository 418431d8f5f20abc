"""Alert services: the Alertable capability and per-alert operations."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Select, delete, exists, func, select
from sqlalchemy.orm import Session

from alertkit.config import get_settings
from alertkit.core.actors import Actor, actor_id, resolve_actor_id
from alertkit.models.alert import Alert
from alertkit.owners import load_owner, owner_kind_of, owner_ref
from alertkit.utils.time import utcnow

logger = logging.getLogger(__name__)


def _resolve_type(alert_type: str | None) -> str:
    return get_settings().DEFAULT_ALERT_TYPE if alert_type is None else alert_type


class Alertable:
    """Alert operations scoped to a single owner.

    Methods flush but never commit; the caller owns the transaction.
    """

    def __init__(self, db: Session, owner: Any, *, current_actor: Actor | None = None):
        self.db = db
        self.owner = owner_ref(owner)
        self.current_actor = current_actor

    def __repr__(self) -> str:
        return f"<Alertable {self.owner}>"

    def _owned(self, stmt):
        return stmt.where(Alert.owner_type == self.owner.kind, Alert.owner_id == self.owner.id)

    def alerts(self) -> Select:
        """Query for every alert owned by this owner, oldest first."""

        return self._owned(select(Alert)).order_by(Alert.id.asc())

    def create_alert(
        self,
        alert_type: str | None = None,
        actor: Actor | None = None,
        description: str | None = None,
    ) -> Alert | None:
        """Raise an alert on the owner. Returns ``None`` when no actor resolves."""

        user_id = resolve_actor_id(actor, self.current_actor)
        if user_id is None:
            logger.info("Alert not created: no actor", extra={"owner": str(self.owner)})
            return None

        alert = Alert(
            type=_resolve_type(alert_type),
            owner_type=self.owner.kind,
            owner_id=self.owner.id,
            user_id=user_id,
            description=description,
        )
        self.db.add(alert)
        self.db.flush()
        logger.info(
            "Alert created",
            extra={"alert_id": alert.id, "owner": str(self.owner), "type": alert.type, "user_id": user_id},
        )
        return alert

    def is_alerted_by(self, actor: Actor | None = None) -> bool:
        user_id = resolve_actor_id(actor, self.current_actor)
        if user_id is None:
            return False
        stmt = self._owned(exists().where(Alert.user_id == user_id)).select()
        return bool(self.db.scalar(stmt))

    def is_alerted(self) -> bool:
        return bool(self.db.scalar(self._owned(exists()).select()))

    def alerts_count(self) -> int:
        return self.db.scalar(self._owned(select(func.count(Alert.id)))) or 0

    def delete_alert(
        self,
        alert_type: str | None = None,
        actor: Actor | None = None,
        *,
        by_current_actor: bool = False,
    ) -> int:
        """Delete this owner's alerts of ``alert_type``.

        Without an actor every alert of the type goes. ``by_current_actor`` restricts
        the deletion to the current actor and deletes nothing if there is none.
        """

        if actor is None and by_current_actor:
            user_id = actor_id(self.current_actor)
            if user_id is None:
                return 0
        else:
            user_id = actor_id(actor)

        alert_type = _resolve_type(alert_type)
        stmt = self._owned(delete(Alert)).where(Alert.type == alert_type)
        if user_id is not None:
            stmt = stmt.where(Alert.user_id == user_id)
        deleted = self.db.execute(stmt).rowcount
        logger.info(
            "Alerts deleted",
            extra={"owner": str(self.owner), "type": alert_type, "user_id": user_id, "count": deleted},
        )
        return deleted

    def remove_alerts(self) -> int:
        """Delete every alert of the owner regardless of type or actor."""

        removed = self.db.execute(self._owned(delete(Alert))).rowcount
        if removed:
            logger.info("Alerts removed", extra={"owner": str(self.owner), "count": removed})
        return removed


def where_alerted_by(model: type, actor: Actor) -> Select:
    """``select(model)`` narrowed to owners with at least one alert by ``actor``."""

    return select(model).where(
        exists().where(
            Alert.owner_type == owner_kind_of(model),
            Alert.owner_id == model.id,
            Alert.user_id == actor_id(actor),
        )
    )


def get_alert(db: Session, alert_id: int) -> Alert | None:
    return db.get(Alert, alert_id)


def mark_alert_seen(db: Session, alert: Alert) -> bool:
    """Stamp ``seen_at`` with the current time. Calling it again re-stamps."""

    alert.seen_at = utcnow()
    db.flush()
    logger.info("Alert seen", extra={"alert_id": alert.id})
    return True


def alert_owner(db: Session, alert: Alert) -> Any | None:
    """Return the entity the alert is attached to, ``None`` if it is gone."""

    return load_owner(db, alert.owner_ref)


def delete_alert_record(db: Session, alert: Alert) -> None:
    db.delete(alert)
    db.flush()
    logger.info("Alert deleted", extra={"alert_id": alert.id, "owner": str(alert.owner_ref)})


__all__ = [
    "Alertable",
    "where_alerted_by",
    "get_alert",
    "mark_alert_seen",
    "alert_owner",
    "delete_alert_record",
]
