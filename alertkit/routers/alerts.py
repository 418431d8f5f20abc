"""Alerts endpoints."""
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from alertkit.db import get_db
from alertkit.models.alert import Alert
from alertkit.models.mixins import AlertableMixin
from alertkit.models.user import User
from alertkit.routers.deps import get_owner
from alertkit.schemas.alert import AlertCreate, AlertDeleteResult, AlertRead, AlertSummary
from alertkit.security import get_current_actor, require_actor
from alertkit.services.alerts import Alertable, delete_alert_record, get_alert, mark_alert_seen
from alertkit.utils.errors import error_response, not_found

router = APIRouter(tags=["alerts"])


def _alertable(db: Session, owner: Any, actor: User | None) -> Alertable:
    if not isinstance(owner, AlertableMixin):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_response("NOT_ALERTABLE", "This owner kind does not accept alerts."),
        )
    return Alertable(db, owner, current_actor=actor)


def _alert_or_404(db: Session, alert_id: int) -> Alert:
    alert = get_alert(db, alert_id)
    if alert is None:
        raise not_found("ALERT_NOT_FOUND", "Alert not found.")
    return alert


@router.get("/owners/{owner_kind}/{owner_id}/alerts", response_model=list[AlertRead])
def list_alerts(
    alert_type: str | None = Query(default=None, alias="type"),
    owner: Any = Depends(get_owner),
    db: Session = Depends(get_db),
) -> list[Alert]:
    stmt = _alertable(db, owner, None).alerts()
    if alert_type:
        stmt = stmt.where(Alert.type == alert_type)
    return list(db.scalars(stmt).all())


@router.get("/owners/{owner_kind}/{owner_id}/alerts/summary", response_model=AlertSummary)
def alerts_summary(
    owner: Any = Depends(get_owner),
    db: Session = Depends(get_db),
    actor: User | None = Depends(get_current_actor),
) -> AlertSummary:
    alertable = _alertable(db, owner, actor)
    return AlertSummary(
        owner_type=alertable.owner.kind,
        owner_id=alertable.owner.id,
        is_alerted=alertable.is_alerted(),
        is_alerted_by_actor=alertable.is_alerted_by(),
        alerts_count=alertable.alerts_count(),
    )


@router.post(
    "/owners/{owner_kind}/{owner_id}/alerts",
    response_model=AlertRead,
    status_code=status.HTTP_201_CREATED,
)
def create_alert(
    payload: AlertCreate,
    owner: Any = Depends(get_owner),
    db: Session = Depends(get_db),
    actor: User = Depends(require_actor),
) -> Alert:
    alert = _alertable(db, owner, actor).create_alert(payload.type, description=payload.description)
    if alert is None:
        # require_actor guarantees an actor, so this only happens if it lost its id.
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=error_response("NO_ACTOR", "An acting user is required."),
        )
    db.commit()
    db.refresh(alert)
    return alert


@router.delete("/owners/{owner_kind}/{owner_id}/alerts", response_model=AlertDeleteResult)
def delete_alerts(
    alert_type: str | None = Query(default=None, alias="type"),
    mine: bool = Query(default=False),
    owner: Any = Depends(get_owner),
    db: Session = Depends(get_db),
    actor: User = Depends(require_actor),
) -> AlertDeleteResult:
    """Delete alerts of a type; ``mine=true`` limits it to the acting user's alerts."""

    deleted = _alertable(db, owner, actor).delete_alert(alert_type, by_current_actor=mine)
    db.commit()
    return AlertDeleteResult(deleted=deleted)


@router.post("/alerts/{alert_id}/seen", response_model=AlertRead, dependencies=[Depends(require_actor)])
def see_alert(alert_id: int, db: Session = Depends(get_db)) -> Alert:
    alert = _alert_or_404(db, alert_id)
    mark_alert_seen(db, alert)
    db.commit()
    db.refresh(alert)
    return alert


@router.delete(
    "/alerts/{alert_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_actor)]
)
def delete_alert(alert_id: int, db: Session = Depends(get_db)) -> None:
    alert = _alert_or_404(db, alert_id)
    delete_alert_record(db, alert)
    db.commit()
