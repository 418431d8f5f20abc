"""Report and report-item endpoints."""
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from alertkit.db import get_db
from alertkit.models.mixins import ReportableMixin
from alertkit.models.report import Report, ReportItem
from alertkit.models.user import User
from alertkit.routers.deps import get_owner
from alertkit.schemas.report import (
    ReportCreate,
    ReportItemCreate,
    ReportItemRead,
    ReportRead,
    ReportResolve,
    ReportSummary,
)
from alertkit.security import require_actor
from alertkit.services.reports import (
    Reportable,
    assign_report,
    create_report_item,
    delete_report_item,
    get_report,
    list_report_items,
    resolve_report,
)
from alertkit.utils.errors import error_response, not_found

router = APIRouter(tags=["reports"])


def _reportable(db: Session, owner: Any, actor: User | None) -> Reportable:
    if not isinstance(owner, ReportableMixin):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_response("NOT_REPORTABLE", "This owner kind does not accept reports."),
        )
    return Reportable(db, owner, current_actor=actor)


def _report_or_404(db: Session, report_id: int) -> Report:
    report = get_report(db, report_id)
    if report is None:
        raise not_found("REPORT_NOT_FOUND", "Report not found.")
    return report


def _read(report: Report) -> ReportRead:
    return ReportRead.model_validate(report)


@router.get("/owners/{owner_kind}/{owner_id}/reports", response_model=list[ReportRead])
def list_reports(owner: Any = Depends(get_owner), db: Session = Depends(get_db)) -> list[ReportRead]:
    stmt = _reportable(db, owner, None).reports()
    return [_read(report) for report in db.scalars(stmt).all()]


@router.get("/owners/{owner_kind}/{owner_id}/reports/summary", response_model=ReportSummary)
def reports_summary(owner: Any = Depends(get_owner), db: Session = Depends(get_db)) -> ReportSummary:
    reportable = _reportable(db, owner, None)
    return ReportSummary(
        owner_type=reportable.owner.kind,
        owner_id=reportable.owner.id,
        is_reported=reportable.is_reported(),
        reports_count=reportable.reports_count(),
    )


@router.post(
    "/owners/{owner_kind}/{owner_id}/reports",
    response_model=ReportRead,
    status_code=status.HTTP_201_CREATED,
)
def create_report(
    payload: ReportCreate,
    owner: Any = Depends(get_owner),
    db: Session = Depends(get_db),
    actor: User = Depends(require_actor),
) -> ReportRead:
    reportable = _reportable(db, owner, actor)
    try:
        with db.begin_nested():
            report = reportable.create_report(payload.report_item_ids, payload.user_message)
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_response("REPORT_ITEM_NOT_FOUND", "One or more report items do not exist."),
        ) from exc
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=error_response("NO_ACTOR", "An acting user is required."),
        )
    db.commit()
    db.refresh(report)
    return _read(report)


@router.get("/reports/{report_id}", response_model=ReportRead)
def read_report(report_id: int, db: Session = Depends(get_db)) -> ReportRead:
    return _read(_report_or_404(db, report_id))


@router.post("/reports/{report_id}/assign", response_model=ReportRead)
def assign(
    report_id: int,
    admin_id: int | None = Query(default=None),
    db: Session = Depends(get_db),
    actor: User = Depends(require_actor),
) -> ReportRead:
    """Assign to ``admin_id`` when given, otherwise to the acting user."""

    report = _report_or_404(db, report_id)
    admin = actor
    if admin_id is not None:
        admin = db.get(User, admin_id)
        if admin is None:
            raise not_found("ADMIN_NOT_FOUND", "Admin user not found.")
    assign_report(db, report, admin)
    db.commit()
    db.refresh(report)
    return _read(report)


@router.post("/reports/{report_id}/resolve", response_model=ReportRead)
def resolve(
    report_id: int,
    payload: ReportResolve | None = None,
    db: Session = Depends(get_db),
    actor: User = Depends(require_actor),
) -> ReportRead:
    report = _report_or_404(db, report_id)
    resolve_report(db, report, actor, admin_message=payload.admin_message if payload else None)
    db.commit()
    db.refresh(report)
    return _read(report)


@router.get("/report-items", response_model=list[ReportItemRead])
def list_items(
    item_type: str | None = Query(default=None, alias="type"),
    db: Session = Depends(get_db),
) -> list[ReportItem]:
    return list_report_items(db, item_type)


@router.post(
    "/report-items",
    response_model=ReportItemRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_actor)],
)
def create_item(payload: ReportItemCreate, db: Session = Depends(get_db)) -> ReportItem:
    item = create_report_item(db, item_type=payload.type, title=payload.title)
    db.commit()
    db.refresh(item)
    return item


@router.delete(
    "/report-items/{item_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_actor)]
)
def delete_item(item_id: int, db: Session = Depends(get_db)) -> None:
    item = db.get(ReportItem, item_id)
    if item is None:
        raise not_found("REPORT_ITEM_NOT_FOUND", "Report item not found.")
    delete_report_item(db, item)
    db.commit()
