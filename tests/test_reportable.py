import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from alertkit.models.report import Report, ReportStatus, report_report_item
from alertkit.services.reports import Reportable, report_items_query, where_reported_by
from tests.owner_models import Book


def _links(db_session, report):
    rows = db_session.execute(
        select(report_report_item.c.report_item_id)
        .where(report_report_item.c.report_id == report.id)
        .order_by(report_report_item.c.report_item_id)
    )
    return [row.report_item_id for row in rows]


def test_create_report_links_items(db_session, make_user, make_book, make_report_item):
    user = make_user()
    book = make_book()
    spam = make_report_item("abuse", "Spam")
    offensive = make_report_item("abuse", "Offensive")

    report = book.reportable(current_actor=user).create_report([spam.id, offensive.id], "please check")

    assert report is not None
    assert (report.owner_type, report.owner_id) == ("Book", book.id)
    assert report.user_id == user.id
    assert report.user_message == "please check"
    assert report.admin_id is None
    assert report.admin_message is None
    assert report.resolved_at is None
    assert report.status is ReportStatus.OPEN
    assert _links(db_session, report) == sorted([spam.id, offensive.id])
    assert {item.id for item in report.report_items} == {spam.id, offensive.id}


def test_create_report_with_explicit_actor(db_session, make_user, make_book):
    current = make_user()
    other = make_user()
    book = make_book()

    report = book.reportable(current_actor=current).create_report(actor=other)

    assert report.user_id == other.id
    assert report.user.id == other.id


def test_create_report_without_actor_writes_nothing(db_session, make_book, make_report_item):
    book = make_book()
    item = make_report_item()

    assert book.reportable().create_report([item.id]) is None
    assert book.reports_count == 0
    assert db_session.scalar(select(report_report_item.c.report_id)) is None


def test_create_report_without_items(db_session, make_user, make_book):
    user = make_user()
    book = make_book()

    report = book.reportable(current_actor=user).create_report()

    assert report.report_items == []
    assert _links(db_session, report) == []
    assert book.is_reported is True


def test_duplicate_item_ids_link_once(db_session, make_user, make_book, make_report_item):
    user = make_user()
    book = make_book()
    item = make_report_item()

    report = book.reportable(current_actor=user).create_report([item.id, item.id])

    assert _links(db_session, report) == [item.id]


def test_unknown_item_id_fails_and_leaves_nothing_behind(db_session, make_user, make_book):
    user = make_user()
    book = make_book()
    reportable = book.reportable(current_actor=user)

    with pytest.raises(IntegrityError):
        with db_session.begin_nested():
            reportable.create_report([987654])

    assert reportable.reports_count() == 0


def test_is_reported_with_and_without_actor(db_session, make_user, make_book):
    reporter = make_user()
    stranger = make_user()
    book = make_book()
    reportable = book.reportable()

    assert reportable.is_reported() is False

    reportable.create_report(actor=reporter)

    assert reportable.is_reported() is True
    assert reportable.is_reported(reporter) is True
    assert reportable.is_reported(stranger.id) is False


def test_reports_count_and_query(db_session, make_user, make_book):
    user = make_user()
    book = make_book()
    reportable = Reportable(db_session, book, current_actor=user)
    first = reportable.create_report()
    second = reportable.create_report()
    make_book().reportable(current_actor=user).create_report()

    assert reportable.reports_count() == 2
    assert db_session.scalars(reportable.reports()).all() == [first, second]


def test_remove_reports_drops_links_but_keeps_items(db_session, make_user, make_book, make_report_item):
    user = make_user()
    book = make_book()
    item = make_report_item()
    reportable = book.reportable(current_actor=user)
    reportable.create_report([item.id])
    reportable.create_report([item.id])

    assert reportable.remove_reports() == 2

    assert reportable.reports_count() == 0
    assert db_session.scalar(select(report_report_item.c.report_id)) is None
    assert db_session.get(type(item), item.id) is not None


def test_report_items_query(db_session, make_user, make_book, make_report_item):
    user = make_user()
    book = make_book()
    first = make_report_item()
    second = make_report_item()
    make_report_item()

    report = book.reportable(current_actor=user).create_report([second.id, first.id])

    assert db_session.scalars(report_items_query(report)).all() == [first, second]


def test_where_reported_by(db_session, make_user, make_book):
    user = make_user()
    stranger = make_user()
    reported = make_book("reported")
    make_book("clean")
    reported.reportable(current_actor=user).create_report()

    assert db_session.scalars(Book.where_reported_by(user)).all() == [reported]
    assert db_session.scalars(where_reported_by(Book, stranger)).all() == []


def test_alert_only_owner_has_no_reportable(db_session, make_article):
    article = make_article()

    assert not hasattr(article, "reportable")
    assert db_session.scalar(select(Report.id)) is None
