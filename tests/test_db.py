import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from alertkit import db
from alertkit.config import get_settings
from alertkit.models import Alert, User
from alertkit.services.lifecycle import delete_owner
from tests.owner_models import Book


class RecordingSession:
    def __init__(self):
        self.calls = []

    def commit(self):
        self.calls.append("commit")

    def rollback(self):
        self.calls.append("rollback")

    def close(self):
        self.calls.append("close")


@pytest.fixture
def recording_session(monkeypatch):
    session = RecordingSession()
    monkeypatch.setattr(db, "get_sessionmaker", lambda: lambda: session)
    return session


def test_session_scope_commits(recording_session):
    with db.session_scope() as session:
        assert session is recording_session

    assert recording_session.calls == ["commit", "close"]


def test_session_scope_rolls_back_database_errors(recording_session):
    with pytest.raises(OperationalError):
        with db.session_scope():
            raise OperationalError("SELECT 1", {}, Exception("locked"))

    assert recording_session.calls == ["rollback", "close"]


def test_session_scope_rolls_back_other_errors(recording_session):
    with pytest.raises(KeyError):
        with db.session_scope():
            raise KeyError("missing")

    assert recording_session.calls == ["rollback", "close"]


@pytest.fixture
def file_database(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'alertkit.db'}")
    get_settings.cache_clear()
    db.close_engine()
    db.create_all()
    yield
    db.close_engine()
    get_settings.cache_clear()


def _seed_alerted_book():
    with db.session_scope() as session:
        user = User(username="reader", email="reader@example.com")
        book = Book(name="dune")
        session.add_all([user, book])
        session.flush()
        book.alertable(current_actor=user).create_alert()
        return book.id


def test_delete_owner_is_undone_by_caller_rollback(file_database):
    book_id = _seed_alerted_book()

    session = db.get_sessionmaker()()
    try:
        result = delete_owner(session, session.get(Book, book_id))
        assert result.alerts == 1
        session.rollback()
    finally:
        session.close()

    with db.session_scope() as fresh:
        book = fresh.get(Book, book_id)
        assert book is not None
        assert book.alerts_count == 1


def test_failed_session_scope_restores_deleted_owner(file_database):
    book_id = _seed_alerted_book()

    with pytest.raises(KeyError):
        with db.session_scope() as session:
            delete_owner(session, session.get(Book, book_id))
            raise KeyError("abort")

    with db.session_scope() as fresh:
        assert fresh.get(Book, book_id) is not None
        assert fresh.scalar(select(func.count(Alert.id))) == 1
