"""Engine, session factory and transaction scopes for alertkit."""
from __future__ import annotations

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from alertkit.config import get_settings
from alertkit.models.base import Base

logger = logging.getLogger(__name__)

engine: Engine | None = None
SessionLocal: sessionmaker[Session] | None = None


def configure_sqlite(sqlite_engine: Engine) -> Engine:
    """Make a pysqlite engine enforce foreign keys and honour SAVEPOINTs.

    pysqlite starts transactions lazily and never before a SAVEPOINT, so a
    ``begin_nested()`` block would be released straight to disk. Driver-level
    transaction handling is switched off and SQLAlchemy emits ``BEGIN`` itself;
    savepoints then nest inside the caller's transaction.
    """

    @event.listens_for(sqlite_engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        # Join rows and user-owned rows rely on ON DELETE CASCADE / SET NULL.
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(sqlite_engine, "begin")
    def _on_begin(conn) -> None:
        conn.exec_driver_sql("BEGIN")

    return sqlite_engine


def make_engine(database_url: str, **kwargs) -> Engine:
    """Create an engine for ``database_url``, applying the SQLite setup when relevant."""

    if make_url(database_url).get_backend_name() != "sqlite":
        return create_engine(database_url, future=True, **kwargs)
    connect_args = {"check_same_thread": False, **kwargs.pop("connect_args", {})}
    return configure_sqlite(create_engine(database_url, future=True, connect_args=connect_args, **kwargs))


def init_engine() -> Engine:
    """Create the process-wide engine and session factory on first use."""

    global engine, SessionLocal
    if engine is None:
        database_url = get_settings().database_url
        engine = make_engine(database_url)
        SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
        logger.info("Database engine initialised", extra={"backend": engine.dialect.name})
    return engine


def get_engine() -> Engine:
    return engine if engine is not None else init_engine()


def get_sessionmaker() -> sessionmaker[Session]:
    if SessionLocal is None:
        init_engine()
    assert SessionLocal is not None
    return SessionLocal


def create_all() -> None:
    """Create every alertkit table that does not exist yet."""

    Base.metadata.create_all(bind=get_engine())


def close_engine() -> None:
    global engine, SessionLocal
    if engine is not None:
        engine.dispose()
    engine = None
    SessionLocal = None


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a request-scoped session."""

    session = get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Transactional scope for code running outside of a request.

    Commits when the block exits normally, rolls back and re-raises otherwise.
    """

    session = get_sessionmaker()()
    try:
        yield session
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Database error, transaction rolled back")
        raise
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = [
    "Base",
    "SessionLocal",
    "engine",
    "configure_sqlite",
    "make_engine",
    "create_all",
    "get_db",
    "get_engine",
    "get_sessionmaker",
    "init_engine",
    "close_engine",
    "session_scope",
]
