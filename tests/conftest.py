"""Test configuration."""
import os
from collections.abc import AsyncIterator, Callable, Iterator
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# --- Default env
os.environ.setdefault("ALERTKIT_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from alertkit.config import get_settings  # noqa: E402
from alertkit.db import get_db, make_engine  # noqa: E402
from alertkit.main import app  # noqa: E402
from alertkit.models import Base, ReportItem, User  # noqa: E402
from tests.owner_models import Article, Book, Comment  # noqa: E402

engine = make_engine("sqlite://", poolclass=StaticPool)

TestingSessionLocal = sessionmaker(autoflush=False, autocommit=False, future=True, expire_on_commit=False)

Base.metadata.create_all(engine)


@pytest.fixture
def db_session() -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection, join_transaction_mode="create_savepoint")
    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture(autouse=True)
def override_db_dependency(db_session: Session) -> Iterator[None]:
    def _get_db() -> Iterator[Session]:
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as async_client:
        yield async_client


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def make_user(db_session: Session) -> Callable[..., User]:
    def _factory(name: str = "user", *, is_active: bool = True) -> User:
        suffix = uuid4().hex[:8]
        user = User(username=f"{name}-{suffix}", email=f"{name}-{suffix}@example.com", is_active=is_active)
        db_session.add(user)
        db_session.flush()
        return user

    return _factory


@pytest.fixture
def make_book(db_session: Session) -> Callable[..., Book]:
    def _factory(name: str | None = None) -> Book:
        book = Book(name=name or f"book-{uuid4().hex[:6]}")
        db_session.add(book)
        db_session.flush()
        return book

    return _factory


@pytest.fixture
def make_comment(db_session: Session) -> Callable[..., Comment]:
    def _factory(body: str = "first!") -> Comment:
        comment = Comment(body=body)
        db_session.add(comment)
        db_session.flush()
        return comment

    return _factory


@pytest.fixture
def make_article(db_session: Session) -> Callable[..., Article]:
    def _factory(title: str = "release notes") -> Article:
        article = Article(title=title)
        db_session.add(article)
        db_session.flush()
        return article

    return _factory


@pytest.fixture
def make_report_item(db_session: Session) -> Callable[..., ReportItem]:
    def _factory(item_type: str = "abuse", title: str | None = None) -> ReportItem:
        item = ReportItem(type=item_type, title=title or f"item-{uuid4().hex[:6]}")
        db_session.add(item)
        db_session.flush()
        return item

    return _factory


@pytest.fixture
def actor_headers() -> Callable[[User], dict[str, str]]:
    def _headers(user: User) -> dict[str, str]:
        return {"X-User-Id": str(user.id)}

    return _headers
