"""Seed the default report-item catalogue and a pair of demo users."""
from __future__ import annotations

from dotenv import load_dotenv

load_dotenv()

from sqlalchemy import select
from sqlalchemy.orm import Session

from alertkit import db
from alertkit.config import get_settings
from alertkit.models import ReportItem, User

DEFAULT_REPORT_ITEMS: tuple[tuple[str, str], ...] = (
    ("abuse", "Spam"),
    ("abuse", "Harassment"),
    ("abuse", "Offensive content"),
    ("content", "Copyright infringement"),
    ("content", "Wrong information"),
)

DEMO_USERS: tuple[tuple[str, str], ...] = (
    ("alice", "alice@example.com"),
    ("bob", "bob@example.com"),
)


def seed_report_items(session: Session) -> int:
    """Insert missing default report items; returns how many were added."""

    existing = {(row.type, row.title) for row in session.execute(select(ReportItem.type, ReportItem.title))}
    missing = [pair for pair in DEFAULT_REPORT_ITEMS if pair not in existing]
    session.add_all(ReportItem(type=item_type, title=title) for item_type, title in missing)
    session.flush()
    return len(missing)


def seed_users(session: Session) -> int:
    existing = set(session.scalars(select(User.username)))
    missing = [(name, email) for name, email in DEMO_USERS if name not in existing]
    session.add_all(User(username=name, email=email) for name, email in missing)
    session.flush()
    return len(missing)


def main() -> None:
    settings = get_settings()
    print(f"Using database: {settings.database_url}")

    db.create_all()
    with db.session_scope() as session:
        items = seed_report_items(session)
        users = seed_users(session)
    print(f"Seed data inserted: {items} report items, {users} users.")


if __name__ == "__main__":
    main()
