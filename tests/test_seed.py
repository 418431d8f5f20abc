from sqlalchemy import select

from alertkit.models import ReportItem
from scripts.seed import DEFAULT_REPORT_ITEMS, DEMO_USERS, seed_report_items, seed_users


def test_seed_report_items_is_idempotent(db_session):
    assert seed_report_items(db_session) == len(DEFAULT_REPORT_ITEMS)
    assert seed_report_items(db_session) == 0

    titles = db_session.scalars(select(ReportItem.title).where(ReportItem.type == "abuse")).all()
    assert set(titles) == {"Spam", "Harassment", "Offensive content"}


def test_seed_users_skips_existing(db_session):
    assert seed_users(db_session) == len(DEMO_USERS)
    assert seed_users(db_session) == 0
