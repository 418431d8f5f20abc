"""ORM models package."""
from .alert import Alert
from .base import Base
from .mixins import AlertableMixin, OwnerMixin, ReportableMixin
from .report import Report, ReportItem, ReportStatus, report_report_item
from .user import User

__all__ = [
    "Alert",
    "AlertableMixin",
    "Base",
    "OwnerMixin",
    "Report",
    "ReportItem",
    "ReportStatus",
    "ReportableMixin",
    "User",
    "report_report_item",
]
