"""Schema package exports."""
from .alert import AlertCreate, AlertDeleteResult, AlertRead, AlertSummary
from .report import (
    ReportCreate,
    ReportItemCreate,
    ReportItemRead,
    ReportRead,
    ReportResolve,
    ReportSummary,
)

__all__ = [
    "AlertCreate",
    "AlertDeleteResult",
    "AlertRead",
    "AlertSummary",
    "ReportCreate",
    "ReportItemCreate",
    "ReportItemRead",
    "ReportRead",
    "ReportResolve",
    "ReportSummary",
]
