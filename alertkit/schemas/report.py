"""Report schemas."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from alertkit.models.report import ReportStatus


class ReportItemCreate(BaseModel):
    type: str = Field(min_length=1, max_length=100)
    title: str = Field(min_length=1, max_length=255)


class ReportItemRead(BaseModel):
    id: int
    type: str
    title: str

    model_config = ConfigDict(from_attributes=True)


class ReportCreate(BaseModel):
    report_item_ids: list[int] = Field(default_factory=list)
    user_message: str | None = None


class ReportResolve(BaseModel):
    admin_message: str | None = None


class ReportRead(BaseModel):
    id: int
    owner_type: str
    owner_id: int
    user_id: int
    user_message: str | None
    admin_id: int | None
    admin_message: str | None
    resolved_at: datetime | None
    status: ReportStatus
    report_items: list[ReportItemRead]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReportSummary(BaseModel):
    owner_type: str
    owner_id: int
    is_reported: bool
    reports_count: int
