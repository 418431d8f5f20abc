"""Alert schemas."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AlertCreate(BaseModel):
    type: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None


class AlertRead(BaseModel):
    id: int
    type: str
    owner_type: str
    owner_id: int
    user_id: int
    seen_at: datetime | None
    description: str | None
    is_new: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AlertSummary(BaseModel):
    owner_type: str
    owner_id: int
    is_alerted: bool
    is_alerted_by_actor: bool
    alerts_count: int


class AlertDeleteResult(BaseModel):
    deleted: int
