import json
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, field_validator


class NotificationResponse(BaseModel):
    id: int
    type: str
    title: str | None = None
    body: str | None = None
    payload: dict | None = None
    is_read: bool
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("payload", mode="before")
    @classmethod
    def parse_payload(cls, v):
        # Stored as a JSON string on the row
        if isinstance(v, str):
            return json.loads(v)
        return v


class MarkReadBody(BaseModel):
    """PATCH /notifications/read body."""

    ids: List[int] = []
