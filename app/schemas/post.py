from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from app.config import settings
from app.schemas.user import UserSummary


class PostBase(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    body: str = Field(min_length=1)


class PostCreate(PostBase):
    pass


class PostUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    body: str | None = Field(default=None, min_length=1)


class PostResponse(BaseModel):
    id: int
    title: str
    body: str
    image_url: str | None = None
    user: UserSummary | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("image_url")
    def serialize_image_url(self, image_url: str | None):
        if not image_url:
            return None
        return settings.STORAGE_URL.rstrip("/") + "/" + image_url.lstrip("/")
