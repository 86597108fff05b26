"""Pydantic schemas for post creation, partial updates and responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.common.enums import PostStatus


class PostCreate(BaseModel):
    caption: str = Field(min_length=1, max_length=300, description="max Length 300")
    status: PostStatus = PostStatus.Published


class PostUpdate(BaseModel):
    """Partial update; omitted fields keep their stored values."""

    caption: str | None = Field(default=None, min_length=1, max_length=300, description="max Length 300")
    status: PostStatus | None = None

    @model_validator(mode="after")
    def require_a_field(self) -> "PostUpdate":
        if self.caption is None and self.status is None:
            raise ValueError("provide caption or status to update")
        return self


class PostResponse(BaseModel):
    id: int
    caption: str
    status: PostStatus
    author_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
