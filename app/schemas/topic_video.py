# app/schemas/topic_video.py
from datetime import datetime
from typing import Any, List, Optional, Union

from pydantic import AliasChoices, Field

from app.schemas.common import CamelModel

# ==================== Video Schemas ====================


class VideoCreate(CamelModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    video_url: Optional[str] = None
    video_type: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration_seconds: Optional[int] = Field(None, ge=0)
    order_index: Optional[int] = Field(
        None, ge=1, validation_alias=AliasChoices("orderIndex", "order_index", "order")
    )
    is_active: Optional[bool] = None
    is_preview: Optional[bool] = None
    transcript: Optional[str] = None
    resources: Optional[List[Any]] = None


class VideoUpdate(VideoCreate):
    """Same allow-list as create; only fields present in the body are applied."""


class VideoResponse(CamelModel):
    id: int
    topic_id: int
    module_id: int
    title: str
    description: Optional[str] = None
    video_url: Optional[str] = None
    video_type: str
    thumbnail_url: Optional[str] = None
    duration_seconds: int
    order_index: int
    is_active: bool
    is_preview: bool
    transcript: Optional[str] = None
    resources: List[Any] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class VideoReorderRequest(CamelModel):
    video_ids: Optional[List[int]] = None


# ==================== Nested (topic payload) ====================


class NestedVideoPayload(CamelModel):
    """A video inside a topic create/update payload.

    ``id`` is a persisted id, a ``new-...`` placeholder, or absent. ``duration``
    is given in minutes.
    """

    id: Optional[Union[int, str]] = None
    title: Optional[str] = None
    description: Optional[str] = None
    video_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("videoUrl", "video_url", "url")
    )
    video_type: Optional[str] = None
    thumbnail_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("thumbnailUrl", "thumbnail_url", "thumbnail")
    )
    duration: Optional[Union[float, str]] = None
    duration_seconds: Optional[int] = None
    order: Optional[int] = Field(
        None, validation_alias=AliasChoices("order", "orderIndex", "order_index")
    )
    is_active: Optional[bool] = None
    is_preview: Optional[bool] = None
    transcript: Optional[str] = None
    resources: Optional[List[Any]] = None
