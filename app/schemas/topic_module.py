# app/schemas/topic_module.py
from datetime import datetime
from typing import List, Optional, Union

from pydantic import AliasChoices, Field

from app.schemas.common import CamelModel
from app.schemas.topic_video import NestedVideoPayload, VideoResponse

# ==================== Module Schemas ====================


class ModuleCreate(CamelModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    order_index: Optional[int] = Field(
        None, ge=1, validation_alias=AliasChoices("orderIndex", "order_index", "order")
    )
    is_active: Optional[bool] = None
    duration_minutes: Optional[int] = Field(None, ge=0)


class ModuleUpdate(ModuleCreate):
    """Same allow-list as create; only fields present in the body are applied."""


class ModuleResponse(CamelModel):
    id: int
    topic_id: int
    title: str
    description: Optional[str] = None
    order_index: int
    is_active: bool
    duration_minutes: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ModuleWithVideosResponse(ModuleResponse):
    videos: List[VideoResponse] = []


class ModuleReorderRequest(CamelModel):
    module_ids: Optional[List[int]] = None


# ==================== Nested (topic payload) ====================


class NestedModulePayload(CamelModel):
    """A module inside a topic create/update payload; see NestedVideoPayload."""

    id: Optional[Union[int, str]] = None
    title: Optional[str] = None
    description: Optional[str] = None
    order: Optional[int] = Field(
        None, validation_alias=AliasChoices("order", "orderIndex", "order_index")
    )
    is_active: Optional[bool] = None
    videos: Optional[List[NestedVideoPayload]] = None
