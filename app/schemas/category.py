# app/schemas/category.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_serializer

from app.schemas.common import CamelModel, PagePagination

# ==================== Category Schemas ====================


class CategoryWrite(CamelModel):
    """Create/update payload. Presence rules are enforced by the service so
    that clients get field-specific messages."""

    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    status: Optional[str] = None


class CategoryResponse(CamelModel):
    id: int
    name: str
    description: str
    topics_count: int
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("created_at", "updated_at")
    def _date_only(self, value: Optional[datetime]):
        return value.date().isoformat() if value else None


class CategoryListResponse(CamelModel):
    success: bool = True
    data: List[CategoryResponse]
    pagination: PagePagination
