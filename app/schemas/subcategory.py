# app/schemas/subcategory.py
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, Field, field_serializer

from app.schemas.common import CamelModel

# ==================== Subcategory Schemas ====================


class SubcategoryWrite(CamelModel):
    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    status: Optional[str] = None
    category_id: Optional[int] = Field(
        None, validation_alias=AliasChoices("categoryId", "category_id")
    )


class SubcategoryResponse(CamelModel):
    id: int
    name: str
    description: str
    category_id: int
    category_name: Optional[str] = None
    topics_count: int
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("created_at", "updated_at")
    def _date_only(self, value: Optional[datetime]):
        return value.date().isoformat() if value else None


class SubcategoryStats(CamelModel):
    total: int
    active: int
    draft: int
    inactive: int
    total_topics: int
    average_topics_per_subcategory: str
    categories_used: int


class CategoryOption(CamelModel):
    id: int
    name: str


class SubcategoryMeta(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int


class SubcategoryListResponse(CamelModel):
    success: bool = True
    data: List[SubcategoryResponse]
    meta: SubcategoryMeta
    stats: SubcategoryStats
    categories: List[CategoryOption]
    message: str
