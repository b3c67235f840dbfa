# app/schemas/topic.py
from datetime import datetime
from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, computed_field

from app.schemas.common import CamelModel
from app.schemas.topic_module import ModuleWithVideosResponse, NestedModulePayload

# ==================== Topic Write Schemas ====================


class TopicWrite(CamelModel):
    """Create/update payload.

    Every scalar here maps onto exactly one topics column (``featured`` and
    ``thumbnail`` are accepted as aliases). ``category``/``subcategory``
    accept an id or a name; ``duration`` is in hours.
    """

    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    content: Optional[str] = None
    emoji: Optional[str] = Field(None, max_length=16)

    category_id: Optional[int] = Field(
        None, validation_alias=AliasChoices("categoryId", "category_id")
    )
    subcategory_id: Optional[int] = Field(
        None, validation_alias=AliasChoices("subcategoryId", "subcategory_id")
    )
    category: Optional[Union[int, str]] = None
    subcategory: Optional[Union[int, str]] = None

    difficulty: Optional[str] = None
    status: Optional[str] = None
    tags: Optional[List[str]] = None

    is_featured: Optional[bool] = Field(
        None, validation_alias=AliasChoices("isFeatured", "is_featured", "featured")
    )
    is_free: Optional[bool] = Field(
        None, validation_alias=AliasChoices("isFree", "is_free")
    )
    price: Optional[float] = Field(None, ge=0)
    duration_minutes: Optional[int] = Field(
        None, ge=0, validation_alias=AliasChoices("durationMinutes", "duration_minutes")
    )
    duration: Optional[Union[float, str]] = None
    thumbnail_url: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("thumbnailUrl", "thumbnail_url", "thumbnail"),
    )

    meta_title: Optional[str] = Field(
        None, validation_alias=AliasChoices("metaTitle", "meta_title")
    )
    meta_description: Optional[str] = Field(
        None, validation_alias=AliasChoices("metaDescription", "meta_description")
    )
    meta_keywords: Optional[str] = Field(
        None, validation_alias=AliasChoices("metaKeywords", "meta_keywords")
    )
    author_id: Optional[int] = Field(
        None, validation_alias=AliasChoices("authorId", "author_id")
    )
    learning_objectives: Optional[str] = Field(
        None, validation_alias=AliasChoices("learningObjectives", "learning_objectives")
    )
    target_audience: Optional[List[Any]] = Field(
        None, validation_alias=AliasChoices("targetAudience", "target_audience")
    )
    prerequisites: Optional[str] = None

    modules: Optional[List[NestedModulePayload]] = None


class TopicBulkDeleteRequest(BaseModel):
    ids: Optional[List[int]] = None


class TopicImportRequest(BaseModel):
    topics: Optional[List[dict]] = None


# ==================== Topic Response Schemas ====================


class TopicResponse(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    content: Optional[str] = None
    slug: str
    category_id: Optional[int] = None
    subcategory_id: Optional[int] = None
    category_name: Optional[str] = None
    subcategory_name: Optional[str] = None
    difficulty: str
    status: str
    is_featured: bool
    is_free: bool
    price: float
    duration_minutes: int
    thumbnail_url: Optional[str] = None
    tags: List[str] = []
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    author_id: Optional[int] = None
    emoji: Optional[str] = None
    learning_objectives: Optional[str] = None
    target_audience: List[Any] = []
    prerequisites: Optional[str] = None
    published_at: Optional[datetime] = None
    view_count: int
    like_count: int
    enrollment_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Legacy client keys

    @computed_field
    @property
    def category(self) -> Optional[str]:
        return str(self.category_id) if self.category_id is not None else None

    @computed_field
    @property
    def subcategory(self) -> Optional[str]:
        return str(self.subcategory_id) if self.subcategory_id is not None else None

    @computed_field
    @property
    def featured(self) -> bool:
        return self.is_featured

    @computed_field
    @property
    def thumbnail(self) -> Optional[str]:
        return self.thumbnail_url

    @computed_field
    @property
    def duration(self) -> float:
        """Duration in hours, one decimal."""
        return round(self.duration_minutes / 60, 1)


class TopicDetailResponse(TopicResponse):
    rating: float = 0.0
    review_count: int = 0
    modules: List[ModuleWithVideosResponse] = []


class TopicPagination(CamelModel):
    current_page: int
    total_pages: int
    total_count: int
    limit: int
    has_next_page: bool
    has_prev_page: bool


class TopicListResponse(CamelModel):
    success: bool = True
    data: List[TopicResponse]
    pagination: TopicPagination


class TopicListItem(CamelModel):
    id: int
    title: str
    slug: str
    status: str


class TopicCounts(CamelModel):
    total: int
    published: int
    drafts: int
    archived: int
    featured: int


class BulkDeleteData(CamelModel):
    deleted_count: int


class ImportedTopic(CamelModel):
    index: int
    id: int
    title: str
    slug: str


class ImportFailure(CamelModel):
    index: int
    error: str


class ImportResult(CamelModel):
    imported: int
    failed: int
    results: List[ImportedTopic]
    errors: List[ImportFailure]


class TopicExportRow(CamelModel):
    """Flat export shape; category/subcategory are names."""

    id: int
    title: str
    description: Optional[str] = None
    slug: str
    category: Optional[str] = None
    subcategory: Optional[str] = None
    difficulty: str
    status: str
    is_featured: bool
    is_free: bool
    price: float
    duration_minutes: int
    tags: List[str] = []
    view_count: int
    enrollment_count: int
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TopicExportResponse(CamelModel):
    success: bool = True
    data: List[TopicExportRow]
    exported_at: datetime
    count: int
