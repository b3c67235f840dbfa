# app/schemas/common.py
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


# ==================== Base Models ====================


class CamelModel(BaseModel):
    """Reads snake_case attributes, speaks camelCase on the wire.

    Request payloads are accepted in either casing.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ==================== Envelopes ====================


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T
    message: Optional[str] = None


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class DeletedData(BaseModel):
    deleted: bool = True


class ReorderedData(BaseModel):
    reordered: int


# ==================== Pagination ====================


class PagePagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class PageMeta(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int


class PageResponse(BaseModel, Generic[T]):
    success: bool = True
    data: List[T]
    pagination: PagePagination


class MetaResponse(BaseModel, Generic[T]):
    success: bool = True
    data: List[T]
    meta: PageMeta
