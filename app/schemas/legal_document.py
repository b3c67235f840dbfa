# app/schemas/legal_document.py
from datetime import date, datetime
from typing import List, Optional

from pydantic import Field, field_serializer

from app.schemas.common import CamelModel, PagePagination

# ==================== Legal Document Schemas ====================


class LegalDocumentWrite(CamelModel):
    """Create/update payload for terms and privacy documents.

    ``createdBy`` is read on create and ``updatedBy`` on update.
    """

    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    version: Optional[str] = Field(None, max_length=50)
    language: Optional[str] = Field(None, max_length=10)
    status: Optional[str] = None
    effective_date: Optional[date] = None
    created_by: Optional[str] = Field(None, max_length=100)
    updated_by: Optional[str] = Field(None, max_length=100)


class LegalDocumentPublish(CamelModel):
    effective_date: Optional[date] = None
    published_by: Optional[str] = Field(None, max_length=100)


class LegalDocumentResponse(CamelModel):
    id: int
    title: str
    content: str
    version: str
    language: str
    status: str
    effective_date: Optional[date] = None
    created_by: str
    updated_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("effective_date")
    def _iso_date(self, value: Optional[date]):
        return value.isoformat() if value else None


class LegalDocumentListResponse(CamelModel):
    success: bool = True
    data: List[LegalDocumentResponse]
    meta: PagePagination
