# app/schemas/upload.py
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, Field, computed_field

from app.schemas.common import CamelModel, PageMeta
from app.utils.file_upload import file_upload_service

# ==================== Upload Schemas ====================


class UploadResponse(CamelModel):
    id: str
    filename: str
    original_name: str
    size: int = Field(validation_alias=AliasChoices("size", "file_size"))
    mime_type: str
    type: str = Field(validation_alias=AliasChoices("type", "upload_type"))
    category: str
    uploaded_at: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("uploadedAt", "uploaded_at", "created_at")
    )

    @computed_field
    @property
    def url(self) -> str:
        return file_upload_service.public_url(self.type, self.filename)


class UploadListResponse(CamelModel):
    success: bool = True
    data: List[UploadResponse]
    meta: PageMeta


class BulkUploadData(CamelModel):
    uploaded: int
    files: List[UploadResponse]
