# app/utils/file_upload.py

import logging
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import HTTPException, UploadFile, status

from app.core.config import settings

logger = logging.getLogger(__name__)

MB = 1024 * 1024

# Allowed MIME types per upload type
ALLOWED_MIME_TYPES = {
    "image": {"image/jpeg", "image/png", "image/gif", "image/webp"},
    "video": {
        "video/mp4",
        "video/webm",
        "video/avi",
        "video/mov",
        "video/wmv",
        "video/quicktime",
        "video/x-msvideo",
        "video/x-ms-wmv",
    },
    "document": {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "text/plain",
    },
    "thumbnail": {"image/jpeg", "image/png", "image/webp"},
}

UPLOAD_TYPES = tuple(ALLOWED_MIME_TYPES)


def max_size_for(upload_type: str) -> int:
    """Size ceiling in bytes for an upload type."""
    limits_mb = {
        "image": settings.max_image_size_mb,
        "video": settings.max_video_size_mb,
        "document": settings.max_document_size_mb,
        "thumbnail": settings.max_thumbnail_size_mb,
    }
    return limits_mb[upload_type] * MB


@dataclass
class StoredFile:
    filename: str
    original_name: str
    relative_path: str
    size: int
    mime_type: str
    upload_type: str


class FileUploadService:
    """Service to store uploaded files on disk, one folder per upload type."""

    def __init__(self, base_storage_path: Optional[str] = None):
        """
        Initialize the file upload service.

        Args:
            base_storage_path: Base directory for file storage (relative to project root)
        """
        self.base_storage_path = Path(base_storage_path or settings.upload_dir)
        self._ensure_storage_directories()

    def _ensure_storage_directories(self):
        """Create storage directories if they don't exist."""
        for upload_type in UPLOAD_TYPES:
            (self.base_storage_path / upload_type).mkdir(parents=True, exist_ok=True)

    def _get_file_extension(self, filename: str) -> str:
        """Extract file extension from filename."""
        return Path(filename).suffix.lower()

    def _build_filename(self, original_name: str) -> str:
        """``<stem>-<epoch ms>-<12 hex>.<ext>``, stem reduced to safe characters."""
        path = Path(original_name)
        stem = "".join(c if c.isalnum() or c in "-_" else "_" for c in path.stem) or "file"
        suffix = f"{int(time.time() * 1000)}-{secrets.token_hex(6)}"
        return f"{stem}-{suffix}{self._get_file_extension(original_name)}"

    def _validate(self, file: UploadFile, upload_type: str) -> None:
        """
        Validate an uploaded file's name and MIME type.

        Raises:
            HTTPException: If file is invalid
        """
        if upload_type not in ALLOWED_MIME_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid upload type. Allowed types: {', '.join(UPLOAD_TYPES)}",
            )

        if not file.filename:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded"
            )

        allowed = ALLOWED_MIME_TYPES[upload_type]
        if file.content_type not in allowed:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid file type. Allowed types for {upload_type}: {', '.join(sorted(allowed))}",
            )

    async def save(self, file: UploadFile, upload_type: str) -> StoredFile:
        """
        Validate and store an uploaded file under ``<base>/<upload_type>/``.

        Raises:
            HTTPException: 400 for an invalid or empty file, 413 when the
            file exceeds the ceiling for its type, 500 when writing fails
        """
        self._validate(file, upload_type)

        max_size = max_size_for(upload_type)
        try:
            contents = await file.read()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Error reading file: {str(e)}",
            )
        finally:
            await file.seek(0)  # Reset file pointer

        file_size = len(contents)
        if file_size == 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Empty file uploaded"
            )
        if file_size > max_size:
            raise HTTPException(
                status_code=status.HTTP_413_CONTENT_TOO_LARGE,
                detail=f"File too large. Maximum size for {upload_type} is {max_size // MB}MB",
            )

        filename = self._build_filename(file.filename)
        folder_path = self.base_storage_path / upload_type
        folder_path.mkdir(parents=True, exist_ok=True)
        file_path = folder_path / filename

        try:
            with open(file_path, "wb") as f:
                f.write(contents)
        except OSError as e:
            logger.error(f"Failed to write upload {file_path}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error saving file: {str(e)}",
            )

        logger.info(f"Stored {upload_type} upload {filename} ({file_size} bytes)")
        return StoredFile(
            filename=filename,
            original_name=file.filename,
            relative_path=f"{upload_type}/{filename}",
            size=file_size,
            mime_type=file.content_type,
            upload_type=upload_type,
        )

    def delete(self, relative_path: str) -> bool:
        """
        Delete a stored file.

        Returns:
            True if deleted, False if the file was missing or could not be removed
        """
        file_path = self.base_storage_path / relative_path
        try:
            if file_path.exists() and file_path.is_file():
                file_path.unlink()
                return True
            logger.warning(f"Stored file not found: {file_path}")
            return False
        except OSError as e:
            logger.warning(f"Could not delete stored file {file_path}: {e}")
            return False

    def public_url(self, upload_type: str, filename: str) -> str:
        return f"{settings.app_url.rstrip('/')}/uploads/{upload_type}/{filename}"


# Create a singleton instance
file_upload_service = FileUploadService()
