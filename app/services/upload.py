# app/services/upload.py
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from fastapi import HTTPException, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.decorator import db_exception
from app.models.topic import Topic
from app.models.topic_video import TopicVideo
from app.models.upload import Upload
from app.utils.file_upload import UPLOAD_TYPES, file_upload_service
from app.utils.pagination import paginate

logger = logging.getLogger(__name__)


class UploadService:
    def __init__(self, db: Session):
        self.db = db

    # ==================== Storage ====================

    async def store(
        self,
        file: UploadFile,
        upload_type: str,
        category: Optional[str] = None,
        metadata: Optional[dict] = None,
    ) -> Upload:
        """Write the file to disk and add its Upload row (flushed, not committed)."""
        stored = await file_upload_service.save(file, upload_type)

        upload = Upload(
            id=str(uuid.uuid4()),
            filename=stored.filename,
            original_name=stored.original_name,
            file_path=stored.relative_path,
            file_size=stored.size,
            mime_type=stored.mime_type,
            upload_type=upload_type,
            category=category or "uncategorized",
            file_metadata=metadata or {},
        )
        try:
            self.db.add(upload)
            self.db.flush()
        except SQLAlchemyError:
            # Do not leave an orphaned file behind
            file_upload_service.delete(stored.relative_path)
            raise
        return upload

    def discard(self, uploads: List[Upload]) -> None:
        """Roll back pending Upload rows and remove their files from disk"""
        paths = [upload.file_path for upload in uploads]
        self.db.rollback()
        for path in paths:
            file_upload_service.delete(path)
        if paths:
            logger.warning(f"Discarded {len(paths)} stored files after a failed upload")

    async def upload_file(
        self, file: UploadFile, upload_type: str, category: Optional[str] = None
    ) -> Upload:
        """Store a single file of the given type."""
        upload = await self.store(file, upload_type, category)
        self.db.commit()
        self.db.refresh(upload)
        return upload

    async def upload_thumbnail(
        self,
        file: UploadFile,
        category: Optional[str] = None,
        topic_id: Optional[int] = None,
        video_id: Optional[int] = None,
    ) -> Upload:
        """Store a thumbnail and point the given topic and/or video at it."""
        topic = self.get_topic(topic_id) if topic_id else None
        video = self.get_video(video_id) if video_id else None

        upload = await self.store(
            file,
            "thumbnail",
            category,
            metadata={
                key: value
                for key, value in (("topic_id", topic_id), ("video_id", video_id))
                if value
            },
        )
        url = self.public_url(upload)
        if topic:
            topic.thumbnail_url = url
        if video:
            video.thumbnail_url = url

        self.db.commit()
        self.db.refresh(upload)
        return upload

    async def upload_bulk(
        self, files: List[UploadFile], upload_type: str, category: Optional[str] = None
    ) -> List[Upload]:
        """Store up to ``max_bulk_files`` files of one type in one request."""
        if not files:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="No files uploaded"
            )
        if len(files) > settings.max_bulk_files:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Too many files. Maximum is {settings.max_bulk_files}",
            )
        if upload_type not in UPLOAD_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid upload type. Allowed types: {', '.join(UPLOAD_TYPES)}",
            )

        uploads = []
        try:
            for file in files:
                uploads.append(await self.store(file, upload_type, category))
            self.db.commit()
        except Exception:
            self.discard(uploads)
            raise
        for upload in uploads:
            self.db.refresh(upload)
        return uploads

    # ==================== Listing & Deletion ====================

    def get_files(
        self, upload_type: Optional[str] = None, page: int = 1, limit: int = 20
    ) -> Tuple[List[Upload], dict]:
        """Get stored files, newest first."""
        query = self.db.query(Upload)
        if upload_type:
            query = query.filter(Upload.upload_type == upload_type)

        query = query.order_by(Upload.created_at.desc(), Upload.id)
        return paginate(query, page, limit)

    @db_exception
    def delete_file(self, upload_id: str) -> bool:
        """Delete an upload row; a file already gone from disk is only logged."""
        upload = self.db.query(Upload).filter(Upload.id == upload_id).first()
        if not upload:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="File not found"
            )

        if not file_upload_service.delete(upload.file_path):
            logger.warning(f"Upload {upload_id}: file {upload.file_path} was not removed")

        self.db.delete(upload)
        self.db.commit()
        return True

    # ==================== Linking ====================

    def link_video(self, video: TopicVideo) -> Optional[Upload]:
        """Record which topic/module/video a stored video file belongs to.

        Matches on the filename at the end of ``video.video_url`` when the URL
        points into the uploads area. Returns the linked row, if any.
        """
        url = video.video_url or ""
        if "/uploads/" not in url:
            return None

        filename = url.rstrip("/").rsplit("/", 1)[-1]
        upload = (
            self.db.query(Upload)
            .filter(Upload.filename == filename, Upload.upload_type == "video")
            .first()
        )
        if not upload:
            logger.debug(f"No stored upload matches video URL {url}")
            return None

        # Reassign so the JSON column is flagged dirty
        upload.file_metadata = {
            **(upload.file_metadata or {}),
            "topic_id": video.topic_id,
            "module_id": video.module_id,
            "video_id": video.id,
            "linked_at": datetime.now(timezone.utc).isoformat(),
        }
        return upload

    def public_url(self, upload: Upload) -> str:
        return file_upload_service.public_url(upload.upload_type, upload.filename)

    # ==================== Lookups ====================

    def get_topic(self, topic_id: int) -> Topic:
        topic = self.db.query(Topic).filter(Topic.id == topic_id).first()
        if not topic:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Topic not found"
            )
        return topic

    def get_video(self, video_id: int) -> TopicVideo:
        video = self.db.query(TopicVideo).filter(TopicVideo.id == video_id).first()
        if not video:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Video not found"
            )
        return video
