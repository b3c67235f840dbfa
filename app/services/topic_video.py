# app/services/topic_video.py
import logging
from typing import List, Optional

from fastapi import HTTPException, UploadFile, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.decorator import db_exception
from app.models.topic_module import TopicModule
from app.models.topic_video import VIDEO_TYPES, TopicVideo
from app.schemas.topic_video import VideoCreate, VideoUpdate
from app.services.duration import DurationService
from app.services.upload import UploadService

logger = logging.getLogger(__name__)

# Columns that may not be set to NULL through an update
REQUIRED_VIDEO_COLUMNS = {
    "title",
    "video_type",
    "duration_seconds",
    "order_index",
    "is_active",
    "is_preview",
    "resources",
}


def minutes_to_seconds(value) -> Optional[int]:
    """Parse a minutes value (number or numeric string) into whole seconds."""
    if value is None or value == "":
        return None
    try:
        return int(round(float(value) * 60))
    except (TypeError, ValueError):
        return None


class TopicVideoService:
    def __init__(self, db: Session):
        self.db = db

    # ==================== Lookups ====================

    def _get_module(self, topic_id: int, module_id: int) -> TopicModule:
        module = (
            self.db.query(TopicModule)
            .filter(TopicModule.id == module_id, TopicModule.topic_id == topic_id)
            .first()
        )
        if not module:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Module not found"
            )
        return module

    def next_order(self, module_id: int) -> int:
        current = (
            self.db.query(func.coalesce(func.max(TopicVideo.order_index), 0))
            .filter(TopicVideo.module_id == module_id)
            .scalar()
        )
        return int(current) + 1

    def get_videos(
        self, topic_id: int, module_id: int, include_inactive: bool = False
    ) -> List[TopicVideo]:
        """Get a module's videos in display order"""
        self._get_module(topic_id, module_id)
        query = self.db.query(TopicVideo).filter(TopicVideo.module_id == module_id)
        if not include_inactive:
            query = query.filter(TopicVideo.is_active.is_(True))
        return query.order_by(
            TopicVideo.order_index.asc(), TopicVideo.created_at.asc(), TopicVideo.id.asc()
        ).all()

    def get_video(self, topic_id: int, module_id: int, video_id: int) -> TopicVideo:
        video = (
            self.db.query(TopicVideo)
            .filter(
                TopicVideo.id == video_id,
                TopicVideo.module_id == module_id,
                TopicVideo.topic_id == topic_id,
            )
            .first()
        )
        if not video:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Video not found"
            )
        return video

    # ==================== CRUD ====================

    @db_exception
    def create_video(
        self, topic_id: int, module_id: int, video_in: VideoCreate
    ) -> TopicVideo:
        """Append a video to a module and refresh module/topic durations"""
        self._get_module(topic_id, module_id)

        title = (video_in.title or "").strip()
        if not title:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Video title is required",
            )
        video_type = self._validate_type(video_in.video_type or "mp4")

        video = TopicVideo(
            topic_id=topic_id,
            module_id=module_id,
            title=title,
            description=video_in.description,
            video_url=video_in.video_url,
            video_type=video_type,
            thumbnail_url=video_in.thumbnail_url,
            duration_seconds=video_in.duration_seconds or 0,
            order_index=video_in.order_index or self.next_order(module_id),
            is_active=True if video_in.is_active is None else video_in.is_active,
            is_preview=bool(video_in.is_preview),
            transcript=video_in.transcript,
            resources=video_in.resources or [],
        )
        self.db.add(video)
        self.db.flush()

        DurationService(self.db).recompute_modules(topic_id, [module_id])
        UploadService(self.db).link_video(video)
        self.db.commit()
        self.db.refresh(video)

        logger.info(f"Video {video.id} added to module {module_id}")
        return video

    @db_exception
    def update_video(
        self, topic_id: int, module_id: int, video_id: int, video_in: VideoUpdate
    ) -> TopicVideo:
        """Update the allow-listed fields present in the payload"""
        video = self.get_video(topic_id, module_id, video_id)

        data = {
            field: value
            for field, value in video_in.model_dump(exclude_unset=True).items()
            if value is not None or field not in REQUIRED_VIDEO_COLUMNS
        }
        if not data:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No valid fields to update",
            )
        if "title" in data:
            data["title"] = data["title"].strip()
            if not data["title"]:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Video title is required",
                )
        if "video_type" in data:
            self._validate_type(data["video_type"])

        for field, value in data.items():
            setattr(video, field, value)
        self.db.flush()

        DurationService(self.db).recompute_modules(topic_id, [module_id])
        if "video_url" in data:
            UploadService(self.db).link_video(video)
        self.db.commit()
        self.db.refresh(video)
        return video

    @db_exception
    def delete_video(self, topic_id: int, module_id: int, video_id: int) -> bool:
        video = self.get_video(topic_id, module_id, video_id)

        self.db.delete(video)
        self.db.flush()
        DurationService(self.db).recompute_modules(topic_id, [module_id])
        self.db.commit()

        logger.info(f"Video {video_id} deleted from module {module_id}")
        return True

    @db_exception
    def reorder_videos(self, topic_id: int, module_id: int, video_ids: List[int]) -> int:
        """Set order_index to each video's position in ``video_ids`` (1-based)"""
        if not video_ids:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Array of video IDs is required",
            )
        self._get_module(topic_id, module_id)

        reordered = 0
        for position, video_id in enumerate(video_ids, start=1):
            reordered += (
                self.db.query(TopicVideo)
                .filter(TopicVideo.id == video_id, TopicVideo.module_id == module_id)
                .update({TopicVideo.order_index: position}, synchronize_session=False)
            )
        self.db.commit()
        return reordered

    # ==================== File-backed videos ====================

    async def upload_video(
        self,
        topic_id: int,
        module_id: int,
        file: UploadFile,
        title: Optional[str] = None,
        description: Optional[str] = None,
        duration_minutes=None,
    ) -> TopicVideo:
        """Store a video file and create a video row pointing at it"""
        self._get_module(topic_id, module_id)
        uploads = UploadService(self.db)

        upload = await uploads.store(file, "video", category="topic-video")
        video = TopicVideo(
            topic_id=topic_id,
            module_id=module_id,
            title=(title or "").strip() or upload.original_name,
            description=description,
            video_url=uploads.public_url(upload),
            video_type="mp4",
            duration_seconds=minutes_to_seconds(duration_minutes) or 0,
            order_index=self.next_order(module_id),
        )
        self.db.add(video)
        self.db.flush()

        DurationService(self.db).recompute_modules(topic_id, [module_id])
        uploads.link_video(video)
        self.db.commit()
        self.db.refresh(video)

        logger.info(f"Uploaded video {upload.filename} as video {video.id}")
        return video

    async def upload_videos(
        self, topic_id: int, module_id: int, files: List[UploadFile]
    ) -> List[TopicVideo]:
        """Store several video files, one video row per file"""
        if not files:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="No files uploaded"
            )
        if len(files) > settings.max_bulk_files:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Too many files. Maximum is {settings.max_bulk_files}",
            )
        self._get_module(topic_id, module_id)
        uploads = UploadService(self.db)

        videos, stored = [], []
        order = self.next_order(module_id)
        try:
            for offset, file in enumerate(files):
                upload = await uploads.store(file, "video", category="topic-video")
                stored.append(upload)
                video = TopicVideo(
                    topic_id=topic_id,
                    module_id=module_id,
                    title=upload.original_name,
                    video_url=uploads.public_url(upload),
                    video_type="mp4",
                    duration_seconds=0,
                    order_index=order + offset,
                )
                self.db.add(video)
                self.db.flush()
                uploads.link_video(video)
                videos.append(video)

            DurationService(self.db).recompute_modules(topic_id, [module_id])
            self.db.commit()
        except Exception:
            uploads.discard(stored)
            raise
        for video in videos:
            self.db.refresh(video)
        return videos

    async def replace_video_file(
        self, video_id: int, file: UploadFile, duration_minutes=None
    ) -> TopicVideo:
        """Swap the file behind an existing video"""
        video = self.db.query(TopicVideo).filter(TopicVideo.id == video_id).first()
        if not video:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Video not found"
            )
        uploads = UploadService(self.db)

        upload = await uploads.store(file, "video", category="topic-video")
        video.video_url = uploads.public_url(upload)
        video.video_type = "mp4"
        seconds = minutes_to_seconds(duration_minutes)
        if seconds is not None:
            video.duration_seconds = seconds
        self.db.flush()

        DurationService(self.db).recompute_modules(video.topic_id, [video.module_id])
        uploads.link_video(video)
        self.db.commit()
        self.db.refresh(video)
        return video

    # ==================== Helpers ====================

    @staticmethod
    def _validate_type(video_type: str) -> str:
        if video_type not in VIDEO_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid video type",
            )
        return video_type
