# app/services/topic_content.py
"""
Module/video trees for a topic.

``create_tree`` adds the modules of a brand-new topic. ``reconcile`` makes
the persisted modules and videos of an existing topic match a payload that
describes the complete desired set:

* entries without an id, or whose id is a ``new-...`` placeholder, are inserted
* entries whose id is a persisted child of the same parent are updated
* persisted children missing from the payload are deleted
* entries with any other id are skipped

Durations are recomputed and stored video files linked before the commit.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.models.topic import Topic
from app.models.topic_module import TopicModule
from app.models.topic_video import VIDEO_TYPES, TopicVideo
from app.schemas.topic_module import NestedModulePayload
from app.schemas.topic_video import NestedVideoPayload
from app.services.duration import DurationService
from app.services.topic_video import minutes_to_seconds
from app.services.upload import UploadService

logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "new-"

NEW = "new"
EXISTING = "existing"
MALFORMED = "malformed"


def classify_id(raw) -> Tuple[str, Optional[int]]:
    """Return ``(kind, persisted_id)`` for a child id taken from a payload."""
    if raw is None:
        return NEW, None
    if isinstance(raw, bool):
        return MALFORMED, None
    if isinstance(raw, int):
        return EXISTING, raw

    text = str(raw).strip()
    if not text or text.startswith(PLACEHOLDER_PREFIX):
        return NEW, None
    if text.isdigit():
        return EXISTING, int(text)
    return MALFORMED, None


class TopicContentService:
    def __init__(self, db: Session):
        self.db = db

    # ==================== Create ====================

    def create_tree(self, topic: Topic, modules_in: List[NestedModulePayload]) -> None:
        """Insert the modules/videos of a new topic. Untitled entries are skipped.

        Runs inside the caller's transaction; nothing is committed here.
        """
        for index, module_in in enumerate(modules_in):
            if not (module_in.title or "").strip():
                continue
            module = self._new_module(topic, module_in, index)
            for video_index, video_in in enumerate(module_in.videos or []):
                if not (video_in.title or "").strip():
                    continue
                self._new_video(topic, module, video_in, video_index)

        self._finish(topic)

    # ==================== Reconcile ====================

    def reconcile(self, topic: Topic, modules_in: List[NestedModulePayload]) -> None:
        """Make the topic's modules/videos match ``modules_in`` in one transaction.

        Rolls back every child change and re-raises on failure.
        """
        try:
            existing = {module.id: module for module in topic.modules}
            kept = set()

            for index, module_in in enumerate(modules_in):
                kind, module_id = classify_id(module_in.id)

                if kind == NEW:
                    module = self._new_module(
                        topic, module_in, index, default_title="Untitled Module"
                    )
                    for video_index, video_in in enumerate(module_in.videos or []):
                        if classify_id(video_in.id)[0] == NEW:
                            self._new_video(
                                topic, module, video_in, video_index,
                                default_title="Untitled Video",
                            )
                elif kind == EXISTING and module_id in existing:
                    module = existing[module_id]
                    self._apply_module(module, module_in, index)
                    kept.add(module_id)
                    if module_in.videos is not None:
                        self._reconcile_videos(topic, module, module_in.videos)
                else:
                    logger.debug(
                        f"Topic {topic.id}: skipping module entry with id {module_in.id!r}"
                    )

            for module_id, module in existing.items():
                if module_id not in kept:
                    topic.modules.remove(module)

            self._finish(topic)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.error(
                f"Topic {topic.id}: module/video update rolled back", exc_info=True
            )
            raise

        logger.info(f"Topic {topic.id}: modules reconciled ({len(modules_in)} in payload)")

    def _reconcile_videos(
        self, topic: Topic, module: TopicModule, videos_in: List[NestedVideoPayload]
    ) -> None:
        existing = {video.id: video for video in module.videos}
        kept = set()

        for index, video_in in enumerate(videos_in):
            kind, video_id = classify_id(video_in.id)
            if kind == NEW:
                self._new_video(
                    topic, module, video_in, index, default_title="Untitled Video"
                )
            elif kind == EXISTING and video_id in existing:
                self._apply_video(existing[video_id], video_in, index)
                kept.add(video_id)

        for video_id, video in existing.items():
            if video_id not in kept:
                module.videos.remove(video)

    # ==================== Row builders ====================

    def _new_module(
        self,
        topic: Topic,
        module_in: NestedModulePayload,
        index: int,
        default_title: Optional[str] = None,
    ) -> TopicModule:
        module = TopicModule(
            topic_id=topic.id,
            title=(module_in.title or "").strip() or default_title,
            description=module_in.description,
            order_index=module_in.order or index + 1,
            is_active=True if module_in.is_active is None else module_in.is_active,
            duration_minutes=0,
        )
        topic.modules.append(module)
        return module

    def _apply_module(
        self, module: TopicModule, module_in: NestedModulePayload, index: int
    ) -> None:
        title = (module_in.title or "").strip()
        if title:
            module.title = title
        if "description" in module_in.model_fields_set:
            module.description = module_in.description
        if module_in.is_active is not None:
            module.is_active = module_in.is_active
        module.order_index = module_in.order or index + 1

    def _new_video(
        self,
        topic: Topic,
        module: TopicModule,
        video_in: NestedVideoPayload,
        index: int,
        default_title: Optional[str] = None,
    ) -> TopicVideo:
        video = TopicVideo(
            topic_id=topic.id,
            title=(video_in.title or "").strip() or default_title,
            description=video_in.description,
            video_url=video_in.video_url,
            video_type=video_in.video_type if video_in.video_type in VIDEO_TYPES else "mp4",
            thumbnail_url=video_in.thumbnail_url,
            duration_seconds=self._video_seconds(video_in) or 0,
            order_index=video_in.order or index + 1,
            is_active=True if video_in.is_active is None else video_in.is_active,
            is_preview=bool(video_in.is_preview),
            transcript=video_in.transcript,
            resources=video_in.resources or [],
        )
        module.videos.append(video)
        return video

    def _apply_video(
        self, video: TopicVideo, video_in: NestedVideoPayload, index: int
    ) -> None:
        fields = video_in.model_fields_set

        title = (video_in.title or "").strip()
        if title:
            video.title = title
        for field in ("description", "video_url", "thumbnail_url", "transcript"):
            if field in fields:
                setattr(video, field, getattr(video_in, field))
        if video_in.video_type in VIDEO_TYPES:
            video.video_type = video_in.video_type
        if video_in.is_active is not None:
            video.is_active = video_in.is_active
        if video_in.is_preview is not None:
            video.is_preview = video_in.is_preview
        if video_in.resources is not None:
            video.resources = video_in.resources

        seconds = self._video_seconds(video_in)
        if seconds is not None:
            video.duration_seconds = seconds
        video.order_index = video_in.order or index + 1

    @staticmethod
    def _video_seconds(video_in: NestedVideoPayload) -> Optional[int]:
        """``duration`` is minutes; ``durationSeconds`` is taken as-is."""
        seconds = minutes_to_seconds(video_in.duration)
        if seconds is None and video_in.duration_seconds is not None:
            seconds = video_in.duration_seconds
        return seconds

    # ==================== Post-processing ====================

    def _finish(self, topic: Topic) -> None:
        self.db.flush()
        DurationService(self.db).recompute_tree(topic.id)

        uploads = UploadService(self.db)
        for module in topic.modules:
            for video in module.videos:
                uploads.link_video(video)
