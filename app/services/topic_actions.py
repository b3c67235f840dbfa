# app/services/topic_actions.py
import csv
import io
import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.decorator import DBException, db_exception
from app.models.topic import Topic
from app.models.topic_module import TopicModule
from app.models.topic_video import TopicVideo
from app.schemas.topic import TopicWrite
from app.services.topic import TopicService
from app.utils.slug import unique_topic_slug

logger = logging.getLogger(__name__)

# draft -> published -> archived -> draft
NEXT_STATUS = {"draft": "published", "published": "archived", "archived": "draft"}

EXPORT_COLUMNS = [
    "id",
    "title",
    "description",
    "slug",
    "category",
    "subcategory",
    "difficulty",
    "status",
    "isFeatured",
    "isFree",
    "price",
    "durationMinutes",
    "tags",
    "viewCount",
    "enrollmentCount",
    "publishedAt",
    "createdAt",
    "updatedAt",
]

# Scalar columns carried over by duplicate()
COPIED_COLUMNS = (
    "description",
    "content",
    "category_id",
    "subcategory_id",
    "difficulty",
    "is_free",
    "price",
    "duration_minutes",
    "thumbnail_url",
    "tags",
    "meta_title",
    "meta_description",
    "meta_keywords",
    "author_id",
    "emoji",
    "learning_objectives",
    "target_audience",
    "prerequisites",
)


class TopicActionService:
    def __init__(self, db: Session):
        self.db = db
        self.topics = TopicService(db)

    # ==================== Status ====================

    @db_exception
    def toggle_status(self, topic_id: int) -> Topic:
        topic = self.topics.get_topic(topic_id)

        topic.status = NEXT_STATUS.get(topic.status, "draft")
        if topic.status == "published" and topic.published_at is None:
            topic.published_at = datetime.now(timezone.utc)

        self.db.commit()
        self.db.refresh(topic)
        logger.info(f"Topic {topic_id} status -> {topic.status}")
        return topic

    @db_exception
    def toggle_featured(self, topic_id: int) -> Topic:
        topic = self.topics.get_topic(topic_id)
        topic.is_featured = not topic.is_featured
        self.db.commit()
        self.db.refresh(topic)
        return topic

    @db_exception
    def publish(self, topic_id: int) -> Topic:
        """Publish a topic that is not published yet"""
        topic = self._get_unless(topic_id, "published")

        topic.status = "published"
        if topic.published_at is None:
            topic.published_at = datetime.now(timezone.utc)

        self.db.commit()
        self.db.refresh(topic)
        logger.info(f"Topic {topic_id} published")
        return topic

    @db_exception
    def archive(self, topic_id: int) -> Topic:
        topic = self._get_unless(topic_id, "archived")

        topic.status = "archived"
        self.db.commit()
        self.db.refresh(topic)
        logger.info(f"Topic {topic_id} archived")
        return topic

    def _get_unless(self, topic_id: int, current: str) -> Topic:
        topic = (
            self.db.query(Topic)
            .filter(Topic.id == topic_id, Topic.status != current)
            .first()
        )
        if not topic:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Topic not found or already {current}",
            )
        return topic

    # ==================== Duplicate ====================

    @db_exception
    def duplicate(self, topic_id: int) -> Topic:
        """Copy a topic with its modules and videos as a new unfeatured draft"""
        original = self.topics.get_topic_detail(topic_id)

        title = f"{original.title} (Copy)"
        copy = Topic(
            title=title,
            slug=unique_topic_slug(self.db, title),
            status="draft",
            is_featured=False,
            **{column: getattr(original, column) for column in COPIED_COLUMNS},
        )
        self.db.add(copy)
        self.db.flush()

        for module in original.modules:
            module_copy = TopicModule(
                topic_id=copy.id,
                title=module.title,
                description=module.description,
                order_index=module.order_index,
                is_active=module.is_active,
                duration_minutes=module.duration_minutes,
            )
            copy.modules.append(module_copy)
            for video in module.videos:
                module_copy.videos.append(
                    TopicVideo(
                        topic_id=copy.id,
                        title=video.title,
                        description=video.description,
                        video_url=video.video_url,
                        video_type=video.video_type,
                        thumbnail_url=video.thumbnail_url,
                        duration_seconds=video.duration_seconds,
                        order_index=video.order_index,
                        is_active=video.is_active,
                        is_preview=video.is_preview,
                        transcript=video.transcript,
                        resources=list(video.resources or []),
                    )
                )

        self.db.commit()
        logger.info(f"Topic {topic_id} duplicated as {copy.id}")
        return self.topics.get_topic_detail(copy.id)

    # ==================== Export / Import ====================

    def export_rows(self, status_filter: Optional[str] = None) -> List[dict]:
        """Flat rows for export, newest first; parents are given by name"""
        query = self.db.query(Topic)
        if status_filter:
            query = query.filter(Topic.status == status_filter)

        rows = []
        for topic in query.order_by(Topic.created_at.desc(), Topic.id.desc()):
            rows.append(
                {
                    "id": topic.id,
                    "title": topic.title,
                    "description": topic.description,
                    "slug": topic.slug,
                    "category": topic.category_name,
                    "subcategory": topic.subcategory_name,
                    "difficulty": topic.difficulty,
                    "status": topic.status,
                    "is_featured": topic.is_featured,
                    "is_free": topic.is_free,
                    "price": float(topic.price or 0),
                    "duration_minutes": topic.duration_minutes,
                    "tags": topic.tags or [],
                    "view_count": topic.view_count,
                    "enrollment_count": topic.enrollment_count,
                    "published_at": topic.published_at,
                    "created_at": topic.created_at,
                    "updated_at": topic.updated_at,
                }
            )
        return rows

    @staticmethod
    def to_csv(rows: List[dict]) -> str:
        """Render export rows as CSV with a camelCase header line"""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(EXPORT_COLUMNS)
        for row in rows:
            writer.writerow(
                [
                    row["id"],
                    row["title"],
                    row["description"] or "",
                    row["slug"],
                    row["category"] or "",
                    row["subcategory"] or "",
                    row["difficulty"],
                    row["status"],
                    str(row["is_featured"]).lower(),
                    str(row["is_free"]).lower(),
                    row["price"],
                    row["duration_minutes"],
                    ";".join(str(tag) for tag in row["tags"]),
                    row["view_count"],
                    row["enrollment_count"],
                    _iso(row["published_at"]),
                    _iso(row["created_at"]),
                    _iso(row["updated_at"]),
                ]
            )
        return buffer.getvalue()

    def import_topics(self, items: Optional[List[dict]]) -> dict:
        """Create topics one by one; a failing item does not stop the rest"""
        if items is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Topics array is required",
            )

        results, errors = [], []
        for index, item in enumerate(items):
            try:
                payload = TopicWrite.model_validate(item)
                payload.modules = None
                topic = self.topics.create_topic(payload)
            except ValidationError as e:
                errors.append({"index": index, "error": _first_error(e)})
                continue
            except HTTPException as e:
                errors.append({"index": index, "error": e.detail})
                continue
            except DBException as e:
                errors.append({"index": index, "error": e.message})
                continue

            results.append(
                {"index": index, "id": topic.id, "title": topic.title, "slug": topic.slug}
            )

        logger.info(f"Topic import: {len(results)} imported, {len(errors)} failed")
        return {
            "imported": len(results),
            "failed": len(errors),
            "results": results,
            "errors": errors,
        }


def _iso(value: Optional[datetime]) -> str:
    return value.isoformat() if value else ""


def _first_error(error: ValidationError) -> str:
    detail = error.errors()[0]
    location = ".".join(str(part) for part in detail.get("loc", ()))
    return f"{location}: {detail.get('msg')}" if location else detail.get("msg", "Invalid topic")
