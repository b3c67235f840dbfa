# app/services/topic.py
import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import String, cast, func, or_
from sqlalchemy.orm import Session, selectinload

from app.core.decorator import db_exception
from app.models.category import Category
from app.models.subcategory import Subcategory
from app.models.topic import TOPIC_DIFFICULTIES, TOPIC_STATUSES, Topic
from app.models.topic_module import TopicModule
from app.schemas.topic import TopicWrite
from app.services.topic_content import TopicContentService
from app.utils.pagination import paginate, resolve_sort
from app.utils.slug import unique_topic_slug

logger = logging.getLogger(__name__)

# Scalar columns a create/update payload may write
TOPIC_COLUMNS = {
    "title",
    "description",
    "content",
    "category_id",
    "subcategory_id",
    "difficulty",
    "status",
    "is_featured",
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
}

# Columns that may not be set to NULL through an update
REQUIRED_TOPIC_COLUMNS = {
    "title",
    "difficulty",
    "status",
    "is_featured",
    "is_free",
    "price",
    "duration_minutes",
    "tags",
    "target_audience",
}

SORT_COLUMNS = {
    "createdAt": Topic.created_at,
    "created_at": Topic.created_at,
    "updatedAt": Topic.updated_at,
    "updated_at": Topic.updated_at,
    "title": Topic.title,
    "viewCount": Topic.view_count,
    "view_count": Topic.view_count,
    "enrollmentCount": Topic.enrollment_count,
    "enrollment_count": Topic.enrollment_count,
    "publishedAt": Topic.published_at,
    "published_at": Topic.published_at,
}


def hours_to_minutes(value) -> Optional[int]:
    """Parse an hours value (number or numeric string) into whole minutes."""
    if value is None or value == "":
        return None
    try:
        return int(round(float(value) * 60))
    except (TypeError, ValueError):
        return None


def parse_flag(value: Optional[str]) -> Optional[bool]:
    """``"true"`` → True, any other given value → False, absent → None."""
    if value is None:
        return None
    return value.lower() == "true"


class TopicService:
    def __init__(self, db: Session):
        self.db = db

    # ==================== Lookups ====================

    def get_topic(self, topic_id: int) -> Topic:
        topic = self.db.query(Topic).filter(Topic.id == topic_id).first()
        if not topic:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Topic not found"
            )
        return topic

    def get_topic_detail(self, topic_id: int) -> Topic:
        """Get a topic with its reviews, modules and videos loaded"""
        topic = (
            self.db.query(Topic)
            .options(
                selectinload(Topic.reviews),
                selectinload(Topic.modules).selectinload(TopicModule.videos),
            )
            .filter(Topic.id == topic_id)
            .first()
        )
        if not topic:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Topic not found"
            )
        return topic

    def get_topics(
        self,
        page: int = 1,
        limit: int = 10,
        status_filter: Optional[str] = None,
        difficulty: Optional[str] = None,
        category_id: Optional[int] = None,
        subcategory_id: Optional[int] = None,
        featured: Optional[bool] = None,
        free: Optional[bool] = None,
        search: Optional[str] = None,
        tag: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Tuple[List[Topic], dict]:
        """Get topics with filters and pagination, newest first by default"""
        query = self.db.query(Topic)

        if status_filter:
            query = query.filter(Topic.status == status_filter)
        if difficulty:
            query = query.filter(Topic.difficulty == difficulty)
        if category_id is not None:
            query = query.filter(Topic.category_id == category_id)
        if subcategory_id is not None:
            query = query.filter(Topic.subcategory_id == subcategory_id)
        if featured is not None:
            query = query.filter(Topic.is_featured.is_(featured))
        if free is not None:
            query = query.filter(Topic.is_free.is_(free))
        if search:
            query = query.filter(
                or_(
                    Topic.title.ilike(f"%{search}%"),
                    Topic.description.ilike(f"%{search}%"),
                )
            )
        if tag:
            # tags is a JSON array of strings; match the quoted element
            query = query.filter(cast(Topic.tags, String).like(f'%"{tag}"%'))

        order = resolve_sort(
            sort_by, sort_order, SORT_COLUMNS, default="createdAt", default_order="desc"
        )
        query = query.order_by(order, Topic.id.desc())
        return paginate(query, page, limit)

    @staticmethod
    def topic_pagination(pagination: dict) -> dict:
        """Rename generic pagination keys to the topic listing shape."""
        return {
            "current_page": pagination["page"],
            "total_pages": pagination["total_pages"],
            "total_count": pagination["total"],
            "limit": pagination["limit"],
            "has_next_page": pagination["has_next"],
            "has_prev_page": pagination["has_prev"],
        }

    # ==================== Category resolution ====================

    def resolve_category(self, value) -> Optional[int]:
        return self._resolve_parent(Category, value, "Category not found")

    def resolve_subcategory(self, value) -> Optional[int]:
        return self._resolve_parent(Subcategory, value, "Subcategory not found")

    def _resolve_parent(self, model, value, missing: str) -> Optional[int]:
        """Resolve an id, numeric string, name or slug to a parent row id.

        A numeric value must exist (400 otherwise). A name tries an exact
        case-insensitive match, the name with hyphens as spaces, then a
        partial match; no match resolves to None.
        """
        if value is None or value == "":
            return None

        text = str(value).strip()
        if isinstance(value, int) or text.isdigit():
            parent_id = int(text)
            if not self.db.query(model.id).filter(model.id == parent_id).first():
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST, detail=missing
                )
            return parent_id

        for candidate in (text, text.replace("-", " ")):
            row = (
                self.db.query(model.id)
                .filter(func.lower(model.name) == candidate.lower())
                .order_by(model.id)
                .first()
            )
            if row:
                return row.id

        pattern = "%" + text.replace("-", "%").lower() + "%"
        row = (
            self.db.query(model.id)
            .filter(func.lower(model.name).like(pattern))
            .order_by(model.id)
            .first()
        )
        if row:
            return row.id

        logger.warning(f"No {model.__tablename__} row matches {text!r}; left unset")
        return None

    # ==================== Payload mapping ====================

    def _scalar_data(self, topic_in: TopicWrite) -> dict:
        """Map the fields present in the payload onto topic columns."""
        raw = topic_in.model_dump(exclude_unset=True, exclude={"modules"})

        category = raw.pop("category", None)
        if raw.get("category_id") is not None:
            self.resolve_category(raw["category_id"])
        elif category is not None:
            raw["category_id"] = self.resolve_category(category)

        subcategory = raw.pop("subcategory", None)
        if raw.get("subcategory_id") is not None:
            self.resolve_subcategory(raw["subcategory_id"])
        elif subcategory is not None:
            raw["subcategory_id"] = self.resolve_subcategory(subcategory)

        if "duration" in raw:
            minutes = hours_to_minutes(raw.pop("duration"))
            if minutes is not None:
                raw["duration_minutes"] = minutes

        data = {
            field: value
            for field, value in raw.items()
            if field in TOPIC_COLUMNS
            and (value is not None or field not in REQUIRED_TOPIC_COLUMNS)
        }

        if "status" in data and data["status"] not in TOPIC_STATUSES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid status"
            )
        if "difficulty" in data and data["difficulty"] not in TOPIC_DIFFICULTIES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid difficulty level",
            )
        if "title" in data:
            data["title"] = data["title"].strip()
        return data

    # ==================== CRUD ====================

    @db_exception
    def create_topic(self, topic_in: TopicWrite) -> Topic:
        """Create a topic, plus any nested modules/videos, in one transaction"""
        data = self._scalar_data(topic_in)
        if not data.get("title"):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Title is required"
            )

        topic = Topic(
            **{
                "difficulty": "beginner",
                "status": "draft",
                "tags": [],
                "target_audience": [],
                **data,
            },
            slug=unique_topic_slug(self.db, data["title"]),
        )
        if topic.status == "published":
            topic.published_at = datetime.now(timezone.utc)

        self.db.add(topic)
        self.db.flush()

        if topic_in.modules:
            TopicContentService(self.db).create_tree(topic, topic_in.modules)

        self.db.commit()
        logger.info(f"Topic {topic.id} created with slug '{topic.slug}'")
        return self.get_topic_detail(topic.id)

    @db_exception
    def update_topic(self, topic_id: int, topic_in: TopicWrite) -> Topic:
        """Apply scalar changes, then reconcile modules/videos when given.

        The scalar update is committed on its own before the child
        reconciliation transaction starts.
        """
        topic = self.get_topic(topic_id)
        data = self._scalar_data(topic_in)
        modules_in = topic_in.modules

        if not data and modules_in is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No valid fields to update",
            )
        if "title" in data and not data["title"]:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Title is required"
            )

        if data:
            if "title" in data and data["title"] != topic.title:
                data["slug"] = unique_topic_slug(
                    self.db, data["title"], exclude_id=topic.id
                )
            for field, value in data.items():
                setattr(topic, field, value)
            if topic.status == "published" and topic.published_at is None:
                topic.published_at = datetime.now(timezone.utc)
            self.db.commit()

        if modules_in is not None:
            TopicContentService(self.db).reconcile(topic, modules_in)

        # Drop cached collections so the detail reload reflects the commit
        self.db.expire_all()
        return self.get_topic_detail(topic_id)

    @db_exception
    def delete_topic(self, topic_id: int) -> bool:
        """Delete a topic; modules, videos and engagement rows cascade"""
        topic = self.get_topic(topic_id)
        self.db.delete(topic)
        self.db.commit()

        logger.info(f"Topic {topic_id} deleted")
        return True

    @db_exception
    def bulk_delete(self, topic_ids: Optional[List[int]]) -> int:
        if not topic_ids:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Array of topic IDs is required",
            )

        topics = self.db.query(Topic).filter(Topic.id.in_(topic_ids)).all()
        for topic in topics:
            self.db.delete(topic)
        self.db.commit()

        logger.info(f"Bulk delete removed {len(topics)} topics")
        return len(topics)

    # ==================== Listing shortcuts ====================

    def search_topics(self, q: Optional[str], page: int = 1, limit: int = 10):
        """Published topics matching ``q``, most viewed first"""
        if not q or not q.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Search query is required",
            )
        term = f"%{q.strip()}%"
        query = (
            self.db.query(Topic)
            .filter(
                Topic.status == "published",
                or_(
                    Topic.title.ilike(term),
                    Topic.description.ilike(term),
                    Topic.content.ilike(term),
                ),
            )
            .order_by(Topic.view_count.desc(), Topic.created_at.desc(), Topic.id.desc())
        )
        return paginate(query, page, limit)

    def list_titles(self, status_filter: Optional[str] = None) -> List[Topic]:
        query = self.db.query(Topic)
        if status_filter:
            query = query.filter(Topic.status == status_filter)
        return query.order_by(Topic.title.asc(), Topic.id.asc()).all()

    def count_topics(self) -> dict:
        def count(*criteria) -> int:
            return self.db.query(func.count(Topic.id)).filter(*criteria).scalar() or 0

        return {
            "total": count(),
            "published": count(Topic.status == "published"),
            "drafts": count(Topic.status == "draft"),
            "archived": count(Topic.status == "archived"),
            "featured": count(Topic.is_featured.is_(True)),
        }

    def get_by_difficulty(self, difficulty: str, page: int = 1, limit: int = 10):
        if difficulty not in TOPIC_DIFFICULTIES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid difficulty level",
            )
        return self.get_topics(
            page=page, limit=limit, difficulty=difficulty, status_filter="published"
        )
