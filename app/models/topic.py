# app/models/topic.py
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.sql import func

from app.core.database import Base, JSONType

TOPIC_STATUSES = ("draft", "published", "archived")
TOPIC_DIFFICULTIES = ("beginner", "intermediate", "advanced")


class Topic(Base):
    __tablename__ = "topics"
    __table_args__ = (
        CheckConstraint(
            "difficulty IN ('beginner', 'intermediate', 'advanced')",
            name="ck_topics_difficulty",
        ),
        CheckConstraint(
            "status IN ('draft', 'published', 'archived')", name="ck_topics_status"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)

    # Basic Info
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    content = Column(Text, nullable=True)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    emoji = Column(String(16), nullable=True)

    # Classification
    category_id = Column(
        Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    subcategory_id = Column(
        Integer,
        ForeignKey("subcategories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    difficulty = Column(String(20), nullable=False, default="beginner")
    status = Column(String(20), nullable=False, default="draft", index=True)
    tags = Column(JSONType, nullable=False, default=list)

    # Pricing & Flags
    is_featured = Column(Boolean, nullable=False, default=False)
    is_free = Column(Boolean, nullable=False, default=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)

    # Sum of module durations, recomputed by DurationService
    duration_minutes = Column(Integer, nullable=False, default=0)
    thumbnail_url = Column(Text, nullable=True)

    # Audience
    learning_objectives = Column(Text, nullable=True)
    target_audience = Column(JSONType, nullable=False, default=list)
    prerequisites = Column(Text, nullable=True)

    # SEO
    meta_title = Column(String(255), nullable=True)
    meta_description = Column(Text, nullable=True)
    meta_keywords = Column(Text, nullable=True)

    author_id = Column(Integer, nullable=True)
    published_at = Column(DateTime(timezone=True), nullable=True)

    # Counters
    view_count = Column(Integer, nullable=False, default=0)
    like_count = Column(Integer, nullable=False, default=0)
    enrollment_count = Column(Integer, nullable=False, default=0)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    @property
    def category_name(self):
        return self.category.name if self.category else None

    @property
    def subcategory_name(self):
        return self.subcategory.name if self.subcategory else None

    @property
    def review_count(self) -> int:
        return len([r for r in self.reviews if r.is_approved])

    @property
    def rating(self) -> float:
        ratings = [r.rating for r in self.reviews if r.is_approved]
        if not ratings:
            return 0.0
        return round(sum(ratings) / len(ratings), 2)

    def __repr__(self):
        return f"<Topic(id={self.id}, slug='{self.slug}', status='{self.status}')>"
