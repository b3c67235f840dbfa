"""
Learner engagement with topics: enrollments, per-video progress and reviews.
Rows are owned by the topic and removed with it.
"""

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
    UniqueConstraint,
)
from sqlalchemy.sql import func

from app.core.database import Base


class TopicEnrollment(Base):
    __tablename__ = "topic_enrollments"
    __table_args__ = (
        UniqueConstraint("topic_id", "user_id", name="uq_topic_enrollments_topic_user"),
        CheckConstraint(
            "status IN ('active', 'completed', 'paused', 'cancelled')",
            name="ck_topic_enrollments_status",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    topic_id = Column(
        Integer, ForeignKey("topics.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    status = Column(String(20), nullable=False, default="active")
    progress_percentage = Column(Numeric(5, 2), nullable=False, default=0)

    enrolled_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    completed_at = Column(DateTime(timezone=True), nullable=True)
    last_accessed_at = Column(DateTime(timezone=True), nullable=True)


class TopicProgress(Base):
    __tablename__ = "topic_progress"
    __table_args__ = (
        UniqueConstraint(
            "topic_id", "module_id", "video_id", "user_id", name="uq_topic_progress"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    topic_id = Column(
        Integer, ForeignKey("topics.id", ondelete="CASCADE"), nullable=False, index=True
    )
    module_id = Column(
        Integer, ForeignKey("topic_modules.id", ondelete="CASCADE"), nullable=True
    )
    video_id = Column(
        Integer, ForeignKey("topic_videos.id", ondelete="CASCADE"), nullable=True
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    is_completed = Column(Boolean, nullable=False, default=False)
    watch_time_seconds = Column(Integer, nullable=False, default=0)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class TopicReview(Base):
    __tablename__ = "topic_reviews"
    __table_args__ = (
        UniqueConstraint("topic_id", "user_id", name="uq_topic_reviews_topic_user"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_topic_reviews_rating"),
    )

    id = Column(Integer, primary_key=True, index=True)
    topic_id = Column(
        Integer, ForeignKey("topics.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    rating = Column(Integer, nullable=False)
    review_text = Column(Text, nullable=True)
    is_approved = Column(Boolean, nullable=False, default=True)

    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self):
        return f"<TopicReview(topic_id={self.topic_id}, user_id={self.user_id}, rating={self.rating})>"
