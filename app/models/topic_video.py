# app/models/topic_video.py
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql import func

from app.core.database import Base, JSONType

VIDEO_TYPES = ("mp4", "youtube", "vimeo", "stream")


class TopicVideo(Base):
    __tablename__ = "topic_videos"
    __table_args__ = (
        CheckConstraint(
            "video_type IN ('mp4', 'youtube', 'vimeo', 'stream')",
            name="ck_topic_videos_type",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)

    topic_id = Column(
        Integer, ForeignKey("topics.id", ondelete="CASCADE"), nullable=False, index=True
    )
    module_id = Column(
        Integer,
        ForeignKey("topic_modules.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Basic Info
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Media
    video_url = Column(Text, nullable=True)
    video_type = Column(String(20), nullable=False, default="mp4")
    thumbnail_url = Column(Text, nullable=True)
    duration_seconds = Column(Integer, nullable=False, default=0)

    # Position inside the module (1-based)
    order_index = Column(Integer, nullable=False, default=1)
    is_active = Column(Boolean, nullable=False, default=True)
    is_preview = Column(Boolean, nullable=False, default=False)

    # Extras
    transcript = Column(Text, nullable=True)
    resources = Column(JSONType, nullable=False, default=list)

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

    def __repr__(self):
        return f"<TopicVideo(id={self.id}, module_id={self.module_id}, title='{self.title}')>"
