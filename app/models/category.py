# app/models/category.py
from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from app.core.database import Base

CATEGORY_STATUSES = ("Active", "Inactive", "Draft")


class Category(Base):
    __tablename__ = "categories"
    __table_args__ = (
        CheckConstraint(
            "status IN ('Active', 'Inactive', 'Draft')", name="ck_categories_status"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)

    # Basic Info
    name = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="Active", server_default="Active")

    # Number of subcategories, maintained by mapper events (see counters.py)
    topics_count = Column(Integer, nullable=False, default=0, server_default="0")

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
        return f"<Category(id={self.id}, name='{self.name}')>"
